"""Service layer for business logic."""
from .query_service import QueryService, months_available, daily_totals, day_detail, top_n
from .tracking_service import TrackingLoop

__all__ = [
    'QueryService',
    'TrackingLoop',
    'months_available',
    'daily_totals',
    'day_detail',
    'top_n',
]
