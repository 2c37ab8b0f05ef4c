"""Usage log persistence."""
from .usage_store import UsageStore, load, save, merge, record_tick

__all__ = ['UsageStore', 'load', 'save', 'merge', 'record_tick']
