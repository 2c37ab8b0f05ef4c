"""apptime - per-day foreground application usage tracker."""
