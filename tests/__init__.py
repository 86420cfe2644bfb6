import datetime as dt

# Fixed "now" used by every date-dependent test
FIXED_NOW = dt.datetime(2025, 5, 15, 12, 0, 0)


def days_ago(days: int, hour: int = 9) -> dt.datetime:
    """A timestamp on the calendar day `days` before FIXED_NOW."""
    return (FIXED_NOW - dt.timedelta(days=days)).replace(hour=hour, minute=0, second=0)
