"""
Unit helpers.

Feeds in the job format are mm/min, the estimator works in mm/s.
"""

import math


def mm_min_to_mm_s(feed_mm_min: float) -> float:
    """Convert mm/min to mm/s"""
    return feed_mm_min / 60.0


def format_time(seconds: float) -> str:
    """
    Format a duration for display.

    Examples:
        45   -> "45s"
        125  -> "2min 05s"
        3665 -> "1h 01min 05s"
    """
    if seconds is None or seconds != seconds or seconds <= 0:
        return "0s"
    total = int(math.floor(seconds + 0.5))
    hours, rest = divmod(total, 3600)
    minutes, secs = divmod(rest, 60)
    if hours:
        return f"{hours}h {minutes:02d}min {secs:02d}s"
    if minutes:
        return f"{minutes}min {secs:02d}s"
    return f"{secs}s"
