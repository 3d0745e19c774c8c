"""
Contribution statistics for the streak card.

Pure functions over a date -> count mapping. No I/O.
"""

from streak_card.stats.streaks import (
    WINDOW_DAYS,
    ActivityStats,
    WindowDay,
    activity_window,
    bar_height,
    compute_activity_stats,
    current_streak,
    daily_contributions,
    longest_streak,
)

__all__ = [
    "WINDOW_DAYS",
    "ActivityStats",
    "WindowDay",
    "activity_window",
    "bar_height",
    "compute_activity_stats",
    "current_streak",
    "daily_contributions",
    "longest_streak",
]
