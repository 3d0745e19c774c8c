"""
Streak and activity-window statistics over a contribution calendar.

All functions are pure: they take a mapping of calendar date to
contribution count and an explicit "today", so results are reproducible.

Definitions:
- A day is active when its count is greater than zero.
- Current streak counts active days backward from today inclusive.
  An inactive today means a current streak of 0.
- Longest streak is the longest run of calendar-consecutive active days.
"""

from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass, field
from datetime import UTC, date, datetime, timedelta

from streak_card.github.models import ContributionCalendar, GitHubUser, Repository

WINDOW_DAYS = 30

# Bar geometry: counts above BAR_CAP render at full height
BAR_CAP = 5
BAR_UNIT = 6
BAR_MIN_HEIGHT = 4

_ONE_DAY = timedelta(days=1)


@dataclass(frozen=True)
class WindowDay:
    """One day of the trailing activity window."""

    date: date
    count: int

    @property
    def active(self) -> bool:
        return self.count > 0


@dataclass(frozen=True)
class ActivityStats:
    """Everything the card displays."""

    current_streak: int
    longest_streak: int
    active_days: int
    window_contributions: int
    public_repos: int
    total_stars: int
    followers: int
    following: int
    total_contributions: int
    window: list[WindowDay] = field(default_factory=list)
    window_days: int = WINDOW_DAYS


def utc_today() -> date:
    """Current date in UTC."""
    return datetime.now(UTC).date()


def daily_contributions(calendar: ContributionCalendar) -> dict[date, int]:
    """
    Flatten a calendar's weeks into a date -> count mapping.

    If a date appears more than once, the last occurrence wins.
    """
    daily: dict[date, int] = {}
    for week in calendar.weeks:
        for day in week.contribution_days:
            daily[day.date] = day.contribution_count
    return daily


def current_streak(daily: Mapping[date, int], today: date) -> int:
    """Count consecutive active days ending at `today`."""
    streak = 0
    day = today
    while daily.get(day, 0) > 0:
        streak += 1
        day -= _ONE_DAY
    return streak


def longest_streak(daily: Mapping[date, int]) -> int:
    """Length of the longest run of consecutive active days."""
    longest = 0
    streak = 0
    prev: date | None = None

    for day in sorted(d for d, count in daily.items() if count > 0):
        if prev is not None and day == prev + _ONE_DAY:
            streak += 1
        else:
            streak = 1
        longest = max(longest, streak)
        prev = day

    return longest


def activity_window(
    daily: Mapping[date, int], today: date, days: int = WINDOW_DAYS
) -> list[WindowDay]:
    """
    Trailing window of `days` days ending at `today`, oldest first.

    Dates missing from `daily` count as zero.
    """
    if days < 1:
        raise ValueError(f"days must be positive, got {days}")
    start = today - timedelta(days=days - 1)
    return [
        WindowDay(date=start + timedelta(days=i), count=daily.get(start + timedelta(days=i), 0))
        for i in range(days)
    ]


def bar_height(count: int) -> int:
    """Bar height in px for a day's count (4..34)."""
    return min(max(count, 0), BAR_CAP) * BAR_UNIT + BAR_MIN_HEIGHT


def total_stars(repositories: Iterable[Repository]) -> int:
    return sum(repo.stargazers_count for repo in repositories)


def compute_activity_stats(
    user: GitHubUser,
    repositories: Sequence[Repository],
    calendar: ContributionCalendar,
    today: date | None = None,
) -> ActivityStats:
    """
    Compute the card statistics from fetched GitHub data.

    Args:
        user: Profile counters
        repositories: All public repositories of the user
        calendar: Contribution calendar
        today: Reference date (defaults to the current UTC date)

    Returns:
        ActivityStats for rendering
    """
    today = today or utc_today()
    daily = daily_contributions(calendar)
    window = activity_window(daily, today)

    return ActivityStats(
        current_streak=current_streak(daily, today),
        longest_streak=longest_streak(daily),
        active_days=sum(1 for day in window if day.active),
        window_contributions=sum(day.count for day in window),
        public_repos=user.public_repos,
        total_stars=total_stars(repositories),
        followers=user.followers,
        following=user.following,
        total_contributions=calendar.total_contributions,
        window=window,
    )
