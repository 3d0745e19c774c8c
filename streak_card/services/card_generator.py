"""
Card Generator Service

Runs one generation: fetch GitHub data, compute statistics, render the
card and publish it.

Each run gets a fresh run_id in the logging context so all log lines of
one CI invocation can be correlated.
"""

import logging
from dataclasses import dataclass
from datetime import date
from pathlib import Path

from streak_card.core.config import Settings
from streak_card.core.observability import generate_run_id, set_run_id, set_username
from streak_card.github.client import GitHubClient
from streak_card.render.svg import render_card
from streak_card.services.card_publisher import FilesystemPublisher, compute_checksum
from streak_card.stats.streaks import ActivityStats, compute_activity_stats, utc_today

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GenerationResult:
    """Outcome of a generation run."""

    run_id: str
    stats: ActivityStats
    svg: str
    checksum: str
    output_path: Path | None = None


def build_stats(client: GitHubClient, username: str, today: date) -> ActivityStats:
    """Fetch everything the card needs and compute its statistics."""
    user = client.get_user(username)
    repositories = client.list_repositories(username)
    calendar = client.get_contribution_calendar(username)
    return compute_activity_stats(user, repositories, calendar, today)


def generate_card(
    settings: Settings,
    today: date | None = None,
    client: GitHubClient | None = None,
    publisher: FilesystemPublisher | None = None,
    dry_run: bool = False,
) -> GenerationResult:
    """
    Generate the streak card for `settings.github_username`.

    Args:
        settings: Generator settings
        today: Reference date (defaults to the current UTC date)
        client: GitHub client (one is created and closed if omitted)
        publisher: Card publisher (filesystem by default)
        dry_run: Render only; do not write the card

    Returns:
        GenerationResult with the rendered card

    Raises:
        StreakCardError: Any fetch, data or publish failure
    """
    run_id = generate_run_id()
    set_run_id(run_id)
    set_username(settings.github_username)

    today = today or utc_today()
    logger.info(
        f"Generating streak card for {settings.github_username}",
        extra={"today": today.isoformat(), "token_configured": settings.api_token is not None},
    )

    if client is None:
        with GitHubClient(settings) as owned_client:
            stats = build_stats(owned_client, settings.github_username, today)
    else:
        stats = build_stats(client, settings.github_username, today)

    svg = render_card(stats)
    checksum = compute_checksum(svg.encode("utf-8"))

    output_path = None
    if dry_run:
        logger.info("Dry run: card not written")
    else:
        output_path = (publisher or FilesystemPublisher()).publish(svg, settings.output_path)

    logger.info(
        f"Streak card ready: current={stats.current_streak} longest={stats.longest_streak} "
        f"active={stats.active_days}/{stats.window_days}",
        extra={"checksum": checksum},
    )

    return GenerationResult(
        run_id=run_id,
        stats=stats,
        svg=svg,
        checksum=checksum,
        output_path=output_path,
    )
