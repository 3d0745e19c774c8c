"""
CLI: Generate the GitHub activity streak card.

Usage:
    # Write streak.svg for the configured account (token from GH_TOKEN/GITHUB_TOKEN)
    uv run streak-card

    # Another account, custom output path
    uv run streak-card --username octocat --output assets/streak.svg

    # Render to stdout without writing, with readable logs
    uv run streak-card --dry-run --plain-logs

Exit Codes:
    0 - Card generated
    1 - Unexpected error
    2 - Invalid configuration or arguments
    3 - No GitHub token configured
    4 - GitHub API error or unexpected response
    5 - Card could not be written
"""

from __future__ import annotations

import argparse
import logging
import sys
from datetime import date

from pydantic import ValidationError

from streak_card.core.config import Settings
from streak_card.core.errors import ConfigurationError, StreakCardError, get_exit_code
from streak_card.core.observability import configure_logging, configure_plain_logging
from streak_card.services.card_generator import generate_card

logger = logging.getLogger("streak_card.cli")


def _parse_date(value: str) -> date:
    try:
        return date.fromisoformat(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"expected YYYY-MM-DD, got '{value}'") from None


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        prog="streak-card",
        description="Generate a GitHub activity streak card (SVG).",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="Settings not given on the command line are read from the environment.",
    )
    parser.add_argument("--username", help="GitHub login (env: GITHUB_USERNAME)")
    parser.add_argument("--output", help="Output SVG path (env: OUTPUT_PATH)")
    parser.add_argument(
        "--today",
        type=_parse_date,
        help="Reference date YYYY-MM-DD (default: current UTC date)",
    )
    parser.add_argument("--log-level", help="Log level (env: APP_LOG_LEVEL)")
    parser.add_argument(
        "--plain-logs",
        action="store_true",
        help="Human-readable logs instead of JSON",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Print the card to stdout instead of writing it",
    )
    return parser.parse_args(argv)


def build_settings(args: argparse.Namespace) -> Settings:
    """
    Load settings from the environment with command-line overrides applied.

    Raises:
        ConfigurationError: If the resulting settings are invalid
    """
    overrides = {
        "github_username": args.username,
        "output_path": args.output,
        "app_log_level": args.log_level,
    }
    try:
        return Settings(**{k: v for k, v in overrides.items() if v is not None})
    except ValidationError as e:
        raise ConfigurationError(
            f"Invalid configuration: {e.error_count()} error(s)",
            details={"errors": e.errors(include_url=False)},
        ) from e


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    args = parse_args(argv)

    try:
        settings = build_settings(args)
    except ConfigurationError as e:
        configure_plain_logging("ERROR")
        for error in e.details["errors"]:
            field = ".".join(str(part) for part in error["loc"]) or "settings"
            logger.error(f"{field}: {error['msg']}")
        return get_exit_code(e)

    configure_logging(
        settings.app_log_level,
        structured=settings.observability_structured_logs and not args.plain_logs,
    )

    try:
        result = generate_card(settings, today=args.today, dry_run=args.dry_run)
    except StreakCardError as e:
        logger.error(
            f"Streak card generation failed: {e.message}",
            extra={"error_type": type(e).__name__, "details": e.details},
        )
        return get_exit_code(e)

    if args.dry_run:
        sys.stdout.write(result.svg)
    return 0


if __name__ == "__main__":
    sys.exit(main())
