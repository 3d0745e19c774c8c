"""
Pytest configuration and shared fixtures.

Provides:
- Import path setup for the flat repository layout
- Isolation from GitHub-related environment variables on the host/CI
- Settings with a fake token
- Contribution calendar factory (GraphQL payload shape)
- Fake GitHub API built on httpx.MockTransport
"""

from __future__ import annotations

import sys
from collections.abc import Callable
from datetime import date, timedelta
from pathlib import Path
from typing import Any

ROOT = Path(__file__).resolve().parents[1]

# Add project root to path for imports
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

import httpx  # noqa: E402 (import after path setup)
import pytest  # noqa: E402 (import after path setup)

from streak_card.core.config import Settings  # noqa: E402
from streak_card.github.models import ContributionCalendar  # noqa: E402

TODAY = date(2026, 10, 19)

_ENV_VARS = (
    "GH_TOKEN",
    "GITHUB_TOKEN",
    "GITHUB_USERNAME",
    "GITHUB_API_URL",
    "GITHUB_GRAPHQL_URL",
    "GITHUB_USER_AGENT",
    "OUTPUT_PATH",
    "APP_NAME",
    "APP_LOG_LEVEL",
    "REPOS_PER_PAGE",
    "HTTP_TIMEOUT_SECONDS",
    "OBSERVABILITY_STRUCTURED_LOGS",
)


# =============================================================================
# AnyIO Backend Configuration
# =============================================================================
# Per AnyIO testing docs: https://anyio.readthedocs.io/en/stable/testing.html
@pytest.fixture
def anyio_backend():
    return "asyncio"


@pytest.fixture(autouse=True)
def _isolate_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep host/CI GitHub settings out of the tests."""
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def settings(tmp_path: Path) -> Settings:
    return Settings(
        github_username="octocat",
        gh_token="test-token",
        output_path=tmp_path / "streak.svg",
    )


def calendar_payload(daily: dict[date, int], total: int | None = None) -> dict[str, Any]:
    """Build a GraphQL contributionCalendar payload from a date -> count map."""
    days = sorted(daily.items())
    weeks = [
        {
            "contributionDays": [
                {"date": d.isoformat(), "contributionCount": c} for d, c in days[i : i + 7]
            ]
        }
        for i in range(0, len(days), 7)
    ]
    return {
        "totalContributions": sum(daily.values()) if total is None else total,
        "weeks": weeks,
    }


@pytest.fixture
def calendar_factory() -> Callable[..., ContributionCalendar]:
    """Build a ContributionCalendar from a date -> count map."""

    def _make(daily: dict[date, int], total: int | None = None) -> ContributionCalendar:
        return ContributionCalendar.model_validate(calendar_payload(daily, total))

    return _make


@pytest.fixture
def streak_days() -> dict[date, int]:
    """
    A year of zeros with:
    - a 3-day current streak ending at TODAY
    - a 5-day streak ending 10 days before TODAY
    """
    daily = {TODAY - timedelta(days=i): 0 for i in range(365)}
    for i in range(3):
        daily[TODAY - timedelta(days=i)] = 2
    for i in range(10, 15):
        daily[TODAY - timedelta(days=i)] = 7
    return daily


class FakeGitHub:
    """
    In-memory GitHub API served through httpx.MockTransport.

    Records every request for assertions.
    """

    def __init__(self, daily: dict[date, int]):
        self.user = {"login": "octocat", "public_repos": 12, "followers": 40, "following": 3}
        self.repo_pages: list[list[dict[str, Any]]] = [
            [{"name": "a", "stargazers_count": 5}, {"name": "b", "stargazers_count": 2}]
        ]
        self.graphql: dict[str, Any] = {
            "data": {
                "user": {
                    "contributionsCollection": {"contributionCalendar": calendar_payload(daily)}
                }
            }
        }
        self.requests: list[httpx.Request] = []

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        path = request.url.path

        if request.method == "POST" and path == "/graphql":
            return httpx.Response(200, json=self.graphql)

        if path == "/users/octocat":
            return httpx.Response(200, json=self.user)

        if path == "/users/octocat/repos":
            page = int(request.url.params.get("page", "1"))
            headers = {}
            if page < len(self.repo_pages):
                headers["Link"] = (
                    f'<https://api.github.com/users/octocat/repos?per_page=100&page={page + 1}>; '
                    'rel="next"'
                )
            return httpx.Response(200, json=self.repo_pages[page - 1], headers=headers)

        return httpx.Response(404, json={"message": "Not Found"})

    def client(self) -> httpx.Client:
        return httpx.Client(transport=httpx.MockTransport(self.handler))


@pytest.fixture
def fake_github(streak_days: dict[date, int]) -> FakeGitHub:
    return FakeGitHub(streak_days)
