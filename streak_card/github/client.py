"""
GitHub API client for the data the streak card is built from.

Uses the REST API for profile counters and repositories, and the GraphQL
API for the contribution calendar (it is not exposed over REST).

Anonymous REST calls work but are heavily rate limited, so a token is sent
whenever one is configured. The GraphQL API always requires one.
"""

import logging
from typing import Any

import httpx
from pydantic import BaseModel, ValidationError

from streak_card.core.config import Settings, get_settings
from streak_card.core.errors import (
    GitHubAPIError,
    GraphQLResponseError,
    MissingDataError,
    MissingTokenError,
)
from streak_card.core.observability import sanitize_headers

from .models import ContributionCalendar, GitHubUser, GraphQLResponse, Repository

logger = logging.getLogger(__name__)

GITHUB_ACCEPT = "application/vnd.github+json"

CONTRIBUTION_CALENDAR_QUERY = """
query($login: String!) {
  user(login: $login) {
    contributionsCollection {
      contributionCalendar {
        totalContributions
        weeks {
          contributionDays {
            date
            contributionCount
          }
        }
      }
    }
  }
}
"""


def _describe_status(response: httpx.Response) -> str:
    """Render a status like `404 Not Found`."""
    return f"{response.status_code} {response.reason_phrase}".strip()


def _parse(model: type[BaseModel], payload: Any, what: str) -> Any:
    """Validate a payload, reporting schema mismatches as missing data."""
    try:
        return model.model_validate(payload)
    except ValidationError as e:
        raise MissingDataError(
            f"GitHub returned an unexpected {what} payload",
            details={"errors": e.errors(include_url=False)},
        ) from e


class GitHubClient:
    """
    Thin synchronous client over `httpx.Client`.

    Can be used as a context manager. An injected `http_client` is left open
    on close; one created here is closed.
    """

    def __init__(
        self,
        settings: Settings | None = None,
        http_client: httpx.Client | None = None,
    ):
        self._settings = settings or get_settings()
        self._owns_http = http_client is None
        self._http = http_client or httpx.Client(
            timeout=httpx.Timeout(self._settings.http_timeout_seconds)
        )

    def __enter__(self) -> "GitHubClient":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    def close(self) -> None:
        """Close the HTTP client if this instance created it."""
        if self._owns_http:
            self._http.close()

    def _headers(self, token: str | None) -> dict[str, str]:
        headers = {
            "User-Agent": self._settings.user_agent,
            "Accept": GITHUB_ACCEPT,
        }
        if token:
            headers["Authorization"] = f"Bearer {token}"
        return headers

    def _send(
        self,
        method: str,
        url: str,
        *,
        error_prefix: str,
        token: str | None,
        **kwargs: Any,
    ) -> httpx.Response:
        headers = self._headers(token)
        logger.debug(
            f"{method} {url}",
            extra={"headers": sanitize_headers(headers)},
        )

        try:
            response = self._http.request(method, url, headers=headers, **kwargs)
        except httpx.RequestError as e:
            raise GitHubAPIError(
                f"{error_prefix}: request to {url} failed: {e}",
                details={"url": url},
            ) from e

        if not response.is_success:
            body = response.text
            raise GitHubAPIError(
                f"{error_prefix} {_describe_status(response)}: {body}",
                status_code=response.status_code,
                body=body,
                details={"url": url},
            )
        return response

    def _json(self, response: httpx.Response) -> Any:
        try:
            return response.json()
        except ValueError as e:
            raise MissingDataError(
                f"GitHub returned a non-JSON response from {response.request.url}"
            ) from e

    def _get(self, url: str, params: dict[str, Any] | None = None) -> httpx.Response:
        """GET a REST resource, returning the successful response."""
        return self._send(
            "GET",
            url,
            error_prefix="GitHub API error",
            token=self._settings.api_token,
            params=params,
        )

    # ------------------------------------------------------------------
    # REST
    # ------------------------------------------------------------------

    def get_user(self, login: str) -> GitHubUser:
        """Fetch public profile counters for a user."""
        response = self._get(f"{self._settings.github_api_url}/users/{login}")
        return _parse(GitHubUser, self._json(response), "user")

    def list_repositories(self, login: str) -> list[Repository]:
        """
        Fetch all public repositories of a user.

        Follows `Link: rel="next"` headers until the last page. A next link
        pointing at an already fetched page ends the walk.
        """
        url: str | None = f"{self._settings.github_api_url}/users/{login}/repos"
        params: dict[str, Any] | None = {"per_page": self._settings.repos_per_page}
        repositories: list[Repository] = []
        seen: set[str] = set()
        page = 0

        while url:
            response = self._get(url, params=params)
            seen.add(str(response.request.url))
            payload = self._json(response)
            if not isinstance(payload, list):
                raise MissingDataError(
                    "GitHub returned an unexpected repository list payload",
                    details={"type": type(payload).__name__},
                )
            repositories.extend(_parse(Repository, item, "repository") for item in payload)
            page += 1

            # The next link already carries the query string
            url = response.links.get("next", {}).get("url")
            params = None
            if url is not None and str(httpx.URL(url)) in seen:
                logger.warning(f"Repository pagination loops back to {url}; stopping")
                url = None

        logger.debug(f"Fetched {len(repositories)} repositories in {page} page(s)")
        return repositories

    # ------------------------------------------------------------------
    # GraphQL
    # ------------------------------------------------------------------

    def get_contribution_calendar(self, login: str) -> ContributionCalendar:
        """
        Fetch the contribution calendar for a user.

        Raises:
            MissingTokenError: If no token is configured (checked before any I/O)
            GitHubAPIError: On a non-success HTTP status or transport failure
            GraphQLResponseError: If the response carries GraphQL errors
            MissingDataError: If the response lacks the calendar
        """
        token = self._settings.api_token
        if not token:
            raise MissingTokenError()

        response = self._send(
            "POST",
            self._settings.github_graphql_url,
            error_prefix="GitHub GraphQL error",
            token=token,
            json={"query": CONTRIBUTION_CALENDAR_QUERY, "variables": {"login": login}},
        )
        parsed: GraphQLResponse = _parse(GraphQLResponse, self._json(response), "GraphQL")

        if parsed.errors:
            raise GraphQLResponseError([e.message for e in parsed.errors])

        if parsed.data is None or parsed.data.user is None:
            raise MissingDataError("GitHub GraphQL response missing contribution data")

        return parsed.data.user.contributions_collection.contribution_calendar
