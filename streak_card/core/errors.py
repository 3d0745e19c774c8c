"""
Domain-specific exceptions for the streak card generator.

These exceptions describe why a generation run failed and are mapped
to process exit codes in the CLI layer.
"""

from typing import Any


class StreakCardError(Exception):
    """Base exception for all streak card errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        self.message = message
        self.details = details or {}
        super().__init__(self.message)


class ConfigurationError(StreakCardError):
    """
    Raised when settings or command-line arguments are invalid.

    Examples:
    - Malformed GitHub username
    - Unparseable --today date

    Exit code: 2
    """

    pass


class MissingTokenError(StreakCardError):
    """
    Raised when an API call needs a token and none is configured.

    The contribution calendar is only available through the GraphQL API,
    which rejects anonymous requests.

    Exit code: 3
    """

    def __init__(self, message: str = "GH_TOKEN or GITHUB_TOKEN is required for GitHub GraphQL API"):
        super().__init__(message)


class GitHubAPIError(StreakCardError):
    """
    Raised when GitHub answers with a non-success status or is unreachable.

    `status_code` is None for transport failures (DNS, connect, timeout).

    Exit code: 4
    """

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        body: str = "",
        details: dict[str, Any] | None = None,
    ):
        self.status_code = status_code
        self.body = body
        super().__init__(message, details)


class GraphQLResponseError(StreakCardError):
    """
    Raised when a GraphQL response carries an `errors` array.

    Examples:
    - Unknown login
    - Token lacks the scope needed for the query

    Exit code: 4
    """

    def __init__(self, messages: list[str]):
        self.messages = messages
        super().__init__(
            f"GitHub GraphQL response error: {'; '.join(messages)}",
            details={"errors": messages},
        )


class MissingDataError(StreakCardError):
    """
    Raised when a response is well-formed HTTP but lacks the expected payload.

    Examples:
    - `data.user` is null
    - A contribution day has an unparseable date

    Exit code: 4
    """

    pass


class PublishError(StreakCardError):
    """
    Raised when the rendered card cannot be written.

    Exit code: 5
    """

    pass


# Process exit code mapping
ERROR_EXIT_CODE_MAP = {
    ConfigurationError: 2,
    MissingTokenError: 3,
    GitHubAPIError: 4,
    GraphQLResponseError: 4,
    MissingDataError: 4,
    PublishError: 5,
}


def get_exit_code(error: Exception) -> int:
    """
    Get the process exit code for a given exception.

    Args:
        error: The exception instance

    Returns:
        Exit code (defaults to 1 for unknown errors)
    """
    return ERROR_EXIT_CODE_MAP.get(type(error), 1)
