"""Application configuration using Pydantic Settings.

Configuration is loaded from environment variables. In CI the GitHub token is
injected as `GH_TOKEN` or `GITHUB_TOKEN`.

Optionally, you may point `ENV_FILE` at a local env file (for development).
Leave it unset in CI so the job's secrets are the single source of truth.
"""

import os
import re
from functools import lru_cache
from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# GitHub logins: alphanumerics and single hyphens, no leading/trailing hyphen.
_GITHUB_LOGIN_RE = re.compile(r"^[A-Za-z0-9](?:[A-Za-z0-9]|-(?=[A-Za-z0-9])){0,38}$")

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class Settings(BaseSettings):
    """
    Generator settings with type validation.

    Every field maps to the upper-cased environment variable of the same name.
    """

    model_config = SettingsConfigDict(
        env_file=os.getenv("ENV_FILE") or None, env_prefix="", extra="ignore"
    )

    # Application
    app_name: str = "github-streak-card"
    app_log_level: str = "INFO"

    # Observability
    observability_structured_logs: bool = True

    # Account the card is generated for
    github_username: str = "swarajshaw"

    # Tokens, checked in this order (see api_token)
    gh_token: str | None = None
    github_token: str | None = None

    # GitHub endpoints
    github_api_url: str = "https://api.github.com"
    github_graphql_url: str = "https://api.github.com/graphql"
    # Defaults to app_name (see user_agent)
    github_user_agent: str | None = None

    # HTTP
    http_timeout_seconds: float = Field(default=10.0, gt=0)
    repos_per_page: int = Field(default=100, ge=1, le=100)

    # Output
    output_path: Path = Path("streak.svg")

    @field_validator("github_username")
    @classmethod
    def validate_github_username(cls, v: str) -> str:
        """Validate the username is a well-formed GitHub login."""
        login = v.strip()
        if not _GITHUB_LOGIN_RE.match(login):
            raise ValueError(
                "github_username must be 1-39 alphanumeric characters or single hyphens, "
                f"not starting or ending with a hyphen, got '{v}'"
            )
        return login

    @field_validator("app_log_level")
    @classmethod
    def validate_app_log_level(cls, v: str) -> str:
        """Normalize and validate the log level name."""
        level = v.strip().upper()
        if level not in _LOG_LEVELS:
            raise ValueError(f"app_log_level must be one of {list(_LOG_LEVELS)}, got '{v}'")
        return level

    @field_validator("github_api_url", "github_graphql_url")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        return v.strip().rstrip("/")

    @property
    def user_agent(self) -> str:
        """User-Agent sent to GitHub: GITHUB_USER_AGENT, else the app name."""
        if self.github_user_agent and self.github_user_agent.strip():
            return self.github_user_agent.strip()
        return self.app_name

    @property
    def api_token(self) -> str | None:
        """First non-blank token of GH_TOKEN, GITHUB_TOKEN."""
        for token in (self.gh_token, self.github_token):
            if token is not None and token.strip():
                return token.strip()
        return None


@lru_cache
def get_settings() -> Settings:
    """Return the process-wide settings, loaded on first use."""
    return Settings()
