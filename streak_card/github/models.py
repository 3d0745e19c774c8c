"""
Pydantic models for the GitHub API payloads the card is built from.

Only the fields the card needs are declared; everything else in the
upstream payloads is ignored.
"""

import datetime

from pydantic import BaseModel, ConfigDict, Field

# ============================================================================
# REST Schemas
# ============================================================================


class GitHubUser(BaseModel):
    """Public profile counters from `GET /users/{login}`."""

    model_config = ConfigDict(extra="ignore")

    public_repos: int = Field(..., ge=0)
    followers: int = Field(..., ge=0)
    following: int = Field(..., ge=0)


class Repository(BaseModel):
    """One entry of `GET /users/{login}/repos`."""

    model_config = ConfigDict(extra="ignore")

    stargazers_count: int = Field(default=0, ge=0)


# ============================================================================
# GraphQL Schemas
# ============================================================================


class _GraphQLModel(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class ContributionDay(_GraphQLModel):
    date: datetime.date
    contribution_count: int = Field(..., ge=0, alias="contributionCount")


class ContributionWeek(_GraphQLModel):
    contribution_days: list[ContributionDay] = Field(
        default_factory=list, alias="contributionDays"
    )


class ContributionCalendar(_GraphQLModel):
    """A user's contribution calendar: per-day counts grouped by week."""

    total_contributions: int = Field(..., ge=0, alias="totalContributions")
    weeks: list[ContributionWeek] = Field(default_factory=list)


class ContributionsCollection(_GraphQLModel):
    contribution_calendar: ContributionCalendar = Field(..., alias="contributionCalendar")


class GraphQLUser(_GraphQLModel):
    contributions_collection: ContributionsCollection = Field(
        ..., alias="contributionsCollection"
    )


class GraphQLData(_GraphQLModel):
    user: GraphQLUser | None = None


class GraphQLError(_GraphQLModel):
    message: str


class GraphQLResponse(_GraphQLModel):
    """Top-level GraphQL envelope: `data` and/or `errors`."""

    data: GraphQLData | None = None
    errors: list[GraphQLError] | None = None
