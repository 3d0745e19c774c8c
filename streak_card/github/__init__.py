"""
GitHub API access for the streak card.

Key Components:
- client: REST and GraphQL calls with token handling and error mapping
- models: Pydantic models for the payload subsets the card uses
"""

from streak_card.github.client import GitHubClient
from streak_card.github.models import ContributionCalendar, GitHubUser, Repository

__all__ = [
    "GitHubClient",
    "GitHubUser",
    "Repository",
    "ContributionCalendar",
]
