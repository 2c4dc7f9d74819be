"""GitHub Contributor Stats - Rank contributors across GitHub repositories."""

from .aggregator import AggregatedUser, ContributorAggregator
from .config import ContributorConfig, load_config
from .fetcher import Endpoints, GitHubClient
from .report import emit, sort_users

__all__ = [
    "AggregatedUser",
    "ContributorAggregator",
    "ContributorConfig",
    "Endpoints",
    "GitHubClient",
    "emit",
    "load_config",
    "sort_users",
]
