"""Merge per-repository contributor lists into one user table."""

from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, Optional

from shared.logger import get_logger

from .config import ContributorConfig
from .fetcher import GitHubClient, ProgressHooks

logger = get_logger(__name__)


@dataclass
class AggregatedUser:
    """A contributor seen in at least one repository."""

    login: str
    profile: Dict[str, Any] = field(default_factory=dict)
    contributions: int = 0
    repositories: Dict[str, int] = field(default_factory=dict)

    # Only set when enabled in the config
    email_domain: Optional[str] = None
    excluded: Optional[bool] = None

    def add(self, repository: str, contributions: int) -> None:
        """Record the contributions made to one repository."""
        self.contributions += contributions
        self.repositories[repository] = contributions

    def to_dict(self) -> Dict[str, Any]:
        """Flatten to the record written to the report."""
        data = dict(self.profile)

        if self.email_domain is not None:
            data["email_domain"] = self.email_domain
        if self.excluded is not None:
            data["excluded"] = self.excluded

        data["contributions"] = self.contributions
        data["repositories"] = dict(self.repositories)
        return data


def extract_email_domain(email: Optional[str]) -> str:
    """
    Get the domain part of an email address.

    Returns an empty string for a missing or malformed address.
    """
    if not email or "@" not in email:
        return ""
    return email.split("@", 1)[1]


class ContributorAggregator:
    """
    Collect contributors of several repositories into one table.

    Users are keyed by login in discovery order. Each distinct login's
    profile is fetched exactly once.
    """

    def __init__(self, client: GitHubClient, config: Optional[ContributorConfig] = None):
        """
        Initialize the aggregator.

        Args:
            client: GitHub client used for contributor and user lookups
            config: Exclusion and field options (defaults if None)
        """
        self.client = client
        self.config = config or ContributorConfig()

    def aggregate(
        self,
        repositories: Iterable[str],
        progress: Optional[ProgressHooks] = None,
    ) -> Dict[str, AggregatedUser]:
        """
        Aggregate the contributors of the given repositories.

        Args:
            repositories: Repository full names, processed in order
            progress: Optional progress hooks, advanced once per repository

        Returns:
            Mapping of login to AggregatedUser, in discovery order
        """
        repositories = list(repositories)
        progress = progress or ProgressHooks()
        users: Dict[str, AggregatedUser] = {}

        progress.start(len(repositories))

        for repository in repositories:
            records = self.client.get_contributors(repository)
            logger.info(f"{repository}: {len(records)} contributor(s)")

            for record in records:
                login = record["login"]
                is_excluded = login in self.config.exclusions

                if is_excluded and not self.config.keep_excluded_users:
                    logger.debug(f"Skipping excluded user {login}")
                    continue

                user = users.get(login)
                if user is None:
                    user = self._create_user(login, is_excluded)
                    users[login] = user

                user.add(repository, record["contributions"])

            progress.advance()

        progress.finish()
        logger.info(f"Aggregated {len(users)} unique contributor(s)")
        return users

    def _create_user(self, login: str, is_excluded: bool) -> AggregatedUser:
        profile = self.client.get_user(login)
        email = profile.get("email")

        if self.config.fields_whitelist:
            profile = {
                key: value
                for key, value in profile.items()
                if key in self.config.fields_whitelist
            }

        user = AggregatedUser(login=login, profile=profile)

        if self.config.extract_email_domain:
            user.email_domain = extract_email_domain(email)
        if self.config.keep_excluded_users:
            user.excluded = is_excluded

        return user
