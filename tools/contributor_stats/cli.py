"""CLI interface for GitHub Contributor Stats."""

import sys
from pathlib import Path
from typing import Optional

import click
from rich.progress import BarColumn, Progress, SpinnerColumn, TextColumn

from shared.cli import error, handle_errors, info, success, warning
from shared.logger import setup_logger

from .aggregator import ContributorAggregator
from .config import load_config
from .fetcher import DEFAULT_TIMEOUT, GitHubClient, ProgressHooks
from .report import DEFAULT_OUTPUT, emit, summarize


class RichProgress(ProgressHooks):
    """Progress hooks drawing one rich progress task per operation."""

    def __init__(self, progress: Progress, description: str):
        """
        Initialize the hooks.

        Args:
            progress: Running rich Progress display
            description: Label of the task added on start
        """
        self.progress = progress
        self.description = description
        self.task_id = None

    def start(self, total: int) -> None:
        """Add the task with its total number of steps."""
        self.task_id = self.progress.add_task(self.description, total=total)

    def advance(self) -> None:
        """Advance the task by one step."""
        self.progress.advance(self.task_id)

    def finish(self) -> None:
        """Mark the task as done."""
        self.progress.update(self.task_id, description=f"{self.description} [green]done[/green]")


def create_progress() -> Progress:
    """Create the progress display shared by all steps of a run."""
    return Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        BarColumn(),
        TextColumn("{task.completed}/{task.total}"),
    )


@click.command()
@click.option("--user", "-u", help="GitHub account used for authenticated requests (required)")
@click.option(
    "--password",
    "-p",
    default="",
    envvar="GITHUB_PASSWORD",
    help="Password or token for the account (or set GITHUB_PASSWORD env var)",
)
@click.option("--organization", "-o", help="Organization whose repositories are aggregated")
@click.option("--repository", "-r", help="Single repository in format 'owner/repo'")
@click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(path_type=Path, dir_okay=False),
    help="YAML configuration file",
)
@click.option(
    "--timeout",
    "-t",
    type=float,
    default=DEFAULT_TIMEOUT,
    show_default=True,
    help="Timeout in seconds for each request",
)
@click.option(
    "--output",
    type=click.Path(path_type=Path, dir_okay=False),
    default=DEFAULT_OUTPUT,
    show_default=True,
    help="Report file (overwritten)",
)
@click.option("--top", type=int, default=10, show_default=True, help="Contributors shown in the summary (0 to hide)")
@click.option("--verbose", "-v", is_flag=True, help="Verbose output")
@handle_errors
def main(
    user: Optional[str],
    password: str,
    organization: Optional[str],
    repository: Optional[str],
    config_path: Optional[Path],
    timeout: float,
    output: Path,
    top: int,
    verbose: bool,
):
    """
    GitHub Contributor Stats - Rank the contributors of GitHub repositories.

    Examples:

        \b
        # All public repositories of an organization
        gh-contributors --user me --password $TOKEN --organization acme

        \b
        # A single repository
        gh-contributors -u me -p $TOKEN -r acme/widgets

        \b
        # With exclusions and field filtering
        gh-contributors -u me -p $TOKEN -o acme --config contributors.yml
    """
    # Setup logging
    log_level = "DEBUG" if verbose else "INFO"
    setup_logger("tools.contributor_stats", level=log_level)

    if not user:
        warning("Please specify --user")
        sys.exit(0)

    if not organization and not repository:
        warning("Please specify --organization and/or --repository")
        sys.exit(0)

    try:
        config = load_config(config_path)
    except (FileNotFoundError, ValueError) as e:
        error(str(e))
        sys.exit(1)

    client = GitHubClient(user=user, password=password, timeout=timeout)
    aggregator = ContributorAggregator(client, config)

    with create_progress() as progress:
        repositories = []

        if organization:
            info(f"Fetching repositories of {organization}")
            repositories = client.list_repositories(
                organization,
                exclude_repositories=config.exclude_repositories,
                progress=RichProgress(progress, "Listing repositories..."),
            )

        if repository and repository not in repositories:
            repositories.append(repository)

        if not repositories:
            warning("No repositories to process")
            sys.exit(0)

        info(f"Aggregating contributors of {len(repositories)} repositories")
        users = aggregator.aggregate(
            repositories,
            progress=RichProgress(progress, "Fetching contributors..."),
        )

    path = emit(users, output)

    if top > 0:
        summarize(users, limit=top)

    success(f"Wrote {len(users)} contributors to {path}")
    sys.exit(0)


if __name__ == "__main__":
    main()
