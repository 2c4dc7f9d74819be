"""Ranking and output of aggregated contributors."""

import json
from pathlib import Path
from typing import Dict, List, Union

from shared.cli import console, create_table, print_table
from shared.logger import get_logger

from .aggregator import AggregatedUser

logger = get_logger(__name__)

DEFAULT_OUTPUT = Path("contributors.json")


def sort_users(users: Dict[str, AggregatedUser]) -> List[AggregatedUser]:
    """
    Rank users by contributions, highest first.

    Ties keep discovery order.
    """
    return sorted(users.values(), key=lambda u: u.contributions, reverse=True)


def emit(
    users: Dict[str, AggregatedUser],
    path: Union[str, Path] = DEFAULT_OUTPUT,
    indent: int = 2,
) -> Path:
    """
    Write the ranked users as pretty-printed JSON, replacing any existing file.

    Args:
        users: Aggregated users keyed by login
        path: Output file
        indent: JSON indentation

    Returns:
        Path of the written file
    """
    path = Path(path)
    data = [user.to_dict() for user in sort_users(users)]

    with open(path, "w", encoding="utf-8") as f:
        json.dump(data, f, indent=indent, ensure_ascii=False)
        f.write("\n")

    logger.info(f"Wrote {len(data)} user(s) to {path}")
    return path


def summarize(users: Dict[str, AggregatedUser], limit: int = 10) -> None:
    """Display the top contributors as a table."""
    ranked = sort_users(users)[:limit]
    if not ranked:
        return

    console.print(f"\n[bold yellow]👥 Top {len(ranked)} Contributors:[/bold yellow]")

    table = create_table(title=None)
    table.add_column("#", justify="right", style="cyan", width=4)
    table.add_column("Username", style="bold")
    table.add_column("Contributions", justify="right", style="yellow")
    table.add_column("Repositories", justify="right")
    table.add_column("% of total", justify="right", style="dim")

    total_contributions = sum(u.contributions for u in users.values())

    for idx, user in enumerate(ranked, 1):
        percentage = (user.contributions / total_contributions * 100) if total_contributions > 0 else 0
        table.add_row(
            str(idx),
            user.login,
            f"{user.contributions:,}",
            str(len(user.repositories)),
            f"{percentage:.1f}%",
        )

    print_table(table)
