"""Console helpers shared by the tool CLIs."""

import functools
import sys
from typing import Any, Callable, Optional

from rich.console import Console
from rich.table import Table

console = Console()
err_console = Console(stderr=True)


def info(message: str) -> None:
    """Print an informational message."""
    console.print(f"[cyan]ℹ[/cyan] {message}")


def success(message: str) -> None:
    """Print a success message."""
    console.print(f"[bold green]✓[/bold green] {message}")


def warning(message: str) -> None:
    """Print a warning message."""
    console.print(f"[yellow]⚠ {message}[/yellow]")


def error(message: str) -> None:
    """Print an error message to stderr."""
    err_console.print(f"[bold red]✗ {message}[/bold red]")


def create_table(title: Optional[str] = None, **kwargs: Any) -> Table:
    """
    Create a table with the default tool styling.

    Args:
        title: Optional table title
        **kwargs: Extra arguments passed to rich.table.Table

    Returns:
        Empty Table ready for columns
    """
    kwargs.setdefault("show_header", True)
    kwargs.setdefault("header_style", "bold magenta")
    return Table(title=title, **kwargs)


def print_table(table: Table) -> None:
    """Print a table followed by a blank line."""
    console.print(table)
    console.print()


def handle_errors(func: Callable) -> Callable:
    """
    Turn uncaught exceptions into an error message and exit code 1.

    With ``verbose=True`` among the command's arguments the exception
    is re-raised so the full traceback is shown.
    """

    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        try:
            return func(*args, **kwargs)
        except KeyboardInterrupt:
            error("Interrupted")
            sys.exit(130)
        except Exception as e:
            error(f"{type(e).__name__}: {e}")
            if kwargs.get("verbose"):
                raise
            sys.exit(1)

    return wrapper
