"""Terminal output handling using Rich library.

This module provides the OutputHandler class for all CLI terminal output.
Command results (JSON, Markdown) go to stdout; status messages and spinners
go to stderr so that results can be piped. Supports verbosity levels and the
--no-color flag.
"""

from contextlib import contextmanager
from typing import Any, Iterator

from rich.console import Console
from rich.live import Live
from rich.markup import escape
from rich.spinner import Spinner
from rich.table import Table


class OutputHandler:
    """Handles all terminal output using Rich library.

    Attributes:
        verbosity: Verbosity level (0=results only, 1=info, 2=debug)
        console: Rich Console for command results (stdout)
        err_console: Rich Console for status messages (stderr)

    Example:
        >>> handler = OutputHandler(verbosity=1, no_color=False)
        >>> with handler.spinner("Fetching page..."):
        ...     page = api.get_page("123456")
        >>> handler.print_json(page.to_dict())
    """

    def __init__(self, verbosity: int = 0, no_color: bool = False):
        """Initialize output handler.

        Args:
            verbosity: Verbosity level (0=results only, 1=info, 2=debug)
            no_color: Disable color output if True
        """
        self.verbosity = verbosity
        self.no_color = no_color
        self.console = Console(no_color=no_color, highlight=False)
        self.err_console = Console(stderr=True, no_color=no_color, highlight=False)

    def success(self, message: str) -> None:
        """Display success message in green."""
        self.err_console.print(f"[green]✓[/green] {escape(message)}")

    def error(self, message: str) -> None:
        """Display error message in red.

        Args:
            message: Error message to display
        """
        self.err_console.print(f"[red]✗[/red] {escape(message)}", style="red")

    def warning(self, message: str) -> None:
        """Display warning message in yellow."""
        self.err_console.print(f"[yellow]⚠[/yellow] {escape(message)}", style="yellow")

    def info(self, message: str) -> None:
        """Display info message (only if verbosity >= 1)."""
        if self.verbosity >= 1:
            self.err_console.print(escape(message))

    def debug(self, message: str) -> None:
        """Display debug message (only if verbosity >= 2)."""
        if self.verbosity >= 2:
            self.err_console.print(f"[dim]{escape(message)}[/dim]")

    def print(self, message: str) -> None:
        """Display a result without markup processing.

        Args:
            message: Text to write to stdout
        """
        self.console.print(message, markup=False, soft_wrap=True)

    def print_json(self, data: Any) -> None:
        """Write a result as indented JSON to stdout.

        Args:
            data: JSON-serializable value
        """
        self.console.print_json(data=data, indent=2, highlight=not self.no_color)

    def print_spaces_table(self, spaces: list) -> None:
        """Render spaces as a table (human-readable alternative to JSON).

        Args:
            spaces: Space entities
        """
        table = Table(title="Confluence spaces")
        table.add_column("Key", style="bold")
        table.add_column("Name")
        table.add_column("Type")
        table.add_column("Status")
        for space in spaces:
            table.add_row(space.key, space.name, space.type, space.status)
        self.console.print(table)

    @contextmanager
    def spinner(self, message: str) -> Iterator[None]:
        """Display spinner for single operations.

        Args:
            message: Message to display with spinner

        Yields:
            None
        """
        spinner = Spinner("dots", text=message)
        with Live(spinner, console=self.err_console, refresh_per_second=10, transient=True):
            yield
