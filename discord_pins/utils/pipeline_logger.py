"""Base pipeline logger with shared components.

Provides reusable building blocks for pipeline-specific loggers:
- StructuredBlock: Context manager for key-value style output
- BasePipelineLogger: Abstract base with common logging methods

Pipeline loggers are plain objects, built once at startup and handed to the
components that log through them. Whether debug-level messages are shown is a
property of the instance, not of the process.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from contextlib import contextmanager
from typing import TYPE_CHECKING, Any, Generator

from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from discord_pins.utils.logging import console

if TYPE_CHECKING:
    from typing import Self


class StructuredBlock:
    """A context manager for displaying structured key-value info blocks.

    Usage:
        with logger.block("Channel 123") as block:
            block.field("delete after archive", "yes", color="red")
            # ... do processing ...
            block.result("archived 12 pins", success=True)

    Output:
        Channel 123
            delete after archive: yes
            ✓ archived 12 pins
    """

    def __init__(self, title: str, parent: "BasePipelineLogger") -> None:
        self.title = title
        self.console = parent.console

    def __enter__(self) -> "Self":
        self.console.print(f"\n[bold]{self.title}[/bold]")
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        return None

    def field(self, key: str, value: Any, color: str | None = None) -> None:
        """Add a key-value field to the block."""
        if color:
            self.console.print(f"    [dim]{key}:[/dim] [{color}]{value}[/{color}]")
        else:
            self.console.print(f"    [dim]{key}:[/dim] {value}")

    def result(self, message: str, success: bool = True) -> None:
        """Show the final result of the block."""
        icon = "[green]✓[/green]" if success else "[red]✗[/red]"
        self.console.print(f"    {icon} {message}")


class BasePipelineLogger(ABC):
    """Abstract base class for pipeline loggers.

    Provides common functionality:
    - Shared console instance
    - Standard logging methods (info, warning, error, debug)
    - Structured block context manager
    - Summary panel

    Subclasses implement summary() and their pipeline-specific methods.
    """

    def __init__(self, logger_name: str | None = None, verbose: bool = False) -> None:
        """Initialize the pipeline logger.

        Args:
            logger_name: Name for the Python logger. If None, uses the module name.
            verbose: Emit debug-level messages from this logger.
        """
        self.console: Console = console
        self.verbose = verbose
        # The named logger is shared by every instance; debug() does the filtering.
        self._logger = logging.getLogger(logger_name or self.__class__.__module__)
        self._logger.setLevel(logging.DEBUG)

    @contextmanager
    def block(self, title: str) -> Generator[StructuredBlock, None, None]:
        """Create a structured block for key-value style output."""
        with StructuredBlock(title, self) as block:
            yield block

    # -------------------------------------------------------------------------
    # Standard Logging (goes through Python logging)
    # -------------------------------------------------------------------------

    def info(self, message: str) -> None:
        """Log an info message."""
        self._logger.info(message)

    def warning(self, message: str) -> None:
        """Log a warning message."""
        self._logger.warning(message)

    def error(self, message: str) -> None:
        """Log an error message."""
        self._logger.error(message)

    def debug(self, message: str) -> None:
        """Log a debug message (shown only when this logger is verbose)."""
        if not self.verbose:
            return
        self._logger.debug(message)

    def success(self, message: str) -> None:
        """Log a success message with green checkmark."""
        self.console.print(f"[green]✓[/green] {message}")

    # -------------------------------------------------------------------------
    # Summary Panel
    # -------------------------------------------------------------------------

    def _print_summary_table(
        self,
        title: str,
        rows: list[tuple[str, str | int]],
        *,
        style: str = "cyan",
    ) -> None:
        """Print a summary panel of (label, value) rows."""
        self.console.print()

        table = Table.grid(padding=(0, 2))
        table.add_column("Metric", style="bold")
        table.add_column("Value", justify="right", style="green")

        for label, value in rows:
            if isinstance(value, int):
                table.add_row(label, f"{value:,}")
            else:
                table.add_row(label, str(value))

        panel = Panel(
            table,
            title=f"[bold]{title}[/bold]",
            border_style=style,
            padding=(1, 2),
        )
        self.console.print(panel)

    def print_summary(
        self,
        pipeline_name: str,
        *,
        elapsed: float,
        stats: dict[str, int | str],
        style: str = "cyan",
    ) -> None:
        """Print a pipeline summary with elapsed time as the last row.

        Args:
            pipeline_name: Name of the pipeline
            elapsed: Time elapsed in seconds
            stats: Main statistics as {label: value}
            style: Border color style
        """
        rows: list[tuple[str, str | int]] = list(stats.items())
        rows.append(("Time elapsed", f"{elapsed:.1f}s"))

        self._print_summary_table(f"{pipeline_name} Complete", rows, style=style)

    @abstractmethod
    def summary(self, **kwargs: Any) -> None:
        """Print final summary. Implementation varies by pipeline."""
        ...
