"""
Console reporting for Browser Task Agent.

Prints task progress with rich and configures stdlib logging.
"""

import logging
from typing import Any, Optional

from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.panel import Panel
from rich.text import Text

from .utils import redact_arguments, truncate_text


def configure_logging(debug: bool = False) -> None:
    """Route stdlib logging through rich.

    Args:
        debug: Log at DEBUG instead of WARNING
    """
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(rich_tracebacks=True, show_path=debug)],
        force=True,
    )


class RunLogger:
    """Prints the progress of task runs to the console."""

    def __init__(self, console: Optional[Console] = None, enable_console: bool = True):
        """Initialize the run logger.

        Args:
            console: Console to print to (a new one by default)
            enable_console: Whether to print at all
        """
        if enable_console:
            self.console = console or Console()
        else:
            self.console = None
        self.tool_calls = 0

    def print_task_header(self, task: str) -> None:
        """Print the task being started."""
        if not self.console:
            return

        self.console.print()
        self.console.print(Panel(
            f"[bold cyan]Task:[/bold cyan] {escape(task)}",
            title="Browser Task Agent",
            border_style="cyan",
        ))

    def print_iteration(self, iteration: int, max_iterations: int) -> None:
        """Print the iteration counter."""
        if not self.console:
            return
        self.console.print(f"[dim]Iteration {iteration}/{max_iterations}[/dim]")

    def print_tool_call(self, name: str, args: dict[str, Any]) -> None:
        """Print a tool call with its (redacted) arguments."""
        self.tool_calls += 1
        if not self.console:
            return

        step_text = Text()
        step_text.append("  Tool: ", style="bold")
        step_text.append(name, style="bold cyan")

        args_str = ", ".join(
            f"{k}={v!r}" for k, v in redact_arguments(name, args).items()
        )
        if args_str:
            step_text.append(f"({args_str})", style="dim")

        self.console.print(step_text)

    def print_result(self, content: str, failed: bool = False) -> None:
        """Print a tool result, shortened for the console."""
        if not self.console:
            return

        short = escape(truncate_text(content, 200))
        if failed:
            self.console.print(f"  [red]✗[/red] {short}", highlight=False)
        else:
            self.console.print(f"  [green]✓[/green] {short}", highlight=False)

    def print_notice(self, message: str) -> None:
        """Print an informational line."""
        if not self.console:
            return
        self.console.print(f"  [yellow]{escape(message)}[/yellow]")

    def print_final_answer(self, answer: str) -> None:
        """Print the final answer."""
        if not self.console:
            return

        self.console.print()
        self.console.print(Panel(
            escape(answer),
            title="Result",
            border_style="green",
        ))
