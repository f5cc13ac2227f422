"""
CLI for Browser Task Agent.

Reads one task per line and runs it in a shared headless browser session.
"""

import argparse
import logging
import sys
from typing import Callable, Iterable, Optional

from rich.console import Console
from rich.markup import escape

from . import __version__
from .agent import BrowserAgent
from .config import AgentConfig
from .exceptions import BrowserAgentError, ConfigurationError
from .llm_client import LLMClient
from .logger import RunLogger, configure_logging
from .session import BrowserSession


logger = logging.getLogger(__name__)

EXIT_COMMANDS = {"quit", "exit"}


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    parser = argparse.ArgumentParser(
        prog="browser-task-agent",
        description="Run natural-language tasks in a headless browser driven by an LLM.",
        epilog="""
Set OPENAI_API_KEY (or put it in a .env file), start the shell and type tasks:

  Your task: go to example.com and report the title
  Your task: quit
        """,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"Browser Task Agent {__version__}",
    )

    parser.add_argument(
        "-d", "--debug",
        action="store_true",
        default=False,
        help="Enable verbose logging",
    )

    return parser


def read_tasks(prompt: Callable[[], str]) -> Iterable[str]:
    """Yield non-empty task lines until EOF or an exit command.

    Args:
        prompt: Returns the next input line; raises EOFError at end of input
    """
    while True:
        try:
            line = prompt()
        except EOFError:
            return

        task = line.strip()
        if not task:
            continue
        if task.lower() in EXIT_COMMANDS:
            return
        yield task


def interactive_loop(
    agent: BrowserAgent,
    console: Console,
    prompt: Optional[Callable[[], str]] = None,
) -> None:
    """Run tasks from the prompt until the user quits.

    A failing task is reported on one line and the loop continues.
    """
    if prompt is None:
        def prompt() -> str:
            return console.input("\n[bold]Your task:[/bold] ")

    for task in read_tasks(prompt):
        try:
            result = agent.execute_task(task)
        except BrowserAgentError as e:
            logger.debug("Task failed: %s", task, exc_info=True)
            console.print(f"[bold red]Task failed:[/bold red] {escape(str(e))}")
            continue
        console.print(f"\n[bold]Result:[/bold] {escape(result)}")

    console.print("Goodbye!")


def main(argv: Optional[list[str]] = None) -> int:
    """Main entry point.

    Args:
        argv: Command line arguments (uses sys.argv if None)

    Returns:
        Exit code
    """
    parser = create_parser()
    args = parser.parse_args(argv)

    configure_logging(debug=args.debug)
    console = Console()

    try:
        config = AgentConfig.from_env(debug=args.debug)
    except ConfigurationError as e:
        console.print(f"[bold red]Configuration error:[/bold red] {escape(str(e))}")
        return 1

    console.print("[bold cyan]Browser Task Agent started[/bold cyan]")
    console.print("Type a task for the agent (or 'quit' to exit)")

    session = BrowserSession(config)
    llm = LLMClient(config)
    try:
        browser_tools = session.start()
        agent = BrowserAgent(config, browser_tools, llm, RunLogger(console))
        interactive_loop(agent, console)
    except BrowserAgentError as e:
        console.print(f"[bold red]Fatal error:[/bold red] {escape(str(e))}")
        return 1
    except KeyboardInterrupt:
        console.print("\n[yellow]Interrupted by user[/yellow]")
        return 130
    finally:
        llm.close()
        session.close()

    return 0


if __name__ == "__main__":
    sys.exit(main())
