"""
Interactive Shell Mode.

REPL for typing FSQL commands. Uses prompt_toolkit for line editing and
persistent history, Rich for output.

Commands may span several lines; see fsqlctl.cli.accumulator for when a
command is considered complete.
"""

import random
from collections.abc import Awaitable, Callable
from pathlib import Path

from prompt_toolkit import PromptSession
from prompt_toolkit.history import FileHistory
from rich.console import Console
from rich.table import Table

from fsqlctl.api.client import FsqlClient
from fsqlctl.api.commands import CommandKind, classify_command, normalize_command
from fsqlctl.api.decoder import decode_response
from fsqlctl.cli.accumulator import InputAccumulator, LineReader, read_command
from fsqlctl.cli.render import Renderer
from fsqlctl.core.exceptions import DispatchError
from fsqlctl.core.logging import get_logger, log_with_source

logger = get_logger(__name__)

GOODBYE_MESSAGES = (
    "Query ya later!",
    "Ya'll query again now, ya hear?",
    "Catch you on the Query side!",
    "The FSQL was strong with this session.",
)

DIVIDER = "=" * 80


def prompt_toolkit_reader(history_file: Path) -> LineReader:
    """Line reader backed by prompt_toolkit with history kept in history_file."""
    session: PromptSession[str] = PromptSession(history=FileHistory(str(history_file)))

    async def read_line(prompt: str) -> str:
        return await session.prompt_async(prompt)

    return read_line


class InteractiveShell:
    """
    Interactive shell for FSQL commands.

    Usage:
        shell = InteractiveShell(client, api_url, history_file=Path("~/.fsql_history"))
        await shell.run()
    """

    def __init__(
        self,
        client: FsqlClient,
        api_url: str,
        *,
        accumulator: InputAccumulator | None = None,
        renderer: Renderer | None = None,
        console: Console | None = None,
        read_line: LineReader | None = None,
        history_file: Path | None = None,
    ) -> None:
        self.client = client
        self.api_url = api_url
        self.console = console or Console()
        self.renderer = renderer or Renderer(out=self.console)
        self.accumulator = accumulator or InputAccumulator()
        if read_line is None:
            read_line = prompt_toolkit_reader(history_file or Path.home() / ".fsql_history")
        self.read_line = read_line
        self.running = False
        self.directives: dict[str, Callable[[], Awaitable[None]]] = {
            "help": self._cmd_help,
            "h": self._cmd_help,
            "clear": self._cmd_clear,
            "exit": self._cmd_exit,
        }

    async def run(self) -> None:
        """Run the shell until exit or end of input."""
        self.running = True
        log_with_source(logger, "repl", "info", "Shell started", api_url=self.api_url)

        self.print_welcome()
        self.print_help()

        try:
            while self.running:
                try:
                    command = await read_command(
                        self.read_line,
                        self.accumulator,
                        on_interrupt=self._on_interrupt,
                        on_reset=self.console.clear,
                    )
                except EOFError:
                    self.console.print()
                    break

                if not command:
                    continue

                await self.handle(command)
        finally:
            await self.client.close()

        self.print_goodbye()
        log_with_source(logger, "repl", "info", "Shell stopped")

    async def handle(self, command: str) -> None:
        """Run one staged command: a shell directive or an API command."""
        directive = self.directives.get(normalize_command(command))
        if directive is not None:
            await directive()
            return

        kind = classify_command(command)
        if kind is CommandKind.INVALID:
            self.renderer.invalid_command()
            return

        try:
            body = await self.client.dispatch(command)
        except DispatchError as e:
            self.renderer.dispatch_error(e)
            return

        self.renderer.render(decode_response(kind, body))

    def _on_interrupt(self) -> None:
        self.console.print("^C", markup=False)

    async def _cmd_help(self) -> None:
        """Display help and tips."""
        self.print_help()
        self.console.print()
        self.print_tips()

    async def _cmd_clear(self) -> None:
        """Clear the screen."""
        self.console.clear()
        self.print_welcome()

    async def _cmd_exit(self) -> None:
        """Exit the shell."""
        self.console.print()
        self.running = False

    def print_welcome(self) -> None:
        self.console.print(f"[bright_blue]{DIVIDER}[/bright_blue]")
        self.console.print(
            "[cyan]Federated Search Query Language[/cyan] "
            "[bright_cyan](FSQL)[/bright_cyan] [cyan]Interpreter[/cyan]"
        )
        self.console.print(f"🔗 [cyan]API:[/cyan] [green]{self.api_url}[/green]")
        self.console.print(f"[bright_blue]{DIVIDER}[/bright_blue]")

    def print_help(self) -> None:
        table = Table(title="📚 FSQL REPL Help", show_header=True, title_justify="left")
        table.add_column("Command", style="cyan")
        table.add_column("Description")

        table.add_row("QUERY <fsql>", "Run a query and show the results")
        table.add_row("VALIDATE <fsql>", "Check that a query is valid")
        table.add_row("SUMMARIZE <fsql>", "Summarize a query")
        table.add_row("EXPLAIN CONNECTORS", "Get details about all configured connectors")
        table.add_row("EXPLAIN VERSION", "List FSQL and QDM versions")
        table.add_row("EXPLAIN ATTRIBUTES <fsql>", "Get a list of expanded attributes")
        table.add_row("EXPLAIN SCHEMA <path>", "Describe the schema at a path")
        table.add_row("EXPLAIN GRAPHQL <fsql>", "Show the GraphQL translation of the given FSQL")
        table.add_row("EXPLAIN <fsql>", "Get query execution details")
        table.add_row("help, h", "Show this help message")
        table.add_row("clear", "Clear the screen")
        table.add_row("exit", "Exit the REPL")

        self.console.print(table)

    def print_tips(self) -> None:
        threshold = self.accumulator.blank_line_threshold
        send_hint = "Hit enter twice" if threshold == 1 else f"Enter {threshold} blank lines"
        self.console.print("💡 [cyan]Tips:[/cyan]")
        self.console.print("  • Multiline queries can be pasted")
        self.console.print(
            f"  • Use {self.accumulator.reset_directive} to clear a query without submitting it",
            markup=False,
        )
        self.console.print(f"  • {send_hint} to send your command to the FSQL API")
        self.console.print("  • End a command with ';' to end multiline input and send your command")
        self.console.print("  • Press Ctrl+D (Unix) or Ctrl+Z (Windows) to exit")
        self.console.print("  • Use Up/Down arrows to navigate command history")
        self.console.print("  • Use Ctrl+R for reverse history search")

    def print_goodbye(self) -> None:
        self.console.print(f"❤ [yellow]{random.choice(GOODBYE_MESSAGES)}[/yellow]")
