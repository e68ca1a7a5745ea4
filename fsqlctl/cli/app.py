"""
fsqlctl Command Line.

Entry point that picks the session mode and wires the pieces together.

Usage:
    fsqlctl <TOKEN>                                  # Interactive shell
    echo "QUERY ..." | fsqlctl <TOKEN> | jq          # Pipe mode
    fsqlctl <TOKEN> -f query.txt                     # Command from a file
    fsqlctl <TOKEN> -c "EXPLAIN VERSION"             # Command from the argument
    fsqlctl <TOKEN> --save                           # Remember the token for --host
    FSQL_TOKEN=<TOKEN> fsqlctl                       # Token from the environment

Options:
    --host            Hostname of the FSQL API
    --path            Path to the translation endpoint
    --port            Port of the FSQL API
    --verbose, -v     Enable verbose output (DEBUG level logging)
    --file, -f        Read the command from a file
    --command, -c     Run the given command
    --save            Store the token for --host in the credential store
"""

import asyncio
import sys
from pathlib import Path
from typing import NoReturn, Optional

import typer
from rich.console import Console
from rich.markup import escape

from fsqlctl.api.client import FsqlClient
from fsqlctl.cli.oneshot import process_command, read_file, read_stdin
from fsqlctl.cli.render import Renderer
from fsqlctl.core.config import (
    CredentialStore,
    build_api_url,
    get_app_config,
    get_settings,
)
from fsqlctl.core.exceptions import ApplicationError
from fsqlctl.core.logging import get_logger, log_with_source, setup_logging

logger = get_logger(__name__)

app = typer.Typer(
    name="fsqlctl",
    help="Command line client for the Federated Search Query Language (FSQL) API.",
    add_completion=False,
    rich_markup_mode="rich",
)

err_console = Console(stderr=True)


def _stdin_is_terminal() -> bool:
    return sys.stdin.isatty()


def _fail(message: str) -> NoReturn:
    err_console.print(f"[red]❌ {escape(message)}[/red]")
    raise typer.Exit(1)


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"fsqlctl {get_app_config().application.version}")
        raise typer.Exit()


def resolve_token(token: str | None, host: str, store: CredentialStore) -> str | None:
    """Token from the argument, then FSQL_TOKEN, then the credential store entry for host."""
    if token:
        return token
    if get_settings().token:
        return get_settings().token
    return store.get_token(host)


def _run_shell(client: FsqlClient, api_url: str, verbose: bool) -> None:
    from fsqlctl.cli.accumulator import InputAccumulator
    from fsqlctl.cli.shell import InteractiveShell

    repl = get_app_config().application.repl
    console = Console()
    shell = InteractiveShell(
        client,
        api_url,
        accumulator=InputAccumulator(
            blank_line_threshold=repl.blank_line_threshold,
            reset_directive=repl.reset_directive,
            prompt=repl.prompt,
        ),
        renderer=Renderer(out=console, verbose=verbose),
        console=console,
        history_file=Path(repl.history_file).expanduser(),
    )
    asyncio.run(shell.run())


@app.command()
def main(
    token: Optional[str] = typer.Argument(
        None,
        help="Bearer token or API key for authentication. Falls back to FSQL_TOKEN, then the stored token for --host.",
        show_default=False,
    ),
    host: Optional[str] = typer.Option(None, "--host", help="Hostname for FSQL API"),
    path: Optional[str] = typer.Option(None, "--path", help="Path to endpoint"),
    port: Optional[int] = typer.Option(None, "--port", help="Port number for the API"),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Enable verbose output for debugging",
    ),
    file: Optional[Path] = typer.Option(
        None,
        "--file",
        "-f",
        help="Read FSQL command from a file",
    ),
    command: Optional[str] = typer.Option(
        None,
        "--command",
        "-c",
        help="Execute FSQL command directly",
    ),
    save: bool = typer.Option(
        False,
        "--save",
        help="Store the token for this host in the credential store",
    ),
    version: bool = typer.Option(
        False,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show version and exit",
    ),
) -> None:
    """
    Dispatch FSQL commands to the FSQL API.

    With no command, file or piped input, starts an interactive shell.
    """
    try:
        if verbose:
            setup_logging(level="DEBUG", format_type="console")
        else:
            setup_logging()

        if command is not None and file is not None:
            _fail("Cannot pass a command and a file at the same time")
        if command is not None and not _stdin_is_terminal():
            _fail("Cannot pipe to stdin and pass a command at the same time")
        if file is not None and not _stdin_is_terminal():
            _fail("Cannot pipe to stdin and pass a file at the same time")

        api = get_app_config().application.api
        host = host or api.host
        api_url = build_api_url(host, path or api.path, port or api.port)

        store = CredentialStore.load()
        resolved = resolve_token(token, host, store)
        if not resolved:
            _fail(
                f"No token provided for {host}. Pass one as an argument, set FSQL_TOKEN, "
                f"or store one with --save (credentials file: {store.path})"
            )

        if save:
            store.set_token(host, resolved)
            store.save()
            log_with_source(logger, "config", "info", "Token saved", host=host, path=str(store.path))
            err_console.print(f"🔑 Token saved for {host}", markup=False)

        client = FsqlClient(api_url, resolved, verbose=verbose)

        if command is not None:
            text = command.strip()
        elif file is not None:
            text = read_file(file)
        elif not _stdin_is_terminal():
            text = read_stdin()
        else:
            log_with_source(logger, "cli", "debug", "Starting interactive shell", api_url=api_url)
            _run_shell(client, api_url, verbose)
            return

        log_with_source(logger, "cli", "debug", "Running one-shot command", api_url=api_url)
        renderer = Renderer(verbose=verbose, pipeline=True)
        exit_code = asyncio.run(process_command(text, client, renderer))
    except ApplicationError as e:
        _fail(e.message)

    raise typer.Exit(exit_code)


if __name__ == "__main__":
    app()
