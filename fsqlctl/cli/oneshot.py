"""
One-shot Mode.

Runs exactly one command taken from piped stdin, a file (-f) or the command
line (-c), then exits. The whole input is one command: it is read to the
end and trimmed once, with no line-by-line staging.

Exit status is 0 on success and 1 when the command was invalid, could not
be dispatched, or (for VALIDATE) the query was not valid.
"""

import sys
from pathlib import Path
from typing import TextIO

from fsqlctl.api.client import FsqlClient
from fsqlctl.api.commands import CommandKind, classify_command
from fsqlctl.api.decoder import RawFallback, decode_response
from fsqlctl.cli.render import Renderer
from fsqlctl.core.exceptions import DispatchError, InputError
from fsqlctl.core.logging import get_logger, log_with_source

logger = get_logger(__name__)


def read_stdin(stream: TextIO | None = None) -> str:
    """Read all of stdin and trim it."""
    stream = stream or sys.stdin
    try:
        return stream.read().strip()
    except (OSError, UnicodeDecodeError) as e:
        raise InputError(f"Error reading from stdin: {e}") from e


def read_file(path: Path) -> str:
    """Read a command file and trim it."""
    try:
        return path.read_text(encoding="utf-8").strip()
    except (OSError, UnicodeDecodeError) as e:
        raise InputError(f"Error reading from file '{path}': {e}") from e


async def process_command(command: str, client: FsqlClient, renderer: Renderer) -> int:
    """
    Route, dispatch and render one command.

    Args:
        command: Trimmed command text
        client: Client used for the single dispatch; closed on return
        renderer: Renderer in pipeline layout

    Returns:
        Process exit code
    """
    kind = classify_command(command)
    log_with_source(logger, "pipe", "debug", "Command routed", kind=kind.value)

    try:
        if kind is CommandKind.INVALID:
            return renderer.invalid_command()

        try:
            body = await client.dispatch(command)
        except DispatchError as e:
            return renderer.dispatch_error(e)
    finally:
        await client.close()

    result = decode_response(kind, body)
    if isinstance(result, RawFallback):
        log_with_source(
            logger, "pipe", "debug", "Response did not match schema",
            kind=kind.value, reason=result.reason,
        )
    return renderer.render(result)
