"""
Integration Test Fixtures.

Fixtures for running the fsqlctl command line end to end through Typer's
CliRunner. The API is served by httpx.MockTransport; everything else
(configuration, credential store, routing, rendering) is real.
"""

from collections.abc import Callable, Generator
from typing import Any

import httpx
import pytest
from typer.testing import CliRunner

from fsqlctl.api.client import FsqlClient
from fsqlctl.core.logging import setup_logging


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


@pytest.fixture(autouse=True)
def _requiet_logging() -> Generator[None, None, None]:
    """main() binds the log handler to the runner's stderr; undo that after each test."""
    yield
    setup_logging(level="CRITICAL", enable_console=False, enable_file_logging=False)


@pytest.fixture
def terminal(monkeypatch) -> Callable[[bool], None]:
    """
    Control whether stdin looks like a terminal.

    Usage:
        terminal(False)   # behave as if input is piped
    """

    def set_terminal(is_terminal: bool) -> None:
        monkeypatch.setattr("fsqlctl.cli.app._stdin_is_terminal", lambda: is_terminal)

    set_terminal(True)
    return set_terminal


@pytest.fixture
def serve(monkeypatch) -> Callable[[Callable[[httpx.Request], Any]], list[httpx.Request]]:
    """
    Route every client the CLI creates through a mock transport.

    Returns the list of requests the handler received.
    """

    def install(handler: Callable[[httpx.Request], Any]) -> list[httpx.Request]:
        seen: list[httpx.Request] = []

        def recording_handler(request: httpx.Request) -> Any:
            seen.append(request)
            return handler(request)

        def factory(base_url: str, token: str, **kwargs: Any) -> FsqlClient:
            return FsqlClient(base_url, token, transport=httpx.MockTransport(recording_handler), **kwargs)

        monkeypatch.setattr("fsqlctl.cli.app.FsqlClient", factory)
        return seen

    return install
