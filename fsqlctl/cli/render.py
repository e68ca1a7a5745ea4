"""
Response Rendering.

Prints decoded responses, fallbacks and errors with Rich.

Two layouts:
- interactive: everything on stdout, like a conversation
- pipeline: labels and status lines on stderr, payloads on stdout, so that
  ``fsqlctl ... | jq`` sees only JSON or plain query text
"""

import json
from typing import Any

from rich.console import Console

from fsqlctl.api.commands import CommandKind
from fsqlctl.api.decoder import Decoded, DecodeResult, RawFallback
from fsqlctl.api.schemas import (
    ExplainAttributesResponse,
    ExplainConnectorsResponse,
    ExplainGraphqlResponse,
    ExplainResponse,
    ExplainSchemaResponse,
    ExplainVersionResponse,
    QueryResponse,
    SummarizeResponse,
    ValidateResponse,
)
from fsqlctl.core.exceptions import DispatchError

EXIT_OK = 0
EXIT_FAILURE = 1

INVALID_COMMAND = "(╯°□°)╯︵ ┻━┻"


def pretty_json(value: Any) -> str:
    """Pretty-print a JSON value with two-space indentation."""
    return json.dumps(value, indent=2, ensure_ascii=False)


def count_phrase(count: int, noun: str) -> str:
    """'1 result found', '0 results found', '2 results found'."""
    suffix = "" if count == 1 else "s"
    return f"{count} {noun}{suffix} found"


class Renderer:
    """
    Writes command outcomes to the terminal.

    Every render method returns the exit code a one-shot run should end
    with. The interactive shell ignores it.

    Usage:
        renderer = Renderer(verbose=False, pipeline=True)
        exit_code = renderer.render(decode_response(kind, body))
    """

    def __init__(
        self,
        out: Console | None = None,
        err: Console | None = None,
        verbose: bool = False,
        pipeline: bool = False,
    ) -> None:
        self.out = out or Console(soft_wrap=True, highlight=False)
        self.err = err or Console(stderr=True, soft_wrap=True, highlight=False)
        self.verbose = verbose
        self.pipeline = pipeline

    @property
    def labels(self) -> Console:
        """Console for labels and status lines."""
        return self.err if self.pipeline else self.out

    # -------------------------------------------------------------------------
    # Low-level output
    # -------------------------------------------------------------------------

    @staticmethod
    def _plain(console: Console, text: str) -> None:
        console.print(text, markup=False, highlight=False, emoji=False, soft_wrap=True)

    def _data(self, text: str) -> None:
        self._plain(self.out, text)

    def _label(self, text: str) -> None:
        self.labels.print(text)

    def _field(self, label: str, value: str) -> None:
        if not self.pipeline:
            self.out.print(f"[cyan]{label}[/cyan] ", end="")
            self._plain(self.out, value)
            return
        self.labels.print(f"[cyan]{label}[/cyan]")
        self._plain(self.labels, value)
        self.labels.print()

    # -------------------------------------------------------------------------
    # Outcomes
    # -------------------------------------------------------------------------

    def render(self, result: DecodeResult) -> int:
        """Render a decode result. Returns the one-shot exit code."""
        if isinstance(result, RawFallback):
            return self.fallback(result)
        return self._render_decoded(result)

    def fallback(self, result: RawFallback) -> int:
        """Show a body that did not match its schema, unchanged."""
        if self.verbose:
            self.err.print("❌ Failed to parse response as JSON: ", end="")
            self._plain(self.err, result.reason)
        self._plain(self.labels, result.body)
        if self.pipeline and result.kind is CommandKind.VALIDATE:
            return EXIT_FAILURE
        return EXIT_OK

    def dispatch_error(self, error: DispatchError) -> int:
        self.err.print("❌ Error dispatching command: ", end="")
        self._plain(self.err, str(error))
        return EXIT_FAILURE

    def invalid_command(self) -> int:
        if self.pipeline:
            self._plain(self.err, f"{INVALID_COMMAND} Invalid Command")
        else:
            self.out.print(f"{INVALID_COMMAND} [red]Invalid Command[/red]")
            self.out.print("💡 Type 'help' for available commands")
        return EXIT_FAILURE

    # -------------------------------------------------------------------------
    # Decoded responses
    # -------------------------------------------------------------------------

    def _render_decoded(self, result: Decoded) -> int:
        value = result.value
        if isinstance(value, QueryResponse):
            return self._query(value)
        if isinstance(value, ExplainResponse):
            return self._explain(value)
        if isinstance(value, ExplainVersionResponse):
            return self._explain_version(value)
        if isinstance(value, ExplainConnectorsResponse):
            return self._explain_connectors(value)
        if isinstance(value, ExplainAttributesResponse):
            return self._explain_attributes(value)
        if isinstance(value, ExplainSchemaResponse):
            return self._explain_schema(value)
        if isinstance(value, ExplainGraphqlResponse):
            return self._explain_graphql(value)
        if isinstance(value, ValidateResponse):
            return self._validate(value)
        if isinstance(value, SummarizeResponse):
            return self._summarize(value)
        raise TypeError(f"No renderer for {type(value).__name__}")

    def _query(self, data: QueryResponse) -> int:
        if self.verbose:
            self._field("Command:", data.command)
            self._field("Trace ID:", data.trace_id)
        self._field("Search ID:", data.search_id)
        self._label("Results:")
        self._data(pretty_json(data.results))
        self._plain(self.labels, count_phrase(len(data.results), "result"))
        return EXIT_OK

    def _explain(self, data: ExplainResponse) -> int:
        if self.verbose:
            self._field("Original Input:", data.input)
            self._field("Command:", data.command)
        self._label("Expanded Query:")
        if isinstance(data.expanded_query, str):
            self._data(data.expanded_query)
        else:
            self._data(pretty_json(data.expanded_query))
        return EXIT_OK

    def _explain_version(self, data: ExplainVersionResponse) -> int:
        if self.pipeline:
            self._label("Version Information:")
            self._data(pretty_json(data.model_dump(exclude_none=True)))
            return EXIT_OK
        if self.verbose and data.command:
            self._field("Command:", data.command)
        self._data(f"fsql: {data.fsql}")
        self._data(f" qdm: {data.qdm}")
        return EXIT_OK

    def _explain_connectors(self, data: ExplainConnectorsResponse) -> int:
        if self.verbose:
            self._field("Command:", data.command)
        self._label("Connectors:")
        self._data(pretty_json(data.connectors))
        self._plain(self.labels, count_phrase(len(data.connectors), "connector"))
        return EXIT_OK

    def _explain_attributes(self, data: ExplainAttributesResponse) -> int:
        if self.verbose:
            self._field("Command:", data.command)
        self._label("Attributes:")
        if self.pipeline:
            self._data(pretty_json(data.attributes))
        else:
            for attribute in data.attributes:
                self._data(attribute)
        return EXIT_OK

    def _explain_schema(self, data: ExplainSchemaResponse) -> int:
        if self.verbose:
            self._field("Command:", data.command)
        self._label("Schema:")
        self._data(pretty_json(data.schema_))
        return EXIT_OK

    def _explain_graphql(self, data: ExplainGraphqlResponse) -> int:
        if self.verbose:
            self._field("Command:", data.command)
        if self.pipeline:
            self._label("Graphql Query:")
        self._data(data.query)
        return EXIT_OK

    def _validate(self, data: ValidateResponse) -> int:
        if self.verbose:
            self._field("Command:", data.command)
        # The API currently reports invalid queries as an HTTP error rather
        # than is_valid: false, so the second branch is rarely reached.
        if data.is_valid:
            self.labels.print("✅ Query is valid")
            return EXIT_OK
        self.err.print("❌ Query is invalid")
        return EXIT_FAILURE

    def _summarize(self, data: SummarizeResponse) -> int:
        self._label("Summarize Details:")
        self._data(pretty_json(data.model_dump(exclude_none=True)))
        return EXIT_OK
