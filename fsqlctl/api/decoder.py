"""
Response Decoding.

Turns a raw response body into the typed model for the command that
produced it. A body that does not match falls back to the raw text so the
user still sees what the server said; decoding never raises.
"""

from dataclasses import dataclass

from pydantic import BaseModel, ValidationError

from fsqlctl.api.commands import CommandKind
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

RESPONSE_MODELS: dict[CommandKind, type[BaseModel]] = {
    CommandKind.QUERY: QueryResponse,
    CommandKind.EXPLAIN: ExplainResponse,
    CommandKind.EXPLAIN_VERSION: ExplainVersionResponse,
    CommandKind.EXPLAIN_CONNECTORS: ExplainConnectorsResponse,
    CommandKind.EXPLAIN_ATTRIBUTES: ExplainAttributesResponse,
    CommandKind.EXPLAIN_SCHEMA: ExplainSchemaResponse,
    CommandKind.EXPLAIN_GRAPHQL: ExplainGraphqlResponse,
    CommandKind.VALIDATE: ValidateResponse,
    CommandKind.SUMMARIZE: SummarizeResponse,
}


@dataclass(frozen=True)
class Decoded:
    """Body matched the schema for its command kind."""

    kind: CommandKind
    value: BaseModel


@dataclass(frozen=True)
class RawFallback:
    """Body did not match; render it as-is."""

    kind: CommandKind
    body: str
    reason: str


DecodeResult = Decoded | RawFallback


def decode_response(kind: CommandKind, body: str) -> DecodeResult:
    """
    Decode a response body against the schema for its command kind.

    Args:
        kind: Kind of the command that produced the body
        body: Raw response text

    Returns:
        Decoded on success, RawFallback with the parse failure reason otherwise
    """
    model = RESPONSE_MODELS.get(kind)
    if model is None:
        return RawFallback(kind, body, f"No response schema for {kind.value} commands")

    try:
        return Decoded(kind, model.model_validate_json(body))
    except ValidationError as e:
        return RawFallback(kind, body, _describe(e))


def _describe(error: ValidationError) -> str:
    """One-line summary of a validation failure."""
    parts = []
    for item in error.errors():
        location = ".".join(str(p) for p in item["loc"])
        parts.append(f"{location}: {item['msg']}" if location else item["msg"])
    return "; ".join(parts) or str(error)
