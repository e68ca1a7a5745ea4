"""
Response Schemas.

One model per command kind. The API answers every command with a JSON
object whose shape depends on the leading keyword of the command text.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class _ResponseBase(BaseModel):
    """Wrong-typed fields fail validation instead of being coerced ("true" is not a bool)."""

    model_config = ConfigDict(strict=True)


class QueryResponse(_ResponseBase):
    """QUERY: search results."""

    command: str
    search_id: str
    trace_id: str
    results: list[Any]


class ExplainResponse(_ResponseBase):
    """EXPLAIN <fsql>: expanded form of the query, as text or structured JSON."""

    command: str
    input: str
    expanded_query: Any = Field(...)


class ExplainVersionResponse(_ResponseBase):
    """EXPLAIN VERSION: language and data model versions."""

    command: str | None = None
    fsql: str
    qdm: str


class ExplainConnectorsResponse(_ResponseBase):
    """EXPLAIN CONNECTORS: configured connectors."""

    command: str
    connectors: list[Any]


class ExplainAttributesResponse(_ResponseBase):
    """EXPLAIN ATTRIBUTES <fsql>: expanded attribute paths."""

    command: str
    attributes: list[str]


class ExplainSchemaResponse(_ResponseBase):
    """EXPLAIN SCHEMA <path>: GraphQL schema description."""

    model_config = ConfigDict(populate_by_name=True)

    command: str
    schema_: Any = Field(..., alias="schema")


class ExplainGraphqlResponse(_ResponseBase):
    """EXPLAIN GRAPHQL <fsql>: GraphQL translation of the query."""

    command: str
    query: str


class ValidateResponse(_ResponseBase):
    """VALIDATE <fsql>: syntax check result."""

    command: str
    is_valid: bool


class SummarizeResponse(_ResponseBase):
    """SUMMARIZE <fsql>: free-form summary; every field is kept for display."""

    model_config = ConfigDict(extra="allow")

    command: str | None = None
