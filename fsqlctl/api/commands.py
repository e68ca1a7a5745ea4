"""
Command Routing.

Maps command text to the kind of response the API will send back. The
query language itself is opaque here: only the leading keywords matter.
"""

from enum import Enum


class CommandKind(str, Enum):
    """Shape of an accepted command, and so of its response."""

    QUERY = "query"
    EXPLAIN = "explain"
    EXPLAIN_VERSION = "explain_version"
    EXPLAIN_CONNECTORS = "explain_connectors"
    EXPLAIN_ATTRIBUTES = "explain_attributes"
    EXPLAIN_SCHEMA = "explain_schema"
    EXPLAIN_GRAPHQL = "explain_graphql"
    VALIDATE = "validate"
    SUMMARIZE = "summarize"
    INVALID = "invalid"


# Order matters: every "explain <sub-form>" must come before the bare "explain ".
COMMAND_PREFIXES: tuple[tuple[str, CommandKind], ...] = (
    ("explain connectors", CommandKind.EXPLAIN_CONNECTORS),
    ("explain schema ", CommandKind.EXPLAIN_SCHEMA),
    ("explain graphql ", CommandKind.EXPLAIN_GRAPHQL),
    ("explain version", CommandKind.EXPLAIN_VERSION),
    ("explain attributes ", CommandKind.EXPLAIN_ATTRIBUTES),
    ("explain ", CommandKind.EXPLAIN),
    ("summarize ", CommandKind.SUMMARIZE),
    ("validate ", CommandKind.VALIDATE),
    ("query ", CommandKind.QUERY),
)


def normalize_command(text: str) -> str:
    """Trim and case-fold command text for prefix matching."""
    return text.strip().lower()


def classify_command(text: str) -> CommandKind:
    """
    Route command text to a CommandKind by prefix.

    Matching is case-insensitive and ignores surrounding whitespace. Empty
    or unrecognized text is INVALID.
    """
    normalized = normalize_command(text)
    for prefix, kind in COMMAND_PREFIXES:
        if normalized.startswith(prefix):
            return kind
    return CommandKind.INVALID
