"""
Configuration Schemas.

Pydantic models defining the expected structure of each YAML config file.
Used by AppConfig to validate configuration at load time. If a YAML file
has missing keys, wrong types, or unknown fields, a clear ValidationError
is raised at startup instead of a cryptic KeyError deep in application code.

Each top-level class corresponds to one file in fsqlctl/config/settings/:
    ApplicationSchema  → application.yaml
    LoggingSchema      → logging.yaml

CredentialFileSchema validates the persisted credential store.
"""

from pydantic import BaseModel, ConfigDict, Field


class _StrictBase(BaseModel):
    """Base with extra='forbid' so unknown YAML keys are caught immediately."""

    model_config = ConfigDict(extra="forbid")


# =============================================================================
# application.yaml
# =============================================================================


class ApiSchema(_StrictBase):
    host: str
    path: str
    port: int = Field(ge=1, le=65535)
    user_agent: str
    protocol_header: str
    protocol_version: str
    api_key_header: str


class TimeoutsSchema(_StrictBase):
    connect: float = Field(gt=0)
    total: float = Field(gt=0)


class ReplSchema(_StrictBase):
    prompt: str
    blank_line_threshold: int = Field(ge=1)
    reset_directive: str
    history_file: str


class ApplicationSchema(_StrictBase):
    name: str
    version: str
    description: str
    api: ApiSchema
    timeouts: TimeoutsSchema
    repl: ReplSchema


# =============================================================================
# logging.yaml
# =============================================================================


class ConsoleHandlerSchema(_StrictBase):
    enabled: bool


class FileHandlerSchema(_StrictBase):
    enabled: bool
    path: str
    max_bytes: int
    backup_count: int


class LoggingHandlersSchema(_StrictBase):
    console: ConsoleHandlerSchema
    file: FileHandlerSchema


class LoggingSchema(_StrictBase):
    level: str
    format: str
    handlers: LoggingHandlersSchema


# =============================================================================
# <app dir>/config.yaml (persisted credentials)
# =============================================================================


class CredentialFileSchema(_StrictBase):
    """Host to token mapping, stored under the ``api-keys`` key."""

    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    api_keys: dict[str, str] = Field(default_factory=dict, alias="api-keys")
