"""Data models shared by the resolver, runner and aggregator."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class OutputFormat(str, Enum):
    """Output representation requested through ``-o``/``--output``."""

    DEFAULT = "default"
    JSON = "json"
    YAML = "yaml"

    @classmethod
    def from_str(cls, value: str | None) -> OutputFormat:
        """Map an ``--output`` value to a format, case-insensitively.

        Anything other than ``json`` or ``yaml`` maps to DEFAULT.
        """
        if value is None:
            return cls.DEFAULT
        lowered = value.lower()
        if lowered == cls.JSON.value:
            return cls.JSON
        if lowered == cls.YAML.value:
            return cls.YAML
        return cls.DEFAULT


@dataclass(frozen=True)
class ContextResult:
    """Outcome of running the command against one context.

    On failure ``output`` holds whatever the process printed, which may be
    empty.
    """

    context: str
    output: str
    error: Exception | None = None

    @property
    def failed(self) -> bool:
        return self.error is not None


class MultiContextRequest(BaseModel):
    """One invocation: which command, which arguments, which contexts."""

    model_config = ConfigDict(frozen=True)

    command: str = Field(..., description="kubectl subcommand, e.g. 'get'")
    args: tuple[str, ...] = Field(default=(), description="Arguments forwarded to kubectl")
    filter_pattern: str = Field("", description="Case-insensitive context name filter")
    output_format: OutputFormat = Field(OutputFormat.DEFAULT, description="Requested format")


class ServerVersion(BaseModel):
    """Server version reported by one context, or a sentinel."""

    context: str
    version: str


class VersionReport(BaseModel):
    """Client-side versions (shared) plus per-context server versions."""

    client_version: str | None = None
    kustomize_version: str | None = None
    servers: list[ServerVersion] = Field(default_factory=list)
