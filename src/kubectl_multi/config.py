"""Configuration for kubectl-multi."""

from __future__ import annotations

from enum import Enum

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class LogLevel(str, Enum):
    """Logging level."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"


class KubectlMultiConfig(BaseSettings):
    """Configuration for a kubectl-multi run.

    Loaded from environment variables with KUBECTL_MULTI_ prefix
    or from a .env file. Command line flags take precedence.
    """

    model_config = SettingsConfigDict(
        env_prefix="KUBECTL_MULTI_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    kubeconfig_path: str | None = Field(
        default=None,
        description="Kubeconfig path; overrides KUBECONFIG when set",
    )
    filter_pattern: str = Field(
        default="",
        description="Only target contexts whose name contains this substring",
    )
    kubectl_path: str = Field(
        default="kubectl",
        description="kubectl binary to invoke for each context",
    )
    timeout: float | None = Field(
        default=None,
        gt=0,
        description="Per-context timeout in seconds (default: none)",
    )
    log_level: LogLevel = Field(
        default=LogLevel.WARNING,
        description="Logging level",
    )
