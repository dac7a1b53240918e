"""Utility functions and helpers for kubectl-multi."""

from kubectl_multi.utils.errors import (
    CommandFailedError,
    ConfigurationError,
    DecodeError,
    EncodingError,
    FilterNoMatchError,
    KubectlMultiError,
    NoContextsError,
    ParseError,
)
from kubectl_multi.utils.table import Column, TableBuilder

__all__ = [
    # Errors
    "KubectlMultiError",
    "ConfigurationError",
    "ParseError",
    "NoContextsError",
    "FilterNoMatchError",
    "CommandFailedError",
    "DecodeError",
    "EncodingError",
    # Table layout
    "Column",
    "TableBuilder",
]
