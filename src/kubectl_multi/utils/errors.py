"""Error types for kubectl-multi.

Resolution errors abort a run before any kubectl process is started.
Per-context errors (``CommandFailedError``, ``DecodeError``) are contained
by the aggregator and only ever reported as diagnostics.
"""


class KubectlMultiError(Exception):
    """Base class for all kubectl-multi errors."""

    pass


class ConfigurationError(KubectlMultiError):
    """The kubeconfig location cannot be determined or read."""

    pass


class ParseError(KubectlMultiError):
    """No parse strategy could load the kubeconfig."""

    def __init__(self, message: str, reasons: list[str] | None = None) -> None:
        self.reasons = reasons or []
        if self.reasons:
            message = f"{message}: {'; '.join(self.reasons)}"
        super().__init__(message)


class NoContextsError(KubectlMultiError):
    """The kubeconfig parsed but contains no contexts."""

    def __init__(self, path: str) -> None:
        self.path = path
        super().__init__(f"no contexts found in kubeconfig {path}")


class FilterNoMatchError(KubectlMultiError):
    """The filter pattern eliminated every context."""

    def __init__(self, pattern: str) -> None:
        self.pattern = pattern
        super().__init__(f"no contexts match filter pattern: {pattern}")


class CommandFailedError(KubectlMultiError):
    """kubectl failed for a single context."""

    pass


class DecodeError(KubectlMultiError):
    """A context's payload is not a valid document of the requested format."""

    def __init__(self, format_name: str, reason: str) -> None:
        self.format_name = format_name
        self.reason = reason
        super().__init__(reason)


class EncodingError(KubectlMultiError):
    """The merged document could not be serialized."""

    pass
