"""Aggregation of per-context kubectl results into one view.

Three strategies are available:

* default: one table, the shared header printed once, every row prefixed
  with its context;
* version: client versions printed once, server versions per context;
* structured: JSON/YAML payloads tagged with their context and merged into
  a single ``List``.

Per-context failures never abort a render. They are written to the
diagnostic stream and left out of (or best-effort included in) the
primary output.
"""

from __future__ import annotations

import logging
import sys
from collections.abc import Sequence
from typing import Any, TextIO

from kubectl_multi.models import ContextResult, OutputFormat, ServerVersion, VersionReport
from kubectl_multi.output.document import decode, encode, list_envelope, tag_records
from kubectl_multi.utils.errors import DecodeError
from kubectl_multi.utils.table import Column, TableBuilder

logger = logging.getLogger(__name__)

VERSION_COMMAND = "version"

CONTEXT_HEADER = "CONTEXT"
SERVER_VERSION_HEADER = "SERVER VERSION"

CLIENT_VERSION_LABEL = "Client Version:"
KUSTOMIZE_VERSION_LABEL = "Kustomize Version:"
SERVER_VERSION_LABEL = "Server Version:"

ERROR_SENTINEL = "ERROR"
MISSING_SENTINEL = "N/A"


def _label_value(line: str, label: str) -> str | None:
    """Return the value after ``label`` if the trimmed line starts with it."""
    line = line.strip()
    if line.startswith(label):
        return line[len(label) :].strip()
    return None


class ResultAggregator:
    """Renders a completed, ordered set of context results.

    Args:
        diagnostics: Stream for per-context error lines. Defaults to
            ``sys.stderr`` at write time.
    """

    def __init__(self, diagnostics: TextIO | None = None) -> None:
        self._diagnostics = diagnostics

    def _diag(self, message: str) -> None:
        stream = self._diagnostics if self._diagnostics is not None else sys.stderr
        print(message, file=stream)

    def _report_failure(self, result: ContextResult) -> None:
        self._diag(f"Context {result.context}: Error: {result.error}")
        if result.output:
            self._diag(f"Output: {result.output}")

    def render(
        self,
        results: Sequence[ContextResult],
        output_format: OutputFormat,
        command: str,
    ) -> str:
        """Pick a strategy for the format and command and render the results.

        Raises:
            EncodingError: If the merged JSON/YAML document cannot be
                serialized.
        """
        if output_format in (OutputFormat.JSON, OutputFormat.YAML):
            return self.render_structured(results, output_format)
        if command == VERSION_COMMAND:
            return self.render_version(results)
        return self.render_default(results)

    def write(
        self,
        results: Sequence[ContextResult],
        output_format: OutputFormat,
        command: str,
        stream: TextIO | None = None,
    ) -> None:
        """Render and print to ``stream`` (stdout by default)."""
        text = self.render(results, output_format, command)
        if text:
            print(text, file=stream if stream is not None else sys.stdout)

    def render_default(self, results: Sequence[ContextResult]) -> str:
        """Merge tabular output under a single header."""
        context_width = len(CONTEXT_HEADER)
        outputs: list[tuple[str, list[str]]] = []
        failures: list[ContextResult] = []

        for result in results:
            if result.failed:
                context_width = max(context_width, len(result.context))
                failures.append(result)
                continue
            output = result.output.strip()
            if not output:
                continue
            context_width = max(context_width, len(result.context))
            outputs.append((result.context, output.split("\n")))

        header = next((lines[0] for _, lines in outputs if len(lines) > 1), None)

        table = TableBuilder(
            [
                Column(CONTEXT_HEADER, min_width=context_width),
                Column(header or ""),
            ]
        )
        for context, lines in outputs:
            start = 1 if header is not None and len(lines) > 1 else 0
            for line in lines[start:]:
                line = line.strip()
                if line:
                    table.add_row(context, line)

        for result in failures:
            self._report_failure(result)

        return "\n".join(table.render(show_header=header is not None))

    def collect_versions(self, results: Sequence[ContextResult]) -> VersionReport:
        """Extract client and per-context server versions."""
        report = VersionReport()

        for result in results:
            if report.client_version is not None and report.kustomize_version is not None:
                break
            if result.failed:
                continue
            for line in result.output.split("\n"):
                if report.client_version is None:
                    report.client_version = _label_value(line, CLIENT_VERSION_LABEL)
                if report.kustomize_version is None:
                    report.kustomize_version = _label_value(line, KUSTOMIZE_VERSION_LABEL)
                if report.client_version is not None and report.kustomize_version is not None:
                    break

        for result in results:
            if result.failed:
                version = ERROR_SENTINEL
            else:
                version = MISSING_SENTINEL
                for line in result.output.split("\n"):
                    value = _label_value(line, SERVER_VERSION_LABEL)
                    if value is not None:
                        version = value
                        break
            report.servers.append(ServerVersion(context=result.context, version=version))

        return report

    def render_version(self, results: Sequence[ContextResult]) -> str:
        """Client versions once, then a table of server versions."""
        report = self.collect_versions(results)
        for result in results:
            if result.failed:
                self._report_failure(result)

        lines = []
        if report.client_version is not None:
            lines.append(f"{CLIENT_VERSION_LABEL} {report.client_version}")
        if report.kustomize_version is not None:
            lines.append(f"{KUSTOMIZE_VERSION_LABEL} {report.kustomize_version}")
        if lines:
            lines.append("")

        table = TableBuilder([Column(CONTEXT_HEADER), Column(SERVER_VERSION_HEADER)], rule=True)
        for server in report.servers:
            table.add_row(server.context, server.version)
        lines.extend(table.render())

        return "\n".join(lines)

    def render_structured(
        self,
        results: Sequence[ContextResult],
        output_format: OutputFormat,
    ) -> str:
        """Tag every record with its context and merge into one List.

        Raises:
            EncodingError: If the merged document cannot be serialized.
        """
        items: list[dict[str, Any]] = []

        for result in results:
            if result.failed:
                self._report_failure(result)
                if not result.output:
                    continue
                try:
                    document = decode(result.output, output_format)
                except DecodeError as e:
                    logger.debug(f"Error output from context {result.context} not decodable: {e}")
                    continue
                items.extend(tag_records(document, result.context, error=str(result.error)))
                continue

            try:
                document = decode(result.output, output_format)
            except DecodeError as e:
                self._diag(f"Context {result.context}: Failed to parse {e.format_name}: {e}")
                continue
            items.extend(tag_records(document, result.context))

        logger.debug(f"Merged {len(items)} record(s) from {len(results)} context(s)")
        return encode(list_envelope(items), output_format).rstrip("\n")
