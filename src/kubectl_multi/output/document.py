"""Structured documents decoded from kubectl JSON/YAML output.

A document is the union of mappings, sequences and scalars produced by
``json.loads`` or a safe YAML loader. Records are tagged with the context
they came from and merged into one ``List`` envelope.
"""

from __future__ import annotations

import json
import logging
from typing import Any, Union

import yaml

from kubectl_multi.models import OutputFormat
from kubectl_multi.utils.errors import DecodeError, EncodingError

logger = logging.getLogger(__name__)

Scalar = Union[str, int, float, bool, None]
Document = Union[dict[str, "Document"], list["Document"], Scalar]

LIST_API_VERSION = "v1"
LIST_KIND = "List"

TIMESTAMP_TAG = "tag:yaml.org,2002:timestamp"


class DocumentLoader(yaml.SafeLoader):
    """SafeLoader that keeps timestamps as the strings kubectl printed."""


DocumentLoader.yaml_implicit_resolvers = {
    first: [(tag, regexp) for tag, regexp in resolvers if tag != TIMESTAMP_TAG]
    for first, resolvers in yaml.SafeLoader.yaml_implicit_resolvers.items()
}


def decode(text: str, output_format: OutputFormat) -> dict[str, Document]:
    """Decode kubectl output into a mapping.

    Raises:
        DecodeError: If the text does not parse, or its top level is not
            a mapping.
    """
    format_name = output_format.value.upper()
    try:
        if output_format == OutputFormat.JSON:
            document = json.loads(text)
        elif output_format == OutputFormat.YAML:
            document = yaml.load(text, Loader=DocumentLoader)
        else:
            raise ValueError(f"unsupported format: {output_format.value}")
    except (json.JSONDecodeError, yaml.YAMLError) as e:
        raise DecodeError(format_name, str(e)) from e

    if not isinstance(document, dict):
        raise DecodeError(
            format_name,
            f"expected an object at the top level, got {_kind_of(document)}",
        )
    return document


def encode(document: Document, output_format: OutputFormat) -> str:
    """Encode a document; JSON is indented, YAML uses block style.

    Raises:
        EncodingError: If the document cannot be serialized.
    """
    try:
        if output_format == OutputFormat.JSON:
            return json.dumps(document, indent=2)
        if output_format == OutputFormat.YAML:
            return yaml.safe_dump(document, default_flow_style=False, sort_keys=False)
    except (TypeError, ValueError, yaml.YAMLError) as e:
        raise EncodingError(f"failed to marshal {output_format.value.upper()}: {e}") from e
    raise EncodingError(f"unsupported format: {output_format.value}")


def _kind_of(value: Document) -> str:
    if isinstance(value, dict):
        return "object"
    if isinstance(value, list):
        return "array"
    if value is None:
        return "null"
    return type(value).__name__


def _set_context(record: dict[str, Document], context: str) -> None:
    """Record provenance under ``metadata``, synthesizing it if needed."""
    metadata = record.get("metadata")
    if isinstance(metadata, dict):
        metadata["context"] = context
    else:
        record["metadata"] = {"context": context}


def tag_records(
    document: dict[str, Document],
    context: str,
    error: str | None = None,
) -> list[dict[str, Document]]:
    """Split a decoded document into records tagged with ``context``.

    A document with an ``items`` list yields one record per mapping item,
    each with ``metadata.context`` set. Any other document is a single
    record: ``metadata.context`` when it has a metadata mapping, otherwise
    a top-level ``context`` key. ``error`` is attached to single records
    only.
    """
    items = document.get("items")
    if isinstance(items, list):
        records = []
        for item in items:
            if not isinstance(item, dict):
                logger.debug(f"Dropping {_kind_of(item)} item from context {context}")
                continue
            _set_context(item, context)
            records.append(item)
        return records

    metadata = document.get("metadata")
    if isinstance(metadata, dict):
        metadata["context"] = context
    else:
        document["context"] = context
    if error is not None:
        document["error"] = error
    return [document]


def list_envelope(items: list[dict[str, Any]]) -> dict[str, Any]:
    """Wrap records in a ``v1`` ``List``."""
    return {
        "apiVersion": LIST_API_VERSION,
        "kind": LIST_KIND,
        "items": items,
    }
