"""Tests for structured document decoding, tagging and encoding."""

import pytest

from kubectl_multi.models import OutputFormat
from kubectl_multi.output.document import decode, encode, list_envelope, tag_records
from kubectl_multi.utils.errors import DecodeError, EncodingError


class TestDecode:
    """Tests for decode."""

    def test_json_object(self) -> None:
        """Test a JSON object decodes to a dict."""
        assert decode('{"kind": "Pod"}', OutputFormat.JSON) == {"kind": "Pod"}

    def test_yaml_mapping(self) -> None:
        """Test a YAML mapping decodes to a dict."""
        assert decode("kind: Pod\nspec: {}\n", OutputFormat.YAML) == {"kind": "Pod", "spec": {}}

    @pytest.mark.parametrize("text", ["[]", '"text"', "null", "3"])
    def test_json_non_object(self, text: str) -> None:
        """Test non-object JSON documents are rejected."""
        with pytest.raises(DecodeError) as exc_info:
            decode(text, OutputFormat.JSON)
        assert exc_info.value.format_name == "JSON"
        assert "expected an object" in str(exc_info.value)

    def test_empty_yaml(self) -> None:
        """Test an empty YAML document is rejected."""
        with pytest.raises(DecodeError) as exc_info:
            decode("", OutputFormat.YAML)
        assert "got null" in str(exc_info.value)

    def test_yaml_timestamps_stay_strings(self) -> None:
        """Test unquoted YAML timestamps are not converted to datetimes."""
        document = decode("ts: 2024-01-01T00:00:00Z\nday: 2024-01-01\n", OutputFormat.YAML)
        assert document == {"ts": "2024-01-01T00:00:00Z", "day": "2024-01-01"}

    def test_invalid_json(self) -> None:
        """Test syntax errors become DecodeError."""
        with pytest.raises(DecodeError) as exc_info:
            decode("{not json", OutputFormat.JSON)
        assert exc_info.value.format_name == "JSON"


class TestTagRecords:
    """Tests for provenance tagging."""

    def test_list_items(self) -> None:
        """Test each item of a list is tagged under metadata."""
        document = {"items": [{"metadata": {"name": "a"}}, {"spec": {}}]}
        assert tag_records(document, "ctx") == [
            {"metadata": {"name": "a", "context": "ctx"}},
            {"spec": {}, "metadata": {"context": "ctx"}},
        ]

    def test_empty_list(self) -> None:
        """Test an empty items list contributes no records."""
        assert tag_records({"kind": "List", "items": []}, "ctx") == []

    def test_single_record_without_metadata(self) -> None:
        """Test a single record without metadata gets a top-level context."""
        assert tag_records({"x": 1}, "ctx") == [{"x": 1, "context": "ctx"}]

    def test_single_record_with_non_mapping_metadata(self) -> None:
        """Test metadata that is not a mapping is left alone."""
        assert tag_records({"metadata": None}, "ctx") == [{"metadata": None, "context": "ctx"}]

    def test_error_attached_to_single_record(self) -> None:
        """Test the error text is attached to single records."""
        records = tag_records({"kind": "Status"}, "ctx", error="exit status 1")
        assert records == [{"kind": "Status", "context": "ctx", "error": "exit status 1"}]

    def test_error_not_attached_to_items(self) -> None:
        """Test list items are not given an error field."""
        records = tag_records({"items": [{}]}, "ctx", error="exit status 1")
        assert records == [{"metadata": {"context": "ctx"}}]


class TestEncode:
    """Tests for encode and list_envelope."""

    def test_envelope(self) -> None:
        """Test the List envelope shape."""
        assert list_envelope([{"a": 1}]) == {"apiVersion": "v1", "kind": "List", "items": [{"a": 1}]}

    def test_json_indented(self) -> None:
        """Test JSON is indented by two spaces."""
        assert encode({"a": [1]}, OutputFormat.JSON) == '{\n  "a": [\n    1\n  ]\n}'

    def test_yaml_block_style(self) -> None:
        """Test YAML keeps insertion order in block style."""
        assert encode({"b": {"c": 1}, "a": [1]}, OutputFormat.YAML) == "b:\n  c: 1\na:\n- 1\n"

    def test_unencodable(self) -> None:
        """Test serialization failures raise EncodingError."""
        with pytest.raises(EncodingError):
            encode({"bad": object()}, OutputFormat.YAML)
        with pytest.raises(EncodingError):
            encode({"bad": {1, 2}}, OutputFormat.JSON)
