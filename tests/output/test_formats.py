"""Tests for output format detection."""

import pytest

from kubectl_multi.models import OutputFormat
from kubectl_multi.output.formats import detect_output_format


class TestOutputFormatFromStr:
    """Tests for OutputFormat.from_str."""

    def test_known_values_case_insensitive(self) -> None:
        """Test json and yaml in any case."""
        assert OutputFormat.from_str("json") == OutputFormat.JSON
        assert OutputFormat.from_str("JSON") == OutputFormat.JSON
        assert OutputFormat.from_str("Yaml") == OutputFormat.YAML

    def test_other_values_default(self) -> None:
        """Test unknown values and None map to DEFAULT."""
        assert OutputFormat.from_str("wide") == OutputFormat.DEFAULT
        assert OutputFormat.from_str("") == OutputFormat.DEFAULT
        assert OutputFormat.from_str(None) == OutputFormat.DEFAULT


class TestDetectOutputFormat:
    """Tests for detect_output_format."""

    @pytest.mark.parametrize(
        "args,expected",
        [
            (["pods", "-o", "json"], OutputFormat.JSON),
            (["-o", "json", "pods", "-A"], OutputFormat.JSON),
            (["pods", "--output", "YAML"], OutputFormat.YAML),
            (["pods", "-o", "yaml"], OutputFormat.YAML),
            (["pods"], OutputFormat.DEFAULT),
            ([], OutputFormat.DEFAULT),
        ],
    )
    def test_detection(self, args: list[str], expected: OutputFormat) -> None:
        """Test flags anywhere in the argument list."""
        assert detect_output_format(args) == expected

    def test_unsupported_value_is_default(self) -> None:
        """Test other output formats fall back to DEFAULT."""
        assert detect_output_format(["pods", "-o", "wide"]) == OutputFormat.DEFAULT
        assert detect_output_format(["pods", "-o", "jsonpath={.items}"]) == OutputFormat.DEFAULT

    def test_flag_without_value(self) -> None:
        """Test a trailing flag yields DEFAULT."""
        assert detect_output_format(["pods", "-o"]) == OutputFormat.DEFAULT

    def test_scanning_continues_past_unknown_value(self) -> None:
        """Test a later recognised value is found after an unknown one."""
        assert detect_output_format(["-o", "wide", "--output", "json"]) == OutputFormat.JSON

    def test_first_recognised_value_wins(self) -> None:
        """Test the first json/yaml value decides."""
        assert detect_output_format(["-o", "yaml", "-o", "json"]) == OutputFormat.YAML

    def test_value_only_counts_after_flag(self) -> None:
        """Test a bare 'json' token is not a format request."""
        assert detect_output_format(["json", "yaml"]) == OutputFormat.DEFAULT
