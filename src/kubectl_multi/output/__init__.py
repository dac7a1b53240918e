"""Merging per-context kubectl output into a single view."""

from kubectl_multi.output.aggregator import ResultAggregator
from kubectl_multi.output.formats import detect_output_format

__all__ = [
    "ResultAggregator",
    "detect_output_format",
]
