"""Output format detection from forwarded kubectl arguments."""

from collections.abc import Sequence

from kubectl_multi.models import OutputFormat

OUTPUT_FLAGS = ("-o", "--output")


def detect_output_format(args: Sequence[str]) -> OutputFormat:
    """Find the output format requested in a kubectl argument list.

    The first ``-o``/``--output`` flag followed by ``json`` or ``yaml``
    (any case) decides. Other values are skipped and scanning continues.
    """
    for i, arg in enumerate(args):
        if arg not in OUTPUT_FLAGS or i + 1 >= len(args):
            continue
        output_format = OutputFormat.from_str(args[i + 1])
        if output_format != OutputFormat.DEFAULT:
            return output_format
    return OutputFormat.DEFAULT
