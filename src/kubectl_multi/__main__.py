"""Entry point for kubectl-multi."""

import argparse
import logging
import sys
from typing import Any

from pydantic import ValidationError

from kubectl_multi import __version__
from kubectl_multi.config import KubectlMultiConfig, LogLevel
from kubectl_multi.contexts import resolve_contexts
from kubectl_multi.models import MultiContextRequest
from kubectl_multi.output import ResultAggregator, detect_output_format
from kubectl_multi.runner import ContextRunner
from kubectl_multi.utils.errors import EncodingError, KubectlMultiError

COMMANDS = {
    "get": "Run kubectl get against all contexts",
    "version": "Run kubectl version against all contexts",
}

# Global options that consume the following token.
VALUE_OPTIONS = {"--filter", "--kubeconfig", "--kubectl", "--timeout", "--log-level"}


def setup_logging(level: LogLevel) -> None:
    """Configure logging for the CLI."""
    logging.basicConfig(
        level=level.value,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[logging.StreamHandler(sys.stderr)],
    )


def build_parser() -> argparse.ArgumentParser:
    """Build the parser for options that precede the subcommand."""
    parser = argparse.ArgumentParser(
        prog="kubectl-multi",
        description="Run kubectl commands against all contexts in parallel",
        epilog="Arguments after the subcommand are passed to kubectl unchanged.",
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )

    # Context selection
    parser.add_argument(
        "--filter",
        default=None,
        help="Only use contexts whose name contains this substring (case-insensitive)",
    )
    parser.add_argument(
        "--kubeconfig",
        default=None,
        help="Path to kubeconfig file (default: $KUBECONFIG or ~/.kube/config)",
    )

    # Execution
    parser.add_argument(
        "--kubectl",
        default=None,
        help="kubectl binary to run (default: kubectl)",
    )
    parser.add_argument(
        "--timeout",
        type=float,
        default=None,
        help="Per-context timeout in seconds (default: none)",
    )

    # Logging
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default=None,
        help="Logging level (default: WARNING)",
    )

    parser.add_argument(
        "command",
        choices=list(COMMANDS),
        help="; ".join(f"{name}: {text}" for name, text in COMMANDS.items()),
    )

    return parser


def split_argv(argv: list[str]) -> tuple[list[str], list[str]]:
    """Split argv after the subcommand.

    Returns:
        The tokens up to and including the subcommand, and the tokens to
        forward to kubectl.
    """
    i = 0
    while i < len(argv):
        token = argv[i]
        if token in VALUE_OPTIONS:
            i += 2
            continue
        if token.startswith("-"):
            i += 1
            continue
        return argv[: i + 1], argv[i + 1 :]
    return argv, []


def parse_args(argv: list[str] | None = None) -> tuple[argparse.Namespace, list[str]]:
    """Parse command line arguments."""
    if argv is None:
        argv = sys.argv[1:]
    own, forwarded = split_argv(argv)
    return build_parser().parse_args(own), forwarded


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    args, forwarded = parse_args(argv)

    # Build config from args, falling back to environment/defaults
    config_kwargs: dict[str, Any] = {}

    if args.filter is not None:
        config_kwargs["filter_pattern"] = args.filter

    if args.kubeconfig:
        config_kwargs["kubeconfig_path"] = args.kubeconfig

    if args.kubectl:
        config_kwargs["kubectl_path"] = args.kubectl

    if args.timeout is not None:
        config_kwargs["timeout"] = args.timeout

    if args.log_level:
        config_kwargs["log_level"] = LogLevel(args.log_level)

    try:
        config = KubectlMultiConfig(**config_kwargs)
    except ValidationError as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        return 1

    setup_logging(config.log_level)

    logger = logging.getLogger(__name__)

    request = MultiContextRequest(
        command=args.command,
        args=tuple(forwarded),
        filter_pattern=config.filter_pattern,
        output_format=detect_output_format(forwarded),
    )

    try:
        contexts = resolve_contexts(request.filter_pattern, config.kubeconfig_path)
    except KubectlMultiError as e:
        logger.error(f"Error: {e}")
        return 1

    runner = ContextRunner(
        kubectl_path=config.kubectl_path,
        kubeconfig=config.kubeconfig_path,
        timeout=config.timeout,
    )
    results = runner.run(request.command, request.args, contexts)

    try:
        ResultAggregator().write(results, request.output_format, request.command)
    except EncodingError as e:
        logger.error(f"Error: {e}")
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
