"""Kubeconfig context discovery.

Context names are read with a lightweight YAML parse first. Producers do
not all write the same document shape, so when that parse finds nothing
the kubeconfig is loaded again with the kubernetes client's own loader.
Names from the fallback loader are not guaranteed to follow file order.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path

import yaml
from kubernetes.config.config_exception import ConfigException
from kubernetes.config.kube_config import KubeConfigMerger

from kubectl_multi.utils.errors import (
    ConfigurationError,
    FilterNoMatchError,
    NoContextsError,
    ParseError,
)

logger = logging.getLogger(__name__)

KUBECONFIG_ENV = "KUBECONFIG"


@dataclass(frozen=True)
class KubeconfigSource:
    """A kubeconfig file and its raw text."""

    path: Path
    text: str


def locate_kubeconfig(explicit: str | None = None) -> Path:
    """Find the kubeconfig to read.

    Args:
        explicit: Path given on the command line or in settings.

    Returns:
        The explicit path if set, else $KUBECONFIG if set, else
        ~/.kube/config.

    Raises:
        ConfigurationError: If the home directory cannot be determined.
    """
    if explicit:
        return Path(explicit)

    env_path = os.environ.get(KUBECONFIG_ENV, "")
    if env_path:
        return Path(env_path)

    try:
        home = Path.home()
    except RuntimeError as e:
        raise ConfigurationError(f"could not determine kubeconfig path: {e}") from e
    return home / ".kube" / "config"


def parse_yaml_contexts(source: KubeconfigSource) -> list[str]:
    """Collect context names from the ``contexts`` list, in document order."""
    try:
        document = yaml.safe_load(source.text)
    except yaml.YAMLError as e:
        raise ParseError(f"failed to parse kubeconfig: {e}") from e

    if not isinstance(document, dict):
        return []
    entries = document.get("contexts")
    if not isinstance(entries, list):
        return []

    names = []
    for entry in entries:
        if not isinstance(entry, dict):
            continue
        name = entry.get("name")
        if isinstance(name, str) and name:
            names.append(name)
    return names


def load_client_contexts(source: KubeconfigSource) -> list[str]:
    """Enumerate context names with the kubernetes client config merger.

    The merger does not select an active context, so a kubeconfig without
    ``current-context`` or without contexts loads and yields no names.
    """
    # The merger rejects empty files; an empty kubeconfig simply has no contexts.
    if not source.text.strip():
        return []

    try:
        merger = KubeConfigMerger(str(source.path))
    except (ConfigException, yaml.YAMLError, OSError) as e:
        raise ParseError(f"failed to load kubeconfig: {e}") from e
    except (KeyError, TypeError, AttributeError) as e:
        raise ParseError(f"failed to load kubeconfig: malformed entry: {e}") from e

    if merger.config is None:
        raise ParseError(f"failed to load kubeconfig: no configuration found in {source.path}")

    names = []
    for node in merger.config.value.get("contexts") or []:
        entry = getattr(node, "value", node)
        name = entry.get("name") if isinstance(entry, dict) else None
        if isinstance(name, str) and name:
            names.append(name)
    return names


ParseStrategy = Callable[[KubeconfigSource], list[str]]

PARSE_STRATEGIES: list[tuple[str, ParseStrategy]] = [
    ("yaml", parse_yaml_contexts),
    ("kubernetes", load_client_contexts),
]


def discover_contexts(
    source: KubeconfigSource,
    strategies: list[tuple[str, ParseStrategy]] | None = None,
) -> list[str]:
    """Run parse strategies in order and return the first non-empty result.

    Raises:
        ParseError: If no strategy found names and at least one failed.
        NoContextsError: If every strategy succeeded but found nothing.
    """
    if strategies is None:
        strategies = PARSE_STRATEGIES

    reasons: list[str] = []
    for name, strategy in strategies:
        try:
            names = strategy(source)
        except ParseError as e:
            logger.debug(f"Parse strategy '{name}' failed: {e}")
            reasons.append(f"{name}: {e}")
            continue
        if names:
            logger.debug(f"Parse strategy '{name}' found {len(names)} context(s)")
            return names
        logger.debug(f"Parse strategy '{name}' found no contexts")

    if reasons:
        raise ParseError(f"could not read contexts from {source.path}", reasons)
    raise NoContextsError(str(source.path))


def filter_contexts(contexts: list[str], pattern: str) -> list[str]:
    """Keep contexts whose name contains ``pattern``, ignoring case."""
    if not pattern:
        return contexts
    pattern_lower = pattern.lower()
    return [ctx for ctx in contexts if pattern_lower in ctx.lower()]


def resolve_contexts(filter_pattern: str = "", kubeconfig: str | None = None) -> list[str]:
    """Resolve the contexts a command should run against.

    Args:
        filter_pattern: Optional case-insensitive substring filter.
        kubeconfig: Explicit kubeconfig path.

    Returns:
        Context names. Duplicates in the kubeconfig are kept.

    Raises:
        ConfigurationError: If the kubeconfig cannot be located or read.
        ParseError: If the kubeconfig cannot be parsed.
        NoContextsError: If the kubeconfig has no contexts.
        FilterNoMatchError: If the filter matches nothing.
    """
    path = locate_kubeconfig(kubeconfig)
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigurationError(f"failed to read kubeconfig {path}: {e}") from e

    contexts = discover_contexts(KubeconfigSource(path=path, text=text))

    if filter_pattern:
        contexts = filter_contexts(contexts, filter_pattern)
        if not contexts:
            raise FilterNoMatchError(filter_pattern)
        logger.debug(f"Filter '{filter_pattern}' kept {len(contexts)} context(s)")

    return contexts
