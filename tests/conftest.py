"""Shared pytest fixtures for kubectl-multi tests."""

from collections.abc import Callable
from pathlib import Path

import pytest
import yaml


@pytest.fixture
def kubeconfig_data() -> dict:
    """Sample kubeconfig with three contexts."""
    return {
        "apiVersion": "v1",
        "kind": "Config",
        "current-context": "dev-east",
        "clusters": [
            {"name": "east", "cluster": {"server": "https://east.example.com"}},
            {"name": "west", "cluster": {"server": "https://west.example.com"}},
        ],
        "users": [{"name": "admin", "user": {"token": "abc"}}],
        "contexts": [
            {"name": "dev-east", "context": {"cluster": "east", "user": "admin"}},
            {"name": "PROD-west", "context": {"cluster": "west", "user": "admin"}},
            {"name": "staging-east", "context": {"cluster": "east", "user": "admin"}},
        ],
    }


@pytest.fixture
def write_kubeconfig(tmp_path: Path) -> Callable[[object], Path]:
    """Write a kubeconfig (dict or raw text) and return its path."""

    def _write(content: object) -> Path:
        path = tmp_path / "config"
        if isinstance(content, str):
            path.write_text(content)
        else:
            path.write_text(yaml.safe_dump(content))
        return path

    return _write


@pytest.fixture
def kubeconfig_env(
    monkeypatch: pytest.MonkeyPatch,
    write_kubeconfig: Callable[[object], Path],
    kubeconfig_data: dict,
) -> Path:
    """Point $KUBECONFIG at the sample kubeconfig."""
    path = write_kubeconfig(kubeconfig_data)
    monkeypatch.setenv("KUBECONFIG", str(path))
    return path

