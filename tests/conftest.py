"""Shared fixtures."""

from pathlib import Path

import pytest


@pytest.fixture(autouse=True)
def isolated_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """No user settings file and no VMPROV_* overrides leak into tests."""
    monkeypatch.setenv("HOME", str(tmp_path / "home"))
    for name in ("VMPROV_MIRROR_DIR", "VMPROV_TRANSPORT", "VMPROV_PORT",
                 "VMPROV_CONNECT_TIMEOUT", "SUDO_PASS"):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def mirror(tmp_path: Path) -> Path:
    repo = tmp_path / "janus-local"
    (repo / ".git").mkdir(parents=True)
    return repo
