from __future__ import annotations

import io
from pathlib import Path

import pytest

from xsh.logger import setup_logging

XSH_ENV_VARS = (
    "APP_LOG_LEVEL", "APP_DRY", "APP_FORCE", "APP_DEPENDENCIES",
    "XSHELL", "XSH_DIR", "XSH_ROOT_DIR", "XSH_MODULE_ORDER", "XDG_CONFIG_HOME",
)


@pytest.fixture(autouse=True)
def _isolated_logging():
    """Give every test a fresh handler so no stream outlives its capture."""
    stream = io.StringIO()
    setup_logging("INFO", stream)
    yield stream


@pytest.fixture
def xsh_env(tmp_path: Path, monkeypatch) -> Path:
    """Point xsh at an empty module root and config dir under ``tmp_path``."""
    for name in XSH_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    root = tmp_path / "root"
    root.mkdir()
    monkeypatch.setenv("HOME", str(tmp_path / "home"))
    monkeypatch.setenv("XSH_DIR", str(tmp_path / "config"))
    monkeypatch.setenv("XSH_ROOT_DIR", str(root))
    monkeypatch.setenv("XSHELL", "bash")
    return root


def write_file(path: Path, text: str = "") -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")
    return path
