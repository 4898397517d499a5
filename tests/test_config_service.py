from __future__ import annotations

import json
from pathlib import Path

import pytest

from xsh.config_service import DEFAULT_BIN_DIRS, DEFAULT_MODULE_ORDER, DEFAULT_RUNCOMS, ConfigService


def _service(tmp_path: Path, **environ: str) -> ConfigService:
    env = {"HOME": str(tmp_path / "home"), "XSH_DIR": str(tmp_path / "cfg")}
    env.update(environ)
    return ConfigService.from_env(env)


def test_config_dir_resolution(tmp_path: Path) -> None:
    assert ConfigService.from_env({"XSH_DIR": str(tmp_path)}).config_dir == tmp_path
    assert ConfigService.from_env({"XDG_CONFIG_HOME": str(tmp_path)}).config_dir == tmp_path / "xsh"


def test_defaults_without_config_file(tmp_path: Path) -> None:
    cfg = _service(tmp_path).load_app_config()
    assert cfg.root_dir == tmp_path / "home" / ".shell"
    assert cfg.module_order == DEFAULT_MODULE_ORDER
    assert cfg.bin_dirs == DEFAULT_BIN_DIRS
    assert cfg.default_runcoms == DEFAULT_RUNCOMS == "lib:env:interactive:login:comp"
    assert cfg.log_level == "INFO"
    assert cfg.shell is None
    assert (cfg.dry, cfg.force, cfg.dependencies) == (False, False, ())


def test_round_trip_and_file_values(tmp_path: Path) -> None:
    service = _service(tmp_path)
    payload = {
        "root_dir": str(tmp_path / "modules"),
        "module_order": ["core", "user-me"],
        "bin_dirs": ["/opt/bin"],
        "log_level": "warn",
        "shell": "bash",
    }
    # Lower case levels are not in the schema
    with pytest.raises(ValueError):
        service.save_config(payload)

    payload["log_level"] = "WARN"
    service.save_config(payload)
    assert json.loads(service.get_config_path().read_text(encoding="utf-8")) == payload

    cfg = service.load_app_config()
    assert cfg.root_dir == tmp_path / "modules"
    assert cfg.module_order == ("core", "user-me")
    assert cfg.bin_dirs == ("/opt/bin",)
    assert cfg.log_level == "WARN"
    assert cfg.shell == "bash"


def test_environment_overrides_file(tmp_path: Path) -> None:
    service = _service(
        tmp_path,
        XSH_ROOT_DIR=str(tmp_path / "envroot"),
        XSH_MODULE_ORDER="b, a,,c",
        APP_LOG_LEVEL="debug",
        APP_DRY="true",
        APP_FORCE="0",
        APP_DEPENDENCIES="git  column",
        XSHELL="zsh",
    )
    service.save_config({"root_dir": "/nowhere", "module_order": ["x"], "shell": "bash", "log_level": "ERR"})

    cfg = service.load_app_config()
    assert cfg.root_dir == tmp_path / "envroot"
    assert cfg.module_order == ("b", "a", "c")
    assert cfg.log_level == "DEBUG"
    assert cfg.dry is True
    assert cfg.force is False
    assert cfg.dependencies == ("git", "column")
    assert cfg.shell == "zsh"


def test_invalid_config_falls_back_to_defaults(tmp_path: Path, _isolated_logging) -> None:
    service = _service(tmp_path)
    path = service.get_config_path()
    path.parent.mkdir(parents=True)
    path.write_text(json.dumps({"module_order": "not-a-list"}), encoding="utf-8")

    assert service.load_config() == {}
    assert service.load_app_config().module_order == DEFAULT_MODULE_ORDER
    assert " WARN: Invalid configuration" in _isolated_logging.getvalue()


def test_unknown_key_is_rejected(tmp_path: Path) -> None:
    service = _service(tmp_path)
    path = service.get_config_path()
    path.parent.mkdir(parents=True)
    path.write_text(json.dumps({"modules": ["a"]}), encoding="utf-8")
    assert service.load_config() == {}


def test_unparsable_config_falls_back(tmp_path: Path, _isolated_logging) -> None:
    service = _service(tmp_path)
    path = service.get_config_path()
    path.parent.mkdir(parents=True)
    path.write_text("{not json", encoding="utf-8")

    assert service.load_config() == {}
    assert "Cannot parse" in _isolated_logging.getvalue()


def test_with_overrides_ignores_none(tmp_path: Path) -> None:
    cfg = _service(tmp_path).load_app_config()
    changed = cfg.with_overrides(log_level="TRACE", dry=None, force=True)
    assert (changed.log_level, changed.dry, changed.force) == ("TRACE", False, True)
