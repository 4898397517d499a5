"""Configuration management for xsh.

This module centralises all logic related to finding and loading
settings.  Values come from three layers, later layers winning:

1. Built-in defaults (see :class:`AppConfig`).
2. A JSON file called ``config.json`` in the xsh configuration
   directory.
3. Environment variables (``APP_LOG_LEVEL``, ``APP_DRY``,
   ``APP_FORCE``, ``APP_DEPENDENCIES``, ``XSHELL``, ``XSH_ROOT_DIR``,
   ``XSH_MODULE_ORDER``).

Command line flags are applied on top by :mod:`xsh.cli`.

The configuration directory is ``$XSH_DIR`` when set, otherwise
``$XDG_CONFIG_HOME/xsh`` or ``~/.config/xsh``.  The file is validated
with ``jsonschema`` against the schema shipped in
``xsh/schemas/config.schema.json``; an invalid file is reported and
ignored so that a typo never prevents a shell from starting.

Example usage::

    from xsh.config_service import ConfigService

    config_service = ConfigService.from_env()
    cfg = config_service.load_config()
    cfg["module_order"] = ["xsh", "user-me"]
    config_service.save_config(cfg)
"""

from __future__ import annotations

import json
import os
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Tuple

import jsonschema

from .logger import DEFAULT_LOG_LEVEL, log

SCHEMA_DIR = Path(__file__).resolve().parent / "schemas"

DEFAULT_MODULE_ORDER = ("xsh", "shcfg-bash", "user-jez", "app-mise", "app-direnv")
DEFAULT_RUNCOMS = "lib:env:interactive:login:comp"
# Kept literal: the generated code lets the shell expand $HOME
DEFAULT_BIN_DIRS = ("$HOME/.local/scripts", "$HOME/.local/bin", "$HOME/bin")


def _get_config_root(environ: Mapping[str, str], app_name: str = "xsh") -> Path:
    """Return the directory holding ``config.json``."""
    xsh_dir = environ.get("XSH_DIR")
    if xsh_dir:
        return Path(xsh_dir).expanduser()
    xdg = environ.get("XDG_CONFIG_HOME")
    if xdg:
        return Path(xdg) / app_name
    return Path.home() / ".config" / app_name


def _load_json(file_path: Path) -> Any:
    if not file_path.exists():
        return None
    with file_path.open("r", encoding="utf-8") as f:
        return json.load(f)


def _save_json(data: Any, file_path: Path) -> None:
    file_path.parent.mkdir(parents=True, exist_ok=True)
    with file_path.open("w", encoding="utf-8") as f:
        json.dump(data, f, indent=2)


def _validate_json(data: Any, schema_path: Path) -> None:
    """Validate JSON against a schema, raising ``ValueError`` on mismatch."""
    schema = _load_json(schema_path)
    if not schema:
        return
    try:
        jsonschema.validate(instance=data, schema=schema)
    except jsonschema.ValidationError as exc:
        raise ValueError(f"Invalid configuration: {exc.message}")


def _env_flag(value: Optional[str], default: bool) -> bool:
    if value is None or value == "":
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


def _split(value: str, sep: Optional[str]) -> Tuple[str, ...]:
    return tuple(item.strip() for item in value.split(sep) if item.strip())


@dataclass(frozen=True)
class AppConfig:
    """Settings shared by the command line and the resolution engine."""

    root_dir: Path
    module_order: Tuple[str, ...] = DEFAULT_MODULE_ORDER
    bin_dirs: Tuple[str, ...] = DEFAULT_BIN_DIRS
    default_runcoms: str = DEFAULT_RUNCOMS
    shell: Optional[str] = None
    log_level: str = DEFAULT_LOG_LEVEL
    dry: bool = False
    force: bool = False
    dependencies: Tuple[str, ...] = ()

    def with_overrides(self, **changes: Any) -> "AppConfig":
        """Return a copy with every non-``None`` keyword applied."""
        return replace(self, **{k: v for k, v in changes.items() if v is not None})


@dataclass
class ConfigService:
    """Resolve and manage xsh configuration."""

    config_dir: Path
    environ: Mapping[str, str] = field(default_factory=lambda: dict(os.environ))
    config_filename: str = "config.json"
    schema_name: str = "config.schema.json"

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "ConfigService":
        env = dict(os.environ) if environ is None else dict(environ)
        return cls(config_dir=_get_config_root(env), environ=env)

    def get_config_path(self) -> Path:
        return self.config_dir / self.config_filename

    def get_schema_path(self) -> Path:
        return SCHEMA_DIR / self.schema_name

    def load_config(self) -> Dict[str, Any]:
        """Load ``config.json`` from the resolved path, validating against schema.

        A missing file yields an empty dict.  An unreadable or invalid
        file is reported with a warning and also yields an empty dict.
        """
        cfg_path = self.get_config_path()
        try:
            data = _load_json(cfg_path)
        except json.JSONDecodeError as exc:
            log("WARN", "Cannot parse %s: %s. Falling back to defaults.", cfg_path, exc)
            return {}
        if data is None:
            return {}
        try:
            _validate_json(data, self.get_schema_path())
        except ValueError as exc:
            log("WARN", "%s (%s). Falling back to defaults.", exc, cfg_path)
            return {}
        return data

    def save_config(self, config: Dict[str, Any]) -> None:
        """Write configuration to disk, validating against the schema first."""
        _validate_json(config, self.get_schema_path())
        _save_json(config, self.get_config_path())

    def _home(self) -> Path:
        home = self.environ.get("HOME")
        return Path(home) if home else Path.home()

    def load_app_config(self) -> AppConfig:
        """Merge defaults, ``config.json`` and the environment into an :class:`AppConfig`."""
        file_cfg = self.load_config()
        env = self.environ

        root_dir = Path(file_cfg["root_dir"]).expanduser() if "root_dir" in file_cfg else self._home() / ".shell"
        if env.get("XSH_ROOT_DIR"):
            root_dir = Path(env["XSH_ROOT_DIR"]).expanduser()

        module_order: Tuple[str, ...] = tuple(file_cfg.get("module_order", DEFAULT_MODULE_ORDER))
        if env.get("XSH_MODULE_ORDER"):
            module_order = _split(env["XSH_MODULE_ORDER"], ",")

        dependencies: Tuple[str, ...] = tuple(file_cfg.get("dependencies", ()))
        if env.get("APP_DEPENDENCIES"):
            dependencies = _split(env["APP_DEPENDENCIES"], None)

        return AppConfig(
            root_dir=root_dir,
            module_order=module_order,
            bin_dirs=tuple(file_cfg.get("bin_dirs", DEFAULT_BIN_DIRS)),
            default_runcoms=file_cfg.get("default_runcoms", DEFAULT_RUNCOMS),
            shell=env.get("XSHELL") or file_cfg.get("shell"),
            log_level=(env.get("APP_LOG_LEVEL") or file_cfg.get("log_level") or DEFAULT_LOG_LEVEL).upper(),
            dry=_env_flag(env.get("APP_DRY"), False),
            force=_env_flag(env.get("APP_FORCE"), False),
            dependencies=dependencies,
        )
