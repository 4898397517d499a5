"""System facts used to pick defaults.

The only fact the resolution engine depends on is the current shell,
which becomes the default ``SHELL`` argument of ``gen`` and ``files``.
The rest is informational and printed by ``xsh facts``.
"""

from __future__ import annotations

import getpass
import os
import platform
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Dict, List, Mapping, Optional

try:
    import grp
except ImportError:  # pragma: no cover - not available on Windows
    grp = None

SUDO_GROUPS = {"wheel", "sudo", "admin"}
KNOWN_SHELLS = {"sh", "bash", "zsh", "dash", "ksh", "mksh", "fish", "tcsh", "csh", "xonsh", "elvish"}


def _proc_comm(pid: int) -> Optional[str]:
    comm = Path(f"/proc/{pid}/comm")
    try:
        return comm.read_text(encoding="utf-8").strip() or None
    except OSError:
        return None


def detect_shell(environ: Optional[Mapping[str, str]] = None, ppid: Optional[int] = None) -> str:
    """Return the name of the shell xsh is running under.

    ``XSHELL`` wins, then the parent process name when it is a known
    shell (not ``make``, ``sudo`` or an editor), then ``$SHELL``.
    Login shells report themselves as ``-bash``; the dash is dropped.
    """
    env = os.environ if environ is None else environ
    if env.get("XSHELL"):
        return env["XSHELL"]
    name = (_proc_comm(os.getppid() if ppid is None else ppid) or "").lstrip("-")
    if name in KNOWN_SHELLS:
        return name
    shell = env.get("SHELL", "")
    if shell:
        return shell.rsplit("/", 1)[-1].lstrip("-")
    return "sh"


def _os_release() -> Dict[str, str]:
    try:
        return platform.freedesktop_os_release()
    except OSError:
        return {}


def _group_names() -> List[str]:
    if grp is None:
        return []
    names = []
    for gid in os.getgroups():
        try:
            names.append(grp.getgrgid(gid).gr_name)
        except KeyError:
            continue
    return names


def _account_type(uid: int) -> str:
    if uid == 0:
        return "root"
    if uid >= 1000:
        return "user"
    return "service"


@dataclass(frozen=True)
class Facts:
    platform: str
    os_name: str
    os_version: str
    arch: str
    shell: str
    username: str
    user_id: int
    hostname: str
    groups: str
    user_account: str
    user_sudo: bool

    @classmethod
    def collect(cls, environ: Optional[Mapping[str, str]] = None) -> "Facts":
        env = os.environ if environ is None else environ
        system = platform.system()
        os_name, os_version = system.lower(), platform.release()
        if system == "Darwin":
            os_name, os_version = "macos", platform.mac_ver()[0]
        elif system == "Linux":
            release = _os_release()
            os_name = release.get("ID", "linux")
            os_version = release.get("VERSION_ID", "")
        elif system == "Windows":
            os_name = "windows"

        uid = os.getuid() if hasattr(os, "getuid") else -1
        groups = _group_names()
        return cls(
            platform=system,
            os_name=os_name,
            os_version=os_version,
            arch=platform.machine(),
            shell=detect_shell(env),
            username=env.get("USER") or getpass.getuser(),
            user_id=uid,
            hostname=platform.node(),
            groups=",".join(groups),
            user_account=_account_type(uid),
            user_sudo=bool(SUDO_GROUPS.intersection(groups)),
        )

    def as_lines(self) -> List[str]:
        """Render as ``FACT_NAME=value`` lines."""
        lines = []
        for key, value in asdict(self).items():
            if isinstance(value, bool):
                value = "true" if value else "false"
            lines.append(f"FACT_{key.upper()}={value}")
        return lines
