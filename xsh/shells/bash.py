"""Bash support: sourcing code and file listings.

``gen_code`` renders a script meant to be evaluated by an interactive
bash (``eval "$(xsh gen)"``).  The script prepends the configured bin
directories to ``PATH``, then sources each resolved file from inside
its module directory.  A file that fails to load prints a warning on
standard error and the remaining files are still sourced.  The working
directory is restored at the end.
"""

from __future__ import annotations

import shlex
from dataclasses import dataclass
from typing import List, Sequence

from ..dispatcher import ShellDispatcher
from ..walker import ModuleWalker

SHELL_NAME = "bash"


@dataclass
class BashShell:
    """Code generator for bash."""

    walker: ModuleWalker
    bin_dirs: Sequence[str]

    def path_prologue(self) -> List[str]:
        bin_dirs = ":".join(self.bin_dirs)
        return [
            "# Update PATH",
            f'export PATH="{bin_dirs}:$PATH"',
            "",
        ]

    def gen_code(self, runcoms: str) -> str:
        lines = self.path_prologue()
        lines.append("_OLD_PWD=$PWD")
        for entry in self.walker.walk(runcoms):
            module_dir = shlex.quote(str(entry.module_dir))
            target = shlex.quote(str(entry.path))
            warning = shlex.quote(f"WARN: While loading: {entry.path}")
            lines.extend([
                f"# Load: {entry.module_name}/{entry.runcom}",
                f"cd {module_dir} && . {target} || {{",
                f"  >&2 echo {warning}",
                "}",
            ])
        lines.append('cd "$_OLD_PWD"; unset _OLD_PWD')
        return "\n".join(lines)

    def lookup_files(self, runcoms: str) -> str:
        return "\n".join(
            "\t".join([str(entry.path), entry.module_name, entry.runcom, entry.layout.value])
            for entry in self.walker.walk(runcoms)
        )

    def register(self, dispatcher: ShellDispatcher) -> None:
        dispatcher.register(SHELL_NAME, "gen_code", self.gen_code)
        dispatcher.register(SHELL_NAME, "lookup_files", self.lookup_files)
