"""Module tree walker.

The walker visits every module of the configured order for each
requested runcom and asks :mod:`xsh.resolver` for the file to source.
A module either keeps its runcom files directly in its directory
(``simple`` layout) or nests them under a ``.shell`` subdirectory
(``embedded`` layout, typical for a project that ships its own shell
integration).  Which one applies is decided by looking at the disk on
every walk; nothing is cached between calls.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Iterable, Iterator, List, Sequence

from . import resolver
from .logger import log

logger = logging.getLogger("xsh.walker")

EMBEDDED_DIRNAME = ".shell"
RUNCOM_SEPARATOR = ":"


class ModuleLayout(str, Enum):
    """Where a module keeps its runcom files."""
    SIMPLE = "simple"
    EMBEDDED = "embedded"


@dataclass(frozen=True)
class ResolvedEntry:
    """One file chosen for a (module, runcom) pair.

    Attributes:
        module_dir: Root directory of the module.
        relative_path: File path relative to ``module_dir``; includes the
            ``.shell/`` segment for embedded modules.
        module_name: Name of the module as listed in the module order.
        runcom: Runcom the file was resolved for.
        layout: Layout detected for the module.
    """
    module_dir: Path
    relative_path: Path
    module_name: str
    runcom: str
    layout: ModuleLayout

    @property
    def path(self) -> Path:
        return self.module_dir / self.relative_path


def split_runcoms(runcoms: str) -> List[str]:
    """Split a ``lib:env:login`` request, preserving order and dropping empty or repeated tokens."""
    return list(dict.fromkeys(token for token in runcoms.split(RUNCOM_SEPARATOR) if token))


def detect_layout(module_dir: Path) -> ModuleLayout:
    if (module_dir / EMBEDDED_DIRNAME).is_dir():
        return ModuleLayout.EMBEDDED
    return ModuleLayout.SIMPLE


class ModuleWalker:
    """Resolve runcom files over an ordered list of modules under ``root_dir``."""

    def __init__(self, root_dir: Path, module_order: Sequence[str]) -> None:
        self.root_dir = Path(root_dir)
        # Repeated names would source the same file twice
        self.module_order = tuple(dict.fromkeys(module_order))

    def _resolve_module(self, module_name: str, runcom: str) -> Iterable[ResolvedEntry]:
        module_dir = self.root_dir / module_name
        layout = detect_layout(module_dir)
        lookup_dir = module_dir / EMBEDDED_DIRNAME if layout is ModuleLayout.EMBEDDED else module_dir
        target = resolver.resolve(lookup_dir, runcom, module_name)
        if target is None:
            return ()
        return (ResolvedEntry(
            module_dir=module_dir,
            relative_path=target.relative_to(module_dir),
            module_name=module_name,
            runcom=runcom,
            layout=layout,
        ),)

    def walk(self, runcoms: str) -> Iterator[ResolvedEntry]:
        """Yield resolved entries, runcoms in request order then modules in declared order."""
        for runcom in split_runcoms(runcoms):
            if runcom not in resolver.KNOWN_RUNCOMS:
                log("HINT", "Unknown runcom '%s', trying generic file names only", runcom, target=logger)
            for module_name in self.module_order:
                yield from self._resolve_module(module_name, runcom)
