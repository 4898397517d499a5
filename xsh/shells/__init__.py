"""Shell specific code generators."""

from __future__ import annotations

from ..dispatcher import ShellDispatcher
from ..walker import ModuleWalker
from .bash import BashShell


def build_dispatcher(walker: ModuleWalker, bin_dirs) -> ShellDispatcher:
    """Return a dispatcher with every supported shell registered."""
    dispatcher = ShellDispatcher()
    BashShell(walker=walker, bin_dirs=tuple(bin_dirs)).register(dispatcher)
    return dispatcher
