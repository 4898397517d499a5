"""Runcom file lookup.

For a given runcom and module the resolver builds an ordered list of
candidate file names and returns the first one present on disk.  The
order encodes precedence: shell specific names come before generic
POSIX ones, and the ``comp``/``lib`` runcoms try their special names
(completion caches, module named libraries) before the generic ones::

    comp:  bash_comp.sh.cache  comp.bash.cache  sh_comp.sh.cache  posix_comp.sh.cache
    lib:   <module>.bash  <module>.sh
    all:   bash_<rc>.bash  <rc>.bash  sh_<rc>.sh  posix_<rc>.sh  <rc>.sh

A runcom with no matching file is normal and resolves to ``None``.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import List, Optional

from .logger import log

logger = logging.getLogger("xsh.resolver")

KNOWN_RUNCOMS = ("env", "login", "interactive", "comp", "lib", "logout")

COMP_CACHE_PATTERNS = (
    "bash_comp.sh.cache",
    "comp.bash.cache",
    "sh_comp.sh.cache",
    "posix_comp.sh.cache",
)
LIB_PATTERNS = ("{module}.bash", "{module}.sh")
BASE_PATTERNS = (
    "bash_{runcom}.bash",
    "{runcom}.bash",
    "sh_{runcom}.sh",
    "posix_{runcom}.sh",
    "{runcom}.sh",
)


def candidate_files(lookup_dir: Path, runcom: str, module_name: str) -> List[Path]:
    """Return the ordered candidate paths for ``runcom`` of ``module_name``."""
    patterns: List[str] = []
    if runcom == "comp":
        patterns.extend(COMP_CACHE_PATTERNS)
    elif runcom == "lib":
        patterns.extend(LIB_PATTERNS)
    patterns.extend(BASE_PATTERNS)
    return [lookup_dir / pat.format(runcom=runcom, module=module_name) for pat in patterns]


def first_found_file(candidates: List[Path]) -> Optional[Path]:
    """Return the first existing regular file, stopping at the match."""
    for path in candidates:
        log("DEBUG", "Looking for: %s", path, target=logger)
        if path.is_file():
            return path
    return None


def resolve(lookup_dir: Path, runcom: str, module_name: str) -> Optional[Path]:
    """Return the best file for ``runcom`` in ``lookup_dir`` or ``None``."""
    return first_found_file(candidate_files(lookup_dir, runcom, module_name))
