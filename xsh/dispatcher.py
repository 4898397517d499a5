"""Per-shell operation registry.

Each supported shell registers one handler per operation under the
key ``"<shell>.<operation>"`` (for example ``bash.gen_code``).  Adding
a shell means registering its handlers; the command line layer never
needs to know which shells exist.
"""

from __future__ import annotations

import logging
from typing import Callable, Dict, List

from .errors import UnknownCommand
from .logger import log

logger = logging.getLogger("xsh.dispatcher")

Handler = Callable[..., str]


def handler_name(shell: str, operation: str) -> str:
    return f"{shell}.{operation}"


class ShellDispatcher:
    """Map (shell, operation) pairs to handlers."""

    def __init__(self) -> None:
        self._handlers: Dict[str, Handler] = {}

    def register(self, shell: str, operation: str, handler: Handler) -> None:
        self._handlers[handler_name(shell, operation)] = handler

    def handlers(self) -> List[str]:
        return sorted(self._handlers)

    def shells(self) -> List[str]:
        return sorted({name.split(".", 1)[0] for name in self._handlers})

    def dispatch(self, shell: str, operation: str, *args: str) -> str:
        """Run the handler registered for ``shell`` and ``operation``.

        Raises :class:`~xsh.errors.UnknownCommand` carrying the composed
        handler name when nothing is registered for the pair.
        """
        name = handler_name(shell, operation)
        handler = self._handlers.get(name)
        if handler is None:
            raise UnknownCommand(name)
        log("INFO", "Shell dispatch cmd: %s %s", name, " ".join(args), target=logger)
        return handler(*args)
