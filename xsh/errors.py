"""Error types raised by xsh.

Every user-facing failure maps to a process exit code.  The command
line front end catches :class:`XshError` and terminates with its
``exit_code``; anything else is treated as an internal bug.
"""

from __future__ import annotations


class XshError(Exception):
    """Base class for failures reported to the user."""

    exit_code = 1


class ConfigError(XshError):
    """An explicitly supplied setting cannot be used."""


class MissingDependency(XshError):
    """A required external program is not installed."""

    exit_code = 2

    def __init__(self, program: str) -> None:
        super().__init__(f"Command '{program}' must be installed first")
        self.program = program


class UnknownCommand(XshError):
    """No handler is registered under the requested name."""

    exit_code = 3

    def __init__(self, name: str) -> None:
        super().__init__(f"Unknown command: {name}")
        self.name = name


# Exit code used when an unexpected exception escapes a command
INTERNAL_ERROR_EXIT_CODE = 42
