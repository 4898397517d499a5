from __future__ import annotations

import pytest

from xsh.dispatcher import ShellDispatcher
from xsh.errors import UnknownCommand


def test_unknown_pair_raises_with_composed_name() -> None:
    dispatcher = ShellDispatcher()
    dispatcher.register("bash", "gen_code", lambda runcoms: "code")

    with pytest.raises(UnknownCommand) as excinfo:
        dispatcher.dispatch("zsh", "gen_code", "env")
    assert excinfo.value.name == "zsh.gen_code"
    assert excinfo.value.exit_code == 3

    with pytest.raises(UnknownCommand):
        dispatcher.dispatch("bash", "walk_files", "env")


def test_registered_pair_invokes_only_that_handler() -> None:
    calls = []
    dispatcher = ShellDispatcher()
    dispatcher.register("bash", "gen_code", lambda runcoms: calls.append(("gen", runcoms)) or "code")
    dispatcher.register("bash", "lookup_files", lambda runcoms: calls.append(("files", runcoms)) or "files")

    assert dispatcher.dispatch("bash", "lookup_files", "env:login") == "files"
    assert calls == [("files", "env:login")]


def test_listing() -> None:
    dispatcher = ShellDispatcher()
    dispatcher.register("bash", "lookup_files", str)
    dispatcher.register("bash", "gen_code", str)
    dispatcher.register("zsh", "gen_code", str)
    assert dispatcher.handlers() == ["bash.gen_code", "bash.lookup_files", "zsh.gen_code"]
    assert dispatcher.shells() == ["bash", "zsh"]
