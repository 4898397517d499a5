from __future__ import annotations

import io
from pathlib import Path

import pytest

from xsh import resolver
from xsh.logger import setup_logging

from conftest import write_file


@pytest.mark.parametrize("runcom", ["env", "login", "interactive", "comp", "lib"])
def test_generic_sh_file_is_found_for_every_runcom(tmp_path: Path, runcom: str) -> None:
    target = write_file(tmp_path / f"{runcom}.sh")
    assert resolver.resolve(tmp_path, runcom, "mod") == target


def test_probing_stops_at_first_match(tmp_path: Path) -> None:
    stream = io.StringIO()
    setup_logging("DEBUG", stream)
    write_file(tmp_path / "login.bash")
    write_file(tmp_path / "login.sh")

    assert resolver.resolve(tmp_path, "login", "mod") == tmp_path / "login.bash"
    probed = [line.split("Looking for: ", 1)[1] for line in stream.getvalue().splitlines() if "Looking for" in line]
    assert probed == [str(tmp_path / "bash_login.bash"), str(tmp_path / "login.bash")]


def test_shell_prefixed_file_wins_over_generic(tmp_path: Path) -> None:
    write_file(tmp_path / "login.sh")
    write_file(tmp_path / "bash_login.bash")
    assert resolver.resolve(tmp_path, "login", "mod") == tmp_path / "bash_login.bash"


def test_comp_cache_without_base_file(tmp_path: Path) -> None:
    write_file(tmp_path / "comp.bash.cache")
    assert resolver.resolve(tmp_path, "comp", "mod") == tmp_path / "comp.bash.cache"


def test_comp_cache_precedes_base_files(tmp_path: Path) -> None:
    write_file(tmp_path / "bash_comp.bash")
    write_file(tmp_path / "posix_comp.sh.cache")
    assert resolver.resolve(tmp_path, "comp", "mod") == tmp_path / "posix_comp.sh.cache"


def test_lib_uses_module_named_file(tmp_path: Path) -> None:
    write_file(tmp_path / "foo.bash")
    assert resolver.resolve(tmp_path, "lib", "foo") == tmp_path / "foo.bash"


def test_module_named_file_only_applies_to_lib(tmp_path: Path) -> None:
    write_file(tmp_path / "foo.sh")
    assert resolver.resolve(tmp_path, "env", "foo") is None


def test_missing_file_resolves_to_none(tmp_path: Path) -> None:
    assert resolver.resolve(tmp_path / "absent", "env", "mod") is None


def test_directory_named_like_candidate_is_skipped(tmp_path: Path) -> None:
    (tmp_path / "env.bash").mkdir()
    target = write_file(tmp_path / "env.sh")
    assert resolver.resolve(tmp_path, "env", "mod") == target


def test_candidate_order() -> None:
    names = [p.name for p in resolver.candidate_files(Path("/m"), "comp", "mod")]
    assert names == [
        "bash_comp.sh.cache", "comp.bash.cache", "sh_comp.sh.cache", "posix_comp.sh.cache",
        "bash_comp.bash", "comp.bash", "sh_comp.sh", "posix_comp.sh", "comp.sh",
    ]
    names = [p.name for p in resolver.candidate_files(Path("/m"), "lib", "git")]
    assert names[:2] == ["git.bash", "git.sh"]
    assert len(names) == 7
    assert len(resolver.candidate_files(Path("/m"), "env", "git")) == 5
