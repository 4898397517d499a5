"""Command‑line interface for xsh.

Usage::

    xsh [-h] [-n] [-f] [-v LEVEL] <command> [args...]

Commands are registered in :data:`COMMANDS` with the :func:`command`
decorator.  ``gen`` and ``files`` hand over to the shell dispatcher;
``facts`` and ``help`` are informational.  Run ``xsh help`` for the
full list.

Exit codes: ``0`` success, ``1`` generic failure, ``2`` missing
dependency, ``3`` unknown command, ``42`` internal error.
"""

from __future__ import annotations

import argparse
import shutil
import sys
import traceback
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional, Sequence, TextIO

from . import __author__, __date__, __email__, __license__, __status__, __version__
from .config_service import AppConfig, ConfigService
from .dispatcher import ShellDispatcher
from .errors import INTERNAL_ERROR_EXIT_CODE, ConfigError, MissingDependency, UnknownCommand, XshError
from .facts import Facts, detect_shell
from .logger import LOG_SCALE, level_value, log, setup_logging
from .shells import build_dispatcher
from .walker import ModuleWalker

APP_NAME = "xsh"


@dataclass
class AppContext:
    """Everything a command needs, built once per invocation."""

    config: AppConfig
    dispatcher: ShellDispatcher
    stdout: TextIO

    @classmethod
    def build(cls, config: AppConfig, stdout: Optional[TextIO] = None) -> "AppContext":
        walker = ModuleWalker(config.root_dir, config.module_order)
        return cls(
            config=config,
            dispatcher=build_dispatcher(walker, config.bin_dirs),
            stdout=stdout if stdout is not None else sys.stdout,
        )

    def echo(self, text: str) -> None:
        if text:
            print(text, file=self.stdout)


@dataclass(frozen=True)
class Command:
    name: str
    usage: str
    description: str
    handler: Callable[[AppContext, List[str]], int]


COMMANDS: Dict[str, Command] = {}


def command(name: str, usage: str, description: str):
    """Register the decorated function as the ``name`` command."""

    def decorator(func: Callable[[AppContext, List[str]], int]):
        COMMANDS[name] = Command(name, usage, description, func)
        return func

    return decorator


def _runcom_and_shell(ctx: AppContext, args: Sequence[str]) -> tuple:
    """Return ``(runcoms, shell)``; missing or empty arguments take the defaults."""
    if len(args) > 2:
        log("DEBUG", "Ignoring extra arguments: %s", " ".join(args[2:]))
    runcoms = args[0] if args and args[0] else ctx.config.default_runcoms
    shell = args[1] if len(args) > 1 and args[1] else (ctx.config.shell or detect_shell())
    return runcoms, shell


@command("gen", "[lib:env:interactive:login:comp] [SHELL]", "Show code to be sourced")
def cli_gen(ctx: AppContext, args: List[str]) -> int:
    runcoms, shell = _runcom_and_shell(ctx, args)
    ctx.echo(ctx.dispatcher.dispatch(shell, "gen_code", runcoms))
    return 0


@command("files", "[lib:env:interactive:login:comp] [SHELL]", "List files to be sourced")
def cli_files(ctx: AppContext, args: List[str]) -> int:
    runcoms, shell = _runcom_and_shell(ctx, args)
    ctx.echo(ctx.dispatcher.dispatch(shell, "lookup_files", runcoms))
    return 0


@command("facts", "", "Show detected system facts")
def cli_facts(ctx: AppContext, args: List[str]) -> int:
    ctx.echo("\n".join(Facts.collect().as_lines()))
    return 0


@command("help", "", "Show this help")
def cli_help(ctx: Optional[AppContext], args: List[str]) -> int:
    stdout = ctx.stdout if ctx is not None else sys.stdout
    print(render_help(), file=stdout)
    return 0


def render_help() -> str:
    rows = [(name, COMMANDS[name].usage, COMMANDS[name].description) for name in sorted(COMMANDS)]
    name_width = max(len(row[0]) for row in rows)
    usage_width = max(len(row[1]) for row in rows)
    commands = "\n".join(
        f"  {name:<{name_width}}  {usage:<{usage_width}}  {description}" for name, usage, description in rows
    )
    return f"""{APP_NAME} is command line tool

usage: {APP_NAME} [-h] [-n] [-f] [-v LEVEL] <COMMAND> [<ARGS>]
       {APP_NAME} help

options:
  -h        Show this help
  -n        Dry mode
  -f        Force mode
  -v LEVEL  Minimum log level, one of:
            {":".join(LOG_SCALE)}

commands:
{commands}

info:
  author: {__author__} <{__email__}>
  version: {__version__}-{__status__} ({__date__})
  license: {__license__}"""


class _ArgumentParser(argparse.ArgumentParser):
    def error(self, message: str) -> None:
        raise XshError(f"Unknown option: {message}")


def _build_parser() -> argparse.ArgumentParser:
    parser = _ArgumentParser(prog=APP_NAME, add_help=False)
    parser.add_argument("-h", "--help", dest="help", action="store_true")
    parser.add_argument("-n", dest="dry", action="store_true")
    parser.add_argument("-f", dest="force", action="store_true")
    parser.add_argument("-v", dest="log_level", metavar="LEVEL")
    parser.add_argument("command", nargs="?", default="help")
    parser.add_argument("args", nargs=argparse.REMAINDER)
    return parser


def check_dependencies(programs: Sequence[str]) -> None:
    for prog in programs:
        if shutil.which(prog) is None:
            raise MissingDependency(prog)


def _load_config(args: argparse.Namespace) -> AppConfig:
    config = ConfigService.from_env().load_app_config().with_overrides(
        log_level=args.log_level.upper() if args.log_level else None,
        dry=True if args.dry else None,
        force=True if args.force else None,
    )
    if level_value(config.log_level) is None:
        raise ConfigError(f"Unknown log level: {config.log_level}")
    return config


def _run(argv: List[str]) -> int:
    args = _build_parser().parse_args(argv)
    if args.help or args.command == "help":
        return cli_help(None, [])

    config = _load_config(args)
    setup_logging(config.log_level)
    if config.dry:
        log("INFO", "Dry mode enabled")
    if config.force:
        log("INFO", "Force mode enabled")
    if args.log_level:
        log("INFO", "Log level set to: %s", config.log_level)

    check_dependencies(config.dependencies)
    cmd = COMMANDS.get(args.command)
    if cmd is None:
        raise UnknownCommand(args.command)
    return cmd.handler(AppContext.build(config), list(args.args))


def _report_bug(exc: BaseException) -> None:
    frames = traceback.extract_tb(exc.__traceback__)
    log("ERR", "Uncatched bug:")
    log("TRACE", "%s", "".join(traceback.format_exception(type(exc), exc, exc.__traceback__)).rstrip())
    if frames:
        last = frames[-1]
        log("ERR", "Error on or near line %s (%s): %s", last.lineno, last.filename, exc)
    else:
        log("ERR", "%s", exc)


def main(argv: Optional[List[str]] = None) -> int:
    setup_logging()
    try:
        return _run(list(sys.argv[1:] if argv is None else argv))
    except XshError as exc:
        log("DIE", "%s", exc)
        return exc.exit_code
    except Exception as exc:
        _report_bug(exc)
        return INTERNAL_ERROR_EXIT_CODE


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
