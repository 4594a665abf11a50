"""Command-line entry points."""

from __future__ import annotations

import argparse
import sys
from typing import Callable, Iterable, NoReturn, Sequence

from jjnavi.config import run_shell_init, run_shell_install
from jjnavi.errors import NaviError
from jjnavi.output import ShellKind, render_error_message

_VERSION = "0.2.0"
_SHELL_VALUES = ", ".join(kind.value for kind in ShellKind)


class _ParserExit(Exception):
    def __init__(self, status: int, message: str | None) -> None:
        super().__init__(message)
        self.status = status
        self.message = message


class _UsageError(Exception):
    def __init__(self, message: str, usage: str) -> None:
        super().__init__(message)
        self.message = message
        self.usage = usage


class _HelpFormatter(argparse.HelpFormatter):
    def add_usage(self, usage, actions, groups, prefix=None):  # type: ignore[override]
        if prefix is None:
            prefix = "Usage: "
        super().add_usage(usage, actions, groups, prefix)


class _ArgumentParser(argparse.ArgumentParser):
    """Parser that reports problems by raising instead of exiting."""

    def error(self, message: str) -> NoReturn:
        raise _UsageError(message, self.format_usage())

    def exit(self, status: int = 0, message: str | None = None) -> NoReturn:
        raise _ParserExit(status, message)


def _parse_shell(value: str) -> ShellKind:
    try:
        return ShellKind(value)
    except ValueError:
        raise argparse.ArgumentTypeError(
            f"invalid value '{value}'\n  [possible values: {_SHELL_VALUES}]"
        ) from None


def _build_parser(bin_name: str) -> _ArgumentParser:
    parser = _ArgumentParser(
        prog=bin_name,
        description="Workspace navigator for Jujutsu",
        formatter_class=_HelpFormatter,
    )
    parser.add_argument(
        "-V", "--version", action="version", version=f"{bin_name} {_VERSION}"
    )
    parser.set_defaults(usage_parser=parser, handler=None)
    commands = parser.add_subparsers(title="commands", metavar="<COMMAND>")

    about = "Shell integration and future config commands"
    config = commands.add_parser(
        "config", help=about, description=about, formatter_class=_HelpFormatter
    )
    config.set_defaults(usage_parser=config)
    config_commands = config.add_subparsers(title="commands", metavar="<COMMAND>")

    about = "Shell integration commands"
    shell = config_commands.add_parser(
        "shell", help=about, description=about, formatter_class=_HelpFormatter
    )
    shell.set_defaults(usage_parser=shell)
    shell_commands = shell.add_subparsers(title="commands", metavar="<COMMAND>")

    about = "Print shell integration script for a supported shell"
    init = shell_commands.add_parser(
        "init", help=about, description=about, formatter_class=_HelpFormatter
    )
    init.add_argument(
        "shell",
        nargs="?",
        metavar="SHELL",
        type=_parse_shell,
        help=f"Supported shell [possible values: {_SHELL_VALUES}]",
    )
    init.set_defaults(
        usage_parser=init,
        handler=lambda ns: run_shell_init(bin_name, ns.shell),
    )

    about = "Install the managed shell integration block into your rc file"
    install = shell_commands.add_parser(
        "install", help=about, description=about, formatter_class=_HelpFormatter
    )
    install.add_argument(
        "--shell",
        metavar="SHELL",
        type=_parse_shell,
        help=f"Shell to install for; defaults to $SHELL [possible values: {_SHELL_VALUES}]",
    )
    install.set_defaults(
        usage_parser=install,
        handler=lambda ns: run_shell_install(bin_name, ns.shell),
    )

    return parser


def run(bin_name: str, argv: Iterable[str]) -> int:
    """Run the command line under the name `bin_name`; return the exit status."""
    parser = _build_parser(bin_name)
    try:
        namespace = parser.parse_args(list(argv))
    except _ParserExit as exit_request:
        if exit_request.message:
            sys.stderr.write(exit_request.message)
        return exit_request.status
    except _UsageError as usage_error:
        print(
            render_error_message(
                f"error: {usage_error.message}\n\n{usage_error.usage}\n"
                "For more information, try '--help'."
            ),
            file=sys.stderr,
        )
        return 2

    handler: Callable[[argparse.Namespace], object] | None = namespace.handler
    if handler is None:
        sys.stderr.write(namespace.usage_parser.format_help())
        return 2

    try:
        handler(namespace)
    except (NaviError, OSError) as error:
        print(render_error_message(str(error)), file=sys.stderr)
        return 1
    return 0


def main(argv: Sequence[str] | None = None) -> int:
    """Entry point for the `navi` command."""
    return run("navi", sys.argv[1:] if argv is None else argv)


def nv_main(argv: Sequence[str] | None = None) -> int:
    """Entry point for the short `nv` command."""
    return run("nv", sys.argv[1:] if argv is None else argv)