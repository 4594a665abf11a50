"""Shell integration commands and managed rc-file block handling."""

from __future__ import annotations

import enum
import os
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Iterator, Union

from jjnavi.errors import (
    HomeDirectoryError,
    InvalidShellRcFileError,
    NaviError,
    ShellRequiredError,
)
from jjnavi.output import (
    MANAGED_BLOCK_END,
    MANAGED_BLOCK_START,
    ShellKind,
    render_shell_init,
    render_shell_install_block,
)

PathLike = Union[str, "os.PathLike[str]"]


class BlockStatus(enum.Enum):
    """Whether an rc file holds a usable managed block."""

    MISSING = "missing"
    PRESENT = "present"
    INVALID = "invalid"


@dataclass(frozen=True)
class ManagedBlockState:
    """Result of inspecting an rc file for the managed block.

    `start` and `end` delimit the block when it is present; `message`
    explains why the markers are invalid otherwise.
    """

    status: BlockStatus
    start: int | None = None
    end: int | None = None
    message: str | None = None

    @classmethod
    def missing(cls) -> ManagedBlockState:
        return cls(BlockStatus.MISSING)

    @classmethod
    def present(cls, start: int, end: int) -> ManagedBlockState:
        return cls(BlockStatus.PRESENT, start=start, end=end)

    @classmethod
    def invalid(cls, message: str) -> ManagedBlockState:
        return cls(BlockStatus.INVALID, message=message)


def _find_all(text: str, needle: str) -> Iterator[int]:
    index = text.find(needle)
    while index != -1:
        yield index
        index = text.find(needle, index + len(needle))


def inspect_managed_block(existing: str) -> ManagedBlockState:
    """Locate the managed block markers in `existing`."""
    starts = list(_find_all(existing, MANAGED_BLOCK_START))
    ends = list(_find_all(existing, MANAGED_BLOCK_END))

    if not starts and not ends:
        return ManagedBlockState.missing()
    if len(starts) == 1 and len(ends) == 1:
        start, end = starts[0], ends[0]
        if end < start:
            return ManagedBlockState.invalid("managed block markers are out of order")
        return ManagedBlockState.present(start, end + len(MANAGED_BLOCK_END))
    if not starts or not ends:
        return ManagedBlockState.invalid("managed block markers are unbalanced")
    return ManagedBlockState.invalid("managed block markers are duplicated")


def upsert_managed_block(existing: str, block: str, rc_path: PathLike) -> str:
    """Return `existing` with the managed block replaced or appended."""
    state = inspect_managed_block(existing)

    if state.status is BlockStatus.INVALID:
        raise InvalidShellRcFileError(rc_path, state.message or "")

    if state.status is BlockStatus.PRESENT:
        updated = existing[: state.start]
        if updated and not updated.endswith("\n"):
            updated += "\n"
        updated += block
        suffix = existing[state.end :].lstrip("\n")
        if suffix:
            if not updated.endswith("\n"):
                updated += "\n"
            updated += suffix
            if not updated.endswith("\n"):
                updated += "\n"
        return updated

    updated = existing
    if updated and not updated.endswith("\n"):
        updated += "\n"
    if updated and not updated.endswith("\n\n"):
        updated += "\n"
    return updated + block


def shell_rc_path(shell: ShellKind) -> Path:
    """Path of the rc file for `shell` inside `$HOME`."""
    home = os.environ.get("HOME")
    if home is None:
        raise HomeDirectoryError()
    return Path(home) / shell.rc_file_name()


def run_shell_init(command_name: str, shell: ShellKind | None) -> None:
    """Print the shell integration script for `shell`."""
    if shell is None:
        raise ShellRequiredError()
    sys.stdout.write(render_shell_init(command_name, shell))


def run_shell_install(command_name: str, shell: ShellKind | None) -> Path:
    """Install or refresh the managed block in the shell's rc file.

    The shell defaults to the one named by `$SHELL`. Returns the rc path.
    """
    if shell is None:
        shell = ShellKind.detect()
    rc_path = shell_rc_path(shell)
    block = render_shell_install_block(command_name, shell)

    try:
        raw = rc_path.read_bytes()
    except FileNotFoundError:
        raw = b""
    try:
        existing = raw.decode("utf-8")
    except UnicodeDecodeError as error:
        raise NaviError("stream did not contain valid UTF-8") from error

    updated = upsert_managed_block(existing, block, rc_path)

    rc_path.parent.mkdir(parents=True, exist_ok=True)
    with open(rc_path, "w", encoding="utf-8", newline="") as handle:
        handle.write(updated)
    print(f"installed shell integration in {rc_path}")
    return rc_path