"""Exception hierarchy for workspace navigation failures."""

from __future__ import annotations

import os
from typing import Union

PathLike = Union[str, "os.PathLike[str]"]


def _display(path: PathLike) -> str:
    return os.fspath(path)


class NaviError(Exception):
    """Base class for every error the CLI reports to the user."""

    default_message = "error: jj-navi failed"

    def __init__(self, message: str | None = None) -> None:
        self.message = self.default_message if message is None else message
        super().__init__(self.message)

    def __str__(self) -> str:
        return self.message


class NotInWorkspaceError(NaviError):
    """The current directory is not inside a Jujutsu workspace."""

    default_message = "error: not in a jj workspace"


class InvalidWorkspaceNameError(NaviError):
    """A workspace name violates validation rules."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"error: invalid workspace name '{name}'")


class OrphanedWorkspaceError(NaviError):
    """The current directory still has `.jj` but is no longer a live workspace."""

    default_message = (
        "error: current directory is no longer a registered jj workspace\n"
        "hint: cd into another workspace or recreate this workspace with jj"
    )


class RepoNameError(NaviError):
    """The repo name could not be derived from the workspace root."""

    default_message = "error: failed to determine repo name"


class WorkspaceRootHasNoParentError(NaviError):
    """The workspace root unexpectedly has no parent directory."""

    def __init__(self, path: PathLike) -> None:
        self.path = path
        super().__init__(f"error: workspace root has no parent: {_display(path)}")


class WorkspaceDoesNotExistError(NaviError):
    """The requested workspace does not exist."""

    default_message = "error: workspace does not exist\nhint: use --create"


class WorkspaceNotFoundError(NaviError):
    """The named workspace does not exist in jj."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"error: workspace '{name}' does not exist")


class WorkspaceDirectoryUnavailableError(NaviError):
    """The workspace exists but no validated directory could be found."""

    def __init__(self, workspace: str, path: str) -> None:
        self.workspace = workspace
        self.path = path
        super().__init__(
            f"error: workspace '{workspace}' exists, but its directory could not be resolved\n"
            f"hint: last known path: {path}"
        )


class CannotRemoveCurrentWorkspaceError(NaviError):
    """Removing the current workspace would orphan the active directory."""

    default_message = (
        "error: cannot remove current workspace\n"
        "hint: switch to another workspace first"
    )


class InvalidRepoPointerError(NaviError):
    """The `.jj/repo` pointer file is empty or points to a non-directory."""

    def __init__(self, path: PathLike) -> None:
        self.path = path
        super().__init__(f"error: invalid repo pointer in {_display(path)}")


class RepoPointerResolutionError(NaviError):
    """The `.jj/repo` pointer could not be resolved to an on-disk path."""

    def __init__(self, path: PathLike, message: str) -> None:
        self.path = path
        self.detail = message
        super().__init__(f"error: invalid repo pointer in {_display(path)}\n{message}")


class InvalidWorkspaceTemplateError(NaviError):
    """The configured workspace template is syntactically invalid."""

    def __init__(self, template: str) -> None:
        self.template = template
        super().__init__(f"error: invalid workspace template '{template}'")


class InvalidRepoConfigError(NaviError):
    """Repo config could not be parsed or validated."""

    def __init__(self, path: PathLike, message: str) -> None:
        self.path = path
        self.detail = message
        super().__init__(f"error: invalid repo config in {_display(path)}\n{message}")


class InvalidWorkspaceMetadataError(NaviError):
    """Workspace metadata could not be parsed or validated."""

    def __init__(self, path: PathLike, message: str) -> None:
        self.path = path
        self.detail = message
        super().__init__(
            f"error: invalid workspace metadata in {_display(path)}\n{message}"
        )


class InvalidJjWorkspaceListEntryError(NaviError):
    """`jj workspace list` returned output that could not be parsed."""

    def __init__(self, entry: str) -> None:
        self.entry = entry
        super().__init__(f"error: invalid jj workspace list entry\n{entry}")


class UnsupportedShellError(NaviError):
    """The requested shell is not supported."""

    def __init__(self, shell: str) -> None:
        self.shell = shell
        super().__init__(f"error: unsupported shell '{shell}'")


class ShellRequiredError(NaviError):
    """A shell argument is required for shell-init generation."""

    default_message = "error: shell name required\nhint: use one of: bash, zsh"


class ShellDetectionError(NaviError):
    """The current shell could not be inferred from `$SHELL`."""

    default_message = "error: unable to detect shell from $SHELL"


class HomeDirectoryError(NaviError):
    """`$HOME` is required but not set."""

    default_message = "error: $HOME is not set"


class InvalidShellRcFileError(NaviError):
    """The target shell rc file contains an invalid managed block."""

    def __init__(self, path: PathLike, message: str) -> None:
        self.path = path
        self.detail = message
        super().__init__(f"error: invalid shell rc file at {_display(path)}\n{message}")


class ShellDirectivePathNotUtf8Error(NaviError):
    """Shell integration requires a UTF-8 renderable path."""

    default_message = "error: shell integration requires a UTF-8 workspace path"


class JjCommandFailedError(NaviError):
    """A jj command failed."""

    def __init__(self, command: str, stderr: str) -> None:
        self.command = command
        self.stderr = stderr
        super().__init__(f"error: jj command failed: {command}\n{stderr}")


class UnsupportedJjVersionError(NaviError):
    """The installed jj is older than the supported floor."""

    def __init__(self, found: str, minimum: str) -> None:
        self.found = found
        self.minimum = minimum
        super().__init__(f"error: jj {minimum} or newer required\nhint: found {found}")


class JsonSerializationError(NaviError):
    """JSON output could not be serialized."""

    def __init__(self, message: str) -> None:
        self.detail = message
        super().__init__(f"error: failed to serialize json output\n{message}")