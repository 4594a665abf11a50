"""Typed diagnostics produced by the doctor command."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from functools import total_ordering
from typing import Any


class _OrderedEnum(enum.Enum):
    """Enum whose members order by declaration position."""

    @property
    def _rank(self) -> int:
        return list(type(self)).index(self)

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, type(self)):
            return NotImplemented
        return self._rank < other._rank

    def __le__(self, other: object) -> bool:
        if not isinstance(other, type(self)):
            return NotImplemented
        return self._rank <= other._rank

    def __gt__(self, other: object) -> bool:
        if not isinstance(other, type(self)):
            return NotImplemented
        return self._rank > other._rank

    def __ge__(self, other: object) -> bool:
        if not isinstance(other, type(self)):
            return NotImplemented
        return self._rank >= other._rank


class DoctorSeverity(_OrderedEnum):
    """Severity of a finding; errors sort first."""

    ERROR = "error"
    WARNING = "warning"
    INFO = "info"

    def label(self) -> str:
        """Lowercase label used in human-facing output."""
        return self.value


class DoctorFindingCode(_OrderedEnum):
    """Stable code for a doctor finding."""

    ORPHANED_WORKSPACE = "orphaned_workspace"
    INVALID_REPO_CONFIG = "invalid_repo_config"
    INVALID_WORKSPACE_METADATA = "invalid_workspace_metadata"
    WORKSPACE_PATH_INFERRED = "workspace_path_inferred"
    WORKSPACE_DIRECTORY_MISSING = "workspace_directory_missing"
    WORKSPACE_DIRECTORY_STALE = "workspace_directory_stale"
    METADATA_ONLY_WORKSPACE = "metadata_only_workspace"
    JJ_ONLY_WORKSPACE = "jj_only_workspace"
    SHELL_DETECTION_FAILED = "shell_detection_failed"
    UNSUPPORTED_SHELL = "unsupported_shell"
    HOME_DIRECTORY_MISSING = "home_directory_missing"
    SHELL_RC_MISSING = "shell_rc_missing"
    INVALID_SHELL_RC_FILE = "invalid_shell_rc_file"
    SHELL_INTEGRATION_MISSING = "shell_integration_missing"


class DoctorScopeKind(_OrderedEnum):
    """Which area of the repo a finding concerns."""

    REPO = "repo"
    WORKSPACE = "workspace"
    SHELL = "shell"


@total_ordering
@dataclass(frozen=True)
class DoctorScope:
    """Diagnostic scope; workspace scopes carry the workspace name."""

    kind: DoctorScopeKind
    workspace: str | None = None

    def __post_init__(self) -> None:
        if (self.kind is DoctorScopeKind.WORKSPACE) != (self.workspace is not None):
            raise ValueError("a workspace name is required exactly for workspace scopes")

    @classmethod
    def repo(cls) -> DoctorScope:
        return cls(DoctorScopeKind.REPO)

    @classmethod
    def for_workspace(cls, workspace: str) -> DoctorScope:
        return cls(DoctorScopeKind.WORKSPACE, workspace)

    @classmethod
    def shell(cls) -> DoctorScope:
        return cls(DoctorScopeKind.SHELL)

    def _key(self) -> tuple[DoctorScopeKind, str]:
        return (self.kind, self.workspace or "")

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, DoctorScope):
            return NotImplemented
        return self._key() < other._key()

    def to_dict(self) -> dict[str, Any]:
        """Serializable form tagged by kind."""
        data: dict[str, Any] = {"kind": self.kind.value}
        if self.workspace is not None:
            data["workspace"] = self.workspace
        return data


@dataclass
class DoctorFinding:
    """One doctor finding."""

    severity: DoctorSeverity
    code: DoctorFindingCode
    scope: DoctorScope
    message: str
    path: str | None = None
    hint: str | None = None

    def to_dict(self) -> dict[str, Any]:
        """Serializable form; absent path and hint are omitted."""
        data: dict[str, Any] = {
            "severity": self.severity.value,
            "code": self.code.value,
            "scope": self.scope.to_dict(),
            "message": self.message,
        }
        if self.path is not None:
            data["path"] = self.path
        if self.hint is not None:
            data["hint"] = self.hint
        return data


@dataclass(frozen=True)
class DoctorSummary:
    """Counts of findings per severity."""

    errors: int = 0
    warnings: int = 0
    info: int = 0

    def to_dict(self) -> dict[str, int]:
        return {"errors": self.errors, "warnings": self.warnings, "info": self.info}


@dataclass
class DoctorReport:
    """Full doctor report holding ordered findings."""

    findings: list[DoctorFinding] = field(default_factory=list)

    def push(self, finding: DoctorFinding) -> None:
        self.findings.append(finding)

    def sort(self) -> None:
        """Order findings by severity, scope, code, then message."""
        self.findings.sort(
            key=lambda f: (f.severity, f.scope._key(), f.code, f.message)
        )

    def summary(self) -> DoctorSummary:
        severities = [finding.severity for finding in self.findings]
        return DoctorSummary(
            errors=severities.count(DoctorSeverity.ERROR),
            warnings=severities.count(DoctorSeverity.WARNING),
            info=severities.count(DoctorSeverity.INFO),
        )

    def has_errors(self) -> bool:
        return any(f.severity is DoctorSeverity.ERROR for f in self.findings)

    def is_empty(self) -> bool:
        return not self.findings