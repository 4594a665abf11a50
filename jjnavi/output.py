"""Rendering helpers for CLI-facing text and shell integration."""

from __future__ import annotations

import enum
import json
import os
import sys
from dataclasses import dataclass
from typing import TextIO, Union

from jjnavi.doctor import (
    DoctorReport,
    DoctorScope,
    DoctorScopeKind,
    DoctorSeverity,
    DoctorSummary,
)
from jjnavi.errors import (
    JsonSerializationError,
    ShellDetectionError,
    ShellDirectivePathNotUtf8Error,
    UnsupportedShellError,
)

PathLike = Union[str, "os.PathLike[str]"]

SOFT_YELLOW = 179
SOFT_GREEN = 108

DIRECTIVE_FILE_ENV_VAR = "NAVI_DIRECTIVE_FILE"
"""Environment variable used by shell integration to pass a directive file."""
MANAGED_BLOCK_START = "# >>> jj-navi shell init >>>"
"""Marker for the start of the managed shell block."""
MANAGED_BLOCK_END = "# <<< jj-navi shell init <<<"
"""Marker for the end of the managed shell block."""


class ShellKind(enum.Enum):
    """Shells with supported integration."""

    BASH = "bash"
    ZSH = "zsh"

    def __str__(self) -> str:
        return self.value

    def rc_file_name(self) -> str:
        """Name of the rc file in the home directory for this shell."""
        return f".{self.value}rc"

    @classmethod
    def detect(cls) -> ShellKind:
        """Infer the shell from `$SHELL`."""
        shell_path = os.environ.get("SHELL", "").strip()
        if not shell_path:
            raise ShellDetectionError()
        name = os.path.basename(shell_path.rstrip("/"))
        if not name:
            raise ShellDetectionError()
        try:
            return cls(name)
        except ValueError:
            raise UnsupportedShellError(name) from None


@dataclass
class _ScopeSummary:
    label: str
    worst: DoctorSeverity | None = None
    count: int = 0

    def record(self, severity: DoctorSeverity) -> None:
        self.count += 1
        self.worst = severity if self.worst is None else min(self.worst, severity)

    @property
    def severity(self) -> DoctorSeverity:
        return self.worst if self.worst is not None else DoctorSeverity.INFO

    def status(self) -> str:
        if self.worst is None:
            return "ok"
        return f"{self.worst.label()} ({_pluralize(self.count, 'finding')})"


def _is_terminal(stream: TextIO | None) -> bool:
    isatty = getattr(stream, "isatty", None)
    try:
        return bool(isatty()) if isatty is not None else False
    except ValueError:
        return False


def _should_color(stream: TextIO | None) -> bool:
    return "NO_COLOR" not in os.environ and _is_terminal(stream)


def _ansi(text: str, color: int, bold: bool) -> str:
    prefix = ("\x1b[1m" if bold else "") + f"\x1b[38;5;{color}m"
    return f"{prefix}{text}\x1b[0m"


def _stdout_text(text: str, color: int, bold: bool) -> str:
    if not _should_color(sys.stdout):
        return text
    return _ansi(text, color, bold)


def _styled_prefix(prefix: str, color: int) -> str:
    if not _should_color(sys.stderr):
        return prefix
    return f"\x1b[38;5;{color}m{prefix}\x1b[0m"


def _colorize_error_line(line: str) -> str:
    for prefix, color in (
        ("error:", SOFT_YELLOW),
        ("warning:", SOFT_YELLOW),
        ("hint:", SOFT_GREEN),
    ):
        if line.startswith(prefix):
            return _styled_prefix(prefix, color) + line[len(prefix):]
    return line


def _split_lines(message: str) -> list[str]:
    if not message:
        return []
    if message.endswith("\n"):
        message = message[:-1]
    return [line[:-1] if line.endswith("\r") else line for line in message.split("\n")]


def render_error_message(message: str) -> str:
    """Render an error message with colored `error:`/`warning:`/`hint:` prefixes."""
    return "\n".join(_colorize_error_line(line) for line in _split_lines(message))


def _pluralize(count: int, noun: str) -> str:
    return f"1 {noun}" if count == 1 else f"{count} {noun}s"


def _render_summary(summary: DoctorSummary) -> str:
    parts = [
        _pluralize(count, noun)
        for count, noun in (
            (summary.errors, "error"),
            (summary.warnings, "warning"),
            (summary.info, "info"),
        )
        if count > 0
    ]
    return ", ".join(parts) if parts else "ok"


def _headline(summary: DoctorSummary) -> tuple[str, DoctorSeverity]:
    if summary.errors > 0:
        return "attention needed", DoctorSeverity.ERROR
    if summary.warnings > 0:
        return "warnings found", DoctorSeverity.WARNING
    return "healthy", DoctorSeverity.INFO


def _status_badge(label: str, severity: DoctorSeverity) -> str:
    color = SOFT_GREEN if severity is DoctorSeverity.INFO else SOFT_YELLOW
    return _stdout_text(f"[ {label} ]", color, True)


def _section_label(label: str) -> str:
    return _stdout_text(label, SOFT_GREEN, True)


def _detail_label(label: str) -> str:
    return _stdout_text(f"{label}:", SOFT_GREEN, False)


_ICONS = {
    DoctorSeverity.ERROR: "x",
    DoctorSeverity.WARNING: "!",
    DoctorSeverity.INFO: "o",
}


def _scope_summaries(report: DoctorReport) -> list[_ScopeSummary]:
    summaries = {
        DoctorScopeKind.REPO: _ScopeSummary("repo"),
        DoctorScopeKind.WORKSPACE: _ScopeSummary("workspaces"),
        DoctorScopeKind.SHELL: _ScopeSummary("shell"),
    }
    for finding in report.findings:
        summaries[finding.scope.kind].record(finding.severity)
    return list(summaries.values())


def _finding_scope(scope: DoctorScope) -> str:
    if scope.kind is DoctorScopeKind.WORKSPACE:
        return f"workspace:{scope.workspace}"
    return scope.kind.value


def _finding_title(scope: DoctorScope, message: str) -> str:
    if scope.kind is DoctorScopeKind.WORKSPACE:
        return f"{scope.workspace} - {message}"
    return message


def render_doctor_report(report: DoctorReport) -> str:
    """Render a doctor report as human-facing text."""
    summary = report.summary()
    headline, headline_severity = _headline(summary)
    lines = [
        f"{_stdout_text('Doctor', SOFT_YELLOW, True)} "
        f"{_status_badge(headline, headline_severity)}",
        f"{_section_label('Summary')} {_render_summary(summary)}",
        "",
        _section_label("Checks"),
    ]
    for scope in _scope_summaries(report):
        badge = _status_badge(scope.status(), scope.severity)
        lines.append(f"  {_ICONS[scope.severity]} {scope.label:<10} {badge}")

    if not report.is_empty():
        lines.append("")
        lines.append(_section_label("Findings"))
        for finding in report.findings:
            lines.append(
                f"  {_ICONS[finding.severity]} "
                f"{_status_badge(finding.severity.label(), finding.severity)}  "
                f"{_finding_title(finding.scope, finding.message)}"
            )
            lines.append(f"      {_detail_label('scope')} {_finding_scope(finding.scope)}")
            if finding.path is not None:
                lines.append(f"      {_detail_label('path')} {finding.path}")
            if finding.hint is not None:
                lines.append(f"      {_detail_label('hint')} {finding.hint}")

    return "\n".join(lines) + "\n"


def render_doctor_report_json(report: DoctorReport, compact: bool) -> str:
    """Render a doctor report as JSON, pretty unless `compact` is set."""
    payload = {
        "summary": report.summary().to_dict(),
        "findings": [finding.to_dict() for finding in report.findings],
    }
    try:
        if compact:
            return json.dumps(payload, separators=(",", ":"), ensure_ascii=False)
        return json.dumps(payload, indent=2, ensure_ascii=False)
    except (TypeError, ValueError) as error:
        raise JsonSerializationError(str(error)) from error


def render_shell_init(command_name: str, shell: ShellKind) -> str:
    """Render the shell function wrapping the command for `shell`."""
    source_cmd = "source"
    return (
        f"# jj-navi shell integration for {shell.value}\n"
        f"if command -v {command_name} >/dev/null 2>&1; then\n"
        f"    {command_name}() {{\n"
        "        local directive_file exit_code=0\n"
        '        directive_file="$(mktemp)"\n'
        f'        {DIRECTIVE_FILE_ENV_VAR}="$directive_file" command {command_name} "$@" '
        "|| exit_code=$?\n"
        '        if [[ -s "$directive_file" ]]; then\n'
        f'            {source_cmd} "$directive_file"\n'
        "            if [[ $exit_code -eq 0 ]]; then\n"
        "                exit_code=$?\n"
        "            fi\n"
        "        fi\n"
        '        rm -f "$directive_file"\n'
        '        return "$exit_code"\n'
        "    }\n"
        "fi\n"
    )


def render_shell_install_block(command_name: str, shell: ShellKind) -> str:
    """Render the managed block inserted into a shell rc file."""
    return (
        f"{MANAGED_BLOCK_START}\n"
        f'eval "$(command {command_name} config shell init {shell.value})"\n'
        f"{MANAGED_BLOCK_END}\n"
    )


def write_cd_directive(path: PathLike) -> bool:
    """Append a `cd` directive to the shell integration file, if one is active.

    Returns True when a directive was written.
    """
    directive_file = os.environ.get(DIRECTIVE_FILE_ENV_VAR)
    if directive_file is None or not directive_file.strip():
        return False

    rendered = os.fspath(path)
    try:
        rendered.encode("utf-8")
    except UnicodeEncodeError:
        raise ShellDirectivePathNotUtf8Error() from None

    escaped = escape_shell_single_quotes(rendered)
    with open(directive_file, "a", encoding="utf-8") as handle:
        handle.write(f"cd -- '{escaped}'\n")
    return True


def escape_shell_single_quotes(value: str) -> str:
    """Escape single quotes for POSIX single-quoted strings."""
    return value.replace("'", "'\\''")