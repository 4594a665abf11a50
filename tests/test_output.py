import json
import io

import pytest

from jjnavi.doctor import (
    DoctorFinding,
    DoctorFindingCode,
    DoctorReport,
    DoctorScope,
    DoctorSeverity,
)
from jjnavi.errors import (
    ShellDetectionError,
    ShellDirectivePathNotUtf8Error,
    UnsupportedShellError,
)
from jjnavi.output import (
    DIRECTIVE_FILE_ENV_VAR,
    MANAGED_BLOCK_END,
    MANAGED_BLOCK_START,
    ShellKind,
    escape_shell_single_quotes,
    render_doctor_report,
    render_doctor_report_json,
    render_error_message,
    render_shell_init,
    render_shell_install_block,
    write_cd_directive,
)


@pytest.fixture(autouse=True)
def _no_color(monkeypatch):
    monkeypatch.setenv("NO_COLOR", "1")


class _FakeTty(io.StringIO):
    def isatty(self):
        return True


def _warning_report():
    return DoctorReport(
        findings=[
            DoctorFinding(
                severity=DoctorSeverity.WARNING,
                code=DoctorFindingCode.WORKSPACE_DIRECTORY_MISSING,
                scope=DoctorScope.for_workspace("feature-auth"),
                message="workspace 'feature-auth' directory is missing",
                path="../repo.feature-auth",
                hint="last known path: ../repo.feature-auth",
            )
        ]
    )


def _info_report():
    return DoctorReport(
        findings=[
            DoctorFinding(
                severity=DoctorSeverity.INFO,
                code=DoctorFindingCode.JJ_ONLY_WORKSPACE,
                scope=DoctorScope.for_workspace("feature-auth"),
                message="workspace 'feature-auth' exists in jj but has no navi metadata",
            )
        ]
    )


def test_renders_bash_shell_init():
    rendered = render_shell_init("navi", ShellKind.BASH)
    assert "navi()" in rendered
    assert DIRECTIVE_FILE_ENV_VAR in rendered
    assert 'command navi "$@"' in rendered
    assert rendered.startswith("# jj-navi shell integration for bash\n")


def test_renders_zsh_shell_init():
    rendered = render_shell_init("navi", ShellKind.ZSH)
    assert "navi()" in rendered
    assert DIRECTIVE_FILE_ENV_VAR in rendered
    assert 'source "$directive_file"' in rendered


def test_renders_shell_install_block_zsh():
    rendered = render_shell_install_block("navi", ShellKind.ZSH)
    assert MANAGED_BLOCK_START in rendered
    assert 'eval "$(command navi config shell init zsh)"' in rendered
    assert MANAGED_BLOCK_END in rendered


def test_renders_shell_install_block_bash():
    rendered = render_shell_install_block("nv", ShellKind.BASH)
    assert rendered == (
        f"{MANAGED_BLOCK_START}\n"
        'eval "$(command nv config shell init bash)"\n'
        f"{MANAGED_BLOCK_END}\n"
    )


def test_escapes_single_quotes_for_shell_directives():
    assert (
        escape_shell_single_quotes("../space dir/feature-auth's")
        == "../space dir/feature-auth'\\''s"
    )


def test_renders_error_message_without_losing_prefixes():
    rendered = render_error_message("error: bad\nhint: try again")
    assert "error:" in rendered
    assert "hint:" in rendered
    assert rendered == "error: bad\nhint: try again"


def test_error_message_colored_on_terminal(monkeypatch):
    monkeypatch.delenv("NO_COLOR")
    monkeypatch.setattr("sys.stderr", _FakeTty())
    rendered = render_error_message("error: bad\nplain")
    assert rendered == "\x1b[38;5;179merror:\x1b[0m bad\nplain"


def test_renders_doctor_report():
    rendered = render_doctor_report(_warning_report())
    assert "Doctor [ warnings found ]" in rendered
    assert "Summary 1 warning" in rendered
    assert "Checks" in rendered
    assert "! workspaces [ warning (1 finding) ]" in rendered
    assert "Findings" in rendered
    assert (
        "! [ warning ]  feature-auth - workspace 'feature-auth' directory is missing"
        in rendered
    )
    assert "scope: workspace:feature-auth" in rendered
    assert "path: ../repo.feature-auth" in rendered
    assert "hint: last known path: ../repo.feature-auth" in rendered


def test_renders_healthy_doctor_report_with_checks():
    rendered = render_doctor_report(DoctorReport())
    assert "Doctor [ healthy ]" in rendered
    assert "Summary ok" in rendered
    assert "o repo       [ ok ]" in rendered
    assert "o workspaces [ ok ]" in rendered
    assert "o shell      [ ok ]" in rendered
    assert "Findings" not in rendered


def test_doctor_report_with_errors_needs_attention():
    report = DoctorReport(
        findings=[
            DoctorFinding(
                severity=DoctorSeverity.ERROR,
                code=DoctorFindingCode.ORPHANED_WORKSPACE,
                scope=DoctorScope.repo(),
                message="current directory is no longer a registered jj workspace",
            ),
            DoctorFinding(
                severity=DoctorSeverity.WARNING,
                code=DoctorFindingCode.SHELL_RC_MISSING,
                scope=DoctorScope.repo(),
                message="rc missing",
            ),
        ]
    )
    rendered = render_doctor_report(report)
    assert "Doctor [ attention needed ]" in rendered
    assert "Summary 1 error, 1 warning" in rendered
    assert "x repo       [ error (2 findings) ]" in rendered
    assert "x [ error ]  current directory is no longer a registered jj workspace" in rendered
    assert "scope: repo" in rendered


def test_renders_doctor_report_json():
    rendered = render_doctor_report_json(_info_report(), False)
    assert rendered.startswith("{\n")
    assert '"warnings": 0' in rendered
    assert '"code": "jj_only_workspace"' in rendered


def test_doctor_report_json_compact_single_line():
    rendered = render_doctor_report_json(_info_report(), True)
    assert "\n" not in rendered
    assert '"code":"jj_only_workspace"' in rendered
    data = json.loads(rendered)
    assert data["summary"] == {"errors": 0, "warnings": 0, "info": 1}
    assert data["findings"][0]["scope"] == {"kind": "workspace", "workspace": "feature-auth"}
    assert "path" not in data["findings"][0]
    assert "hint" not in data["findings"][0]


def test_shell_kind_rc_file_names():
    assert ShellKind.BASH.rc_file_name() == ".bashrc"
    assert ShellKind.ZSH.rc_file_name() == ".zshrc"


def test_shell_kind_detect(monkeypatch):
    monkeypatch.setenv("SHELL", "/bin/zsh")
    assert ShellKind.detect() is ShellKind.ZSH
    monkeypatch.setenv("SHELL", "/usr/bin/bash")
    assert ShellKind.detect() is ShellKind.BASH


def test_shell_kind_detect_unsupported(monkeypatch):
    monkeypatch.setenv("SHELL", "/usr/bin/fish")
    with pytest.raises(UnsupportedShellError) as info:
        ShellKind.detect()
    assert info.value.shell == "fish"


def test_shell_kind_detect_missing(monkeypatch):
    monkeypatch.delenv("SHELL", raising=False)
    with pytest.raises(ShellDetectionError):
        ShellKind.detect()


def test_write_cd_directive_without_env(monkeypatch):
    monkeypatch.delenv(DIRECTIVE_FILE_ENV_VAR, raising=False)
    assert write_cd_directive("../repo.feature-auth") is False


def test_write_cd_directive_blank_env(monkeypatch):
    monkeypatch.setenv(DIRECTIVE_FILE_ENV_VAR, "  ")
    assert write_cd_directive("../repo.feature-auth") is False


def test_write_cd_directive_appends_escaped(monkeypatch, tmp_path):
    target = tmp_path / "navi-directives.sh"
    monkeypatch.setenv(DIRECTIVE_FILE_ENV_VAR, str(target))
    assert write_cd_directive("../repo.space feature-auth's") is True
    assert write_cd_directive("../other") is True
    assert target.read_text(encoding="utf-8") == (
        "cd -- '../repo.space feature-auth'\\''s'\ncd -- '../other'\n"
    )


def test_write_cd_directive_rejects_non_utf8(monkeypatch, tmp_path):
    monkeypatch.setenv(DIRECTIVE_FILE_ENV_VAR, str(tmp_path / "d.sh"))
    with pytest.raises(ShellDirectivePathNotUtf8Error):
        write_cd_directive("../bad\udcff")