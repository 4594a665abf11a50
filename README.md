# jjnavi

Building blocks for navigating Jujutsu (`jj`) workspaces from the shell:
shell integration for bash and zsh, typed diagnostic reports, and the
renderers that turn them into terminal text or JSON. It installs two
equivalent commands, `navi` and its short alias `nv`.

## Installation

```sh
pip install .
pip install ".[test]"   # with pytest, to run the tests
```

## Commands

```sh
navi config shell init bash           # print the shell integration script
navi config shell init zsh
navi config shell install             # shell taken from $SHELL
navi config shell install --shell zsh
navi --version
navi --help
```

`nv` takes exactly the same arguments; the scripts it prints and installs
wrap `nv` instead of `navi`.

`config shell init` without a shell name fails with
`error: shell name required`. Only `bash` and `zsh` are accepted.

### Shell integration

A program cannot change its parent shell's directory. The script printed by
`config shell init` defines a wrapper function of the same name as the
command. The wrapper creates a temporary file, passes its path to the real
command in the `NAVI_DIRECTIVE_FILE` environment variable, and sources the
file afterwards if anything was written to it.

`config shell install` writes a managed block to `~/.bashrc` or `~/.zshrc`,
delimited by `# >>> jj-navi shell init >>>` and
`# <<< jj-navi shell init <<<`, that evaluates the init script on start-up.
Running it again replaces the block in place. If the markers are unbalanced,
duplicated or out of order, it stops with an error naming the rc file and
leaves the file untouched. A missing `$HOME` is an error too.

Errors are printed to standard error and the command exits with status 1;
argument errors exit with status 2.

## Library

- `jjnavi.errors` — `NaviError` and its subclasses; each message starts with
  `error:` and may carry a `hint:` line.
- `jjnavi.doctor` — `DoctorSeverity`, `DoctorFindingCode`, `DoctorScope`,
  `DoctorFinding`, `DoctorSummary` and `DoctorReport`, which sorts findings
  by severity, scope, code and message and counts them by severity.
- `jjnavi.output` — `ShellKind` (with `rc_file_name()` and `detect()` from
  `$SHELL`), `render_doctor_report`, `render_doctor_report_json` (pretty or
  compact), `render_shell_init`, `render_shell_install_block`,
  `render_error_message`, `escape_shell_single_quotes`, and
  `write_cd_directive`, which appends `cd -- '<path>'` to the file named by
  `NAVI_DIRECTIVE_FILE` and returns whether it did.
- `jjnavi.config` — `inspect_managed_block`, `upsert_managed_block`,
  `shell_rc_path`, `run_shell_init` and `run_shell_install`.

Output is coloured only when the stream is a terminal and `NO_COLOR` is not
set.

## What it does not do

The package does not talk to `jj` or look at a repository. There are no
`switch`, `list`, `doctor` or `remove` commands: nothing creates, lists or
forgets workspaces, and no checks produce doctor findings. Doctor reports
and workspace paths have to be built by the caller before they can be
rendered or written as directives.