import logging

from ruamel.yaml import YAML

from skipunchanged.cli.main import SkipUnchangedCLI
from skipunchanged.config import BASE_BRANCH_ENV, Settings
from skipunchanged.core.engine import SkipEngine
from skipunchanged.core.errors import StagedChangesError

PIPELINE = """\
steps:
  - label: "go"
    command: "go test ./..."
    skip_if_unchanged:
      - "**/*.go"
  - label: "docs"
    command: "mkdocs build"
    skip_if_unchanged:
      - "docs/**"
"""


class FakeProvider:
    def __init__(self, files=None, error=None):
        self.files = files or []
        self.error = error
        self.calls = []

    def __call__(self, base_branch):
        self.calls.append(base_branch)
        if self.error:
            raise self.error
        return self.files


def make_cli(provider):
    return SkipUnchangedCLI(engine=SkipEngine(changed_files_provider=provider))


def write_pipeline(tmp_path, text=PIPELINE):
    path = tmp_path / "pipeline.yml"
    path.write_text(text)
    return str(path)


def test_rewrites_to_stdout(tmp_path, capsys, monkeypatch):
    monkeypatch.delenv(BASE_BRANCH_ENV, raising=False)
    provider = FakeProvider(["cmd/app/main.go"])

    code = make_cli(provider).run([write_pipeline(tmp_path)])

    assert code == 0
    assert provider.calls == ["origin/main"]
    out = YAML(typ='safe').load(capsys.readouterr().out)
    assert out["steps"][0] == {"label": "go", "command": "go test ./..."}
    assert out["steps"][1]["skip"] is True


def test_base_branch_from_environment(tmp_path, capsys, monkeypatch):
    monkeypatch.setenv(BASE_BRANCH_ENV, "develop")
    provider = FakeProvider()

    assert make_cli(provider).run([write_pipeline(tmp_path)]) == 0
    assert provider.calls == ["develop"]


def test_flag_beats_environment(tmp_path, capsys, monkeypatch):
    monkeypatch.setenv(BASE_BRANCH_ENV, "develop")
    provider = FakeProvider()

    make_cli(provider).run([write_pipeline(tmp_path), "--base-branch", "origin/release"])
    assert provider.calls == ["origin/release"]


def test_changed_files_from_file_bypasses_git(tmp_path, capsys):
    changed = tmp_path / "changed.txt"
    changed.write_text("docs/index.md\n")
    provider = FakeProvider(error=AssertionError("git should not be called"))
    output = tmp_path / "out.yml"

    code = make_cli(provider).run([
        write_pipeline(tmp_path), "--changed-files", str(changed), "-o", str(output),
    ])

    assert code == 0
    assert provider.calls == []
    assert capsys.readouterr().out == ""
    result = YAML(typ='safe').load(output.read_text())
    assert result["steps"][0]["skip"] is True
    assert "skip" not in result["steps"][1]


def test_staged_changes_abort_before_rewrite(tmp_path, capsys):
    provider = FakeProvider(error=StagedChangesError())

    code = make_cli(provider).run([write_pipeline(tmp_path)])

    captured = capsys.readouterr()
    assert code == 1
    assert captured.out == ""
    assert "staged changes" in captured.err


def test_missing_steps_reports_error_without_output(tmp_path, capsys):
    code = make_cli(FakeProvider()).run([write_pipeline(tmp_path, "env:\n  A: b\n")])

    captured = capsys.readouterr()
    assert code == 1
    assert captured.out == ""
    assert "steps" in captured.err


def test_missing_file_reports_error(tmp_path, capsys):
    code = make_cli(FakeProvider()).run([str(tmp_path / "nope.yml")])
    assert code == 1
    assert capsys.readouterr().out == ""


def test_report_and_diff_go_to_stderr(tmp_path, capsys):
    code = make_cli(FakeProvider()).run([write_pipeline(tmp_path), "--report", "--diff"])

    captured = capsys.readouterr()
    assert code == 0
    assert "Step Decisions" in captured.err
    assert "Step Decisions" not in captured.out
    assert YAML(typ='safe').load(captured.out)["steps"][0]["skip"] is True


def test_settings_log_level():
    class Args:
        pipeline_file = "pipeline.yml"
        base_branch = None
        changed_files = None
        output = None
        diff = False
        report = False
        verbose = False

    assert Settings.from_args(Args, environ={}).log_level == logging.INFO
    assert Settings.from_args(Args, environ={"SKIP_UNCHANGED_LOG_LEVEL": "warning"}).log_level == logging.WARNING
    assert Settings.from_args(Args, environ={"SKIP_UNCHANGED_LOG_LEVEL": "bogus"}).log_level == logging.INFO
    assert Settings.from_args(Args, environ={BASE_BRANCH_ENV: "main"}).base_branch == "main"

    Args.verbose = True
    assert Settings.from_args(Args, environ={}).log_level == logging.DEBUG


def test_engine_result_and_summary():
    engine = SkipEngine(changed_files_provider=FakeProvider())
    result = engine.rewrite(PIPELINE, ["docs/index.md"])

    assert set(result) == {"content", "original", "decisions", "warnings"}
    assert result["original"] == PIPELINE
    assert engine.summarize(result["decisions"]) == {"evaluated": 2, "skipped": 1, "kept": 1}
