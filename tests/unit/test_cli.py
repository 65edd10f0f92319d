from __future__ import annotations

import pytest

from aipa import cli
from aipa.runtime.process_runner import ProcessResult
from aipa.session import orchestrator


class RecordingRunner:
    def __init__(self, results):
        self._results = list(results)
        self.commands = []

    def run(self, command, *, cwd=None):
        self.commands.append(list(command))
        return self._results.pop(0)


@pytest.fixture(autouse=True)
def _isolate(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("AIPA_PROJECT_DIR", raising=False)
    monkeypatch.delenv("AIPA_MAX_ATTEMPTS", raising=False)
    monkeypatch.setattr(cli, "configure_logging", lambda debug=False: None)


def _install_runner(monkeypatch, results):
    runner = RecordingRunner(results)
    monkeypatch.setattr(orchestrator, "ProcessRunner", lambda: runner)
    return runner


def test_success_exits_zero_and_prints_program_output(tmp_path, monkeypatch, capsys):
    runner = _install_runner(
        monkeypatch,
        [ProcessResult(command=("python",), exit_code=0, stdout="AIPA: print hello completed\n", stderr="")],
    )

    code = cli.main(["--language", "python", "--goal", "print hello", "--workdir", str(tmp_path / "w")])

    assert code == cli.EXIT_SUCCESS
    assert "Success! Output: AIPA: print hello completed" in capsys.readouterr().out
    assert runner.commands[0][0] == "python"
    assert not (tmp_path / "w").exists()


def test_run_failure_exits_non_zero(tmp_path, monkeypatch):
    _install_runner(
        monkeypatch,
        [ProcessResult(command=("python",), exit_code=1, stdout="", stderr="Traceback")],
    )

    code = cli.main(["-l", "python", "-g", "print hello", "--workdir", str(tmp_path / "w")])

    assert code == cli.EXIT_FAILED


def test_missing_toolchain_exits_non_zero_and_removes_source(tmp_path, capsys):
    config = tmp_path / "aipa.yaml"
    config.write_text("executables:\n  rustc: aipa-missing-rustc\n", encoding="utf-8")

    code = cli.main(
        ["--language", "rust", "--goal", "print hello", "--workdir", str(tmp_path / "w"), "--config", str(config)]
    )

    assert code == cli.EXIT_ABORTED
    assert "aipa-missing-rustc" in capsys.readouterr().err
    assert not (tmp_path / "w").exists()


def test_unknown_language_is_rejected_by_parser():
    with pytest.raises(SystemExit):
        cli.parse_args(["--language", "cobol", "--goal", "x"])


def test_goal_without_identifier_characters_exits_non_zero(tmp_path, capsys):
    code = cli.main(["--language", "python", "--goal", "???", "--workdir", str(tmp_path / "w")])

    assert code == cli.EXIT_ABORTED
    assert "Goal must contain" in capsys.readouterr().err
