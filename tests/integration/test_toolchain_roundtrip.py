"""End-to-end sessions against the real toolchains, skipped when a toolchain is absent."""
from __future__ import annotations

import io
import shutil

import pytest

from aipa.core.goals import GoalDescriptor
from aipa.core.languages import Language
from aipa.session import BuildRunSession, ConsoleInputCapture, SessionStatus, TemplateGenerator


def _require(*executables: str) -> None:
    for executable in executables:
        if shutil.which(executable) is None:
            pytest.skip(f"{executable} is not available on PATH")


def _run(tmp_path, language: Language, stdin_text: str = ""):
    goal = GoalDescriptor(language=language, goal_text="print hello")
    session = BuildRunSession(
        goal,
        workdir=tmp_path / "work",
        generator=TemplateGenerator(),
        input_capture=ConsoleInputCapture(stdin=io.StringIO(stdin_text), stdout=io.StringIO()),
    )
    return session.run()


@pytest.mark.parametrize(
    "language, executables",
    [
        (Language.PYTHON, ("python",)),
        (Language.RUST, ("rustc",)),
        (Language.CPP, ("g++",)),
        (Language.JAVA, ("javac", "java")),
    ],
)
def test_generated_program_builds_and_runs(tmp_path, language, executables):
    _require(*executables)

    report = _run(tmp_path, language)

    assert report.status is SessionStatus.SUCCEEDED
    assert report.final_output.strip() == "AIPA: print hello completed"
    assert not (tmp_path / "work").exists()


def test_java_repair_loop_with_operator_fix(tmp_path):
    _require("javac", "java")

    class MismatchedGenerator(TemplateGenerator):
        def generate(self, goal):
            return super().generate(goal).replace(goal.class_name, "Hello")

    fixed = TemplateGenerator().generate(GoalDescriptor(language=Language.JAVA, goal_text="print hello"))
    session = BuildRunSession(
        GoalDescriptor(language=Language.JAVA, goal_text="print hello"),
        workdir=tmp_path / "work",
        generator=MismatchedGenerator(),
        input_capture=ConsoleInputCapture(stdin=io.StringIO(fixed + "\n\n"), stdout=io.StringIO()),
    )

    report = session.run()

    assert report.status is SessionStatus.SUCCEEDED
    assert len(report.attempts) == 2
    assert "Hello" in report.attempts[0].error_text
    assert not (tmp_path / "work").exists()
