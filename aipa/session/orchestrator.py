"""Generate → compile → run → repair state machine for a single goal."""
from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace
from enum import Enum
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Protocol, Tuple, Union

from aipa.core.goals import GoalDescriptor
from aipa.core.languages import DEFAULT_REGISTRY, Language, OutputKind, ToolchainProfile, profile_for
from aipa.logging_utils import SESSION_LOGGER_NAME
from aipa.runtime.errors import GenerationError, LaunchFailure
from aipa.runtime.process_runner import ProcessResult, ProcessRunner

from .artifacts import ArtifactManager, BuildArtifact, SourceArtifact

MAX_ATTEMPTS = 3
UNKNOWN_ERROR = "Unknown error"


class SourceGenerator(Protocol):
    def generate(self, goal: GoalDescriptor) -> str: ...


class InputCapture(Protocol):
    def capture_fix(self, goal: GoalDescriptor, current_source: str, error_text: str) -> str: ...


class Runner(Protocol):
    def run(self, command, *, cwd=None) -> ProcessResult: ...


class SessionState(str, Enum):
    INIT = "init"
    GENERATED = "generated"
    COMPILING = "compiling"
    COMPILED = "compiled"
    RUNNING = "running"
    AWAITING_FIX = "awaiting_fix"
    SUCCEEDED = "succeeded"
    RUN_FAILED = "run_failed"
    EXHAUSTED = "exhausted"


class AttemptOutcome(str, Enum):
    COMPILE_FAILED = "compile_failed"
    RUN_FAILED = "run_failed"
    SUCCESS = "success"


class SessionStatus(str, Enum):
    SUCCEEDED = "succeeded"
    RUN_FAILED = "run_failed"
    EXHAUSTED = "exhausted"


@dataclass(frozen=True)
class AttemptRecord:
    """One compile (when required) plus run cycle."""

    attempt_number: int
    outcome: AttemptOutcome
    compile_result: Optional[ProcessResult] = None
    run_result: Optional[ProcessResult] = None

    @property
    def error_text(self) -> Optional[str]:
        if self.outcome == AttemptOutcome.COMPILE_FAILED:
            return _failure_text(self.compile_result)
        if self.outcome == AttemptOutcome.RUN_FAILED:
            return _failure_text(self.run_result)
        return None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "attempt": self.attempt_number,
            "outcome": self.outcome.value,
            "compile_exit_code": self.compile_result.exit_code if self.compile_result else None,
            "run_exit_code": self.run_result.exit_code if self.run_result else None,
            "error": self.error_text,
        }


def _failure_text(result: Optional[ProcessResult]) -> str:
    if result is None:
        return UNKNOWN_ERROR
    return result.stderr or result.stdout or UNKNOWN_ERROR


@dataclass(frozen=True)
class SessionReport:
    """Final outcome of a session plus every attempt that led to it."""

    status: SessionStatus
    goal: GoalDescriptor
    attempts: Tuple[AttemptRecord, ...] = field(default_factory=tuple)
    final_output: str = ""

    @property
    def success(self) -> bool:
        return self.status == SessionStatus.SUCCEEDED

    def summary(self) -> str:
        status_symbol = "✅" if self.success else "❌"
        lines = [f"{status_symbol} {self.goal} – {len(self.attempts)} attempt(s), {self.status.value}"]
        for record in self.attempts:
            status_icon = "✅" if record.outcome == AttemptOutcome.SUCCESS else "❌"
            lines.append(f"  - Attempt {record.attempt_number}: {status_icon} {record.outcome.value}")
            if record.error_text:
                lines.extend(f"    {line}" for line in record.error_text.rstrip().splitlines())
        if self.success:
            lines.append(f"Success! Output: {self.final_output}")
        elif self.status == SessionStatus.EXHAUSTED:
            lines.append(f"Error after {len(self.attempts)} attempts.")
        else:
            lines.append("Program exited with a non-zero status.")
        return "\n".join(lines)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "status": self.status.value,
            "language": self.goal.language.value,
            "goal": self.goal.goal_text,
            "attempt_count": len(self.attempts),
            "attempts": [record.to_dict() for record in self.attempts],
            "final_output": self.final_output,
        }


class BuildRunSession:
    """Drive one goal from generated source to a terminal outcome.

    Only compile failures enter the repair loop: the compiler's stderr is shown
    to the operator, whose replacement body overwrites the source file in
    place. A program that compiles but exits non-zero ends the session with
    ``RUN_FAILED``. A toolchain that cannot be launched raises
    :class:`LaunchFailure` immediately. Every file the session created is
    removed before ``run`` returns or raises.
    """

    def __init__(
        self,
        goal: GoalDescriptor,
        *,
        workdir: Union[str, Path],
        generator: SourceGenerator,
        input_capture: InputCapture,
        registry: Mapping[Language, ToolchainProfile] = DEFAULT_REGISTRY,
        process_runner: Optional[Runner] = None,
        max_attempts: int = MAX_ATTEMPTS,
    ) -> None:
        if max_attempts < 1:
            raise ValueError("max_attempts must be >= 1")
        self._goal = goal
        self._profile = profile_for(goal.language, registry)
        self._generator = generator
        self._input_capture = input_capture
        self._runner = process_runner or ProcessRunner()
        self._max_attempts = max_attempts
        self._artifacts = ArtifactManager(workdir, registry)
        self._attempts: List[AttemptRecord] = []
        self._state = SessionState.INIT
        self._source: Optional[SourceArtifact] = None
        self._logger = logging.getLogger(SESSION_LOGGER_NAME)

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def attempts(self) -> Tuple[AttemptRecord, ...]:
        return tuple(self._attempts)

    @property
    def artifacts(self) -> ArtifactManager:
        return self._artifacts

    def run(self) -> SessionReport:
        if self._state != SessionState.INIT:
            raise RuntimeError("A BuildRunSession can only be run once.")
        body = self._generate()
        try:
            with self._artifacts:
                return self._run_attempts(body)
        except LaunchFailure as exc:
            self._state = SessionState.EXHAUSTED
            self._logger.error("%s", exc)
            raise

    def _generate(self) -> str:
        try:
            return self._generator.generate(self._goal)
        except GenerationError:
            raise
        except Exception as exc:
            raise GenerationError(f"Could not generate source for {self._goal}: {exc}") from exc

    def _run_attempts(self, body: str) -> SessionReport:
        self._write(body)
        for attempt_number in range(1, self._max_attempts + 1):
            record = self._attempt(attempt_number)
            self._attempts.append(record)
            if record.outcome == AttemptOutcome.SUCCESS:
                self._state = SessionState.SUCCEEDED
                return self._report(SessionStatus.SUCCEEDED, record.run_result.stdout)
            if record.outcome == AttemptOutcome.RUN_FAILED:
                self._state = SessionState.RUN_FAILED
                return self._report(SessionStatus.RUN_FAILED)

            error_text = record.error_text
            self._logger.warning("Attempt %s/%s failed to compile", attempt_number, self._max_attempts)
            if attempt_number == self._max_attempts:
                break
            self._state = SessionState.AWAITING_FIX
            body = self._input_capture.capture_fix(self._goal, body, error_text)
            self._write(body)

        self._state = SessionState.EXHAUSTED
        return self._report(SessionStatus.EXHAUSTED)

    def _write(self, body: str) -> None:
        self._source = self._artifacts.write_source(self._goal, body)
        self._state = SessionState.GENERATED

    def _attempt(self, attempt_number: int) -> AttemptRecord:
        build = self._artifacts.build_artifact_for(self._goal)
        values = self._template_values(build)
        compile_result: Optional[ProcessResult] = None

        if self._profile.requires_compile:
            if build is not None:
                self._artifacts.prepare_build(build)
            self._state = SessionState.COMPILING
            compile_result = self._runner.run(self._profile.render_compile(**values), cwd=self._artifacts.workdir)
            if not compile_result.succeeded:
                return AttemptRecord(attempt_number, AttemptOutcome.COMPILE_FAILED, compile_result)
            missing = self._missing_output(build)
            if missing is not None:
                # compiler exited 0 but left nothing to execute
                compile_result = replace(
                    compile_result,
                    stderr=compile_result.stderr + f"Build output not created at {missing}\n",
                )
                return AttemptRecord(attempt_number, AttemptOutcome.COMPILE_FAILED, compile_result)
            self._state = SessionState.COMPILED

        self._state = SessionState.RUNNING
        run_result = self._runner.run(self._profile.render_run(**values), cwd=self._artifacts.workdir)
        outcome = AttemptOutcome.SUCCESS if run_result.succeeded else AttemptOutcome.RUN_FAILED
        return AttemptRecord(attempt_number, outcome, compile_result, run_result)

    def _template_values(self, build: Optional[BuildArtifact]) -> Dict[str, str]:
        workdir = self._artifacts.workdir.resolve()
        values = {
            "source": str(self._source.path.resolve()),
            "workdir": str(workdir),
            "class_name": self._goal.class_name,
            "binary": "",
            "class_dir": "",
        }
        if build is not None:
            key = "class_dir" if build.kind == OutputKind.CLASS_DIR else "binary"
            values[key] = str(build.path.resolve())
        return values

    def _missing_output(self, build: Optional[BuildArtifact]) -> Optional[Path]:
        if build is None:
            return None
        if build.kind == OutputKind.CLASS_DIR:
            expected = build.path / f"{self._goal.class_name}.class"
        else:
            expected = build.path
        return None if expected.is_file() else expected

    def _report(self, status: SessionStatus, final_output: str = "") -> SessionReport:
        return SessionReport(
            status=status,
            goal=self._goal,
            attempts=tuple(self._attempts),
            final_output=final_output,
        )


__all__ = [
    "AttemptOutcome",
    "AttemptRecord",
    "BuildRunSession",
    "InputCapture",
    "MAX_ATTEMPTS",
    "SessionReport",
    "SessionState",
    "SessionStatus",
    "SourceGenerator",
]
