"""Synchronous subprocess execution with structured results."""
from __future__ import annotations

import logging
import subprocess
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Sequence, Tuple, Union

from aipa.logging_utils import PROCESS_LOGGER_NAME

from .errors import LaunchFailure

logger = logging.getLogger(PROCESS_LOGGER_NAME)


@dataclass(frozen=True)
class ProcessResult:
    """Snapshot of one finished subprocess."""

    command: Tuple[str, ...]
    exit_code: int
    stdout: str
    stderr: str
    duration: float = 0.0

    @property
    def succeeded(self) -> bool:
        return self.exit_code == 0


class ProcessRunner:
    """Runs a command to completion and reports what happened.

    A non-zero exit status is an ordinary result. Only a command that cannot
    be started raises, as :class:`LaunchFailure`. There is no timeout: a
    toolchain that never exits blocks the caller.
    """

    def run(
        self,
        command: Sequence[str],
        *,
        cwd: Optional[Union[str, Path]] = None,
    ) -> ProcessResult:
        argv = [str(part) for part in command]
        if not argv:
            raise LaunchFailure(argv, "empty command line")
        logger.debug("Running: %s (cwd=%s)", " ".join(argv), cwd)
        started = time.monotonic()
        try:
            completed = subprocess.run(
                argv,
                cwd=str(cwd) if cwd is not None else None,
                capture_output=True,
                text=True,
                errors="replace",
                check=False,
            )
        except OSError as exc:
            raise LaunchFailure(argv, exc.strerror or str(exc)) from exc
        result = ProcessResult(
            command=tuple(argv),
            exit_code=completed.returncode,
            stdout=completed.stdout or "",
            stderr=completed.stderr or "",
            duration=time.monotonic() - started,
        )
        logger.debug("stdout: %s", result.stdout)
        logger.debug("stderr: %s", result.stderr)
        logger.debug("exit code: %s", result.exit_code)
        return result


__all__ = ["ProcessResult", "ProcessRunner"]
