"""Blocking console capture of operator-supplied replacement source."""
from __future__ import annotations

import sys
from typing import List, Optional, TextIO

from aipa.core.goals import GoalDescriptor

SUBMIT_HINT = "Enter fixed code (press Enter twice to submit):"


def read_submission(stream: TextIO) -> str:
    """Read lines until a blank line follows some content, or until EOF.

    Blank lines before any content are ignored. Surrounding whitespace of the
    captured body is trimmed; everything in between is kept verbatim.
    """

    lines: List[str] = []
    has_content = False
    while True:
        line = stream.readline()
        if not line:
            break
        if not line.strip():
            if has_content:
                break
            lines.append(line)
            continue
        has_content = True
        lines.append(line)
    return "".join(lines).strip()


class ConsoleInputCapture:
    """Shows the failure to the operator and waits for a full replacement body."""

    def __init__(self, stdin: Optional[TextIO] = None, stdout: Optional[TextIO] = None) -> None:
        self._stdin = stdin
        self._stdout = stdout

    def capture_fix(self, goal: GoalDescriptor, current_source: str, error_text: str) -> str:
        out = self._stdout or sys.stdout
        print(f"Task: {goal.goal_text} in {goal.language.value}", file=out)
        print(f"Original code:\n{current_source}", file=out)
        print(f"Error: {error_text}", file=out)
        print(SUBMIT_HINT, file=out)
        print("> ", end="", file=out, flush=True)
        return read_submission(self._stdin or sys.stdin)


__all__ = ["ConsoleInputCapture", "SUBMIT_HINT", "read_submission"]
