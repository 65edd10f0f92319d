"""Exception types shared across the build/run pipeline."""
from __future__ import annotations

from typing import Sequence, Tuple


class AipaError(RuntimeError):
    """Base class for failures that abort a session."""


class GenerationError(AipaError):
    """Raised when no initial source text can be produced for a goal."""


class ConfigurationError(AipaError):
    """Raised when settings cannot be loaded or validated."""


class LaunchFailure(AipaError):
    """Raised when a toolchain executable cannot be started at all."""

    def __init__(self, command: Sequence[str], reason: str) -> None:
        self.command: Tuple[str, ...] = tuple(command)
        self.reason = reason
        executable = self.command[0] if self.command else "<empty command>"
        super().__init__(f"Failed to launch '{executable}': {reason}")


__all__ = ["AipaError", "ConfigurationError", "GenerationError", "LaunchFailure"]
