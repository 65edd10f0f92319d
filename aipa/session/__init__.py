"""Session orchestration: artifacts, generation, operator repair and the state machine."""

from .artifacts import ArtifactManager, BuildArtifact, SourceArtifact
from .generator import COMPLETION_MESSAGE, TemplateGenerator
from .input_capture import ConsoleInputCapture, read_submission
from .orchestrator import (
    MAX_ATTEMPTS,
    AttemptOutcome,
    AttemptRecord,
    BuildRunSession,
    SessionReport,
    SessionState,
    SessionStatus,
)

__all__ = [
    "ArtifactManager",
    "AttemptOutcome",
    "AttemptRecord",
    "BuildArtifact",
    "BuildRunSession",
    "COMPLETION_MESSAGE",
    "ConsoleInputCapture",
    "MAX_ATTEMPTS",
    "SessionReport",
    "SessionState",
    "SessionStatus",
    "SourceArtifact",
    "TemplateGenerator",
    "read_submission",
]
