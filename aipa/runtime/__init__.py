"""Process execution and shared error types."""

from .errors import AipaError, ConfigurationError, GenerationError, LaunchFailure
from .process_runner import ProcessResult, ProcessRunner

__all__ = [
    "AipaError",
    "ConfigurationError",
    "GenerationError",
    "LaunchFailure",
    "ProcessResult",
    "ProcessRunner",
]
