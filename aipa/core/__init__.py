"""Language profiles and goal descriptors."""

from .goals import GoalDescriptor, slugify_goal
from .languages import (
    DEFAULT_REGISTRY,
    Language,
    OutputKind,
    ToolchainProfile,
    build_registry,
    profile_for,
)

__all__ = [
    "DEFAULT_REGISTRY",
    "GoalDescriptor",
    "Language",
    "OutputKind",
    "ToolchainProfile",
    "build_registry",
    "profile_for",
    "slugify_goal",
]
