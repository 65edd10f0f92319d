"""Goal descriptors and the identifier slug derived from them."""
from __future__ import annotations

import re
from dataclasses import dataclass, field

from .languages import Language

SLUG_PREFIX = "project_"
_NON_ALNUM_PATTERN = re.compile(r"[^a-z0-9]+")


def slugify_goal(goal_text: str) -> str:
    """Derive the file/class identifier for a goal.

    ``"print hello"`` becomes ``"project_print_hello"``. The prefix keeps the
    result a legal Java class name even when the goal starts with a digit.
    """

    normalized = _NON_ALNUM_PATTERN.sub("_", goal_text.strip().lower()).strip("_")
    if not normalized:
        raise ValueError("Goal must contain at least one letter or digit.")
    return f"{SLUG_PREFIX}{normalized}"


@dataclass(frozen=True)
class GoalDescriptor:
    """A language plus free-text goal, as supplied on the command line."""

    language: Language
    goal_text: str
    identifier_slug: str = field(init=False)

    def __post_init__(self) -> None:
        if not self.goal_text or not self.goal_text.strip():
            raise ValueError("Goal description cannot be empty.")
        object.__setattr__(self, "identifier_slug", slugify_goal(self.goal_text))

    @property
    def class_name(self) -> str:
        return self.identifier_slug

    def __str__(self) -> str:
        return f"{self.goal_text} in {self.language.value}"


__all__ = ["GoalDescriptor", "SLUG_PREFIX", "slugify_goal"]
