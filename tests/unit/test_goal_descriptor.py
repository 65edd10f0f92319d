from __future__ import annotations

import pytest

from aipa.core.goals import GoalDescriptor, slugify_goal
from aipa.core.languages import Language


def test_slug_is_prefixed_lowercase_with_underscores():
    assert slugify_goal("print hello") == "project_print_hello"
    assert slugify_goal("Sum  two-Numbers!") == "project_sum_two_numbers"


def test_slug_is_deterministic():
    assert slugify_goal("Print Hello") == slugify_goal("print   hello")


def test_descriptor_exposes_slug_as_java_class_name():
    goal = GoalDescriptor(language=Language.JAVA, goal_text="print hello")

    assert goal.identifier_slug == "project_print_hello"
    assert goal.class_name == "project_print_hello"


@pytest.mark.parametrize("text", ["", "   ", "!!!"])
def test_goal_without_identifier_characters_is_rejected(text):
    with pytest.raises(ValueError):
        GoalDescriptor(language=Language.PYTHON, goal_text=text)
