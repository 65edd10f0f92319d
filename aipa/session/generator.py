"""Template-based initial source generation."""
from __future__ import annotations

import logging
from typing import Callable, Dict, Optional

from aipa.core.goals import GoalDescriptor
from aipa.core.languages import Language
from aipa.logging_utils import SESSION_LOGGER_NAME
from aipa.runtime.errors import GenerationError

logger = logging.getLogger(SESSION_LOGGER_NAME)

COMPLETION_MESSAGE = "AIPA: {goal} completed"


_CONTROL_ESCAPES = {"\\": "\\\\", "\n": "\\n", "\r": "\\r", "\t": "\\t"}


def _escape(text: str, quote: str) -> str:
    escapes = dict(_CONTROL_ESCAPES)
    escapes[quote] = "\\" + quote
    return "".join(escapes.get(char, char) for char in text)


def _escape_c_like(text: str) -> str:
    return _escape(text, '"')


def _escape_rust(text: str) -> str:
    # println! treats braces as format placeholders
    return _escape_c_like(text).replace("{", "{{").replace("}", "}}")


def _escape_python(text: str) -> str:
    return _escape(text, "'")


def _rust_template(goal: GoalDescriptor, message: str) -> str:
    return f'fn main() {{ println!("{_escape_rust(message)}"); }}\n'


def _python_template(goal: GoalDescriptor, message: str) -> str:
    return f"print('{_escape_python(message)}')\n"


def _cpp_template(goal: GoalDescriptor, message: str) -> str:
    return (
        "#include <iostream>\n"
        "int main() {\n"
        f'    std::cout << "{_escape_c_like(message)}" << std::endl;\n'
        "    return 0;\n"
        "}\n"
    )


def _java_template(goal: GoalDescriptor, message: str) -> str:
    return (
        f"public class {goal.class_name} {{\n"
        "    public static void main(String[] args) {\n"
        f'        System.out.println("{_escape_c_like(message)}");\n'
        "    }\n"
        "}\n"
    )


Template = Callable[[GoalDescriptor, str], str]

_TEMPLATES: Dict[Language, Template] = {
    Language.RUST: _rust_template,
    Language.PYTHON: _python_template,
    Language.CPP: _cpp_template,
    Language.JAVA: _java_template,
}


class TemplateGenerator:
    """Produces a minimal program announcing that the goal completed."""

    def __init__(self, templates: Optional[Dict[Language, Template]] = None) -> None:
        self._templates = dict(templates if templates is not None else _TEMPLATES)

    def generate(self, goal: GoalDescriptor) -> str:
        template = self._templates.get(goal.language)
        if template is None:
            raise GenerationError(f"No source template for language '{goal.language.value}'.")
        message = COMPLETION_MESSAGE.format(goal=goal.goal_text.strip())
        source = template(goal, message)
        logger.debug("Generated %s source for goal '%s'", goal.language.value, goal.goal_text)
        return source


__all__ = ["COMPLETION_MESSAGE", "TemplateGenerator"]
