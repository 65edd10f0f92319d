from __future__ import annotations

import pytest

from aipa.core.goals import GoalDescriptor
from aipa.core.languages import Language
from aipa.runtime.errors import GenerationError
from aipa.session.generator import TemplateGenerator


def test_python_template_prints_completion_message():
    goal = GoalDescriptor(language=Language.PYTHON, goal_text="print hello")

    assert TemplateGenerator().generate(goal) == "print('AIPA: print hello completed')\n"


def test_java_template_declares_slug_class():
    goal = GoalDescriptor(language=Language.JAVA, goal_text="print hello")

    source = TemplateGenerator().generate(goal)

    assert "public class project_print_hello {" in source
    assert 'System.out.println("AIPA: print hello completed");' in source


def test_rust_and_cpp_templates_escape_quotes():
    rust = TemplateGenerator().generate(GoalDescriptor(language=Language.RUST, goal_text='say "hi"'))
    cpp = TemplateGenerator().generate(GoalDescriptor(language=Language.CPP, goal_text='say "hi"'))

    assert 'println!("AIPA: say \\"hi\\" completed")' in rust
    assert 'std::cout << "AIPA: say \\"hi\\" completed"' in cpp


def test_missing_template_raises_generation_error():
    generator = TemplateGenerator(templates={})

    with pytest.raises(GenerationError):
        generator.generate(GoalDescriptor(language=Language.RUST, goal_text="print hello"))


def test_rust_template_doubles_format_braces():
    source = TemplateGenerator().generate(GoalDescriptor(language=Language.RUST, goal_text="print {x}"))

    assert 'println!("AIPA: print {{x}} completed")' in source


@pytest.mark.parametrize(
    "language, expected",
    [
        (Language.RUST, 'println!("AIPA: line one\\nline two completed")'),
        (Language.PYTHON, "print('AIPA: line one\\nline two completed')"),
        (Language.CPP, 'std::cout << "AIPA: line one\\nline two completed"'),
        (Language.JAVA, 'System.out.println("AIPA: line one\\nline two completed")'),
    ],
)
def test_newlines_in_goal_are_escaped_inside_the_literal(language, expected):
    source = TemplateGenerator().generate(GoalDescriptor(language=language, goal_text="line one\nline two"))

    assert expected in source


def test_python_template_escapes_single_quotes():
    source = TemplateGenerator().generate(GoalDescriptor(language=Language.PYTHON, goal_text="it's done"))

    assert source == "print('AIPA: it\\'s done completed')\n"
