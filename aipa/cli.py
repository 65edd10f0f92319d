"""Command-line entry point."""
from __future__ import annotations

import argparse
import logging
import sys
from typing import Optional, Sequence

from dotenv import load_dotenv

from aipa.config import load_settings
from aipa.core.goals import GoalDescriptor
from aipa.core.languages import Language, build_registry
from aipa.logging_utils import configure_logging
from aipa.runtime.errors import AipaError
from aipa.session import BuildRunSession, ConsoleInputCapture, TemplateGenerator

logger = logging.getLogger(__name__)

EXIT_SUCCESS = 0
EXIT_FAILED = 1
EXIT_ABORTED = 2


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="AI Programming Agent (AIPA)")
    parser.add_argument(
        "-l",
        "--language",
        required=True,
        choices=[language.value for language in Language],
        help="Programming language of the generated program",
    )
    parser.add_argument("-g", "--goal", required=True, help="Task goal (e.g. 'print hello')")
    parser.add_argument("-d", "--debug", action="store_true", help="Enable debug output")
    parser.add_argument("--workdir", default=None, help="Directory for generated files (default: ~/aipa_projects)")
    parser.add_argument("--config", default=None, help="Path to a YAML settings file")
    return parser.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = parse_args(argv)
    load_dotenv()
    configure_logging(args.debug)

    try:
        settings = load_settings(args.config)
        goal = GoalDescriptor(language=Language(args.language), goal_text=args.goal)
    except (AipaError, ValueError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return EXIT_ABORTED

    workdir = args.workdir or settings.project_dir
    logger.debug("Project dir: %s", workdir)
    session = BuildRunSession(
        goal,
        workdir=workdir,
        generator=TemplateGenerator(),
        input_capture=ConsoleInputCapture(),
        registry=build_registry(settings.executables),
        max_attempts=settings.max_attempts,
    )
    try:
        report = session.run()
    except AipaError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return EXIT_ABORTED

    print(report.summary())
    return EXIT_SUCCESS if report.success else EXIT_FAILED


if __name__ == "__main__":
    sys.exit(main())
