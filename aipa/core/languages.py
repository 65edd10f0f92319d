"""Static per-language toolchain profiles."""
from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum
from types import MappingProxyType
from typing import Dict, List, Mapping, Optional, Tuple

CommandTemplate = Tuple[str, ...]


class Language(str, Enum):
    RUST = "rust"
    PYTHON = "python"
    CPP = "cpp"
    JAVA = "java"


class OutputKind(str, Enum):
    """What a successful compile step leaves on disk."""

    NONE = "none"
    BINARY = "binary"
    CLASS_DIR = "class_dir"


@dataclass(frozen=True)
class ToolchainProfile:
    """How to build and execute one language.

    Templates are argument tuples whose entries may reference ``{source}``,
    ``{binary}``, ``{class_dir}``, ``{class_name}`` and ``{workdir}``.
    """

    language: Language
    source_extension: str
    run_command: CommandTemplate
    compile_command: Optional[CommandTemplate] = None
    output_kind: OutputKind = OutputKind.NONE

    @property
    def requires_compile(self) -> bool:
        return self.compile_command is not None

    def render_compile(self, **values: str) -> Optional[List[str]]:
        if self.compile_command is None:
            return None
        return _render(self.compile_command, values)

    def render_run(self, **values: str) -> List[str]:
        return _render(self.run_command, values)

    def with_executables(self, executables: Mapping[str, str]) -> "ToolchainProfile":
        """Return a copy whose leading executables are swapped per ``executables``."""

        if not executables:
            return self
        compile_command = self.compile_command
        if compile_command is not None:
            compile_command = _swap_executable(compile_command, executables)
        return replace(
            self,
            compile_command=compile_command,
            run_command=_swap_executable(self.run_command, executables),
        )


def _render(template: CommandTemplate, values: Mapping[str, str]) -> List[str]:
    return [part.format(**values) for part in template]


def _swap_executable(template: CommandTemplate, executables: Mapping[str, str]) -> CommandTemplate:
    head, *rest = template
    return (executables.get(head, head), *rest)


_DEFAULT_PROFILES: Dict[Language, ToolchainProfile] = {
    Language.RUST: ToolchainProfile(
        language=Language.RUST,
        source_extension="rs",
        compile_command=("rustc", "{source}", "-o", "{binary}"),
        run_command=("{binary}",),
        output_kind=OutputKind.BINARY,
    ),
    Language.PYTHON: ToolchainProfile(
        language=Language.PYTHON,
        source_extension="py",
        run_command=("python", "{source}"),
    ),
    Language.CPP: ToolchainProfile(
        language=Language.CPP,
        source_extension="cpp",
        compile_command=("g++", "{source}", "-o", "{binary}"),
        run_command=("{binary}",),
        output_kind=OutputKind.BINARY,
    ),
    Language.JAVA: ToolchainProfile(
        language=Language.JAVA,
        source_extension="java",
        compile_command=("javac", "-d", "{class_dir}", "{source}"),
        run_command=("java", "-cp", "{class_dir}", "{class_name}"),
        output_kind=OutputKind.CLASS_DIR,
    ),
}

DEFAULT_REGISTRY: Mapping[Language, ToolchainProfile] = MappingProxyType(dict(_DEFAULT_PROFILES))


def build_registry(executables: Optional[Mapping[str, str]] = None) -> Mapping[Language, ToolchainProfile]:
    """Build the read-only language -> profile table, applying executable overrides."""

    if not executables:
        return DEFAULT_REGISTRY
    return MappingProxyType(
        {language: profile.with_executables(executables) for language, profile in _DEFAULT_PROFILES.items()}
    )


def profile_for(
    language: Language,
    registry: Mapping[Language, ToolchainProfile] = DEFAULT_REGISTRY,
) -> ToolchainProfile:
    return registry[language]


__all__ = [
    "CommandTemplate",
    "DEFAULT_REGISTRY",
    "Language",
    "OutputKind",
    "ToolchainProfile",
    "build_registry",
    "profile_for",
]
