"""Ownership and cleanup of the files a session creates."""
from __future__ import annotations

import logging
import shutil
from dataclasses import dataclass
from pathlib import Path
from typing import List, Mapping, Optional, Union

from aipa.core.goals import GoalDescriptor
from aipa.core.languages import DEFAULT_REGISTRY, Language, OutputKind, ToolchainProfile, profile_for
from aipa.logging_utils import SESSION_LOGGER_NAME

logger = logging.getLogger(SESSION_LOGGER_NAME)

CLASS_DIR_SUFFIX = "_classes"


@dataclass(frozen=True)
class SourceArtifact:
    path: Path
    language: Language


@dataclass(frozen=True)
class BuildArtifact:
    """Compiled output: a single executable or a directory of class files."""

    path: Path
    kind: OutputKind

    def exists(self) -> bool:
        if self.kind == OutputKind.CLASS_DIR:
            return self.path.is_dir()
        return self.path.is_file()


class ArtifactManager:
    """Writes session files under ``workdir`` and removes all of them on exit.

    Every path handed out is remembered in creation order. ``cleanup`` is
    best-effort: a path that cannot be removed is logged and reported, never
    raised, so a half-cleaned directory cannot turn a successful run into a
    failure.
    """

    def __init__(
        self,
        workdir: Union[str, Path],
        registry: Mapping[Language, ToolchainProfile] = DEFAULT_REGISTRY,
    ) -> None:
        self._workdir = Path(workdir).expanduser()
        self._registry = registry
        self._tracked: List[Path] = []

    @property
    def workdir(self) -> Path:
        return self._workdir

    @property
    def tracked_paths(self) -> List[Path]:
        return list(self._tracked)

    def __enter__(self) -> "ArtifactManager":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.cleanup()

    def source_path(self, goal: GoalDescriptor) -> Path:
        profile = profile_for(goal.language, self._registry)
        return self._workdir / f"{goal.identifier_slug}.{profile.source_extension}"

    def write_source(self, goal: GoalDescriptor, body: str) -> SourceArtifact:
        """Create or overwrite the goal's source file with ``body``."""

        if not self._workdir.exists():
            self._workdir.mkdir(parents=True)
            # tracked first so cleanup removes it after its contents
            self.track(self._workdir)
        path = self.source_path(goal)
        path.write_text(body, encoding="utf-8")
        self.track(path)
        logger.debug("Saved file: %s", path)
        logger.debug("Saved code:\n%s", body)
        return SourceArtifact(path=path, language=goal.language)

    def build_artifact_for(self, goal: GoalDescriptor) -> Optional[BuildArtifact]:
        profile = profile_for(goal.language, self._registry)
        if profile.output_kind == OutputKind.BINARY:
            path = self._workdir / goal.identifier_slug
        elif profile.output_kind == OutputKind.CLASS_DIR:
            path = self._workdir / f"{goal.identifier_slug}{CLASS_DIR_SUFFIX}"
        else:
            return None
        self.track(path)
        return BuildArtifact(path=path, kind=profile.output_kind)

    def discard(self, artifact: BuildArtifact) -> None:
        """Remove a previous build output so a stale binary is never executed."""

        if not artifact.path.exists():
            return
        _remove_path(artifact.path)
        logger.debug("Removed old build output: %s", artifact.path)

    def prepare_build(self, artifact: BuildArtifact) -> None:
        """Clear the previous output and create the class directory if one is expected."""

        self.discard(artifact)
        if artifact.kind == OutputKind.CLASS_DIR:
            artifact.path.mkdir(parents=True, exist_ok=True)

    def track(self, path: Union[str, Path]) -> None:
        candidate = Path(path)
        if candidate not in self._tracked:
            self._tracked.append(candidate)

    def cleanup(self) -> List[Path]:
        """Remove every tracked path; return the ones that could not be removed."""

        failures: List[Path] = []
        for path in reversed(self._tracked):
            if not path.exists() and not path.is_symlink():
                continue
            try:
                _remove_path(path)
                logger.debug("Removed artifact: %s", path)
            except OSError as exc:
                logger.warning("Could not remove artifact %s: %s", path, exc)
                failures.append(path)
        self._tracked = list(reversed(failures))
        return failures


def _remove_path(path: Path) -> None:
    if path.is_dir() and not path.is_symlink():
        shutil.rmtree(path)
    else:
        path.unlink()


__all__ = ["ArtifactManager", "BuildArtifact", "CLASS_DIR_SUFFIX", "SourceArtifact"]
