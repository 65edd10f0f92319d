"""Settings loaded from an optional YAML file and the environment."""
from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator

from aipa.runtime.errors import ConfigurationError

DEFAULT_CONFIG_FILE = "aipa_config.yaml"
DEFAULT_PROJECT_DIR = Path.home() / "aipa_projects"

ENV_PROJECT_DIR = "AIPA_PROJECT_DIR"
ENV_MAX_ATTEMPTS = "AIPA_MAX_ATTEMPTS"


class AipaSettings(BaseModel):
    """Runtime settings for a session.

    ``executables`` maps a default toolchain executable to a replacement,
    e.g. ``{"python": "python3"}``.
    """

    project_dir: Path = Field(default=DEFAULT_PROJECT_DIR)
    max_attempts: int = Field(default=3, ge=1)
    executables: Dict[str, str] = Field(default_factory=dict)

    @field_validator("project_dir", mode="after")
    @classmethod
    def _expand_project_dir(cls, value: Path) -> Path:
        return value.expanduser()

    @field_validator("executables")
    @classmethod
    def _reject_blank_executables(cls, value: Dict[str, str]) -> Dict[str, str]:
        for name, replacement in value.items():
            if not replacement or not replacement.strip():
                raise ValueError(f"Executable override for '{name}' cannot be empty.")
        return value


def _read_config_file(file_path: Path) -> Dict[str, Any]:
    try:
        with open(file_path, "r", encoding="utf-8") as config_file:
            data = yaml.safe_load(config_file) or {}
    except yaml.YAMLError as exc:
        raise ConfigurationError(f"Invalid YAML in '{file_path}': {exc}") from exc
    if not isinstance(data, dict):
        raise ConfigurationError(f"'{file_path}' must contain a mapping at the top level.")
    return data


def load_settings(
    config_file: Optional[str] = None,
    *,
    env: Optional[Mapping[str, str]] = None,
) -> AipaSettings:
    """Load settings from YAML, then apply environment overrides.

    A missing default config file is fine; a missing file that was asked for
    explicitly is an error.
    """

    env = os.environ if env is None else env
    data: Dict[str, Any] = {}
    if config_file is not None:
        path = Path(config_file).expanduser()
        if not path.is_file():
            raise ConfigurationError(f"Configuration file '{config_file}' not found.")
        data = _read_config_file(path)
    elif Path(DEFAULT_CONFIG_FILE).is_file():
        data = _read_config_file(Path(DEFAULT_CONFIG_FILE))

    if env.get(ENV_PROJECT_DIR):
        data["project_dir"] = env[ENV_PROJECT_DIR]
    if env.get(ENV_MAX_ATTEMPTS):
        data["max_attempts"] = env[ENV_MAX_ATTEMPTS]

    try:
        return AipaSettings(**data)
    except ValidationError as exc:
        raise ConfigurationError(f"Invalid settings: {exc}") from exc


__all__ = ["AipaSettings", "DEFAULT_CONFIG_FILE", "load_settings"]
