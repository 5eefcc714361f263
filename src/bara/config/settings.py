"""Project configuration file handling.

Configuration discovery:
- Use an explicit ``--config`` path when given.
- Otherwise walk up from the working directory looking for ``.bara.yml``.
- When nothing is found every value falls back to its default and command
  line flags alone drive the run.
"""

from __future__ import annotations

from pathlib import Path
from typing import List, Optional

import yaml
from pydantic import BaseModel, ConfigDict, Field
from pydantic import ValidationError as PydanticValidationError

from ..errors import ConfigValidationError
from .options import DEFAULT_ROOT, WriteStrategy

CONFIG_FILE_NAME = ".bara.yml"


class BaraConfig(BaseModel):
    """Settings read from ``.bara.yml``."""

    model_config = ConfigDict(extra="forbid")

    name: Optional[str] = Field(
        default=None,
        description="Logical configuration name, used to namespace default folders",
    )
    folder_dir: Optional[str] = Field(
        default=None, description="Local folder to write to, same as --folder-dir"
    )
    default_root: str = Field(
        default=str(DEFAULT_ROOT),
        description="Root for generated folders when folder_dir is not set",
    )
    excludes: List[str] = Field(
        default_factory=list,
        description="Destination relative globs preserved across writes",
    )
    strategy: WriteStrategy = WriteStrategy.STAGED


def discover_config_path(start: Path) -> Optional[Path]:
    """Return the closest ``.bara.yml`` at or above ``start``, if any."""
    start = start.resolve()
    for parent in (start, *start.parents):
        candidate = parent / CONFIG_FILE_NAME
        if candidate.is_file():
            return candidate
    return None


def load_config(path: Path) -> BaraConfig:
    """Load and validate a configuration file."""
    try:
        with path.open("r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except OSError as e:
        raise ConfigValidationError(f"Cannot read config file '{path}': {e}") from e
    except yaml.YAMLError as e:
        raise ConfigValidationError(f"Config file '{path}' is not valid YAML: {e}") from e

    if not isinstance(data, dict):
        raise ConfigValidationError(
            f"Config file '{path}' must contain a mapping at the top level"
        )
    try:
        return BaraConfig.model_validate(data)
    except PydanticValidationError as e:
        raise ConfigValidationError(f"Invalid config file '{path}':\n{e}") from e


def resolve_config(cwd: Path, explicit: Optional[Path] = None) -> tuple[BaraConfig, Optional[Path]]:
    """Return the effective configuration and the file it came from."""
    path = explicit if explicit is not None else discover_config_path(cwd)
    if path is None:
        return BaraConfig(), None
    return load_config(path), path
