"""Callables exposed to the configuration language.

An evaluator binds the table returned by :func:`builtins` under its own names;
nothing here depends on how the evaluator represents values or modules.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Callable, Dict, Optional, Protocol, Sequence

from rich.console import Console

from ..config.options import GeneralOptions, Options
from ..errors import ConfigValidationError
from ..folder.destination import FolderDestination, TransformResult, WriterResult
from ..utils.matcher import PathMatcherSpec
from .format import validate


class Formatter(Protocol):
    def format(self, template: str, args: Sequence[Any]) -> str:
        ...


class DestinationWriter(Protocol):
    def write(self, transform_result: TransformResult, console: Console) -> WriterResult:
        ...


class CoreModule:
    """Core primitives: ``core.format`` and ``core.main_config_path``."""

    def __init__(self, options: Options) -> None:
        self.options = options

    def format(self, template: str, args: Sequence[Any]) -> str:
        return validate(template, args)

    @property
    def main_config_path(self) -> Optional[str]:
        path = self.options.get(GeneralOptions).config_path
        return str(path) if path is not None else None


class FolderModule:
    """Module for dealing with local filesystem folders."""

    def __init__(self, options: Options, project_name: Optional[str] = None) -> None:
        self.options = options
        self.project_name = project_name

    def destination(self) -> FolderDestination:
        """A folder destination is a destination that puts the output in a folder."""
        if not self.project_name:
            raise ConfigValidationError(
                "Project name is required to create a folder destination"
            )
        return FolderDestination.from_options(self.options, self.project_name)


def builtins(options: Options, project_name: Optional[str] = None) -> Dict[str, Callable[..., Any]]:
    """Return the named callables an evaluator binds into its global scope."""
    core = CoreModule(options)
    folder = FolderModule(options, project_name)

    def main_config_path() -> Optional[str]:
        return core.main_config_path

    return {
        "core.format": core.format,
        "core.main_config_path": main_config_path,
        "folder.destination": folder.destination,
    }


def write_tree(
    writer: DestinationWriter,
    workdir: Path,
    excludes: Sequence[str],
    console: Console,
) -> WriterResult:
    """Write ``workdir`` through ``writer`` preserving ``excludes``."""
    result = TransformResult(
        path=workdir, excluded_destination_paths=PathMatcherSpec.of(excludes)
    )
    return writer.write(result, console)
