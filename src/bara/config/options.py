"""Runtime options shared by bara primitives.

Options are grouped in small dataclasses, one per concern, and collected in an
``Options`` container keyed by type so modules only ask for the group they need.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from pathlib import Path
from typing import Callable, Dict, Optional, Type, TypeVar

from rich.console import Console

from ..utils.console import console as default_console

DEFAULT_ROOT = Path("copybara") / "out"

T = TypeVar("T")


class WriteStrategy(str, Enum):
    """How a folder destination replaces its previous contents."""

    STAGED = "staged"
    IN_PLACE = "in-place"


@dataclass
class GeneralOptions:
    cwd: Path = field(default_factory=Path.cwd)
    console: Console = field(default_factory=lambda: default_console)
    clock: Callable[[], datetime] = datetime.now
    config_path: Optional[Path] = None


@dataclass
class FolderDestinationOptions:
    # --folder-dir; None or "" means a generated folder under default_root
    local_folder: Optional[str] = None
    default_root: Path = DEFAULT_ROOT
    strategy: WriteStrategy = WriteStrategy.STAGED


class Options:
    """Container of option groups, looked up by their class."""

    def __init__(self, *groups: object) -> None:
        self._groups: Dict[type, object] = {}
        for group in groups:
            self._groups[type(group)] = group

    def get(self, cls: Type[T]) -> T:
        group = self._groups.get(cls)
        if group is None:
            group = cls()
            self._groups[cls] = group
        return group  # type: ignore[return-value]

    @classmethod
    def default(cls) -> "Options":
        return cls(GeneralOptions(), FolderDestinationOptions())
