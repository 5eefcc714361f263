"""Folder destination: writes the output tree to a local folder.

Any file in the folder that is not excluded in the configuration is deleted
before the new files are written. By default the new contents are assembled in
a staging directory next to the folder and swapped in with two renames, so a
failed write leaves the previous contents untouched. When staging is not
possible the writer falls back to cleaning and copying in place.
"""

from __future__ import annotations

import errno
import logging
import os
import shutil
import tempfile
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import List, Optional, Protocol

from rich.console import Console

from ..config.options import FolderDestinationOptions, GeneralOptions, Options, WriteStrategy
from ..errors import DestinationConflict, IOFailure
from ..utils.filesystem import (
    Move,
    copy_files_recursively,
    delete_files_recursively,
    move_files_recursively,
    undo_moves,
)
from ..utils.matcher import PathMatcherSpec, not_matcher
from .resolver import resolve_local_folder

logger = logging.getLogger(__name__)

FOLDER_DESTINATION_NAME = "!FolderDestination"

# Renaming a mount point or across devices cannot be done atomically
_SWAP_UNSUPPORTED = {errno.EXDEV, errno.EBUSY}


class WriterResult(Enum):
    OK = "ok"


class WriterState(Enum):
    IDLE = "idle"
    ENSURING_DIRECTORY = "ensuring-directory"
    CLEANING = "cleaning"
    COPYING = "copying"
    SWAPPING = "swapping"
    DONE = "done"
    FAILED = "failed"


@dataclass(frozen=True)
class TransformResult:
    """The finished output tree and the destination paths to preserve."""

    path: Path
    excluded_destination_paths: PathMatcherSpec = field(default_factory=PathMatcherSpec)


class Writer(Protocol):
    def write(self, transform_result: TransformResult, console: Console) -> WriterResult:
        ...


class Destination(Protocol):
    def new_writer(self) -> Writer:
        ...

    def get_previous_ref(self, label_name: str) -> Optional[str]:
        ...

    def get_label_name_when_origin(self) -> str:
        ...


class FolderDestination:
    """A destination that puts the output in a folder."""

    def __init__(
        self, local_folder: Path, strategy: WriteStrategy = WriteStrategy.STAGED
    ) -> None:
        if not local_folder.is_absolute():
            raise ValueError(f"Folder destination must be absolute: {local_folder}")
        self.local_folder = local_folder
        self.strategy = strategy

    @classmethod
    def from_options(cls, options: Options, config_name: str) -> "FolderDestination":
        general = options.get(GeneralOptions)
        folder = options.get(FolderDestinationOptions)
        local_folder = resolve_local_folder(
            folder.local_folder,
            config_name,
            cwd=general.cwd,
            default_root=folder.default_root,
            clock=general.clock,
            console=general.console,
        )
        return cls(local_folder, strategy=folder.strategy)

    def new_writer(self) -> "FolderWriter":
        return FolderWriter(self.local_folder, self.strategy)

    def get_previous_ref(self, label_name: str) -> Optional[str]:
        # Folders keep no history
        return None

    def get_label_name_when_origin(self) -> str:
        raise NotImplementedError(f"{FOLDER_DESTINATION_NAME} does not support labels")

    def __repr__(self) -> str:
        return f"FolderDestination(local_folder={str(self.local_folder)!r}, strategy={self.strategy.value!r})"


class FolderWriter:
    """Performs one synchronization pass into a folder.

    Writers are single use and not safe to run concurrently against the same
    folder; callers serialize runs that share a destination.
    """

    def __init__(
        self, local_folder: Path, strategy: WriteStrategy = WriteStrategy.STAGED
    ) -> None:
        self.local_folder = local_folder
        self.strategy = strategy
        self.state = WriterState.IDLE

    def write(self, transform_result: TransformResult, console: Console) -> WriterResult:
        try:
            self._ensure_directory(console)
            staged = self.strategy is WriteStrategy.STAGED and self._write_staged(
                transform_result, console
            )
            if not staged:
                self._write_in_place(transform_result, console)
        except Exception:
            self.state = WriterState.FAILED
            raise
        self.state = WriterState.DONE
        return WriterResult.OK

    def _enter(self, state: WriterState, console: Console, message: str) -> None:
        self.state = state
        logger.debug(message)
        console.print(message)

    def _ensure_directory(self, console: Console) -> None:
        self._enter(
            WriterState.ENSURING_DIRECTORY,
            console,
            f"FolderDestination: creating {self.local_folder}",
        )
        try:
            self.local_folder.mkdir(parents=True, exist_ok=True)
        except (FileExistsError, NotADirectoryError) as e:
            blocking = self._find_blocking_path()
            if blocking is not None:
                raise DestinationConflict(self.local_folder, blocking) from e
            raise IOFailure(
                f"Cannot create '{self.local_folder}': {e.strerror or e}", self.local_folder
            ) from e
        except OSError as e:
            raise IOFailure(
                f"Cannot create '{self.local_folder}': {e.strerror or e}", self.local_folder
            ) from e

    def _find_blocking_path(self) -> Optional[Path]:
        """Return the closest existing non-directory on the way to the folder."""
        for candidate in (self.local_folder, *self.local_folder.parents):
            if candidate.is_symlink() or candidate.exists():
                return None if candidate.is_dir() else candidate
        return None

    def _write_in_place(self, transform_result: TransformResult, console: Console) -> None:
        self._enter(
            WriterState.CLEANING,
            console,
            f"FolderDestination: deleting previous data from {self.local_folder}",
        )
        excluded = transform_result.excluded_destination_paths.relative_to(self.local_folder)
        removed = delete_files_recursively(self.local_folder, not_matcher(excluded))
        logger.debug("Removed %d entries from %s", removed, self.local_folder)

        self._enter(
            WriterState.COPYING,
            console,
            f"FolderDestination: Copying contents of the workdir to {self.local_folder}",
        )
        copied = copy_files_recursively(transform_result.path, self.local_folder)
        logger.debug("Copied %d files into %s", copied, self.local_folder)

    def _write_staged(self, transform_result: TransformResult, console: Console) -> bool:
        """Assemble the new contents beside the folder and swap them in.

        Preserved entries are renamed into staging, never copied, and renamed
        back if the write fails before the swap completes.

        Returns False, with the folder untouched, when staging is not possible
        and the caller should write in place instead.
        """
        if self.local_folder.is_symlink():
            # Swapping would replace the link itself
            logger.debug("%s is a symlink, writing in place", self.local_folder)
            return False
        if os.path.ismount(self.local_folder):
            logger.debug("%s is a mount point, writing in place", self.local_folder)
            return False
        try:
            staging = Path(
                tempfile.mkdtemp(
                    prefix=f".{self.local_folder.name}.staging-",
                    dir=self.local_folder.parent,
                )
            )
        except OSError as e:
            logger.warning(
                "Cannot stage next to %s (%s), writing in place", self.local_folder, e
            )
            return False

        moves: List[Move] = []
        try:
            self._enter(
                WriterState.CLEANING,
                console,
                f"FolderDestination: deleting previous data from {self.local_folder}",
            )
            excluded = transform_result.excluded_destination_paths
            if excluded:
                moves = move_files_recursively(
                    self.local_folder, staging, excluded.relative_to(self.local_folder)
                )

            self._enter(
                WriterState.COPYING,
                console,
                f"FolderDestination: Copying contents of the workdir to {self.local_folder}",
            )
            copy_files_recursively(transform_result.path, staging)

            self._enter(
                WriterState.SWAPPING,
                console,
                f"FolderDestination: replacing {self.local_folder}",
            )
            try:
                shutil.copystat(self.local_folder, staging)
            except OSError as e:
                raise IOFailure(
                    f"Cannot copy permissions of '{self.local_folder}': {e.strerror or e}",
                    self.local_folder,
                ) from e
            swapped = self._swap(staging)
        except Exception:
            undo_moves(moves)
            shutil.rmtree(staging, ignore_errors=True)
            raise

        if not swapped:
            undo_moves(moves)
            shutil.rmtree(staging, ignore_errors=True)
        return swapped

    def _swap(self, staging: Path) -> bool:
        """Replace the folder with ``staging``; the folder is back in place on failure."""
        previous = staging.with_name(staging.name + ".previous")
        try:
            os.rename(self.local_folder, previous)
        except OSError as e:
            if e.errno in _SWAP_UNSUPPORTED:
                logger.warning(
                    "Cannot rename %s (%s), writing in place", self.local_folder, e.strerror
                )
                return False
            raise IOFailure(
                f"Cannot move '{self.local_folder}' aside: {e.strerror or e}",
                self.local_folder,
            ) from e

        try:
            os.rename(staging, self.local_folder)
        except OSError as e:
            try:
                os.rename(previous, self.local_folder)
            except OSError as restore_error:
                raise IOFailure(
                    f"Cannot restore '{self.local_folder}' from '{previous}': "
                    f"{restore_error.strerror or restore_error}",
                    previous,
                ) from restore_error
            raise IOFailure(
                f"Cannot move staged contents into '{self.local_folder}': {e.strerror or e}",
                self.local_folder,
            ) from e

        try:
            shutil.rmtree(previous)
        except OSError as e:
            logger.warning("Could not remove previous contents at %s: %s", previous, e)
        return True
