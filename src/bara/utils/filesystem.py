"""File system utilities."""

from __future__ import annotations

import errno
import logging
import os
import shutil
from pathlib import Path
from typing import Callable, List, Optional, Tuple

from ..errors import IOFailure

logger = logging.getLogger(__name__)

PathFilter = Callable[[Path], bool]


def _raise_walk_error(error: OSError) -> None:
    path = Path(error.filename) if error.filename else None
    raise IOFailure(f"Cannot read '{path}': {error.strerror or error}", path) from error


def _io_failure(action: str, path: Path, error: OSError) -> IOFailure:
    return IOFailure(f"Cannot {action} '{path}': {error.strerror or error}", path)


def delete_files_recursively(root: Path, delete_filter: PathFilter) -> int:
    """Delete the entries under ``root`` accepted by ``delete_filter``.

    The walk is bottom-up so a directory is only considered once its children
    have been processed: an accepted directory is removed when it ended up
    empty, and left in place when preserved descendants remain. ``root`` itself
    is never removed. Symlinks are unlinked, never followed.

    Returns the number of removed entries.
    """
    removed = 0
    for dirpath, dirnames, filenames in os.walk(
        root, topdown=False, onerror=_raise_walk_error
    ):
        current = Path(dirpath)
        for name in filenames:
            path = current / name
            if not delete_filter(path):
                continue
            try:
                path.unlink()
            except OSError as e:
                raise _io_failure("delete", path, e) from e
            removed += 1

        for name in dirnames:
            path = current / name
            if not delete_filter(path):
                continue
            try:
                if path.is_symlink():
                    path.unlink()
                elif any(path.iterdir()):
                    logger.debug("Keeping non-empty directory %s", path)
                    continue
                else:
                    path.rmdir()
            except OSError as e:
                raise _io_failure("delete", path, e) from e
            removed += 1
    return removed


def _prepare_target(target: Path) -> None:
    """Clear the way for a file or link at ``target`` without following links."""
    if target.is_symlink():
        target.unlink()
    elif target.is_dir():
        raise IsADirectoryError(errno.EISDIR, "a directory is in the way", str(target))


def _copy_entry(source: Path, target: Path) -> None:
    target.parent.mkdir(parents=True, exist_ok=True)
    _prepare_target(target)
    if source.is_symlink():
        if target.exists():
            target.unlink()
        os.symlink(os.readlink(source), target, target_is_directory=source.is_dir())
    else:
        shutil.copy2(source, target, follow_symlinks=False)


def copy_files_recursively(
    source: Path, destination: Path, path_filter: Optional[PathFilter] = None
) -> int:
    """Copy the tree under ``source`` into ``destination``.

    Existing files are overwritten and nothing in ``destination`` without a
    counterpart in ``source`` is removed. With ``path_filter`` only accepted
    files and links are copied, together with the accepted directories and the
    directories needed to hold them.

    Returns the number of copied files and links.
    """
    if not source.is_dir():
        raise IOFailure(f"Cannot copy '{source}': not a directory", source)

    accept: PathFilter = path_filter or (lambda _: True)
    copied = 0
    for dirpath, dirnames, filenames in os.walk(source, onerror=_raise_walk_error):
        current = Path(dirpath)
        target_dir = destination / current.relative_to(source)

        entries = list(filenames)
        for name in list(dirnames):
            if (current / name).is_symlink():
                dirnames.remove(name)
                entries.append(name)
            elif accept(current / name):
                try:
                    (target_dir / name).mkdir(parents=True, exist_ok=True)
                except OSError as e:
                    raise _io_failure("create", target_dir / name, e) from e

        for name in entries:
            path = current / name
            if not accept(path):
                continue
            try:
                _copy_entry(path, target_dir / name)
            except OSError as e:
                raise _io_failure("copy", path, e) from e
            copied += 1
    return copied


Move = Tuple[Path, Path]


def move_files_recursively(
    source: Path, destination: Path, path_filter: PathFilter
) -> List[Move]:
    """Rename the entries under ``source`` accepted by ``path_filter`` into ``destination``.

    Files, links and special files keep their inode, so hard links, owners and
    fifos survive. Accepted directories are recreated rather than renamed,
    since matching is per path and their other children must stay behind.
    Both trees must be on the same filesystem.

    Returns the moves performed, in order, for :func:`undo_moves`. On failure
    the moves done so far are undone before the error is raised.
    """
    moves: List[Move] = []
    try:
        for dirpath, dirnames, filenames in os.walk(source, onerror=_raise_walk_error):
            current = Path(dirpath)
            target_dir = destination / current.relative_to(source)

            entries = list(filenames)
            for name in list(dirnames):
                path = current / name
                if path.is_symlink():
                    dirnames.remove(name)
                    entries.append(name)
                elif path_filter(path):
                    try:
                        (target_dir / name).mkdir(parents=True, exist_ok=True)
                    except OSError as e:
                        raise _io_failure("create", target_dir / name, e) from e

            for name in entries:
                path = current / name
                if not path_filter(path):
                    continue
                target = target_dir / name
                try:
                    target.parent.mkdir(parents=True, exist_ok=True)
                    os.rename(path, target)
                except OSError as e:
                    raise _io_failure("move", path, e) from e
                moves.append((path, target))
    except IOFailure:
        undo_moves(moves)
        raise
    return moves


def undo_moves(moves: List[Move]) -> None:
    """Rename moved entries back to where they came from, latest first."""
    for original, moved in reversed(moves):
        try:
            os.rename(moved, original)
        except OSError as e:
            raise _io_failure("restore", original, e) from e
