"""Utility modules for bara."""

from .console import console
from .filesystem import (
    copy_files_recursively,
    delete_files_recursively,
    move_files_recursively,
    undo_moves,
)
from .matcher import PathMatcher, PathMatcherSpec, matches, not_matcher

__all__ = [
    "console",
    "copy_files_recursively",
    "delete_files_recursively",
    "move_files_recursively",
    "undo_moves",
    "PathMatcher",
    "PathMatcherSpec",
    "matches",
    "not_matcher",
]
