"""Glob based path matching relative to a root directory."""

from __future__ import annotations

import fnmatch
from dataclasses import dataclass
from pathlib import Path, PurePosixPath
from typing import Callable, Iterable, Sequence, Tuple

PathPredicate = Callable[[Path], bool]


def _relative_posix(root: Path, candidate: Path) -> str | None:
    try:
        relative = candidate.relative_to(root)
    except ValueError:
        return None
    return PurePosixPath(*relative.parts).as_posix()


def _pattern_matches(pattern: str, relative: str) -> bool:
    if fnmatch.fnmatchcase(relative, pattern):
        return True
    # "dir/**" also names the directory itself
    if pattern.endswith("/**") and relative == pattern[: -len("/**")]:
        return True
    return False


def matches(root: Path, candidate: Path, patterns: Iterable[str]) -> bool:
    """Return True if ``candidate`` relative to ``root`` matches any pattern."""
    relative = _relative_posix(root, candidate)
    if relative is None or relative == ".":
        return False
    return any(_pattern_matches(p, relative) for p in patterns)


@dataclass(frozen=True)
class PathMatcher:
    """A set of glob patterns bound to a root directory."""

    root: Path
    patterns: Tuple[str, ...]

    def matches(self, candidate: Path) -> bool:
        return matches(self.root, candidate, self.patterns)

    def __call__(self, candidate: Path) -> bool:
        return self.matches(candidate)


@dataclass(frozen=True)
class PathMatcherSpec:
    """Unbound list of glob patterns, e.g. the excluded destination paths.

    Patterns use ``fnmatch`` syntax against POSIX style relative paths, so
    ``*`` also crosses directory separators. Every path is matched on its
    own: preserving ``docs`` does not preserve ``docs/index.md``, use
    ``docs/**`` for that.
    """

    include: Tuple[str, ...] = ()

    @classmethod
    def of(cls, patterns: Sequence[str] | None) -> "PathMatcherSpec":
        return cls(include=tuple(patterns or ()))

    def relative_to(self, root: Path) -> PathMatcher:
        return PathMatcher(root=root, patterns=self.include)

    def __bool__(self) -> bool:
        return bool(self.include)


def not_matcher(predicate: PathPredicate) -> PathPredicate:
    """Negate a path predicate."""

    def _negated(candidate: Path) -> bool:
        return not predicate(candidate)

    return _negated
