from __future__ import annotations

from pathlib import Path

from bara.utils.matcher import PathMatcherSpec, matches, not_matcher


def test_patterns_are_or_combined(tmp_path: Path) -> None:
    patterns = ["*.md", "build/keep.txt"]
    assert matches(tmp_path, tmp_path / "README.md", patterns)
    assert matches(tmp_path, tmp_path / "build" / "keep.txt", patterns)
    assert not matches(tmp_path, tmp_path / "build" / "other.txt", patterns)


def test_no_patterns_match_nothing(tmp_path: Path) -> None:
    matcher = PathMatcherSpec.of(None).relative_to(tmp_path)
    assert not matcher.matches(tmp_path / "anything")
    assert not_matcher(matcher)(tmp_path / "anything")


def test_paths_outside_root_and_root_itself_never_match(tmp_path: Path) -> None:
    root = tmp_path / "root"
    assert not matches(root, tmp_path / "elsewhere" / "a.md", ["**"])
    assert not matches(root, root, ["*"])


def test_subtree_pattern_matches_the_directory(tmp_path: Path) -> None:
    matcher = PathMatcherSpec.of(["vendor/**"]).relative_to(tmp_path)
    assert matcher(tmp_path / "vendor")
    assert matcher(tmp_path / "vendor" / "lib" / "x.py")
    assert not matcher(tmp_path / "vendored.py")


def test_empty_spec_is_falsy() -> None:
    assert not PathMatcherSpec()
    assert PathMatcherSpec.of(["a"])
