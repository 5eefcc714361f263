from __future__ import annotations

from datetime import datetime
from pathlib import Path

import pytest
from rich.console import Console

from bara.errors import ConfigValidationError
from bara.folder.resolver import resolve_local_folder, sanitize_config_name


def fixed_clock() -> datetime:
    return datetime(2019, 3, 1, 10, 0, 0)


def test_default_folder_is_namespaced_by_name_and_timestamp(tmp_path: Path) -> None:
    path = resolve_local_folder(
        None,
        "My Config!!",
        cwd=tmp_path,
        default_root=Path("copybara/out"),
        clock=fixed_clock,
    )

    assert path.parts[-2:] == ("MyConfig", "2019_03_01_10_00_00")
    assert path == tmp_path / "copybara" / "out" / "MyConfig" / "2019_03_01_10_00_00"


def test_default_folder_prints_override_hint(tmp_path: Path) -> None:
    console = Console(record=True, width=300)
    path = resolve_local_folder(
        "",
        "proj",
        cwd=tmp_path,
        default_root=tmp_path / "root",
        clock=fixed_clock,
        console=console,
    )

    assert path == tmp_path / "root" / "proj" / "2019_03_01_10_00_00"
    text = console.export_text()
    assert f"Using folder '{path}' in default root." in text
    assert "--folder-dir" in text


def test_relative_folder_resolves_against_cwd(tmp_path: Path) -> None:
    path = resolve_local_folder(
        "out/here", "ignored", cwd=tmp_path, default_root=Path("copybara/out")
    )
    assert path == tmp_path / "out" / "here"


def test_absolute_folder_is_used_as_is(tmp_path: Path) -> None:
    target = tmp_path / "abs"
    path = resolve_local_folder(
        str(target), "ignored", cwd=Path("/somewhere/else"), default_root=Path("x")
    )
    assert path == target


def test_sanitize_strips_non_ascii_alphanumerics() -> None:
    assert sanitize_config_name("a-b_c.d 1/2é") == "abcd12"


def test_unusable_name_fails(tmp_path: Path) -> None:
    with pytest.raises(ConfigValidationError):
        resolve_local_folder(
            None, "!!!", cwd=tmp_path, default_root=Path("out"), clock=fixed_clock
        )


def test_tilde_is_not_expanded(tmp_path: Path) -> None:
    path = resolve_local_folder(
        "~/out", "ignored", cwd=tmp_path, default_root=Path("copybara/out")
    )
    assert path == tmp_path / "~" / "out"
