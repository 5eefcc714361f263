from __future__ import annotations

from pathlib import Path

import pytest

from bara.config import (
    FolderDestinationOptions,
    Options,
    WriteStrategy,
    discover_config_path,
    load_config,
    resolve_config,
)
from bara.errors import ConfigValidationError


def write_config(directory: Path, content: str) -> Path:
    path = directory / ".bara.yml"
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content)
    return path


def test_load_config(tmp_path: Path) -> None:
    path = write_config(
        tmp_path,
        """
name: my-project
folder_dir: out
excludes:
  - "docs/**"
  - local.cfg
strategy: in-place
""".lstrip(),
    )

    config = load_config(path)

    assert config.name == "my-project"
    assert config.folder_dir == "out"
    assert config.excludes == ["docs/**", "local.cfg"]
    assert config.strategy is WriteStrategy.IN_PLACE
    assert config.default_root == "copybara/out"


def test_discovery_walks_up(tmp_path: Path) -> None:
    path = write_config(tmp_path, "name: p\n")
    nested = tmp_path / "a" / "b"
    nested.mkdir(parents=True)

    assert discover_config_path(nested) == path.resolve()
    config, found = resolve_config(nested)
    assert config.name == "p"
    assert found == path.resolve()


def test_missing_config_uses_defaults(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    import bara.config.settings as settings_mod

    monkeypatch.setattr(settings_mod, "discover_config_path", lambda start: None)
    config, found = resolve_config(tmp_path)
    assert found is None
    assert config.excludes == []
    assert config.strategy is WriteStrategy.STAGED


@pytest.mark.parametrize(
    "content",
    [
        "- just\n- a list\n",
        "unknown_key: 1\n",
        "strategy: sideways\n",
        "excludes: [\n",
    ],
)
def test_invalid_config_is_rejected(tmp_path: Path, content: str) -> None:
    path = write_config(tmp_path, content)
    with pytest.raises(ConfigValidationError):
        load_config(path)


def test_options_create_missing_groups() -> None:
    options = Options()
    folder = options.get(FolderDestinationOptions)
    assert folder.local_folder is None
    assert options.get(FolderDestinationOptions) is folder
