"""Destination folder resolution."""

from __future__ import annotations

import logging
import re
from datetime import datetime
from pathlib import Path
from typing import Callable, Optional

from rich.console import Console

from ..errors import ConfigValidationError

logger = logging.getLogger(__name__)

FOLDER_DATE_FORMAT = "%Y_%m_%d_%H_%M_%S"

_NON_ALPHANUMERIC = re.compile(r"[^A-Za-z0-9]")


def sanitize_config_name(config_name: str) -> str:
    """Strip every character that is not an ASCII letter or digit."""
    return _NON_ALPHANUMERIC.sub("", config_name)


def default_folder(
    default_root: Path, config_name: str, now: datetime
) -> Path:
    """Return ``default_root/<sanitized name>/<YYYY_MM_DD_HH_MM_SS>``."""
    sanitized = sanitize_config_name(config_name)
    if not sanitized:
        raise ConfigValidationError(
            f"Cannot derive a default folder from configuration name {config_name!r}. "
            "Set a project name or use --folder-dir."
        )
    return default_root / sanitized / now.strftime(FOLDER_DATE_FORMAT)


def resolve_local_folder(
    local_folder: Optional[str],
    config_name: str,
    *,
    cwd: Path,
    default_root: Path,
    clock: Callable[[], datetime] = datetime.now,
    console: Optional[Console] = None,
) -> Path:
    """Compute the absolute folder a destination writes to.

    An explicit ``local_folder`` is used as-is when absolute and resolved
    against ``cwd`` otherwise. Without one, a timestamped folder under
    ``default_root`` is generated; runs of the same configuration within the
    same second resolve to the same folder.
    """
    if local_folder:
        path = Path(local_folder)
        if not path.is_absolute():
            path = cwd / path
        return path

    root = default_root if default_root.is_absolute() else cwd / default_root
    path = default_folder(root, config_name, clock())
    message = f"Using folder '{path}' in default root. Use --folder-dir to override."
    logger.debug(message)
    if console is not None:
        console.print(message)
    return path
