"""Local folder destination for bara."""

from .destination import (
    FOLDER_DESTINATION_NAME,
    Destination,
    FolderDestination,
    FolderWriter,
    TransformResult,
    Writer,
    WriterResult,
    WriterState,
)
from .resolver import FOLDER_DATE_FORMAT, resolve_local_folder, sanitize_config_name

__all__ = [
    "FOLDER_DESTINATION_NAME",
    "Destination",
    "FolderDestination",
    "FolderWriter",
    "TransformResult",
    "Writer",
    "WriterResult",
    "WriterState",
    "FOLDER_DATE_FORMAT",
    "resolve_local_folder",
    "sanitize_config_name",
]
