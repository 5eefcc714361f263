"""Primitives exposed to the configuration language."""

from .format import check_arguments, parse_directives, validate
from .modules import CoreModule, DestinationWriter, FolderModule, Formatter, builtins, write_tree

__all__ = [
    "check_arguments",
    "parse_directives",
    "validate",
    "CoreModule",
    "DestinationWriter",
    "FolderModule",
    "Formatter",
    "builtins",
    "write_tree",
]
