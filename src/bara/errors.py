"""Exceptions raised by bara primitives."""

from __future__ import annotations

from pathlib import Path
from typing import Optional


class BaraError(Exception):
    """Base class for every error surfaced by bara"""


class RepoException(BaraError):
    """Raise when a destination cannot be written"""


class DestinationConflict(RepoException):
    """Raise when a non-directory already occupies the destination path"""

    def __init__(self, local_folder: Path, path: Path) -> None:
        self.local_folder = local_folder
        self.path = path
        super().__init__(
            f"Cannot create '{local_folder}' because '{path}' already exists "
            "and is not a directory"
        )


class IOFailure(RepoException):
    """Raise when a filesystem operation fails during a write"""

    def __init__(self, message: str, path: Optional[Path] = None) -> None:
        self.path = path
        super().__init__(message)


class ValidationError(BaraError):
    """Raise when user supplied configuration or values are invalid"""


class ConfigValidationError(ValidationError):
    """Raise when the configuration file or options are malformed"""


class FormatValidationError(ValidationError):
    """Raise when core.format receives a template/argument combination it cannot render"""

    def __init__(self, template: str, detail: str) -> None:
        self.template = template
        self.detail = detail
        super().__init__(f"Invalid format: {template}: {detail}")


class FormatSyntaxError(FormatValidationError):
    """Raise when the template contains a directive that is not supported"""


class FormatArityError(FormatValidationError):
    """Raise when the number of arguments does not match the directives"""

    def __init__(self, template: str, expected: int, actual: int) -> None:
        self.expected = expected
        self.actual = actual
        super().__init__(
            template, f"expected {expected} argument(s) but got {actual}"
        )


class FormatTypeError(FormatValidationError):
    """Raise when an argument's type does not match its directive"""

    def __init__(
        self, template: str, directive: str, conversion: str, index: int, actual_type: str
    ) -> None:
        self.directive = directive
        self.conversion = conversion
        self.index = index
        self.actual_type = actual_type
        super().__init__(template, f"{conversion} != {actual_type}")
