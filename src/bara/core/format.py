"""Type checked printf style formatting exposed as ``core.format``.

Every directive of the template is checked against the runtime type of its
positional argument before anything is rendered, so configuration authors get
an error naming the faulty directive instead of a half formatted string or an
unrelated formatting crash.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Sequence

from ..errors import (
    FormatArityError,
    FormatSyntaxError,
    FormatTypeError,
    FormatValidationError,
)

_DIRECTIVE = re.compile(
    r"%(?P<key>\([^)]*\))?"
    r"(?P<flags>[-+ #0]*)"
    r"(?P<width>\*|\d+)?"
    r"(?:\.(?P<precision>\*|\d*))?"
    r"(?P<conversion>.?)",
    re.DOTALL,
)


def _any(value: Any) -> bool:
    return True


def _integer(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _floating(value: Any) -> bool:
    return isinstance(value, float)


def _character(value: Any) -> bool:
    return _integer(value) or (isinstance(value, str) and len(value) == 1)


_CONVERSIONS: Dict[str, Callable[[Any], bool]] = {
    "s": _any,
    "r": _any,
    "a": _any,
    "d": _integer,
    "i": _integer,
    "o": _integer,
    "x": _integer,
    "X": _integer,
    "e": _floating,
    "E": _floating,
    "f": _floating,
    "F": _floating,
    "g": _floating,
    "G": _floating,
    "c": _character,
}


@dataclass(frozen=True)
class Directive:
    text: str
    conversion: str

    def accepts(self, value: Any) -> bool:
        return _CONVERSIONS[self.conversion](value)


def parse_directives(template: str) -> List[Directive]:
    """Return the argument consuming directives of ``template`` in order."""
    directives: List[Directive] = []
    for match in _DIRECTIVE.finditer(template):
        text = match.group(0)
        conversion = match.group("conversion")
        if text == "%%":
            continue
        if not conversion:
            raise FormatSyntaxError(template, f"incomplete directive '{text}'")
        if match.group("key") is not None:
            raise FormatSyntaxError(template, f"named directive '{text}' is not supported")
        if match.group("width") == "*" or match.group("precision") == "*":
            raise FormatSyntaxError(template, f"'*' width in '{text}' is not supported")
        if conversion not in _CONVERSIONS:
            raise FormatSyntaxError(template, f"unknown conversion '{text}'")
        directives.append(Directive(text=text, conversion=conversion))
    return directives


def check_arguments(template: str, args: Sequence[Any]) -> List[Directive]:
    """Type check ``args`` against ``template`` without formatting anything."""
    directives = parse_directives(template)
    if len(directives) != len(args):
        raise FormatArityError(template, expected=len(directives), actual=len(args))
    for index, (directive, value) in enumerate(zip(directives, args)):
        if not directive.accepts(value):
            raise FormatTypeError(
                template,
                directive=directive.text,
                conversion=directive.conversion,
                index=index,
                actual_type=type(value).__name__,
            )
    return directives


def validate(template: str, args: Sequence[Any]) -> str:
    """Format ``template`` with ``args`` after checking every directive.

    >>> validate("%-10s %d", ["foo", 1234])
    'foo        1234'
    """
    if not isinstance(template, str):
        raise FormatValidationError(
            str(template), f"template must be a string, got {type(template).__name__}"
        )
    if isinstance(args, (str, bytes)) or not isinstance(args, Sequence):
        raise FormatValidationError(
            template, f"arguments must be a list, got {type(args).__name__}"
        )

    check_arguments(template, args)
    try:
        return template % tuple(args)
    except (TypeError, ValueError, OverflowError) as e:
        raise FormatValidationError(template, str(e)) from e
