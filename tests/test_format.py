from __future__ import annotations

import pytest

from bara.core.format import check_arguments, parse_directives, validate
from bara.errors import (
    FormatArityError,
    FormatSyntaxError,
    FormatTypeError,
    FormatValidationError,
    ValidationError,
)


def test_format() -> None:
    assert validate("%-10s %d", ["foo", 1234]) == "foo        1234"


def test_invalid_format_names_directive_and_type() -> None:
    with pytest.raises(FormatTypeError) as exc:
        validate("%-10s %d", ["foo", "1234"])

    assert "Invalid format: %-10s %d: d != str" in str(exc.value)
    assert exc.value.index == 1
    assert exc.value.directive == "%d"
    assert isinstance(exc.value, ValidationError)


def test_arity_mismatch_is_its_own_error() -> None:
    with pytest.raises(FormatArityError) as exc:
        validate("%s %s", ["only-one"])

    assert not isinstance(exc.value, FormatTypeError)
    assert exc.value.expected == 2
    assert exc.value.actual == 1
    assert "%s %s" in str(exc.value)


def test_too_many_arguments() -> None:
    with pytest.raises(FormatArityError):
        validate("%s", ["a", "b"])


def test_literal_percent_consumes_no_argument() -> None:
    assert validate("100%% of %s", ["files"]) == "100% of files"


@pytest.mark.parametrize(
    "template, args, expected",
    [
        ("%5d|", [42], "   42|"),
        ("%05.1f", [3.14159], "003.1"),
        ("%x", [255], "ff"),
        ("%c%c", ["o", 107], "ok"),
        ("%s", [[1, 2]], "[1, 2]"),
        ("%r", ["q"], "'q'"),
    ],
)
def test_conversions(template: str, args: list, expected: str) -> None:
    assert validate(template, args) == expected


@pytest.mark.parametrize(
    "template, value, type_name",
    [
        ("%d", True, "bool"),
        ("%d", 1.5, "float"),
        ("%f", 1, "int"),
        ("%c", "ab", "str"),
        ("%x", None, "NoneType"),
    ],
)
def test_type_mismatches(template: str, value: object, type_name: str) -> None:
    with pytest.raises(FormatTypeError) as exc:
        validate(template, [value])
    assert exc.value.actual_type == type_name


@pytest.mark.parametrize("template", ["%(name)s", "%*d", "%.*f", "%q", "trailing %"])
def test_unsupported_directives(template: str) -> None:
    with pytest.raises(FormatSyntaxError):
        validate(template, [1])


def test_type_checking_happens_before_formatting() -> None:
    # The first directive would format fine; the error must still be reported
    # without any partial output
    with pytest.raises(FormatTypeError):
        check_arguments("%s %d %d", ["a", 1, "b"])


def test_arguments_must_be_a_list() -> None:
    with pytest.raises(FormatValidationError):
        validate("%s", "abc")  # type: ignore[arg-type]


def test_parse_directives_keeps_modifiers() -> None:
    directives = parse_directives("%-10s and %+.2f")
    assert [d.text for d in directives] == ["%-10s", "%+.2f"]
    assert [d.conversion for d in directives] == ["s", "f"]


def test_formatting_errors_are_validation_errors() -> None:
    with pytest.raises(FormatValidationError):
        validate("%c", [0x110000])
