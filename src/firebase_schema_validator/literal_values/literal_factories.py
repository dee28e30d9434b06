"""Literal value factories."""

from __future__ import annotations

import json
import math
import re
from collections.abc import Mapping
from typing import Any

from .literal_models import InvalidLiteralError, Literalizable, LiteralKind, LiteralValue

_IDENTIFIER_PATTERN = re.compile(r"^[A-Za-z_$][A-Za-z0-9_$]*$")


def of_string(text: str) -> LiteralValue:
    """Return a double-quoted string literal.

    `$` is escaped so Dart does not read it as string interpolation.
    """
    if not isinstance(text, str):
        raise InvalidLiteralError("String literal requires a str value.")
    expression = json.dumps(text, ensure_ascii=False).replace("$", "\\$")
    return LiteralValue(kind=LiteralKind.STRING, expression=expression)


def of_double(number: float | int) -> LiteralValue:
    """Return a floating point literal that always carries a decimal point.

    NaN and infinities are rejected.
    """
    if isinstance(number, bool) or not isinstance(number, int | float):
        raise InvalidLiteralError("Double literal requires a numeric value.")
    value = float(number)
    if math.isnan(value) or math.isinf(value):
        raise InvalidLiteralError("Double literal must be finite.")
    expression = repr(value)
    if "." not in expression:
        mantissa, marker, exponent = expression.partition("e")
        expression = f"{mantissa}.0{marker}{exponent}"
    return LiteralValue(kind=LiteralKind.DOUBLE, expression=expression)


def of_integer(number: int) -> LiteralValue:
    """Return an integer literal."""
    if isinstance(number, bool) or not isinstance(number, int):
        raise InvalidLiteralError("Integer literal requires an int value.")
    return LiteralValue(kind=LiteralKind.INTEGER, expression=str(number))


def of_boolean(flag: bool) -> LiteralValue:
    """Return a boolean literal."""
    if not isinstance(flag, bool):
        raise InvalidLiteralError("Boolean literal requires a bool value.")
    return LiteralValue(kind=LiteralKind.BOOLEAN, expression="true" if flag else "false")


def of_null() -> LiteralValue:
    """Return the null literal."""
    return LiteralValue(kind=LiteralKind.NULL, expression="null")


def of_enumeration(type_name: str, member: str) -> LiteralValue:
    """Return an enumeration member literal such as `Status.active`."""
    for label, part in (("type name", type_name), ("member", member)):
        if not isinstance(part, str) or not _IDENTIFIER_PATTERN.fullmatch(part):
            raise InvalidLiteralError(f"Enumeration {label} must be an identifier: {part!r}")
    return LiteralValue(kind=LiteralKind.ENUMERATION, expression=f"{type_name}.{member}")


def of_object(source: Literalizable) -> LiteralValue:
    """Freeze the literal rendered by `source.to_literal()`.

    The source is asked once; later changes to it do not affect the literal.
    """
    if not isinstance(source, Literalizable):
        raise InvalidLiteralError(
            f"Object literal source must define to_literal(): {type(source).__name__}"
        )
    expression = source.to_literal()
    if not isinstance(expression, str):
        raise InvalidLiteralError("to_literal() must return a string.")
    return LiteralValue(kind=LiteralKind.OBJECT, expression=expression)


def of_raw(expression: str, kind: LiteralKind) -> LiteralValue:
    """Build a literal from a caller-rendered expression.

    Unsafe: the expression is not checked against `kind`, so callers are
    responsible for passing text the generator can embed as that kind. Only
    the empty-expression rule is enforced.
    """
    return LiteralValue(kind=kind, expression=expression)


def literal_from_mapping(definition: Mapping[str, Any]) -> LiteralValue:
    """Build a literal from a declarations-file mapping.

    Accepts `{kind, value}` for the typed factories, `{kind: enumeration,
    type, member}` for enumerations and `{kind, expression}` for raw literals.
    """
    raw_kind = definition.get("kind")
    try:
        kind = LiteralKind(raw_kind)
    except ValueError as exc:
        raise InvalidLiteralError(f"Unsupported literal kind: {raw_kind!r}") from exc

    if "expression" in definition:
        expression = definition["expression"]
        if not isinstance(expression, str):
            raise InvalidLiteralError("Literal expression must be a string.")
        return of_raw(expression, kind)

    if kind == LiteralKind.NULL:
        return of_null()
    if kind == LiteralKind.ENUMERATION:
        return of_enumeration(definition.get("type"), definition.get("member"))
    if kind == LiteralKind.OBJECT:
        raise InvalidLiteralError("Object literals in declarations require an expression.")
    if "value" not in definition:
        raise InvalidLiteralError(f"Literal of kind '{kind.value}' requires a value.")

    value = definition["value"]
    factories = {
        LiteralKind.STRING: of_string,
        LiteralKind.DOUBLE: of_double,
        LiteralKind.INTEGER: of_integer,
        LiteralKind.BOOLEAN: of_boolean,
    }
    return factories[kind](value)


def literal_to_mapping(literal: LiteralValue) -> dict[str, str]:
    """Return the raw declarations-file form of a literal."""
    return {"kind": literal.kind.value, "expression": literal.expression}
