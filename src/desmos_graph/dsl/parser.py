"""Graph DSL parser — compiles free-text graph blocks into a validated Spec.

Source layout::

    [<key>=<value>[;|\\n]...]---
    <expression>[|<modifier>]*
    ...

The settings block (and its ``---`` separator) is optional. Each modifier is
classified, case-insensitively, as a style, else a color (named or ``#hex``),
else a restriction fragment. Restrictions accumulate as ``{a}{b}``.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from enum import StrEnum

from desmos_graph.errors.exceptions import (
    BannedCharacterError,
    DuplicateColorError,
    DuplicateStyleError,
    EmptyExpressionError,
    InvalidFieldTypeError,
    MissingFieldValueError,
    TooManySegmentsError,
    UnrecognizedFieldError,
)
from desmos_graph.types import (
    FIELD_SCHEMA,
    Equation,
    EquationColor,
    EquationStyle,
    FieldKind,
    Fields,
    Spec,
    is_hex_color,
)

logger = logging.getLogger(__name__)

SEPARATOR = "---"

# Anything that ends up inside renderer input must not be able to close a string literal
BANNED_CHARACTERS = ('"', "'", "`")

_SETTINGS_DELIMITER_RE = re.compile(r"[;\n]+")
_INTEGER_RE = re.compile(r"^[+-]?[0-9]+$")

_STYLE_NAMES = frozenset(s.value for s in EquationStyle)
_COLOR_NAMES = frozenset(c.value for c in EquationColor)


class ModifierKind(StrEnum):
    STYLE = "style"
    COLOR = "color"
    RESTRICTION = "restriction"


@dataclass(frozen=True)
class Modifier:
    """A classified ``|``-segment of an equation line.

    ``value`` is an EquationStyle for STYLE, an EquationColor or the original
    hex string for COLOR, and the raw fragment for RESTRICTION.
    """

    kind: ModifierKind
    value: str


def classify_modifier(segment: str) -> Modifier:
    """Classify one modifier segment. Precedence: style, then color, then restriction."""
    upper = segment.upper()
    if upper in _STYLE_NAMES:
        return Modifier(ModifierKind.STYLE, EquationStyle(upper))
    if upper in _COLOR_NAMES:
        return Modifier(ModifierKind.COLOR, EquationColor(upper))
    if is_hex_color(segment):
        return Modifier(ModifierKind.COLOR, segment)
    return Modifier(ModifierKind.RESTRICTION, segment)


def parse(source: str) -> Spec:
    """Parse graph source into a Spec.

    Raises a ParseError subclass describing the first problem found; there is
    no partial result.
    """
    segments = source.split(SEPARATOR)
    if len(segments) == 1:
        settings: dict[str, int | str] = {}
        body = segments[0]
    elif len(segments) == 2:
        settings = parse_settings(segments[0])
        body = segments[1]
    else:
        raise TooManySegmentsError(len(segments))

    equations = [parse_equation(line) for line in body.splitlines() if line]
    spec = Spec(equations=equations, fields=Fields(**settings))
    logger.debug(
        "Parsed graph %s: %d equation(s), %d field override(s)",
        spec.fingerprint,
        len(spec.equations),
        len(settings),
    )
    return spec


def parse_settings(block: str) -> dict[str, int | str]:
    """Parse the ``key=value`` settings block into field overrides."""
    settings: dict[str, int | str] = {}
    for entry in _SETTINGS_DELIMITER_RE.split(block):
        entry = entry.strip()
        if not entry:
            continue
        # Only the first '=' separates key from value
        key, _, value = entry.partition("=")
        key = key.strip()
        value = value.strip()

        kind = FIELD_SCHEMA.get(key)
        if kind is None:
            raise UnrecognizedFieldError(key)
        if not value:
            raise MissingFieldValueError(key)
        settings[key] = coerce_field_value(key, value, kind)
    return settings


def coerce_field_value(key: str, value: str, kind: FieldKind) -> int | str:
    if kind == FieldKind.INTEGER:
        if not _INTEGER_RE.match(value):
            raise InvalidFieldTypeError(key, value)
        return int(value)
    if kind == FieldKind.STRING:
        assert_not_banned(value, f"field value for key: '{key}'")
        return value
    raise ValueError(f"Unhandled field kind: {kind!r}")


def parse_equation(line: str) -> Equation:
    expression, *segments = line.split("|")
    if not expression:
        raise EmptyExpressionError(line)
    assert_not_banned(expression, "graph equation")

    style: EquationStyle | None = None
    color: str | None = None
    restriction: str | None = None

    for segment in segments:
        modifier = classify_modifier(segment)
        if modifier.kind == ModifierKind.STYLE:
            if style is not None:
                raise DuplicateStyleError(style, modifier.value)
            style = EquationStyle(modifier.value)
        elif modifier.kind == ModifierKind.COLOR:
            if color is not None:
                raise DuplicateColorError(color, modifier.value)
            color = modifier.value
        elif modifier.kind == ModifierKind.RESTRICTION:
            assert_not_banned(segment, "graph configuration")
            # Several restrictions may apply at once, so they accumulate
            restriction = (restriction or "") + f"{{{segment}}}"
        else:
            raise ValueError(f"Unhandled modifier kind: {modifier.kind!r}")

    return Equation(expression=expression, style=style, color=color, restriction=restriction)


def assert_not_banned(value: str, context: str) -> None:
    """Raise BannedCharacterError if value contains a quote or backtick."""
    for character in BANNED_CHARACTERS:
        if character in value:
            raise BannedCharacterError(character, context)


def serialize(spec: Spec) -> str:
    """Render a Spec back to DSL source that parses to an identical fingerprint.

    Every field is written explicitly. An accumulated restriction ``{a}{b}`` is
    written as the single fragment ``a}{b``, which the parser wraps back into
    the same string.
    """
    settings = ";".join(f"{name}={getattr(spec.fields, name)}" for name in FIELD_SCHEMA)
    lines = [_serialize_equation(eq) for eq in spec.equations]
    return f"{settings}\n{SEPARATOR}\n" + "\n".join(lines)


def _serialize_equation(equation: Equation) -> str:
    parts = [equation.expression]
    if equation.style is not None:
        parts.append(str(equation.style))
    if equation.color is not None:
        parts.append(str(equation.color))
    if equation.restriction is not None:
        parts.append(equation.restriction[1:-1])
    return "|".join(parts)
