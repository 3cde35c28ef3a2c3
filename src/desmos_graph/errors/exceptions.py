"""Custom exception hierarchy for desmos_graph."""

from __future__ import annotations

from pathlib import Path
from typing import Any


class DesmosGraphError(Exception):
    """Base exception for all desmos_graph errors."""

    def __init__(self, message: str = "", **kwargs: Any) -> None:
        super().__init__(message)
        self.message = message


# ── Parse errors ──


class ParseError(DesmosGraphError):
    """The graph source could not be compiled into a Spec.

    Shown to the user in place of the graph; never fatal to the host.
    """


class TooManySegmentsError(ParseError):
    def __init__(self, segments: int) -> None:
        super().__init__(
            f"Too many segments: expected at most one '---' separator, found {segments - 1}"
        )
        self.segments = segments


class MissingFieldValueError(ParseError):
    def __init__(self, key: str) -> None:
        super().__init__(f"Field '{key}' must have a value")
        self.key = key


class InvalidFieldTypeError(ParseError):
    def __init__(self, key: str, value: str, expected: str = "integer") -> None:
        super().__init__(f"Field '{key}' must have an {expected} value, got '{value}'")
        self.key = key
        self.value = value
        self.expected = expected


class UnrecognizedFieldError(ParseError):
    def __init__(self, key: str) -> None:
        super().__init__(f"Unrecognised field: {key}")
        self.key = key


class BannedCharacterError(ParseError):
    """A quote or backtick appeared where text is later embedded in renderer input."""

    def __init__(self, character: str, context: str) -> None:
        super().__init__(f"Unexpected character {character} in {context}")
        self.character = character
        self.context = context


class DuplicateStyleError(ParseError):
    def __init__(self, first: str, second: str) -> None:
        super().__init__(f"Duplicate style identifiers detected: {first}, {second}")
        self.first = first
        self.second = second


class DuplicateColorError(ParseError):
    def __init__(self, first: str, second: str) -> None:
        super().__init__(f"Duplicate color identifiers detected: {first}, {second}")
        self.first = first
        self.second = second


class InvalidBoundaryError(ParseError):
    """The viewport is empty or inverted along one axis (e.g. left >= right)."""

    def __init__(self, lower_name: str, lower: int, upper_name: str, upper: int) -> None:
        super().__init__(
            f"{upper_name.capitalize()} boundary ({upper}) must be greater than "
            f"{lower_name} boundary ({lower})"
        )
        self.lower_name = lower_name
        self.lower = lower
        self.upper_name = upper_name
        self.upper = upper


class EmptyExpressionError(ParseError):
    def __init__(self, line: str) -> None:
        super().__init__(f"Missing graph equation in line: '{line}'")
        self.line = line


# ── Render errors ──


class RenderError(DesmosGraphError):
    """Rendering did not produce an image."""


class RenderFailedError(RenderError):
    """The external renderer reported an error — message passed through verbatim."""

    def __init__(self, message: str = "", fingerprint: str = "") -> None:
        super().__init__(message)
        self.fingerprint = fingerprint


# ── Cache errors ──


class CacheError(DesmosGraphError):
    """Cache failures are best-effort: logged and reported, never fatal to a render."""


class CacheWriteError(CacheError):
    """Durable cache write failed.

    error_type is "directory_missing" (target directory absent, never created)
    or "io_failure" (the write itself raised).
    """

    def __init__(
        self,
        message: str = "",
        error_type: str = "io_failure",
        path: Path | None = None,
        original: Exception | None = None,
    ) -> None:
        super().__init__(message)
        self.error_type = error_type
        self.path = path
        self.original = original


class CacheReadError(CacheError):
    """A cache file exists but could not be read — treated as a miss."""

    def __init__(
        self,
        message: str = "",
        path: Path | None = None,
        original: Exception | None = None,
    ) -> None:
        super().__init__(message)
        self.path = path
        self.original = original
