"""Error handling — parse, render and cache exceptions."""

from desmos_graph.errors.exceptions import (
    BannedCharacterError,
    CacheError,
    CacheReadError,
    CacheWriteError,
    DesmosGraphError,
    DuplicateColorError,
    DuplicateStyleError,
    EmptyExpressionError,
    InvalidBoundaryError,
    InvalidFieldTypeError,
    MissingFieldValueError,
    ParseError,
    RenderError,
    RenderFailedError,
    TooManySegmentsError,
    UnrecognizedFieldError,
)

__all__ = [
    "DesmosGraphError",
    "ParseError",
    "TooManySegmentsError",
    "MissingFieldValueError",
    "InvalidFieldTypeError",
    "UnrecognizedFieldError",
    "BannedCharacterError",
    "DuplicateStyleError",
    "DuplicateColorError",
    "InvalidBoundaryError",
    "EmptyExpressionError",
    "RenderError",
    "RenderFailedError",
    "CacheError",
    "CacheWriteError",
    "CacheReadError",
]
