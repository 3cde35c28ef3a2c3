"""Shared Pydantic models for desmos_graph."""

from __future__ import annotations

import re
from enum import StrEnum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, PrivateAttr, model_validator

from desmos_graph.cache.keys import compute_fingerprint
from desmos_graph.cache.stats import StoreResult
from desmos_graph.errors.exceptions import InvalidBoundaryError
from desmos_graph.utils.image import to_data_url

# ── Enums ──


class EquationStyle(StrEnum):
    SOLID = "SOLID"
    DASHED = "DASHED"
    DOTTED = "DOTTED"
    POINT = "POINT"
    OPEN = "OPEN"
    CROSS = "CROSS"


LINE_STYLES = frozenset({EquationStyle.SOLID, EquationStyle.DASHED, EquationStyle.DOTTED})
POINT_STYLES = frozenset({EquationStyle.POINT, EquationStyle.OPEN, EquationStyle.CROSS})


class EquationColor(StrEnum):
    RED = "RED"
    BLUE = "BLUE"
    GREEN = "GREEN"
    PURPLE = "PURPLE"
    ORANGE = "ORANGE"
    BLACK = "BLACK"


class FieldKind(StrEnum):
    INTEGER = "integer"
    STRING = "string"


_HEX_COLOR_RE = re.compile(r"^#[0-9a-zA-Z]+$")


def is_hex_color(value: str) -> bool:
    """True for '#' followed by one or more ASCII alphanumerics."""
    return bool(_HEX_COLOR_RE.match(value))


# ── Graph document ──


class Equation(BaseModel):
    """One plotted expression with its optional modifiers."""

    model_config = ConfigDict(frozen=True)

    expression: str
    style: EquationStyle | None = None
    color: EquationColor | str | None = None
    restriction: str | None = None


class Fields(BaseModel):
    """Render-surface configuration. Bounds are checked here and nowhere later."""

    model_config = ConfigDict(frozen=True)

    width: int = 600
    height: int = 400
    left: int = -10
    right: int = 10
    bottom: int = -7
    top: int = 7

    @model_validator(mode="after")
    def _check_bounds(self) -> Fields:
        if self.left >= self.right:
            raise InvalidBoundaryError("left", self.left, "right", self.right)
        if self.bottom >= self.top:
            raise InvalidBoundaryError("bottom", self.bottom, "top", self.top)
        return self


# Explicit schema of the settings block; order is also the serialization order.
FIELD_SCHEMA: dict[str, FieldKind] = {
    "width": FieldKind.INTEGER,
    "height": FieldKind.INTEGER,
    "left": FieldKind.INTEGER,
    "right": FieldKind.INTEGER,
    "bottom": FieldKind.INTEGER,
    "top": FieldKind.INTEGER,
}


class Spec(BaseModel):
    """Validated, canonical form of a graph document.

    The fingerprint is computed once, when the Spec is built, and is the cache
    key for every downstream lookup.
    """

    model_config = ConfigDict(frozen=True)

    equations: tuple[Equation, ...] = ()
    fields: Fields = Field(default_factory=Fields)

    _fingerprint: str = PrivateAttr(default="")

    def model_post_init(self, __context: Any) -> None:
        self._fingerprint = compute_fingerprint(self.equations, self.fields)

    @property
    def fingerprint(self) -> str:
        return self._fingerprint


# ── Runtime models ──


class RenderResult(BaseModel):
    fingerprint: str
    image: bytes
    cached: bool = False
    cache_write: StoreResult | None = None

    @property
    def data_url(self) -> str:
        return to_data_url(self.image)
