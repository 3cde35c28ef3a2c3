"""Translation of a Spec into renderer plotting commands."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict

from desmos_graph.types import (
    LINE_STYLES,
    POINT_STYLES,
    Equation,
    EquationColor,
    EquationStyle,
    Spec,
)

# Applied in order; the two-character operators must go before '<' and '>'
_RESTRICTION_REPLACEMENTS: tuple[tuple[str, str], ...] = (
    ("{", r"\{"),
    ("}", r"\}"),
    ("<=", r"\leq "),
    (">=", r"\geq "),
    ("<", r"\le "),
    (">", r"\ge "),
)


class PlotCommand(BaseModel):
    """One expression as the calculator receives it."""

    model_config = ConfigDict(frozen=True)

    latex: str
    line_style: EquationStyle | None = None
    point_style: EquationStyle | None = None
    color: str | None = None


class Viewport(BaseModel):
    model_config = ConfigDict(frozen=True)

    left: int
    right: int
    bottom: int
    top: int
    width: int
    height: int


class RenderJob(BaseModel):
    """Everything the external renderer needs for one graph, tagged by fingerprint."""

    model_config = ConfigDict(frozen=True)

    fingerprint: str
    viewport: Viewport
    commands: tuple[PlotCommand, ...] = ()


def latexify_restriction(restriction: str) -> str:
    """Escape braces and turn comparison operators into LaTeX commands."""
    latex = restriction
    for old, new in _RESTRICTION_REPLACEMENTS:
        latex = latex.replace(old, new)
    return latex


def to_plot_command(equation: Equation) -> PlotCommand:
    latex = equation.expression
    if equation.restriction:
        latex += latexify_restriction(equation.restriction)

    line_style = equation.style if equation.style in LINE_STYLES else None
    point_style = equation.style if equation.style in POINT_STYLES else None

    color = None
    if isinstance(equation.color, EquationColor):
        color = equation.color.value
    elif equation.color is not None:
        color = equation.color

    return PlotCommand(
        latex=latex,
        line_style=line_style,
        point_style=point_style,
        color=color,
    )


def build_render_job(spec: Spec) -> RenderJob:
    fields = spec.fields
    return RenderJob(
        fingerprint=spec.fingerprint,
        viewport=Viewport(
            left=fields.left,
            right=fields.right,
            bottom=fields.bottom,
            top=fields.top,
            width=fields.width,
            height=fields.height,
        ),
        commands=tuple(to_plot_command(eq) for eq in spec.equations),
    )
