"""Render coordination — plotting commands, the completion channel and the coordinator."""

from desmos_graph.renderer.channel import (
    COMPLETION_TAG,
    CompletionChannel,
    CompletionKind,
    CompletionMessage,
)
from desmos_graph.renderer.commands import PlotCommand, RenderJob, Viewport, build_render_job
from desmos_graph.renderer.coordinator import RenderCoordinator, RenderState
from desmos_graph.renderer.page import build_calculator_page, render_error_html
from desmos_graph.renderer.protocol import ExternalRenderer

__all__ = [
    "COMPLETION_TAG",
    "CompletionChannel",
    "CompletionKind",
    "CompletionMessage",
    "ExternalRenderer",
    "PlotCommand",
    "RenderCoordinator",
    "RenderJob",
    "RenderState",
    "Viewport",
    "build_calculator_page",
    "build_render_job",
    "render_error_html",
]
