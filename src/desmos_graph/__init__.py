"""desmos-graph — compile graph DSL blocks and render them through a cached coordinator."""

from desmos_graph.cache.manager import CacheManager
from desmos_graph.dsl.parser import parse, serialize
from desmos_graph.renderer.coordinator import RenderCoordinator
from desmos_graph.types import Equation, Fields, RenderResult, Spec

__version__ = "0.1.0"

__all__ = [
    "CacheManager",
    "Equation",
    "Fields",
    "RenderCoordinator",
    "RenderResult",
    "Spec",
    "parse",
    "serialize",
]
