"""Graph DSL — parsing source text into a Spec and serializing it back."""

from desmos_graph.dsl.parser import Modifier, ModifierKind, classify_modifier, parse, serialize

__all__ = ["Modifier", "ModifierKind", "classify_modifier", "parse", "serialize"]
