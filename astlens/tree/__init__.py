"""Normalized AST model and the normalizer that produces it."""

from astlens.tree.nodes import ArrayNode, NamedObject, NormalizedNode, Primitive, Span, to_plain
from astlens.tree.normalizer import AstNormalizer, normalize, snake_to_pascal

__all__ = [
    "ArrayNode",
    "AstNormalizer",
    "NamedObject",
    "NormalizedNode",
    "Primitive",
    "Span",
    "normalize",
    "snake_to_pascal",
    "to_plain",
]
