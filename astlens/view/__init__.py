"""Rendering of normalized trees into collapsible, hover-aware elements."""

from astlens.view.elements import Element
from astlens.view.renderer import (
    ENTER,
    EXIT,
    ArrayView,
    FullTreeRenderer,
    HoverCallback,
    ObjectView,
    PrimitiveView,
    RenderedTree,
    TreeRenderer,
    construct_view,
    escape_string,
)

__all__ = [
    "ENTER",
    "EXIT",
    "ArrayView",
    "Element",
    "FullTreeRenderer",
    "HoverCallback",
    "ObjectView",
    "PrimitiveView",
    "RenderedTree",
    "TreeRenderer",
    "construct_view",
    "escape_string",
]
