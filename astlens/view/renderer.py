"""Tree model and renderer for normalized ASTs.

Each normalized node is wrapped in a view object that owns its open/closed
state and the elements it drew. Toggling a view only touches its own content
region, brace markers, ellipsis and toggle glyph; descendants keep their own
state and reappear unchanged when an ancestor reopens.

Hover regions report the normalized node they were built from. Regions nest,
so entering an inner region fires after the outer one already fired.
"""
from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Callable, Iterator, Protocol, Union

from astlens.tree.nodes import ArrayNode, NamedObject, NormalizedNode, Primitive, unreachable
from astlens.view import styles
from astlens.view.elements import Element

ENTER = "enter"
EXIT = "exit"

HoverCallback = Callable[[NormalizedNode, str], None]

_ESCAPES = {
    "\n": "\\n",
    "\r": "\\r",
    "\t": "\\t",
    '"': '\\"',
    "\\": "\\\\",
}


def escape_string(text: str) -> str:
    return "".join(_ESCAPES.get(ch, ch) for ch in text)


def format_number(value: int | float) -> str:
    if isinstance(value, float):
        if math.isnan(value):
            return "NaN"
        if math.isinf(value):
            return "Infinity" if value > 0 else "-Infinity"
        if value.is_integer():
            return str(int(value))
    return repr(value)


def _trivia(text: str, visible: bool = True) -> Element:
    element = Element.leaf(styles.TRIVIA, text)
    element.visible = visible
    return element


class _Hoverable:
    node: NormalizedNode
    callback: HoverCallback | None

    def _instrument(self, element: Element) -> None:
        element.on_enter = lambda: self._hover(ENTER)
        element.on_exit = lambda: self._hover(EXIT)

    def _hover(self, event: str) -> None:
        if self.callback is not None:
            self.callback(self.node, event)


class _CollapsibleView(_Hoverable):
    """Shared open/closed bookkeeping of object and array views."""

    open_glyph = "{"
    close_glyph = "}"

    def __init__(self) -> None:
        self.is_open = True
        self.content: Element | None = None
        self.open_brace: Element | None = None
        self.close_brace: Element | None = None
        self.ellipsis: Element | None = None
        self.toggle_glyph: Element | None = None

    @property
    def expandable(self) -> bool:
        return True

    def adopt_braces(self, open_brace: Element, close_brace: Element) -> None:
        """Take ownership of brace markers a parent drew on this view's behalf."""

        self.open_brace = open_brace
        self.close_brace = close_brace
        self._sync()

    def toggle(self) -> None:
        self.is_open = not self.is_open
        self._sync()

    def _sync(self) -> None:
        if self.content is not None:
            self.content.set_visible(self.is_open)
        for brace in (self.open_brace, self.close_brace):
            if brace is not None:
                brace.set_visible(self.is_open)
        if self.ellipsis is not None:
            self.ellipsis.set_visible(not self.is_open)
        if self.toggle_glyph is not None:
            self.toggle_glyph.set_text("-" if self.is_open else "+")


class ObjectView(_CollapsibleView):
    def __init__(self, node: NamedObject, callback: HoverCallback | None = None) -> None:
        super().__init__()
        self.node = node
        self.callback = callback
        self.pairs = [KvPairView(key, construct_view(value, callback), callback) for key, value in node.fields]
        self.container: Element | None = None

    @property
    def name(self) -> str | None:
        return self.node.name

    def render(self, braces: bool = True) -> Element:
        container = Element.block(styles.OBJECT)
        self.ellipsis = _trivia("...", visible=not self.is_open)

        if self.name:
            self.toggle_glyph = Element.leaf(styles.HEADER_TOGGLE, "-" if self.is_open else "+")
            self.toggle_glyph.on_click = self.toggle
            title = Element.leaf(styles.HEADER_NAME, self.name)
            title.on_click = self.toggle
            self.open_brace = _trivia("{")
            container.append(
                Element.row(styles.OBJECT_HEADER, self.toggle_glyph, title, self.open_brace, self.ellipsis)
            )
        else:
            container.append(self.ellipsis)
            if braces:
                self.open_brace = container.append(_trivia("{"))

        self.content = container.append(
            Element.block(styles.CONTENT, *(pair.render() for pair in self.pairs))
        )
        if braces or self.name:
            self.close_brace = container.append(_trivia("}"))

        self._instrument(container)
        self.container = container
        self._sync()
        return container


class ArrayView(_CollapsibleView):
    open_glyph = "["
    close_glyph = "]"

    def __init__(self, node: ArrayNode, callback: HoverCallback | None = None) -> None:
        super().__init__()
        self.node = node
        self.callback = callback
        self.items = [construct_view(item, callback) for item in node.items]
        self.container: Element | None = None

    @property
    def expandable(self) -> bool:
        return bool(self.items)

    def render(self, braces: bool = True) -> Element:
        if not self.items:
            # Nothing to collapse: a plain leaf without toggle or hover handlers.
            return Element.leaf(styles.ARRAY_EMPTY, "[]")

        container = Element.block(styles.ARRAY)
        if braces:
            self.open_brace = container.append(_trivia("["))
        self.ellipsis = container.append(_trivia("...", visible=not self.is_open))
        self.content = container.append(
            Element.block(
                styles.ARRAY_CONTENT,
                *(Element.block(styles.ARRAY_ITEM, item.render()) for item in self.items),
            )
        )
        if braces:
            self.close_brace = container.append(_trivia("]"))

        self._instrument(container)
        self.container = container
        self._sync()
        return container


class PrimitiveView:
    expandable = False

    def __init__(self, node: Primitive) -> None:
        self.node = node

    @property
    def text(self) -> str:
        value = self.node.value
        kind = self.node.kind
        if kind == "string":
            return escape_string(value)
        if kind == "boolean":
            return "true" if value else "false"
        if kind == "null":
            return "null"
        return format_number(value)

    def render(self) -> Element:
        return Element.leaf(styles.PRIMITIVE_CLASSES[self.node.kind], self.text)


class KvPairView(_Hoverable):
    """One ``key: value`` line of an object's content region."""

    def __init__(self, key: str, value: "ViewItem", callback: HoverCallback | None = None) -> None:
        self.key = key
        self.value = value
        self.callback = callback
        self.node = value.node

    def render(self) -> Element:
        item = Element.row(styles.ITEM)
        key_element = item.append(Element.leaf(styles.ITEM_KEY, self.key))
        value = self.value

        if not value.expandable:
            item.append(value.render())
            return item

        key_element.add_class(styles.KEY_BUTTON)
        key_element.on_click = value.toggle
        if isinstance(value, ObjectView) and value.name:
            item.append(Element.block(styles.ITEM_VALUE, value.render()))
        else:
            # Draw the braces here so they sit on the key's line.
            open_brace = _trivia(value.open_glyph)
            close_brace = _trivia(value.close_glyph)
            item.append(Element.block(styles.ITEM_VALUE, open_brace, value.render(braces=False), close_brace))
            value.adopt_braces(open_brace, close_brace)
        self._instrument(item)
        return item


ViewItem = Union[ObjectView, ArrayView, PrimitiveView]


def construct_view(node: NormalizedNode, callback: HoverCallback | None = None) -> ViewItem:
    if isinstance(node, NamedObject):
        return ObjectView(node, callback)
    if isinstance(node, ArrayNode):
        return ArrayView(node, callback)
    if isinstance(node, Primitive):
        return PrimitiveView(node)
    unreachable(node)


def iter_views(view: ViewItem) -> Iterator[ViewItem]:
    """Pre-order traversal of a view and its descendants."""

    stack = [view]
    while stack:
        current = stack.pop()
        yield current
        if isinstance(current, ObjectView):
            stack.extend(reversed([pair.value for pair in current.pairs]))
        elif isinstance(current, ArrayView):
            stack.extend(reversed(current.items))
        elif not isinstance(current, PrimitiveView):
            unreachable(current)


@dataclass
class RenderedTree:
    """The outcome of one render: the view model and the element tree it drew."""

    view: ViewItem
    element: Element

    def view_for(self, node: NormalizedNode) -> ViewItem:
        for view in iter_views(self.view):
            if view.node is node:
                return view
        raise KeyError(node)


class TreeRenderer(Protocol):
    """Turns a normalized tree into elements. Swappable for an incremental renderer."""

    def render(self, tree: NormalizedNode, callback: HoverCallback | None = None) -> RenderedTree:
        ...


class FullTreeRenderer:
    """Rebuilds the whole element tree from scratch on every call."""

    def render(self, tree: NormalizedNode, callback: HoverCallback | None = None) -> RenderedTree:
        view = construct_view(tree, callback)
        root = Element.block(styles.JSON_CONTAINER, view.render())
        return RenderedTree(view, root)
