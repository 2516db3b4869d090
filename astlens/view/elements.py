"""Host-agnostic widget structure produced by the tree renderer.

An :class:`Element` is a node in a small retained UI tree: a text leaf, a
horizontal row or a vertical block. Hosts (the Qt tree widget, tests) read
the structure and subscribe to visibility/text changes with :meth:`bind`.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Iterator

BLOCK = "block"
ROW = "row"
TEXT = "text"

Handler = Callable[[], None]


@dataclass(eq=False)
class Element:
    layout: str
    classes: tuple[str, ...] = ()
    text: str = ""
    children: list["Element"] = field(default_factory=list)
    visible: bool = True
    on_click: Handler | None = None
    on_enter: Handler | None = None
    on_exit: Handler | None = None
    _listener: Callable[["Element"], None] | None = field(default=None, repr=False)

    # Construction ----------------------------------------------------
    @classmethod
    def leaf(cls, css_class: str, text: str) -> "Element":
        return cls(TEXT, (css_class,), text)

    @classmethod
    def block(cls, css_class: str, *children: "Element") -> "Element":
        return cls(BLOCK, (css_class,), children=list(children))

    @classmethod
    def row(cls, css_class: str, *children: "Element") -> "Element":
        return cls(ROW, (css_class,), children=list(children))

    def append(self, child: "Element") -> "Element":
        self.children.append(child)
        return child

    def add_class(self, css_class: str) -> None:
        if css_class not in self.classes:
            self.classes = (*self.classes, css_class)

    def has_class(self, css_class: str) -> bool:
        return css_class in self.classes

    # Mutation --------------------------------------------------------
    def set_visible(self, visible: bool) -> None:
        if self.visible != visible:
            self.visible = visible
            self._notify()

    def set_text(self, text: str) -> None:
        if self.text != text:
            self.text = text
            self._notify()

    def bind(self, listener: Callable[["Element"], None] | None) -> None:
        self._listener = listener

    def _notify(self) -> None:
        if self._listener is not None:
            self._listener(self)

    # Events ----------------------------------------------------------
    def click(self) -> None:
        if self.on_click is not None:
            self.on_click()

    def enter(self) -> None:
        if self.on_enter is not None:
            self.on_enter()

    def exit(self) -> None:
        if self.on_exit is not None:
            self.on_exit()

    # Queries ---------------------------------------------------------
    def walk(self) -> Iterator["Element"]:
        """Pre-order traversal with an explicit stack."""

        stack = [self]
        while stack:
            element = stack.pop()
            yield element
            stack.extend(reversed(element.children))

    def find_all(self, css_class: str) -> list["Element"]:
        return [element for element in self.walk() if element.has_class(css_class)]

    def visible_text(self) -> str:
        """Concatenate the text of leaves that are not hidden, depth first."""

        if not self.visible:
            return ""
        if self.layout == TEXT:
            return self.text
        return "".join(child.visible_text() for child in self.children)
