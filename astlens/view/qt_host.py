"""PySide6 host that materialises rendered elements as widgets."""
from __future__ import annotations

from PySide6.QtCore import Qt
from PySide6.QtGui import QMouseEvent
from PySide6.QtWidgets import QHBoxLayout, QLabel, QScrollArea, QVBoxLayout, QWidget

from astlens.core.logging import get_logger
from astlens.core.theme import TreeTheme
from astlens.view import styles
from astlens.view.elements import BLOCK, ROW, TEXT, Element

logger = get_logger(__name__)


def _primary_class(element: Element) -> str:
    return element.classes[0] if element.classes else ""


class _ElementLabel(QLabel):
    """Text leaf. Forwards clicks and hover to its element."""

    def __init__(self, element: Element, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self.element = element
        self.setTextFormat(Qt.PlainText)
        self.setProperty("tokenClass", _primary_class(element))
        self.setText(styles.decorate(_primary_class(element), element.text))
        if element.on_click is not None:
            self.setCursor(Qt.PointingHandCursor)

    def mousePressEvent(self, event: QMouseEvent) -> None:  # type: ignore[override]
        if event.button() == Qt.LeftButton and self.element.on_click is not None:
            self.element.click()
            event.accept()
            return
        super().mousePressEvent(event)

    def enterEvent(self, event) -> None:  # type: ignore[override]
        self.element.enter()
        super().enterEvent(event)

    def leaveEvent(self, event) -> None:  # type: ignore[override]
        self.element.exit()
        super().leaveEvent(event)


class _ElementFrame(QWidget):
    """Row or block container. Forwards hover to its element."""

    def __init__(self, element: Element, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self.element = element
        self.setProperty("tokenClass", _primary_class(element))
        if element.layout == ROW:
            layout = QHBoxLayout(self)
            layout.setSpacing(6)
            layout.setAlignment(Qt.AlignLeft | Qt.AlignTop)
        else:
            layout = QVBoxLayout(self)
            layout.setSpacing(0)
            layout.setAlignment(Qt.AlignTop)
        layout.setContentsMargins(styles.INDENTS.get(_primary_class(element), 0), 0, 0, 0)

    def enterEvent(self, event) -> None:  # type: ignore[override]
        self.element.enter()
        super().enterEvent(event)

    def leaveEvent(self, event) -> None:  # type: ignore[override]
        self.element.exit()
        super().leaveEvent(event)


class TreeHostWidget(QScrollArea):
    """Scrollable container the AST tree is drawn into."""

    def __init__(self, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self.setObjectName("astTreeHost")
        self.setWidgetResizable(True)
        self._root: Element | None = None
        self._widgets: dict[int, QWidget] = {}
        self.show_placeholder("Waiting for the first parse...")

    def apply_theme(self, theme: TreeTheme) -> None:
        self.setStyleSheet(styles.make_style_sheet(theme))

    def show_placeholder(self, message: str) -> None:
        self._reset()
        label = QLabel(message)
        label.setAlignment(Qt.AlignCenter)
        self.setWidget(label)

    def show_tree(self, root: Element) -> None:
        """Replace whatever is shown with ``root``, starting from an empty container."""

        self._reset()
        self._root = root
        container = self._build(root)
        self.setWidget(container)
        logger.debug("Materialised %d tree widgets", len(self._widgets))

    def widget_for(self, element: Element) -> QWidget:
        return self._widgets[id(element)]

    @property
    def root_element(self) -> Element | None:
        return self._root

    def _reset(self) -> None:
        if self._root is not None:
            for element in self._root.walk():
                element.bind(None)
        self._root = None
        self._widgets.clear()
        old = self.takeWidget()
        if old is not None:
            old.deleteLater()

    def _build(self, root: Element) -> QWidget:
        """Create widgets for ``root`` and its descendants, parents before children."""

        container = self._create(root, None)
        pending = [(root, container)]
        while pending:
            element, widget = pending.pop()
            if element.layout == TEXT:
                continue
            layout = widget.layout()
            for child in element.children:
                child_widget = self._create(child, widget)
                layout.addWidget(child_widget)
                pending.append((child, child_widget))
            if element.layout == ROW:
                layout.addStretch(1)
        return container

    def _create(self, element: Element, parent: QWidget | None) -> QWidget:
        if element.layout == TEXT:
            widget: QWidget = _ElementLabel(element, parent)
        elif element.layout in (ROW, BLOCK):
            widget = _ElementFrame(element, parent)
        else:
            raise ValueError(f"Unknown element layout: {element.layout!r}")

        if not element.visible:
            widget.setVisible(False)
        self._widgets[id(element)] = widget
        element.bind(self._sync_widget)
        return widget

    def _sync_widget(self, element: Element) -> None:
        widget = self._widgets.get(id(element))
        if widget is None:
            return
        widget.setVisible(element.visible)
        if isinstance(widget, _ElementLabel):
            widget.setText(styles.decorate(_primary_class(element), element.text))
