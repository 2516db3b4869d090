from __future__ import annotations

from astlens.core.theme import tree_theme
from astlens.tree.nodes import ArrayNode, NamedObject, Primitive, Span
from astlens.view import FullTreeRenderer, styles
from astlens.view.qt_host import TreeHostWidget


def _tree() -> NamedObject:
    return NamedObject(
        "Program",
        (("body", ArrayNode(())), ("name", Primitive("x"))),
        Span(0, 3),
    )


def test_show_tree_materialises_elements(qt_app) -> None:
    host = TreeHostWidget()
    rendered = FullTreeRenderer().render(_tree())

    host.show_tree(rendered.element)

    assert host.root_element is rendered.element
    (string,) = rendered.element.find_all(styles.STRING)
    assert host.widget_for(string).text() == '"x"'
    key = rendered.element.find_all(styles.ITEM_KEY)[0]
    assert host.widget_for(key).text() == "body:"
    assert host.widget_for(rendered.view.ellipsis).isHidden()


def test_toggle_updates_widgets(qt_app) -> None:
    host = TreeHostWidget()
    rendered = FullTreeRenderer().render(_tree())
    host.show_tree(rendered.element)

    rendered.view.toggle()

    assert host.widget_for(rendered.view.content).isHidden()
    assert not host.widget_for(rendered.view.ellipsis).isHidden()
    assert host.widget_for(rendered.view.toggle_glyph).text() == "+"


def test_show_tree_starts_from_empty_container(qt_app) -> None:
    host = TreeHostWidget()
    first = FullTreeRenderer().render(_tree())
    host.show_tree(first.element)

    second = FullTreeRenderer().render(_tree())
    host.show_tree(second.element)

    assert host.root_element is second.element
    # Elements of the replaced tree no longer drive any widget.
    first.view.toggle()
    assert not host.widget_for(second.view.content).isHidden()


def test_labels_carry_token_class(qt_app) -> None:
    host = TreeHostWidget()
    rendered = FullTreeRenderer().render(_tree())
    host.show_tree(rendered.element)

    (empty,) = rendered.element.find_all(styles.ARRAY_EMPTY)

    assert host.widget_for(empty).property("tokenClass") == styles.ARRAY_EMPTY


def test_apply_theme_sets_style_sheet(qt_app) -> None:
    host = TreeHostWidget()

    host.apply_theme(tree_theme("espresso"))

    assert "#CF4F5F" in host.styleSheet()


def test_children_keep_their_order(qt_app) -> None:
    host = TreeHostWidget()
    rendered = FullTreeRenderer().render(_tree())
    host.show_tree(rendered.element)

    item = rendered.element.find_all(styles.ITEM)[1]
    layout = host.widget_for(item).layout()

    assert layout.itemAt(0).widget() is host.widget_for(item.children[0])
    assert layout.itemAt(1).widget() is host.widget_for(item.children[1])
    assert host.widget_for(item.children[0]).text() == "name:"
