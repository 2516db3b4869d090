from __future__ import annotations

import pytest

from astlens.core.errors import UnknownValueKind
from astlens.tree import ArrayNode, AstNormalizer, NamedObject, Primitive, Span, normalize, snake_to_pascal, to_plain
from astlens.tree.normalizer import coerce_string


def test_variable_declarator_wrapper_is_flattened_and_spanned() -> None:
    raw = {
        "start": 4,
        "end": 9,
        "data": {"variable_declarator": {"id": "x", "init": "1"}},
    }

    node = normalize(raw)

    assert isinstance(node, NamedObject)
    assert node.name == "VariableDeclarator"
    assert node.span == Span(4, 9)
    assert node.keys() == ["id", "init"]
    assert node.field("id").value == "x"
    init = node.field("init")
    assert isinstance(init.value, int) and init.value == 1


@pytest.mark.parametrize(
    ("text", "expected"),
    [
        ("true", True),
        ("false", False),
        ("42", 42),
        ("-7", -7),
        ("3.5", 3.5),
        ("1e3", 1000.0),
        ("x", "x"),
        ("", ""),
        ("True", "True"),
        ("12px", "12px"),
    ],
)
def test_string_coercion(text: str, expected: object) -> None:
    result = coerce_string(text)

    assert result == expected
    assert type(result) is type(expected)


def test_none_payload_collapses_to_null() -> None:
    node = normalize({"start": 0, "end": 3, "data": {"none": True}})

    assert isinstance(node, Primitive)
    assert node.value is None
    assert node.kind == "null"


def test_null_payload_collapses_to_null() -> None:
    assert normalize({"start": 0, "end": 3, "data": None}).value is None


def test_nested_arrays_keep_their_shape() -> None:
    node = normalize([["x"]])

    assert isinstance(node, ArrayNode)
    assert isinstance(node.items[0], ArrayNode)
    assert to_plain(node) == [["x"]]


def test_empty_object_stays_an_empty_record() -> None:
    node = normalize({})

    assert isinstance(node, NamedObject)
    assert node.name is None
    assert node.fields == ()


def test_hoisted_field_keeps_inner_value_with_span() -> None:
    raw = {
        "declarations": {
            "start": 2,
            "end": 8,
            "data": {"declarations": {"identifier": {"name": "x"}}},
        },
        "kind": "let",
    }

    node = normalize(raw)

    assert node.keys() == ["declarations", "kind"]
    hoisted = node.field("declarations")
    assert isinstance(hoisted, NamedObject)
    assert hoisted.name == "Identifier"
    assert hoisted.span == Span(2, 8)


def test_hoisting_requires_matching_inner_key() -> None:
    raw = {"body": {"start": 0, "end": 4, "data": {"other": {"a": "b"}}}, "sourceType": "module"}

    node = normalize(raw)
    body = node.field("body")

    # Falls through to span extraction of the whole value.
    assert isinstance(body, NamedObject)
    assert body.name == "Other"
    assert body.span == Span(0, 4)


def test_numbers_and_booleans_pass_through() -> None:
    node = normalize({"a": 1, "b": 2.5, "c": False, "d": None})

    assert to_plain(node) == {"a": 1, "b": 2.5, "c": False, "d": None}


def test_spans_are_clamped_to_source_length() -> None:
    node = AstNormalizer(byte_length=5).normalize({"start": 2, "end": 40, "data": {"program": {"body": []}}})

    assert node.span == Span(2, 5)


def test_spans_on_scalars_are_dropped() -> None:
    node = normalize({"start": 0, "end": 1, "data": "x"})

    assert isinstance(node, Primitive)
    assert node.value == "x"


def test_wrapper_around_scalar_span_stays_a_field() -> None:
    node = normalize({"value": {"start": 0, "end": 1, "data": "1"}})

    assert isinstance(node, NamedObject)
    assert node.name is None
    assert node.field("value").value == 1


def test_unknown_value_kind_reports_path() -> None:
    with pytest.raises(UnknownValueKind) as excinfo:
        normalize({"body": [1, object()]})

    assert excinfo.value.path == "/body/1"


def test_key_order_is_preserved() -> None:
    node = normalize({"zeta": 1, "alpha": 2, "mid": 3})

    assert node.keys() == ["zeta", "alpha", "mid"]


@pytest.mark.parametrize(
    ("name", "expected"),
    [
        ("variable_declarator", "VariableDeclarator"),
        ("program", "Program"),
        ("for_in_statement", "ForInStatement"),
        ("a__b", "AB"),
    ],
)
def test_snake_to_pascal(name: str, expected: str) -> None:
    assert snake_to_pascal(name) == expected


def _identifier() -> dict:
    return {"start": 0, "end": 1, "data": {"identifier": {"name": "a"}}}


def _binary_chain(depth: int) -> dict:
    node = _identifier()
    for _ in range(depth):
        node = {
            "start": 0,
            "end": 1,
            "data": {"binary_expression": {"left": node, "operator": "+", "right": _identifier()}},
        }
    return node


def test_deeply_nested_chain_normalizes() -> None:
    tree = normalize(_binary_chain(2000))

    depth = 0
    node = tree
    while node.name == "BinaryExpression":
        assert node.field("operator").value == "+"
        node = node.field("left")
        depth += 1

    assert depth == 2000
    assert node.name == "Identifier"
    assert node.span == Span(0, 1)
