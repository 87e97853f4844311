"""Tests for the template evaluator."""

import copy
import json

import pytest

from provider_gateway.exceptions import MalformedTemplateOutputError
from provider_gateway.mapping import Context, evaluate, evaluate_json
from provider_gateway.mapping.nodes import (
    Equals,
    ForEach,
    If,
    IsEmpty,
    Let,
    Not,
    Quote,
    Ref,
    Rewrite,
    Template,
    Text,
)


def render(*nodes, body=None, params=None) -> str:
    return evaluate(
        Template("test", tuple(nodes)),
        Context(body=body, path_params=params or {}),
    )


class TestReferences:
    """Variable references and string concatenation."""

    def test_text_is_verbatim(self) -> None:
        assert render(Text('{"a":1}')) == '{"a":1}'

    def test_ref_into_body(self) -> None:
        assert render(Ref("body.contact.email"), body={"contact": {"email": "x@y.z"}}) == "x@y.z"

    def test_ref_into_path_params(self) -> None:
        assert render(Ref("params.id"), params={"id": "p-1"}) == "p-1"

    def test_missing_ref_renders_empty(self) -> None:
        """Test that a failed dereference renders nothing instead of raising."""
        assert render(Ref("body.contact.email"), body={}) == ""
        assert render(Ref("unknown.root")) == ""
        assert render(Ref("body.a"), body=None) == ""

    def test_quote_concatenates_parts(self) -> None:
        out = render(Quote((Text("PROVIDER#"), Ref("params.id"))), params={"id": "42"})
        assert out == '"PROVIDER#42"'

    def test_quote_escapes_injected_json(self) -> None:
        """Test that request data cannot break out of its string."""
        hostile = '", "TableName": "other-table'
        out = render(
            Text('{"name":'), Quote((Ref("body.name"),)), Text("}"),
            body={"name": hostile},
        )
        assert json.loads(out) == {"name": hostile}

    def test_quote_of_missing_value_is_empty_string(self) -> None:
        assert render(Quote((Ref("body.nothing"),)), body={}) == '""'


class TestConditionals:
    """If with Equals / IsEmpty / Not."""

    def test_equals_selects_then(self) -> None:
        node = If(Equals("body.kind", "a"), then=(Text("A"),), otherwise=(Text("B"),))
        assert render(node, body={"kind": "a"}) == "A"

    def test_equals_selects_otherwise(self) -> None:
        node = If(Equals("body.kind", "a"), then=(Text("A"),), otherwise=(Text("B"),))
        assert render(node, body={"kind": "b"}) == "B"
        assert render(node, body={}) == "B"

    def test_missing_otherwise_renders_nothing(self) -> None:
        assert render(If(Equals("body.x", 1), then=(Text("yes"),)), body={}) == ""

    @pytest.mark.parametrize("value", [None, {}, [], ""])
    def test_is_empty_true(self, value) -> None:
        node = If(IsEmpty("body.item"), then=(Text("empty"),), otherwise=(Text("full"),))
        assert render(node, body={"item": value}) == "empty"

    def test_is_empty_on_absent_key(self) -> None:
        node = If(IsEmpty("body.item"), then=(Text("empty"),))
        assert render(node, body={}) == "empty"

    def test_not_negates(self) -> None:
        node = If(Not(IsEmpty("body.item")), then=(Text("full"),))
        assert render(node, body={"item": {"id": 1}}) == "full"
        assert render(node, body={"item": {}}) == ""


class TestIteration:
    """ForEach with separators and the foreach marker."""

    def test_separator_between_items_only(self) -> None:
        node = ForEach("body.items", "x", (Quote((Ref("x"),)),))
        out = render(Text("["), node, Text("]"), body={"items": ["a", "b", "c"]})
        assert out == '["a","b","c"]'
        assert json.loads(out) == ["a", "b", "c"]

    def test_single_item_has_no_separator(self) -> None:
        node = ForEach("body.items", "x", (Ref("x"),))
        assert render(node, body={"items": ["only"]}) == "only"

    def test_empty_and_missing_lists_render_nothing(self) -> None:
        node = ForEach("body.items", "x", (Ref("x"),))
        assert render(node, body={"items": []}) == ""
        assert render(node, body={}) == ""

    def test_non_list_source_iterates_zero_times(self) -> None:
        node = ForEach("body.items", "x", (Ref("x"),))
        assert render(node, body={"items": {"a": 1}}) == ""

    def test_custom_separator(self) -> None:
        node = ForEach("body.items", "x", (Ref("x"),), separator="|")
        assert render(node, body={"items": [1, 2]}) == "1|2"

    def test_foreach_marker(self) -> None:
        """Test foreach.hasNext and foreach.index inside the body."""
        node = ForEach(
            "body.items",
            "x",
            (
                Ref("foreach.index"),
                If(Equals("foreach.hasNext", True), then=(Text("+"),), otherwise=(Text("."),)),
            ),
            separator="",
        )
        assert render(node, body={"items": ["a", "b", "c"]}) == "0+1+2."

    def test_loop_variable_does_not_leak(self) -> None:
        node = ForEach("body.items", "x", (Ref("x"),))
        assert render(node, Ref("x"), body={"items": ["a"]}) == "a"

    def test_nested_iteration(self) -> None:
        inner = ForEach("row", "cell", (Ref("cell"),), separator=",")
        outer = ForEach("body.rows", "row", (Text("["), inner, Text("]")), separator=",")
        out = render(Text("["), outer, Text("]"), body={"rows": [[1, 2], [], [3]]})
        assert json.loads(out) == [[1, 2], [], [3]]


class TestRewriteAndLet:
    """Rewrite and Let nodes."""

    def test_rewrite_applies_in_order(self) -> None:
        node = Rewrite("body.name", (("custom:", ""), ("_", "-")))
        assert render(node, body={"name": "custom:plan_tier"}) == "plan-tier"

    def test_rewrite_order_matters(self) -> None:
        node = Rewrite("body.name", (("ab", "x"), ("x", "y")))
        assert render(node, body={"name": "ab"}) == "y"

    def test_rewrite_of_missing_value(self) -> None:
        assert render(Rewrite("body.name", (("a", "b"),)), body={}) == ""

    def test_let_binds_name(self) -> None:
        node = Let("item", "body.Item", (Ref("item.id.S"),))
        assert render(node, body={"Item": {"id": {"S": "p1"}}}) == "p1"

    def test_let_binding_is_scoped(self) -> None:
        node = Let("item", "body.Item", (Ref("item.id"),))
        assert render(node, Ref("item.id"), body={"Item": {"id": "a"}}) == "a"


class TestPurity:
    """Evaluation is a pure projection."""

    def test_context_is_not_mutated(self) -> None:
        body = {"items": [{"name": "custom:x"}], "Item": {}}
        snapshot = copy.deepcopy(body)
        template = Template(
            "t",
            (
                ForEach("body.items", "i", (Rewrite("i.name", (("custom:", ""),)),)),
                Let("item", "body.Item", (If(IsEmpty("item"), then=(Text("-"),)),)),
            ),
        )
        evaluate(template, Context(body=body))
        assert body == snapshot

    def test_same_input_same_output(self) -> None:
        template = Template("t", (ForEach("body.items", "i", (Quote((Ref("i"),)),)),))
        context = Context(body={"items": ["a", "b"]})
        assert evaluate(template, context) == evaluate(template, context)

    def test_path_params_are_read_only(self) -> None:
        params = {"id": "1"}
        context = Context(path_params=params)
        params["id"] = "2"
        assert context.path_params["id"] == "1"
        with pytest.raises(TypeError):
            context.path_params["id"] = "3"  # type: ignore[index]


class TestEvaluateJson:
    """Parsing of rendered output."""

    def test_parses_valid_output(self) -> None:
        template = Template("t", (Text('{"a":'), Quote((Ref("body.a"),)), Text("}")))
        assert evaluate_json(template, Context(body={"a": "b"})) == {"a": "b"}

    def test_invalid_output_raises_template_error(self) -> None:
        template = Template("Broken", (Text('{"a":'), Ref("body.a"), Text("}")))
        with pytest.raises(MalformedTemplateOutputError) as exc_info:
            evaluate_json(template, Context(body={"a": "not json"}))
        assert exc_info.value.status_code == 500
        assert exc_info.value.details["template"] == "Broken"
