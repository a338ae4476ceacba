"""Tests for deeplink.routing.registry — building the frozen template trie."""

import logging

import pytest

from deeplink.config import RegistryConfig
from deeplink.errors import AmbiguousRegistration, TemplateSyntaxError
from deeplink.routing.parser import parse_template
from deeplink.routing.registry import Registry, register


def _handler() -> str:
    return "ok"


class TestBuild:
    def test_empty(self) -> None:
        r = Registry.build([])
        assert len(r) == 0
        assert r.templates == ()

    def test_templates_in_declaration_order(self) -> None:
        r = Registry.build([("app://h/b", "b"), ("app://h/a", "a"), ("web://x", "x")])
        assert [t.source for t in r.templates] == ["app://h/b", "app://h/a", "web://x"]

    def test_templates_bound_to_handlers(self) -> None:
        r = Registry.build([("app://h/x", _handler)])
        assert r.templates[0].handler_ref is _handler

    def test_accepts_parsed_templates(self) -> None:
        r = Registry.build([(parse_template("app://h/{id}"), "detail")])
        assert r.templates[0].handler_ref == "detail"

    def test_register_alias(self) -> None:
        r = register([("app://h/x", "x")])
        assert isinstance(r, Registry)
        assert len(r) == 1

    def test_default_config(self) -> None:
        assert Registry.build([]).config == RegistryConfig()

    def test_repr(self) -> None:
        assert repr(Registry.build([("app://h/x", "x")])) == "Registry(1 templates)"

    def test_builds_from_generator(self) -> None:
        pairs = ((f"app://h/{name}", name) for name in ("a", "b", "c"))
        assert len(Registry.build(pairs)) == 3


class TestTrieShape:
    def test_literal_and_param_edges_are_distinct(self) -> None:
        r = Registry.build([("app://h/x/y", "lit"), ("app://h/x/{p}", "param")])
        x = r.tree["app"]["h"].children["x"]
        assert set(x.children) == {"y"}
        assert x.param_child is not None

    def test_one_param_edge_regardless_of_name(self) -> None:
        r = Registry.build([("app://h/{a}/x", "one"), ("app://h/{b}/y", "two")])
        root = r.tree["app"]["h"]
        assert root.param_child is not None
        assert set(root.param_child.children) == {"x", "y"}

    def test_terminal_entries_keep_order(self) -> None:
        r = Registry.build(
            [("app://h/{a}", "first"), ("app://h/{b}", "second")],
            RegistryConfig(on_ambiguous="ignore"),
        )
        node = r.tree["app"]["h"].param_child
        assert node is not None
        assert [t.handler_ref for t in node.entries] == ["first", "second"]

    def test_tree_is_read_only(self) -> None:
        r = Registry.build([("app://h/x", "x")])
        with pytest.raises(TypeError):
            r.tree["web"] = {}  # type: ignore[index]
        with pytest.raises(TypeError):
            r.tree["app"]["h"].children["y"] = None  # type: ignore[index]
        with pytest.raises(AttributeError):
            r.tree["app"]["h"].param_child = None
        with pytest.raises(AttributeError):
            r.tree["app"]["h"].children["x"].entries = ()  # type: ignore[assignment]

    def test_entries_are_tuples(self) -> None:
        r = Registry.build([("app://h/x", "x")])
        assert isinstance(r.tree["app"]["h"].children["x"].entries, tuple)


class TestBuildErrors:
    def test_malformed_template_fails_fast(self) -> None:
        with pytest.raises(TemplateSyntaxError) as exc_info:
            Registry.build([("app://h/ok", "ok"), ("app://h//{}", "broken")])
        assert exc_info.value.template == "app://h//{}"

    def test_strict_literals_from_config(self) -> None:
        with pytest.raises(TemplateSyntaxError):
            Registry.build([("app://h/item-{id}", "x")])

        lenient = Registry.build(
            [("app://h/item-{id}", "x")], RegistryConfig(strict_literals=False)
        )
        assert len(lenient) == 1

    def test_strict_literals_for_parsed_templates(self) -> None:
        parsed = parse_template("app://h/item-{id}", strict=False)
        with pytest.raises(TemplateSyntaxError, match="braces") as exc_info:
            Registry.build([(parsed, "x")])
        assert exc_info.value.template == "app://h/item-{id}"

        lenient = Registry.build([(parsed, "x")], RegistryConfig(strict_literals=False))
        assert len(lenient) == 1

    def test_wildcards_disabled_for_strings(self) -> None:
        with pytest.raises(TemplateSyntaxError, match="wildcard"):
            Registry.build([("*://h/x", "x")], RegistryConfig(wildcards=False))

    def test_wildcards_disabled_for_parsed_templates(self) -> None:
        with pytest.raises(TemplateSyntaxError, match="wildcard"):
            Registry.build([(parse_template("app://*/x"), "x")], RegistryConfig(wildcards=False))


class TestAmbiguity:
    def test_warns_by_default(self, caplog) -> None:
        with caplog.at_level("WARNING", logger="deeplink.registry"):
            Registry.build([("app://h/x/{a}", "first"), ("app://h/x/{b}", "second")])
        assert any(
            "app://h/x/{b}" in r.message and "app://h/x/{a}" in r.message
            for r in caplog.records
        )

    def test_error_policy_raises(self) -> None:
        with pytest.raises(AmbiguousRegistration) as exc_info:
            Registry.build(
                [("app://h/x/{a}", "first"), ("app://h/x/{b}", "second")],
                RegistryConfig(on_ambiguous="error"),
            )
        assert exc_info.value.template == "app://h/x/{b}"
        assert exc_info.value.previous == "app://h/x/{a}"

    def test_ignore_policy_is_silent(self, caplog) -> None:
        with caplog.at_level("WARNING", logger="deeplink.registry"):
            Registry.build(
                [("app://h/x", "first"), ("app://h/x", "second")],
                RegistryConfig(on_ambiguous="ignore"),
            )
        assert not caplog.records

    def test_distinct_shapes_not_ambiguous(self) -> None:
        r = Registry.build(
            [("app://h/x/y", "lit"), ("app://h/x/{p}", "param"), ("web://h/x/y", "web")],
            RegistryConfig(on_ambiguous="error"),
        )
        assert len(r) == 3

    def test_case_insensitive_host_is_ambiguous(self) -> None:
        with pytest.raises(AmbiguousRegistration):
            Registry.build(
                [("app://Host/x", "first"), ("app://host/x", "second")],
                RegistryConfig(on_ambiguous="error"),
            )


class TestLogging:
    def test_build_summary_at_debug(self, caplog) -> None:
        with caplog.at_level(logging.DEBUG, logger="deeplink.registry"):
            Registry.build([("app://h/x", "x"), ("web://h/y", "y")])
        assert any("2 templates across 2 schemes" in r.message for r in caplog.records)
