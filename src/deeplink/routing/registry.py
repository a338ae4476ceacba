"""Immutable URI template registry with a segment trie.

Templates are inserted scheme -> host -> path segment, then the trie is
frozen. Matching (``deeplink.routing.matcher``) only ever reads it, so a
built registry can be shared across threads without locking.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from types import MappingProxyType

from deeplink.config import RegistryConfig
from deeplink.errors import AmbiguousRegistration, TemplateSyntaxError
from deeplink.routing.parser import parse_template
from deeplink.routing.result import MatchResult, NoMatch
from deeplink.routing.template import WILDCARD, HandlerRef, Literal, UriTemplate

logger = logging.getLogger("deeplink.registry")

type Entry = tuple[UriTemplate | str, HandlerRef]


class TrieNode:
    """A path node in the registry trie. Mutable during build only."""

    __slots__ = ("_frozen", "children", "entries", "param_child")

    def __init__(self) -> None:
        # Literal segment children: "users" -> node
        self.children: dict[str, TrieNode] = {}
        # Single parameter child; names live on the templates, not the edge
        self.param_child: TrieNode | None = None
        # Templates ending here, in declaration order (first wins)
        self.entries: list[UriTemplate] = []

    def __setattr__(self, name: str, value: object) -> None:
        if getattr(self, "_frozen", False):
            msg = "TrieNode is frozen"
            raise AttributeError(msg)
        object.__setattr__(self, name, value)

    def _freeze(self) -> None:
        for child in self.children.values():
            child._freeze()
        if self.param_child is not None:
            self.param_child._freeze()
        self.children = MappingProxyType(self.children)  # type: ignore[assignment]
        self.entries = tuple(self.entries)  # type: ignore[assignment]
        self._frozen = True


class Registry:
    """Immutable registry of URI templates.

    Usage::

        registry = Registry.build([
            ("myapp://shop/items/{id}", "item_detail"),
            ("myapp://shop/items/new", "item_create"),
        ])
        result = registry.match("myapp://shop/items/42?ref=mail")
        if result:
            result.handler_ref   # "item_detail"
            result.parameters    # {"id": "42", "ref": "mail"}
    """

    __slots__ = ("_config", "_templates", "_tree")

    def __init__(self, config: RegistryConfig | None = None) -> None:
        self._config = config or RegistryConfig()
        self._templates: list[UriTemplate] = []
        # scheme -> host -> root path node
        self._tree: dict[str, dict[str, TrieNode]] = {}

    @classmethod
    def build(
        cls,
        entries: Iterable[Entry],
        config: RegistryConfig | None = None,
    ) -> Registry:
        """Build a frozen registry from ``(template, handler_ref)`` pairs.

        Templates may be strings or pre-parsed ``UriTemplate`` values.
        Fails fast: the first malformed template raises
        ``TemplateSyntaxError`` and no registry is returned.
        """
        registry = cls(config)
        shapes: dict[tuple[str, str, tuple[str | None, ...]], UriTemplate] = {}
        for template, handler_ref in entries:
            bound = registry._prepare(template).with_handler(handler_ref)
            registry._check_ambiguous(bound, shapes)
            registry._insert(bound)
        registry._freeze()
        logger.debug(
            "Built URI registry: %d templates across %d schemes",
            len(registry._templates),
            len(registry._tree),
        )
        return registry

    @property
    def config(self) -> RegistryConfig:
        return self._config

    @property
    def templates(self) -> tuple[UriTemplate, ...]:
        """All registered templates, bound to their handlers, in declaration order."""
        return tuple(self._templates)

    @property
    def tree(self) -> Mapping[str, Mapping[str, TrieNode]]:
        """Read-only trie: scheme -> host -> root path node."""
        return self._tree

    def match(self, uri: str) -> MatchResult | NoMatch:
        """Match *uri* against the registry. See ``deeplink.routing.matcher.match``."""
        from deeplink.routing.matcher import match

        return match(self, uri)

    def supports(self, uri: str) -> bool:
        """Return whether some registered template matches *uri*."""
        return bool(self.match(uri))

    def __len__(self) -> int:
        return len(self._templates)

    def __repr__(self) -> str:
        return f"Registry({len(self._templates)} templates)"

    # -- Build --

    def _prepare(self, template: UriTemplate | str) -> UriTemplate:
        if isinstance(template, str):
            return parse_template(
                template,
                strict=self._config.strict_literals,
                wildcards=self._config.wildcards,
            )
        if not self._config.wildcards and WILDCARD in (template.scheme, template.host):
            raise TemplateSyntaxError(template.source, "wildcards are disabled")
        if self._config.strict_literals:
            for seg in template.path_segments:
                if isinstance(seg, Literal) and ("{" in seg.value or "}" in seg.value):
                    raise TemplateSyntaxError(
                        template.source,
                        f"segment {seg.value!r} mixes literal text with braces; "
                        "a {param} placeholder must span the whole segment",
                    )
        return template

    def _check_ambiguous(
        self,
        template: UriTemplate,
        shapes: dict[tuple[str, str, tuple[str | None, ...]], UriTemplate],
    ) -> None:
        previous = shapes.setdefault(template.shape, template)
        if previous is template:
            return
        if self._config.on_ambiguous == "error":
            raise AmbiguousRegistration(template.source, previous.source)
        if self._config.on_ambiguous == "warn":
            logger.warning(
                "URI template %r is indistinguishable from %r; the first registration wins",
                template.source,
                previous.source,
            )

    def _insert(self, template: UriTemplate) -> None:
        hosts = self._tree.setdefault(template.scheme, {})
        node = hosts.setdefault(template.host, TrieNode())

        for seg in template.path_segments:
            if isinstance(seg, Literal):
                if seg.value not in node.children:
                    node.children[seg.value] = TrieNode()
                node = node.children[seg.value]
            else:
                if node.param_child is None:
                    node.param_child = TrieNode()
                node = node.param_child

        node.entries.append(template)
        self._templates.append(template)

    def _freeze(self) -> None:
        for hosts in self._tree.values():
            for root in hosts.values():
                root._freeze()
        self._tree = MappingProxyType(  # type: ignore[assignment]
            {scheme: MappingProxyType(hosts) for scheme, hosts in self._tree.items()}
        )
        self._templates = tuple(self._templates)  # type: ignore[assignment]


def register(
    templates: Iterable[Entry],
    config: RegistryConfig | None = None,
) -> Registry:
    """Build a registry from ``(template, handler_ref)`` pairs.

    Raises ``TemplateSyntaxError`` identifying the first malformed template.
    """
    return Registry.build(templates, config)
