"""Trie traversal for incoming URIs.

Walks a frozen ``Registry`` with backtracking: exact scheme and host
before wildcards, literal segments before parameters. Every call keeps
its state on the stack, so concurrent calls against one registry are safe.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator, Mapping, Sequence
from typing import TYPE_CHECKING

from deeplink.errors import UriParseError
from deeplink.routing.params import extract_params
from deeplink.routing.result import MatchResult, NoMatch
from deeplink.routing.template import WILDCARD, UriTemplate
from deeplink.routing.uri import ParsedUri, parse_uri

if TYPE_CHECKING:
    from deeplink.routing.registry import Registry, TrieNode

logger = logging.getLogger("deeplink.matcher")


def match(registry: Registry, uri: str) -> MatchResult | NoMatch:
    """Resolve *uri* to the single best registered template.

    Returns a ``MatchResult`` with extracted parameters, or a ``NoMatch``
    carrying the URI for diagnostics. A malformed URI is a ``NoMatch``
    with ``error`` set; this function does not raise on string input.
    """
    try:
        parsed = parse_uri(uri)
    except UriParseError as exc:
        logger.debug("Rejected malformed URI %r: %s", uri, exc.reason)
        return NoMatch(uri=uri, reason="malformed URI", error=exc)

    template = _find(registry.tree, parsed)
    if template is None:
        logger.debug("No template matches %r", uri)
        return NoMatch(uri=uri)

    logger.debug("Matched %r to %r", uri, template.source)
    return MatchResult(
        handler_ref=template.handler_ref,
        parameters=extract_params(template, parsed.segments, parsed.query),
        template=template,
        uri=uri,
    )


def _find(
    tree: Mapping[str, Mapping[str, TrieNode]],
    parsed: ParsedUri,
) -> UriTemplate | None:
    for hosts in _candidates(tree, parsed.scheme):
        for root in _candidates(hosts, parsed.host):
            found = _match_node(root, parsed.segments, 0)
            if found is not None:
                return found
    return None


def _candidates[T](table: Mapping[str, T], key: str) -> Iterator[T]:
    """Yield the exact entry for *key*, then the wildcard entry."""
    exact = table.get(key)
    if exact is not None:
        yield exact
    if key != WILDCARD:
        wildcard = table.get(WILDCARD)
        if wildcard is not None:
            yield wildcard


def _match_node(
    node: TrieNode,
    segments: Sequence[str],
    index: int,
) -> UriTemplate | None:
    """Recursively match path segments against the trie."""
    # All segments consumed: terminal only if some template ends here
    if index == len(segments):
        if node.entries:
            return node.entries[0]
        return None

    part = segments[index]

    # 1. Try literal child first (exact match)
    child = node.children.get(part)
    if child is not None:
        found = _match_node(child, segments, index + 1)
        if found is not None:
            return found

    # 2. Fall back to the parameter child; it never captures an empty segment
    if node.param_child is not None and part:
        return _match_node(node.param_child, segments, index + 1)

    return None
