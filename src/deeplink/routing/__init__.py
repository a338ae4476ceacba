"""Routing — URI template parsing and an immutable trie for O(path-depth) matching.

Templates are registered once at startup and compiled into a frozen
lookup structure that is safe to share across threads.
"""

from deeplink.routing.matcher import match
from deeplink.routing.parser import parse_template
from deeplink.routing.registry import Registry, register
from deeplink.routing.result import MatchResult, NoMatch
from deeplink.routing.template import WILDCARD, Literal, Parameter, UriTemplate

__all__ = [
    "WILDCARD",
    "Literal",
    "MatchResult",
    "NoMatch",
    "Parameter",
    "Registry",
    "UriTemplate",
    "match",
    "parse_template",
    "register",
]
