"""UriTemplate and path segment frozen dataclasses."""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Any

# Opaque caller-supplied destination (component id, callable, metadata...)
type HandlerRef = Any

WILDCARD = "*"


@dataclass(frozen=True, slots=True)
class Literal:
    """A path segment that must equal the incoming segment exactly.

    ``value`` is already percent-decoded.
    """

    value: str


@dataclass(frozen=True, slots=True)
class Parameter:
    """A ``{name}`` path segment that captures one incoming segment."""

    name: str


type Segment = Literal | Parameter


@dataclass(frozen=True, slots=True)
class UriTemplate:
    """A parsed URI template.

    Created by ``parse_template`` and bound to a handler when it is
    registered. ``scheme`` and ``host`` are lowercase, or ``WILDCARD``.
    """

    source: str
    scheme: str
    host: str
    path_segments: tuple[Segment, ...] = ()
    query_param_names: frozenset[str] = frozenset()
    handler_ref: HandlerRef = None

    @property
    def param_names(self) -> tuple[str, ...]:
        """Path parameter names in path order."""
        return tuple(seg.name for seg in self.path_segments if isinstance(seg, Parameter))

    @property
    def shape(self) -> tuple[str, str, tuple[str | None, ...]]:
        """Structural key: scheme, host, and literal values with ``None`` for parameters.

        Two templates with the same shape are indistinguishable at match time.
        """
        return (
            self.scheme,
            self.host,
            tuple(seg.value if isinstance(seg, Literal) else None for seg in self.path_segments),
        )

    def with_handler(self, handler_ref: HandlerRef) -> UriTemplate:
        """Return a copy bound to *handler_ref*."""
        return replace(self, handler_ref=handler_ref)

    def __str__(self) -> str:
        return self.source
