"""MatchResult and NoMatch frozen dataclasses."""

from dataclasses import dataclass

from deeplink.errors import UriParseError
from deeplink.routing.template import HandlerRef, UriTemplate


@dataclass(frozen=True, slots=True)
class MatchResult:
    """Result of a successful match.

    ``parameters`` holds path parameters in path order followed by query
    parameters in query order. Path values are never overridden by a query
    key of the same name.
    """

    handler_ref: HandlerRef
    parameters: dict[str, str]
    template: UriTemplate
    uri: str


@dataclass(frozen=True, slots=True)
class NoMatch:
    """No registered template applies to ``uri``.

    A normal outcome, not an error. Falsy, so callers can branch with
    ``if result:``. ``error`` is set when the URI itself was malformed.
    """

    uri: str
    reason: str = "no registered template matches"
    error: UriParseError | None = None

    def __bool__(self) -> bool:
        return False

    def __str__(self) -> str:
        return f"{self.reason}: {self.uri!r}"
