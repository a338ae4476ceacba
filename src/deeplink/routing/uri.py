"""Incoming URI decomposition.

Splits a runtime URI into the pieces the matcher walks: lowercase scheme
and host, decoded path segments, and decoded query parameters.
"""

import re
from dataclasses import dataclass
from urllib.parse import urlsplit

from deeplink.errors import UriParseError
from deeplink.query import QueryParams
from deeplink.routing.parser import SCHEME_RE, check_escapes, decode_component, split_path

# urlsplit silently strips tab, CR, and LF; reject them before it sees the URI
_CONTROL_RE = re.compile(r"[\x00-\x20\x7f]")


@dataclass(frozen=True, slots=True)
class ParsedUri:
    """A decomposed incoming URI.

    ``segments`` are percent-decoded; a trailing slash has been dropped.
    Port, userinfo, and fragment are not part of matching and are discarded.
    """

    raw: str
    scheme: str
    host: str
    segments: tuple[str, ...]
    query: QueryParams


def parse_uri(uri: str) -> ParsedUri:
    """Decompose *uri* for matching.

    Raises ``UriParseError`` when the URI contains whitespace or control
    characters, has no ``scheme://`` prefix, an unparseable authority, or
    malformed percent-encoding anywhere.
    """
    if _CONTROL_RE.search(uri):
        raise UriParseError(uri, "control character in URI")

    scheme, sep, _ = uri.partition("://")
    if not sep or not SCHEME_RE.fullmatch(scheme):
        raise UriParseError(uri, "missing or invalid scheme")

    try:
        parts = urlsplit(uri)
        host = decode_component(parts.hostname or "")
        segments = tuple(decode_component(part) for part in split_path(parts.path))
        check_escapes(parts.query)
        query = QueryParams(parts.query)
    except ValueError as exc:
        raise UriParseError(uri, str(exc)) from exc

    return ParsedUri(
        raw=uri,
        scheme=scheme.lower(),
        host=host.lower(),
        segments=segments,
        query=query,
    )
