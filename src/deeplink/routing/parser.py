"""URI template parsing.

Turns template strings such as ``"myapp://shop/items/{id}?{ref}"`` into
``UriTemplate`` values. Errors surface here, at registration time, so a
broken template never reaches the matcher.
"""

import re
from urllib.parse import unquote

from deeplink.errors import TemplateSyntaxError
from deeplink.routing.template import WILDCARD, Literal, Parameter, Segment, UriTemplate

SCHEME_RE = re.compile(r"[A-Za-z][A-Za-z0-9+.\-]*")
_HOST_RE = re.compile(r"[A-Za-z0-9.\-]+")
_NAME_RE = re.compile(r"[A-Za-z0-9_]+")
_BAD_ESCAPE_RE = re.compile(r"%(?![0-9A-Fa-f]{2})")


def split_path(path: str) -> list[str]:
    """Split a raw path into segments.

    Shared by the template parser and the incoming URI parser so both
    sides agree on what a segment is. A leading ``/`` and one trailing
    ``/`` are dropped; interior empty segments are kept.

    Examples::

        ""          -> []
        "/"         -> []
        "/a/b/"     -> ["a", "b"]
        "/a//b"     -> ["a", "", "b"]
    """
    path = path.removeprefix("/")
    if not path:
        return []
    parts = path.split("/")
    if parts[-1] == "":
        parts.pop()
    return parts


def check_escapes(text: str) -> None:
    """Raise ``ValueError`` if *text* has a dangling or non-hex ``%`` escape."""
    if _BAD_ESCAPE_RE.search(text):
        msg = f"invalid percent-escape in {text!r}"
        raise ValueError(msg)


def decode_component(text: str) -> str:
    """Percent-decode *text* as UTF-8.

    Raises ``ValueError`` for a malformed escape or for bytes that are not
    valid UTF-8. ``urllib.parse.unquote`` alone would pass those through
    silently.
    """
    if "%" not in text:
        return text
    check_escapes(text)
    return unquote(text, errors="strict")


def parse_template(template: str, *, strict: bool = True, wildcards: bool = True) -> UriTemplate:
    """Parse a URI template string.

    Examples::

        "app://h"                -> scheme="app", host="h", no segments
        "app://h/users/{id}"     -> [Literal("users"), Parameter("id")]
        "app://h/search?{q}&{page}" -> query_param_names={"q", "page"}
        "*://h/x"                -> scheme=WILDCARD (when wildcards=True)

    With ``strict=True`` a literal segment containing ``{`` or ``}``
    (``"item-{id}"``) is rejected; otherwise it is kept verbatim.

    Raises ``TemplateSyntaxError`` naming *template* on any malformed part.
    """
    scheme, sep, rest = template.partition("://")
    if not sep:
        raise TemplateSyntaxError(template, "missing scheme (expected 'scheme://host/...')")
    if "#" in rest:
        raise TemplateSyntaxError(template, "fragments are not supported in templates")

    rest, has_query, query = rest.partition("?")
    host, has_path, path = rest.partition("/")

    _check_authority(template, "scheme", scheme, SCHEME_RE, wildcards)
    _check_authority(template, "host", host, _HOST_RE, wildcards)

    segments = _parse_segments(template, "/" + path, strict) if has_path else ()
    query_names = _parse_query_decl(template, query) if has_query else frozenset()

    # A query key never overrides a path value, so declaring both is a mistake
    shadowed = query_names.intersection(
        seg.name for seg in segments if isinstance(seg, Parameter)
    )
    if shadowed:
        raise TemplateSyntaxError(
            template,
            f"query parameter {min(shadowed)!r} is already a path parameter",
        )

    return UriTemplate(
        source=template,
        scheme=scheme.lower(),
        host=host.lower(),
        path_segments=segments,
        query_param_names=query_names,
    )


def _check_authority(
    template: str,
    label: str,
    value: str,
    pattern: re.Pattern[str],
    wildcards: bool,
) -> None:
    if value == WILDCARD:
        if not wildcards:
            raise TemplateSyntaxError(template, f"wildcard {label} is disabled")
        return
    if not value:
        raise TemplateSyntaxError(template, f"empty {label}")
    if not pattern.fullmatch(value):
        raise TemplateSyntaxError(template, f"invalid {label} {value!r}")


def _parse_segments(template: str, path: str, strict: bool) -> tuple[Segment, ...]:
    segments: list[Segment] = []
    seen: set[str] = set()

    for part in split_path(path):
        if not part:
            raise TemplateSyntaxError(template, "empty path segment (doubled '/')")

        if _is_placeholder(part):
            name = part[1:-1]
            if not name:
                raise TemplateSyntaxError(template, "empty parameter name '{}'")
            if not _NAME_RE.fullmatch(name):
                raise TemplateSyntaxError(template, f"invalid parameter name {name!r}")
            if name in seen:
                raise TemplateSyntaxError(template, f"duplicate parameter name {name!r}")
            seen.add(name)
            segments.append(Parameter(name))
            continue

        if strict and ("{" in part or "}" in part):
            raise TemplateSyntaxError(
                template,
                f"segment {part!r} mixes literal text with braces; "
                "a {param} placeholder must span the whole segment",
            )
        try:
            value = decode_component(part)
        except ValueError as exc:
            raise TemplateSyntaxError(template, str(exc)) from exc
        segments.append(Literal(value))

    return tuple(segments)


def _is_placeholder(part: str) -> bool:
    return (
        part.startswith("{")
        and part.endswith("}")
        and part.count("{") == 1
        and part.count("}") == 1
    )


def _parse_query_decl(template: str, query: str) -> frozenset[str]:
    if not query:
        return frozenset()
    names: set[str] = set()
    for item in query.split("&"):
        name = item[1:-1] if _is_placeholder(item) else item
        if not name or not _NAME_RE.fullmatch(name):
            raise TemplateSyntaxError(template, f"invalid query parameter declaration {item!r}")
        names.add(name)
    return frozenset(names)
