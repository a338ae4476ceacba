"""Deeplink — resolve incoming URIs against registered URI templates.

Registers ``scheme://host/path/{param}`` templates once at startup and
matches incoming URIs to exactly one handler, with path and query
parameters extracted as strings.

Basic usage::

    from deeplink import DeepLinks

    links = DeepLinks()

    @links.link("myapp://shop/items/{id}")
    def item_detail(id: str, **query: str) -> None: ...

    result = links.match("myapp://shop/items/42?ref=mail")
    if result:
        result.handler_ref(**result.parameters)

Without the facade::

    from deeplink import match, register

    registry = register([("myapp://shop/items/{id}", "item_detail")])
    result = match(registry, "myapp://shop/items/42")
"""

__version__ = "0.1.0-dev"
__all__ = [
    "AmbiguousRegistration",
    "ConfigurationError",
    "DeepLinkError",
    "DeepLinks",
    "MatchResult",
    "NoMatch",
    "Registry",
    "RegistryConfig",
    "TemplateSyntaxError",
    "UriParseError",
    "UriTemplate",
    "match",
    "parse_template",
    "register",
]


def __getattr__(name: str) -> object:
    """Lazy imports for public API.

    Keeps ``import deeplink`` fast while providing a clean top-level API.
    """
    if name == "DeepLinks":
        from deeplink.links import DeepLinks

        return DeepLinks

    if name == "RegistryConfig":
        from deeplink.config import RegistryConfig

        return RegistryConfig

    if name in ("Registry", "register"):
        from deeplink.routing import registry as _registry

        return getattr(_registry, name)

    if name in ("MatchResult", "NoMatch"):
        from deeplink.routing import result as _result

        return getattr(_result, name)

    if name == "UriTemplate":
        from deeplink.routing.template import UriTemplate

        return UriTemplate

    if name == "parse_template":
        from deeplink.routing.parser import parse_template

        return parse_template

    if name == "match":
        from deeplink.routing.matcher import match

        return match

    if name in (
        "AmbiguousRegistration",
        "ConfigurationError",
        "DeepLinkError",
        "TemplateSyntaxError",
        "UriParseError",
    ):
        from deeplink import errors as _errors

        return getattr(_errors, name)

    msg = f"module {__name__!r} has no attribute {name!r}"
    raise AttributeError(msg)
