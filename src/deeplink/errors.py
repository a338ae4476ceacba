"""Deeplink exception hierarchy.

Shared across the parser, registry, matcher, and facade so every module
raises and catches the same types. Failing to match a URI is not an
error: the matcher returns a ``NoMatch`` value instead.
"""


class DeepLinkError(Exception):
    """Base for all deeplink-specific errors."""


class ConfigurationError(DeepLinkError):
    """Raised when registry configuration is invalid.

    Typically surfaces while building the registry at startup.
    """


class TemplateSyntaxError(ConfigurationError):
    """A URI template could not be parsed.

    Raised at registration time, never at match time. ``template`` is the
    offending source string so callers can point at the broken declaration.
    """

    def __init__(self, template: str, reason: str) -> None:
        self.template = template
        self.reason = reason
        super().__init__(f"Invalid URI template {template!r}: {reason}")


class AmbiguousRegistration(ConfigurationError):  # noqa: N818
    """Two templates share the same scheme, host, and segment shape.

    Only raised when ``RegistryConfig(on_ambiguous="error")``; otherwise
    the first registration wins and the duplicate is logged.
    """

    def __init__(self, template: str, previous: str) -> None:
        self.template = template
        self.previous = previous
        super().__init__(
            f"URI template {template!r} is indistinguishable from {previous!r}; "
            f"{previous!r} will always win."
        )


class UriParseError(DeepLinkError):
    """An incoming URI cannot be decomposed into scheme, host, path, and query."""

    def __init__(self, uri: str, reason: str) -> None:
        self.uri = uri
        self.reason = reason
        super().__init__(f"Malformed URI {uri!r}: {reason}")
