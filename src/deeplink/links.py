"""Declarative deep-link registration.

Mutable during setup (``@links.link`` decorators at import time).
Frozen into an immutable ``Registry`` the first time it is matched against.
"""

import threading
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from deeplink.config import RegistryConfig
from deeplink.routing.registry import Registry
from deeplink.routing.result import MatchResult, NoMatch
from deeplink.routing.template import HandlerRef

type Handler = Callable[..., Any]


@dataclass(slots=True)
class _PendingLink:
    """A template waiting to be compiled."""

    template: str
    handler_ref: HandlerRef


class DeepLinks:
    """A collection of deep-link templates and their handlers.

    Mutable during setup, frozen on first ``match()`` or ``registry`` access.

    Usage::

        links = DeepLinks()

        @links.link("myapp://shop/items/{id}", "https://shop.example.com/items/{id}")
        def item_detail(id: str) -> None: ...

        links.add("myapp://shop/cart", "cart_screen")

        result = links.match("myapp://shop/items/42")
        if result:
            result.handler_ref(**result.parameters)

    Thread safety:
        Registration is single-threaded (decorators at import time).
        The freeze transition uses a Lock + double-check so exactly one
        thread builds the registry, even when several threads match
        concurrently on first use.
    """

    __slots__ = ("_freeze_lock", "_frozen", "_pending", "_registry", "config")

    def __init__(self, config: RegistryConfig | None = None) -> None:
        self.config: RegistryConfig = config or RegistryConfig()
        self._pending: list[_PendingLink] = []
        self._frozen: bool = False
        self._freeze_lock: threading.Lock = threading.Lock()
        self._registry: Registry | None = None

    # -- Registration --

    def link(
        self,
        template: str,
        *templates: str,
        handler: HandlerRef = None,
    ) -> Callable[[Handler], Handler]:
        """Register the decorated callable under one or more templates.

        Args:
            template: URI template, e.g. ``"myapp://host/items/{id}"``.
            templates: Additional templates for the same handler.
            handler: Handler reference to register instead of the decorated
                function (e.g. a screen id). The function is still returned
                unchanged.
        """

        def decorator(func: Handler) -> Handler:
            ref = func if handler is None else handler
            for source in (template, *templates):
                self.add(source, ref)
            return func

        return decorator

    def add(self, template: str, handler_ref: HandlerRef) -> None:
        """Register *template* for *handler_ref*. Must be called before freezing."""
        self._check_not_frozen()
        self._pending.append(_PendingLink(template, handler_ref))

    # -- Runtime --

    @property
    def registry(self) -> Registry:
        """The compiled registry. Freezes on first access."""
        self._ensure_frozen()
        assert self._registry is not None
        return self._registry

    def freeze(self) -> Registry:
        """Compile now so template errors surface at startup."""
        return self.registry

    def match(self, uri: str) -> MatchResult | NoMatch:
        """Match *uri* against the compiled registry."""
        return self.registry.match(uri)

    def supports(self, uri: str) -> bool:
        """Return whether some registered template matches *uri*."""
        return self.registry.supports(uri)

    # -- Internal --

    def _ensure_frozen(self) -> None:
        """Thread-safe freeze with double-check locking."""
        if self._frozen:
            return
        with self._freeze_lock:
            if self._frozen:
                return
            self._freeze()

    def _freeze(self) -> None:
        """Build the registry. MUST only be called while holding _freeze_lock.

        A template error propagates and leaves the collection unfrozen, so
        no partially built registry is ever exposed.
        """
        self._registry = Registry.build(
            ((p.template, p.handler_ref) for p in self._pending),
            self.config,
        )
        self._frozen = True

    def _check_not_frozen(self) -> None:
        if self._frozen:
            msg = (
                "Cannot register deep links after the registry is built. "
                "Register every template before the first match()."
            )
            raise RuntimeError(msg)
