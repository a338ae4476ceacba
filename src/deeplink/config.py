"""Registry configuration.

RegistryConfig is a frozen dataclass: immutable after creation, IDE-autocompletable,
no string-key dict lookups.
"""

from dataclasses import dataclass

from deeplink.errors import ConfigurationError

AMBIGUITY_POLICIES: frozenset[str] = frozenset({"warn", "error", "ignore"})


@dataclass(frozen=True, slots=True)
class RegistryConfig:
    """Registry configuration. Immutable after creation.

    All fields have sensible defaults. Override what you need::

        config = RegistryConfig(on_ambiguous="error", wildcards=False)
    """

    # Templates
    strict_literals: bool = True  # Reject "{" / "}" inside literal segments
    wildcards: bool = True  # Allow "*" as scheme or host

    # Duplicate shapes: "warn" logs, "error" raises AmbiguousRegistration, "ignore" is silent
    on_ambiguous: str = "warn"

    def __post_init__(self) -> None:
        if self.on_ambiguous not in AMBIGUITY_POLICIES:
            allowed = ", ".join(sorted(AMBIGUITY_POLICIES))
            msg = f"on_ambiguous must be one of {allowed}, got {self.on_ambiguous!r}"
            raise ConfigurationError(msg)
