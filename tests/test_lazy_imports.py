"""Tests for deeplink.__init__ — lazy import registry covers all public names."""

import pytest

import deeplink


@pytest.mark.parametrize("name", deeplink.__all__)
def test_all_names_resolve(name: str) -> None:
    """Every name in __all__ must resolve via __getattr__ without error."""
    obj = getattr(deeplink, name)
    assert obj is not None, f"deeplink.{name} resolved to None"


def test_top_level_round_trip() -> None:
    registry = deeplink.register([("app://h/{id}", "detail")])
    result = deeplink.match(registry, "app://h/5")
    assert isinstance(result, deeplink.MatchResult)
    assert result.parameters == {"id": "5"}


def test_unknown_name_raises_attribute_error() -> None:
    """Accessing an unregistered name raises AttributeError."""
    with pytest.raises(AttributeError, match="no attribute"):
        deeplink.__getattr__("ThisDoesNotExist")
