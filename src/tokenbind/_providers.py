from __future__ import annotations

from collections.abc import Hashable, Mapping
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from ._errors import InvalidProviderError


if TYPE_CHECKING:
    from collections.abc import Callable

    from ._container import Container


@dataclass(frozen=True)
class ValueProvider:
    token: Any
    value: Any


@dataclass(frozen=True)
class ClassProvider:
    token: Any
    cls: Any


@dataclass(frozen=True)
class FactoryProvider:
    token: Any
    factory: Callable[[Container], Any]


@dataclass(frozen=True)
class AliasProvider:
    token: Any
    target: Any


Provider = ValueProvider | ClassProvider | FactoryProvider | AliasProvider

# Mapping form: {"token": ..., "<shape key>": ...}
_SHAPES: dict[str, type] = {
    "value": ValueProvider,
    "class": ClassProvider,
    "factory": FactoryProvider,
    "alias": AliasProvider,
}


def _has_shape(definition: Any, kind: type, key: str) -> bool:
    if isinstance(definition, kind):
        return True
    return isinstance(definition, Mapping) and key in definition


def is_value_provider(definition: Any) -> bool:
    return _has_shape(definition, ValueProvider, "value")


def is_class_provider(definition: Any) -> bool:
    return _has_shape(definition, ClassProvider, "class")


def is_factory_provider(definition: Any) -> bool:
    return _has_shape(definition, FactoryProvider, "factory")


def is_alias_provider(definition: Any) -> bool:
    return _has_shape(definition, AliasProvider, "alias")


def as_provider(definition: Any) -> Provider:
    """Classify a provider definition into exactly one provider variant.

    Accepts the provider dataclasses as-is, and mappings carrying a ``"token"``
    key plus exactly one of ``"value"``, ``"class"``, ``"factory"`` or ``"alias"``.
    Anything else raises `InvalidProviderError`.
    """
    if isinstance(definition, (ValueProvider, ClassProvider, FactoryProvider, AliasProvider)):
        provider = definition
    elif isinstance(definition, Mapping):
        shapes = [key for key in _SHAPES if key in definition]
        if len(shapes) != 1 or "token" not in definition:
            raise InvalidProviderError(definition)
        key = shapes[0]
        provider = _SHAPES[key](definition["token"], definition[key])
    else:
        raise InvalidProviderError(definition)

    if not isinstance(provider.token, Hashable):
        raise InvalidProviderError(definition)
    if isinstance(provider, AliasProvider) and not isinstance(provider.target, Hashable):
        raise InvalidProviderError(definition)
    if isinstance(provider, FactoryProvider) and not callable(provider.factory):
        raise InvalidProviderError(definition)

    return provider
