"""Token based dependency injection container.

Services are declared as providers keyed by a token (a string, a class or any
hashable sentinel) and resolved lazily, once per container.

Exports:
- `Container`: registry and resolver; bulk (`register_all`) and incremental
  (`add_provider`) registration, cached lookup (`get`) and `has`.
- `ValueProvider`, `ClassProvider`, `FactoryProvider`, `AliasProvider`: provider
  definitions. Plain dicts such as ``{"token": "db", "factory": make_db}`` are
  accepted as well.
- `ContainerError` and its subclasses: registration and resolution failures.
"""

from ._container import Container
from ._errors import (
    ContainerError,
    CyclicAliasError,
    InvalidClassError,
    InvalidConstructorError,
    InvalidProviderError,
    ProviderNotFoundError,
    RegistrationError,
    ResolutionError,
    ServiceNotCreatedError,
)
from ._providers import (
    AliasProvider,
    ClassProvider,
    FactoryProvider,
    Provider,
    ValueProvider,
    as_provider,
    is_alias_provider,
    is_class_provider,
    is_factory_provider,
    is_value_provider,
)


__all__ = [
    "AliasProvider",
    "ClassProvider",
    "Container",
    "ContainerError",
    "CyclicAliasError",
    "FactoryProvider",
    "InvalidClassError",
    "InvalidConstructorError",
    "InvalidProviderError",
    "Provider",
    "ProviderNotFoundError",
    "RegistrationError",
    "ResolutionError",
    "ServiceNotCreatedError",
    "ValueProvider",
    "as_provider",
    "is_alias_provider",
    "is_class_provider",
    "is_factory_provider",
    "is_value_provider",
]
