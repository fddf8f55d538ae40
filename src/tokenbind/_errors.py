from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any

from ._utils import is_plain_object, stringify


if TYPE_CHECKING:
    from collections.abc import Sequence


INVALID_PROVIDER_MESSAGE = (
    "An invalid provider definition has been detected; only instances of Provider are allowed, got: [{detail}]."
)
INVALID_CLASS_MESSAGE = "Unable to instantiate class ({name} is not constructable)."
INVALID_CONSTRUCTOR_MESSAGE = 'An invalid class, "{name}", was provided; expected a default (no-argument) constructor.'
PROVIDER_NOT_FOUND_MESSAGE = (
    'No provider for "{token}" was found; are you certain you provided it during configuration?'
)
CYCLIC_ALIAS_MESSAGE = "A cycle has been detected within the aliases definitions:\n {cycle}\n"
SERVICE_NOT_CREATED_MESSAGE = 'Service for "{token}" could not be created. Reason: {reason}'


class ContainerError(RuntimeError):
    pass


class RegistrationError(ContainerError):
    """Raised while a provider is being registered; the registration call is aborted."""


class ResolutionError(ContainerError):
    """Raised by `Container.get` when a token cannot be turned into an instance."""


class InvalidProviderError(RegistrationError):
    def __init__(self, value: Any) -> None:
        detail = None
        if is_plain_object(value):
            try:
                detail = json.dumps(value, separators=(",", ":"), default=stringify)
            except (TypeError, ValueError):
                # non-string keys or self-referencing dicts
                detail = None
        if detail is None:
            detail = stringify(value)
        super().__init__(INVALID_PROVIDER_MESSAGE.format(detail=detail))
        self.value = value


class InvalidClassError(RegistrationError):
    def __init__(self, value: Any) -> None:
        super().__init__(INVALID_CLASS_MESSAGE.format(name=stringify(value)))
        self.value = value


class InvalidConstructorError(RegistrationError):
    def __init__(self, cls: type, required: Sequence[str] = ()) -> None:
        super().__init__(INVALID_CONSTRUCTOR_MESSAGE.format(name=stringify(cls)))
        self.cls = cls
        self.required = tuple(required)


class CyclicAliasError(RegistrationError):
    """An alias chain leads back to where it started.

    `cycle` holds the tokens along the loop, first token repeated at the end.
    """

    def __init__(self, cycle: Sequence[Any]) -> None:
        path = " -> ".join(stringify(token) for token in cycle)
        super().__init__(CYCLIC_ALIAS_MESSAGE.format(cycle=path))
        self.cycle = list(cycle)


class ProviderNotFoundError(ResolutionError):
    def __init__(self, token: Any) -> None:
        super().__init__(PROVIDER_NOT_FOUND_MESSAGE.format(token=stringify(token)))
        self.token = token


class ServiceNotCreatedError(ResolutionError):
    def __init__(self, token: Any, reason: str) -> None:
        super().__init__(SERVICE_NOT_CREATED_MESSAGE.format(token=stringify(token), reason=reason))
        self.token = token
        self.reason = reason
