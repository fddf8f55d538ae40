from __future__ import annotations

import inspect
import logging
from typing import Any


logger = logging.getLogger(__name__)


def stringify(value: Any) -> str:
    """Human readable form of a token, class or arbitrary value, used in error messages."""
    if isinstance(value, str):
        return value

    if value is None:
        return "None"

    name = getattr(value, "__name__", None)
    if isinstance(name, str) and name:
        return name

    result = str(value)
    newline = result.find("\n")
    return result if newline == -1 else result[:newline]


def is_plain_object(value: Any) -> bool:
    return isinstance(value, dict)


def is_newable(value: Any) -> bool:
    return inspect.isclass(value)


def required_parameters(cls: type) -> list[str]:
    """Names of the constructor parameters of `cls` that have no default.

    Variadic parameters (*args, **kwargs) are never required. Classes whose
    signature cannot be introspected (some builtins and extension types) are
    reported as having no required parameters.
    """
    try:
        sig = inspect.signature(cls)
    except (TypeError, ValueError) as exc:
        logger.warning("Unable to introspect %s constructor (%s)", stringify(cls), exc)
        return []

    return [
        name
        for name, p in sig.parameters.items()
        if p.kind not in (p.VAR_POSITIONAL, p.VAR_KEYWORD) and p.default is p.empty
    ]
