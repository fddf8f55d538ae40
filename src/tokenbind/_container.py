from __future__ import annotations

import logging
import threading
from typing import TYPE_CHECKING, Any, TypeVar, overload

from ._errors import (
    CyclicAliasError,
    InvalidClassError,
    InvalidConstructorError,
    ProviderNotFoundError,
    ServiceNotCreatedError,
)
from ._providers import AliasProvider, ClassProvider, ValueProvider, as_provider
from ._utils import is_newable, required_parameters, stringify


logger = logging.getLogger(__name__)

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable, Mapping

    from ._providers import Provider

    T = TypeVar("T")

    Factory = Callable[["Container"], object]

_MISSING = object()


class Container:
    """Token based DI container.

    - providers map a token to a value, a class, a factory or another token (alias)
    - instances are created lazily on first `get` and cached for the container lifetime
    - aliases are kept flattened: every alias points straight at its final token
    - factories receive the container and compose dependencies with `get`.
    """

    def __init__(self, providers: Iterable[Any] = ()) -> None:
        self._instances: dict[Any, object] = {}
        self._factories: dict[Any, Factory] = {}
        self._alias_edges: dict[Any, Any] = {}  # as declared, insertion ordered
        self._aliases: dict[Any, Any] = {}  # flattened
        self._memoized: set[Any] = set()  # aliases whose instance was copied from their target by `get`
        self._initialized = False
        self._lock = threading.RLock()
        self.register_all(providers)

    @property
    def initialized(self) -> bool:
        return self._initialized

    def register_all(self, providers: Iterable[Any]) -> Container:
        """Register a batch of provider definitions.

        Alias edges are collected first and flattened once at the end of the
        batch. A failing definition aborts the call; providers registered before
        it stay registered.
        """
        with self._lock:
            edges = dict(self._alias_edges)
            replaced: set[Any] = set()
            try:
                for definition in providers:
                    provider = as_provider(definition)
                    if isinstance(provider, AliasProvider):
                        self._forget_instance(provider.token)
                        self._factories.pop(provider.token, None)
                        edges[provider.token] = provider.target
                    else:
                        self._register(provider)
                        if edges.pop(provider.token, _MISSING) is not _MISSING:
                            replaced.add(provider.token)
            except Exception:
                if edges != self._alias_edges:
                    try:
                        self._commit_aliases(edges, replaced)
                    except CyclicAliasError as e:
                        logger.warning("Discarded alias edges of an aborted batch: %s", e)
                raise

            if edges != self._alias_edges:
                self._commit_aliases(edges, replaced)
            self._initialized = True
        return self

    def add_provider(self, definition: Any) -> Container:
        """Register a single provider definition, flattening its alias immediately."""
        with self._lock:
            provider = as_provider(definition)
            if isinstance(provider, AliasProvider):
                self._map_alias_to_target(provider.token, provider.target)
                self._forget_instance(provider.token)
                self._factories.pop(provider.token, None)
            else:
                self._register(provider)
                if self._alias_edges.pop(provider.token, _MISSING) is not _MISSING:
                    # removing an edge can only shorten chains, never close a cycle
                    self._set_aliases(_flatten_aliases(self._alias_edges))
        return self

    @overload
    def get(self, token: type[T]) -> T: ...

    @overload
    def get(self, token: Any) -> Any: ...

    def get(self, token: Any) -> Any:
        """Return the instance for `token`, creating and caching it on first use.

        The instance is cached under both `token` and the token it aliases, so
        every later lookup through either returns the same object.
        """
        with self._lock:
            if token in self._instances:
                return self._instances[token]

            resolved = self._aliases.get(token, token)
            if resolved in self._instances:
                instance = self._instances[resolved]
            else:
                instance = self._create(resolved)
                self._instances[resolved] = instance

            if token != resolved:
                self._instances[token] = instance
                self._memoized.add(token)
            return instance

    def has(self, token: Any) -> bool:
        """Whether `token` can be resolved. Never instantiates anything."""
        with self._lock:
            if token in self._instances or token in self._factories:
                return True

            resolved = self._aliases.get(token, token)
            if resolved != token:
                return self.has(resolved)

            return False

    def _register(self, provider: Provider) -> None:
        token = provider.token
        if isinstance(provider, ValueProvider):
            self._factories.pop(token, None)
            self._memoized.discard(token)
            self._instances[token] = provider.value
            logger.debug("Registered value for %s", stringify(token))
        else:
            if isinstance(provider, ClassProvider):
                factory = self._class_to_factory(provider.cls)
            else:
                factory = provider.factory

            self._forget_instance(token)
            self._factories[token] = factory
            logger.debug("Registered factory for %s", stringify(token))

        stale = [alias for alias in self._memoized if self._aliases.get(alias) == token]
        for alias in stale:
            self._forget_instance(alias)

    def _forget_instance(self, token: Any) -> None:
        self._memoized.discard(token)
        self._instances.pop(token, None)

    def _set_aliases(self, flattened: dict[Any, Any]) -> None:
        """Install a new flattened alias map, dropping copies cached under aliases that moved."""
        stale = [alias for alias in self._memoized if flattened.get(alias) != self._aliases.get(alias)]
        for alias in stale:
            self._forget_instance(alias)
        self._aliases = flattened

    def _create(self, token: Any) -> object:
        try:
            factory = self._get_factory(token)
            instance = factory(self)
        except Exception as e:  # noqa: BLE001
            raise ServiceNotCreatedError(token, str(e)) from e

        logger.debug("Created service for %s", stringify(token))
        return instance

    def _get_factory(self, token: Any) -> Factory:
        factory = self._factories.get(token)
        if factory is None:
            raise ProviderNotFoundError(token)
        return factory

    def _class_to_factory(self, cls: Any) -> Factory:
        """Convert a class into a factory; only default (no-argument) constructors are supported."""
        if not is_newable(cls):
            raise InvalidClassError(cls)

        required = required_parameters(cls)
        if required:
            raise InvalidConstructorError(cls, required)

        return lambda _: cls()

    def _map_alias_to_target(self, alias: Any, target: Any) -> None:
        if alias in self._alias_edges:
            # Re-pointing an alias reroutes every chain through it.
            edges = dict(self._alias_edges)
            edges[alias] = target
            self._set_aliases(_flatten_aliases(edges))
            self._alias_edges = edges
            return

        resolved = self._aliases.get(target, target)
        if resolved == alias:
            raise CyclicAliasError(_cycle_path({**self._alias_edges, alias: target}, alias))

        self._alias_edges[alias] = target
        self._aliases[alias] = resolved
        for key, value in self._aliases.items():
            if value == alias:
                self._aliases[key] = resolved
                self._forget_instance(key)

    def _commit_aliases(self, edges: dict[Any, Any], replaced: set[Any]) -> None:
        try:
            flattened = _flatten_aliases(edges)
        except CyclicAliasError:
            # Drop the batch's alias edges; keep removals made by concrete providers.
            edges = {alias: target for alias, target in self._alias_edges.items() if alias not in replaced}
            self._alias_edges = edges
            self._set_aliases(_flatten_aliases(edges))
            raise

        self._alias_edges = edges
        self._set_aliases(flattened)
        logger.debug("Flattened %d alias edges", len(edges))


def _flatten_aliases(edges: Mapping[Any, Any]) -> dict[Any, Any]:
    """Map every alias directly to the final token of its chain.

    Chain compression over the declared edges, in insertion order. Each alias
    has a single target, so walking forward until a non-alias token is reached
    either finds the terminal (and every node on the walk is rewritten to it)
    or steps back onto the walk, which is a cycle. Rewritten nodes are never
    walked again.
    """
    aliases = dict(edges)
    visited: set[Any] = set()

    for alias in edges:
        if alias in visited:
            continue

        path = [alias]
        on_path = {alias}
        target = aliases[alias]
        while target in aliases:
            if target in visited:
                target = aliases[target]
                break
            if target in on_path:
                raise CyclicAliasError(_cycle_path(edges, target))
            path.append(target)
            on_path.add(target)
            target = aliases[target]

        for node in path:
            aliases[node] = target
            visited.add(node)

    return aliases


def _cycle_path(edges: Mapping[Any, Any], start: Any) -> list[Any]:
    """The loop through `start`, beginning at its earliest declared alias and closed on it."""
    cycle = [start]
    cursor = edges[start]
    while cursor != start:
        cycle.append(cursor)
        cursor = edges[cursor]

    order = {token: index for index, token in enumerate(edges)}
    first = min(range(len(cycle)), key=lambda i: order[cycle[i]])
    cycle = cycle[first:] + cycle[:first]
    return [*cycle, cycle[0]]
