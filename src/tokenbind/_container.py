from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Generic, TypeVar, overload

from ._token import InvalidTokenError, Token, assert_token, create_token


logger = logging.getLogger(__name__)

T = TypeVar("T")

if TYPE_CHECKING:
    from collections.abc import Callable

    Key = Token[Any] | str
    Factory = Value[T] | Computed[T] | Callable[[Container], T] | T
    # Return value is ignored
    Provider = Callable[[Container], object]


@dataclass(frozen=True)
class Value(Generic[T]):
    """Literal registration: resolves to `value` itself, never a copy."""

    value: T


@dataclass(frozen=True)
class Computed(Generic[T]):
    """Factory registration: resolves to `fn(container)`."""

    fn: Callable[[Container], T]


class InvalidProviderError(TypeError):
    pass


class UnregisteredTokenError(KeyError):
    def __init__(self, token: Key) -> None:
        self.token = token
        super().__init__(f"No factory registered for token {_display(token)!r}")

    def __str__(self) -> str:
        return str(self.args[0])


def _display(token: object) -> str:
    if isinstance(token, str):
        return token
    return str(getattr(token, "name", token))


def _as_factory(factory: Any) -> Value[Any] | Computed[Any]:
    if isinstance(factory, (Value, Computed)):
        return factory
    if callable(factory):
        return Computed(factory)
    return Value(factory)


class Container:
    """Minimal DI container.

    - `set` a factory or a literal value per token
    - `get` resolves once and caches (singleton)
    - `create` resolves fresh on every call
    - `register` groups several `set` calls in a provider function.

    Keys are `Token` objects (compared by identity) or, unless disabled with
    `allow_string_keys=False`, plain strings (compared by value, so two
    modules using the same string share one registration).
    """

    token: Token[Container]

    def __init__(self, *, allow_string_keys: bool = True) -> None:
        self._factories: dict[Key, Value[Any] | Computed[Any]] = {}
        self._instances: dict[Key, object] = {}
        self._allow_string_keys = allow_string_keys

    @property
    def size(self) -> int:
        """Number of registered factories."""
        return len(self._factories)

    def _check_key(self, token: object) -> None:
        if isinstance(token, str):
            if not self._allow_string_keys:
                msg = f"String key {token!r} rejected: container only accepts tokens"
                raise InvalidTokenError(msg)
            return
        assert_token(token)
        try:
            hash(token)
        except TypeError as e:
            msg = f'"token" is not hashable (got {type(token).__name__}: {token!r})'
            raise InvalidTokenError(msg) from e

    def set(self, token: Key, factory: Factory[Any]) -> Container:
        """Register `factory` for `token`, replacing any previous one.

        Example:
          container.set(tokens.name, "Joy")
          container.set(tokens.greeter, lambda c: Greeter(c.get(tokens.name)))
          container.set(tokens.greeter_cls, Value(Greeter))

        A cached instance for `token` is dropped, so the next `get` rebuilds it.
        """
        self._check_key(token)
        entry = _as_factory(factory)
        self._instances.pop(token, None)
        replaced = token in self._factories
        self._factories[token] = entry
        logger.debug("%s factory for %r", "Replaced" if replaced else "Registered", _display(token))
        return self

    def register(self, provider: Provider) -> Container:
        """Call `provider(self)` to apply a group of registrations."""
        if not callable(provider):
            msg = f'"provider" must be callable, got {type(provider).__name__}'
            raise InvalidProviderError(msg)
        provider(self)
        return self

    def has(self, token: Key) -> bool:
        self._check_key(token)
        return token in self._factories

    @overload
    def get(self, token: Token[T]) -> T: ...

    @overload
    def get(self, token: str) -> Any: ...

    def get(self, token: Key) -> object:
        """Resolve `token`, returning the same instance on every call."""
        self._check_key(token)
        # membership rather than truthiness: None is a valid cached value
        if token in self._instances:
            return self._instances[token]

        instance = self._resolve(token)
        # the container token resolves without a factory and is never cached
        if token in self._factories:
            self._instances[token] = instance
        return instance

    @overload
    def create(self, token: Token[T]) -> T: ...

    @overload
    def create(self, token: str) -> Any: ...

    def create(self, token: Key) -> object:
        """Resolve `token` without reading or writing the instance cache.

        Literal registrations return the stored value itself. Factories are
        invoked with the container; an awaitable result is returned as is.
        """
        self._check_key(token)
        return self._resolve(token)

    def _resolve(self, token: Key) -> object:
        entry = self._factories.get(token)
        if entry is None:
            if token is Container.token:
                return self
            raise UnregisteredTokenError(token)

        if isinstance(entry, Value):
            return entry.value
        return entry.fn(self)

    def delete(self, token: Key) -> bool:
        """Remove the factory and cached instance for `token`.

        Returns True if a factory was registered.
        """
        self._check_key(token)
        self._instances.pop(token, None)
        existed = self._factories.pop(token, None) is not None
        if existed:
            logger.debug("Deleted factory for %r", _display(token))
        return existed

    def clear(self) -> None:
        self._instances.clear()
        self._factories.clear()
        logger.debug("Cleared container")


Container.token = create_token("tokenbind.Container", Container)
