from __future__ import annotations

import inspect
import logging
from typing import TYPE_CHECKING, Any, Generic, TypeVar, overload


logger = logging.getLogger(__name__)

T = TypeVar("T")

if TYPE_CHECKING:
    from typing import NoReturn


class InvalidTokenError(TypeError):
    pass


class Token(Generic[T]):
    """Unique key for a container registration.

    Tokens compare by identity: two tokens sharing a name are different keys.
    `name` is only used for display. `type` is a diagnostic hint and is never
    consulted when resolving.
    """

    __slots__ = ("name", "type")

    name: str
    type: Any

    def __init__(self, name: str, type: Any = None) -> None:  # noqa: A002
        object.__setattr__(self, "name", name)
        object.__setattr__(self, "type", type)

    def __setattr__(self, key: str, value: object) -> NoReturn:
        msg = f"Token {self.name!r} is immutable"
        raise AttributeError(msg)

    def __delattr__(self, key: str) -> NoReturn:
        msg = f"Token {self.name!r} is immutable"
        raise AttributeError(msg)

    def __copy__(self) -> Token[T]:
        return self

    def __deepcopy__(self, memo: dict[int, object]) -> Token[T]:
        return self

    def __repr__(self) -> str:
        if self.type is None:
            return f"Token({self.name!r})"
        type_repr = getattr(self.type, "__qualname__", None) or repr(self.type)
        return f"Token({self.name!r}, {type_repr})"


def _display_name(name: object) -> str:
    if isinstance(name, str):
        return name
    if inspect.isclass(name):
        return name.__name__
    msg = f'"name" must be a string or a class, got {type(name).__name__}'
    raise InvalidTokenError(msg)


@overload
def create_token(name: type[T]) -> Token[T]: ...


@overload
def create_token(name: str | type, type: type[T]) -> Token[T]: ...  # noqa: A002


@overload
def create_token(name: str, type: None = ...) -> Token[Any]: ...  # noqa: A002


def create_token(name: str | type, type: Any = None) -> Token[Any]:  # noqa: A002
    """Create a new token.

    Example:
      greeter = create_token("greeter", Greeter)
      config = create_token(Config)  # name "Config", resolves to a Config

    Every call returns a distinct token, even for an identical name.
    """
    display = _display_name(name)
    if type is None and inspect.isclass(name):
        type = name  # noqa: A001
    return Token(display, type)


_interned: dict[str, Token[Any]] = {}


@overload
def named_token(name: type[T]) -> Token[T]: ...


@overload
def named_token(name: str | type, type: type[T]) -> Token[T]: ...  # noqa: A002


@overload
def named_token(name: str, type: None = ...) -> Token[Any]: ...  # noqa: A002


def named_token(name: str | type, type: Any = None) -> Token[Any]:  # noqa: A002
    """Return the process-wide token for `name`, creating it on first use.

    Opt-in alternative to `create_token` for code that has to agree on a key
    without sharing an import. The first call fixes the `type` hint.
    """
    display = _display_name(name)
    token = _interned.get(display)
    if token is None:
        token = _interned.setdefault(display, create_token(name, type))
    elif type is not None and token.type is not type:
        logger.debug("Interned token %r already bound to %r, ignoring %r", display, token.type, type)
    return token


def is_token(value: object) -> bool:
    """Check that `value` has the token shape: a string `name` and a `type` attribute."""
    try:
        return isinstance(getattr(value, "name", None), str) and hasattr(value, "type")
    except Exception:  # noqa: BLE001
        # properties raising something other than AttributeError
        return False


def assert_token(value: object, argument: str = "token") -> None:
    if not is_token(value):
        msg = f'"{argument}" is not a token (got {type(value).__name__}: {value!r})'
        raise InvalidTokenError(msg)
