"""Minimal token-keyed dependency injection container.

This package maps unique tokens to factories or literal values, resolving
them lazily as singletons (`Container.get`) or freshly on demand
(`Container.create`).

Exports:
- `Container`: Registry and resolver for token/factory registrations.
- `Token`, `create_token`, `named_token`: Identity-compared keys carrying a
  display name; `named_token` interns tokens by name.
- `is_token`, `assert_token`: Shape checks for values of unknown origin.
- `Value`, `Computed`: Explicit literal or factory registrations.
"""

from ._container import Computed, Container, InvalidProviderError, UnregisteredTokenError, Value
from ._token import InvalidTokenError, Token, assert_token, create_token, is_token, named_token


__all__ = [
    "Computed",
    "Container",
    "InvalidProviderError",
    "InvalidTokenError",
    "Token",
    "UnregisteredTokenError",
    "Value",
    "assert_token",
    "create_token",
    "is_token",
    "named_token",
]
