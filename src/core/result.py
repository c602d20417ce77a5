"""Explicit success-or-error values for collaborator calls.

Store operations return a ``Result`` instead of raising, so callers decide
how a failure is rendered by matching on the variant:

    match await store.all():
        case Ok(value=resources):
            ...
        case Err(error=error):
            ...
"""

from dataclasses import dataclass

from src.core.exceptions import CatalogError


@dataclass(frozen=True, slots=True)
class Ok[T]:
    """Successful outcome wrapping a value."""

    value: T


@dataclass(frozen=True, slots=True)
class Err:
    """Failed outcome wrapping the error that caused it."""

    error: CatalogError


type Result[T] = Ok[T] | Err
