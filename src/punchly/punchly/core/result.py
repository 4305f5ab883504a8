from __future__ import annotations

import functools
import logging
from dataclasses import dataclass
from typing import Callable, Generic, TypeVar, Union

from .exceptions import DatabaseError, DomainError

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass(frozen=True)
class Ok(Generic[T]):
    value: T


@dataclass(frozen=True)
class Err:
    error: DomainError


Result = Union[Ok[T], Err]


def returns_result(action: str) -> Callable:
    """Wrap a service operation so it returns a ``Result``.

    Domain errors raised inside the operation become ``Err``. ``TypeError`` and
    ``AttributeError`` are programmer errors and propagate. Anything else is
    taken as a repository failure and reported as an opaque ``DatabaseError``.
    """

    def decorator(func: Callable) -> Callable:
        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            try:
                value = func(*args, **kwargs)
            except DomainError as e:
                logger.debug("%s rejected: %s", func.__qualname__, e.message)
                return Err(e)
            except (TypeError, AttributeError):
                raise
            except Exception:
                logger.exception("Unexpected error while %s (storage failure or unhandled bug)", action)
                return Err(DatabaseError(f"Database error occurred while {action}."))

            if isinstance(value, (Ok, Err)):
                return value
            return Ok(value)

        return wrapper

    return decorator


def require(dependency, name: str):
    """Guard against wiring mistakes (programmer errors are raised, not returned)."""
    if dependency is None:
        raise ValueError(f"{name} is required")
    return dependency
