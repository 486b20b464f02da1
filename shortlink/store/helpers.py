"""Helpers shared by store implementations."""

import functools
from typing import Any, Callable, Tuple, Type, TypeVar

from ..errors import StorageError

F = TypeVar("F", bound=Callable[..., Any])


def handle_storage_errors(*error_types: Type[BaseException]) -> Callable[[F], F]:
    """Wrap async store methods so driver failures surface as StorageError.

    Args:
        *error_types: Driver exception classes to translate

    Example:
        >>> @handle_storage_errors(redis.exceptions.RedisError)
        ... async def find_by_id(self, short_id):
        ...     ...
    """
    caught: Tuple[Type[BaseException], ...] = tuple(error_types)

    def decorator(method: F) -> F:
        @functools.wraps(method)
        async def wrapper(self, *args, **kwargs):
            try:
                return await method(self, *args, **kwargs)
            except StorageError:
                raise
            except caught as e:
                self.logger.error(f"{type(self).__name__}.{method.__name__} failed: {e}")
                raise StorageError(f"Storage operation '{method.__name__}' failed: {e}") from e

        return wrapper  # type: ignore[return-value]

    return decorator
