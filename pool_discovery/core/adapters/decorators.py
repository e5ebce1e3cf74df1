from __future__ import annotations

from collections.abc import Callable, Coroutine
from functools import wraps
from typing import Any, TypeVar

T = TypeVar("T")


def status_tuple(
    fn: Callable[..., Coroutine[Any, Any, T]],
) -> Callable[..., Coroutine[Any, Any, tuple[bool, T | str]]]:
    """Wrap an async adapter method to return ``(True, result)`` or ``(False, error_str)``.

    The wrapped coroutine raises on failure; here the exception is logged via
    ``self.logger`` with its type and returned as ``(False, str(e))``.
    """

    @wraps(fn)
    async def wrapper(self: Any, *args: Any, **kwargs: Any) -> tuple[bool, T | str]:
        try:
            result = await fn(self, *args, **kwargs)
        except Exception as exc:
            self.logger.error(f"Error in {fn.__name__}: {type(exc).__name__}: {exc}")
            return (False, str(exc))
        return (True, result)

    return wrapper  # type: ignore[return-value]
