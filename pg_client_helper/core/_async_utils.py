"""Internal async helpers shared by the executor and transaction manager."""

from __future__ import annotations

import inspect
from typing import Any


async def _maybe_await(value: Any) -> Any:
    """Await awaitables and return non-awaitable values unchanged."""
    if inspect.isawaitable(value):
        return await value
    return value


async def _call_if_present(obj: Any, name: str) -> Any:
    """Call ``obj.name()`` when it exists, awaiting the result if needed."""
    method = getattr(obj, name, None)
    if not callable(method):
        return None
    return await _maybe_await(method())
