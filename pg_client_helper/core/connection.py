"""Acquire/run/release primitives with the package's error and logging policy."""

from __future__ import annotations

import contextlib
import logging
from typing import Any, AsyncIterator, Optional

from ._async_utils import _maybe_await
from .contracts import ConnectionSourcePort
from .errors import ConnectionAcquisitionFailed, QueryExecutionFailed
from .types import PositionalParams, Rows

logger = logging.getLogger(__name__)


async def acquire(source: ConnectionSourcePort) -> Any:
    """Borrow one handle from `source`.

    Raises:
        ConnectionAcquisitionFailed: the source raised while acquiring.
    """

    try:
        return await _maybe_await(source.acquire())
    except ConnectionAcquisitionFailed:
        logger.error("[PG] Error acquiring connection", exc_info=True)
        raise
    except Exception as exc:
        logger.error("[PG] Error acquiring connection: %s", exc, exc_info=True)
        raise ConnectionAcquisitionFailed(exc) from exc


async def release(
    source: ConnectionSourcePort,
    handle: Any,
    *,
    pending: Optional[BaseException] = None,
) -> None:
    """Return `handle` to `source`.

    A release failure is logged. It is raised only when `pending` is None, so
    an error already on its way to the caller is never replaced.
    """

    try:
        await _maybe_await(source.release(handle))
    except Exception as exc:
        logger.error("[PG] Error releasing connection: %s", exc, exc_info=True)
        if pending is None:
            raise


async def run(
    source: ConnectionSourcePort,
    handle: Any,
    sql: str,
    params: Optional[PositionalParams] = None,
) -> Rows:
    """Run a positional statement on `handle` and return its rows.

    Raises:
        QueryExecutionFailed: the source or database failed the statement.
    """

    try:
        rows = await _maybe_await(source.run(handle, sql, params))
    except QueryExecutionFailed:
        logger.error("[PG] Error in query", exc_info=True)
        logger.error("[PG] Transformed query and params were: %r %r", sql, params)
        raise
    except Exception as exc:
        logger.error("[PG] Error in query: %s", exc, exc_info=True)
        logger.error("[PG] Transformed query and params were: %r %r", sql, params)
        raise QueryExecutionFailed(exc, sql, params) from exc
    return list(rows) if rows is not None else []


@contextlib.asynccontextmanager
async def borrowed(source: ConnectionSourcePort) -> AsyncIterator[Any]:
    """Acquire one handle and release it exactly once when the block exits."""

    handle = await acquire(source)
    try:
        yield handle
    except BaseException as exc:
        await release(source, handle, pending=exc)
        raise
    else:
        await release(source, handle)
