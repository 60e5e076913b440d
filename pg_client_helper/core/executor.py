"""Query execution and result shaping over a connection source."""

from __future__ import annotations

import logging
from typing import Any, Optional

from . import connection as conn_ops
from .contracts import ConnectionSourcePort
from .transaction import TransactionSession
from .transform import transform_query
from .types import MaybeRow, QueryParams, Rows

logger = logging.getLogger(__name__)


class QueryExecutor:
    """Run named-parameter SQL and project the rows into common shapes."""

    def __init__(self, source: ConnectionSourcePort):
        self.source = source

    async def execute(
        self,
        sql: str,
        params: QueryParams = None,
        connection: Any = None,
    ) -> Rows:
        """Execute SQL and return all rows.

        Args:
            sql: Statement with `$name` (or positional `$1`) placeholders.
            params: Named mapping, positional list/tuple, or None.
            connection: Handle or `TransactionSession` owned by the caller.
                When omitted a handle is borrowed for this call only.
        """

        handle = connection
        if isinstance(connection, TransactionSession):
            handle = connection.require_open()

        out_sql, out_params = transform_query(sql, params)
        logger.debug("[PG] transformed query %r params %r", out_sql, out_params)
        if isinstance(out_params, tuple):
            out_params = list(out_params)

        if handle is not None:
            return await conn_ops.run(self.source, handle, out_sql, out_params)

        async with conn_ops.borrowed(self.source) as owned:
            return await conn_ops.run(self.source, owned, out_sql, out_params)

    async def query_multiple(
        self,
        sql: str,
        params: QueryParams = None,
        connection: Any = None,
    ) -> Rows:
        return await self.execute(sql, params, connection)

    async def query(
        self,
        sql: str,
        params: QueryParams = None,
        connection: Any = None,
    ) -> None:
        """Execute a statement and discard its rows."""

        await self.execute(sql, params, connection)

    async def query_single(
        self,
        sql: str,
        params: QueryParams = None,
        connection: Any = None,
    ) -> MaybeRow:
        """Return the first row, or None for an empty result."""

        rows = await self.execute(sql, params, connection)
        if not rows:
            return None
        return rows[0]

    async def query_scalar(
        self,
        sql: str,
        params: QueryParams = None,
        connection: Any = None,
    ) -> Optional[Any]:
        """Return the first column of the first row, or None for an empty result.

        Column order is the order the driver reports, not sorted by name.
        """

        row = await self.query_single(sql, params, connection)
        if not row:
            return None
        return next(iter(row.values()))
