"""Helper facade combining query execution with explicit transactions."""

from __future__ import annotations

import contextlib
from typing import Any, Optional

from .config import PgConfig
from .core._async_utils import _call_if_present
from .core.contracts import ConnectionSourcePort
from .core.executor import QueryExecutor
from .core.transaction import TransactionManager, TransactionSession
from .core.transform import transform_query
from .core.types import MaybeRow, QueryParams, Rows
from .log import configure_logging
from .ports.asyncpg_source import AsyncpgConnectionSource


class PgClientHelper:
    """Query helper bound to one explicitly owned connection source.

    Build it around any `ConnectionSourcePort`, or use `connect()` to create
    an asyncpg pool from `PgConfig`. Close it with `close()` (or `async with`)
    when done; the pool is closed only when the helper owns it.
    """

    transform_query = staticmethod(transform_query)

    def __init__(self, source: ConnectionSourcePort, *, owns_source: bool = True):
        self.source = source
        self._owns_source = owns_source
        self._closed = False
        self._executor = QueryExecutor(source)
        self._transactions = TransactionManager(source)

    @classmethod
    async def connect(cls, config: Optional[PgConfig] = None, **pool_overrides: Any) -> PgClientHelper:
        """Configure logging and open an asyncpg pool.

        Args:
            config: Settings; read from the environment when omitted.
            pool_overrides: Extra `asyncpg.create_pool` keyword arguments.
        """

        cfg = config if config is not None else PgConfig.from_env()
        configure_logging(cfg.log_level)
        source = await AsyncpgConnectionSource.create(cfg, **pool_overrides)
        return cls(source)

    @property
    def executor(self) -> QueryExecutor:
        return self._executor

    @property
    def transactions(self) -> TransactionManager:
        return self._transactions

    async def query_multiple(
        self,
        sql: str,
        params: QueryParams = None,
        connection: Any = None,
    ) -> Rows:
        return await self._executor.query_multiple(sql, params, connection)

    async def query(
        self,
        sql: str,
        params: QueryParams = None,
        connection: Any = None,
    ) -> None:
        await self._executor.query(sql, params, connection)

    async def query_single(
        self,
        sql: str,
        params: QueryParams = None,
        connection: Any = None,
    ) -> MaybeRow:
        return await self._executor.query_single(sql, params, connection)

    async def query_scalar(
        self,
        sql: str,
        params: QueryParams = None,
        connection: Any = None,
    ) -> Any:
        return await self._executor.query_scalar(sql, params, connection)

    async def begin_transaction(self) -> TransactionSession:
        return await self._transactions.begin()

    async def commit_transaction(self, session: TransactionSession) -> None:
        await self._transactions.commit(session)

    async def rollback_transaction(self, session: TransactionSession) -> None:
        await self._transactions.rollback(session)

    def transaction(self) -> contextlib.AbstractAsyncContextManager[TransactionSession]:
        """Begin, yield the session, then commit, or roll back if the block raises."""

        return self._transactions.transaction()

    async def close(self) -> None:
        """Close the connection source when this helper owns it."""

        if self._closed:
            return
        self._closed = True
        if self._owns_source:
            await _call_if_present(self.source, "close")

    async def __aenter__(self) -> PgClientHelper:
        return self

    async def __aexit__(self, exc_type: Any, exc: Any, tb: Any) -> None:
        await self.close()
