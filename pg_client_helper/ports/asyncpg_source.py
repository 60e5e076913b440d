"""Connection source backed by an `asyncpg` pool.

This adapter requires `asyncpg` package installed.
"""

from __future__ import annotations

import logging
from typing import Any, Mapping, Optional

from ..config import PgConfig
from ..core.types import PositionalParams, Row, Rows
from .rds_signer import RdsAuthTokenProvider

logger = logging.getLogger(__name__)


def password_for(config: PgConfig) -> Any:
    """Static password, or a token callable when the RDS signer is on."""

    if not config.use_aws_rds_signer:
        return config.password
    return RdsAuthTokenProvider(
        host=config.host or "",
        port=config.port,
        user=config.user or "",
        region=config.aws_region,
    )


def pool_kwargs(config: PgConfig) -> dict[str, Any]:
    """Keyword arguments for `asyncpg.create_pool`."""

    return {
        "host": config.host,
        "port": config.port,
        "user": config.user,
        "password": password_for(config),
        "database": config.database,
        "ssl": config.ssl_context(),
        "min_size": config.min_pool_size,
        "max_size": config.max_pool_size,
    }


class AsyncpgConnectionSource:
    """Pool wrapper exposing acquire/release/run over `asyncpg.Pool`.

    asyncpg speaks `$1, $2, ...` natively, so rewritten statements are passed
    through untouched. Pool sizing and queuing stay with asyncpg.
    """

    def __init__(self, pool: Any):
        self.pool = pool
        self._closed = False

    @classmethod
    async def create(cls, config: Optional[PgConfig] = None, **overrides: Any) -> AsyncpgConnectionSource:
        """Create the pool from `config` (environment when omitted).

        Args:
            config: Connection settings.
            overrides: Extra `asyncpg.create_pool` keyword arguments.
        """

        try:
            import asyncpg  # type: ignore[import-not-found]
        except ImportError as exc:  # pragma: no cover - env dependent
            raise ImportError(
                "asyncpg is required for AsyncpgConnectionSource. "
                "Install with `pip install asyncpg`."
            ) from exc

        cfg = config if config is not None else PgConfig.from_env()
        kwargs = pool_kwargs(cfg)
        kwargs.update(overrides)
        logger.info(
            "[PG] Creating connection pool for %s:%s/%s",
            cfg.host,
            cfg.port,
            cfg.database,
        )
        pool = await asyncpg.create_pool(**kwargs)
        return cls(pool)

    async def acquire(self) -> Any:
        return await self.pool.acquire()

    async def release(self, handle: Any) -> None:
        await self.pool.release(handle)

    async def run(self, handle: Any, sql: str, params: Optional[PositionalParams]) -> Rows:
        records = await handle.fetch(sql, *(params or ()))
        return [self._row_to_mapping(r) for r in records]

    def _row_to_mapping(self, row: Any) -> Row:
        """Normalize a driver row to a dict in column order.

        Duplicate column names collapse to one key holding the last value.
        """

        if isinstance(row, Mapping):
            return dict(row)
        items = getattr(row, "items", None)
        if callable(items):
            return dict(items())
        raise TypeError(f"Unsupported row type: {type(row)}")

    async def close(self) -> None:
        """Close the pool; safe to call more than once."""

        if self._closed:
            return
        self._closed = True
        await self.pool.close()
