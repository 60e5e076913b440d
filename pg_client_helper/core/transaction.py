"""Explicit transaction sessions bound to one pooled connection."""

from __future__ import annotations

import contextlib
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, AsyncIterator

from . import connection
from .contracts import ConnectionSourcePort
from .errors import TransactionStateError

logger = logging.getLogger(__name__)


class TransactionState(str, Enum):
    OPEN = "open"
    COMMITTED = "committed"
    ROLLED_BACK = "rolled_back"


@dataclass(eq=False)
class TransactionSession:
    """Connection handle checked out for one database transaction.

    Pass the session as `connection=` to every query that belongs to the
    transaction. Once committed or rolled back the session must not be used.
    """

    handle: Any
    state: TransactionState = TransactionState.OPEN

    @property
    def is_open(self) -> bool:
        return self.state is TransactionState.OPEN

    def require_open(self) -> Any:
        """Return the handle, or raise when the session is already finished."""

        if not self.is_open:
            raise TransactionStateError(f"transaction session is already {self.state.value}")
        return self.handle


class TransactionManager:
    """Begin/commit/rollback on connections borrowed from a connection source.

    The manager never rolls back on its own: when a statement inside the
    transaction fails the caller decides whether to call `rollback`. Use
    `transaction()` to opt into commit-or-rollback scoping.
    """

    def __init__(self, source: ConnectionSourcePort):
        self.source = source

    async def begin(self) -> TransactionSession:
        """Acquire a connection and start a transaction on it."""

        handle = await connection.acquire(self.source)
        try:
            await connection.run(self.source, handle, "BEGIN")
        except BaseException as exc:
            await connection.release(self.source, handle, pending=exc)
            raise
        logger.debug("[PG] Transaction started")
        return TransactionSession(handle)

    async def commit(self, session: TransactionSession) -> None:
        """Commit and release the session's connection."""

        handle = session.require_open()
        # Postgres ends the transaction even when COMMIT fails.
        session.state = TransactionState.ROLLED_BACK
        try:
            await connection.run(self.source, handle, "COMMIT")
        except BaseException as exc:
            await connection.release(self.source, handle, pending=exc)
            raise
        session.state = TransactionState.COMMITTED
        logger.debug("[PG] Transaction committed")
        await connection.release(self.source, handle)

    async def rollback(self, session: TransactionSession) -> None:
        """Roll back and release the session's connection."""

        handle = session.require_open()
        session.state = TransactionState.ROLLED_BACK
        try:
            await connection.run(self.source, handle, "ROLLBACK")
        except BaseException as exc:
            await connection.release(self.source, handle, pending=exc)
            raise
        logger.debug("[PG] Transaction rolled back")
        await connection.release(self.source, handle)

    @contextlib.asynccontextmanager
    async def transaction(self) -> AsyncIterator[TransactionSession]:
        """Provide async commit/rollback transaction scope."""

        session = await self.begin()
        try:
            yield session
        except BaseException:
            if session.is_open:
                await self.rollback(session)
            raise
        else:
            if session.is_open:
                await self.commit(session)
