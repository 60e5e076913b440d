"""Core port contracts used by the executor and transaction manager."""

from __future__ import annotations

from typing import Any, Optional, Protocol

from .types import PositionalParams, Rows


class ConnectionSourcePort(Protocol):
    """Pool behavior required by `QueryExecutor` and `TransactionManager`.

    Every method may be a coroutine function or a plain function; the core
    awaits results that are awaitable. The source owns pool sizing and the
    queuing of excess `acquire` calls.
    """

    def acquire(self) -> Any: ...

    def release(self, handle: Any) -> Any: ...

    def run(self, handle: Any, sql: str, params: Optional[PositionalParams]) -> Rows: ...

    def close(self) -> Any: ...
