from __future__ import annotations

from typing import Any, Callable, Optional


class FakeHandle:
    def __init__(self, ident: int):
        self.ident = ident
        self.statements: list[tuple[str, Any]] = []

    def __repr__(self) -> str:
        return f"FakeHandle({self.ident})"


class FakeSource:
    """In-process connection source recording every acquire/run/release."""

    def __init__(
        self,
        rows: Optional[list[dict[str, Any]]] = None,
        *,
        acquire_error: Optional[BaseException] = None,
        run_error: Optional[Callable[[str], Optional[BaseException]]] = None,
        release_error: Optional[BaseException] = None,
    ):
        self.rows = rows if rows is not None else []
        self.acquire_error = acquire_error
        self.run_error = run_error
        self.release_error = release_error
        self.acquired: list[FakeHandle] = []
        self.released: list[FakeHandle] = []
        self.runs: list[tuple[FakeHandle, str, Any]] = []
        self.close_calls = 0

    async def acquire(self) -> FakeHandle:
        if self.acquire_error is not None:
            raise self.acquire_error
        handle = FakeHandle(len(self.acquired) + 1)
        self.acquired.append(handle)
        return handle

    async def release(self, handle: FakeHandle) -> None:
        self.released.append(handle)
        if self.release_error is not None:
            raise self.release_error

    async def run(self, handle: FakeHandle, sql: str, params: Any) -> list[dict[str, Any]]:
        self.runs.append((handle, sql, params))
        handle.statements.append((sql, params))
        if self.run_error is not None:
            error = self.run_error(sql)
            if error is not None:
                raise error
        return list(self.rows)

    async def close(self) -> None:
        self.close_calls += 1


class SyncFakeSource(FakeSource):
    """Same contract with plain (non-async) methods."""

    def acquire(self) -> FakeHandle:  # type: ignore[override]
        handle = FakeHandle(len(self.acquired) + 1)
        self.acquired.append(handle)
        return handle

    def release(self, handle: FakeHandle) -> None:  # type: ignore[override]
        self.released.append(handle)

    def run(self, handle: FakeHandle, sql: str, params: Any) -> list[dict[str, Any]]:  # type: ignore[override]
        self.runs.append((handle, sql, params))
        return list(self.rows)

    def close(self) -> None:  # type: ignore[override]
        self.close_calls += 1
