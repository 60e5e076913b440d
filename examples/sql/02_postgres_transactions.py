"""Postgres example with explicit transactions (requires a running server).

Connection settings come from PGHOST, PGPORT, PGUSER, PGPASSWORD, PGDATABASE.
"""

from __future__ import annotations

import asyncio
import sys
from pathlib import Path

# Allow running this script directly from repository root.
PROJECT_ROOT = next(
    (parent for parent in Path(__file__).resolve().parents if (parent / "pg_client_helper").exists()),
    None,
)
if PROJECT_ROOT and str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from pg_client_helper import PgClientHelper, PgConfig, QueryExecutionFailed


async def main() -> None:
    try:
        helper = await PgClientHelper.connect(PgConfig.from_env(), timeout=3)
    except Exception as exc:
        print("Postgres example skipped:", exc)
        return

    async with helper:
        await helper.query("DROP TABLE IF EXISTS example_accounts")
        await helper.query("CREATE TABLE example_accounts (name TEXT PRIMARY KEY, balance INT)")
        await helper.query(
            "INSERT INTO example_accounts VALUES ($a, $amount), ($b, $amount)",
            {"$a": "alice", "$b": "bob", "$amount": 100},
        )

        session = await helper.begin_transaction()
        try:
            move = {"$from": "alice", "$to": "bob", "$amount": 30}
            await helper.query(
                "UPDATE example_accounts SET balance = balance - $amount WHERE name = $from",
                move,
                session,
            )
            await helper.query(
                "UPDATE example_accounts SET balance = balance + $amount WHERE name = $to",
                move,
                session,
            )
        except QueryExecutionFailed:
            await helper.rollback_transaction(session)
            raise
        await helper.commit_transaction(session)

        async with helper.transaction() as tx:
            await helper.query("DELETE FROM example_accounts WHERE name = $name", {"$name": "bob"}, tx)

        print("Accounts:", await helper.query_multiple("SELECT * FROM example_accounts ORDER BY name"))
        print("Total:", await helper.query_scalar("SELECT sum(balance) FROM example_accounts"))
        await helper.query("DROP TABLE example_accounts")


if __name__ == "__main__":
    asyncio.run(main())
