"""Named parameters and result shapes (no database needed)."""

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

from pg_client_helper import InvalidParameterName, PgClientHelper, transform_query


class PrintingSource:
    """Connection source that prints statements and returns canned rows."""

    def __init__(self, rows):
        self.rows = rows

    async def acquire(self):
        return "conn-1"

    async def release(self, handle):
        print("  released", handle)

    async def run(self, handle, sql, params):
        print(f"  {handle}: {sql} {params}")
        return self.rows

    async def close(self):
        pass


async def main() -> None:
    print(transform_query(
        "SELECT * FROM users WHERE name = $name AND id IN ($ids)",
        {"$name": "John", "$ids": [1, 2, 3]},
    ))
    print(transform_query(
        "SELECT * FROM t WHERE field = $some_field_2 AND field2 = $some_field",
        {"$some_field": "value", "$some_field_2": "anotherValue"},
    ))

    try:
        transform_query("SELECT $name", {"name": "John"})
    except InvalidParameterName as exc:
        print("Rejected:", exc)

    async with PgClientHelper(PrintingSource([{"name": "John", "age": 25}])) as helper:
        print("multiple:", await helper.query_multiple("SELECT name, age FROM users"))
        print("single:", await helper.query_single("SELECT name, age FROM users WHERE age = $age", {"$age": 25}))
        print("scalar:", await helper.query_scalar("SELECT name, age FROM users LIMIT 1"))


if __name__ == "__main__":
    asyncio.run(main())
