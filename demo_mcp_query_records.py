# demo_mcp_query_records.py
# Version: v1

r"""
Demo: call the MCP task `query_records` against a Boltic table.

Usage:

  export BOLTIC_API_KEY=...

  # Defaults (table "orders", 10 rows)
  python demo_mcp_query_records.py

  # With a where clause and selected fields:
  export BOLTIC_TEST_TABLE=orders
  export BOLTIC_TEST_LIMIT=5
  export BOLTIC_TEST_WHERE='{"amount": {"$gte": 100}}'
  export BOLTIC_TEST_FIELDS=id,amount,status

  python demo_mcp_query_records.py
"""

from __future__ import annotations

import asyncio
import json
import os
from typing import Any, Dict, List, Optional

from boltic_databases.tools.tasks import query_records


TABLE = os.environ.get("BOLTIC_TEST_TABLE", "orders")
LIMIT = int(os.environ.get("BOLTIC_TEST_LIMIT", "10"))
OFFSET = int(os.environ.get("BOLTIC_TEST_OFFSET", "0"))

_where_raw = os.environ.get("BOLTIC_TEST_WHERE")
WHERE: Optional[Dict[str, Any]] = json.loads(_where_raw) if _where_raw else None

_fields_raw = os.environ.get("BOLTIC_TEST_FIELDS")
if _fields_raw:
    FIELDS: Optional[List[str]] = [
        part.strip()
        for part in _fields_raw.split(",")
        if part.strip()
    ]
else:
    FIELDS = None


async def main() -> None:
    print("Calling MCP task: query_records()")
    print(f"Table:   {TABLE}")
    print(f"Limit:   {LIMIT}")
    print(f"Offset:  {OFFSET}")
    print(f"Where:   {WHERE!r}")
    print(f"Fields:  {FIELDS!r}")

    result = await query_records(
        table_name=TABLE,
        where=WHERE,
        fields=FIELDS,
        limit=LIMIT,
        offset=OFFSET,
    )

    if not result.get("ok"):
        print("\nQuery failed:", result.get("error"))
        return

    records: List[Dict[str, Any]] = result.get("records") or []
    print("\nRecords returned:", len(records))
    print("Pagination:", result.get("pagination"))
    print("Meta:", result.get("meta"))

    for i, row in enumerate(records, start=1):
        print(f"  Row {i}:", row)


if __name__ == "__main__":
    asyncio.run(main())
