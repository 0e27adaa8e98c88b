# demo_list_tables.py
# Version: v1

r"""
Quick smoke test: list tables and their columns in a Boltic database.

Run with the virtualenv active and env vars set:
  export BOLTIC_API_KEY=...
  export BOLTIC_DATABASE=analytics   # optional, default database otherwise
  python demo_list_tables.py
"""

import asyncio
import os

from boltic_databases import BolticClient, is_error


async def main() -> None:
    client = BolticClient.from_env()

    db_name = os.environ.get("BOLTIC_DATABASE") or None
    client = await client.use_database(db_name)
    print(f"Using database: {client.current_database.db_internal_name or '(default)'}")

    result = await client.tables.find_all(limit=10)
    if is_error(result):
        print("Listing tables failed:", result["error"])
        return

    tables = result["data"] or []
    print("Tables returned:", len(tables), "of", (result.get("pagination") or {}).get("total_count"))

    for t in tables:
        print(f"- {t.get('name')} (id={t.get('id')})")
        columns = await client.columns.find_all(t["name"], limit=50)
        for col in (columns.get("data") or [])[:10]:
            print(f"    {col.get('name')}: {col.get('type')}")


if __name__ == "__main__":
    asyncio.run(main())
