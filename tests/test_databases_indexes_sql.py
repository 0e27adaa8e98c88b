# Boltic Databases SDK
# File: tests/test_databases_indexes_sql.py
# Version: v1

import pytest

from boltic_databases.errors import SqlGenerationError
from boltic_databases.responses import is_error, is_list_result

_DBS = {
    "data": [
        {"id": "db-1", "db_name": "Main", "db_internal_name": "main", "is_default": True},
    ],
    "pagination": {"total_count": 3, "per_page": 2, "current_page": 1},
}


# ---------------------------------------------------------------------------
# Databases
# ---------------------------------------------------------------------------


@pytest.mark.asyncio
async def test_database_list_forces_active_status(client, api):
    api.add("POST", "/tables/databases/list", _DBS)

    result = await client.databases.find_all(
        where={"status": "DELETED", "db_name": "Main"},
        connector_id="conn-1",
        add_default_if_missing=True,
    )

    assert is_list_result(result)
    assert result["pagination"]["total_pages"] == 2
    call = api.calls[0]
    assert call["json"]["filters"] == [
        {"field": "db_name", "operator": "=", "values": ["Main"]},
        {"field": "status", "operator": "=", "values": ["ACTIVE"]},
    ]
    assert call["params"] == {"connector_id": "conn-1", "add_default_if_missing": "true"}


@pytest.mark.asyncio
async def test_database_calls_ignore_bound_database(client, api):
    api.add("POST", "/tables/databases/list", _DBS)

    scoped = client.with_database_id("db-7")
    await scoped.databases.find_all()

    assert "db_id" not in api.calls[0]["params"]


@pytest.mark.asyncio
async def test_find_one_and_default(client, api):
    api.add("POST", "/tables/databases/list", _DBS)
    api.add("POST", "/tables/databases/list", {"data": [], "pagination": {"total_count": 0, "per_page": 1}})

    found = await client.databases.get_default()
    missing = await client.databases.find_one("nope")

    assert found["data"]["id"] == "db-1"
    assert found["message"] == "Default database found"
    assert api.calls[0]["json"]["filters"][0] == {
        "field": "is_default",
        "operator": "=",
        "values": [True],
    }
    assert missing["error"]["code"] == "NOT_FOUND"


@pytest.mark.asyncio
async def test_default_database_cannot_be_deleted(client, api):
    api.add("POST", "/tables/databases/list", _DBS)

    result = await client.databases.delete("main")

    assert result["error"]["code"] == "CANNOT_DELETE_DEFAULT"
    assert not api.calls_to("DELETE", "/tables/databases/db-1")


@pytest.mark.asyncio
async def test_update_sends_only_db_name_and_unknown_db(client, api):
    api.add("POST", "/tables/databases/list", _DBS)
    api.add("PATCH", "/tables/databases/db-1", {"data": {"id": "db-1", "db_name": "Renamed"}})
    api.add("POST", "/tables/databases/list", {"data": [], "pagination": {"total_count": 0, "per_page": 1}})

    updated = await client.databases.update("main", "Renamed")
    missing = await client.databases.update("ghost", "x")

    assert updated["data"]["db_name"] == "Renamed"
    assert api.calls_to("PATCH", "/tables/databases/db-1")[0]["json"] == {"db_name": "Renamed"}
    assert missing["error"]["code"] == "DATABASE_NOT_FOUND"


@pytest.mark.asyncio
async def test_create_jobs_and_delete_status(client, api):
    api.add("POST", "/tables/databases", {"data": {"id": "db-2"}})
    api.add("POST", "/tables/databases/jobs/list", {"data": [], "pagination": {"total_count": 0, "per_page": 10}})
    api.add("GET", "/tables/databases/delete-status/job-1", {"data": {"status": "done"}})

    created = await client.databases.create("Analytics", db_internal_name="analytics")
    jobs = await client.databases.list_jobs(deleted_by_me=True)
    status = await client.databases.poll_delete_status("job-1")

    assert created["data"]["id"] == "db-2"
    assert api.calls[0]["json"] == {"db_name": "Analytics", "db_internal_name": "analytics"}
    assert is_list_result(jobs)
    assert api.calls[1]["json"] == {"deleted_by_me": True}
    assert status["data"]["status"] == "done"


# ---------------------------------------------------------------------------
# Indexes
# ---------------------------------------------------------------------------


@pytest.mark.asyncio
async def test_add_index_validates_method(client, api):
    result = await client.indexes.add_index("orders", ["title"], method="bitmap")

    assert result["error"]["code"] == "VALIDATION_ERROR"
    assert api.calls == []


@pytest.mark.asyncio
async def test_index_lifecycle(client, api):
    api.add_table("orders", "t1")
    api.add("POST", "/tables/indexes/t1", {"data": {"index_name": "idx_title"}})
    api.add("POST", "/tables/indexes/t1/list", {"data": {"items": []}})
    api.add("DELETE", "/tables/indexes/t1", {"data": {"message": "deleted"}})

    added = await client.indexes.add_index("orders", ["title"], method="gin")
    listed = await client.indexes.list_indexes("orders")
    removed = await client.indexes.delete_index("orders", "idx_title")

    assert added["data"]["index_name"] == "idx_title"
    assert api.calls_to("POST", "/tables/indexes/t1")[0]["json"] == {
        "field_names": ["title"],
        "method": "gin",
    }
    assert not is_error(listed)
    assert api.calls_to("DELETE", "/tables/indexes/t1")[0]["json"] == {"index_name": "idx_title"}
    assert not is_error(removed)


# ---------------------------------------------------------------------------
# SQL
# ---------------------------------------------------------------------------


@pytest.mark.asyncio
async def test_execute_sql(client, api):
    api.add("POST", "/tables/query/execute", {"data": [[{"n": 1}], {"count": 1}]})

    result = await client.sql.execute_sql("SELECT 1 AS n")
    empty = await client.sql.execute_sql("   ")

    assert result["data"][0] == [{"n": 1}]
    assert api.calls[0]["json"] == {"query": "SELECT 1 AS n"}
    assert empty["error"]["code"] == "VALIDATION_ERROR"


@pytest.mark.asyncio
async def test_text_to_sql_joins_chunks(client, api):
    api.add("POST", "/tables/query/text-to-sql", {"data": ["SELECT * ", "FROM orders", ";"]})

    result = await client.sql.text_to_sql("all orders", current_query="SELECT 1")

    assert result["data"] == "SELECT * FROM orders;"
    assert api.calls[0]["json"] == {"prompt": "all orders", "current_query": "SELECT 1"}


@pytest.mark.asyncio
async def test_stream_text_to_sql_yields_chunks(client, api):
    api.add("POST", "/tables/query/text-to-sql", {"data": "SELECT 1"})

    chunks = [c async for c in client.sql.stream_text_to_sql("one")]
    assert chunks == ["SELECT 1"]


@pytest.mark.asyncio
async def test_stream_text_to_sql_raises_on_error(client, api):
    api.add(
        "POST",
        "/tables/query/text-to-sql",
        {"error": {"code": "AI_UNAVAILABLE", "message": "model offline"}},
        status=503,
    )

    with pytest.raises(SqlGenerationError) as excinfo:
        async for _ in client.sql.stream_text_to_sql("anything"):
            pass

    assert excinfo.value.result["error"]["code"] == "AI_UNAVAILABLE"
    assert "model offline" in str(excinfo.value)
