# Boltic Databases SDK
# File: tests/test_client_context.py
# Version: v1

import pytest

from boltic_databases.context import DEFAULT_CONTEXT
from boltic_databases.errors import DatabaseSelectionError

from conftest import make_client

_ANALYTICS = {
    "data": [{"id": "db-9", "db_name": "Analytics", "db_internal_name": "analytics"}],
    "pagination": {"total_count": 1, "per_page": 1, "current_page": 1},
}


@pytest.mark.asyncio
async def test_use_database_returns_new_client(client, api):
    api.add("POST", "/tables/databases/list", _ANALYTICS)
    api.add_table("orders", "t1")

    scoped = await client.use_database("analytics")

    assert scoped is not client
    assert scoped.current_database.db_id == "db-9"
    assert scoped.current_database.db_internal_name == "analytics"
    assert client.current_database is DEFAULT_CONTEXT

    await scoped.tables.get_table_id("orders")
    lookup = api.calls_to("POST", "/tables/list")[0]
    assert lookup["params"] == {"db_id": "db-9"}


@pytest.mark.asyncio
async def test_use_database_none_means_default(client):
    scoped = await client.with_database_id("db-1").use_database(None)
    assert scoped.current_database.is_default


@pytest.mark.asyncio
async def test_use_database_unknown_raises(client, api):
    api.add("POST", "/tables/databases/list", {"data": [], "pagination": {"total_count": 0, "per_page": 1}})

    with pytest.raises(DatabaseSelectionError) as excinfo:
        await client.use_database("ghost")

    assert excinfo.value.result["error"]["code"] == "NOT_FOUND"
    assert client.current_database is DEFAULT_CONTEXT


@pytest.mark.asyncio
async def test_table_id_cache_is_scoped_per_database(client, api):
    api.add_table("orders", "t1")
    other = client.with_database_id("db-2")

    await client.tables.get_table_id("orders")
    await other.tables.get_table_id("orders")
    await client.tables.get_table_id("orders")

    assert other.cache is client.cache
    assert len(client.cache) == 2
    assert len(api.calls_to("POST", "/tables/list")) == 2


@pytest.mark.asyncio
async def test_from_table_binds_table_name(client, api):
    api.add_table("orders", "t1")
    api.add("POST", "/tables/t1/records", {"data": {"id": "r1"}})
    api.add("POST", "/tables/t1/records/list", {"data": [], "pagination": {"total_count": 0, "per_page": 1}})

    scope = client.from_table("orders")
    inserted = await scope.records.insert({"qty": 1})
    none = await scope.record().where({"qty": 2}).find_one()

    assert inserted["data"] == {"id": "r1"}
    assert none["data"] is None
    assert none["message"] == "No record found"


@pytest.mark.asyncio
async def test_ping_is_local(api):
    assert await make_client(api).ping() is True
    assert await make_client(api, api_key=None).ping() is False
    assert api.calls == []


@pytest.mark.asyncio
async def test_test_connection(client, api):
    api.add("POST", "/tables/list", {"data": [], "pagination": {"total_count": 0, "per_page": 1}})
    assert await client.test_connection() is True

    api.routes.clear()
    api.add("POST", "/tables/list", {"error": {"code": "UNAUTHORIZED", "message": "bad key"}}, status=401)
    assert await client.test_connection() is False
