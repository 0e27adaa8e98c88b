# Boltic Databases SDK
# File: tests/test_records.py
# Version: v1

import pytest

from boltic_databases.errors import FilterValidationError, UnsupportedOperatorError
from boltic_databases.filters import create_filter
from boltic_databases.responses import is_error, is_list_result

_ROWS = {
    "data": [
        {"id": "r1", "name": "Widget", "price": 10, "secret": "x"},
        {"id": "r2", "name": "Gadget", "price": 20, "secret": "y"},
    ],
    "pagination": {"total_count": 42, "per_page": 10, "current_page": 1},
}


@pytest.mark.asyncio
async def test_insert_resolves_table_once_and_caches(client, api):
    api.add_table("products", "t1")
    api.add("POST", "/tables/t1/records", {"data": {"id": "r1", "name": "Widget"}})

    first = await client.records.insert("products", {"name": "Widget"})
    second = await client.records.insert("products", {"name": "Gadget"})

    assert first["data"]["id"] == "r1"
    assert not is_error(second)
    assert len(api.calls_to("POST", "/tables/list")) == 1
    assert api.calls_to("POST", "/tables/t1/records")[1]["json"] == {"name": "Gadget"}
    assert client.cache.stats()["hits"] == 1


@pytest.mark.asyncio
async def test_insert_into_unknown_table(client, api):
    api.add("POST", "/tables/list", {"data": [], "pagination": {"total_count": 0, "per_page": 1}})

    result = await client.records.insert("ghost", {"a": 1})
    assert result["error"]["code"] == "TABLE_NOT_FOUND"


@pytest.mark.asyncio
async def test_insert_rejects_empty_record(client, api):
    result = await client.records.insert("products", {})
    assert result["error"]["code"] == "VALIDATION_ERROR"
    assert api.calls == []


@pytest.mark.asyncio
async def test_find_all_sends_filters_and_projects_fields(client, api):
    api.add_table("products", "t1")
    api.add("POST", "/tables/t1/records/list", _ROWS)

    result = await client.records.find_all(
        "products",
        where={"price": {"$gte": 10}, "name": {"$in": ["Widget", "Gadget"]}},
        fields=["id", "name"],
        limit=10,
        offset=20,
    )

    assert is_list_result(result)
    assert result["data"] == [{"id": "r1", "name": "Widget"}, {"id": "r2", "name": "Gadget"}]
    assert result["pagination"]["total_pages"] == 5

    body = api.calls_to("POST", "/tables/t1/records/list")[0]["json"]
    assert body["page"] == {"page_no": 3, "page_size": 10}
    assert body["filters"] == [
        {"field": "price", "operator": ">=", "values": [10]},
        {"field": "name", "operator": "in", "values": ["Widget", "Gadget"]},
    ]


@pytest.mark.asyncio
async def test_find_all_accepts_filter_builder(client, api):
    api.add_table("products", "t1")
    api.add("POST", "/tables/t1/records/list", _ROWS)

    await client.records.find_all("products", where=create_filter().between("price", 1, 5))

    body = api.calls_to("POST", "/tables/t1/records/list")[0]["json"]
    assert body["filters"] == [{"field": "price", "operator": "between", "values": [1, 5]}]


@pytest.mark.asyncio
async def test_bad_filters_raise_before_any_request(client, api):
    with pytest.raises(UnsupportedOperatorError):
        await client.records.find_all("products", where={"price": {"$near": 1}})

    with pytest.raises(FilterValidationError):
        await client.records.find_all(
            "products", where=[{"field": "price", "operator": "between", "values": [1]}]
        )

    assert api.calls == []


@pytest.mark.asyncio
async def test_find_one_requires_a_filter(client):
    with pytest.raises(FilterValidationError):
        await client.records.find_one("products", {})


@pytest.mark.asyncio
async def test_find_one_returns_first_or_none(client, api):
    api.add_table("products", "t1")
    api.add("POST", "/tables/t1/records/list", _ROWS)
    api.add("POST", "/tables/t1/records/list", {"data": [], "pagination": {"total_count": 0, "per_page": 1}})

    hit = await client.records.find_one("products", {"name": "Widget"})
    miss = await client.records.find_one("products", {"name": "Nothing"})

    assert hit == {"data": _ROWS["data"][0]}
    assert miss == {"data": None}
    assert api.calls_to("POST", "/tables/t1/records/list")[0]["json"]["page"] == {
        "page_no": 1,
        "page_size": 1,
    }


@pytest.mark.asyncio
async def test_insert_many_reports_per_record_outcome(client, api):
    api.add_table("products", "t1")
    api.add("POST", "/tables/t1/records", {"data": {"id": "r1"}})
    api.add("POST", "/tables/t1/records", {"error": {"code": "CONFLICT", "message": "dup"}}, status=409)

    result = await client.records.insert_many("products", [{"a": 1}, {}, {"a": 2}])

    summary = result["data"]
    assert summary["total"] == 3
    assert summary["inserted"] == [{"id": "r1"}]
    assert [f["index"] for f in summary["failed"]] == [1, 2]
    assert summary["failed"][0]["error"]["code"] == "VALIDATION_ERROR"
    assert summary["failed"][1]["error"]["code"] == "CONFLICT"
    assert result["message"] == "Inserted 1 of 3 records"


@pytest.mark.asyncio
async def test_update_sends_set_and_filters(client, api):
    api.add_table("products", "t1")
    api.add("PATCH", "/tables/t1/records", {"data": [{"id": "r1", "price": 11}]})

    await client.records.update("products", set={"price": 11}, where={"name": "Widget"})

    assert api.calls_to("PATCH", "/tables/t1/records")[0]["json"] == {
        "set": {"price": 11},
        "filters": [{"field": "name", "operator": "=", "values": ["Widget"]}],
    }


@pytest.mark.asyncio
async def test_update_by_id_and_get(client, api):
    api.add_table("products", "t1")
    api.add("PATCH", "/tables/t1/records/r1", {"data": {"id": "r1", "price": 3}})
    api.add("GET", "/tables/t1/records/r1", {"data": {"id": "r1", "price": 3}})

    updated = await client.records.update_by_id("products", "r1", {"price": 3})
    fetched = await client.records.get("products", "r1")

    assert updated["data"] == fetched["data"] == {"id": "r1", "price": 3}
    assert api.calls_to("PATCH", "/tables/t1/records/r1")[0]["json"] == {"price": 3}


@pytest.mark.asyncio
async def test_delete_needs_exactly_one_selector(client, api):
    neither = await client.records.delete("products")
    both = await client.records.delete("products", where={"a": 1}, record_ids=["r1"])

    assert neither["error"]["code"] == "VALIDATION_ERROR"
    assert both["error"]["code"] == "VALIDATION_ERROR"
    assert api.calls == []


@pytest.mark.asyncio
async def test_delete_by_ids_and_by_filter(client, api):
    api.add_table("products", "t1")
    api.add("DELETE", "/tables/t1/records/list", {"data": {}, "message": "Records deleted"})

    await client.records.delete_by_id("products", "r9")
    await client.records.delete("products", where={"price": {"$lt": 1}})

    bodies = [c["json"] for c in api.calls_to("DELETE", "/tables/t1/records/list")]
    assert bodies == [
        {"record_ids": ["r9"]},
        {"filters": [{"field": "price", "operator": "<", "values": [1]}]},
    ]


@pytest.mark.asyncio
async def test_count_reads_total_count(client, api):
    api.add_table("products", "t1")
    api.add("POST", "/tables/t1/records/list", _ROWS)

    result = await client.records.count("products", {"price": {"$gt": 0}})
    assert result == {"data": 42}
