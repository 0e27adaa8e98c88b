# Boltic Databases SDK
# File: resources/records.py
# Version: v4

"""Record (row) operations on a table of the bound database."""

from __future__ import annotations

from typing import Any, Dict, Iterable, List, Mapping, Optional

from ..endpoints import RECORD_ENDPOINTS
from ..errors import FilterValidationError
from ..filters import FilterInput, normalize_filters, validate
from ..models import project_fields
from ..responses import Result, is_error, is_list_result, success
from .base import BaseResource, build_page, build_sort, validation_error


def _check_record(data: Any) -> Optional[str]:
    if not isinstance(data, Mapping):
        return "Record data must be a mapping of column names to values"
    if not data:
        return "Record data must not be empty"
    return None


class RecordResource(BaseResource):
    """Insert, query, update and delete records by table name."""

    async def insert(self, table: str, data: Mapping[str, Any]) -> Result:
        problem = _check_record(data)
        if problem:
            return validation_error(problem, table)

        resolved = await self._resolve_table_id(table)
        if is_error(resolved):
            return resolved

        return await self._call(
            RECORD_ENDPOINTS["insert"], {"table_id": resolved["data"]}, json=dict(data)
        )

    async def insert_many(
        self,
        table: str,
        records: Iterable[Mapping[str, Any]],
        validation: bool = True,
    ) -> Result:
        """Insert records one at a time and report what happened to each.

        ``data`` is ``{"inserted": [...], "failed": [...], "total": n}``
        where each failure is ``{"index", "error"}``. With ``validation``
        on, malformed records are reported as failures without a request.
        """
        rows = list(records)
        resolved = await self._resolve_table_id(table)
        if is_error(resolved):
            return resolved
        table_id = resolved["data"]

        inserted: List[Any] = []
        failed: List[Dict[str, Any]] = []
        for index, row in enumerate(rows):
            if validation:
                problem = _check_record(row)
                if problem:
                    failed.append(
                        {"index": index, "error": validation_error(problem)["error"]}
                    )
                    continue

            result = await self._call(
                RECORD_ENDPOINTS["insert"], {"table_id": table_id}, json=dict(row)
            )
            if is_error(result):
                failed.append({"index": index, "error": result["error"]})
            else:
                inserted.append(result.get("data"))

        summary = {"inserted": inserted, "failed": failed, "total": len(rows)}
        message = f"Inserted {len(inserted)} of {len(rows)} records"
        return success(summary, message)

    async def find_all(
        self,
        table: str,
        where: FilterInput = None,
        fields: Optional[Iterable[str]] = None,
        sort: Optional[Iterable[Any]] = None,
        page: Optional[Mapping[str, Any]] = None,
        limit: Optional[int] = None,
        offset: Optional[int] = None,
    ) -> Result:
        filters = normalize_filters(where)
        validate(filters)

        resolved = await self._resolve_table_id(table)
        if is_error(resolved):
            return resolved

        body = {
            "filters": filters,
            "page": build_page(page, limit, offset, max_size=self.max_page_size),
            "sort": build_sort(sort),
        }
        result = await self._call(
            RECORD_ENDPOINTS["list"], {"table_id": resolved["data"]}, json=body
        )
        if fields and not is_error(result):
            result["data"] = project_fields(result.get("data"), fields)
        return result

    async def find_one(
        self,
        table: str,
        where: FilterInput,
        fields: Optional[Iterable[str]] = None,
    ) -> Result:
        """Return the first matching record, or ``data: None`` when none match."""
        filters = normalize_filters(where)
        if not filters:
            raise FilterValidationError(["find_one requires at least one filter"])

        result = await self.find_all(
            table, filters, fields=fields, page={"page_no": 1, "page_size": 1}
        )
        if is_error(result):
            return result
        rows = result.get("data")
        first = rows[0] if isinstance(rows, list) and rows else None
        return success(first)

    async def count(self, table: str, where: FilterInput = None) -> Result:
        """Return ``success(total_count)`` for the matching records."""
        result = await self.find_all(table, where, page={"page_no": 1, "page_size": 1})
        if is_error(result):
            return result
        total = 0
        if is_list_result(result):
            total = result["pagination"].get("total_count") or 0
        return success(int(total))

    async def get(self, table: str, record_id: str) -> Result:
        resolved = await self._resolve_table_id(table)
        if is_error(resolved):
            return resolved
        return await self._call(
            RECORD_ENDPOINTS["get"],
            {"table_id": resolved["data"], "record_id": record_id},
        )

    async def update(
        self,
        table: str,
        set: Mapping[str, Any],
        where: FilterInput,
    ) -> Result:
        """Apply ``set`` to every record matching ``where``."""
        filters = normalize_filters(where)
        validate(filters)
        if not filters:
            raise FilterValidationError(["update requires at least one filter"])
        problem = _check_record(set)
        if problem:
            return validation_error(problem, table)

        resolved = await self._resolve_table_id(table)
        if is_error(resolved):
            return resolved

        return await self._call(
            RECORD_ENDPOINTS["update"],
            {"table_id": resolved["data"]},
            json={"set": dict(set), "filters": filters},
        )

    async def update_by_id(
        self, table: str, record_id: str, data: Mapping[str, Any]
    ) -> Result:
        problem = _check_record(data)
        if problem:
            return validation_error(problem, table)

        resolved = await self._resolve_table_id(table)
        if is_error(resolved):
            return resolved

        return await self._call(
            RECORD_ENDPOINTS["update_by_id"],
            {"table_id": resolved["data"], "record_id": record_id},
            json=dict(data),
        )

    async def delete(
        self,
        table: str,
        where: FilterInput = None,
        record_ids: Optional[Iterable[str]] = None,
    ) -> Result:
        """Delete by filters or by ids; exactly one of the two must be given."""
        filters = normalize_filters(where)
        ids = [str(r) for r in record_ids] if record_ids is not None else None

        if bool(filters) == bool(ids):
            return validation_error(
                "Provide either where filters or record_ids (not both)", table
            )
        if filters:
            validate(filters)

        resolved = await self._resolve_table_id(table)
        if is_error(resolved):
            return resolved

        body = {"filters": filters} if filters else {"record_ids": ids}
        return await self._call(
            RECORD_ENDPOINTS["delete"], {"table_id": resolved["data"]}, json=body
        )

    async def delete_by_id(self, table: str, record_id: str) -> Result:
        return await self.delete(table, record_ids=[record_id])
