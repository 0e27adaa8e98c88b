# Boltic Databases SDK
# File: resources/columns.py
# Version: v4

"""Column (field) management for an existing table."""

from __future__ import annotations

from typing import Any, Dict, Iterable, List, Optional

from ..endpoints import COLUMN_ENDPOINTS
from ..filters import FilterInput, normalize_filters, validate
from ..models import FieldLike, apply_field_defaults, field_payload, validate_field
from ..responses import Result, error_result, is_error, list_result, success
from .base import BaseResource, build_page, build_sort, validation_error

COLUMN_NOT_FOUND = "COLUMN_NOT_FOUND"


class ColumnResource(BaseResource):
    """Operations on the columns of tables in the bound database."""

    async def _next_field_order(self, table_id: str) -> int:
        body = {"page": {"page_no": 1, "page_size": self.max_page_size}, "filters": [], "sort": []}
        existing = await self._call(COLUMN_ENDPOINTS["list"], {"table_id": table_id}, json=body)
        highest = 0
        if not is_error(existing) and isinstance(existing.get("data"), list):
            for col in existing["data"]:
                order = col.get("field_order") if isinstance(col, dict) else None
                if isinstance(order, int) and order > highest:
                    highest = order
        return highest + 1

    async def _prepare(
        self, table_id: str, fields: List[FieldLike]
    ) -> Result:
        payloads = [field_payload(f) for f in fields]
        start = 1
        if any(p.get("field_order") is None for p in payloads):
            start = await self._next_field_order(table_id)
        processed = apply_field_defaults(payloads, start_order=start)

        problems: List[str] = []
        for payload in processed:
            problems.extend(validate_field(payload))
        if problems:
            return validation_error("Invalid column definition", *problems)
        return success(processed)

    async def create(self, table: str, field: FieldLike) -> Result:
        resolved = await self._resolve_table_id(table)
        if is_error(resolved):
            return resolved
        table_id = resolved["data"]

        prepared = await self._prepare(table_id, [field])
        if is_error(prepared):
            return prepared

        return await self._call(
            COLUMN_ENDPOINTS["create"], {"table_id": table_id}, json=prepared["data"][0]
        )

    async def create_many(self, table: str, fields: Iterable[FieldLike]) -> Result:
        """Create columns one by one, stopping at the first failure.

        On failure the error envelope keeps ``data`` empty and lists the
        columns created before the failing one under ``error["created"]``.
        """
        resolved = await self._resolve_table_id(table)
        if is_error(resolved):
            return resolved
        table_id = resolved["data"]

        prepared = await self._prepare(table_id, list(fields))
        if is_error(prepared):
            return prepared

        created: List[Any] = []
        for payload in prepared["data"]:
            result = await self._call(
                COLUMN_ENDPOINTS["create"], {"table_id": table_id}, json=payload
            )
            if is_error(result):
                result["data"] = {}
                result["error"]["created"] = created
                return result
            created.append(result.get("data"))

        return list_result(created)

    async def find_all(
        self,
        table: str,
        where: FilterInput = None,
        limit: Optional[int] = None,
        offset: Optional[int] = None,
        sort: Optional[Iterable[Any]] = None,
    ) -> Result:
        filters = normalize_filters(where)
        validate(filters)

        resolved = await self._resolve_table_id(table)
        if is_error(resolved):
            return resolved

        body = {
            "page": build_page(limit=limit, offset=offset, max_size=self.max_page_size),
            "filters": filters,
            "sort": build_sort(sort),
        }
        return await self._call(
            COLUMN_ENDPOINTS["list"], {"table_id": resolved["data"]}, json=body
        )

    async def _find_column(self, table_id: str, table: str, column_name: str) -> Result:
        body = {
            "page": {"page_no": 1, "page_size": 1},
            "filters": [{"field": "name", "operator": "=", "values": [column_name]}],
            "sort": [],
        }
        result = await self._call(COLUMN_ENDPOINTS["list"], {"table_id": table_id}, json=body)
        if is_error(result):
            return result
        rows = result.get("data")
        if not isinstance(rows, list) or not rows:
            return error_result(
                COLUMN_NOT_FOUND,
                f"Column '{column_name}' not found in table '{table}'",
                [table, column_name],
            )
        return success(rows[0], "Column found successfully")

    async def find_one(self, table: str, column_name: str) -> Result:
        resolved = await self._resolve_table_id(table)
        if is_error(resolved):
            return resolved
        return await self._find_column(resolved["data"], table, column_name)

    async def find_by_id(self, table: str, column_id: str) -> Result:
        resolved = await self._resolve_table_id(table)
        if is_error(resolved):
            return resolved
        return await self._call(
            COLUMN_ENDPOINTS["get"],
            {"table_id": resolved["data"], "field_id": column_id},
        )

    async def update(self, table: str, column_name: str, **changes: Any) -> Result:
        if not changes:
            return validation_error("No changes given for column update", column_name)

        resolved = await self._resolve_table_id(table)
        if is_error(resolved):
            return resolved
        table_id = resolved["data"]

        found = await self._find_column(table_id, table, column_name)
        if is_error(found):
            return found

        payload: Dict[str, Any] = dict(changes)
        return await self._call(
            COLUMN_ENDPOINTS["update"],
            {"table_id": table_id, "field_id": str(found["data"]["id"])},
            json=payload,
        )

    async def delete(self, table: str, column_name: str) -> Result:
        resolved = await self._resolve_table_id(table)
        if is_error(resolved):
            return resolved
        table_id = resolved["data"]

        found = await self._find_column(table_id, table, column_name)
        if is_error(found):
            return found

        return await self._call(
            COLUMN_ENDPOINTS["delete"],
            {"table_id": table_id, "field_id": str(found["data"]["id"])},
        )
