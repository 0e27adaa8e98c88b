# Boltic Databases SDK
# File: resources/indexes.py
# Version: v1

from __future__ import annotations

from typing import Any, Dict, Iterable, Mapping, Optional, Sequence

from ..endpoints import INDEX_ENDPOINTS
from ..filters import FilterInput, normalize_filters, validate
from ..models import INDEX_METHODS
from ..responses import Result, is_error
from .base import BaseResource, build_page, build_sort, validation_error


class IndexResource(BaseResource):
    """Secondary indexes on table columns."""

    async def add_index(
        self,
        table: str,
        field_names: Sequence[str],
        method: str = "btree",
    ) -> Result:
        names = [str(n) for n in field_names or []]
        if not names:
            return validation_error("At least one field name is required", table)
        if method not in INDEX_METHODS:
            return validation_error(
                f"Unsupported index method '{method}'",
                "expected one of: " + ", ".join(INDEX_METHODS),
            )

        resolved = await self._resolve_table_id(table)
        if is_error(resolved):
            return resolved

        return await self._call(
            INDEX_ENDPOINTS["create"],
            {"table_id": resolved["data"]},
            json={"field_names": names, "method": method},
        )

    async def list_indexes(
        self,
        table: str,
        where: FilterInput = None,
        page: Optional[Mapping[str, Any]] = None,
        sort: Optional[Iterable[Any]] = None,
    ) -> Result:
        filters = normalize_filters(where)
        validate(filters)

        resolved = await self._resolve_table_id(table)
        if is_error(resolved):
            return resolved

        body: Dict[str, Any] = {"page": build_page(page, max_size=self.max_page_size)}
        if filters:
            body["filters"] = filters
        if sort:
            body["sort"] = build_sort(sort)
        return await self._call(
            INDEX_ENDPOINTS["list"], {"table_id": resolved["data"]}, json=body
        )

    async def delete_index(self, table: str, index_name: str) -> Result:
        if not index_name:
            return validation_error("index_name is required", table)

        resolved = await self._resolve_table_id(table)
        if is_error(resolved):
            return resolved

        return await self._call(
            INDEX_ENDPOINTS["delete"],
            {"table_id": resolved["data"]},
            json={"index_name": index_name},
        )
