# Boltic Databases SDK
# File: resources/base.py
# Version: v2

"""Shared plumbing for the resource classes.

Every resource talks to the API through one :class:`HttpTransport`, is
bound to one :class:`DatabaseContext` and shares the table-id cache of
the client that created it.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, Mapping, Optional

from ..cache import TTLCache
from ..context import DEFAULT_CONTEXT, DatabaseContext
from ..endpoints import TABLE_ENDPOINTS, Endpoint, build_endpoint_path
from ..responses import Result, error_result, is_error, success
from ..transport import HttpTransport

logger = logging.getLogger(__name__)

DEFAULT_PAGE_SIZE = 100

VALIDATION_ERROR = "VALIDATION_ERROR"
TABLE_NOT_FOUND = "TABLE_NOT_FOUND"


def build_page(
    page: Optional[Mapping[str, Any]] = None,
    limit: Optional[int] = None,
    offset: Optional[int] = None,
    default_size: int = DEFAULT_PAGE_SIZE,
    max_size: int = 1000,
) -> Dict[str, int]:
    """Return a ``{"page_no", "page_size"}`` block for list requests.

    An explicit ``page`` mapping wins; otherwise ``limit``/``offset`` are
    converted so that ``offset`` falls on the returned page.
    """
    if page:
        page_no = int(page.get("page_no") or 1)
        size = int(page.get("page_size") or default_size)
    elif limit is not None:
        size = int(limit)
        size = max(1, size)
        page_no = max(0, int(offset or 0)) // size + 1
    else:
        page_no = 1
        size = default_size

    return {
        "page_no": max(1, page_no),
        "page_size": max(1, min(size, max_size)),
    }


def build_sort(sort: Optional[Iterable[Any]]) -> list:
    """Accept ``[{"field", "direction"}]``, ``[("name", "asc")]`` or ``["name"]``."""
    out = []
    for item in sort or []:
        if isinstance(item, Mapping):
            direction = item.get("direction") or item.get("order") or "asc"
            out.append({"field": item["field"], "direction": str(direction).lower()})
        elif isinstance(item, (list, tuple)):
            name, direction = item[0], (item[1] if len(item) > 1 else "asc")
            out.append({"field": name, "direction": str(direction).lower()})
        else:
            out.append({"field": str(item), "direction": "asc"})
    return out


def validation_error(message: str, *meta: str) -> Result:
    return error_result(VALIDATION_ERROR, message, list(meta))


def table_not_found(table_name: str) -> Result:
    return error_result(TABLE_NOT_FOUND, f"Table '{table_name}' not found", [table_name])


@dataclass
class BaseResource:
    """Common state and request helpers for all resources."""

    transport: HttpTransport
    context: DatabaseContext = DEFAULT_CONTEXT
    cache: TTLCache = field(default_factory=TTLCache)

    @property
    def max_page_size(self) -> int:
        return self.transport.config.max_page_size

    async def _call(
        self,
        endpoint: Endpoint,
        path_params: Optional[Mapping[str, str]] = None,
        *,
        json: Any = None,
        params: Optional[Mapping[str, Any]] = None,
    ) -> Result:
        path = build_endpoint_path(endpoint, path_params)
        return await self.transport.request(
            endpoint.method,
            path,
            json=json,
            params=params,
            context=self.context,
        )

    # ------------------------------------------------------------------
    # Table lookups shared by columns, records and indexes
    # ------------------------------------------------------------------

    def _cache_key(self, table_name: str):
        return (self.context.cache_scope(), table_name)

    async def _find_table_by_name(self, table_name: str) -> Result:
        """Return ``success(table_or_None)`` or the upstream error."""
        body = {
            "page": {"page_no": 1, "page_size": 1},
            "filters": [{"field": "name", "operator": "=", "values": [table_name]}],
            "sort": [],
        }
        result = await self._call(TABLE_ENDPOINTS["list"], json=body)
        if is_error(result):
            return result

        rows = result.get("data")
        table = rows[0] if isinstance(rows, list) and rows else None
        if table is not None:
            table_id = table.get("id")
            if table_id:
                self.cache.set(self._cache_key(table_name), str(table_id))
        return success(table, "Table found" if table else "Table not found")

    async def _resolve_table_id(self, table_name: str) -> Result:
        """Return ``success(table_id)``, ``TABLE_NOT_FOUND`` or the upstream error."""
        cached = self.cache.get(self._cache_key(table_name))
        if cached is not None:
            logger.debug("Table id cache hit for %r", table_name)
            return success(cached)

        found = await self._find_table_by_name(table_name)
        if is_error(found):
            return found
        table = found["data"]
        if not table or not table.get("id"):
            return table_not_found(table_name)
        return success(str(table["id"]))

    def _forget_table(self, table_name: str) -> None:
        self.cache.invalidate(self._cache_key(table_name))
