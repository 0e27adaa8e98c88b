# Boltic Databases SDK
# File: resources/databases.py
# Version: v2

"""Database management.

Databases are account-level objects, so these calls are never scoped by
the client's current database.
"""

from __future__ import annotations

from typing import Any, Dict, Iterable, Mapping, Optional

from ..endpoints import DATABASE_ENDPOINTS
from ..filters import FilterInput, normalize_filters, validate
from ..models import project_fields
from ..responses import Result, error_result, is_error, success
from .base import BaseResource, build_page, build_sort, validation_error

NOT_FOUND = "NOT_FOUND"
DATABASE_NOT_FOUND = "DATABASE_NOT_FOUND"
CANNOT_DELETE_DEFAULT = "CANNOT_DELETE_DEFAULT"

_ACTIVE_FILTER = {"field": "status", "operator": "=", "values": ["ACTIVE"]}


class DatabaseResource(BaseResource):
    """Create, list, rename and delete databases."""

    async def create(
        self,
        db_name: str,
        db_internal_name: Optional[str] = None,
        resource_id: Optional[str] = None,
    ) -> Result:
        if not db_name:
            return validation_error("db_name is required", "db_name")

        body: Dict[str, Any] = {"db_name": db_name}
        if db_internal_name:
            body["db_internal_name"] = db_internal_name
        if resource_id:
            body["resource_id"] = resource_id
        return await self._call(DATABASE_ENDPOINTS["create"], json=body)

    async def find_all(
        self,
        where: FilterInput = None,
        page: Optional[Mapping[str, Any]] = None,
        sort: Optional[Iterable[Any]] = None,
        connector_id: Optional[str] = None,
        add_default_if_missing: Optional[bool] = None,
        fields: Optional[Iterable[str]] = None,
    ) -> Result:
        """List active databases.

        Any caller-supplied ``status`` filter is replaced: only ACTIVE
        databases are ever returned.
        """
        filters = [f for f in normalize_filters(where) if f["field"] != "status"]
        validate(filters)
        filters.append(dict(_ACTIVE_FILTER, values=["ACTIVE"]))

        body: Dict[str, Any] = {"filters": filters}
        if page:
            body["page"] = build_page(page, max_size=self.max_page_size)
        if sort:
            body["sort"] = build_sort(sort)

        params: Dict[str, str] = {}
        if connector_id:
            params["connector_id"] = connector_id
        if add_default_if_missing is not None:
            params["add_default_if_missing"] = "true" if add_default_if_missing else "false"

        result = await self._call(
            DATABASE_ENDPOINTS["list"], json=body, params=params or None
        )
        if fields and not is_error(result):
            result["data"] = project_fields(result.get("data"), fields)
        return result

    async def _first(self, where: Mapping[str, Any], missing: str, fields=None) -> Result:
        result = await self.find_all(
            where=where, page={"page_no": 1, "page_size": 1}, fields=fields
        )
        if is_error(result):
            return result
        rows = result.get("data")
        if not isinstance(rows, list) or not rows:
            return error_result(NOT_FOUND, missing, [])
        return success(rows[0], "Database found")

    async def find_one(
        self, db_internal_name: str, fields: Optional[Iterable[str]] = None
    ) -> Result:
        return await self._first(
            {"db_internal_name": db_internal_name},
            f"Database with internal name '{db_internal_name}' not found",
            fields,
        )

    async def get_default(self) -> Result:
        result = await self._first({"is_default": True}, "Default database not found")
        if not is_error(result):
            result["message"] = "Default database found"
        return result

    async def _resolve(self, db_internal_name: str) -> Result:
        found = await self.find_one(db_internal_name)
        if is_error(found):
            return error_result(
                DATABASE_NOT_FOUND,
                f"Database with internal name '{db_internal_name}' not found",
                [],
            )
        return found

    async def update(self, db_internal_name: str, db_name: str) -> Result:
        """Rename a database; only the display name can change."""
        found = await self._resolve(db_internal_name)
        if is_error(found):
            return found
        return await self._call(
            DATABASE_ENDPOINTS["update"],
            {"db_id": str(found["data"]["id"])},
            json={"db_name": db_name},
        )

    async def delete(self, db_internal_name: str) -> Result:
        """Start deletion of a database; returns the deletion job."""
        found = await self._resolve(db_internal_name)
        if is_error(found):
            return found
        if found["data"].get("is_default"):
            return error_result(
                CANNOT_DELETE_DEFAULT, "Cannot delete the default database", []
            )
        return await self._call(
            DATABASE_ENDPOINTS["delete"], {"db_id": str(found["data"]["id"])}
        )

    async def list_jobs(
        self,
        where: FilterInput = None,
        page: Optional[Mapping[str, Any]] = None,
        sort: Optional[Iterable[Any]] = None,
        deleted_by_me: Optional[bool] = None,
    ) -> Result:
        filters = normalize_filters(where)
        validate(filters)

        body: Dict[str, Any] = {}
        if filters:
            body["filters"] = filters
        if page:
            body["page"] = build_page(page, max_size=self.max_page_size)
        if sort:
            body["sort"] = build_sort(sort)
        if deleted_by_me is not None:
            body["deleted_by_me"] = bool(deleted_by_me)
        return await self._call(DATABASE_ENDPOINTS["list_jobs"], json=body)

    async def poll_delete_status(self, job_id: str) -> Result:
        return await self._call(DATABASE_ENDPOINTS["delete_status"], {"job_id": job_id})
