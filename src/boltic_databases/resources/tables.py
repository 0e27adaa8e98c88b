# Boltic Databases SDK
# File: resources/tables.py
# Version: v4

"""Table management: create, list, look up, update and delete tables.

Tables are addressed by name; the id needed by the API is resolved with a
list call and cached per database.
"""

from __future__ import annotations

from typing import Any, Iterable, List, Mapping, Optional

from ..endpoints import TABLE_ENDPOINTS
from ..filters import FilterInput, normalize_filters, validate
from ..models import TABLE_NAME_PATTERN, FieldLike, apply_field_defaults, validate_field
from ..responses import Result, error_result, is_error, success
from .base import (
    BaseResource,
    build_page,
    build_sort,
    table_not_found,
    validation_error,
)

SNAPSHOT_READ_ONLY = "SNAPSHOT_READ_ONLY"


def _check_table_name(name: Any) -> Optional[str]:
    if not isinstance(name, str) or not name:
        return "Table name is required"
    if not TABLE_NAME_PATTERN.match(name):
        return (
            f"Table name '{name}' must start with a letter and contain only "
            "letters, digits, underscores and hyphens"
        )
    return None


class TableResource(BaseResource):
    """Operations on the tables of the bound database."""

    async def create(
        self,
        name: str,
        fields: Iterable[FieldLike],
        description: Optional[str] = None,
        is_shared: bool = False,
    ) -> Result:
        problem = _check_table_name(name)
        if problem:
            return validation_error(problem, "name")

        processed = apply_field_defaults(fields)
        if not processed:
            return validation_error("A table needs at least one field", "fields")

        problems: List[str] = []
        for payload in processed:
            problems.extend(validate_field(payload))
        if problems:
            return validation_error("Invalid field definitions", *problems)

        body = {"name": name, "fields": processed, "is_shared": bool(is_shared)}
        if description is not None:
            body["description"] = description

        return await self._call(TABLE_ENDPOINTS["create"], json=body)

    async def find_all(
        self,
        where: FilterInput = None,
        sort: Optional[Iterable[Any]] = None,
        limit: Optional[int] = None,
        offset: Optional[int] = None,
    ) -> Result:
        filters = normalize_filters(where)
        validate(filters)

        body = {
            "page": build_page(limit=limit, offset=offset, max_size=self.max_page_size),
            "filters": filters,
            "sort": build_sort(sort),
        }
        return await self._call(TABLE_ENDPOINTS["list"], json=body)

    async def find_by_id(self, table_id: str) -> Result:
        """Fetch a table by id; ``data`` is None when it does not exist."""
        result = await self._call(TABLE_ENDPOINTS["get"], {"table_id": table_id})
        if is_error(result) and result["error"].get("code") == "TABLE_NOT_FOUND":
            return success(None, "Table not found")
        return result

    async def find_by_name(self, name: str) -> Result:
        """Fetch a table by name; ``data`` is None when it does not exist."""
        return await self._find_table_by_name(name)

    async def find_one(self, where: Mapping[str, Any]) -> Result:
        """Look a table up by ``{"id": ...}`` or ``{"name": ...}``."""
        if where.get("id"):
            return await self.find_by_id(str(where["id"]))
        if where.get("name"):
            return await self.find_by_name(str(where["name"]))
        return validation_error("Either id or name must be provided in where clause")

    async def get_table_id(self, name: str) -> Optional[str]:
        """Return the id for ``name`` or None if the table cannot be resolved."""
        resolved = await self._resolve_table_id(name)
        if is_error(resolved):
            return None
        return resolved["data"]

    async def _find_mutable(self, name: str, action: str) -> Result:
        found = await self.find_by_name(name)
        if is_error(found):
            return found
        table = found["data"]
        if not table:
            return table_not_found(name)
        if table.get("snapshot_url"):
            return error_result(
                SNAPSHOT_READ_ONLY,
                f"Cannot {action} snapshot table '{name}'. "
                "Snapshots are read-only.",
                [name],
            )
        return success(table)

    async def update(self, name: str, **changes: Any) -> Result:
        """Patch table attributes (``name``, ``description``, ``is_shared``...)."""
        if not changes:
            return validation_error("No changes given for table update", name)
        if "name" in changes:
            problem = _check_table_name(changes["name"])
            if problem:
                return validation_error(problem, "name")

        found = await self._find_mutable(name, "update")
        if is_error(found):
            return found

        result = await self._call(
            TABLE_ENDPOINTS["update"],
            {"table_id": str(found["data"]["id"])},
            json=dict(changes),
        )
        if not is_error(result) and "name" in changes:
            self._forget_table(name)
        return result

    async def rename(self, old_name: str, new_name: str) -> Result:
        return await self.update(old_name, name=new_name)

    async def set_access(self, name: str, is_shared: bool) -> Result:
        return await self.update(name, is_shared=bool(is_shared))

    async def delete(self, name: str) -> Result:
        found = await self._find_mutable(name, "delete")
        if is_error(found):
            return found

        result = await self._call(
            TABLE_ENDPOINTS["delete"], {"table_id": str(found["data"]["id"])}
        )
        if not is_error(result):
            self._forget_table(name)
        return result
