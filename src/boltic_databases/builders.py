# Boltic Databases SDK
# File: builders.py
# Version: v2

"""Fluent builders for table schemas and record queries.

Builders are frozen dataclasses: every chained call returns a new builder
via ``dataclasses.replace`` and leaves the receiver untouched, so a
partially built query can be shared and extended in several directions.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import TYPE_CHECKING, Any, Dict, Iterable, List, Mapping, Optional, Tuple

from .errors import ConfigurationError
from .filters import Filter, FilterInput, normalize_filters
from .responses import Result, is_error, success

if TYPE_CHECKING:
    from .resources import RecordResource, TableResource


@dataclass(frozen=True)
class TableBuilder:
    """Describe a table column by column, then ``build()`` or ``create()``."""

    name: str
    resource: Optional["TableResource"] = field(default=None, repr=False, compare=False)
    description: Optional[str] = None
    is_shared: bool = False
    fields: Tuple[Dict[str, Any], ...] = ()

    def describe(self, text: str) -> "TableBuilder":
        return replace(self, description=text)

    def shared(self, flag: bool = True) -> "TableBuilder":
        return replace(self, is_shared=bool(flag))

    def _column(
        self,
        name: str,
        ftype: str,
        *,
        nullable: bool = True,
        unique: bool = False,
        indexed: bool = False,
        default_value: Any = None,
        description: Optional[str] = None,
        alignment: Optional[str] = None,
        **attrs: Any,
    ) -> "TableBuilder":
        if any(f["name"] == name for f in self.fields):
            raise ValueError(f"Column '{name}' is already defined on table '{self.name}'")

        column: Dict[str, Any] = {
            "name": name,
            "type": ftype,
            "is_nullable": nullable,
            "is_unique": unique,
            "is_indexed": indexed,
            "is_primary_key": False,
            "field_order": len(self.fields) + 1,
        }
        if default_value is not None:
            column["default_value"] = default_value
        if description is not None:
            column["description"] = description
        if alignment is not None:
            column["alignment"] = alignment
        column.update({k: v for k, v in attrs.items() if v is not None})

        return replace(self, fields=self.fields + (column,))

    # Column types

    def text(self, name: str, alignment: str = "left", **options: Any) -> "TableBuilder":
        return self._column(name, "text", alignment=alignment, **options)

    def long_text(self, name: str, alignment: str = "left", **options: Any) -> "TableBuilder":
        return self._column(name, "long-text", alignment=alignment, **options)

    def number(
        self,
        name: str,
        decimals: Optional[str] = None,
        alignment: str = "right",
        **options: Any,
    ) -> "TableBuilder":
        return self._column(name, "number", alignment=alignment, decimals=decimals, **options)

    def currency(
        self,
        name: str,
        currency_format: str = "USD",
        decimals: Optional[str] = None,
        **options: Any,
    ) -> "TableBuilder":
        return self._column(
            name,
            "currency",
            alignment="right",
            currency_format=currency_format,
            decimals=decimals,
            **options,
        )

    def checkbox(self, name: str, **options: Any) -> "TableBuilder":
        return self._column(name, "checkbox", alignment="center", **options)

    def date_time(
        self,
        name: str,
        date_format: Optional[str] = None,
        time_format: Optional[str] = None,
        timezone: Optional[str] = None,
        **options: Any,
    ) -> "TableBuilder":
        return self._column(
            name,
            "date-time",
            alignment="left",
            date_format=date_format,
            time_format=time_format,
            timezone=timezone,
            **options,
        )

    def email(self, name: str, **options: Any) -> "TableBuilder":
        return self._column(name, "email", alignment="left", **options)

    def phone_number(
        self, name: str, phone_format: Optional[str] = None, **options: Any
    ) -> "TableBuilder":
        return self._column(
            name, "phone-number", alignment="left", phone_format=phone_format, **options
        )

    def link(self, name: str, **options: Any) -> "TableBuilder":
        return self._column(name, "link", alignment="left", **options)

    def json(self, name: str, **options: Any) -> "TableBuilder":
        return self._column(name, "json", alignment="left", **options)

    def dropdown(
        self,
        name: str,
        items: Iterable[str],
        multiple: bool = False,
        **options: Any,
    ) -> "TableBuilder":
        return self._column(
            name,
            "dropdown",
            alignment="left",
            selection_source="provide-static-list",
            selectable_items=list(items),
            multiple_selections=bool(multiple),
            **options,
        )

    def vector(
        self, name: str, dimension: int, vector_type: str = "vector", **options: Any
    ) -> "TableBuilder":
        if vector_type not in ("vector", "halfvec", "sparsevec"):
            raise ValueError(f"Unsupported vector type '{vector_type}'")
        return self._column(
            name, vector_type, alignment="left", vector_dimension=dimension, **options
        )

    # Terminal operations

    def build(self) -> Dict[str, Any]:
        """Return the create-table payload."""
        payload: Dict[str, Any] = {
            "name": self.name,
            "fields": [dict(f) for f in self.fields],
            "is_shared": self.is_shared,
        }
        if self.description is not None:
            payload["description"] = self.description
        return payload

    async def create(self) -> Result:
        if self.resource is None:
            raise ConfigurationError(
                "TableBuilder is not bound to a client; use client.table(name)"
            )
        payload = self.build()
        return await self.resource.create(
            payload["name"],
            payload["fields"],
            description=payload.get("description"),
            is_shared=payload["is_shared"],
        )


@dataclass(frozen=True)
class RecordBuilder:
    """Compose a record query against one table, then run it."""

    table: str
    resource: "RecordResource" = field(repr=False, compare=False)
    filters: Tuple[Filter, ...] = ()
    sort: Tuple[Dict[str, str], ...] = ()
    limit_value: Optional[int] = None
    offset_value: Optional[int] = None
    fields: Tuple[str, ...] = ()
    values: Tuple[Tuple[str, Any], ...] = ()

    def where(self, conditions: FilterInput) -> "RecordBuilder":
        """AND the given conditions onto the query."""
        added = normalize_filters(conditions)
        return replace(self, filters=self.filters + tuple(added))

    def order_by(self, field_name: str, direction: str = "asc") -> "RecordBuilder":
        direction = direction.lower()
        if direction not in ("asc", "desc"):
            raise ValueError(f"Sort direction must be 'asc' or 'desc', got '{direction}'")
        return replace(self, sort=self.sort + ({"field": field_name, "direction": direction},))

    def limit(self, count: int) -> "RecordBuilder":
        return replace(self, limit_value=int(count))

    def offset(self, count: int) -> "RecordBuilder":
        return replace(self, offset_value=int(count))

    def select(self, *field_names: str) -> "RecordBuilder":
        return replace(self, fields=tuple(field_names))

    def set(self, values: Mapping[str, Any]) -> "RecordBuilder":
        """Merge ``values`` into the update payload."""
        merged = dict(self.values)
        merged.update(values)
        return replace(self, values=tuple(merged.items()))

    def _filters(self) -> List[Filter]:
        return [dict(f, values=list(f["values"])) for f in self.filters]

    async def find_all(self) -> Result:
        return await self.resource.find_all(
            self.table,
            self._filters(),
            fields=list(self.fields) or None,
            sort=list(self.sort),
            limit=self.limit_value,
            offset=self.offset_value,
        )

    async def find_one(self) -> Result:
        result = await self.resource.find_all(
            self.table,
            self._filters(),
            fields=list(self.fields) or None,
            sort=list(self.sort),
            limit=1,
            offset=self.offset_value,
        )
        if is_error(result):
            return result
        rows = result.get("data")
        record = rows[0] if isinstance(rows, list) and rows else None
        return success(record, "Record found" if record else "No record found")

    async def update(self) -> Result:
        return await self.resource.update(self.table, dict(self.values), self._filters())

    async def delete(self) -> Result:
        return await self.resource.delete(self.table, where=self._filters())

    async def count(self) -> Result:
        return await self.resource.count(self.table, self._filters())
