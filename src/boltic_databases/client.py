# Boltic Databases SDK
# File: client.py
# Version: v5
"""High-level client for the Boltic Tables API.

Exposes one resource per API area:

- tables / columns / records / indexes, scoped to the bound database
- databases, account wide
- sql, raw queries and text-to-SQL

A client is bound to one database through an immutable
:class:`DatabaseContext`. ``use_database()`` returns a new client and
leaves the original bound to its database.
"""

from __future__ import annotations

import functools
import logging
from dataclasses import dataclass, field, replace
from typing import Any, Optional

from .auth import ApiKeyAuth
from .builders import RecordBuilder, TableBuilder
from .cache import TTLCache
from .config import BolticConfig
from .context import DEFAULT_CONTEXT, DatabaseContext
from .errors import DatabaseSelectionError
from .resources import (
    ColumnResource,
    DatabaseResource,
    IndexResource,
    RecordResource,
    SqlResource,
    TableResource,
)
from .responses import is_error
from .transport import HttpTransport

logger = logging.getLogger(__name__)


class _BoundResource:
    """Resource wrapper that passes a fixed table name as first argument."""

    def __init__(self, resource: Any, table: str) -> None:
        self._resource = resource
        self._table = table

    def __getattr__(self, name: str) -> Any:
        attr = getattr(self._resource, name)
        if name.startswith("_") or not callable(attr):
            return attr
        return functools.partial(attr, self._table)

    def __repr__(self) -> str:
        return f"<{type(self._resource).__name__} bound to {self._table!r}>"


@dataclass(frozen=True)
class TableScope:
    """Column, record and index operations for one table."""

    client: "BolticClient" = field(repr=False)
    table: str

    @property
    def columns(self) -> Any:
        return _BoundResource(self.client.columns, self.table)

    @property
    def records(self) -> Any:
        return _BoundResource(self.client.records, self.table)

    @property
    def indexes(self) -> Any:
        return _BoundResource(self.client.indexes, self.table)

    def record(self) -> RecordBuilder:
        return self.client.record(self.table)


@dataclass
class BolticClient:
    """Entry point bundling config, auth, transport and the table-id cache."""

    config: BolticConfig
    auth: Optional[ApiKeyAuth] = None
    context: DatabaseContext = DEFAULT_CONTEXT
    transport: Optional[HttpTransport] = None
    cache: Optional[TTLCache] = field(default=None, repr=False)

    def __post_init__(self) -> None:
        if self.auth is None:
            self.auth = ApiKeyAuth(self.config)
        if self.transport is None:
            self.transport = HttpTransport(self.config, self.auth)
        if self.cache is None:
            self.cache = TTLCache(
                ttl_seconds=self.config.cache_ttl_seconds,
                max_entries=self.config.cache_max_entries,
            )

    @classmethod
    def from_env(cls) -> "BolticClient":
        return cls(BolticConfig.from_env())

    # ------------------------------------------------------------------
    # Resources
    # ------------------------------------------------------------------

    @property
    def tables(self) -> TableResource:
        return TableResource(self.transport, self.context, self.cache)

    @property
    def columns(self) -> ColumnResource:
        return ColumnResource(self.transport, self.context, self.cache)

    @property
    def records(self) -> RecordResource:
        return RecordResource(self.transport, self.context, self.cache)

    @property
    def indexes(self) -> IndexResource:
        return IndexResource(self.transport, self.context, self.cache)

    @property
    def sql(self) -> SqlResource:
        return SqlResource(self.transport, self.context, self.cache)

    @property
    def databases(self) -> DatabaseResource:
        return DatabaseResource(self.transport, DEFAULT_CONTEXT, self.cache)

    def table(self, name: str) -> TableBuilder:
        return TableBuilder(name, resource=self.tables)

    def record(self, table: str) -> RecordBuilder:
        return RecordBuilder(table, resource=self.records)

    def from_table(self, table: str) -> TableScope:
        return TableScope(self, table)

    # ------------------------------------------------------------------
    # Database selection
    # ------------------------------------------------------------------

    @property
    def current_database(self) -> DatabaseContext:
        return self.context

    def with_database_id(
        self, db_id: Optional[str], db_internal_name: Optional[str] = None
    ) -> "BolticClient":
        """Return a client bound to ``db_id`` (None means the default database)."""
        return replace(self, context=DatabaseContext(db_id or None, db_internal_name))

    async def use_database(self, db_internal_name: Optional[str] = None) -> "BolticClient":
        """Return a client bound to the database with this internal name.

        ``None`` returns a client for the account's default database.
        Raises DatabaseSelectionError if the name cannot be resolved.
        """
        if not db_internal_name:
            return self.with_database_id(None)

        found = await self.databases.find_one(db_internal_name)
        if is_error(found):
            raise DatabaseSelectionError(found)

        db = found["data"]
        logger.debug("Switching to database %r (%s)", db_internal_name, db.get("id"))
        return self.with_database_id(str(db["id"]), db.get("db_internal_name") or db_internal_name)

    # ------------------------------------------------------------------
    # Basic health
    # ------------------------------------------------------------------

    async def ping(self) -> bool:
        """Local check that an API key and a base URL are configured."""
        return bool(self.auth.is_configured and self.config.base_url)

    async def test_connection(self) -> bool:
        """Round-trip check: list a single table."""
        result = await self.tables.find_all(limit=1)
        return not is_error(result)
