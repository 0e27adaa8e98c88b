# Boltic Databases SDK
# File: endpoints.py
# Version: v1

"""Endpoint paths of the Boltic Tables API (relative to ``<base>/v1``)."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Mapping, Optional
from urllib.parse import quote


@dataclass(frozen=True)
class Endpoint:
    path: str
    method: str


TABLE_ENDPOINTS = {
    "list": Endpoint("/tables/list", "POST"),
    "create": Endpoint("/tables", "POST"),
    "get": Endpoint("/tables/{table_id}", "GET"),
    "update": Endpoint("/tables/{table_id}", "PATCH"),
    "delete": Endpoint("/tables/{table_id}", "DELETE"),
}

COLUMN_ENDPOINTS = {
    "list": Endpoint("/tables/{table_id}/fields/list", "POST"),
    "create": Endpoint("/tables/{table_id}/fields", "POST"),
    "get": Endpoint("/tables/{table_id}/fields/{field_id}", "GET"),
    "update": Endpoint("/tables/{table_id}/fields/{field_id}", "PATCH"),
    "delete": Endpoint("/tables/{table_id}/fields/{field_id}", "DELETE"),
}

RECORD_ENDPOINTS = {
    "insert": Endpoint("/tables/{table_id}/records", "POST"),
    "list": Endpoint("/tables/{table_id}/records/list", "POST"),
    "get": Endpoint("/tables/{table_id}/records/{record_id}", "GET"),
    "update": Endpoint("/tables/{table_id}/records", "PATCH"),
    "update_by_id": Endpoint("/tables/{table_id}/records/{record_id}", "PATCH"),
    "delete": Endpoint("/tables/{table_id}/records/list", "DELETE"),
}

DATABASE_ENDPOINTS = {
    "create": Endpoint("/tables/databases", "POST"),
    "list": Endpoint("/tables/databases/list", "POST"),
    "update": Endpoint("/tables/databases/{db_id}", "PATCH"),
    "delete": Endpoint("/tables/databases/{db_id}", "DELETE"),
    "list_jobs": Endpoint("/tables/databases/jobs/list", "POST"),
    "delete_status": Endpoint("/tables/databases/delete-status/{job_id}", "GET"),
}

INDEX_ENDPOINTS = {
    "create": Endpoint("/tables/indexes/{table_id}", "POST"),
    "list": Endpoint("/tables/indexes/{table_id}/list", "POST"),
    "delete": Endpoint("/tables/indexes/{table_id}", "DELETE"),
}

SQL_ENDPOINTS = {
    "text_to_sql": Endpoint("/tables/query/text-to-sql", "POST"),
    "execute": Endpoint("/tables/query/execute", "POST"),
}

_PLACEHOLDER = re.compile(r"\{([^}]+)\}")


def build_endpoint_path(
    endpoint: Endpoint,
    params: Optional[Mapping[str, str]] = None,
) -> str:
    """Fill ``{name}`` placeholders with URL-encoded values."""
    path = endpoint.path
    for key, value in (params or {}).items():
        path = path.replace("{" + key + "}", quote(str(value), safe=""))

    missing = _PLACEHOLDER.findall(path)
    if missing:
        raise ValueError(
            "Missing path parameters: " + ", ".join("{" + m + "}" for m in missing)
        )
    return path
