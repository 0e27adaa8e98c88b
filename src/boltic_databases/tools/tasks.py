# Boltic Databases SDK
# File: tools/tasks.py
# Version: v4
#
# NOTE: This module is the single place where SDK calls are turned into
# MCP tools. The stdio transport simply calls `register_tools(server)` to
# wire these up. Every task returns a JSON-friendly dict and reports
# failures as {"ok": False, "error": {...}} instead of raising.

from __future__ import annotations

import time
from typing import Any, Dict, List, Optional

from ..auth import ApiKeyAuth
from ..cache import TTLCache
from ..client import BolticClient
from ..config import BolticConfig
from ..errors import BolticError, ConfigurationError
from ..responses import Result, is_error, is_list_result


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------


def _make_error(
    code: str,
    message: str,
    details: Optional[Dict[str, Any]] = None,
) -> Dict[str, Any]:
    """Small, LLM-friendly error shape used by the tools."""
    err: Dict[str, Any] = {"code": code, "message": message}
    if details:
        err["details"] = details
    return err


def _cap_int(value: Any, cap: int, min_value: int = 1) -> tuple[int, bool]:
    """Clamp an integer to [min_value, cap]. Returns (effective, cap_applied)."""
    try:
        v = int(value)
    except (TypeError, ValueError):
        v = min_value

    if v < min_value:
        return min_value, True

    if cap > 0 and v > cap:
        return cap, True

    return v, False


_CACHE: TTLCache | None = None
_CACHE_SIGNATURE: tuple[int, int] | None = None


def _get_cache(cfg: BolticConfig) -> TTLCache:
    """Lazily create (or re-create) the shared table-id cache based on config."""
    global _CACHE, _CACHE_SIGNATURE

    signature = (int(cfg.cache_ttl_seconds), int(cfg.cache_max_entries))
    if _CACHE is None or _CACHE_SIGNATURE != signature:
        _CACHE = TTLCache(ttl_seconds=signature[0], max_entries=signature[1])
        _CACHE_SIGNATURE = signature
    return _CACHE


def _make_client(cfg: Optional[BolticConfig] = None) -> BolticClient:
    """Create a BolticClient from environment variables.

    The client shares a process-wide table-id cache so repeated tool calls
    do not re-resolve table names.

    Note: Callers should prefer invoking this with *no arguments* to keep
    unit tests monkeypatch-friendly.
    """
    cfg = cfg or BolticConfig.from_env()
    return BolticClient(cfg, cache=_get_cache(cfg))


def _error_from_exception(exc: BolticError) -> Dict[str, Any]:
    code = "CONFIG_ERROR" if isinstance(exc, ConfigurationError) else "INVALID_FILTER"
    return _make_error(code, str(exc))


def _tool_result(result: Result, key: str = "data") -> Dict[str, Any]:
    """Flatten a Result envelope into the tool response shape."""
    if is_error(result):
        return {"ok": False, "error": result["error"]}

    out: Dict[str, Any] = {"ok": True, key: result.get("data")}
    if is_list_result(result):
        out["pagination"] = result["pagination"]
    if result.get("message"):
        out["message"] = result["message"]
    return out


# ---------------------------------------------------------------------------
# Tasks
# ---------------------------------------------------------------------------


async def ping() -> Dict[str, Any]:
    try:
        client = _make_client()
    except BolticError as exc:
        return {"ok": False, "error": _error_from_exception(exc)}
    ok = await client.ping()
    return {"ok": bool(ok)}


async def list_tables(
    where: Optional[Dict[str, Any]] = None,
    limit: int = 50,
    offset: int = 0,
) -> Dict[str, Any]:
    try:
        client = _make_client()
        eff_limit, capped = _cap_int(limit, client.config.max_page_size)
        result = await client.tables.find_all(where=where, limit=eff_limit, offset=max(0, int(offset)))
    except BolticError as exc:
        return {"ok": False, "error": _error_from_exception(exc)}

    out = _tool_result(result, "tables")
    out["meta"] = {"limit": eff_limit, "limit_capped": capped}
    return out


async def describe_table(table_name: str) -> Dict[str, Any]:
    """Return the table record together with its columns."""
    try:
        client = _make_client()
        found = await client.tables.find_by_name(table_name)
    except BolticError as exc:
        return {"ok": False, "error": _error_from_exception(exc)}
    if is_error(found):
        return {"ok": False, "error": found["error"]}
    if not found.get("data"):
        return {
            "ok": False,
            "error": _make_error("TABLE_NOT_FOUND", f"Table '{table_name}' not found"),
        }

    columns = await client.columns.find_all(table_name, limit=client.config.max_page_size)
    if is_error(columns):
        return {"ok": False, "table": found["data"], "error": columns["error"]}

    cols: List[Dict[str, Any]] = []
    for col in columns.get("data") or []:
        if not isinstance(col, dict):
            continue
        cols.append(
            {
                "name": col.get("name"),
                "type": col.get("type"),
                "is_nullable": col.get("is_nullable"),
                "is_primary_key": col.get("is_primary_key"),
                "is_unique": col.get("is_unique"),
                "description": col.get("description"),
            }
        )

    return {"ok": True, "table": found["data"], "columns": cols}


async def query_records(
    table_name: str,
    where: Optional[Dict[str, Any]] = None,
    fields: Optional[List[str]] = None,
    sort: Optional[List[Dict[str, str]]] = None,
    limit: int = 20,
    offset: int = 0,
) -> Dict[str, Any]:
    try:
        client = _make_client()
        eff_limit, capped = _cap_int(limit, client.config.max_page_size)
        result = await client.records.find_all(
            table_name,
            where=where,
            fields=fields,
            sort=sort,
            limit=eff_limit,
            offset=max(0, int(offset)),
        )
    except BolticError as exc:
        return {"ok": False, "error": _error_from_exception(exc)}

    out = _tool_result(result, "records")
    out["meta"] = {"table": table_name, "limit": eff_limit, "limit_capped": capped}
    return out


async def execute_sql(query: str) -> Dict[str, Any]:
    try:
        client = _make_client()
        result = await client.sql.execute_sql(query)
    except BolticError as exc:
        return {"ok": False, "error": _error_from_exception(exc)}
    return _tool_result(result, "result")


async def list_databases() -> Dict[str, Any]:
    try:
        client = _make_client()
        result = await client.databases.find_all()
    except BolticError as exc:
        return {"ok": False, "error": _error_from_exception(exc)}
    return _tool_result(result, "databases")


def _collect_config_info() -> Dict[str, Any]:
    """Redacted snapshot of the SDK configuration from env."""
    cfg = BolticConfig.from_env()
    auth = ApiKeyAuth(cfg)

    return {
        "base_url": cfg.base_url,
        "environment": cfg.environment,
        "region": cfg.region,
        "base_url_overridden": bool(cfg.base_url_override),
        "timeout_seconds": cfg.timeout,
        "debug": cfg.debug,
        "verify_tls": cfg.verify_tls,
        "api_key": {
            "configured": auth.is_configured,
            "looks_valid": auth.validate(),
            "masked": auth.masked_key,
        },
        "limits": {"max_page_size": cfg.max_page_size},
        "cache_config": {
            "ttl_seconds": cfg.cache_ttl_seconds,
            "max_entries": cfg.cache_max_entries,
        },
    }


async def get_config_info() -> Dict[str, Any]:
    try:
        return _collect_config_info()
    except BolticError as exc:
        return {"ok": False, "error": _error_from_exception(exc)}


async def diagnostics() -> Dict[str, Any]:
    started = time.time()

    checks: List[Dict[str, Any]] = []
    overall_ok = True

    # Client init
    t0 = time.time()
    try:
        config_info = _collect_config_info()
        client = _make_client()
        checks.append(
            {"name": "client_init", "ok": True, "error": None, "elapsed_ms": int((time.time() - t0) * 1000)}
        )
    except BolticError as exc:
        checks.append(
            {
                "name": "client_init",
                "ok": False,
                "error": _make_error("CONFIG_ERROR", str(exc)),
                "elapsed_ms": int((time.time() - t0) * 1000),
            }
        )
        return {
            "ok": False,
            "config": None,
            "checks": checks,
            "meta": {"elapsed_ms": int((time.time() - started) * 1000)},
        }

    # Ping (local configuration only)
    t0 = time.time()
    ok_ping = await client.ping()
    if not ok_ping:
        overall_ok = False
    checks.append(
        {
            "name": "ping",
            "ok": bool(ok_ping),
            "error": None if ok_ping else _make_error("CONFIG_ERROR", "API key or base URL missing."),
            "elapsed_ms": int((time.time() - t0) * 1000),
        }
    )

    # List tables (round trip)
    t0 = time.time()
    if ok_ping:
        result = await client.tables.find_all(limit=1)
        if is_error(result):
            overall_ok = False
            checks.append(
                {
                    "name": "list_tables",
                    "ok": False,
                    "error": result["error"],
                    "elapsed_ms": int((time.time() - t0) * 1000),
                }
            )
        else:
            checks.append(
                {
                    "name": "list_tables",
                    "ok": True,
                    "count": len(result.get("data") or []),
                    "error": None,
                    "elapsed_ms": int((time.time() - t0) * 1000),
                }
            )

    return {
        "ok": overall_ok,
        "config": config_info,
        "checks": checks,
        "meta": {
            "elapsed_ms": int((time.time() - started) * 1000),
            "cache": client.cache.stats(),
        },
    }


# ---------------------------------------------------------------------------
# MCP tool registration
# ---------------------------------------------------------------------------


def register_tools(server: Any) -> None:
    """Register MCP tools on an MCP Server-like instance."""
    if server is None or not hasattr(server, "tool"):
        raise ValueError(
            "register_tools(server) expects an MCP Server-like object that exposes a .tool() decorator."
        )

    @server.tool(name="boltic_ping", description="Check that the Boltic SDK has an API key and base URL configured.")
    async def mcp_ping() -> Dict[str, Any]:
        return await ping()

    @server.tool(name="boltic_list_tables", description="List tables in the current Boltic database.")
    async def mcp_list_tables(
        where: Optional[Dict[str, Any]] = None,
        limit: int = 50,
        offset: int = 0,
    ) -> Dict[str, Any]:
        return await list_tables(where=where, limit=limit, offset=offset)

    @server.tool(name="boltic_describe_table", description="Show a table and its columns.")
    async def mcp_describe_table(table_name: str) -> Dict[str, Any]:
        return await describe_table(table_name=table_name)

    @server.tool(
        name="boltic_query_records",
        description="Query records of a table with a where mapping such as {\"age\": {\"$gt\": 30}}.",
    )
    async def mcp_query_records(
        table_name: str,
        where: Optional[Dict[str, Any]] = None,
        fields: Optional[List[str]] = None,
        sort: Optional[List[Dict[str, str]]] = None,
        limit: int = 20,
        offset: int = 0,
    ) -> Dict[str, Any]:
        return await query_records(
            table_name=table_name,
            where=where,
            fields=fields,
            sort=sort,
            limit=limit,
            offset=offset,
        )

    @server.tool(name="boltic_execute_sql", description="Run a SQL query against the current Boltic database.")
    async def mcp_execute_sql(query: str) -> Dict[str, Any]:
        return await execute_sql(query=query)

    @server.tool(name="boltic_list_databases", description="List active databases of the account.")
    async def mcp_list_databases() -> Dict[str, Any]:
        return await list_databases()

    @server.tool(name="boltic_get_config_info", description="Show the redacted SDK configuration.")
    async def mcp_get_config_info() -> Dict[str, Any]:
        return await get_config_info()

    @server.tool(name="boltic_diagnostics", description="Run configuration and connectivity checks.")
    async def mcp_diagnostics() -> Dict[str, Any]:
        return await diagnostics()
