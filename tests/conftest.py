# Boltic Databases SDK
# File: tests/conftest.py
# Version: v1

"""Shared fixtures: a scripted fake of the Tables API behind httpx.MockTransport."""

from __future__ import annotations

import json
from typing import Any, Dict, List, Tuple

import httpx
import pytest

from boltic_databases.auth import ApiKeyAuth
from boltic_databases.client import BolticClient
from boltic_databases.config import BolticConfig
from boltic_databases.transport import HttpTransport

BASE_URL = "https://api.boltic.test"
API_KEY = "test-api-key-1234567890"


class FakeApi:
    """Answers requests from canned responses and records every call.

    Routes are keyed by (method, path) where path is relative to ``/v1``.
    Several responses on one route are served in order; the last one is
    then repeated.
    """

    def __init__(self) -> None:
        self.routes: Dict[Tuple[str, str], List[Tuple[int, Any]]] = {}
        self.calls: List[Dict[str, Any]] = []

    def add(self, method: str, path: str, body: Any, status: int = 200) -> None:
        self.routes.setdefault((method.upper(), path), []).append((status, body))

    def add_table(self, name: str, table_id: str, **extra: Any) -> None:
        """Make table-name lookups for ``name`` resolve to ``table_id``."""
        table = dict({"id": table_id, "name": name}, **extra)
        self.add(
            "POST",
            "/tables/list",
            {
                "data": [table],
                "pagination": {"total_count": 1, "per_page": 1, "current_page": 1},
            },
        )

    def calls_to(self, method: str, path: str) -> List[Dict[str, Any]]:
        return [c for c in self.calls if c["method"] == method and c["path"] == path]

    def handler(self, request: httpx.Request) -> httpx.Response:
        path = request.url.path
        if path.startswith("/v1"):
            path = path[len("/v1"):]

        body = json.loads(request.content) if request.content else None
        self.calls.append(
            {
                "method": request.method,
                "path": path,
                "json": body,
                "params": dict(request.url.params),
                "headers": dict(request.headers),
            }
        )

        queue = self.routes.get((request.method, path))
        if not queue:
            return httpx.Response(
                404,
                json={"error": {"code": "ROUTE_NOT_FOUND", "message": f"{request.method} {path}", "meta": []}},
            )

        status, payload = queue.pop(0) if len(queue) > 1 else queue[0]
        if isinstance(payload, (bytes, str)):
            return httpx.Response(status, content=payload)
        return httpx.Response(status, json=payload)


def make_config(**overrides: Any) -> BolticConfig:
    values: Dict[str, Any] = {"api_key": API_KEY, "base_url_override": BASE_URL}
    values.update(overrides)
    return BolticConfig(**values)


def make_client(api: FakeApi, **config_overrides: Any) -> BolticClient:
    config = make_config(**config_overrides)
    auth = ApiKeyAuth(config)
    transport = HttpTransport(config, auth, http_transport=httpx.MockTransport(api.handler))
    return BolticClient(config, auth=auth, transport=transport)


@pytest.fixture
def api() -> FakeApi:
    return FakeApi()


@pytest.fixture
def client(api: FakeApi) -> BolticClient:
    return make_client(api)
