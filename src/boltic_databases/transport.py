# Boltic Databases SDK
# File: transport.py
# Version: v3

"""HTTP transport: sends one request and returns a normalized envelope.

Network failures never escape as exceptions; they come back as an error
envelope with code ``NETWORK_ERROR`` so callers only ever branch on
``is_error(result)``.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional

import httpx
from httpx import RequestError

from .auth import ApiKeyAuth
from .config import BolticConfig
from .context import DEFAULT_CONTEXT, DatabaseContext
from .responses import Result, error_result, is_error, normalize

logger = logging.getLogger(__name__)


def _decode_body(response: httpx.Response) -> Any:
    if not response.content:
        return {}
    try:
        return response.json()
    except ValueError:
        # Not JSON (HTML error page, plain text); the normalizer decides.
        return None


@dataclass
class HttpTransport:
    """Executes requests against ``config.base_url`` with API-key auth.

    ``http_transport`` lets callers plug a custom httpx transport, e.g.
    ``httpx.MockTransport`` in tests.
    """

    config: BolticConfig
    auth: ApiKeyAuth
    http_transport: Optional[httpx.AsyncBaseTransport] = None

    def __repr__(self) -> str:
        return f"HttpTransport(base_url={self.config.base_url!r})"

    async def request(
        self,
        method: str,
        path: str,
        *,
        json: Any = None,
        params: Optional[Mapping[str, Any]] = None,
        context: DatabaseContext = DEFAULT_CONTEXT,
    ) -> Result:
        url = f"{self.config.base_url}{path}"
        headers = self.auth.headers()

        query: Dict[str, Any] = dict(params or {})
        query.update(context.query_params())

        logger.debug("%s %s params=%s", method, path, sorted(query))

        async with httpx.AsyncClient(
            timeout=self.config.timeout,
            verify=self.config.verify_tls,
            transport=self.http_transport,
        ) as http_client:
            try:
                response = await http_client.request(
                    method,
                    url,
                    headers=headers,
                    json=json,
                    params=query or None,
                )
            except RequestError as exc:
                logger.warning("Request %s %s failed: %s", method, path, exc)
                return error_result(
                    "NETWORK_ERROR",
                    f"Error calling Boltic API at '{url}': {exc}",
                    [f"{method} {path}", type(exc).__name__],
                )

        result = normalize(_decode_body(response), response.status_code)

        if is_error(result) and self.config.debug:
            logger.warning(
                "%s %s returned HTTP %s: %s. Response snippet: %s",
                method,
                path,
                response.status_code,
                result["error"].get("message"),
                response.text[:500],
            )

        return result
