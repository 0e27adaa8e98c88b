# Boltic Databases SDK
# File: resources/sql.py
# Version: v2

"""Raw SQL execution and natural-language to SQL generation."""

from __future__ import annotations

from typing import Any, AsyncIterator, Dict, List, Optional

from ..endpoints import SQL_ENDPOINTS
from ..errors import SqlGenerationError
from ..responses import Result, is_error, success
from .base import BaseResource, validation_error


def _chunks(data: Any) -> List[str]:
    if data is None:
        return []
    if isinstance(data, (list, tuple)):
        return [str(c) for c in data if c is not None]
    return [str(data)]


def collect_chunks(data: Any) -> str:
    """Join text-to-SQL output (one string or a list of chunks) in order."""
    return "".join(_chunks(data))


class SqlResource(BaseResource):
    """SQL endpoints of the bound database."""

    async def execute_sql(self, query: str) -> Result:
        if not query or not str(query).strip():
            return validation_error("query must not be empty", "query")
        return await self._call(SQL_ENDPOINTS["execute"], json={"query": query})

    async def _generate(self, prompt: str, current_query: Optional[str]) -> Result:
        if not prompt or not str(prompt).strip():
            return validation_error("prompt must not be empty", "prompt")

        body: Dict[str, Any] = {"prompt": prompt}
        if current_query is not None:
            body["current_query"] = current_query
        return await self._call(SQL_ENDPOINTS["text_to_sql"], json=body)

    async def text_to_sql(self, prompt: str, current_query: Optional[str] = None) -> Result:
        """Generate SQL from ``prompt``; ``data`` is the SQL string."""
        result = await self._generate(prompt, current_query)
        if is_error(result):
            return result
        return success(collect_chunks(result.get("data")), result.get("message"))

    async def stream_text_to_sql(
        self, prompt: str, current_query: Optional[str] = None
    ) -> AsyncIterator[str]:
        """Yield generated SQL chunk by chunk.

        Raises SqlGenerationError (carrying the envelope) when the request
        fails, before any chunk is yielded.
        """
        result = await self._generate(prompt, current_query)
        if is_error(result):
            raise SqlGenerationError(result)
        for chunk in _chunks(result.get("data")):
            yield chunk
