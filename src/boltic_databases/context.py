# Boltic Databases SDK
# File: context.py
# Version: v1

"""Database selection for API calls.

A context is an immutable value. Clients hold one and pass it to every
request; switching database means building a new client around a new
context, so two databases can be used side by side from one process.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Optional


@dataclass(frozen=True)
class DatabaseContext:
    """Which database requests target.

    ``db_id`` empty or None lets the API fall back to the account's
    default database.
    """

    db_id: Optional[str] = None
    db_internal_name: Optional[str] = None

    @property
    def is_default(self) -> bool:
        return not self.db_id

    def query_params(self) -> Dict[str, str]:
        if not self.db_id:
            return {}
        return {"db_id": self.db_id}

    def cache_scope(self) -> str:
        return self.db_id or ""


DEFAULT_CONTEXT = DatabaseContext()
