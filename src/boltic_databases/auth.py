# Boltic Databases SDK
# File: auth.py
# Version: v2

"""API-key authentication for the Boltic Tables API."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict

from .config import BolticConfig
from .errors import ConfigurationError

TOKEN_HEADER = "x-boltic-token"
USER_AGENT = "boltic-databases-python"


@dataclass
class ApiKeyAuth:
    """Builds request headers from the configured API key.

    The key is sent in the ``x-boltic-token`` header on every call. It is
    never included in ``repr()`` or diagnostics output.
    """

    config: BolticConfig
    _api_key: str = field(init=False, repr=False, default="")

    def __post_init__(self) -> None:
        self._api_key = (self.config.api_key or "").strip()

    def __repr__(self) -> str:
        return f"ApiKeyAuth(api_key={self.masked_key!r})"

    @property
    def is_configured(self) -> bool:
        return bool(self._api_key)

    @property
    def masked_key(self) -> str:
        if not self._api_key:
            return ""
        if len(self._api_key) <= 8:
            return "*" * len(self._api_key)
        return f"{self._api_key[:4]}...{self._api_key[-4:]}"

    def validate(self) -> bool:
        """Local shape check only; the service is not contacted."""
        key = self._api_key
        return len(key) >= 10 and not any(ch.isspace() for ch in key)

    def headers(self) -> Dict[str, str]:
        """Return the auth + content headers for a JSON request."""
        if not self._api_key:
            raise ConfigurationError(
                "Boltic API key is not configured. "
                "Set BOLTIC_API_KEY or pass api_key to BolticConfig."
            )

        headers = {
            "Content-Type": "application/json",
            "Accept": "application/json",
            "User-Agent": USER_AGENT,
        }
        headers.update(self.config.headers)
        headers[TOKEN_HEADER] = self._api_key
        return headers
