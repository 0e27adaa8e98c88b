# Boltic Databases SDK
# File: config.py
# Version: v2

"""Configuration loading for the Boltic Databases SDK."""

from __future__ import annotations

from dataclasses import dataclass, field
import os
from typing import Dict, Optional

from .errors import ConfigurationError

DEFAULT_ENVIRONMENT = "prod"
DEFAULT_REGION = "asia-south1"

_SERVICE_PATH = "/service/panel/boltic-tables"

# region -> environment -> (base URL, default timeout in seconds)
REGION_CONFIGS: Dict[str, Dict[str, tuple[str, float]]] = {
    "asia-south1": {
        "local": ("http://localhost:8000", 30.0),
        "sit": ("https://asia-south1.api.fcz0.de" + _SERVICE_PATH, 15.0),
        "uat": ("https://asia-south1.api.uat.fcz0.de" + _SERVICE_PATH, 15.0),
        "prod": ("https://asia-south1.api.boltic.io" + _SERVICE_PATH, 10.0),
    },
    "us-central1": {
        "local": ("http://localhost:8000", 30.0),
        "sit": ("https://us-central1.api.fcz0.de" + _SERVICE_PATH, 15.0),
        "uat": ("https://us-central1.api.uat.fcz0.de" + _SERVICE_PATH, 15.0),
        "prod": ("https://us-central1.api.boltic.io" + _SERVICE_PATH, 10.0),
    },
}


def _parse_bool_env(name: str, default: bool = False) -> bool:
    """Parse a boolean-like environment variable.

    Accepts 1/0, true/false, yes/no, on/off (case-insensitive).
    """
    val = os.getenv(name)
    if val is None:
        return default
    return str(val).strip().lower() in {"1", "true", "yes", "on"}


def _parse_int_env(
    name: str,
    default: int,
    min_value: int | None = None,
    max_value: int | None = None,
) -> int:
    """Parse an int environment variable with clamping and safe fallback."""
    raw = os.getenv(name)
    if raw is None or not str(raw).strip():
        value = int(default)
    else:
        try:
            value = int(str(raw).strip())
        except ValueError:
            value = int(default)

    if min_value is not None and value < min_value:
        value = min_value
    if max_value is not None and value > max_value:
        value = max_value

    return value


def _parse_float_env(name: str, default: Optional[float]) -> Optional[float]:
    raw = os.getenv(name)
    if raw is None or not str(raw).strip():
        return default
    try:
        value = float(str(raw).strip())
    except ValueError:
        return default
    return value if value > 0 else default


def resolve_base_url(environment: str, region: str) -> tuple[str, float]:
    """Return ``(base_url, default_timeout)`` for a region/environment pair."""
    region_config = REGION_CONFIGS.get(region)
    if region_config is None:
        raise ConfigurationError(f"Unsupported region: {region}")

    env_config = region_config.get(environment)
    if env_config is None:
        raise ConfigurationError(
            f"Unsupported environment: {environment} for region: {region}"
        )
    return env_config


@dataclass(frozen=True)
class BolticConfig:
    """Configuration values required to talk to the Boltic Tables API.

    Instances are immutable; use ``dataclasses.replace`` to derive a
    variant (for example with debug switched on).
    """

    api_key: Optional[str] = field(default=None, repr=False)
    environment: str = DEFAULT_ENVIRONMENT
    region: str = DEFAULT_REGION

    # Overrides the region/environment table when set.
    base_url_override: Optional[str] = None

    # None means "use the environment's default timeout".
    timeout_seconds: Optional[float] = None
    debug: bool = False
    verify_tls: bool = True

    # Extra headers sent with every request.
    headers: Dict[str, str] = field(default_factory=dict)

    # Table-name -> table-id resolution cache.
    cache_ttl_seconds: int = 60
    cache_max_entries: int = 256

    # Upper bound for page_size on list calls.
    max_page_size: int = 1000

    def __post_init__(self) -> None:
        if not self.base_url_override:
            # Fail early on a typo in region/environment.
            resolve_base_url(self.environment, self.region)

    @property
    def base_url(self) -> str:
        """API root including the version segment, without trailing slash."""
        if self.base_url_override:
            root = self.base_url_override.rstrip("/")
        else:
            root = resolve_base_url(self.environment, self.region)[0]
        return f"{root}/v1"

    @property
    def timeout(self) -> float:
        if self.timeout_seconds is not None:
            return float(self.timeout_seconds)
        if self.base_url_override:
            return 30.0
        return resolve_base_url(self.environment, self.region)[1]

    @classmethod
    def from_env(cls) -> "BolticConfig":
        """Create configuration from environment variables."""
        api_key = os.getenv("BOLTIC_API_KEY")
        environment = (os.getenv("BOLTIC_ENVIRONMENT") or DEFAULT_ENVIRONMENT).strip().lower()
        region = (os.getenv("BOLTIC_REGION") or DEFAULT_REGION).strip().lower()
        base_url_override = os.getenv("BOLTIC_BASE_URL") or None

        debug = _parse_bool_env("BOLTIC_DEBUG", default=False)
        verify_tls = _parse_bool_env("BOLTIC_VERIFY_TLS", default=True)
        timeout_seconds = _parse_float_env("BOLTIC_TIMEOUT_SECONDS", default=None)

        cache_ttl_seconds = _parse_int_env(
            "BOLTIC_CACHE_TTL_SECONDS", default=60, min_value=0, max_value=86400
        )
        cache_max_entries = _parse_int_env(
            "BOLTIC_CACHE_MAX_ENTRIES", default=256, min_value=0, max_value=10000
        )
        max_page_size = _parse_int_env(
            "BOLTIC_MAX_PAGE_SIZE", default=1000, min_value=1, max_value=10000
        )

        return cls(
            api_key=api_key,
            environment=environment,
            region=region,
            base_url_override=base_url_override,
            timeout_seconds=timeout_seconds,
            debug=debug,
            verify_tls=verify_tls,
            cache_ttl_seconds=cache_ttl_seconds,
            cache_max_entries=cache_max_entries,
            max_page_size=max_page_size,
        )
