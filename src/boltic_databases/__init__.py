# Boltic Databases SDK
# File: __init__.py
# Version: v1

"""Top-level package for the Boltic Databases Python SDK."""

from __future__ import annotations

from importlib.metadata import PackageNotFoundError, version

from .client import BolticClient
from .config import BolticConfig
from .context import DatabaseContext
from .errors import (
    BolticError,
    ConfigurationError,
    DatabaseSelectionError,
    FilterValidationError,
    SqlGenerationError,
    UnsupportedOperatorError,
)
from .filters import FilterBuilder, create_filter, from_where, to_where, validate
from .models import FieldDefinition
from .responses import is_error, is_list_result, normalize

__all__ = [
    "__version__",
    "BolticClient",
    "BolticConfig",
    "BolticError",
    "ConfigurationError",
    "DatabaseContext",
    "DatabaseSelectionError",
    "FieldDefinition",
    "FilterBuilder",
    "FilterValidationError",
    "SqlGenerationError",
    "UnsupportedOperatorError",
    "create_filter",
    "from_where",
    "is_error",
    "is_list_result",
    "normalize",
    "to_where",
    "validate",
]


def _resolve_version() -> str:
    """Resolve installed distribution version.

    Falls back to a reasonable default when running from source without an
    installed distribution.
    """
    try:
        return version("boltic-databases")
    except PackageNotFoundError:
        return "0.1.0"


__version__ = _resolve_version()
