# Boltic Databases SDK
# File: errors.py
# Version: v1

"""Exception types raised by the SDK.

Only local, caller-side mistakes are raised (bad filters, bad config).
Failures reported by the remote service are returned as error envelopes,
see :mod:`boltic_databases.responses`.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional


class BolticError(Exception):
    """Base class for all SDK exceptions."""


class UnsupportedOperatorError(BolticError, ValueError):
    """A filter used an operator key or wire operator outside the known set."""

    def __init__(self, operator: str, message: Optional[str] = None) -> None:
        self.operator = operator
        super().__init__(message or f"Unsupported operator: {operator}")


class FilterValidationError(BolticError, ValueError):
    """One or more filters are structurally invalid.

    All violations found in a single pass are kept on ``violations``.
    """

    def __init__(self, violations: List[str]) -> None:
        self.violations = list(violations)
        joined = "; ".join(self.violations) or "invalid filter"
        super().__init__(f"Invalid filters: {joined}")


class ConfigurationError(BolticError, RuntimeError):
    """SDK configuration is incomplete or points at an unknown deployment."""


class DatabaseSelectionError(BolticError, LookupError):
    """``use_database`` could not resolve the database; ``result`` holds the envelope."""

    def __init__(self, result: Dict[str, Any]) -> None:
        self.result = result
        error = result.get("error") or {}
        super().__init__(error.get("message") or "Database could not be selected")


class SqlGenerationError(BolticError):
    """Text-to-SQL streaming failed; ``result`` holds the error envelope."""

    def __init__(self, result: Dict[str, Any]) -> None:
        self.result = result
        error = result.get("error") or {}
        super().__init__(error.get("message") or "Text-to-SQL generation failed")
