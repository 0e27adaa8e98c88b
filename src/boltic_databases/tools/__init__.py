# Boltic Databases SDK
# File: tools/__init__.py
# Version: v2

"""MCP tools exposing the SDK to language-model clients."""

from __future__ import annotations

from .tasks import register_tools

__all__ = ["register_tools"]
