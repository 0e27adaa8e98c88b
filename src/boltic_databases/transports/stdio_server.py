# Boltic Databases SDK
# File: transports/stdio_server.py
# Version: v2

"""STDIO entrypoint for the Boltic Databases MCP server.

This is the script behind the ``boltic-databases-mcp`` console command.

It creates a FastMCP server, registers the Boltic tools and runs the
built-in stdio transport.
"""

from __future__ import annotations

import logging

from mcp.server.fastmcp import FastMCP

from ..config import _parse_bool_env
from ..tools import tasks


def main() -> None:
    """Synchronous entrypoint for console_scripts."""
    # stdout carries the MCP protocol; logs go to stderr.
    logging.basicConfig(
        level=logging.DEBUG if _parse_bool_env("BOLTIC_DEBUG") else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    mcp = FastMCP("boltic-databases")

    # Register MCP tools (ping, list_tables, query_records, …)
    tasks.register_tools(mcp)

    # Let FastMCP handle stdio + event loop setup.
    mcp.run()


if __name__ == "__main__":
    main()
