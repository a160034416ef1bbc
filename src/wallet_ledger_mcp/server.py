"""
MCP server for a wallet ledger.

Exposes scoped ledger queries, balances, analytics and export through the
Model Context Protocol.
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict, Optional

from mcp.server import Server
from mcp.server.stdio import stdio_server
from mcp.types import TextContent, Tool

from wallet_ledger_mcp.core.exceptions import DataSourceError
from wallet_ledger_mcp.core.source import JsonLedgerSource, TransactionSource
from wallet_ledger_mcp.tools.tools import LedgerTools, create_tool_schemas

logger = logging.getLogger(__name__)


class LedgerServer:
    """MCP server for wallet ledger data."""

    def __init__(
        self,
        ledger_path: Optional[Path] = None,
        source: Optional[TransactionSource] = None,
        **tool_options: Any,
    ):
        """
        Initialize the MCP server.

        Args:
            ledger_path: Optional path to a JSON ledger file.
                    If None, uses ~/.wallet-ledger/ledger.json.
            source: Transaction source to use instead of a ledger file
            **tool_options: Options passed on to LedgerTools
                    (currency_code, currency_symbol, country_code, default_page_size)
        """
        self.source: TransactionSource = source or JsonLedgerSource(ledger_path)
        self.tools = LedgerTools(self.source, **tool_options)
        self.server = Server("wallet-ledger-mcp")

        # Register handlers
        self._register_handlers()

    def handle_tool(self, name: str, arguments: Dict[str, Any]) -> str:
        """
        Run a tool by name and render its response text.

        Error states are kept distinct: an unavailable or failing data source
        is never reported as an empty result.
        """
        if not self.source.is_available():
            return (
                "Ledger data not available. Please provide a valid ledger file "
                "with --ledger-path."
            )

        try:
            if name == "get_wallet":
                result = self.tools.get_wallet(**arguments)
            elif name == "get_transactions":
                result = self.tools.get_transactions(**arguments)
            elif name == "get_analytics":
                result = self.tools.get_analytics(**arguments)
            elif name == "export_transactions":
                result = self.tools.export_transactions(**arguments)
            elif name == "get_transaction":
                result = self.tools.get_transaction(**arguments)
            else:
                return f"Unknown tool: {name}"

            return json.dumps(result, indent=2, ensure_ascii=False)

        except DataSourceError as e:
            logger.error("Data source error in tool %s: %s", name, e)
            return f"Data source error: {e}"
        except ValueError as e:
            # Invalid arguments, unknown transaction, validation errors
            return f"Error: {e}"
        except Exception as e:
            logger.exception(f"Error executing tool {name}")
            return f"Error executing tool: {e}"

    def _register_handlers(self) -> None:
        """Register MCP protocol handlers."""

        @self.server.list_tools()
        async def list_tools() -> list[Tool]:
            """List available tools."""
            return [
                Tool(
                    name=schema["name"],
                    description=schema["description"],
                    inputSchema=schema["inputSchema"],
                )
                for schema in create_tool_schemas()
            ]

        @self.server.call_tool()
        async def call_tool(name: str, arguments: dict[str, Any]) -> list[TextContent]:
            """Handle tool calls."""
            return [TextContent(type="text", text=self.handle_tool(name, arguments or {}))]

    async def run(self) -> None:  # pragma: no cover
        """Run the MCP server using stdio transport."""
        async with stdio_server() as (read_stream, write_stream):
            await self.server.run(
                read_stream,
                write_stream,
                self.server.create_initialization_options(),
            )


async def run_server(
    ledger_path: Optional[Path] = None, **tool_options: Any
) -> None:  # pragma: no cover
    """
    Run the wallet ledger MCP server.

    Args:
        ledger_path: Optional path to a JSON ledger file.
                If None, uses ~/.wallet-ledger/ledger.json.
        **tool_options: Options passed on to LedgerTools
    """
    server = LedgerServer(ledger_path, **tool_options)
    await server.run()
