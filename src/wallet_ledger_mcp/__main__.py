"""
CLI entry point for wallet ledger MCP server.
"""

import argparse
import asyncio
import logging
import sys
from pathlib import Path

from wallet_ledger_mcp.server import run_server


def build_parser() -> argparse.ArgumentParser:
    """Build the command-line parser."""
    parser = argparse.ArgumentParser(
        description="Wallet Ledger MCP Server - Expose wallet transactions through MCP"
    )
    parser.add_argument(
        "--ledger-path",
        type=Path,
        help="Path to JSON ledger file (default: ~/.wallet-ledger/ledger.json)",
    )
    parser.add_argument(
        "--currency-code",
        default="INR",
        help="Currency code reported with wallet balances (default: INR)",
    )
    parser.add_argument(
        "--currency-symbol",
        default="₹",
        help="Currency symbol prefixed to exported amounts (default: ₹)",
    )
    parser.add_argument(
        "--country-code",
        default="+91",
        help="Phone country code ignored when searching by phone (default: +91)",
    )
    parser.add_argument(
        "--page-size",
        type=int,
        default=10,
        help="Default number of transactions per page (default: 10)",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Enable verbose logging",
    )
    return parser


def main() -> None:
    """Main entry point for the CLI."""
    args = build_parser().parse_args()

    if args.page_size < 1:
        print("--page-size must be 1 or greater", file=sys.stderr)
        sys.exit(2)

    # Configure logging
    log_level = logging.DEBUG if args.verbose else logging.INFO
    logging.basicConfig(
        level=log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        stream=sys.stderr,  # MCP uses stdout for protocol, so log to stderr
    )

    # Run the server
    try:
        asyncio.run(
            run_server(
                ledger_path=args.ledger_path,
                currency_code=args.currency_code,
                currency_symbol=args.currency_symbol,
                country_code=args.country_code,
                default_page_size=args.page_size,
            )
        )
    except KeyboardInterrupt:
        logging.info("Server stopped by user")
        sys.exit(0)
    except Exception as e:
        logging.exception(f"Server error: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
