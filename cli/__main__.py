#!/usr/bin/env python3
"""
Categorizer CLI - assisted categorization of Lunch Money transactions.

Usage:
    python -m cli <command> <subcommand> [options]

Commands:
    transactions Review and categorize uncategorized transactions
    categories   Inspect ledger categories
    models       Show supported providers and models

Examples:
    python -m cli transactions categorize
    python -m cli transactions categorize --start 2024-01-01 --end 2024-02-29
    python -m cli transactions categorize --provider anthropic --model claude-3-5-haiku-latest
    python -m cli transactions list
    python -m cli categories list
    python -m cli models list --provider openai
"""

import sys
import argparse
from cli import categories, models, transactions
from config import load_config
from errors import CategorizerError
from services.base import Services
from logger import setup_logging


def main():
    """Main CLI entry point with subcommands."""
    parser = argparse.ArgumentParser(
        prog="cli",
        description="Categorizer - AI-assisted transaction categorization",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    subparsers = parser.add_subparsers(
        title="commands",
        description="Available commands",
        dest="command",
        required=True,
    )

    transactions.setup_parser(subparsers)
    categories.setup_parser(subparsers)
    models.setup_parser(subparsers)

    args = parser.parse_args()

    if hasattr(args, "func"):
        try:
            config = load_config()
            setup_logging(config)

            # Commands that talk to the ledger get a services container
            if args.command in ("transactions", "categories"):
                services = Services(config)
                args.func(args, services)
            else:
                args.func(args)
        except CategorizerError as e:
            print(f"Error: {e}")
            sys.exit(1)
    else:
        parser.print_help()
        sys.exit(1)


if __name__ == "__main__":
    main()
