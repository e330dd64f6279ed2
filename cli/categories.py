#!/usr/bin/env python3

import asyncio
import sys

from errors import TransportError
from logger import get_logger

logger = get_logger()


def cmd_list(args, services):
    """List the categories transactions can be assigned to."""
    try:
        categories = asyncio.run(_fetch(services, args.all))
    except TransportError as e:
        logger.error(f"Error fetching categories: {e}")
        sys.exit(1)

    if not categories:
        logger.info("No categories found.")
        return

    logger.info("\nCategories:")
    logger.info("=" * 80)
    for category in categories:
        flags = []
        if category.archived:
            flags.append("archived")
        if category.is_group:
            flags.append("group")
        suffix = f" [{', '.join(flags)}]" if flags else ""
        logger.info(f"ID: {category.id}  Name: {category.name}{suffix}")
        if category.description:
            logger.info(f"  Description: {category.description}")

    logger.info(f"\nTotal categories: {len(categories)}")


async def _fetch(services, include_inactive):
    try:
        if include_inactive:
            return await services.categories.fetch_all()
        return await services.categories.fetch_active()
    finally:
        await services.aclose()


def setup_parser(subparsers):
    """Setup categories subcommand parser.

    Args:
        subparsers: The subparsers object from the main CLI
    """
    parser = subparsers.add_parser(
        "categories",
        help="Inspect ledger categories",
        description="List the categories available in the ledger",
    )

    categories_subparsers = parser.add_subparsers(
        title="subcommands",
        description="Available category commands",
        dest="subcommand",
        required=True,
    )

    # categories list
    list_parser = categories_subparsers.add_parser("list", help="List active categories")
    list_parser.add_argument(
        "--all",
        action="store_true",
        help="Include archived categories and category groups",
    )
    list_parser.set_defaults(func=cmd_list)
