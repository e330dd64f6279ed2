#!/usr/bin/env python3

import asyncio
import signal
import sys
from datetime import date

from categorization.events import EventStream
from categorization.orchestrator import Orchestrator, RunState
from cli.presenter import TerminalPresenter
from config import default_date_range
from errors import ConfigurationError, TransportError
from llm import get_suggestion_provider
from logger import get_logger

logger = get_logger()


def cmd_categorize(args, services):
    """Interactively categorize uncategorized transactions with model suggestions.

    Args:
        args: Parsed command-line arguments with optional start, end, provider, model
        services: Services container with categories and transactions services
    """
    start, end = _date_range(args, services.config)

    # Raises ConfigurationError before any network activity
    try:
        provider = get_suggestion_provider(services.config, args.provider, args.model)
    except ConfigurationError:
        asyncio.run(services.aclose())
        raise

    events = EventStream()
    events.subscribe(
        on_progress=lambda p: logger.debug(f"Progress: {p.completed}/{p.total} ({p.percent:.0f}%)")
    )
    orchestrator = Orchestrator(
        services.categories,
        services.transactions,
        provider,
        TerminalPresenter(),
        events=events,
    )

    summary = asyncio.run(_run(orchestrator, services, provider, start, end))

    logger.info("-" * 80)
    logger.info(
        f"Committed: {summary.committed}  Skipped: {summary.skipped}  "
        f"Failed: {summary.failed}  Total: {summary.total}"
    )
    if summary.state is RunState.FAILED:
        sys.exit(1)


async def _run(orchestrator, services, provider, start, end):
    loop = asyncio.get_running_loop()
    loop.add_signal_handler(signal.SIGINT, orchestrator.cancel)
    try:
        return await orchestrator.run(start, end)
    finally:
        loop.remove_signal_handler(signal.SIGINT)
        await provider.aclose()
        await services.aclose()


def cmd_list(args, services):
    """List uncategorized transactions in the date range.

    Args:
        args: Parsed command-line arguments with optional start and end
        services: Services container with transactions service
    """
    start, end = _date_range(args, services.config)

    try:
        transactions = asyncio.run(_fetch_uncategorized(services, start, end))
    except TransportError as e:
        logger.error(f"Error fetching transactions: {e}")
        sys.exit(1)

    if not transactions:
        logger.info("No uncategorized transactions found in the selected range.")
        return

    for transaction in transactions:
        logger.info(f"{transaction.id}: {transaction.title}")
    logger.info(f"\nTotal uncategorized: {len(transactions)}")


async def _fetch_uncategorized(services, start, end):
    try:
        return await services.transactions.fetch_uncategorized(start, end)
    finally:
        await services.aclose()


def _date_range(args, config):
    default_start, default_end = default_date_range(config)
    start = args.start or default_start
    end = args.end or default_end
    if start > end:
        logger.error(f"Start date {start} is after end date {end}.")
        sys.exit(1)
    return start, end


def _add_range_arguments(parser):
    parser.add_argument(
        "--start",
        type=date.fromisoformat,
        help="First date to include (YYYY-MM-DD, default: lookback_months ago)",
    )
    parser.add_argument(
        "--end",
        type=date.fromisoformat,
        help="Last date to include (YYYY-MM-DD, default: today)",
    )


def setup_parser(subparsers):
    """Setup transactions subcommand parser.

    Args:
        subparsers: The subparsers object from the main CLI
    """
    parser = subparsers.add_parser(
        "transactions",
        help="Review and categorize transactions",
        description="Categorize uncategorized ledger transactions with model suggestions",
    )

    transactions_subparsers = parser.add_subparsers(
        title="subcommands",
        description="Available transaction commands",
        dest="subcommand",
        required=True,
    )

    # transactions categorize
    categorize_parser = transactions_subparsers.add_parser(
        "categorize",
        help="Suggest and approve categories one transaction at a time",
    )
    _add_range_arguments(categorize_parser)
    categorize_parser.add_argument(
        "--provider",
        choices=["openai", "anthropic", "google"],
        help="Model provider (default: from config)",
    )
    categorize_parser.add_argument(
        "--model",
        help="Model name, preset or custom (default: from config)",
    )
    categorize_parser.set_defaults(func=cmd_categorize)

    # transactions list
    list_parser = transactions_subparsers.add_parser(
        "list", help="List uncategorized transactions"
    )
    _add_range_arguments(list_parser)
    list_parser.set_defaults(func=cmd_list)
