"""Batch orchestration for assisted categorization.

One run fetches the active categories and the uncategorized transactions,
then walks the transactions strictly in ledger order: suggest, validate,
ask the user, commit. A failure on one transaction (suggestion request,
commit, anything unexpected) is logged and the run moves on; only a user
cancel stops the loop early.

Cancellation is cooperative. The run token is checked at the top of each
iteration, before and after the suggestion request, and before the commit.
"""

from dataclasses import dataclass
from datetime import date
from enum import Enum
from typing import Optional, Sequence

from cancellation import CancellationToken
from categorization.approval import ApprovalGate, Presenter
from categorization.events import EventStream
from categorization.validation import invalid_message, validate_suggestions
from errors import OperationCancelled, TransportError
from llm.prompting import build_system_prompt, build_transaction_prompt
from llm.providers.base import SuggestionProvider
from logger import get_logger
from models.category import Category
from models.decision import Cancel, Skip
from models.transaction import Transaction
from services.categories import CategoryService
from services.transactions import TransactionService

logger = get_logger()


class RunState(str, Enum):
    IDLE = "idle"
    RUNNING = "running"
    COMPLETED = "completed"
    CANCELLED = "cancelled"
    FAILED = "failed"


class ItemOutcome(str, Enum):
    COMMITTED = "committed"
    SKIPPED = "skipped"
    FAILED = "failed"
    CANCELLED = "cancelled"


@dataclass
class RunSummary:
    state: RunState = RunState.IDLE
    total: int = 0
    committed: int = 0
    skipped: int = 0
    failed: int = 0

    @property
    def processed(self) -> int:
        return self.committed + self.skipped + self.failed


class Orchestrator:
    """Drives one categorization run end to end.

    Args:
        categories: Ledger category service.
        transactions: Ledger transaction service.
        provider: Suggestion provider selected for this run.
        presenter: Presentation collaborator for the approval gate.
        events: Event stream for log lines and progress (created if omitted).
    """

    def __init__(
        self,
        categories: CategoryService,
        transactions: TransactionService,
        provider: SuggestionProvider,
        presenter: Presenter,
        events: Optional[EventStream] = None,
    ):
        self.categories = categories
        self.transactions = transactions
        self.provider = provider
        self.presenter = presenter
        self.events = events or EventStream()
        self.state = RunState.IDLE
        self.token = CancellationToken()

    def cancel(self) -> None:
        """Global cancel: stop after the current step and resolve any open gate."""
        if self.state is RunState.RUNNING and self.token.cancel():
            self.events.warn("Cancelling…")

    async def run(self, start_date: date, end_date: date) -> RunSummary:
        """Run the batch over uncategorized transactions in [start_date, end_date].

        Returns:
            RunSummary with the final state and per-outcome counts.
        """
        if self.state is RunState.RUNNING:
            raise RuntimeError("A run is already in progress")

        self.token = CancellationToken()
        self.state = RunState.RUNNING
        summary = RunSummary(state=self.state)
        try:
            return await self._run(start_date, end_date, summary)
        except BaseException:
            self._finish(summary, RunState.FAILED)
            raise

    async def _run(self, start_date: date, end_date: date, summary: RunSummary) -> RunSummary:
        try:
            self.events.info("Fetching categories...")
            categories = tuple(await self.categories.fetch_active())
            if not categories:
                self.events.error("No categories found.")
                return self._finish(summary, RunState.COMPLETED)
            self.events.ok(f"Found {len(categories)} active categories.")

            self.events.info(
                f"Fetching uncategorized transactions from {start_date.isoformat()} "
                f"to {end_date.isoformat()}..."
            )
            transactions = await self.transactions.fetch_uncategorized(start_date, end_date)
        except (TransportError, ValueError) as e:
            self.events.error(f"Fatal error: {e}")
            return self._finish(summary, RunState.FAILED)

        if not transactions:
            self.events.warn("No uncategorized transactions found in the selected range.")
            return self._finish(summary, RunState.COMPLETED)
        self.events.info(f"Found {len(transactions)} uncategorized transactions.")

        summary.total = len(transactions)
        system_prompt = build_system_prompt(categories)
        self.events.update_progress(0, summary.total)

        for transaction in transactions:
            if self.token.cancelled:
                self.events.warn("Cancelled by user.")
                break

            outcome = await self._process(transaction, categories, system_prompt, summary)
            self.events.update_progress(summary.processed, summary.total)
            if outcome is ItemOutcome.CANCELLED:
                break

        if self.token.cancelled:
            return self._finish(summary, RunState.CANCELLED)
        self.events.info("Finished.")
        return self._finish(summary, RunState.COMPLETED)

    async def _process(
        self,
        transaction: Transaction,
        categories: Sequence[Category],
        system_prompt: str,
        summary: RunSummary,
    ) -> ItemOutcome:
        title = transaction.title
        logger.debug(f"Suggesting category for: {title}")

        try:
            transaction_prompt = build_transaction_prompt(transaction)

            error = None
            try:
                suggestions = await self.provider.generate(
                    system_prompt, transaction_prompt, self.token
                )
            except TransportError as e:
                error = str(e)
                suggestions = []
                self.events.error(f"Error getting AI suggestions: {e}")

            suggestions = validate_suggestions(
                suggestions,
                categories,
                on_invalid=lambda s: self.events.warn(invalid_message(s)),
            )

            gate = ApprovalGate(self.token)
            request = gate.build_request(transaction, suggestions, categories, error=error)
            decision = await gate.run(request, self.presenter)

            if isinstance(decision, Cancel):
                raise OperationCancelled()

            if isinstance(decision, Skip):
                summary.skipped += 1
                self.events.warn(f"Skipped: {title}")
                return ItemOutcome.SKIPPED

            self.token.raise_if_cancelled()
            await self.transactions.commit_category(transaction.id, decision.category_id)

            summary.committed += 1
            name = next(
                (c.name for c in categories if c.id == decision.category_id),
                str(decision.category_id),
            )
            self.events.ok(f"Updated {title} -> {name}")
            return ItemOutcome.COMMITTED

        except OperationCancelled:
            self.events.warn("Cancelled by user.")
            return ItemOutcome.CANCELLED
        except Exception as e:
            summary.failed += 1
            self.events.error(f"Error on {title}: {e}")
            return ItemOutcome.FAILED

    def _finish(self, summary: RunSummary, state: RunState) -> RunSummary:
        self.state = state
        summary.state = state
        return summary
