"""Human approval gate for a single transaction.

The gate turns validated suggestions plus the canonical category list into
exactly one ApprovalDecision. It moves through three states:

    PRESENTING -> AWAITING_DECISION -> RESOLVED

While presenting, the request is rendered through a Presenter. The gate then
waits on a future that is resolved by the first user event (save, accept,
skip, cancel, interrupt) or by the run being cancelled from elsewhere. Any
later event is ignored.
"""

import asyncio
from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Sequence, Tuple

from cancellation import CancellationToken
from categorization.matching import CASE_INSENSITIVE, match_category_id
from logger import get_logger
from models.category import Category
from models.decision import ApprovalDecision, Cancel, Commit, Skip
from models.suggestion import (
    AnnotatedSuggestion,
    CategorySuggestion,
    confidence_bucket,
    normalize_confidence,
)
from models.transaction import Transaction

logger = get_logger()


class GateState(str, Enum):
    PRESENTING = "presenting"
    AWAITING_DECISION = "awaiting_decision"
    RESOLVED = "resolved"


@dataclass(frozen=True)
class ApprovalRequest:
    """Everything a presenter needs to render one approval prompt.

    Attributes:
        transaction: The transaction being categorized.
        suggestions: Validated suggestions in model order, annotated with
            resolved category ids and normalized confidence.
        categories: The full canonical category list (manual fallback).
        preselected_id: Category id of the top suggestion, if it resolved.
        error: Message shown instead of suggestions when the provider failed.
    """

    transaction: Transaction
    suggestions: Tuple[AnnotatedSuggestion, ...]
    categories: Tuple[Category, ...]
    preselected_id: Optional[int] = None
    error: Optional[str] = None

    @property
    def choices(self) -> Tuple[Category, ...]:
        """Categories for the manual selector, sorted by name."""
        return tuple(sorted(self.categories, key=lambda c: c.name.lower()))


class Presenter(ABC):
    """Presentation collaborator for the approval gate."""

    @abstractmethod
    def render(self, request: ApprovalRequest) -> None:
        """Show the request to the user. Must not block waiting for input."""
        pass

    @abstractmethod
    async def collect(self, request: ApprovalRequest, gate: "ApprovalGate") -> None:
        """Wait for user input and deliver it as an event on ``gate``.

        The gate stops waiting as soon as it is resolved; this coroutine is
        cancelled if it is still running at that point.
        """
        pass


def annotate_suggestions(
    suggestions: Sequence[CategorySuggestion], categories: Sequence[Category]
) -> Tuple[AnnotatedSuggestion, ...]:
    """Attach category ids (exact or case-insensitive only) and confidence buckets."""
    annotated = []
    for suggestion in suggestions:
        confidence = normalize_confidence(suggestion.confidence)
        annotated.append(
            AnnotatedSuggestion(
                suggestion=suggestion,
                category_id=match_category_id(
                    suggestion.name, categories, max_tier=CASE_INSENSITIVE
                ),
                confidence=confidence,
                bucket=confidence_bucket(confidence),
            )
        )
    return tuple(annotated)


class ApprovalGate:
    """Cancellable state machine resolving to one ApprovalDecision."""

    def __init__(self, token: CancellationToken):
        self.token = token
        self.state: Optional[GateState] = None
        self.decision: Optional[ApprovalDecision] = None
        self._future: Optional[asyncio.Future] = None
        self._category_ids: frozenset = frozenset()

    def build_request(
        self,
        transaction: Transaction,
        suggestions: Sequence[CategorySuggestion],
        categories: Sequence[Category],
        error: Optional[str] = None,
    ) -> ApprovalRequest:
        annotated = annotate_suggestions(suggestions, categories)
        return ApprovalRequest(
            transaction=transaction,
            suggestions=annotated,
            categories=tuple(categories),
            preselected_id=annotated[0].category_id if annotated else None,
            error=error,
        )

    async def run(self, request: ApprovalRequest, presenter: Presenter) -> ApprovalDecision:
        """Present ``request`` and wait for the user's decision.

        Raises:
            RuntimeError: If the gate has already been used.
            Exception: Whatever the presenter raises before a decision is made.
        """
        if self.state is not None:
            raise RuntimeError("ApprovalGate instances are single-use")

        loop = asyncio.get_running_loop()
        self._future = loop.create_future()
        self._category_ids = frozenset(c.id for c in request.categories)

        self.state = GateState.PRESENTING
        presenter.render(request)
        self.state = GateState.AWAITING_DECISION

        self.token.add_callback(self._on_token_cancelled)
        collector = asyncio.ensure_future(presenter.collect(request, self))
        try:
            await asyncio.wait({self._future, collector}, return_when=asyncio.FIRST_COMPLETED)
            if not self._future.done():
                # The presenter finished without delivering an event
                collector.result()
                raise RuntimeError("Presenter returned without a decision")
            return self._future.result()
        finally:
            self.token.remove_callback(self._on_token_cancelled)
            if not collector.done():
                collector.cancel()
                try:
                    await collector
                except asyncio.CancelledError:
                    pass

    # -- user events -----------------------------------------------------

    def save(self, selected_id: Optional[int] = None) -> bool:
        """Save the current selection; with no selection this is a skip."""
        if selected_id is None:
            return self._resolve(Skip())
        if selected_id not in self._category_ids:
            raise ValueError(f"Category {selected_id} is not in the category list")
        return self._resolve(Commit(int(selected_id)))

    def accept(self, selected_id: Optional[int] = None) -> bool:
        """Accept/confirm signal (e.g. Enter); equivalent to save."""
        return self.save(selected_id)

    def skip(self) -> bool:
        return self._resolve(Skip())

    def cancel(self) -> bool:
        """Cancel the whole run: sets the shared token and resolves Cancel."""
        resolved = self._resolve(Cancel())
        if resolved:
            self.token.cancel()
        return resolved

    def interrupt(self) -> bool:
        """Escape/interrupt signal; same as cancel."""
        return self.cancel()

    @property
    def awaiting(self) -> bool:
        return self.state is GateState.AWAITING_DECISION

    def _on_token_cancelled(self) -> None:
        self._resolve(Cancel())

    def _resolve(self, decision: ApprovalDecision) -> bool:
        if not self.awaiting or self._future is None or self._future.done():
            logger.debug(f"Ignoring {type(decision).__name__} event; gate is {self.state}")
            return False
        self.decision = decision
        self.state = GateState.RESOLVED
        self._future.set_result(decision)
        return True
