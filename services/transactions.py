"""Transaction service backed by the ledger API."""

from datetime import date
from typing import List

from config import DEFAULT_PAGE_SIZE
from ledger.client import LedgerClient
from logger import get_logger
from models.transaction import Transaction

logger = get_logger()


class TransactionService:
    """Service for reading and categorizing ledger transactions."""

    def __init__(self, client: LedgerClient, page_size: int = DEFAULT_PAGE_SIZE):
        """Initialize the transaction service.

        Args:
            client: Ledger API client.
            page_size: Maximum number of transactions requested per fetch.
        """
        self.client = client
        self.page_size = page_size

    async def fetch_uncategorized(self, start_date: date, end_date: date) -> List[Transaction]:
        """Get uncategorized, non-group transactions in an inclusive date range.

        Only a single page of ``page_size`` results is requested; anything
        beyond it is silently left out. A warning is logged when the page
        comes back full so the user can narrow the range.

        Args:
            start_date: First day of the range (inclusive).
            end_date: Last day of the range (inclusive).

        Returns:
            Eligible transactions in the order the ledger returned them.
        """
        data = await self.client.get(
            "/transactions",
            params={
                "start_date": start_date.isoformat(),
                "end_date": end_date.isoformat(),
                "is_group": "false",
                "limit": str(self.page_size),
            },
        )
        rows = (data or {}).get("transactions") or []
        if len(rows) >= self.page_size:
            logger.warning(
                f"Ledger returned a full page of {self.page_size} transactions; "
                f"results beyond the first page are not included"
            )

        transactions = [Transaction.from_api(row) for row in rows]
        return [t for t in transactions if t.is_eligible]

    async def commit_category(self, transaction_id: int, category_id: int) -> None:
        """Assign a category to a transaction.

        Idempotent: repeating the call leaves the same remote state. On
        failure the transaction's remote category is unchanged.

        Raises:
            TransportError: If the update request fails.
        """
        await self.client.put(
            f"/transactions/{transaction_id}",
            json={"transaction": {"category_id": category_id}},
        )
