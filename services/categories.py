"""Category service backed by the ledger API."""

from typing import List

from ledger.client import LedgerClient
from models.category import Category


class CategoryService:
    """Service for reading ledger categories."""

    def __init__(self, client: LedgerClient):
        """Initialize the category service.

        Args:
            client: Ledger API client.
        """
        self.client = client

    async def fetch_all(self) -> List[Category]:
        """Get every category from the ledger, in ledger order.

        Returns:
            List of Category objects, including archived ones and groups.
        """
        data = await self.client.get("/categories")
        return [Category.from_api(row) for row in (data or {}).get("categories") or []]

    async def fetch_active(self) -> List[Category]:
        """Get the categories that can be assigned to transactions.

        Returns:
            Categories that are neither archived nor groups, in ledger order.
        """
        return [c for c in await self.fetch_all() if c.is_active]
