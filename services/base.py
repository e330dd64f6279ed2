"""Base services container for dependency injection."""

from typing import Optional

import httpx

from config import Config
from ledger.client import LedgerClient
from services.categories import CategoryService
from services.transactions import TransactionService


class Services:
    """Container for all ledger-backed services.

    This class provides a centralized way to access all services and makes
    it easy to inject a fake HTTP transport for testing.

    Args:
        config: Application configuration object.
        http_client: Optional httpx.AsyncClient for testing.

    Raises:
        ConfigurationError: If the ledger token is missing.
    """

    def __init__(self, config: Config, http_client: Optional[httpx.AsyncClient] = None):
        self.config = config
        self.ledger = LedgerClient(
            config.ledger_base_url,
            config.ledger_token,
            timeout=config.ledger_timeout,
            http_client=http_client,
        )
        self.categories = CategoryService(self.ledger)
        self.transactions = TransactionService(self.ledger, page_size=config.ledger_page_size)

    async def aclose(self) -> None:
        await self.ledger.aclose()
