"""HTTP client for the Lunch Money ledger API."""

from typing import Any, Dict, Optional

import httpx

from errors import ConfigurationError, TransportError
from logger import get_logger

logger = get_logger()


class LedgerClient:
    """Thin async wrapper around the ledger REST API.

    Non-success responses and transport failures are raised as
    TransportError; requests are never retried.

    Args:
        base_url: API root, e.g. https://dev.lunchmoney.app/v1.
        token: Bearer token for the ledger account.
        timeout: Request timeout in seconds.
        http_client: Optional pre-built httpx.AsyncClient (testing).
    """

    def __init__(
        self,
        base_url: str,
        token: str,
        timeout: float = 30.0,
        http_client: Optional[httpx.AsyncClient] = None,
    ):
        if not token or not token.strip():
            raise ConfigurationError("Missing Lunch Money token.")

        self.base_url = base_url.rstrip("/")
        self.http_client = http_client or httpx.AsyncClient(timeout=timeout)
        self._headers = {
            "Authorization": f"Bearer {token.strip()}",
            "Content-Type": "application/json",
        }

    async def request(
        self,
        method: str,
        path: str,
        params: Optional[Dict[str, Any]] = None,
        json: Optional[Dict[str, Any]] = None,
    ) -> Any:
        """Send a request and return the decoded JSON body.

        Raises:
            TransportError: On non-2xx responses, timeouts or connection errors.
        """
        url = f"{self.base_url}{path}"
        logger.debug(f"{method} {url}")
        try:
            resp = await self.http_client.request(
                method, url, params=params, json=json, headers=self._headers
            )
        except httpx.HTTPError as e:
            raise TransportError(f"Lunch Money request failed: {e}") from e

        if resp.is_error:
            raise TransportError("Lunch Money HTTP error", status=resp.status_code, body=resp.text)

        try:
            return resp.json()
        except ValueError as e:
            raise TransportError(
                "Lunch Money returned invalid JSON", status=resp.status_code, body=resp.text
            ) from e

    async def get(self, path: str, params: Optional[Dict[str, Any]] = None) -> Any:
        return await self.request("GET", path, params=params)

    async def put(self, path: str, json: Dict[str, Any]) -> Any:
        return await self.request("PUT", path, json=json)

    async def aclose(self) -> None:
        await self.http_client.aclose()
