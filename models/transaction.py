from dataclasses import dataclass
from datetime import date
from decimal import Decimal, InvalidOperation
from typing import Any, Dict, Optional
import json

from logger import get_logger

logger = get_logger()

DISPLAY_CURRENCY = "USD"


@dataclass(frozen=True)
class Transaction:
    id: int
    date: date
    payee: Optional[str]
    amount: Decimal  # negative = credit/income, otherwise debit/expense
    currency: Optional[str] = None
    notes: Optional[str] = None
    category_id: Optional[int] = None
    is_group: bool = False
    metadata: Optional[Dict[str, Any]] = None  # Plaid metadata, if any

    @property
    def is_eligible(self) -> bool:
        """Uncategorized, non-group transactions are eligible for review."""
        return self.category_id is None and not self.is_group

    @property
    def is_income(self) -> bool:
        return self.amount < 0

    @property
    def merchant(self) -> str:
        """Best merchant label: metadata merchant, metadata name, payee, then Unknown."""
        meta = self.metadata or {}
        return meta.get("merchant_name") or meta.get("name") or self.payee or "Unknown"

    @property
    def display_currency(self) -> str:
        """Currency code for display, falling back to metadata then USD."""
        meta = self.metadata or {}
        return self.currency or meta.get("iso_currency_code") or DISPLAY_CURRENCY

    @property
    def title(self) -> str:
        """One-line summary used in log lines."""
        amount = format_amount(self.amount, self.display_currency)
        return f"{self.date.isoformat()} • {self.payee or 'Unknown'} • {amount}"

    @classmethod
    def from_api(cls, data: Dict[str, Any]) -> "Transaction":
        """Build a Transaction from a ledger API payload.

        The ledger may deliver ``plaid_metadata`` as an object or as a JSON
        string; undecodable strings are dropped with a warning.
        """
        try:
            amount = Decimal(str(data.get("amount", "0")))
        except InvalidOperation as e:
            raise ValueError(
                f"Invalid amount for transaction {data.get('id')}: {data.get('amount')!r}"
            ) from e

        category_id = data.get("category_id")
        return cls(
            id=int(data["id"]),
            date=date.fromisoformat(str(data["date"])[:10]),
            payee=data.get("payee"),
            amount=amount,
            currency=(data.get("currency") or None),
            notes=data.get("notes"),
            category_id=int(category_id) if category_id is not None else None,
            is_group=bool(data.get("is_group") or False),
            metadata=parse_metadata(data.get("plaid_metadata")),
        )


def parse_metadata(raw: Any) -> Optional[Dict[str, Any]]:
    """Normalize Plaid metadata to a dict (or None)."""
    if not raw:
        return None
    if isinstance(raw, str):
        try:
            raw = json.loads(raw)
        except json.JSONDecodeError as e:
            logger.warning(f"Failed to parse transaction metadata: {e}")
            return None
    return raw if isinstance(raw, dict) else None


def format_amount(amount: Decimal, currency: Optional[str] = None) -> str:
    """Plain-text currency formatting for logs, e.g. ``-12.50 USD``."""
    return f"{amount:,.2f} {(currency or DISPLAY_CURRENCY).upper()}"
