"""Prompt construction for category suggestions.

Both builders are pure: the same input always renders the same text.
"""

from typing import Any, Dict, List, Optional, Sequence

from llm.prompts.loader import get_prompt_manager
from models.category import Category
from models.transaction import Transaction

PROMPT_NAME = "categorization"
SUGGESTION_COUNT = 3


def build_system_prompt(categories: Sequence[Category]) -> str:
    """Build the system prompt listing every active category verbatim.

    Categories are listed in the order given. Archived and group categories
    are left out even if the caller passes them in.
    """
    lines = []
    for category in categories:
        if not category.is_active:
            continue
        line = f'"{category.name}" (ID: {category.id})'
        if category.description and category.description.strip():
            line += f" - {category.description.strip()}"
        lines.append(line)

    return get_prompt_manager().render_system_prompt(
        PROMPT_NAME,
        {"categories": "\n".join(lines), "count": SUGGESTION_COUNT},
    )


def build_transaction_prompt(transaction: Transaction) -> str:
    """Build the user prompt describing a single transaction."""
    meta: Dict[str, Any] = transaction.metadata or {}

    lines: List[str] = [
        f"- Payee: {transaction.payee or 'Unknown'}",
        f"- Merchant: {transaction.merchant}",
        f"- Amount: {transaction.amount}",
        f"- Currency: {transaction.currency or meta.get('iso_currency_code') or ''}",
        f"- Date: {transaction.date.isoformat()}",
        f"- Notes: {transaction.notes or ''}",
        f"- Plaid Category: {_plaid_category(meta)}",
        f"- Personal Finance Category: {_personal_finance_category(meta)}",
        f"- Payment Channel: {meta.get('payment_channel') or 'Unknown'}",
    ]

    transaction_type = meta.get("transaction_type")
    if transaction_type:
        lines.append(f"- Transaction Type: {transaction_type}")

    counterparties = [cp for cp in meta.get("counterparties") or [] if isinstance(cp, dict)]
    if counterparties:
        label = "Counterparty" if len(counterparties) == 1 else "Counterparties"
        rendered = "; ".join(_counterparty(cp) for cp in counterparties)
        lines.append(f"- {label}: {rendered}")

    lines.append(f"- Location: {_location(meta)}")
    lines.append(f"- Pending: {_pending(meta.get('pending'))}")

    return get_prompt_manager().render_user_prompt(
        PROMPT_NAME, {"transaction": "\n".join(lines)}
    )


def _plaid_category(meta: Dict[str, Any]) -> str:
    category = ", ".join(str(c) for c in meta.get("category") or [] if c)
    if not category:
        category = "Unknown"
    category_id = meta.get("category_id")
    if category_id:
        category += f" (#{category_id})"
    return category


def _personal_finance_category(meta: Dict[str, Any]) -> str:
    pfc = meta.get("personal_finance_category") or {}
    primary = pfc.get("primary")
    detailed = pfc.get("detailed")
    if primary and detailed:
        text = f"{primary} > {detailed}"
    else:
        text = primary or detailed or "Unknown"
    level = pfc.get("confidence_level")
    if level:
        text += f" ({level} confidence)"
    return text


def _counterparty(cp: Dict[str, Any]) -> str:
    name = cp.get("name") or "Unknown"
    kind = cp.get("type") or "unknown"
    confidence = cp.get("confidence_level") or "unknown"
    return f"{name} ({kind}, {confidence})"


def _location(meta: Dict[str, Any]) -> str:
    loc = meta.get("location") or {}
    parts = [p for p in (loc.get("city"), loc.get("region")) if p]
    return ", ".join(parts) or "Unknown"


def _pending(value: Optional[bool]) -> str:
    if value is True:
        return "true"
    if value is False:
        return "false"
    return "unknown"
