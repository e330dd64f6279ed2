"""Helper utilities for tests."""

import asyncio
import json
from datetime import date
from decimal import Decimal
from typing import Any, Callable, Dict, List, Optional

import httpx

from categorization.approval import ApprovalGate, ApprovalRequest, Presenter
from errors import TransportError
from llm.providers.base import SuggestionProvider
from models.transaction import Transaction


def make_transaction(
    id: int = 1,
    payee: Optional[str] = "Trader Joe's",
    amount: str = "42.10",
    metadata: Optional[Dict[str, Any]] = None,
    **kwargs,
) -> Transaction:
    """Build a Transaction with sensible defaults."""
    return Transaction(
        id=id,
        date=kwargs.pop("date", date(2024, 3, 5)),
        payee=payee,
        amount=Decimal(amount),
        metadata=metadata,
        **kwargs,
    )


def suggestions_json(*names: str, confidence: float = 0.9) -> str:
    """Model-style JSON reply suggesting ``names``."""
    return json.dumps(
        {
            "suggestions": [
                {"name": n, "justification": f"Looks like {n}", "confidence": confidence}
                for n in names
            ]
        }
    )


class FakeProvider(SuggestionProvider):
    """Provider returning canned replies (str) or raising canned errors, in order."""

    provider_id = "openai"

    def __init__(self, replies: List[Any], on_call: Optional[Callable[[], None]] = None):
        super().__init__(api_key="test-key", model="gpt-4.1-mini")
        self.replies = list(replies)
        self.on_call = on_call
        self.calls: List[str] = []

    async def complete(self, system_prompt: str, user_prompt: str) -> str:
        self.calls.append(user_prompt)
        if self.on_call is not None:
            self.on_call()
        reply = self.replies.pop(0) if self.replies else ""
        if isinstance(reply, Exception):
            raise reply
        return reply


def transport_error(status: int = 500, body: str = "boom") -> TransportError:
    return TransportError("Backend request failed", status=status, body=body)


class ScriptedPresenter(Presenter):
    """Presenter that answers each request with the next scripted action.

    Actions are callables taking (request, gate); the helpers below cover
    the common cases. ``hold`` leaves the gate awaiting until resolved from
    outside.
    """

    def __init__(self, actions: List[Callable[[ApprovalRequest, ApprovalGate], Any]]):
        self.actions = list(actions)
        self.rendered: List[ApprovalRequest] = []
        self.gates: List[ApprovalGate] = []

    def render(self, request: ApprovalRequest) -> None:
        self.rendered.append(request)

    async def collect(self, request: ApprovalRequest, gate: ApprovalGate) -> None:
        self.gates.append(gate)
        action = self.actions.pop(0)
        result = action(request, gate)
        if hasattr(result, "__await__"):
            await result


def accept_preselected(request, gate):
    gate.accept(request.preselected_id)


def save(category_id):
    return lambda request, gate: gate.save(category_id)


def skip(request, gate):
    gate.skip()


def cancel(request, gate):
    gate.cancel()


async def hold(request, gate):
    await asyncio.Event().wait()


class FakeLedger:
    """In-memory Lunch Money API served through httpx.MockTransport."""

    def __init__(self, categories: List[Dict[str, Any]], transactions: List[Dict[str, Any]]):
        self.categories = categories
        self.transactions = transactions
        self.requests: List[httpx.Request] = []
        self.updates: List[Dict[str, Any]] = []
        self.fail_updates_for: set = set()
        self.fail_fetch = False

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        path = request.url.path
        if self.fail_fetch:
            return httpx.Response(503, text="maintenance")
        if request.method == "GET" and path.endswith("/categories"):
            return httpx.Response(200, json={"categories": self.categories})
        if request.method == "GET" and path.endswith("/transactions"):
            return httpx.Response(200, json={"transactions": self.transactions})
        if request.method == "PUT" and "/transactions/" in path:
            transaction_id = int(path.rsplit("/", 1)[1])
            if transaction_id in self.fail_updates_for:
                return httpx.Response(500, text="update failed")
            payload = json.loads(request.content)
            self.updates.append({"id": transaction_id, **payload["transaction"]})
            for row in self.transactions:
                if row["id"] == transaction_id:
                    row["category_id"] = payload["transaction"]["category_id"]
            return httpx.Response(200, json={"updated": True})
        return httpx.Response(404, text="not found")

    def client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(transport=httpx.MockTransport(self.handler))
