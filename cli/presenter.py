"""Plain terminal presenter for the approval gate."""

import asyncio
import os
import sys
from typing import Optional

from categorization.approval import ApprovalGate, ApprovalRequest, Presenter
from models.category import Category
from models.transaction import format_amount

HELP = (
    "Enter = accept selection, 1-3 = pick suggestion, #<id> or name = pick category, "
    "l = list categories, s = skip, q = cancel run"
)


class TerminalPresenter(Presenter):
    """Renders approval requests with print() and reads decisions from stdin.

    Input is read through the event loop (add_reader) so that a cancelled
    run never leaves a thread blocked on stdin.
    """

    def __init__(self, stdin=None, stdout=None):
        self.stdin = stdin or sys.stdin
        self.stdout = stdout or sys.stdout
        self._buffer = b""
        self._eof = False

    def render(self, request: ApprovalRequest) -> None:
        t = request.transaction
        self._print("")
        self._print("=" * 80)
        self._print(f"{t.merchant}    {t.date.isoformat()}")
        kind = "income" if t.is_income else "expense"
        self._print(f"  Amount: {format_amount(t.amount, t.display_currency)} ({kind})")
        if t.payee and t.payee != t.merchant:
            self._print(f"  Payee: {t.payee}")
        plaid_category = ", ".join((t.metadata or {}).get("category") or [])
        if plaid_category:
            self._print(f"  Plaid Category: {plaid_category}")
        if t.notes and t.notes.strip():
            self._print(f"  Notes: {t.notes}")
        self._print("-" * 80)

        if request.error:
            self._print("Failed to get AI suggestions:")
            self._print(f"  {request.error}")
        elif not request.suggestions:
            self._print("No valid suggestions; choose a category manually.")
        for i, s in enumerate(request.suggestions, start=1):
            confidence = f" [{s.percent}% {s.bucket}]" if s.percent is not None else ""
            self._print(f"  {i}. {s.name}{confidence}")
            if s.justification:
                self._print(f"     {s.justification}")

        selected = self._category(request, request.preselected_id)
        if selected:
            self._print(f"Selected: {selected.name}")
        self._print(HELP)

    async def collect(self, request: ApprovalRequest, gate: ApprovalGate) -> None:
        while True:
            try:
                line = (await self._read_line("> ")).strip()
            except EOFError:
                gate.interrupt()
                return

            if not line:
                gate.accept(request.preselected_id)
                return
            lowered = line.lower()
            if lowered == "s":
                gate.skip()
                return
            if lowered in ("q", "c"):
                gate.cancel()
                return
            if lowered == "l":
                for category in request.choices:
                    self._print(f"  #{category.id}: {category.name}")
                continue

            category_id = self._resolve_choice(request, line)
            if category_id is None:
                self._print(f"Unknown choice: {line!r}. {HELP}")
                continue
            gate.save(category_id)
            return

    def _resolve_choice(self, request: ApprovalRequest, line: str) -> Optional[int]:
        if line.isdigit():
            index = int(line) - 1
            if 0 <= index < len(request.suggestions):
                return request.suggestions[index].category_id
            return None
        if line.startswith("#") and line[1:].isdigit():
            category = self._category(request, int(line[1:]))
            return category.id if category else None
        for category in request.categories:
            if category.name.lower() == line.lower():
                return category.id
        return None

    def _category(self, request: ApprovalRequest, category_id: Optional[int]) -> Optional[Category]:
        if category_id is None:
            return None
        return next((c for c in request.categories if c.id == category_id), None)

    async def _read_line(self, prompt: str) -> str:
        self.stdout.write(prompt)
        self.stdout.flush()

        # Lines already read into self._buffer are invisible to add_reader
        fd = self.stdin.fileno()
        while b"\n" not in self._buffer and not self._eof:
            await self._wait_readable(fd)
            chunk = os.read(fd, 4096)
            if chunk:
                self._buffer += chunk
            else:
                self._eof = True

        if b"\n" in self._buffer:
            raw, _, self._buffer = self._buffer.partition(b"\n")
        elif self._buffer:
            raw, self._buffer = self._buffer, b""
        else:
            raise EOFError
        encoding = getattr(self.stdin, "encoding", None) or "utf-8"
        return raw.decode(encoding, errors="replace").rstrip("\r")

    async def _wait_readable(self, fd: int) -> None:
        loop = asyncio.get_running_loop()
        future = loop.create_future()

        def on_readable():
            if not future.done():
                future.set_result(None)

        loop.add_reader(fd, on_readable)
        try:
            await future
        finally:
            loop.remove_reader(fd)

    def _print(self, text: str) -> None:
        print(text, file=self.stdout)
