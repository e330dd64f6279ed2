"""Approval decisions produced by the approval gate."""

from dataclasses import dataclass
from typing import Union


@dataclass(frozen=True)
class Commit:
    """Assign ``category_id`` to the transaction."""

    category_id: int


@dataclass(frozen=True)
class Skip:
    """Leave the transaction uncategorized and move on."""


@dataclass(frozen=True)
class Cancel:
    """Stop the whole run."""


ApprovalDecision = Union[Commit, Skip, Cancel]
