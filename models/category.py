"""Category model for transaction categorization."""

from dataclasses import dataclass
from typing import Any, Dict, Optional


@dataclass(frozen=True)
class Category:
    """Represents a ledger category.

    Attributes:
        id: Unique identifier assigned by the ledger.
        name: Category name (unique, canonical for exact matching).
        description: Optional description of what belongs in this category.
        archived: Whether the category has been archived.
        is_group: Whether this is a category group rather than a leaf category.
    """

    id: int
    name: str
    description: Optional[str] = None
    archived: bool = False
    is_group: bool = False

    @property
    def is_active(self) -> bool:
        """True for categories that can be assigned to a transaction."""
        return not self.archived and not self.is_group

    @classmethod
    def from_api(cls, data: Dict[str, Any]) -> "Category":
        """Build a Category from a ledger API payload."""
        return cls(
            id=int(data["id"]),
            name=str(data.get("name") or ""),
            description=data.get("description"),
            archived=bool(data.get("archived") or False),
            is_group=bool(data.get("is_group") or False),
        )
