"""
models/posting.py
-----------------
Domain model for postings (open positions offered by an organization).
"""

from dataclasses import dataclass
from typing import Optional


@dataclass
class Posting:
    """
    Represents a single posting.

    Attributes:
        title: Position title; listings are ordered by it.
        salary: Yearly salary, or None when undisclosed.
        equity: Equity fraction between 0 and 1, or None.
        organization_handle: Handle of the owning organization.
        id: Database primary key (None for new records).
    """
    title: str
    organization_handle: str
    salary: Optional[int] = None
    equity: Optional[float] = None
    id: Optional[int] = None

    def has_equity(self) -> bool:
        """Returns True if the posting offers a positive equity fraction."""
        return bool(self.equity) and self.equity > 0

    def to_dict(self) -> dict:
        """Serialize using the external (camelCase) field names."""
        return {
            "id": self.id,
            "title": self.title,
            "salary": self.salary,
            "equity": self.equity,
            "organizationHandle": self.organization_handle,
        }

    def __str__(self) -> str:
        return f"#{self.id} {self.title} @ {self.organization_handle}"
