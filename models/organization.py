"""
models/organization.py
----------------------
Domain model for organizations (the employers that publish postings).
"""

from dataclasses import dataclass, field
from typing import Optional

from models.posting import Posting


@dataclass
class Organization:
    """
    Represents a single organization.

    Attributes:
        handle: Unique, URL-friendly key chosen at creation time.
        name: Display name; listings are ordered by it.
        description: Free-text description.
        num_employees: Head count, or None when unknown.
        logo_url: Optional logo location.
        postings: Postings published by this organization. Only filled in
            by point lookups, empty in listings.
    """
    handle: str
    name: str
    description: str
    num_employees: Optional[int] = None
    logo_url: Optional[str] = None
    postings: list[Posting] = field(default_factory=list)

    def to_dict(self) -> dict:
        """Serialize using the external (camelCase) field names."""
        data = {
            "handle": self.handle,
            "name": self.name,
            "description": self.description,
            "numEmployees": self.num_employees,
            "logoUrl": self.logo_url,
        }
        if self.postings:
            data["postings"] = [p.to_dict() for p in self.postings]
        return data

    def __str__(self) -> str:
        return f"{self.name} ({self.handle})"
