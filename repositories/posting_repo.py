"""
repositories/posting_repo.py
----------------------------
Data access layer for postings.
All SQL queries related to the `postings` table live here.
"""

from typing import Any, Mapping, Optional

from psycopg2 import errors

from db.connection import run_query
from models.filters import PostingFilter
from models.posting import Posting
from query.filters import build_posting_filter
from query.fragments import build_update_fragment, placeholder
from utils.errors import BadRequestError, NotFoundError
from utils.logger import get_logger

logger = get_logger(__name__)

# Posting field names match their columns.
COLUMN_MAP: dict[str, str] = {}
UPDATABLE_FIELDS = frozenset({"title", "salary", "equity"})

_RETURNING = "id, title, salary, equity, organization_handle"


class PostingRepository:
    """Repository for CRUD operations on the postings table."""

    # ── CREATE ────────────────────────────────────────────

    def create(self, posting: Posting) -> Posting:
        """
        Insert a new posting.

        Returns:
            The stored posting, with its generated `id`.

        Raises:
            NotFoundError: If the owning organization does not exist.
        """
        sql = f"""
            INSERT INTO postings (title, salary, equity, organization_handle)
            VALUES ($1, $2, $3, $4)
            RETURNING {_RETURNING}
        """
        try:
            rows = run_query(sql, [
                posting.title, posting.salary,
                posting.equity, posting.organization_handle,
            ])
        except errors.ForeignKeyViolation:
            raise NotFoundError(f"No organization: {posting.organization_handle}") from None
        created = self._row_to_posting(rows[0])
        logger.info(f"Created posting #{created.id} for '{created.organization_handle}'")
        return created

    # ── READ ──────────────────────────────────────────────

    def find_all(self, filters: Optional[PostingFilter] = None) -> list[Posting]:
        """List postings ordered by title, optionally filtered."""
        where = build_posting_filter(filters)
        sql = f"""
            SELECT {_RETURNING}
            FROM postings
            {where.text}
            ORDER BY title
        """
        return [self._row_to_posting(r) for r in run_query(sql, where.values)]

    def find_by_organization(self, handle: str) -> list[Posting]:
        """List the postings of one organization, ordered by id."""
        sql = f"""
            SELECT {_RETURNING}
            FROM postings
            WHERE organization_handle = $1
            ORDER BY id
        """
        return [self._row_to_posting(r) for r in run_query(sql, [handle])]

    def get(self, posting_id: int) -> Posting:
        """
        Fetch a single posting by ID.

        Raises:
            NotFoundError: If no posting has this ID.
        """
        rows = run_query(f"SELECT {_RETURNING} FROM postings WHERE id = $1", [posting_id])
        if not rows:
            raise NotFoundError(f"No posting: {posting_id}")
        return self._row_to_posting(rows[0])

    # ── UPDATE ────────────────────────────────────────────

    def update(self, posting_id: int, data: Mapping[str, Any]) -> Posting:
        """
        Partially update a posting. A posting never moves to another
        organization, so organizationHandle is rejected.

        Raises:
            EmptyUpdateError: If ``data`` is empty.
            BadRequestError: If ``data`` names a field that cannot change.
            NotFoundError: If no posting has this ID.
        """
        if "organizationHandle" in data:
            raise BadRequestError("Cannot change the organization of a posting.")
        disallowed = sorted(set(data) - UPDATABLE_FIELDS)
        if disallowed:
            raise BadRequestError(f"Cannot update field(s): {', '.join(disallowed)}")

        set_cols = build_update_fragment(data, COLUMN_MAP)
        id_idx = placeholder(len(set_cols.values) + 1)
        sql = f"""
            UPDATE postings
            SET {set_cols.text}
            WHERE id = {id_idx}
            RETURNING {_RETURNING}
        """
        rows = run_query(sql, [*set_cols.values, posting_id])
        if not rows:
            raise NotFoundError(f"No posting: {posting_id}")
        return self._row_to_posting(rows[0])

    # ── DELETE ────────────────────────────────────────────

    def remove(self, posting_id: int) -> None:
        """
        Delete a posting by ID.

        Raises:
            NotFoundError: If no posting has this ID.
        """
        rows = run_query("DELETE FROM postings WHERE id = $1 RETURNING id", [posting_id])
        if not rows:
            raise NotFoundError(f"No posting: {posting_id}")
        logger.info(f"Deleted posting #{posting_id}")

    # ── HELPERS ───────────────────────────────────────────

    @staticmethod
    def _row_to_posting(row: dict) -> Posting:
        """Convert a database row to a Posting domain object."""
        equity = row["equity"]
        return Posting(
            id=row["id"],
            title=row["title"],
            salary=row["salary"],
            equity=float(equity) if equity is not None else None,
            organization_handle=row["organization_handle"],
        )
