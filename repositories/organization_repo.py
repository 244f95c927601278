"""
repositories/organization_repo.py
---------------------------------
Data access layer for organizations.
All SQL queries related to the `organizations` table live here.
"""

from typing import Any, Mapping, Optional

from psycopg2 import errors

from db.connection import run_query
from models.filters import OrganizationFilter
from models.organization import Organization
from query.filters import build_organization_filter
from query.fragments import build_update_fragment, placeholder
from repositories.posting_repo import PostingRepository
from utils.errors import BadRequestError, DuplicateError, NotFoundError
from utils.logger import get_logger

logger = get_logger(__name__)

# External field name -> column, for fields whose names differ.
COLUMN_MAP: dict[str, str] = {
    "numEmployees": "num_employees",
    "logoUrl": "logo_url",
}
UPDATABLE_FIELDS = frozenset({"name", "description", "numEmployees", "logoUrl"})

_RETURNING = "handle, name, description, num_employees, logo_url"


class OrganizationRepository:
    """Repository for CRUD operations on the organizations table."""

    # ── CREATE ────────────────────────────────────────────

    def create(self, org: Organization) -> Organization:
        """
        Insert a new organization.

        Raises:
            DuplicateError: If the handle is already taken.
        """
        existing = run_query(
            "SELECT handle FROM organizations WHERE handle = $1",
            [org.handle],
        )
        if existing:
            raise DuplicateError(f"Duplicate organization: {org.handle}")

        sql = f"""
            INSERT INTO organizations (handle, name, description, num_employees, logo_url)
            VALUES ($1, $2, $3, $4, $5)
            RETURNING {_RETURNING}
        """
        try:
            rows = run_query(sql, [
                org.handle, org.name, org.description,
                org.num_employees, org.logo_url,
            ])
        except errors.UniqueViolation:
            raise DuplicateError(f"Duplicate organization: {org.handle}") from None
        logger.info(f"Created organization '{org.handle}'")
        return self._row_to_organization(rows[0])

    # ── READ ──────────────────────────────────────────────

    def find_all(self, filters: Optional[OrganizationFilter] = None) -> list[Organization]:
        """
        List organizations ordered by name.

        Args:
            filters: Optional predicates; None or an empty filter lists all.

        Raises:
            InvalidRangeError: If min_employees is not below max_employees.
        """
        where = build_organization_filter(filters)
        sql = f"""
            SELECT {_RETURNING}
            FROM organizations
            {where.text}
            ORDER BY name
        """
        return [self._row_to_organization(r) for r in run_query(sql, where.values)]

    def get(self, handle: str) -> Organization:
        """
        Fetch one organization together with its postings.

        Raises:
            NotFoundError: If no organization has this handle.
        """
        rows = run_query(
            f"SELECT {_RETURNING} FROM organizations WHERE handle = $1",
            [handle],
        )
        if not rows:
            raise NotFoundError(f"No organization: {handle}")

        org = self._row_to_organization(rows[0])
        org.postings = PostingRepository().find_by_organization(handle)
        return org

    # ── UPDATE ────────────────────────────────────────────

    def update(self, handle: str, data: Mapping[str, Any]) -> Organization:
        """
        Partially update an organization; only the fields present change.

        Args:
            handle: Key of the organization to change (not itself updatable).
            data: Any of name, description, numEmployees, logoUrl.

        Raises:
            EmptyUpdateError: If ``data`` is empty.
            BadRequestError: If ``data`` names a field that cannot change.
            NotFoundError: If no organization has this handle.
        """
        disallowed = sorted(set(data) - UPDATABLE_FIELDS)
        if disallowed:
            raise BadRequestError(f"Cannot update field(s): {', '.join(disallowed)}")

        set_cols = build_update_fragment(data, COLUMN_MAP)
        handle_idx = placeholder(len(set_cols.values) + 1)
        sql = f"""
            UPDATE organizations
            SET {set_cols.text}
            WHERE handle = {handle_idx}
            RETURNING {_RETURNING}
        """
        rows = run_query(sql, [*set_cols.values, handle])
        if not rows:
            raise NotFoundError(f"No organization: {handle}")
        return self._row_to_organization(rows[0])

    # ── DELETE ────────────────────────────────────────────

    def remove(self, handle: str) -> None:
        """
        Delete an organization (its postings cascade).

        Raises:
            NotFoundError: If no organization has this handle.
        """
        rows = run_query(
            "DELETE FROM organizations WHERE handle = $1 RETURNING handle",
            [handle],
        )
        if not rows:
            raise NotFoundError(f"No organization: {handle}")
        logger.info(f"Deleted organization '{handle}'")

    # ── HELPERS ───────────────────────────────────────────

    @staticmethod
    def _row_to_organization(row: dict) -> Organization:
        """Convert a database row to an Organization domain object."""
        return Organization(
            handle=row["handle"],
            name=row["name"],
            description=row["description"],
            num_employees=row["num_employees"],
            logo_url=row["logo_url"],
        )
