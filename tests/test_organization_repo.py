"""
Unit tests for OrganizationRepository against a recording fake database.
"""

import pytest
from psycopg2 import errors

from models.filters import OrganizationFilter
from models.organization import Organization
from repositories.organization_repo import OrganizationRepository
from utils.errors import (
    BadRequestError,
    DuplicateError,
    EmptyUpdateError,
    InvalidRangeError,
    NotFoundError,
)


def _row(handle="c1", name="C1", num_employees=1, logo_url="http://c1.img"):
    return {
        "handle": handle,
        "name": name,
        "description": f"Desc{handle[-1]}",
        "num_employees": num_employees,
        "logo_url": logo_url,
    }


@pytest.fixture
def repo():
    return OrganizationRepository()


class TestCreate:
    def test_inserts_when_handle_is_free(self, repo, fake_db):
        fake_db.queue([], [_row("new", "New")])
        org = Organization(handle="new", name="New", description="New Description",
                           num_employees=1, logo_url="http://new.img")

        created = repo.create(org)

        assert created.handle == "new"
        check_sql, check_params = fake_db.calls[0]
        assert check_sql == "SELECT handle FROM organizations WHERE handle = $1"
        assert check_params == ["new"]
        insert_sql, insert_params = fake_db.calls[1]
        assert "VALUES ($1, $2, $3, $4, $5)" in insert_sql
        assert insert_params == ["new", "New", "New Description", 1, "http://new.img"]

    def test_duplicate_handle(self, repo, fake_db):
        fake_db.queue([{"handle": "c1"}])

        with pytest.raises(DuplicateError, match="Duplicate organization: c1"):
            repo.create(Organization(handle="c1", name="C1", description="d"))

        assert len(fake_db.calls) == 1

    def test_unique_violation_on_insert_is_a_duplicate(self, repo, fake_db):
        fake_db.queue([], errors.UniqueViolation("duplicate key"))

        with pytest.raises(DuplicateError):
            repo.create(Organization(handle="c9", name="C1", description="d"))


class TestFindAll:
    def test_no_filter(self, repo, fake_db):
        fake_db.queue([_row("c1", "C1"), _row("c2", "C2")])

        orgs = repo.find_all()

        assert [o.handle for o in orgs] == ["c1", "c2"]
        sql, params = fake_db.calls[0]
        assert "WHERE" not in sql
        assert sql.endswith("FROM organizations ORDER BY name")
        assert params == []

    def test_filters_are_bound(self, repo, fake_db):
        repo.find_all(OrganizationFilter(name_like="c", min_employees=1, max_employees=3))

        sql, params = fake_db.calls[0]
        assert ('FROM organizations WHERE "name" ILIKE $1 '
                'AND "num_employees" BETWEEN $2 AND $3 ORDER BY name') in sql
        assert params == ["%c%", 1, 3]

    def test_invalid_range_never_queries(self, repo, fake_db):
        with pytest.raises(InvalidRangeError):
            repo.find_all(OrganizationFilter(min_employees=3, max_employees=1))

        assert fake_db.calls == []


class TestGet:
    def test_includes_postings(self, repo, fake_db):
        fake_db.queue(
            [_row("c1")],
            [{"id": 7, "title": "j1", "salary": 100, "equity": None,
              "organization_handle": "c1"}],
        )

        org = repo.get("c1")

        assert org.handle == "c1"
        assert [p.title for p in org.postings] == ["j1"]
        assert fake_db.calls[1][1] == ["c1"]
        assert org.to_dict()["postings"][0]["organizationHandle"] == "c1"

    def test_not_found(self, repo, fake_db):
        with pytest.raises(NotFoundError, match="No organization: nope"):
            repo.get("nope")


class TestUpdate:
    def test_maps_columns_and_binds_handle_last(self, repo, fake_db):
        fake_db.queue([_row("c1", "New", num_employees=10)])

        org = repo.update("c1", {"name": "New", "numEmployees": 10})

        assert org.name == "New"
        sql, params = fake_db.calls[0]
        assert 'SET "name"=$1, "num_employees"=$2 WHERE handle = $3' in sql
        assert params == ["New", 10, "c1"]

    def test_null_fields(self, repo, fake_db):
        fake_db.queue([_row("c1", num_employees=None, logo_url=None)])

        org = repo.update("c1", {"numEmployees": None, "logoUrl": None})

        assert org.num_employees is None
        assert fake_db.calls[0][1] == [None, None, "c1"]

    def test_not_found(self, repo, fake_db):
        with pytest.raises(NotFoundError):
            repo.update("nope", {"name": "x"})

    def test_empty_data(self, repo, fake_db):
        with pytest.raises(EmptyUpdateError):
            repo.update("c1", {})

        assert fake_db.calls == []

    def test_handle_cannot_change(self, repo, fake_db):
        with pytest.raises(BadRequestError, match="Cannot update field"):
            repo.update("c1", {"handle": "c1-new"})

        assert fake_db.calls == []


class TestRemove:
    def test_works(self, repo, fake_db):
        fake_db.queue([{"handle": "c1"}])

        repo.remove("c1")

        assert fake_db.calls == [
            ("DELETE FROM organizations WHERE handle = $1 RETURNING handle", ["c1"])
        ]

    def test_not_found(self, repo, fake_db):
        with pytest.raises(NotFoundError):
            repo.remove("nope")
