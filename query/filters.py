"""
query/filters.py
----------------
WHERE-clause composers for the organization and posting listings.

Each composer walks its filter's predicates in a fixed order and returns a
Fragment: ``WHERE <term> AND <term> ...`` with the bound values, or an
empty fragment when nothing was requested. Filter values are always bound
as parameters, never written into the SQL text.
"""

from typing import Optional

from models.filters import OrganizationFilter, PostingFilter
from query.fragments import ClauseBuilder, Fragment, contains_pattern, quote_identifier
from utils.errors import InvalidRangeError

_NAME = quote_identifier("name")
_NUM_EMPLOYEES = quote_identifier("num_employees")
_TITLE = quote_identifier("title")
_SALARY = quote_identifier("salary")
_EQUITY = quote_identifier("equity")


def build_organization_filter(
    filters: Optional[OrganizationFilter] = None, start: int = 1
) -> Fragment:
    """
    Compose the WHERE clause for listing organizations.

    Predicates, in order: name contains ``name_like`` (case-insensitive),
    then the employee-count range. Both bounds present produce one inclusive
    BETWEEN term; a single bound produces ``>=`` or ``<=``.

    Raises:
        InvalidRangeError: If both bounds are given and
            ``min_employees >= max_employees``.
    """
    if filters is None:
        return Fragment("", [])

    low, high = filters.min_employees, filters.max_employees
    if low is not None and high is not None and low >= high:
        raise InvalidRangeError("minEmployees", "maxEmployees")

    clause = ClauseBuilder(start)
    if filters.name_like is not None:
        clause.add(f"{_NAME} ILIKE {clause.bind(contains_pattern(filters.name_like))}")

    if low is not None and high is not None:
        clause.add(f"{_NUM_EMPLOYEES} BETWEEN {clause.bind(low)} AND {clause.bind(high)}")
    elif low is not None:
        clause.add(f"{_NUM_EMPLOYEES} >= {clause.bind(low)}")
    elif high is not None:
        clause.add(f"{_NUM_EMPLOYEES} <= {clause.bind(high)}")

    return clause.where()


def build_posting_filter(
    filters: Optional[PostingFilter] = None, start: int = 1
) -> Fragment:
    """
    Compose the WHERE clause for listing postings.

    Predicates, in order: equity above zero (only when ``has_equity`` is
    True), title contains ``title`` (case-insensitive), salary at least
    ``min_salary``. Never raises.
    """
    if filters is None:
        return Fragment("", [])

    clause = ClauseBuilder(start)
    if filters.has_equity is True:
        clause.add(f"{_EQUITY} > 0")
    if filters.title is not None:
        clause.add(f"{_TITLE} ILIKE {clause.bind(contains_pattern(filters.title))}")
    if filters.min_salary is not None:
        clause.add(f"{_SALARY} >= {clause.bind(filters.min_salary)}")

    return clause.where()
