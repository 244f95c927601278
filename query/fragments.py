"""
query/fragments.py
------------------
Building blocks for parameterized SQL fragments.

Placeholders use PostgreSQL's positional ``$n`` form. Values always travel
out-of-band in ``Fragment.values``; only trusted column names (static
mappings owned by the repositories) are written into the SQL text.
"""

from typing import Any, Mapping, NamedTuple

from utils.errors import EmptyUpdateError


class Fragment(NamedTuple):
    """A piece of SQL text plus the values its placeholders refer to."""

    text: str
    values: list


def placeholder(index: int) -> str:
    """Render the positional marker for the 1-based parameter ``index``."""
    if index < 1:
        raise ValueError(f"Placeholder index must be >= 1, got {index}")
    return f"${index}"


def quote_identifier(name: str) -> str:
    """Double-quote a column name, doubling any embedded quote."""
    return '"' + name.replace('"', '""') + '"'


def contains_pattern(substring: str) -> str:
    """
    Build an ILIKE pattern matching any value that contains ``substring``.

    LIKE wildcards in the input are escaped so that ``50%`` matches the
    literal text rather than everything starting with ``50``.
    """
    escaped = (
        substring.replace("\\", "\\\\")
        .replace("%", "\\%")
        .replace("_", "\\_")
    )
    return f"%{escaped}%"


class ClauseBuilder:
    """
    Accumulates ``AND``-joined predicates and their bound values.

    ``bind`` appends a value and returns the placeholder that refers to it,
    so terms can be written as ``f"{col} >= {clause.bind(v)}"`` without
    tracking indices by hand.
    """

    def __init__(self, start: int = 1):
        placeholder(start)  # rejects start < 1
        self._start = start
        self.terms: list[str] = []
        self.values: list = []

    def bind(self, value: Any) -> str:
        self.values.append(value)
        return placeholder(self._start + len(self.values) - 1)

    def add(self, term: str) -> None:
        self.terms.append(term)

    def where(self) -> Fragment:
        """Return ``WHERE a AND b ...``, or an empty fragment when no term was added."""
        if not self.terms:
            return Fragment("", [])
        return Fragment("WHERE " + " AND ".join(self.terms), list(self.values))


def build_update_fragment(
    update: Mapping[str, Any],
    column_map: Mapping[str, str],
    start: int = 1,
) -> Fragment:
    """
    Convert a sparse update mapping into a SET assignment list.

    Args:
        update: Fields to change, in the order they should be assigned.
            Values are bound verbatim, ``None`` included.
        column_map: External field name -> storage column. Fields missing
            from the map are used as the column name unchanged.
        start: Index of the first placeholder, for callers that already
            hold earlier parameters.

    Returns:
        Fragment such as ``'"first_name"=$1, "age"=$2'`` with values
        ``["Aliya", 32]``.

    Raises:
        EmptyUpdateError: If ``update`` has no entries.
    """
    if not update:
        raise EmptyUpdateError()

    clause = ClauseBuilder(start)
    assignments = [
        f"{quote_identifier(column_map.get(field, field))}={clause.bind(value)}"
        for field, value in update.items()
    ]
    return Fragment(", ".join(assignments), clause.values)
