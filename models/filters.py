"""
models/filters.py
-----------------
Typed search filters for organizations and postings.

Every predicate is an explicit optional field: ``None`` means "not
requested". ``from_params`` converts the loosely typed query parameters a
request handler receives (camelCase names, string values) into these
structures.
"""

from dataclasses import dataclass
from typing import Any, Callable, Mapping, Optional

from utils.errors import BadRequestError


def _parse_str(name: str, value: Any) -> str:
    if not isinstance(value, str):
        raise BadRequestError(f"{name} must be a string")
    return value


def _parse_non_negative_int(name: str, value: Any) -> int:
    if isinstance(value, bool):
        raise BadRequestError(f"{name} must be an integer")
    try:
        number = int(value)
    except (TypeError, ValueError):
        raise BadRequestError(f"{name} must be an integer") from None
    if isinstance(value, float) and number != value:
        raise BadRequestError(f"{name} must be an integer")
    if number < 0:
        raise BadRequestError(f"{name} must not be negative")
    return number


def _parse_bool(name: str, value: Any) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, str) and value.lower() in ("true", "false"):
        return value.lower() == "true"
    raise BadRequestError(f"{name} must be true or false")


def _parse_params(
    params: Optional[Mapping[str, Any]],
    fields: Mapping[str, tuple[str, Callable[[str, Any], Any]]],
) -> dict:
    """Map request parameter names onto dataclass fields, parsing each value."""
    if not params:
        return {}
    unknown = sorted(set(params) - set(fields))
    if unknown:
        raise BadRequestError(f"Unknown filter(s): {', '.join(unknown)}")
    parsed = {}
    for param_name, value in params.items():
        field_name, parse = fields[param_name]
        parsed[field_name] = parse(param_name, value)
    return parsed


@dataclass(frozen=True)
class OrganizationFilter:
    """
    Optional predicates for listing organizations.

    Attributes:
        name_like: Case-insensitive substring of the organization name.
        min_employees: Inclusive lower bound on employee count.
        max_employees: Inclusive upper bound on employee count.
    """
    name_like: Optional[str] = None
    min_employees: Optional[int] = None
    max_employees: Optional[int] = None

    PARAMS = {
        "nameLike": ("name_like", _parse_str),
        "minEmployees": ("min_employees", _parse_non_negative_int),
        "maxEmployees": ("max_employees", _parse_non_negative_int),
    }

    @classmethod
    def from_params(cls, params: Optional[Mapping[str, Any]]) -> "OrganizationFilter":
        """Build a filter from request query parameters."""
        return cls(**_parse_params(params, cls.PARAMS))


@dataclass(frozen=True)
class PostingFilter:
    """
    Optional predicates for listing postings.

    Attributes:
        title: Case-insensitive substring of the posting title.
        min_salary: Inclusive lower bound on salary.
        has_equity: When True, only postings with equity above zero.
            False behaves exactly like not filtering on equity.
    """
    title: Optional[str] = None
    min_salary: Optional[int] = None
    has_equity: Optional[bool] = None

    PARAMS = {
        "title": ("title", _parse_str),
        "minSalary": ("min_salary", _parse_non_negative_int),
        "hasEquity": ("has_equity", _parse_bool),
    }

    @classmethod
    def from_params(cls, params: Optional[Mapping[str, Any]]) -> "PostingFilter":
        """Build a filter from request query parameters."""
        return cls(**_parse_params(params, cls.PARAMS))
