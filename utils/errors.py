"""
utils/errors.py
---------------
Exceptions raised by the query builders and repositories.

Callers (request handlers) translate these into their own failure
responses: every BadRequestError is a caller mistake and must not be
retried, NotFoundError means the addressed row does not exist.
"""


class DataAccessError(Exception):
    """Base class for all data-access layer errors."""


class BadRequestError(DataAccessError):
    """The caller asked for something the data layer refuses to do."""


class EmptyUpdateError(BadRequestError):
    """A partial update was requested with no fields to change."""

    def __init__(self, message: str = "No data"):
        super().__init__(message)


class InvalidRangeError(BadRequestError):
    """A lower bound is not strictly below its upper bound."""

    def __init__(self, low_name: str, high_name: str):
        self.low_name = low_name
        self.high_name = high_name
        super().__init__(f"{low_name} must be less than {high_name}")


class DuplicateError(BadRequestError):
    """A record with the same key already exists."""


class NotFoundError(DataAccessError):
    """No row matched the requested key."""
