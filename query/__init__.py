"""
query/ - SQL Fragment Composition
=================================
Pure helpers that turn sparse update mappings and optional filters into
parameterized SQL fragments. Nothing in this package touches the database;
repositories splice the fragments into their own query templates.
"""

from query.filters import build_organization_filter, build_posting_filter
from query.fragments import Fragment, build_update_fragment

__all__ = [
    "Fragment",
    "build_update_fragment",
    "build_organization_filter",
    "build_posting_filter",
]
