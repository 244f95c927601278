"""
models/ - Domain Models
=======================
Plain dataclasses for organizations, postings and their search filters.
These carry no database knowledge; repositories build them from rows.
"""
