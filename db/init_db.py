"""
db/init_db.py
-------------
Creates the database schema (tables) if they do not already exist.
Run this module directly to initialize a fresh database:
    python -m db.init_db
"""

from db.connection import run_query
from utils.logger import get_logger

logger = get_logger(__name__)

SCHEMA_SQL = """
-- Organizations table: employers, addressed by their handle
CREATE TABLE IF NOT EXISTS organizations (
    handle          VARCHAR(25) PRIMARY KEY CHECK (handle = lower(handle)),
    name            TEXT UNIQUE NOT NULL,
    num_employees   INTEGER CHECK (num_employees >= 0),
    description     TEXT NOT NULL,
    logo_url        TEXT
);

-- Postings table: open positions, each owned by one organization
CREATE TABLE IF NOT EXISTS postings (
    id                  SERIAL PRIMARY KEY,
    title               TEXT NOT NULL,
    salary              INTEGER CHECK (salary >= 0),
    equity              NUMERIC CHECK (equity <= 1.0),
    organization_handle VARCHAR(25) NOT NULL
        REFERENCES organizations(handle) ON DELETE CASCADE
);

-- Indexes for the listing and lookup queries
CREATE INDEX IF NOT EXISTS idx_organizations_name ON organizations(name);
CREATE INDEX IF NOT EXISTS idx_postings_title ON postings(title);
CREATE INDEX IF NOT EXISTS idx_postings_organization ON postings(organization_handle);
"""


def create_tables() -> None:
    """
    Execute the schema SQL to create all tables.
    Safe to call multiple times (uses IF NOT EXISTS).
    """
    run_query(SCHEMA_SQL)
    logger.info("Database schema initialized successfully.")


if __name__ == "__main__":
    from db.connection import init_pool, close_pool
    init_pool()
    try:
        create_tables()
    finally:
        close_pool()
