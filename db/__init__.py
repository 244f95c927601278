"""
db/ - Database Layer
====================
Owns the PostgreSQL connection pool, the schema, and the single
query-execution primitive (`run_query`) every repository goes through.
This layer is the lowest in the architecture and has no dependencies on other layers.
"""
