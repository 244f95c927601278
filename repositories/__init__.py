"""
repositories/ - Data Access Layer
==================================
One repository per table. Each splices the fragments from `query/` into its
fixed SQL templates, runs them through `db.connection.run_query`, and turns
rows back into domain model objects.
"""
