"""
Repository layer for data access.

`base` holds the gateway adapter that executes statements against an
AsyncSession; `queries` holds the statement catalogue with named bind
parameters. Repositories assume the caller owns the session lifecycle
(e.g., via src.db.session.unit_of_work).
"""
