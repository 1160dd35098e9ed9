"""
Pieces shared by the person and task features.

`core/` holds the asyncpg pool and transaction helpers, environment settings,
logging setup, the repository error types (`NotFoundError`, `WriteError`)
with the 400 handler for malformed requests, 32-bit id parsing, and the
schema bootstrap. Entity SQL stays in `person/` and `task/`.
"""
