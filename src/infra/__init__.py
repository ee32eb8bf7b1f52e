"""Infrastructure layer package.

Implements the DatabasePort with concrete adapters (hashmap, Redis, SQLite,
mock) and the cache composites layered over them.
Callers depend on src.ports.DatabasePort, not on these adapters directly.
"""
