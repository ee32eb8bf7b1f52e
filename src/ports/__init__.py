"""Port interfaces - Layer boundary contracts.

Ports:
    DatabasePort - Uniform key-value database access, implemented by every
                   backend adapter and by the cache composites.
"""

from src.ports.database_port import DatabasePort

__all__ = [
    "DatabasePort",
]
