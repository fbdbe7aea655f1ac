"""
Persistence adapters.

SQLRepository is the only code that opens database sessions; services depend on
it instead of touching SQLAlchemy sessions directly.
"""

from .sql_repository import Credit, SQLRepository

__all__ = ["Credit", "SQLRepository"]
