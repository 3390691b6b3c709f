"""
Persistence adapters.

Two interchangeable implementations of StorageAdapter: a single JSON document
on disk and a SQL database (Postgres in production, SQLite in tests).
Routers depend on the contract in base.py, never on a concrete backend.
"""

from .base import StorageAdapter
from .json_storage import JsonStorage
from .sql_repository import SQLRepository

__all__ = ["StorageAdapter", "JsonStorage", "SQLRepository"]
