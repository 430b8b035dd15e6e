"""
Database Module
"""
from .connection import init_database, close_database, get_db, get_db_dependency, get_engine
from .models import Base
from .warehouse import WAREHOUSE_TABLES, fetch_table, load_snapshot

__all__ = [
    "init_database",
    "close_database",
    "get_db",
    "get_db_dependency",
    "get_engine",
    "Base",
    "WAREHOUSE_TABLES",
    "fetch_table",
    "load_snapshot",
]
