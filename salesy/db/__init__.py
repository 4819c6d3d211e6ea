from .interface import StoreInterface
from .memory_store import InMemoryStore
from .sql_store import SqlAlchemyStore
from .supabase_store import SupabaseStore
from .connection import DatabaseConnection, db, get_store, create_all_tables, drop_all_tables

__all__ = [
    'StoreInterface',
    'InMemoryStore',
    'SqlAlchemyStore',
    'SupabaseStore',
    'DatabaseConnection',
    'db',
    'get_store',
    'create_all_tables',
    'drop_all_tables'
]
