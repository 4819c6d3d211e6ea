# salesy/db/connection.py
from typing import Literal

from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from supabase import create_client, Client

from salesy.config import config
from salesy.exceptions import ConfigError, StoreError
from salesy.models import Base
from salesy.db.interface import StoreInterface
from salesy.db.memory_store import InMemoryStore
from salesy.db.sql_store import SqlAlchemyStore
from salesy.db.supabase_store import SupabaseStore

DatabaseType = Literal["supabase", "postgresql", "sqlite", "memory"]

SQL_TYPES = ("postgresql", "sqlite")

class DatabaseConnection:
    """Builds the configured store backend on first use."""

    _instance = None

    def __new__(cls):
        """Ensure singleton pattern."""
        if cls._instance is None:
            cls._instance = super().__new__(cls)
            cls._instance._store = None
            cls._instance._engine = None
            cls._instance._db_type = None
        return cls._instance

    @staticmethod
    def get_db_type() -> DatabaseType:
        """Get database type from configuration."""
        db_type = config.get('DATABASE', 'type', default='supabase').lower()
        # Remove any comments from the value
        return db_type.split('#')[0].strip()

    def _initialize_supabase(self) -> StoreInterface:
        supabase_config = config.supabase_config
        if not supabase_config['url'] or not supabase_config['key']:
            raise ConfigError("Supabase URL and key must be provided")

        try:
            client: Client = create_client(supabase_config['url'], supabase_config['key'])
        except Exception as e:
            raise StoreError(f"Failed to initialize Supabase connection: {str(e)}")

        return SupabaseStore(client)

    def _initialize_sql(self) -> StoreInterface:
        try:
            self._engine = create_engine(
                config.get_db_url(),
                echo=config.get_boolean('DATABASE', 'echo', default=False)
            )
        except Exception as e:
            raise StoreError(f"Failed to initialize database connection: {str(e)}")

        session_factory = sessionmaker(autocommit=False, autoflush=False, bind=self._engine)
        return SqlAlchemyStore(session_factory, user_id=config.get('DATABASE', 'local_user_id', ''))

    def get_store(self) -> StoreInterface:
        """Get the store for the configured backend, creating it if needed."""
        if self._store is not None:
            return self._store

        db_type = self.get_db_type()
        if db_type == "supabase":
            self._store = self._initialize_supabase()
        elif db_type in SQL_TYPES:
            self._store = self._initialize_sql()
        elif db_type == "memory":
            self._store = InMemoryStore(user_id=config.get('DATABASE', 'local_user_id', '') or None)
        else:
            raise ConfigError(f"Unknown database type: {db_type}")

        self._db_type = db_type
        return self._store

    def reset(self) -> None:
        """Forget the current store, e.g. after the config changed."""
        if self._engine is not None:
            self._engine.dispose()
        self._store = None
        self._engine = None
        self._db_type = None

    @property
    def engine(self):
        """Get SQLAlchemy engine (SQL backends only)."""
        self.get_store()
        if self._db_type not in SQL_TYPES:
            raise StoreError("engine is only available for SQL database connections")
        return self._engine

    @property
    def db_type(self) -> DatabaseType:
        return self._db_type or self.get_db_type()

# Singleton instance
db = DatabaseConnection()

def get_store() -> StoreInterface:
    """Get the store for the configured backend."""
    return db.get_store()

def create_all_tables():
    """Create all tables (SQL backends only)."""
    Base.metadata.create_all(bind=db.engine)

def drop_all_tables():
    """Drop all tables (SQL backends only)."""
    Base.metadata.drop_all(bind=db.engine)
