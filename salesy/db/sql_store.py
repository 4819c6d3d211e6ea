# salesy/db/sql_store.py
import logging
from contextlib import contextmanager
from typing import Dict, Any, Optional, List, Type

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from salesy.db.interface import StoreInterface
from salesy.exceptions import StoreError, AuthenticationError, NotFoundError
from salesy.models import Base, TABLE_MODELS, AuthSession

logger = logging.getLogger(__name__)

class SqlAlchemyStore(StoreInterface):
    """Store backed directly by PostgreSQL (or SQLite) through SQLAlchemy.

    There is no auth provider behind a plain database, so the signed-in user
    is the configured local user id.
    """

    def __init__(self, session_factory: sessionmaker, user_id: Optional[str] = None):
        """Initialize the store.

        Args:
            session_factory: SQLAlchemy sessionmaker bound to an engine
            user_id: Local user every operation runs as
        """
        self._session_factory = session_factory
        self._user_id = user_id or None

    @contextmanager
    def session_scope(self) -> Session:
        """Provide a transactional scope around a series of operations."""
        session = self._session_factory()
        try:
            yield session
            session.commit()
        except SQLAlchemyError as e:
            session.rollback()
            raise StoreError(f"Database error: {str(e)}")
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()

    def _get_model(self, table_name: str) -> Type[Base]:
        try:
            return TABLE_MODELS[table_name]
        except KeyError:
            raise StoreError(f"Unknown table: {table_name}")

    def _model_to_dict(self, instance: Base) -> Dict[str, Any]:
        """Convert model instance to dictionary."""
        return {column.name: getattr(instance, column.name) for column in instance.__table__.columns}

    def _check_columns(self, model_class: Type[Base], data: Dict[str, Any]) -> None:
        unknown = set(data) - {column.name for column in model_class.__table__.columns}
        if unknown:
            raise StoreError(f"Unknown columns for {model_class.__tablename__}: {sorted(unknown)}")

    def authenticate(self, email: str, password: str) -> AuthSession:
        raise AuthenticationError(
            "Password sign-in needs the Supabase backend; set DATABASE.local_user_id instead"
        )

    def sign_out(self) -> None:
        self._user_id = None

    def current_user(self) -> Optional[str]:
        return self._user_id

    def query(
        self,
        table_name: str,
        filters: Dict[str, Any] = None,
        order_by: str = None,
        descending: bool = False,
        limit: int = None
    ) -> List[Dict[str, Any]]:
        """Query rows from a table."""
        model_class = self._get_model(table_name)

        with self.session_scope() as session:
            query = session.query(model_class)
            if filters:
                for key, value in filters.items():
                    if isinstance(value, list):
                        query = query.filter(getattr(model_class, key).in_(value))
                    else:
                        query = query.filter(getattr(model_class, key) == value)
            if order_by:
                column = getattr(model_class, order_by)
                query = query.order_by(column.desc() if descending else column.asc())
            if limit:
                query = query.limit(limit)
            return [self._model_to_dict(instance) for instance in query.all()]

    def count(self, table_name: str, filters: Dict[str, Any] = None) -> int:
        model_class = self._get_model(table_name)

        with self.session_scope() as session:
            query = session.query(model_class)
            for key, value in (filters or {}).items():
                if isinstance(value, list):
                    query = query.filter(getattr(model_class, key).in_(value))
                else:
                    query = query.filter(getattr(model_class, key) == value)
            return query.count()

    def insert(self, table_name: str, rows: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
        """Insert all rows in a single transaction."""
        model_class = self._get_model(table_name)
        for row in rows:
            self._check_columns(model_class, row)

        with self.session_scope() as session:
            instances = [model_class(**row) for row in rows]
            session.add_all(instances)
            session.flush()
            for instance in instances:
                session.refresh(instance)
            return [self._model_to_dict(instance) for instance in instances]

    def update(self, table_name: str, row_id: Any, patch: Dict[str, Any]) -> Dict[str, Any]:
        model_class = self._get_model(table_name)
        self._check_columns(model_class, patch)

        with self.session_scope() as session:
            instance = session.get(model_class, row_id)
            if instance is None:
                raise NotFoundError(f"No {table_name} row with id {row_id}")
            for key, value in patch.items():
                setattr(instance, key, value)
            session.flush()
            session.refresh(instance)
            return self._model_to_dict(instance)

    def delete(self, table_name: str, row_id: Any) -> bool:
        model_class = self._get_model(table_name)

        with self.session_scope() as session:
            instance = session.get(model_class, row_id)
            if instance is None:
                raise NotFoundError(f"No {table_name} row with id {row_id}")
            session.delete(instance)
            return True
