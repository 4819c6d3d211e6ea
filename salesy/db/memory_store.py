# salesy/db/memory_store.py
import copy
import uuid
from datetime import datetime, timedelta
from typing import Dict, Any, Optional, List

from salesy.db.interface import StoreInterface
from salesy.exceptions import StoreError, AuthenticationError, NotFoundError
from salesy.models import AuthSession, PRODUCTS_TABLE, SALES_HISTORY_TABLE

class InMemoryStore(StoreInterface):
    """Dictionary-backed store for tests and dry runs.

    Insert failures can be scheduled with fail_insert() to exercise the
    partial-failure paths of the import pipeline.
    """

    def __init__(self, user_id: Optional[str] = None, users: Dict[str, str] = None):
        """Initialize the store.

        Args:
            user_id: User already signed in, if any
            users: Known accounts as {email: password}
        """
        self.tables: Dict[str, List[Dict[str, Any]]] = {
            PRODUCTS_TABLE: [],
            SALES_HISTORY_TABLE: [],
        }
        self.users = dict(users or {})
        self.insert_calls: List[tuple] = []
        self._user_id = user_id
        self._insert_failures: Dict[tuple, str] = {}
        self._last_timestamp = None

    def fail_insert(self, table_name: str, call_number: int, message: str = "insert rejected") -> None:
        """Make the Nth insert call (1-based) on a table fail."""
        self._insert_failures[(table_name, call_number)] = message

    def _table(self, table_name: str) -> List[Dict[str, Any]]:
        if table_name not in self.tables:
            raise StoreError(f"Unknown table: {table_name}")
        return self.tables[table_name]

    def _timestamp(self) -> datetime:
        # Strictly increasing so ordering by created_at is stable
        now = datetime.now()
        if self._last_timestamp is not None and now <= self._last_timestamp:
            now = self._last_timestamp + timedelta(microseconds=1)
        self._last_timestamp = now
        return now

    @staticmethod
    def _matches(row: Dict[str, Any], filters: Dict[str, Any]) -> bool:
        for key, value in filters.items():
            if isinstance(value, list):
                if row.get(key) not in value:
                    return False
            elif row.get(key) != value:
                return False
        return True

    def authenticate(self, email: str, password: str) -> AuthSession:
        if self.users.get(email) != password:
            raise AuthenticationError("Invalid login credentials")
        self._user_id = str(uuid.uuid5(uuid.NAMESPACE_URL, email))
        return AuthSession(user_id=self._user_id, email=email, access_token=uuid.uuid4().hex)

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
        rows = [row for row in self._table(table_name) if self._matches(row, filters or {})]
        if order_by:
            rows.sort(key=lambda row: (row.get(order_by) is None, row.get(order_by)), reverse=descending)
        if limit:
            rows = rows[:limit]
        return copy.deepcopy(rows)

    def count(self, table_name: str, filters: Dict[str, Any] = None) -> int:
        return sum(1 for row in self._table(table_name) if self._matches(row, filters or {}))

    def insert(self, table_name: str, rows: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
        table = self._table(table_name)
        call_number = sum(1 for name, _ in self.insert_calls if name == table_name) + 1
        self.insert_calls.append((table_name, len(rows)))

        failure = self._insert_failures.get((table_name, call_number))
        if failure:
            raise StoreError(failure)

        stored = []
        for row in rows:
            record = dict(row)
            record.setdefault('id', str(uuid.uuid4()))
            record.setdefault('created_at', self._timestamp())
            if table_name == PRODUCTS_TABLE:
                record.setdefault('updated_at', record['created_at'])
            stored.append(record)

        table.extend(stored)
        return copy.deepcopy(stored)

    def update(self, table_name: str, row_id: Any, patch: Dict[str, Any]) -> Dict[str, Any]:
        for row in self._table(table_name):
            if row.get('id') == row_id:
                row.update(patch)
                if table_name == PRODUCTS_TABLE:
                    row['updated_at'] = self._timestamp()
                return dict(row)
        raise NotFoundError(f"No {table_name} row with id {row_id}")

    def delete(self, table_name: str, row_id: Any) -> bool:
        table = self._table(table_name)
        for index, row in enumerate(table):
            if row.get('id') == row_id:
                del table[index]
                return True
        raise NotFoundError(f"No {table_name} row with id {row_id}")
