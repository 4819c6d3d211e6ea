# salesy/db/interface.py
from abc import ABC, abstractmethod
from typing import Dict, Any, Optional, List

from salesy.models import AuthSession

class StoreInterface(ABC):
    """Capabilities Salesy needs from a data store and auth provider.

    Rows travel as plain dictionaries keyed by column name. Every failure is
    raised as a StoreError (or AuthenticationError for sign-in).
    """

    @abstractmethod
    def authenticate(self, email: str, password: str) -> AuthSession:
        """Sign in with email and password."""
        pass

    @abstractmethod
    def sign_out(self) -> None:
        """Drop the current session."""
        pass

    @abstractmethod
    def current_user(self) -> Optional[str]:
        """Return the signed-in user's id, or None."""
        pass

    @abstractmethod
    def query(
        self,
        table_name: str,
        filters: Dict[str, Any] = None,
        order_by: str = None,
        descending: bool = False,
        limit: int = None
    ) -> List[Dict[str, Any]]:
        """Query rows from a table."""
        pass

    @abstractmethod
    def count(self, table_name: str, filters: Dict[str, Any] = None) -> int:
        """Count rows matching the filters."""
        pass

    @abstractmethod
    def insert(self, table_name: str, rows: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
        """Insert rows in one atomic call and return them as stored."""
        pass

    @abstractmethod
    def update(self, table_name: str, row_id: Any, patch: Dict[str, Any]) -> Dict[str, Any]:
        """Update one row by id and return it."""
        pass

    @abstractmethod
    def delete(self, table_name: str, row_id: Any) -> bool:
        """Delete one row by id."""
        pass
