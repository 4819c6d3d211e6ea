# salesy/db/supabase_store.py
import logging
from typing import Dict, Any, Optional, List

from salesy.db.interface import StoreInterface
from salesy.exceptions import StoreError, AuthenticationError, NotFoundError
from salesy.models import AuthSession

logger = logging.getLogger(__name__)

class SupabaseStore(StoreInterface):
    """Supabase implementation of the store interface."""

    def __init__(self, client):
        """Initialize with Supabase client."""
        self.client = client

    def _execute(self, query, action: str, table_name: str):
        try:
            result = query.execute()
        except Exception as e:
            raise StoreError(f"Supabase {action} error on {table_name}: {str(e)}")

        if hasattr(result, 'error') and result.error:
            raise StoreError(f"Supabase {action} error on {table_name}: {result.error}")

        return result

    def authenticate(self, email: str, password: str) -> AuthSession:
        """Sign in through Supabase auth."""
        try:
            response = self.client.auth.sign_in_with_password({
                'email': email,
                'password': password
            })
        except Exception as e:
            raise AuthenticationError(str(e))

        if not response or not response.user:
            raise AuthenticationError("Sign-in returned no user")

        access_token = response.session.access_token if response.session else None
        logger.info(f"Signed in as {response.user.email or email}")
        return AuthSession(
            user_id=response.user.id,
            email=response.user.email or email,
            access_token=access_token
        )

    def sign_out(self) -> None:
        try:
            self.client.auth.sign_out()
        except Exception as e:
            raise StoreError(f"Supabase sign-out error: {str(e)}")

    def current_user(self) -> Optional[str]:
        """Return the id of the user held by the client session."""
        try:
            response = self.client.auth.get_user()
        except Exception as e:
            logger.warning(f"Could not read Supabase session: {str(e)}")
            return None

        if not response or not response.user:
            return None
        return response.user.id

    def query(
        self,
        table_name: str,
        filters: Dict[str, Any] = None,
        order_by: str = None,
        descending: bool = False,
        limit: int = None
    ) -> List[Dict[str, Any]]:
        """Query data from a table using Supabase."""
        query = self.client.table(table_name).select('*')

        if filters:
            for key, value in filters.items():
                if isinstance(value, list):
                    query = query.in_(key, value)
                else:
                    query = query.eq(key, value)

        if order_by:
            query = query.order(order_by, desc=descending)

        if limit:
            query = query.limit(limit)

        result = self._execute(query, 'query', table_name)
        return result.data if result.data else []

    def count(self, table_name: str, filters: Dict[str, Any] = None) -> int:
        query = self.client.table(table_name).select('id', count='exact')

        if filters:
            for key, value in filters.items():
                if isinstance(value, list):
                    query = query.in_(key, value)
                else:
                    query = query.eq(key, value)

        result = self._execute(query, 'count', table_name)
        return result.count or 0

    def insert(self, table_name: str, rows: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
        """Insert rows into a table using Supabase."""
        if not rows:
            return []

        result = self._execute(self.client.table(table_name).insert(rows), 'insert', table_name)
        return result.data if result.data else []

    def update(self, table_name: str, row_id: Any, patch: Dict[str, Any]) -> Dict[str, Any]:
        """Update a row in a table using Supabase."""
        query = self.client.table(table_name).update(patch).eq('id', row_id)
        result = self._execute(query, 'update', table_name)

        if not result.data:
            raise NotFoundError(f"No {table_name} row with id {row_id}")
        return result.data[0]

    def delete(self, table_name: str, row_id: Any) -> bool:
        """Delete a row from a table using Supabase."""
        query = self.client.table(table_name).delete().eq('id', row_id)
        self._execute(query, 'delete', table_name)
        return True
