# salesy/services/sales_history_service.py
import logging
from typing import Any, Dict, List, Optional, Tuple

from salesy.config import config
from salesy.db.interface import StoreInterface
from salesy.exceptions import BatchInsertError, NotAuthenticatedError, StoreError, ValidationError
from salesy.models import SALES_HISTORY_TABLE

logger = logging.getLogger(__name__)

DEFAULT_BATCH_SIZE = 100

def check_batch_size(batch_size: int) -> int:
    """Return batch_size, raising ValidationError unless it is a positive integer."""
    if isinstance(batch_size, bool) or not isinstance(batch_size, int) or batch_size < 1:
        raise ValidationError(
            f"Batch size must be a positive integer, got {batch_size!r}",
            code='INVALID_BATCH_SIZE'
        )
    return batch_size

def write_batches(
    store: StoreInterface,
    rows: List[Dict[str, Any]],
    batch_size: int = DEFAULT_BATCH_SIZE
) -> int:
    """Insert sales history rows in contiguous, sequential batches.

    Each batch is one insert call. The first failing batch stops the run;
    batches before it stay inserted.

    Args:
        store: Data store
        rows: Complete sales_history rows
        batch_size: Rows per insert call

    Returns:
        Number of rows inserted

    Raises:
        ValidationError: If batch_size is not a positive integer
        BatchInsertError: With the 1-based first row of the failing batch and
            the count inserted before it
    """
    check_batch_size(batch_size)

    inserted_count = 0
    for start in range(0, len(rows), batch_size):
        batch = rows[start:start + batch_size]
        batch_number = start // batch_size + 1
        try:
            store.insert(SALES_HISTORY_TABLE, batch)
        except StoreError as e:
            logger.error(
                f"Failed to insert batch {batch_number} (rows {start + 1}-{start + len(batch)}): {e.message}"
            )
            raise BatchInsertError(
                start_row=start + 1,
                inserted_count=inserted_count,
                message=f"Failed to insert batch {batch_number} starting at row {start + 1}: {e.message}",
                code='BATCH_INSERT_FAILED'
            )

        inserted_count += len(batch)
        logger.debug(f"Inserted batch {batch_number} ({len(batch)} rows)")

    return inserted_count

class SalesHistoryService:
    """Service for reading and writing sales history."""

    def __init__(self, store: StoreInterface, batch_size: Optional[int] = None):
        """Initialize the sales history service.

        Args:
            store: Data store
            batch_size: Rows per insert call, defaults to IMPORT.batch_size
        """
        self.store = store
        if batch_size is None:
            batch_size = config.import_config['batch_size']
        self.batch_size = check_batch_size(batch_size)

    def insert_batch(self, rows: List[Dict[str, Any]]) -> int:
        """Store sales rows for the signed-in user.

        Args:
            rows: Rows with product_name, brand, quantity_sold, sale_date and
                optional festival / product_id

        Returns:
            Number of rows inserted
        """
        user_id = self.store.current_user()
        if not user_id:
            raise NotAuthenticatedError()

        insert_rows = []
        for row in rows:
            insert_row = dict(row)
            insert_row['user_id'] = user_id
            insert_row['festival'] = row.get('festival') or None
            insert_row['product_id'] = row.get('product_id') or None
            insert_rows.append(insert_row)

        return write_batches(self.store, insert_rows, self.batch_size)

    def fetch_sales(self, limit: Optional[int] = None) -> Tuple[List[Dict[str, Any]], int]:
        """Get the most recent sales of the signed-in user.

        Args:
            limit: Maximum rows, defaults to IMPORT.sales_history_limit

        Returns:
            Tuple of (rows, newest sale_date first; total row count)
        """
        user_id = self.store.current_user()
        if not user_id:
            raise NotAuthenticatedError()

        limit = limit or config.import_config['sales_history_limit']
        filters = {'user_id': user_id}
        rows = self.store.query(
            SALES_HISTORY_TABLE,
            filters=filters,
            order_by='sale_date',
            descending=True,
            limit=limit
        )
        return rows, self.store.count(SALES_HISTORY_TABLE, filters=filters)
