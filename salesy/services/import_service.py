# salesy/services/import_service.py
import logging
from pathlib import Path
from typing import Callable, List, Optional, Tuple, Union

from salesy.config import config
from salesy.core.csv_parser import parse
from salesy.core.reconciler import ReconciliationPlan, reconcile
from salesy.core.upload_state import UploadStatus
from salesy.db.interface import StoreInterface
from salesy.exceptions import (
    InvalidFileType, NotAuthenticatedError, ProductCreationError, StoreError, ValidationError
)
from salesy.logging_setup import logger as log_manager, log_exception
from salesy.models import ImportSummary, SaleRecord
from salesy.services.product_service import ProductService
from salesy.services.sales_history_service import check_batch_size, write_batches

logger = logging.getLogger(__name__)

class SalesImportService:
    """Imports sales history CSV files for the signed-in user.

    The run is strictly sequential: session check, product read, product
    creation, then each sales batch in order. Nothing is rolled back when a
    later batch fails.
    """

    def __init__(self, store: StoreInterface, batch_size: Optional[int] = None):
        """Initialize the import service.

        Args:
            store: Data store
            batch_size: Rows per sales insert, defaults to IMPORT.batch_size
        """
        self.store = store
        self.products = ProductService(store)
        if batch_size is None:
            batch_size = config.import_config['batch_size']
        self.batch_size = check_batch_size(batch_size)
        self.allowed_extension = config.import_config['allowed_extension']

    def check_file_name(self, file_name: str) -> None:
        if not file_name.endswith(self.allowed_extension):
            raise InvalidFileType(
                f"Please upload a CSV file (got {file_name})",
                code='INVALID_FILE_TYPE',
                details={'file_name': file_name}
            )

    def import_file(self, path: Union[str, Path], status: Optional[UploadStatus] = None) -> ImportSummary:
        """Import a CSV file from disk.

        Args:
            path: Path to the file
            status: Optional upload state to drive

        Returns:
            ImportSummary
        """
        path = Path(path)
        self.check_file_name(path.name)

        def read_text() -> str:
            try:
                return path.read_text(encoding='utf-8-sig')
            except (OSError, UnicodeDecodeError) as e:
                raise ValidationError(f"Could not read {path.name}: {str(e)}", code='UNREADABLE_FILE')

        return self._run(path.name, read_text, status)

    def import_text(self, file_name: str, text: str, status: Optional[UploadStatus] = None) -> ImportSummary:
        """Import CSV content that has already been read.

        Args:
            file_name: Name of the uploaded file
            text: File content
            status: Optional upload state to drive

        Returns:
            ImportSummary
        """
        self.check_file_name(file_name)
        return self._run(file_name, lambda: text, status)

    def _run(self, file_name: str, load_text: Callable[[], str], status: Optional[UploadStatus]) -> ImportSummary:
        if status is not None:
            status.start(file_name)

        log_info = log_manager.import_start_log(f"sales CSV {file_name}")
        try:
            summary = self._import(file_name, load_text)
        except Exception as e:
            if status is not None:
                status.fail(getattr(e, 'message', None) or str(e))
            log_manager.import_end_log(log_info, success=False, result_info={'error': str(e)})
            raise

        if status is not None:
            status.succeed(summary)
        log_manager.import_end_log(log_info, success=True, result_info=summary.to_dict())
        return summary

    def _import(self, file_name: str, load_text: Callable[[], str]) -> ImportSummary:
        user_id = self.store.current_user()
        if not user_id:
            raise NotAuthenticatedError("You must be logged in to import sales data")

        text = load_text()
        if not text.strip():
            raise ValidationError(f"{file_name} is empty", code='EMPTY_FILE')

        records = parse(text)
        if not records:
            raise ValidationError(f"No valid rows found in {file_name}", code='NO_VALID_ROWS')
        logger.info(f"Parsed {len(records)} sales rows from {file_name}")

        plan, created_count, creation_error = self._resolve_products(records, user_id)

        rows = [
            record.to_row(user_id, plan.product_id_for(record.product_name))
            for record in records
        ]
        inserted_count = write_batches(self.store, rows, self.batch_size)
        logger.info(f"Inserted {inserted_count} sales rows from {file_name}")

        return ImportSummary(
            file_name=file_name,
            inserted_count=inserted_count,
            new_product_count=created_count,
            product_creation_error=creation_error.message if creation_error else None
        )

    def _resolve_products(
        self,
        records: List[SaleRecord],
        user_id: str
    ) -> Tuple[ReconciliationPlan, int, Optional[ProductCreationError]]:
        """Reconcile product names, creating the missing ones.

        A failed product insert is logged and skipped so the sales rows are
        still recorded, with no product_id for the names it would have added.

        Returns:
            Tuple of (ReconciliationPlan, number of products created,
            ProductCreationError or None)
        """
        existing = self.products.get_products_for_user(user_id)
        plan = reconcile(records, existing, user_id)
        if not plan.new_products:
            return plan, 0, None

        try:
            created = self.products.create_products(plan.new_products)
        except StoreError as e:
            error = ProductCreationError(
                f"Could not create {len(plan.new_products)} new products: {e.message}",
                code='PRODUCT_CREATION_FAILED',
                details={'names': [product['name'] for product in plan.new_products]}
            )
            log_exception('salesy.imports', error, "Continuing import without new products",
                          level=logging.WARNING)
            return plan, 0, error

        plan.merge_created(created)
        logger.info(f"Created {len(created)} new products")
        return plan, len(created), None
