"""
End-to-end tests for the sales CSV import pipeline.
"""
import os
import tempfile
import unittest
from unittest.mock import patch

from salesy.core.upload_state import UploadState, UploadStatus
from salesy.db.memory_store import InMemoryStore
from salesy.exceptions import (
    BatchInsertError, InvalidFileType, NotAuthenticatedError, ValidationError
)
from salesy.models import PRODUCTS_TABLE, SALES_HISTORY_TABLE
from salesy.services.import_service import SalesImportService

NAMES = ['Pilot Pen Blue', 'Doms Pencils HB', 'Classmate Notebook', 'Fevicol 50g',
         'Camlin Geometry Box', 'Apsara Eraser', 'Natraj Sharpener']


def build_csv(row_count, names=NAMES):
    lines = ["Date,Product Name,Quantity Sold,Brand,Festival"]
    for i in range(row_count):
        festival = 'Diwali' if i % 10 == 0 else ''
        lines.append(f"2024-10-{(i % 28) + 1:02d},{names[i % len(names)]},{i % 9 + 1},Brand {i % 3},{festival}")
    return "\n".join(lines) + "\n"


class TestSalesImport(unittest.TestCase):

    def setUp(self):
        self.store = InMemoryStore(user_id='user-1')
        self.service = SalesImportService(self.store, batch_size=100)

    def sales_calls(self):
        return [size for table, size in self.store.insert_calls if table == SALES_HISTORY_TABLE]

    def product_calls(self):
        return [size for table, size in self.store.insert_calls if table == PRODUCTS_TABLE]

    def test_full_import(self):
        status = UploadStatus()
        summary = self.service.import_text('sales.csv', build_csv(150), status=status)

        self.assertEqual(summary.file_name, 'sales.csv')
        self.assertEqual(summary.inserted_count, 150)
        self.assertEqual(summary.new_product_count, len(NAMES))
        self.assertIsNone(summary.product_creation_error)

        # One product insert, then sales in two contiguous batches
        self.assertEqual(self.product_calls(), [len(NAMES)])
        self.assertEqual(self.sales_calls(), [100, 50])
        self.assertEqual(self.store.insert_calls[0][0], PRODUCTS_TABLE)

        products = {p['name']: p for p in self.store.tables[PRODUCTS_TABLE]}
        self.assertEqual(set(products), set(NAMES))
        for product in products.values():
            self.assertEqual(product['user_id'], 'user-1')
            self.assertEqual(product['current_stock'], 0)
            self.assertEqual(product['reorder_level'], 0)

        sales = self.store.tables[SALES_HISTORY_TABLE]
        for row in sales:
            self.assertEqual(row['user_id'], 'user-1')
            self.assertEqual(row['product_id'], products[row['product_name']]['id'])
        self.assertEqual(sales[0]['festival'], 'Diwali')
        self.assertIsNone(sales[1]['festival'])

        self.assertIs(status.state, UploadState.SUCCESS)
        self.assertEqual(status.summary, summary)

    def test_reimport_creates_no_new_products(self):
        self.service.import_text('sales.csv', build_csv(20))
        upper_names = [name.upper() for name in NAMES]
        summary = self.service.import_text('more.csv', build_csv(20, names=upper_names))

        self.assertEqual(summary.new_product_count, 0)
        self.assertEqual(len(self.store.tables[PRODUCTS_TABLE]), len(NAMES))
        self.assertEqual(self.product_calls(), [len(NAMES)])
        self.assertEqual(len(self.store.tables[SALES_HISTORY_TABLE]), 40)
        self.assertTrue(all(row['product_id'] for row in self.store.tables[SALES_HISTORY_TABLE]))

    def test_existing_products_reused(self):
        self.store.insert(PRODUCTS_TABLE, [{'user_id': 'user-1', 'name': 'Pilot Pen Blue', 'brand': 'Pilot'}])
        self.store.insert(PRODUCTS_TABLE, [{'user_id': 'other', 'name': 'Apsara Eraser', 'brand': 'Apsara'}])
        self.store.insert_calls.clear()

        summary = self.service.import_text('sales.csv', build_csv(14))

        self.assertEqual(summary.new_product_count, len(NAMES) - 1)
        user_products = [p for p in self.store.tables[PRODUCTS_TABLE] if p['user_id'] == 'user-1']
        self.assertEqual(len(user_products), len(NAMES))

    def test_missing_column_writes_nothing(self):
        text = "Date,Product Name,Brand\n2024-01-01,Pen,Pilot\n"
        status = UploadStatus()

        with self.assertRaises(ValidationError) as ctx:
            self.service.import_text('sales.csv', text, status=status)

        self.assertEqual(ctx.exception.code, 'MISSING_COLUMNS')
        self.assertIn('Quantity Sold', ctx.exception.message)
        self.assertEqual(self.store.insert_calls, [])
        self.assertIs(status.state, UploadState.ERROR)
        self.assertEqual(status.error_message, ctx.exception.message)

    def test_empty_file(self):
        with self.assertRaises(ValidationError) as ctx:
            self.service.import_text('sales.csv', "  \n\n")
        self.assertEqual(ctx.exception.code, 'EMPTY_FILE')
        self.assertEqual(self.store.insert_calls, [])

    def test_no_valid_rows(self):
        text = "Date,Product Name,Quantity Sold\n2024-01-01,Pen,many\n,Ink,3\n"
        with self.assertRaises(ValidationError) as ctx:
            self.service.import_text('sales.csv', text)
        self.assertEqual(ctx.exception.code, 'NO_VALID_ROWS')
        self.assertEqual(self.store.insert_calls, [])

    def test_invalid_file_type_leaves_status_idle(self):
        status = UploadStatus()
        with self.assertRaises(InvalidFileType) as ctx:
            self.service.import_text('sales.xlsx', build_csv(5), status=status)

        self.assertEqual(ctx.exception.code, 'INVALID_FILE_TYPE')
        self.assertIs(status.state, UploadState.IDLE)
        self.assertEqual(self.store.insert_calls, [])

    def test_extension_check_is_case_sensitive(self):
        with self.assertRaises(InvalidFileType):
            self.service.import_text('SALES.CSV', build_csv(5))

    def test_not_authenticated_checked_before_parsing(self):
        self.store.sign_out()
        status = UploadStatus()

        # Malformed content still reports the missing session
        with self.assertRaises(NotAuthenticatedError):
            self.service.import_text('sales.csv', "garbage", status=status)

        self.assertEqual(self.store.insert_calls, [])
        self.assertIs(status.state, UploadState.ERROR)

    def test_product_creation_failure_still_imports_sales(self):
        self.store.insert(PRODUCTS_TABLE, [{'user_id': 'user-1', 'name': 'Pilot Pen Blue', 'brand': 'Pilot'}])
        existing_id = self.store.tables[PRODUCTS_TABLE][0]['id']
        self.store.insert_calls.clear()
        self.store.fail_insert(PRODUCTS_TABLE, 1, "duplicate key value")

        summary = self.service.import_text('sales.csv', build_csv(21))

        self.assertEqual(summary.inserted_count, 21)
        self.assertEqual(summary.new_product_count, 0)
        self.assertIn("duplicate key value", summary.product_creation_error)
        self.assertEqual(len(self.store.tables[PRODUCTS_TABLE]), 1)

        for row in self.store.tables[SALES_HISTORY_TABLE]:
            if row['product_name'] == 'Pilot Pen Blue':
                self.assertEqual(row['product_id'], existing_id)
            else:
                self.assertIsNone(row['product_id'])

    def test_batch_failure_reports_progress(self):
        self.store.fail_insert(SALES_HISTORY_TABLE, 2, "timeout")
        status = UploadStatus()

        with self.assertRaises(BatchInsertError) as ctx:
            self.service.import_text('sales.csv', build_csv(250), status=status)

        self.assertEqual(ctx.exception.start_row, 101)
        self.assertEqual(ctx.exception.inserted_count, 100)
        self.assertEqual(len(self.store.tables[SALES_HISTORY_TABLE]), 100)
        # Products created before the failure are kept
        self.assertEqual(len(self.store.tables[PRODUCTS_TABLE]), len(NAMES))
        self.assertIs(status.state, UploadState.ERROR)
        self.assertIn("row 101", status.error_message)

    def test_invalid_batch_size_rejected_before_store(self):
        for batch_size in (0, -1):
            with self.assertRaises(ValidationError) as ctx:
                SalesImportService(self.store, batch_size=batch_size)
            self.assertEqual(ctx.exception.code, 'INVALID_BATCH_SIZE')

        self.assertEqual(self.store.insert_calls, [])
        self.assertEqual(self.store.tables[PRODUCTS_TABLE], [])

    def test_new_product_count_reflects_created_rows(self):
        store_insert = self.store.insert

        def insert(table_name, rows):
            stored = store_insert(table_name, rows)
            return stored[:1] if table_name == PRODUCTS_TABLE else stored

        with patch.object(self.store, 'insert', side_effect=insert):
            summary = self.service.import_text('sales.csv', build_csv(14))

        self.assertEqual(summary.new_product_count, 1)
        self.assertEqual(summary.inserted_count, 14)

    def test_import_file_reads_utf8_with_bom(self):
        with tempfile.TemporaryDirectory() as tmp_dir:
            path = os.path.join(tmp_dir, 'sales.csv')
            with open(path, 'w', encoding='utf-8-sig') as f:
                f.write(build_csv(3))

            summary = self.service.import_file(path)

        self.assertEqual(summary.file_name, 'sales.csv')
        self.assertEqual(summary.inserted_count, 3)

    def test_import_file_missing(self):
        with tempfile.TemporaryDirectory() as tmp_dir:
            with self.assertRaises(ValidationError) as ctx:
                self.service.import_file(os.path.join(tmp_dir, 'absent.csv'))
        self.assertEqual(ctx.exception.code, 'UNREADABLE_FILE')

    def test_status_can_be_reused(self):
        status = UploadStatus()
        with self.assertRaises(ValidationError):
            self.service.import_text('sales.csv', "", status=status)
        self.service.import_text('sales.csv', build_csv(2), status=status)
        self.assertIs(status.state, UploadState.SUCCESS)


if __name__ == '__main__':
    unittest.main()
