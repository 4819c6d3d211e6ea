"""
Tests for dashboard reporting.
"""
import unittest

from salesy.db.memory_store import InMemoryStore
from salesy.exceptions import NotAuthenticatedError
from salesy.models import PRODUCTS_TABLE, SALES_HISTORY_TABLE
from salesy.services.reporting_service import ReportingService, dashboard_summary, top_products_by_units


def sale(name, quantity, date='2024-01-01'):
    return {'product_name': name, 'quantity_sold': quantity, 'sale_date': date}


class TestTopProducts(unittest.TestCase):

    def test_ranks_by_total_units(self):
        sales = [sale('Pen', 3), sale('Ink', 10), sale('Pen', 9), sale('Nib', 1)]
        self.assertEqual(top_products_by_units(sales, limit=2), [('Pen', 12), ('Ink', 10)])

    def test_ties_broken_by_name(self):
        sales = [sale('Pen', 5), sale('Ink', 5), sale('Nib', 5)]
        self.assertEqual(top_products_by_units(sales), [('Ink', 5), ('Nib', 5), ('Pen', 5)])

    def test_empty(self):
        self.assertEqual(top_products_by_units([]), [])
        self.assertEqual(top_products_by_units([sale('Pen', 1)], limit=0), [])


class TestDashboardSummary(unittest.TestCase):

    def test_summary(self):
        products = [
            {'id': 'p1', 'name': 'Pen', 'current_stock': 2, 'reorder_level': 10},
            {'id': 'p2', 'name': 'Ink', 'current_stock': 12, 'reorder_level': 10},
            {'id': 'p3', 'name': 'Nib', 'current_stock': 30, 'reorder_level': 10},
        ]
        sales = [sale('Pen', 4), sale('Ink', 6), sale('Pen', 1)]

        summary = dashboard_summary(products, sales, medium_multiplier=1.5, top_n=1)

        self.assertEqual(summary['active_skus'], 3)
        self.assertEqual(summary['critical_alerts'], 1)
        self.assertEqual(summary['low_stock_items'], 2)
        self.assertEqual(summary['risk_breakdown'], {'low': 1, 'medium': 1, 'high': 1})
        self.assertEqual(summary['total_units_sold'], 11)
        self.assertEqual(summary['top_products'], [('Ink', 6)])

    def test_empty_catalog(self):
        summary = dashboard_summary([], [], medium_multiplier=1.5, top_n=5)
        self.assertEqual(summary['active_skus'], 0)
        self.assertEqual(summary['total_units_sold'], 0)
        self.assertEqual(summary['top_products'], [])


class TestReportingService(unittest.TestCase):

    def test_dashboard_for_signed_in_user(self):
        store = InMemoryStore(user_id='user-1')
        store.insert(PRODUCTS_TABLE, [{'user_id': 'user-1', 'name': 'Pen', 'current_stock': 0, 'reorder_level': 3}])
        store.insert(SALES_HISTORY_TABLE, [
            {'user_id': 'user-1', **sale('Pen', 7)},
            {'user_id': 'user-2', **sale('Ink', 100)},
        ])

        summary = ReportingService(store).dashboard(sales_limit=10)

        self.assertEqual(summary['active_skus'], 1)
        self.assertEqual(summary['critical_alerts'], 1)
        self.assertEqual(summary['total_units_sold'], 7)
        self.assertEqual(summary['total_sales_records'], 1)

    def test_dashboard_requires_user(self):
        with self.assertRaises(NotAuthenticatedError):
            ReportingService(InMemoryStore()).dashboard()


if __name__ == '__main__':
    unittest.main()
