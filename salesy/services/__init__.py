from .product_service import ProductService
from .sales_history_service import SalesHistoryService, write_batches
from .import_service import SalesImportService
from .auth_service import AuthService
from .alert_service import AlertInbox, build_stock_alerts
from .reporting_service import ReportingService, dashboard_summary

__all__ = [
    'ProductService',
    'SalesHistoryService',
    'write_batches',
    'SalesImportService',
    'AuthService',
    'AlertInbox',
    'build_stock_alerts',
    'ReportingService',
    'dashboard_summary'
]
