from .csv_parser import parse, normalize_header, find_column, REQUIRED_COLUMNS, OPTIONAL_COLUMNS
from .reconciler import reconcile, ReconciliationPlan, name_key
from .inventory_risk import classify_risk, product_risk, risk_breakdown
from .catalog import filter_products, distinct_values, paginate
from .upload_state import UploadState, UploadStatus

__all__ = [
    'parse',
    'normalize_header',
    'find_column',
    'REQUIRED_COLUMNS',
    'OPTIONAL_COLUMNS',
    'reconcile',
    'ReconciliationPlan',
    'name_key',
    'classify_risk',
    'product_risk',
    'risk_breakdown',
    'filter_products',
    'distinct_values',
    'paginate',
    'UploadState',
    'UploadStatus'
]
