# salesy/services/reporting_service.py
import logging
from typing import Any, Dict, List, Optional, Tuple

import numpy as np

from salesy.config import config
from salesy.core.inventory_risk import risk_breakdown
from salesy.db.interface import StoreInterface
from salesy.models import RiskLevel
from salesy.services.product_service import ProductService
from salesy.services.sales_history_service import SalesHistoryService

logger = logging.getLogger(__name__)

def top_products_by_units(sales: List[Dict[str, Any]], limit: int = 5) -> List[Tuple[str, int]]:
    """Rank products by total units sold.

    Args:
        sales: Sales history rows
        limit: Number of products to return

    Returns:
        List of (product_name, units) pairs, highest first; ties by name
    """
    if not sales or limit < 1:
        return []

    names = np.array([row['product_name'] for row in sales])
    quantities = np.array([row['quantity_sold'] for row in sales], dtype=np.int64)

    unique_names, inverse = np.unique(names, return_inverse=True)
    totals = np.bincount(inverse, weights=quantities).astype(np.int64)

    order = np.argsort(-totals, kind='stable')[:limit]
    return [(str(unique_names[i]), int(totals[i])) for i in order]

def dashboard_summary(
    products: List[Dict[str, Any]],
    sales: List[Dict[str, Any]],
    medium_multiplier: Optional[float] = None,
    top_n: Optional[int] = None
) -> Dict[str, Any]:
    """Compute the dashboard KPIs.

    Args:
        products: Product rows
        sales: Sales history rows
        medium_multiplier: Medium-risk margin, defaults to INVENTORY.medium_risk_multiplier
        top_n: Number of top sellers, defaults to INVENTORY.top_products

    Returns:
        Dictionary with active_skus, critical_alerts, low_stock_items,
        risk_breakdown, total_units_sold and top_products
    """
    inventory_config = config.inventory_config
    if medium_multiplier is None:
        medium_multiplier = inventory_config['medium_risk_multiplier']
    if top_n is None:
        top_n = inventory_config['top_products']

    breakdown = risk_breakdown(products, medium_multiplier)
    quantities = np.array([row['quantity_sold'] for row in sales], dtype=np.int64)

    return {
        'active_skus': len(products),
        'critical_alerts': breakdown[RiskLevel.HIGH.value],
        'low_stock_items': breakdown[RiskLevel.HIGH.value] + breakdown[RiskLevel.MEDIUM.value],
        'risk_breakdown': breakdown,
        'total_units_sold': int(quantities.sum()) if quantities.size else 0,
        'top_products': top_products_by_units(sales, top_n),
    }

class ReportingService:
    """Service for dashboard reports of the signed-in user."""

    def __init__(self, store: StoreInterface):
        """Initialize the reporting service.

        Args:
            store: Data store
        """
        self.products = ProductService(store)
        self.sales = SalesHistoryService(store)

    def dashboard(self, sales_limit: Optional[int] = None) -> Dict[str, Any]:
        """Build the dashboard summary from the catalog and recent sales.

        Args:
            sales_limit: Sales rows to consider, defaults to IMPORT.sales_history_limit

        Returns:
            Dashboard summary plus total_sales_records
        """
        products = self.products.list_products()
        sales, total = self.sales.fetch_sales(sales_limit)

        summary = dashboard_summary(products, sales)
        summary['total_sales_records'] = total
        logger.debug(f"Dashboard summary: {summary}")
        return summary
