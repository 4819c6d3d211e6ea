# salesy/core/catalog.py
import math
from typing import Any, Dict, List, Optional

from salesy.models import Page

ALL = 'All'


def filter_products(
    products: List[Dict[str, Any]],
    search: Optional[str] = None,
    category: Optional[str] = None,
    brand: Optional[str] = None
) -> List[Dict[str, Any]]:
    """Filter products for the inventory screen.

    Args:
        products: Product rows
        search: Case-insensitive substring of the name or SKU
        category: Exact category, or None / 'All' for any
        brand: Exact brand, or None / 'All' for any

    Returns:
        Matching products in their original order
    """
    needle = (search or '').lower()
    result = []
    for product in products:
        if needle and needle not in (product.get('name') or '').lower() \
                and needle not in (product.get('sku') or '').lower():
            continue
        if category and category != ALL and product.get('category') != category:
            continue
        if brand and brand != ALL and product.get('brand') != brand:
            continue
        result.append(product)
    return result


def distinct_values(products: List[Dict[str, Any]], field: str) -> List[str]:
    """Sorted non-empty values of a field, for filter drop-downs."""
    return sorted({product.get(field) for product in products if product.get(field)})


def paginate(items: List[Any], page: int = 1, per_page: int = 10) -> Page:
    """Slice one page out of a list.

    Args:
        items: Full list
        page: 1-based page number, clamped to the available range
        per_page: Page size, at least 1

    Returns:
        Page with the slice and totals
    """
    per_page = max(1, per_page)
    total = len(items)
    total_pages = math.ceil(total / per_page)
    page = min(max(1, page), max(1, total_pages))

    start = (page - 1) * per_page
    return Page(
        items=items[start:start + per_page],
        page=page,
        per_page=per_page,
        total=total,
        total_pages=total_pages
    )
