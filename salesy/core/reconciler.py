# salesy/core/reconciler.py
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional

from salesy.models import SaleRecord


def name_key(name: str) -> str:
    """Identity key of a product name (case-insensitive)."""
    return name.lower()


@dataclass
class ReconciliationPlan:
    """Product identities for an import.

    Attributes:
        name_to_id: Lower-cased product name -> product id
        new_products: Product rows to create, one per unknown name
    """
    name_to_id: Dict[str, Any] = field(default_factory=dict)
    new_products: List[Dict[str, Any]] = field(default_factory=list)

    def merge_created(self, created: Iterable[Dict[str, Any]]) -> None:
        """Add ids assigned to newly created products."""
        for product in created:
            self.name_to_id[name_key(product['name'])] = product['id']

    def product_id_for(self, product_name: str) -> Optional[Any]:
        return self.name_to_id.get(name_key(product_name))


def reconcile(
    records: List[SaleRecord],
    existing_products: List[Dict[str, Any]],
    user_id: str
) -> ReconciliationPlan:
    """Match imported product names against a user's catalog.

    Names the catalog lacks are queued for creation with blank category and
    SKU and zero stock, taking the brand of the first row that names them.
    Brand and SKU play no part in matching.

    Args:
        records: Parsed sales records
        existing_products: The user's current products
        user_id: Owner of any product created

    Returns:
        ReconciliationPlan with known ids and products to create
    """
    plan = ReconciliationPlan()
    for product in existing_products:
        plan.name_to_id.setdefault(name_key(product['name']), product['id'])

    queued = set()
    for record in records:
        key = name_key(record.product_name)
        if key in plan.name_to_id or key in queued:
            continue

        queued.add(key)
        plan.new_products.append({
            'user_id': user_id,
            'name': record.product_name,
            'brand': record.brand,
            'category': '',
            'sku': '',
            'current_stock': 0,
            'reorder_level': 0,
        })

    return plan
