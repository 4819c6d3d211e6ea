# salesy/core/inventory_risk.py
from typing import Any, Dict, List

from salesy.models import RiskLevel

DEFAULT_MEDIUM_RISK_MULTIPLIER = 1.5

def classify_risk(
    current_stock: int,
    reorder_level: int,
    medium_multiplier: float = DEFAULT_MEDIUM_RISK_MULTIPLIER
) -> RiskLevel:
    """Classify stock against its reorder level.

    Args:
        current_stock: Units on hand
        reorder_level: Units at which to reorder
        medium_multiplier: Margin above the reorder level still counted as medium risk

    Returns:
        HIGH below the reorder level, MEDIUM below reorder_level * medium_multiplier,
        LOW otherwise
    """
    if current_stock < reorder_level:
        return RiskLevel.HIGH
    if current_stock < reorder_level * medium_multiplier:
        return RiskLevel.MEDIUM
    return RiskLevel.LOW

def product_risk(product: Dict[str, Any], medium_multiplier: float = DEFAULT_MEDIUM_RISK_MULTIPLIER) -> RiskLevel:
    return classify_risk(
        int(product.get('current_stock') or 0),
        int(product.get('reorder_level') or 0),
        medium_multiplier
    )

def risk_breakdown(
    products: List[Dict[str, Any]],
    medium_multiplier: float = DEFAULT_MEDIUM_RISK_MULTIPLIER
) -> Dict[str, int]:
    """Count products per risk level."""
    counts = {level.value: 0 for level in RiskLevel}
    for product in products:
        counts[product_risk(product, medium_multiplier).value] += 1
    return counts
