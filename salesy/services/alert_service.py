# salesy/services/alert_service.py
from datetime import datetime
from typing import Any, Dict, List, Optional

from salesy.config import config
from salesy.core.inventory_risk import product_risk
from salesy.exceptions import NotFoundError, ValidationError
from salesy.models import Alert, AlertType, RiskLevel

ALERT_FILTERS = ('all', 'unread', 'critical', 'warning')

def build_stock_alerts(
    products: List[Dict[str, Any]],
    medium_multiplier: Optional[float] = None,
    now: Optional[datetime] = None
) -> List[Alert]:
    """Create stock alerts for products at high or medium risk.

    Args:
        products: Product rows
        medium_multiplier: Medium-risk margin, defaults to INVENTORY.medium_risk_multiplier
        now: Timestamp for the alerts

    Returns:
        One critical alert per high-risk product followed by one warning per
        medium-risk product, each group in catalog order
    """
    if medium_multiplier is None:
        medium_multiplier = config.inventory_config['medium_risk_multiplier']
    now = now or datetime.now()

    critical = []
    warnings = []
    for product in products:
        risk = product_risk(product, medium_multiplier)
        name = product['name']
        stock = product.get('current_stock') or 0
        reorder = product.get('reorder_level') or 0

        if risk is RiskLevel.HIGH:
            critical.append(Alert(
                id=f"stock-critical-{product['id']}",
                type=AlertType.CRITICAL,
                title="Stock Critical - Immediate Action Required",
                message=f"{name} stock is below its reorder level ({stock} units, reorder at {reorder}).",
                product=name,
                created_at=now,
                action="Generate PO"
            ))
        elif risk is RiskLevel.MEDIUM:
            warnings.append(Alert(
                id=f"stock-warning-{product['id']}",
                type=AlertType.WARNING,
                title="Low Stock Warning",
                message=f"{name} approaching reorder level. Current stock: {stock}, Reorder level: {reorder}.",
                product=name,
                created_at=now,
                action="Review Stock"
            ))

    return critical + warnings

class AlertInbox:
    """Holds alerts with their read state."""

    def __init__(self, alerts: Optional[List[Alert]] = None):
        self.alerts = list(alerts or [])

    def _find(self, alert_id: str) -> Alert:
        for alert in self.alerts:
            if alert.id == alert_id:
                return alert
        raise NotFoundError(f"Alert {alert_id} not found")

    def filter(self, kind: str = 'all') -> List[Alert]:
        """Alerts for one of the inbox tabs: all, unread, critical or warning."""
        if kind not in ALERT_FILTERS:
            raise ValidationError(f"Unknown alert filter: {kind}", details={'allowed': list(ALERT_FILTERS)})
        if kind == 'all':
            return list(self.alerts)
        if kind == 'unread':
            return [alert for alert in self.alerts if not alert.is_read]
        return [alert for alert in self.alerts if alert.type.value == kind]

    @property
    def unread_count(self) -> int:
        return sum(1 for alert in self.alerts if not alert.is_read)

    def mark_as_read(self, alert_id: str) -> None:
        self._find(alert_id).is_read = True

    def mark_all_as_read(self) -> None:
        for alert in self.alerts:
            alert.is_read = True

    def dismiss(self, alert_id: str) -> None:
        self.alerts.remove(self._find(alert_id))
