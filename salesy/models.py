# salesy/models.py
from dataclasses import dataclass, field, asdict
from typing import Any, Dict, List, Optional
import enum
import uuid

from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, Index, CheckConstraint
from sqlalchemy.orm import declarative_base
from sqlalchemy.sql import func

Base = declarative_base()

PRODUCTS_TABLE = 'products'
SALES_HISTORY_TABLE = 'sales_history'

# Fields a caller may change on an existing product
PRODUCT_EDITABLE_FIELDS = (
    'name', 'category', 'brand', 'sku', 'current_stock', 'reorder_level'
)


def _new_id():
    return str(uuid.uuid4())


class RiskLevel(enum.Enum):
    """Stock risk of a product measured against its reorder level.

    Values:
        LOW ('low'): Stock comfortably above the reorder level
        MEDIUM ('medium'): Stock within the safety margin above the reorder level
        HIGH ('high'): Stock below the reorder level
    """
    LOW = 'low'
    MEDIUM = 'medium'
    HIGH = 'high'

    def __str__(self):
        """Return the string value of the enum."""
        return self.value


class AlertType(enum.Enum):
    CRITICAL = 'critical'
    WARNING = 'warning'
    INFO = 'info'
    SUCCESS = 'success'

    def __str__(self):
        return self.value


class Product(Base):
    __tablename__ = PRODUCTS_TABLE

    id = Column(String(36), primary_key=True, default=_new_id)
    user_id = Column(String(36), nullable=False)
    name = Column(String(255), nullable=False)
    brand = Column(String(255), nullable=False, default='')
    category = Column(String(255), nullable=False, default='')
    sku = Column(String(100), nullable=False, default='')
    current_stock = Column(Integer, nullable=False, default=0)
    reorder_level = Column(Integer, nullable=False, default=0)
    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())

    __table_args__ = (
        CheckConstraint('current_stock >= 0', name='ck_products_current_stock'),
        CheckConstraint('reorder_level >= 0', name='ck_products_reorder_level'),
        Index('ix_products_user_id', 'user_id'),
    )


class SalesHistory(Base):
    __tablename__ = SALES_HISTORY_TABLE

    id = Column(String(36), primary_key=True, default=_new_id)
    user_id = Column(String(36), nullable=False)
    product_id = Column(String(36), ForeignKey('products.id'), nullable=True)
    product_name = Column(String(255), nullable=False)
    brand = Column(String(255), nullable=False, default='')
    quantity_sold = Column(Integer, nullable=False)
    sale_date = Column(String(32), nullable=False)
    festival = Column(String(255), nullable=True)
    created_at = Column(DateTime, server_default=func.now())

    __table_args__ = (
        Index('ix_sales_history_user_date', 'user_id', 'sale_date'),
    )


# Table name to ORM class, used by the SQL store
TABLE_MODELS = {
    PRODUCTS_TABLE: Product,
    SALES_HISTORY_TABLE: SalesHistory,
}


@dataclass(frozen=True)
class SaleRecord:
    """One parsed CSV row, before it is tied to a user or product."""
    sale_date: str
    product_name: str
    quantity_sold: int
    brand: str = ''
    festival: Optional[str] = None

    def to_row(self, user_id: str, product_id: Optional[str] = None) -> Dict[str, Any]:
        """Build the sales_history row for this record."""
        return {
            'user_id': user_id,
            'product_id': product_id or None,
            'product_name': self.product_name,
            'brand': self.brand,
            'quantity_sold': self.quantity_sold,
            'sale_date': self.sale_date,
            'festival': self.festival or None,
        }


@dataclass
class AuthSession:
    user_id: str
    email: Optional[str] = None
    access_token: Optional[str] = None


@dataclass
class ImportSummary:
    """Outcome of a successful CSV import."""
    file_name: str
    inserted_count: int
    new_product_count: int
    product_creation_error: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class Alert:
    id: str
    type: AlertType
    title: str
    message: str
    product: Optional[str] = None
    created_at: Optional[Any] = None
    is_read: bool = False
    action: Optional[str] = None


@dataclass
class Page:
    items: List[Any] = field(default_factory=list)
    page: int = 1
    per_page: int = 10
    total: int = 0
    total_pages: int = 0
