# salesy/services/product_service.py
import logging
from typing import Any, Dict, List

from salesy.db.interface import StoreInterface
from salesy.exceptions import NotAuthenticatedError, NotFoundError, ProductError, StoreError, ValidationError
from salesy.models import PRODUCTS_TABLE
from salesy.utils.validation import validate_product

logger = logging.getLogger(__name__)

PRODUCT_DEFAULTS = {
    'brand': '',
    'category': '',
    'sku': '',
    'current_stock': 0,
    'reorder_level': 0,
}

class ProductService:
    """Service for the product catalog of the signed-in user."""

    def __init__(self, store: StoreInterface):
        """Initialize the product service.

        Args:
            store: Data store
        """
        self.store = store

    def _require_user(self) -> str:
        user_id = self.store.current_user()
        if not user_id:
            raise NotAuthenticatedError()
        return user_id

    def list_products(self) -> List[Dict[str, Any]]:
        """Get the user's products, newest first.

        Returns:
            List of product rows
        """
        user_id = self._require_user()
        try:
            return self.store.query(
                PRODUCTS_TABLE,
                filters={'user_id': user_id},
                order_by='created_at',
                descending=True
            )
        except StoreError as e:
            logger.error(f"Failed to load products: {str(e)}")
            raise ProductError(f"Failed to load products: {e.message}")

    def get_products_for_user(self, user_id: str) -> List[Dict[str, Any]]:
        """Get every product owned by a user, unordered."""
        return self.store.query(PRODUCTS_TABLE, filters={'user_id': user_id})

    def add_product(self, data: Dict[str, Any]) -> Dict[str, Any]:
        """Create one product.

        Args:
            data: Product fields; name is required

        Returns:
            The stored product row
        """
        user_id = self._require_user()

        errors = validate_product(data)
        if errors:
            raise ValidationError("Invalid product", code='INVALID_PRODUCT', details=errors)

        row = dict(PRODUCT_DEFAULTS)
        row.update(data)
        row['name'] = row['name'].strip()
        row['user_id'] = user_id

        try:
            created = self.store.insert(PRODUCTS_TABLE, [row])
        except StoreError as e:
            logger.error(f"Failed to add product {row['name']}: {str(e)}")
            raise ProductError(f"Failed to add product: {e.message}")

        logger.info(f"Added product {row['name']}")
        return created[0] if created else row
    def _require_owned(self, product_id: Any) -> str:
        """Check the product exists and belongs to the signed-in user.

        Returns:
            The user ID

        Raises:
            NotAuthenticatedError: If nobody is signed in
            NotFoundError: If the user has no product with this ID
        """
        user_id = self._require_user()
        try:
            owned = self.store.query(PRODUCTS_TABLE, filters={'id': product_id, 'user_id': user_id}, limit=1)
        except StoreError as e:
            logger.error(f"Failed to load product {product_id}: {str(e)}")
            raise ProductError(f"Failed to load product: {e.message}")

        if not owned:
            raise NotFoundError(f"Product {product_id} not found")
        return user_id

    def update_product(self, product_id: Any, updates: Dict[str, Any]) -> Dict[str, Any]:
        """Update editable fields of one of the user's products.

        Args:
            product_id: Product ID
            updates: Fields to change

        Returns:
            The updated product row
        """
        errors = validate_product(updates, partial=True)
        if errors:
            raise ValidationError("Invalid product update", code='INVALID_PRODUCT', details=errors)

        self._require_owned(product_id)
        try:
            return self.store.update(PRODUCTS_TABLE, product_id, updates)
        except StoreError as e:
            logger.error(f"Failed to update product {product_id}: {str(e)}")
            raise ProductError(f"Failed to update product: {e.message}")

    def delete_product(self, product_id: Any) -> bool:
        self._require_owned(product_id)
        try:
            self.store.delete(PRODUCTS_TABLE, product_id)
        except StoreError as e:
            logger.error(f"Failed to delete product {product_id}: {str(e)}")
            raise ProductError(f"Failed to delete product: {e.message}")

        logger.info(f"Deleted product {product_id}")
        return True

    def create_products(self, rows: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
        """Insert several products in one store call.

        Store failures propagate as StoreError so callers can decide whether
        they are fatal.
        """
        if not rows:
            return []
        return self.store.insert(PRODUCTS_TABLE, rows)
