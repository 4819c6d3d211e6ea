import re
from typing import Any, Dict, Optional

from salesy.models import PRODUCT_EDITABLE_FIELDS

EMAIL_PATTERN = re.compile(r'^[^\s@]+@[^\s@]+\.[^\s@]+$')

def _is_non_negative_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and value >= 0

def validate_product(data: Dict[str, Any], partial: bool = False) -> Dict[str, str]:
    """Validate product fields.

    Args:
        data: Product fields
        partial: True for updates, where absent fields are left alone

    Returns:
        Dictionary with validation errors
    """
    errors = {}

    for key in data:
        if key not in PRODUCT_EDITABLE_FIELDS:
            errors[key] = f'{key} cannot be set'

    if not partial or 'name' in data:
        if not str(data.get('name') or '').strip():
            errors['name'] = 'Product name is required'

    for key in ('current_stock', 'reorder_level'):
        if key in data and not _is_non_negative_int(data[key]):
            errors[key] = f'{key} must be a non-negative integer'

    return errors

def validate_login(email: Optional[str], password: Optional[str]) -> Dict[str, str]:
    """Validate a sign-in form.

    Args:
        email: Email address
        password: Password

    Returns:
        Dictionary with validation errors
    """
    errors = {}

    if not email:
        errors['email'] = 'Email is required'
    elif not EMAIL_PATTERN.match(email):
        errors['email'] = 'Invalid email format'

    if not password:
        errors['password'] = 'Password is required'

    return errors
