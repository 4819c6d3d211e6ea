from .validation import validate_product, validate_login, EMAIL_PATTERN

__all__ = [
    'validate_product',
    'validate_login',
    'EMAIL_PATTERN'
]
