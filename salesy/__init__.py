from .config import config
from .logging_setup import logger, get_logger
from .exceptions import (
    SalesyError, ValidationError, InvalidFileType, NotAuthenticatedError,
    ProductCreationError, BatchInsertError, StoreError
)

__version__ = '0.1.0'

__all__ = [
    'config',
    'logger',
    'get_logger',
    'SalesyError',
    'ValidationError',
    'InvalidFileType',
    'NotAuthenticatedError',
    'ProductCreationError',
    'BatchInsertError',
    'StoreError'
]
