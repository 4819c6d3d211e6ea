class SalesyError(Exception):
    """Base exception for the Salesy inventory system."""
    
    def __init__(self, message=None, code=None, details=None):
        """Initialize the exception.
        
        Args:
            message: Error message
            code: Error code
            details: Additional error details
        """
        self.message = message or "An error occurred in Salesy"
        self.code = code
        self.details = details
        super().__init__(self.message)
    
    def __str__(self):
        """String representation of the error."""
        if self.code:
            return f"[{self.code}] {self.message}"
        return self.message
    
    def to_dict(self):
        """Convert the exception to a dictionary."""
        error_dict = {
            'error': self.__class__.__name__,
            'message': self.message,
        }
        
        if self.code:
            error_dict['code'] = self.code
            
        if self.details:
            error_dict['details'] = self.details
            
        return error_dict


class ConfigError(SalesyError):
    """Exception raised for configuration errors."""
    
    def __init__(self, message=None, code=None, details=None):
        message = message or "Configuration error"
        super().__init__(message, code, details)


class StoreError(SalesyError):
    """Exception raised when the data store rejects an operation."""
    
    def __init__(self, message=None, code=None, details=None):
        message = message or "Data store error"
        super().__init__(message, code, details)


class ValidationError(SalesyError):
    """Exception raised for data validation errors."""
    
    def __init__(self, message=None, code=None, details=None):
        message = message or "Validation error"
        super().__init__(message, code, details)


class InvalidFileType(SalesyError):
    """Exception raised when an upload is not a CSV file."""
    
    def __init__(self, message=None, code=None, details=None):
        message = message or "Please upload a CSV file"
        super().__init__(message, code, details)


class NotAuthenticatedError(SalesyError):
    """Exception raised when an operation needs a signed-in user."""
    
    def __init__(self, message=None, code=None, details=None):
        message = message or "You must be logged in"
        super().__init__(message, code, details)


class AuthenticationError(SalesyError):
    """Exception raised when sign-in is refused by the auth provider."""
    
    def __init__(self, message=None, code=None, details=None):
        message = message or "Authentication failed"
        super().__init__(message, code, details)


class ProductError(SalesyError):
    """Exception raised for product catalog errors."""
    
    def __init__(self, message=None, code=None, details=None):
        message = message or "Product error"
        super().__init__(message, code, details)


class ProductCreationError(ProductError):
    """Exception raised when products auto-created during an import fail to insert.
    
    Imports log this and carry on without the new products.
    """
    
    def __init__(self, message=None, code=None, details=None):
        message = message or "Failed to create products"
        super().__init__(message, code, details)


class BatchInsertError(SalesyError):
    """Exception raised when a sales history batch fails to insert.
    
    Attributes:
        start_row: 1-based index of the first row of the failing batch
        inserted_count: Rows inserted by earlier batches
    """
    
    def __init__(self, start_row, inserted_count, message=None, code=None, details=None):
        self.start_row = start_row
        self.inserted_count = inserted_count
        message = message or "Sales history insert failed"
        details = dict(details or {})
        details.setdefault('start_row', start_row)
        details.setdefault('inserted_count', inserted_count)
        super().__init__(message, code, details)


class NotFoundError(SalesyError):
    """Exception raised when a requested resource is not found."""
    
    def __init__(self, message=None, code=None, details=None):
        message = message or "Resource not found"
        super().__init__(message, code, details)


class UploadStateError(SalesyError):
    """Exception raised for an illegal upload state transition."""
    
    def __init__(self, message=None, code=None, details=None):
        message = message or "Invalid upload state transition"
        super().__init__(message, code, details)
