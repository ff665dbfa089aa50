# ================================
# CUSTOM EXCEPTIONS (core/exceptions.py)
# ================================

from typing import Dict, List, Optional

class AppException(Exception):
    """Base exception for application-specific errors"""

    def __init__(self, detail: str, status_code: int = 400, error_code: str = None):
        self.detail = detail
        self.status_code = status_code
        self.error_code = error_code
        super().__init__(detail)

class AuthenticationError(AppException):
    """Missing or invalid credentials"""

    def __init__(self, detail: str = "Authentication failed", error_code: str = "AUTH_FAILED"):
        super().__init__(detail, 401, error_code)

class AuthorizationError(AppException):
    """Capability or ownership check failed"""

    def __init__(self, detail: str = "Access denied", error_code: str = "ACCESS_DENIED"):
        super().__init__(detail, 403, error_code)

class NotFoundError(AppException):
    """Referenced resource does not exist"""

    def __init__(self, detail: str = "Resource not found", error_code: str = "NOT_FOUND"):
        super().__init__(detail, 404, error_code)

class ValidationError(AppException):
    """Client-correctable input errors, keyed by field"""

    def __init__(
        self,
        detail: str = "The given data was invalid.",
        field_errors: Optional[Dict[str, List[str]]] = None,
        error_code: str = "VALIDATION_ERROR"
    ):
        super().__init__(detail, 422, error_code)
        self.field_errors = field_errors or {}

class TransactionFailure(AppException):
    """Datastore error that aborted a transaction"""

    def __init__(self, detail: str = "Could not persist changes", error_code: str = "TRANSACTION_FAILED"):
        super().__init__(detail, 500, error_code)

class NotificationDeliveryError(Exception):
    """Raised by the email layer when no transport accepted a message"""
