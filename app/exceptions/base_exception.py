from fastapi import status

class AppException(Exception):
    """
    Base exception for every error the application reports to a caller.
    """
    def __init__(
        self,
        message: str,
        status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR,
        error_code: str = "INTERNAL_ERROR"
    ):
        self.message = message
        self.status_code = status_code
        self.error_code = error_code
        super().__init__(self.message)

class ValidationException(AppException):
    """Required request fields are missing"""
    def __init__(self, message: str = "Missing required fields", error_code: str = "VALIDATION_ERROR"):
        super().__init__(message=message, status_code=status.HTTP_400_BAD_REQUEST, error_code=error_code)

class InvalidCodeException(AppException):
    """No unexpired verification code matches the email and code"""
    def __init__(self, message: str = "Invalid or expired code", error_code: str = "INVALID_CODE"):
        super().__init__(message=message, status_code=status.HTTP_400_BAD_REQUEST, error_code=error_code)

class IdentityProviderException(AppException):
    """
    The identity provider rejected a sign in, sign up or confirm call.

    ``kind`` is the classification made at the adapter boundary, see
    ``app.services.identity_provider.classify_auth_error``.
    """
    DUPLICATE_ACCOUNT = "duplicate_account"
    OTHER = "other"

    def __init__(
        self,
        message: str = "Authentication failed",
        kind: str = OTHER,
        status_code: int = status.HTTP_400_BAD_REQUEST,
        error_code: str = "AUTH_ERROR",
    ):
        self.kind = kind
        super().__init__(message=message, status_code=status_code, error_code=error_code)

    def with_status(self, status_code: int) -> "IdentityProviderException":
        """Copy of this error reported with another HTTP status."""
        return IdentityProviderException(self.message, kind=self.kind, status_code=status_code)

class StorageException(AppException):
    """The backing store failed or returned inconsistent data"""
    def __init__(self, message: str = "Storage error", error_code: str = "STORAGE_ERROR"):
        super().__init__(message=message, status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, error_code=error_code)

class DeliveryException(AppException):
    """Out-of-band delivery of a verification code failed"""
    def __init__(self, message: str = "Failed to send verification email", error_code: str = "DELIVERY_ERROR"):
        super().__init__(message=message, status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, error_code=error_code)
