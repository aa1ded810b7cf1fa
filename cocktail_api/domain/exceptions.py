# cocktail_api/domain/exceptions.py

"""
Domain exceptions for the access token lifecycle.

Every exception carries an ``internal_code`` that the HTTP layer maps to a
status code (see AsyncExceptionMiddleware). The domain never builds HTTP
responses itself.
"""

from typing import Any, Dict, Optional


class DomainException(Exception):
    """
    Base exception for all application errors.

    Attributes:
        detail: Human readable message
        internal_code: Stable code used by the HTTP layer
        details: Optional structured information about the error
    """

    internal_code: str = "DOMAIN_ERROR"

    def __init__(
            self,
            detail: str = "Domain error",
            internal_code: Optional[str] = None,
            details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(detail)
        self.detail = detail
        if internal_code is not None:
            self.internal_code = internal_code
        self.details = details or {}

    def __str__(self) -> str:
        return self.detail


########################################################################
# Format errors
########################################################################

class InvalidIdException(DomainException):
    """The given client ID (or bearer string) is badly formatted or unknown."""

    internal_code = "INVALID_ID"

    def __init__(self, detail: str = "Invalid client ID"):
        super().__init__(detail=detail)


class InvalidFormDataException(DomainException):
    """The data provided in the token request form is invalid."""

    internal_code = "INVALID_FORM_DATA"

    def __init__(self, detail: str = "The data provided in the form is invalid",
                 fields: Optional[Dict[str, str]] = None):
        field_errors = ""
        if fields:
            field_errors = ": " + ", ".join([f"{field}: {error}" for field, error in fields.items()])
        super().__init__(detail=f"{detail}{field_errors}", details=fields)


########################################################################
# Credential / lookup errors
########################################################################

class InvalidAccessCredentialsException(DomainException):
    """Wrong access token."""

    internal_code = "INVALID_ACCESS_CREDENTIALS"

    def __init__(self, detail: str = "Invalid access credentials"):
        super().__init__(detail=detail)


class InvalidEmailException(DomainException):
    """Email not registered."""

    internal_code = "INVALID_EMAIL"

    def __init__(self, detail: str = "Email not registered"):
        super().__init__(detail=detail)


class ResourceNotFoundException(DomainException):
    """Resource not found."""

    internal_code = "RESOURCE_NOT_FOUND"

    def __init__(self, detail: str = "Resource not found", resource_id: Any = None):
        resource_info = f" (ID: {resource_id})" if resource_id is not None else ""
        super().__init__(detail=f"{detail}{resource_info}")


class PermissionDeniedException(DomainException):
    """Administrative permission denied."""

    internal_code = "PERMISSION_DENIED"

    def __init__(self, detail: str = "Permission denied"):
        super().__init__(detail=detail)


########################################################################
# Account state errors
########################################################################

class AccountDisabledException(DomainException):
    """The account has not been enabled by an administrator."""

    internal_code = "ACCOUNT_DISABLED"

    def __init__(self, detail: str = "Account disabled"):
        super().__init__(detail=detail)


class ExpiredAccessException(DomainException):
    """The access token is past its expiry date."""

    internal_code = "EXPIRED_ACCESS"

    def __init__(self, detail: str = "Expired access token"):
        super().__init__(detail=detail)


class EmailAlreadyRegisteredException(DomainException):
    """A token request for this email already exists."""

    internal_code = "EMAIL_ALREADY_REGISTERED"

    def __init__(self, detail: str = "Email already registered", email: Optional[str] = None):
        email_info = f" ({email})" if email else ""
        super().__init__(detail=f"{detail}{email_info}")


class AccountNotValidatedException(DomainException):
    """The account email has not been confirmed yet."""

    internal_code = "ACCOUNT_NOT_VALIDATED"

    def __init__(self, detail: str = "Account email not validated", resource_id: Any = None):
        resource_info = f" (ID: {resource_id})" if resource_id is not None else ""
        super().__init__(detail=f"{detail}{resource_info}")


class AccountAlreadyValidatedException(DomainException):
    """The account email was confirmed already."""

    internal_code = "ACCOUNT_ALREADY_VALIDATED"

    def __init__(self, detail: str = "Account email already validated"):
        super().__init__(detail=detail)


########################################################################
# Infrastructure errors
########################################################################

class DatabaseOperationException(DomainException):
    """Error from a DB operation."""

    internal_code = "DATABASE_OPERATION_ERROR"

    def __init__(self, detail: str = "Error executing database operation",
                 original_error: Optional[Exception] = None):
        error_info = f": {str(original_error)}" if original_error else ""
        super().__init__(detail=f"{detail}{error_info}")
        self.original_error = original_error


class EmailClientException(DomainException):
    """Error from the email client."""

    internal_code = "EMAIL_CLIENT_ERROR"

    def __init__(self, detail: str = "Error sending email",
                 original_error: Optional[Exception] = None):
        error_info = f": {str(original_error)}" if original_error else ""
        super().__init__(detail=f"{detail}{error_info}")
        self.original_error = original_error


class SecretHashingException(DomainException):
    """The secret could not be hashed."""

    internal_code = "SECRET_HASHING_ERROR"

    def __init__(self, detail: str = "Error hashing secret"):
        super().__init__(detail=detail)
