# cocktail_api/domain/__init__.py

"""
Main module for the application domain components.

This module exports the domain exceptions and value objects.
"""

from cocktail_api.domain.exceptions import (
    DomainException,
    InvalidIdException,
    InvalidFormDataException,
    InvalidAccessCredentialsException,
    InvalidEmailException,
    ResourceNotFoundException,
    PermissionDeniedException,
    AccountDisabledException,
    ExpiredAccessException,
    EmailAlreadyRegisteredException,
    AccountNotValidatedException,
    AccountAlreadyValidatedException,
    DatabaseOperationException,
    EmailClientException,
    SecretHashingException,
)
from cocktail_api.domain.models import ClientIdentity, ID_LENGTH, ApiUser, ApiToken
