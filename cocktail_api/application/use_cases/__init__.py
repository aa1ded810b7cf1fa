# cocktail_api/application/use_cases/__init__.py (async version)

"""
Application service module.

This package contains the services that implement the token lifecycle,
organized by functional area.
"""

from cocktail_api.application.use_cases.registration_use_cases import AsyncRegistrationService
from cocktail_api.application.use_cases.access_use_cases import AsyncAccessGate
from cocktail_api.application.use_cases.client_admin_use_cases import AsyncClientAdminService

__all__ = [
    "AsyncRegistrationService",
    "AsyncAccessGate",
    "AsyncClientAdminService",
]
