# cocktail_api/application/ports/__init__.py

from cocktail_api.application.ports.inbound import IRegistrationUseCase, IAccessGate, IClientAdminUseCase
from cocktail_api.application.ports.outbound import IApiUserRepository, ICredentialStore, IMailClient

__all__ = [
    "IRegistrationUseCase",
    "IAccessGate",
    "IClientAdminUseCase",
    "IApiUserRepository",
    "ICredentialStore",
    "IMailClient",
]
