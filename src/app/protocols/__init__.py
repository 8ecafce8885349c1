"""Protocolos e contratos do core da aplicação."""

from .authorization import AuthorizationError, AuthorizationGuardProtocol
from .identity_provider import (
    IdentityErrorReason,
    IdentityProviderError,
    IdentityProviderProtocol,
)
from .profile_store import ProfileNotFoundError, ProfileStoreProtocol
from .token_verifier import InvalidTokenError, TokenVerifierProtocol
from .validator import UserRequestValidatorProtocol, ValidationError

__all__ = [
    "AuthorizationError",
    "AuthorizationGuardProtocol",
    "IdentityErrorReason",
    "IdentityProviderError",
    "IdentityProviderProtocol",
    "InvalidTokenError",
    "ProfileNotFoundError",
    "ProfileStoreProtocol",
    "TokenVerifierProtocol",
    "UserRequestValidatorProtocol",
    "ValidationError",
]
