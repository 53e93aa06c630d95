"""
Auth: Authentication

Invariants couverts:
- AUTH_001-006 (Identifiants)
- TOK_001-005 (Tokens de session)
"""

from .interfaces import (
    ICredentialHasher,
    ITokenIssuer,
    IUserCredentialStore,
    ILoginThrottle,
    HashedCredential,
    UserCredential,
    SessionToken,
)
from .email_address import EmailAddress
from .credential_hasher import CredentialHasher
from .token_issuer import TokenIssuer
from .user_store import InMemoryUserCredentialStore, UserCredentialStoreDatabase
from .login_throttle import LoginThrottle
from .use_cases import SignupUseCase, LoginUseCase, VerifyTokenUseCase

__all__ = [
    # Interfaces
    "ICredentialHasher",
    "ITokenIssuer",
    "IUserCredentialStore",
    "ILoginThrottle",
    # Data classes
    "HashedCredential",
    "UserCredential",
    "SessionToken",
    "EmailAddress",
    # Implementations
    "CredentialHasher",
    "TokenIssuer",
    "InMemoryUserCredentialStore",
    "UserCredentialStoreDatabase",
    "LoginThrottle",
    # Use cases
    "SignupUseCase",
    "LoginUseCase",
    "VerifyTokenUseCase",
]
