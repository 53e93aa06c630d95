"""
Auth: Use Cases

Signup, Login et vérification de token. Chaque use case reçoit ses
collaborateurs à la construction et ne conserve aucun état entre requêtes.

Invariants:
    AUTH_001: Mot de passe jamais stocké en clair
    AUTH_005: Email unique
    AUTH_006: Échec login générique
"""

import asyncio
from typing import Any, Optional

from ..core.errors import AuthenticationFailed, DuplicateUser, InvalidToken, ValidationError
from ..logging import IStructuredLogger
from .email_address import EmailAddress
from .interfaces import (
    HashedCredential,
    ICredentialHasher,
    ILoginThrottle,
    ITokenIssuer,
    IUserCredentialStore,
    SessionToken,
    UserCredential,
)


class SignupUseCase:
    """
    Enregistre un nouvel utilisateur.

    Example:
        signup = SignupUseCase(store, hasher, min_password_length=8)
        await signup.execute("jane@example.com", "correct horse")
    """

    MAX_PASSWORD_LENGTH: int = 1024

    def __init__(
        self,
        store: IUserCredentialStore,
        hasher: ICredentialHasher,
        min_password_length: int = 8,
        logger: Optional[IStructuredLogger] = None,
    ):
        self._store = store
        self._hasher = hasher
        self._min_password_length = min_password_length
        self._logger = logger

    async def execute(self, email: str, password: str) -> None:
        """
        Valide, hache et persiste un identifiant.

        Raises:
            ValidationError: Email malformé ou mot de passe hors politique
            DuplicateUser: Email déjà enregistré
            InfrastructureError: Échec du store
        """
        address = EmailAddress.parse(email)
        self._check_password_policy(password)

        if await self._store.get_by_email(address.value) is not None:
            raise DuplicateUser()

        # Dérivation hors boucle événementielle
        hashed = await asyncio.to_thread(self._hasher.hash, password)
        credential = UserCredential(
            email=address.value,
            password_hash=hashed.hash,
            salt=hashed.salt,
            hash_algorithm=hashed.algorithm,
        )

        # Le store refait le contrôle d'unicité (signups concurrents)
        await self._store.add(credential)

        if self._logger:
            self._logger.info("Signup completed", email=address.value)

    def _check_password_policy(self, password: str) -> None:
        if not isinstance(password, str):
            raise ValidationError("Password must be a string")
        if len(password) < self._min_password_length:
            raise ValidationError(
                f"Password must be at least {self._min_password_length} characters"
            )
        if len(password) > self.MAX_PASSWORD_LENGTH:
            raise ValidationError(
                f"Password must be at most {self.MAX_PASSWORD_LENGTH} characters"
            )


class LoginUseCase:
    """
    Authentifie un utilisateur et émet un token.

    Utilisateur absent, email malformé, mot de passe faux ou email verrouillé
    produisent la même AuthenticationFailed (AUTH_006). Un utilisateur absent
    déclenche quand même une dérivation, pour un coût identique.

    Example:
        login = LoginUseCase(store, hasher, issuer)
        token = await login.execute("jane@example.com", "correct horse")
    """

    _DUMMY_PASSWORD = "storefront-dummy-password"

    def __init__(
        self,
        store: IUserCredentialStore,
        hasher: ICredentialHasher,
        issuer: ITokenIssuer,
        throttle: Optional[ILoginThrottle] = None,
        logger: Optional[IStructuredLogger] = None,
    ):
        self._store = store
        self._hasher = hasher
        self._issuer = issuer
        self._throttle = throttle
        self._logger = logger
        self._dummy: Optional[HashedCredential] = None

    async def execute(self, email: str, password: str) -> str:
        """
        Vérifie les identifiants et retourne un token signé.

        Raises:
            AuthenticationFailed: Échec, sans détail distinctif
            InfrastructureError: Échec du store
        """
        try:
            address = EmailAddress.parse(email)
        except ValidationError:
            await self._verify_dummy(password)
            raise self._fail(None) from None

        if self._throttle and self._throttle.is_locked(address.value):
            raise self._fail(address.value)

        credential = await self._store.get_by_email(address.value)

        if credential is None:
            await self._verify_dummy(password)
            self._record_failure(address.value)
            raise self._fail(address.value)

        verified = await asyncio.to_thread(
            self._hasher.verify,
            password,
            credential.password_hash,
            credential.salt,
            credential.hash_algorithm,
        )
        if not verified:
            self._record_failure(address.value)
            raise self._fail(address.value)

        if self._throttle:
            self._throttle.reset(address.value)

        token = self._issuer.sign(address.value)

        if self._logger:
            self._logger.info("Login succeeded", email=address.value)

        return token

    async def _verify_dummy(self, password: str) -> None:
        """Vérification factice hors boucle, hash calculé une fois."""
        if self._dummy is None:
            self._dummy = await asyncio.to_thread(self._hasher.hash, self._DUMMY_PASSWORD)
        await asyncio.to_thread(
            self._hasher.verify,
            password,
            self._dummy.hash,
            self._dummy.salt,
            self._dummy.algorithm,
        )

    def _record_failure(self, email: str) -> None:
        if self._throttle:
            self._throttle.record_failure(email)

    def _fail(self, email: Optional[str]) -> AuthenticationFailed:
        # Cause jamais journalisée: le log ne doit pas distinguer les cas
        if self._logger:
            self._logger.warn("Login failed", email=email)
        return AuthenticationFailed()


class VerifyTokenUseCase:
    """Vérifie un token de session et retourne l'identité décodée."""

    def __init__(self, issuer: ITokenIssuer):
        self._issuer = issuer

    def execute(self, token: Optional[Any]) -> SessionToken:
        """
        Raises:
            InvalidToken: Token absent, non textuel ou invalide
            TokenExpired: Token expiré
        """
        if not token:
            raise InvalidToken("Token missing")
        if not isinstance(token, str):
            raise InvalidToken("Token must be a string")
        return self._issuer.verify(token)
