"""
Auth: Interfaces

Définit les contrats pour le hachage des identifiants, l'émission de tokens
et le store des utilisateurs. Les use cases dépendent de ces interfaces,
jamais des implémentations.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..core.errors import InvalidToken


@dataclass(frozen=True)
class HashedCredential:
    """
    Résultat du hachage d'un mot de passe.

    Attributes:
        hash: Clé dérivée (hex)
        salt: Sel aléatoire (hex)
        algorithm: Tag algorithme, ex: "pbkdf2_sha256$600000"
    """

    hash: str
    salt: str
    algorithm: str

    def __repr__(self) -> str:
        return f"HashedCredential(algorithm={self.algorithm!r})"


@dataclass(frozen=True)
class UserCredential:
    """
    Identité enregistrée. Immuable après Signup.

    Attributes:
        email: Email normalisé (AUTH_004)
        password_hash: Clé dérivée, jamais le mot de passe (AUTH_001)
        salt: Sel utilisé pour la dérivation
        hash_algorithm: Tag algorithme
    """

    email: str
    password_hash: str
    salt: str
    hash_algorithm: str

    def __repr__(self) -> str:
        return f"UserCredential(email={self.email!r}, hash_algorithm={self.hash_algorithm!r})"


@dataclass(frozen=True)
class SessionToken:
    """
    Preuve d'identité décodée d'un token signé. Jamais persistée.

    Attributes:
        subject: Email de l'utilisateur authentifié
        issued_at: Horodatage émission (UTC)
        expires_at: Horodatage expiration (UTC)
    """

    subject: str
    issued_at: datetime
    expires_at: datetime

    def __post_init__(self):
        """Validation des contraintes (TOK_002)."""
        if self.expires_at <= self.issued_at:
            raise InvalidToken("expires_at must be after issued_at", invariant="TOK_002")


class ICredentialHasher(ABC):
    """
    Interface dérivation/vérification de mots de passe.

    Invariants:
        AUTH_001: Mot de passe jamais stocké en clair
        AUTH_002: Fonction lente et salée
        AUTH_003: Comparaison en temps constant
    """

    @abstractmethod
    def hash(self, plaintext: str, salt: Optional[str] = None) -> HashedCredential:
        """
        Dérive un hash salé.

        Args:
            plaintext: Mot de passe en clair (non vide)
            salt: Sel hex existant; généré aléatoirement si None

        Returns:
            HashedCredential

        Raises:
            InvalidInput: plaintext vide
        """
        pass

    @abstractmethod
    def verify(self, plaintext: str, hash: str, salt: str, algorithm: Optional[str] = None) -> bool:
        """
        Vérifie un mot de passe contre un hash stocké.

        Returns:
            True si correspondance
        """
        pass


class ITokenIssuer(ABC):
    """
    Interface signature/vérification de tokens de session.

    Invariants:
        TOK_001: Signature vérifiable uniquement avec le secret serveur
        TOK_003: Rejet après expiration
        TOK_005: Sans état serveur
    """

    MAX_TTL_SECONDS: int = 86400

    @abstractmethod
    def sign(self, identity: str, issued_at: Optional[datetime] = None) -> str:
        """
        Signe un token pour une identité.

        Args:
            identity: Email de l'utilisateur
            issued_at: Horodatage émission (défaut: maintenant)

        Returns:
            Token signé
        """
        pass

    @abstractmethod
    def verify(self, token: str) -> SessionToken:
        """
        Vérifie un token et retourne l'identité décodée.

        Raises:
            InvalidToken: Signature ou format invalide
            TokenExpired: Token expiré
        """
        pass


class IUserCredentialStore(ABC):
    """Interface store des identifiants utilisateurs."""

    @abstractmethod
    async def get_by_email(self, email: str) -> Optional[UserCredential]:
        """Récupère un identifiant par email normalisé, None si absent."""
        pass

    @abstractmethod
    async def add(self, credential: UserCredential) -> None:
        """
        Enregistre un nouvel identifiant.

        Raises:
            DuplicateUser: Email déjà présent (AUTH_005)
            InfrastructureError: Échec du store
        """
        pass


class ILoginThrottle(ABC):
    """Interface limitation des tentatives de login par email."""

    @abstractmethod
    def is_locked(self, email: str) -> bool:
        """True si l'email est temporairement verrouillé."""
        pass

    @abstractmethod
    def record_failure(self, email: str) -> bool:
        """Enregistre un échec. Retourne True si l'email devient verrouillé."""
        pass

    @abstractmethod
    def reset(self, email: str) -> None:
        """Efface les échecs après un login réussi."""
        pass
