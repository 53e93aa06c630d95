"""
Storefront Core - Interfaces Core
Contrats à implémenter pour la configuration et l'accès au store.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Mapping, Optional, Protocol, Sequence, Tuple

from pydantic import BaseModel


# ══════════════════════════════════════════════════════════════════════════════
# TYPES
# ══════════════════════════════════════════════════════════════════════════════


class IssueSeverity(Enum):
    BLOCKING = "blocking"
    WARNING = "warning"
    INFO = "info"


class ConfigIssue(BaseModel):
    """Violation d'une règle de configuration."""

    rule_id: str
    message: str
    location: str
    value: Optional[str] = None
    severity: IssueSeverity = IssueSeverity.BLOCKING


class ConfigCheckResult(BaseModel):
    """Résultat de validation d'une configuration."""

    valid: bool
    errors: List[ConfigIssue] = []
    warnings: List[ConfigIssue] = []
    checked_at: datetime


@dataclass(frozen=True)
class AuthSettings:
    """
    Paramètres d'authentification.

    Attributes:
        token_secret: Secret HMAC, résolu depuis l'environnement (TOK_004)
        token_ttl_seconds: Durée de vie des tokens
        pbkdf2_iterations: Coût de dérivation PBKDF2
        min_password_length: Longueur minimale mot de passe
        max_failed_logins: Échecs avant verrouillage (0 = désactivé)
        lockout_minutes: Durée du verrouillage
    """

    token_secret: str
    token_ttl_seconds: int = 900
    pbkdf2_iterations: int = 600_000
    min_password_length: int = 8
    max_failed_logins: int = 5
    lockout_minutes: int = 15

    def __repr__(self) -> str:
        # Secret jamais affiché
        return (
            f"AuthSettings(token_ttl_seconds={self.token_ttl_seconds}, "
            f"pbkdf2_iterations={self.pbkdf2_iterations}, "
            f"min_password_length={self.min_password_length})"
        )


@dataclass(frozen=True)
class CatalogSettings:
    """Paramètres de pagination du catalogue."""

    allowed_limits: Tuple[int, ...] = (10, 20, 50)
    default_limit: int = 10


@dataclass(frozen=True)
class LoggingSettings:
    """Paramètres du logger structuré."""

    min_level: str = "INFO"
    mask_sensitive: bool = True


@dataclass(frozen=True)
class StorefrontConfig:
    """Configuration complète résolue."""

    version: str
    environment: str
    auth: AuthSettings
    catalog: CatalogSettings = field(default_factory=CatalogSettings)
    logging: LoggingSettings = field(default_factory=LoggingSettings)


class Connection(Protocol):
    """
    Protocol pour connexion base de données asynchrone.

    Requêtes paramétrées uniquement (placeholders DB-API `%s`).
    La traduction de dialecte est à la charge du collaborateur.
    """

    async def fetch_all(self, sql: str, params: Sequence[Any] = ()) -> List[Mapping[str, Any]]:
        """Exécute une requête et retourne toutes les lignes."""
        ...

    async def fetch_one(self, sql: str, params: Sequence[Any] = ()) -> Optional[Mapping[str, Any]]:
        """Exécute une requête et retourne la première ligne ou None."""
        ...


# ══════════════════════════════════════════════════════════════════════════════
# INTERFACES
# ══════════════════════════════════════════════════════════════════════════════


class IConfigLoader(ABC):
    """Charge la configuration depuis fichiers et résout les secrets."""

    @abstractmethod
    def load(self, environment: str) -> StorefrontConfig:
        """
        Charge la config d'un environnement.

        Raises:
            ConfigIntegrityError: Si fichier absent, illisible ou invalide
        """
        pass


class IConfigValidator(ABC):
    """Valide une configuration brute contre les règles CFG."""

    @abstractmethod
    def validate(self, config: Dict[str, Any]) -> ConfigCheckResult:
        """
        Valide une config contre TOUTES les règles.
        Retourne TOUTES les erreurs (pas fail-fast).
        """
        pass

    @abstractmethod
    def validate_rule(self, rule_id: str, config: Dict[str, Any]) -> Optional[ConfigIssue]:
        """Valide UNE règle spécifique."""
        pass
