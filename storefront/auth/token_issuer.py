"""
Auth: Token Issuer

Émission et vérification de tokens de session signés HS256.

Invariants:
    TOK_001: Signature vérifiable uniquement avec le secret serveur
    TOK_002: expires_at strictement postérieur à issued_at
    TOK_003: Token rejeté si now > expires_at
    TOK_004: Secret injecté par configuration
    TOK_005: Vérification sans état serveur
"""

from datetime import datetime, timezone
from typing import Callable, Optional

import jwt

from ..core.errors import InvalidToken, TokenExpired
from .interfaces import ITokenIssuer, SessionToken


def utc_now() -> datetime:
    """Horloge par défaut."""
    return datetime.now(timezone.utc)


class TokenIssuer(ITokenIssuer):
    """
    Émetteur de tokens JWT HS256 sans état.

    L'expiration est vérifiée contre l'horloge injectée plutôt que par
    PyJWT, pour que now > exp soit la règle exacte appliquée.

    Example:
        issuer = TokenIssuer(secret=config.auth.token_secret, ttl_seconds=900)
        token = issuer.sign("jane@example.com")
        issuer.verify(token).subject  # "jane@example.com"
    """

    ALGORITHM: str = "HS256"
    MIN_SECRET_BYTES: int = 32

    def __init__(
        self,
        secret: str,
        ttl_seconds: int = 900,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        """
        Args:
            secret: Secret HMAC (>= 32 octets)
            ttl_seconds: Durée de vie (1 à 86400 secondes)
            clock: Horloge UTC (défaut: datetime.now(timezone.utc))

        Raises:
            ValueError: Secret trop court ou TTL hors bornes
        """
        if not secret or len(secret.encode("utf-8")) < self.MIN_SECRET_BYTES:
            raise ValueError(f"secret must be at least {self.MIN_SECRET_BYTES} bytes (CFG_001)")
        if not 0 < ttl_seconds <= self.MAX_TTL_SECONDS:
            raise ValueError(f"ttl_seconds must be in [1, {self.MAX_TTL_SECONDS}], got {ttl_seconds}")

        self._secret = secret
        self.ttl_seconds = ttl_seconds
        self._clock = clock or utc_now

    def sign(self, identity: str, issued_at: Optional[datetime] = None) -> str:
        """
        Signe un token portant sub, iat et exp.

        Raises:
            ValueError: identité vide
        """
        if not identity:
            raise ValueError("identity must not be empty")

        issued_at = issued_at or self._clock()
        if issued_at.tzinfo is None:
            issued_at = issued_at.replace(tzinfo=timezone.utc)

        iat = int(issued_at.timestamp())
        payload = {
            "sub": identity,
            "iat": iat,
            "exp": iat + self.ttl_seconds,
        }
        return jwt.encode(payload, self._secret, algorithm=self.ALGORITHM)

    def verify(self, token: str) -> SessionToken:
        """
        Vérifie signature puis expiration.

        Raises:
            InvalidToken: Token malformé, signature invalide, claims manquants
            TokenExpired: now > exp
        """
        if not token:
            raise InvalidToken("Token missing")

        try:
            payload = jwt.decode(
                token,
                self._secret,
                algorithms=[self.ALGORITHM],
                options={
                    "require": ["exp", "iat", "sub"],
                    "verify_exp": False,
                    "verify_iat": False,
                },
            )
        except jwt.InvalidTokenError:
            # Détail PyJWT jamais renvoyé au client
            raise InvalidToken("Invalid token")

        subject = payload["sub"]
        if not isinstance(subject, str) or not subject:
            raise InvalidToken("Invalid token subject")

        try:
            issued_at = datetime.fromtimestamp(payload["iat"], tz=timezone.utc)
            expires_at = datetime.fromtimestamp(payload["exp"], tz=timezone.utc)
        except (TypeError, ValueError, OverflowError, OSError):
            raise InvalidToken("Invalid token timestamps")

        # TOK_002 appliqué par SessionToken
        session = SessionToken(subject=subject, issued_at=issued_at, expires_at=expires_at)

        # TOK_003
        if self._clock() > session.expires_at:
            raise TokenExpired()

        return session
