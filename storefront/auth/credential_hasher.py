"""
Auth: Credential Hasher

Dérivation PBKDF2-HMAC-SHA256 des mots de passe.

Invariants:
    AUTH_001: Mot de passe JAMAIS stocké en clair
    AUTH_002: Hash salé via fonction lente
    AUTH_003: Comparaison en temps constant
"""

import secrets
from typing import Optional

from cryptography.exceptions import InvalidKey
from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.kdf.pbkdf2 import PBKDF2HMAC

from ..core.errors import InvalidInput
from .interfaces import HashedCredential, ICredentialHasher


class CredentialHasher(ICredentialHasher):
    """
    Hachage des mots de passe conforme AUTH_001-003.

    Le tag algorithme embarque le nombre d'itérations: un hash produit avec
    un ancien coût reste vérifiable après augmentation du coût.

    Example:
        hasher = CredentialHasher()
        hashed = hasher.hash("correct horse")
        hasher.verify("correct horse", hashed.hash, hashed.salt)  # True
    """

    ALGORITHM_NAME: str = "pbkdf2_sha256"
    DEFAULT_ITERATIONS: int = 600_000
    MIN_ITERATIONS: int = 100_000
    SALT_BYTES: int = 16
    KEY_BYTES: int = 32

    def __init__(self, iterations: int = DEFAULT_ITERATIONS):
        """
        Args:
            iterations: Coût PBKDF2 (défaut: 600000, minimum 100000)

        Raises:
            ValueError: Coût inférieur au minimum
        """
        if iterations < self.MIN_ITERATIONS:
            raise ValueError(f"iterations must be >= {self.MIN_ITERATIONS}, got {iterations}")
        self.iterations = iterations

    @property
    def algorithm(self) -> str:
        """Tag algorithme courant."""
        return f"{self.ALGORITHM_NAME}${self.iterations}"

    def hash(self, plaintext: str, salt: Optional[str] = None) -> HashedCredential:
        """
        Dérive un hash salé.

        Raises:
            InvalidInput: plaintext vide ou sel non hexadécimal
        """
        if not plaintext:
            raise InvalidInput("Plaintext must not be empty", invariant="AUTH_001")

        if salt is None:
            salt_bytes = secrets.token_bytes(self.SALT_BYTES)
        else:
            try:
                salt_bytes = bytes.fromhex(salt)
            except ValueError:
                raise InvalidInput("Salt must be hex-encoded", invariant="AUTH_002")
            if not salt_bytes:
                raise InvalidInput("Salt must not be empty", invariant="AUTH_002")

        derived = self._kdf(salt_bytes, self.iterations).derive(plaintext.encode("utf-8"))

        return HashedCredential(hash=derived.hex(), salt=salt_bytes.hex(), algorithm=self.algorithm)

    def verify(self, plaintext: str, hash: str, salt: str, algorithm: Optional[str] = None) -> bool:
        """
        Vérifie un mot de passe en temps constant (AUTH_003).

        Args:
            plaintext: Mot de passe candidat
            hash: Clé dérivée stockée (hex)
            salt: Sel stocké (hex)
            algorithm: Tag stocké; si None, coût courant

        Returns:
            True si correspondance. False si vide, malformé ou différent.
        """
        if not plaintext:
            return False

        iterations = self._iterations_from_tag(algorithm)
        if iterations is None:
            return False

        try:
            expected = bytes.fromhex(hash)
            salt_bytes = bytes.fromhex(salt)
        except ValueError:
            return False

        if len(expected) != self.KEY_BYTES or not salt_bytes:
            return False

        try:
            self._kdf(salt_bytes, iterations).verify(plaintext.encode("utf-8"), expected)
        except InvalidKey:
            return False
        return True

    def _kdf(self, salt: bytes, iterations: int) -> PBKDF2HMAC:
        # Instance à usage unique (contrainte cryptography)
        return PBKDF2HMAC(
            algorithm=hashes.SHA256(),
            length=self.KEY_BYTES,
            salt=salt,
            iterations=iterations,
        )

    def _iterations_from_tag(self, algorithm: Optional[str]) -> Optional[int]:
        """Extrait le coût du tag "pbkdf2_sha256$<n>". None si tag inconnu."""
        if algorithm is None:
            return self.iterations

        name, _, raw_iterations = algorithm.partition("$")
        if name != self.ALGORITHM_NAME or not raw_iterations.isdigit():
            return None

        iterations = int(raw_iterations)
        if iterations < self.MIN_ITERATIONS:
            return None
        return iterations
