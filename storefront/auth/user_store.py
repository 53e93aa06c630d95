"""
Auth: User Credential Stores

Implémentations du store des identifiants: mémoire (tests, exécution locale)
et base de données via le protocol Connection.
"""

from typing import Any, Dict, Mapping, Optional

from ..core.errors import DuplicateUser, InfrastructureError
from ..core.interfaces import Connection
from .interfaces import IUserCredentialStore, UserCredential


def row_to_credential(row: Mapping[str, Any]) -> UserCredential:
    """Mappe une ligne `users` vers UserCredential."""
    return UserCredential(
        email=row["email"],
        password_hash=row["password_hash"],
        salt=row["salt"],
        hash_algorithm=row["hash_algorithm"],
    )


class InMemoryUserCredentialStore(IUserCredentialStore):
    """
    Store en mémoire.

    Note:
        Vérification et écriture sans await intermédiaire: atomiques
        vis-à-vis des autres coroutines de la boucle.
    """

    def __init__(self) -> None:
        self._credentials: Dict[str, UserCredential] = {}

    async def get_by_email(self, email: str) -> Optional[UserCredential]:
        """Récupère un identifiant par email, None si absent."""
        return self._credentials.get(email)

    async def add(self, credential: UserCredential) -> None:
        """
        Enregistre un identifiant.

        Raises:
            DuplicateUser: Email déjà présent
        """
        if credential.email in self._credentials:
            raise DuplicateUser()
        self._credentials[credential.email] = credential

    def __len__(self) -> int:
        return len(self._credentials)


class UserCredentialStoreDatabase(IUserCredentialStore):
    """
    Store adossé à une base relationnelle.

    Table attendue: users(email PRIMARY KEY, password_hash, salt, hash_algorithm).
    """

    SELECT_BY_EMAIL = "SELECT email, password_hash, salt, hash_algorithm FROM users WHERE email = %s"
    INSERT = (
        "INSERT INTO users (email, password_hash, salt, hash_algorithm) "
        "VALUES (%s, %s, %s, %s) ON CONFLICT (email) DO NOTHING RETURNING email"
    )

    def __init__(self, connection: Connection):
        """
        Args:
            connection: Connexion asynchrone (collaborateur externe)
        """
        self._connection = connection

    async def get_by_email(self, email: str) -> Optional[UserCredential]:
        """
        Récupère un identifiant par email.

        Raises:
            InfrastructureError: Échec du store ou ligne invalide
        """
        try:
            row = await self._connection.fetch_one(self.SELECT_BY_EMAIL, (email,))
        except Exception as e:
            raise InfrastructureError(f"User lookup failed: {e}") from e

        if row is None:
            return None

        try:
            return row_to_credential(row)
        except KeyError as e:
            raise InfrastructureError(f"Malformed users row: missing {e}") from e

    async def add(self, credential: UserCredential) -> None:
        """
        Insère un identifiant; l'unicité est garantie par la contrainte de clé.

        Raises:
            DuplicateUser: Aucune ligne insérée (email existant)
            InfrastructureError: Échec du store
        """
        params = (
            credential.email,
            credential.password_hash,
            credential.salt,
            credential.hash_algorithm,
        )
        try:
            row = await self._connection.fetch_one(self.INSERT, params)
        except Exception as e:
            raise InfrastructureError(f"User insert failed: {e}") from e

        if row is None:
            raise DuplicateUser()
