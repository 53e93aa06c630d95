"""
Storefront - Pytest Configuration
Fixtures partagées pour tous les tests.
"""

from datetime import datetime, timezone
from pathlib import Path

import pytest

from tests.fakes import FakeClock, TEST_SECRET


@pytest.fixture
def config_path() -> Path:
    """Chemin vers le dossier config du dépôt."""
    return Path(__file__).parent.parent / "config"


@pytest.fixture
def secret() -> str:
    return TEST_SECRET


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock(datetime(2024, 6, 1, 12, 0, 0, tzinfo=timezone.utc))


@pytest.fixture
def hasher():
    """Hasher au coût minimal autorisé."""
    from storefront.auth.credential_hasher import CredentialHasher
    return CredentialHasher(iterations=100_000)


@pytest.fixture
def issuer(secret, clock):
    from storefront.auth.token_issuer import TokenIssuer
    return TokenIssuer(secret, ttl_seconds=900, clock=clock)


@pytest.fixture
def sample_products() -> list:
    """25 produits valides, ids 1 à 25."""
    from storefront.catalog.interfaces import Product
    return [
        Product(
            id=i,
            description=f"Product {i}",
            price=10.0 + i,
            width=10.0,
            height=20.0,
            length=30.0,
            weight=1.0 + i,
        )
        for i in range(1, 26)
    ]


@pytest.fixture
def all_invariants() -> dict:
    """Retourne tous les invariants."""
    from storefront.invariants.rules import ALL_INVARIANTS
    return ALL_INVARIANTS
