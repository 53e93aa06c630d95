"""
Doubles de test partagés.
"""

from datetime import datetime, timedelta


TEST_SECRET = "test-secret-0123456789-abcdefghijklmnop"


class FakeClock:
    """Horloge contrôlable pour les tests d'expiration et de verrouillage."""

    def __init__(self, now: datetime):
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, delta: timedelta) -> None:
        self.now = self.now + delta
