"""
Auth: Login Throttle

Verrouillage temporaire d'un email après plusieurs échecs de login.

Les échecs sont comptés par email normalisé, que le compte existe ou non:
le comportement observable ne révèle pas l'existence d'un compte (AUTH_006).
"""

from datetime import datetime, timedelta, timezone
from typing import Callable, Dict, List, Optional

from .interfaces import ILoginThrottle


class LoginThrottle(ILoginThrottle):
    """
    Protection contre la force brute sur /login.

    Note:
        Stockage en mémoire, par processus.

    Example:
        throttle = LoginThrottle(max_failures=5, lockout_duration=timedelta(minutes=15))
        login = LoginUseCase(store, hasher, issuer, throttle=throttle)
    """

    MAX_FAILURES: int = 5
    LOCKOUT_DURATION: timedelta = timedelta(minutes=15)
    MAX_TRACKED_EMAILS: int = 10_000

    def __init__(
        self,
        max_failures: Optional[int] = None,
        lockout_duration: Optional[timedelta] = None,
        clock: Optional[Callable[[], datetime]] = None,
        max_tracked: Optional[int] = None,
    ) -> None:
        """
        Args:
            max_failures: Nombre d'échecs avant verrouillage (défaut: 5)
            lockout_duration: Durée du verrouillage et fenêtre de comptage (défaut: 15 min)
            clock: Horloge UTC
            max_tracked: Nombre maximal d'emails suivis en mémoire (défaut: 10000)

        Raises:
            ValueError: max_failures < 1 ou max_tracked < 1
        """
        self._max_failures = max_failures if max_failures is not None else self.MAX_FAILURES
        self._lockout_duration = lockout_duration if lockout_duration is not None else self.LOCKOUT_DURATION
        self._clock = clock or (lambda: datetime.now(timezone.utc))
        self._max_tracked = max_tracked if max_tracked is not None else self.MAX_TRACKED_EMAILS

        if self._max_failures < 1:
            raise ValueError("max_failures must be >= 1")
        if self._max_tracked < 1:
            raise ValueError("max_tracked must be >= 1")

        self._failures: Dict[str, List[datetime]] = {}
        self._locks: Dict[str, datetime] = {}  # email -> locked_until
        self._last_prune: Optional[datetime] = None

    def is_locked(self, email: str) -> bool:
        """
        Vérifie si l'email est verrouillé. Un verrou expiré est levé.
        """
        locked_until = self._locks.get(email)
        if locked_until is None:
            return False

        if self._clock() >= locked_until:
            del self._locks[email]
            self._failures.pop(email, None)
            return False

        return True

    def record_failure(self, email: str) -> bool:
        """
        Enregistre un échec et verrouille au seuil.

        Returns:
            True si l'email est (ou devient) verrouillé
        """
        if self.is_locked(email):
            return True

        now = self._clock()
        window_start = now - self._lockout_duration
        recent = [t for t in self._failures.pop(email, []) if t > window_start]
        recent.append(now)
        # Réinsertion: l'ordre du dict suit la dernière activité
        self._failures[email] = recent

        if len(recent) >= self._max_failures:
            self._locks[email] = now + self._lockout_duration
            return True

        # Balayage au plus une fois par fenêtre, ou dès que le plafond est dépassé
        stale = self._last_prune is None or now - self._last_prune >= self._lockout_duration
        if stale or len(self._failures) > self._max_tracked:
            self._prune(now)

        return False

    def reset(self, email: str) -> None:
        """Efface les échecs après un login réussi."""
        self._failures.pop(email, None)
        self._locks.pop(email, None)

    def failure_count(self, email: str) -> int:
        """Nombre d'échecs récents enregistrés."""
        window_start = self._clock() - self._lockout_duration
        return len([t for t in self._failures.get(email, []) if t > window_start])

    def tracked_count(self) -> int:
        """Nombre d'emails suivis (échecs en mémoire)."""
        return len(self._failures)

    def _prune(self, now: datetime) -> None:
        """
        Borne la mémoire: retire les échecs sortis de la fenêtre et les verrous
        expirés, puis les emails non verrouillés les moins récemment actifs.
        """
        self._last_prune = now
        window_start = now - self._lockout_duration

        for email in [e for e, until in self._locks.items() if now >= until]:
            del self._locks[email]

        for email in list(self._failures):
            if email not in self._locks and self._failures[email][-1] <= window_start:
                del self._failures[email]

        # Descend sous le plafond avec une marge pour amortir le balayage
        overflow = len(self._failures) - (self._max_tracked - self._max_tracked // 10)
        if overflow <= 0:
            return
        for email in list(self._failures):
            if overflow <= 0:
                break
            if email not in self._locks:
                del self._failures[email]
                overflow -= 1
