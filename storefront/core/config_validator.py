"""
Storefront Core - Config Validator Implementation
Valide la configuration brute contre les règles CFG et PAGE.
"""

from datetime import datetime, timezone
from typing import Any, Dict, Optional

from .interfaces import ConfigCheckResult, ConfigIssue, IConfigValidator, IssueSeverity


class ConfigValidator(IConfigValidator):
    """Validation des configurations contre les invariants."""

    MIN_SECRET_BYTES: int = 32  # CFG_001
    MAX_TOKEN_TTL_SECONDS: int = 86400  # CFG_002
    MIN_PBKDF2_ITERATIONS: int = 100_000  # CFG_003
    MIN_PASSWORD_LENGTH: int = 8  # CFG_004
    LOG_LEVELS = ("DEBUG", "INFO", "WARN", "ERROR", "CRITICAL")  # CFG_005

    def __init__(self):
        self._validators = {
            "CFG_001": self._validate_cfg_001,
            "CFG_002": self._validate_cfg_002,
            "CFG_003": self._validate_cfg_003,
            "CFG_004": self._validate_cfg_004,
            "CFG_005": self._validate_cfg_005,
            "CFG_006": self._validate_cfg_006,
            "PAGE_002": self._validate_page_002,
        }

    def validate(self, config: Dict[str, Any]) -> ConfigCheckResult:
        """
        Valide une config contre TOUTES les règles.
        Retourne TOUTES les erreurs (pas fail-fast).
        """
        errors = []
        warnings = []

        for rule_id in self._validators:
            issue = self.validate_rule(rule_id, config)
            if issue:
                if issue.severity == IssueSeverity.BLOCKING:
                    errors.append(issue)
                elif issue.severity == IssueSeverity.WARNING:
                    warnings.append(issue)

        return ConfigCheckResult(
            valid=len(errors) == 0,
            errors=errors,
            warnings=warnings,
            checked_at=datetime.now(timezone.utc),
        )

    def validate_rule(self, rule_id: str, config: Dict[str, Any]) -> Optional[ConfigIssue]:
        """Valide UNE règle spécifique."""
        if rule_id not in self._validators:
            return ConfigIssue(
                rule_id=rule_id,
                message=f"Règle inconnue: {rule_id}",
                location="config",
                severity=IssueSeverity.BLOCKING,
            )

        return self._validators[rule_id](config)

    def _validate_cfg_001(self, config: Dict[str, Any]) -> Optional[ConfigIssue]:
        """CFG_001: Secret de signature >= 32 octets."""
        secret = config.get("auth", {}).get("token_secret")

        if not isinstance(secret, str) or len(secret.encode("utf-8")) < self.MIN_SECRET_BYTES:
            # Valeur du secret jamais recopiée dans le rapport
            return ConfigIssue(
                rule_id="CFG_001",
                message=f"Secret de signature absent ou inférieur à {self.MIN_SECRET_BYTES} octets",
                location="auth.token_secret",
                severity=IssueSeverity.BLOCKING,
            )

        return None

    def _validate_cfg_002(self, config: Dict[str, Any]) -> Optional[ConfigIssue]:
        """CFG_002: TTL token entre 1 et 86400 secondes."""
        ttl = config.get("auth", {}).get("token_ttl_seconds", 900)

        if isinstance(ttl, bool) or not isinstance(ttl, int) or not 0 < ttl <= self.MAX_TOKEN_TTL_SECONDS:
            return ConfigIssue(
                rule_id="CFG_002",
                message=f"TTL token {ttl} hors bornes [1, {self.MAX_TOKEN_TTL_SECONDS}]",
                location="auth.token_ttl_seconds",
                value=str(ttl),
                severity=IssueSeverity.BLOCKING,
            )

        return None

    def _validate_cfg_003(self, config: Dict[str, Any]) -> Optional[ConfigIssue]:
        """CFG_003: Itérations PBKDF2 >= 100000."""
        iterations = config.get("auth", {}).get("pbkdf2_iterations", 600_000)

        if isinstance(iterations, bool) or not isinstance(iterations, int) or iterations < self.MIN_PBKDF2_ITERATIONS:
            return ConfigIssue(
                rule_id="CFG_003",
                message=f"Itérations PBKDF2 {iterations} inférieures au minimum {self.MIN_PBKDF2_ITERATIONS}",
                location="auth.pbkdf2_iterations",
                value=str(iterations),
                severity=IssueSeverity.BLOCKING,
            )

        return None

    def _validate_cfg_004(self, config: Dict[str, Any]) -> Optional[ConfigIssue]:
        """CFG_004: Longueur minimale mot de passe >= 8 (avertissement si plus faible)."""
        length = config.get("auth", {}).get("min_password_length", self.MIN_PASSWORD_LENGTH)

        if isinstance(length, bool) or not isinstance(length, int) or length < 1:
            return ConfigIssue(
                rule_id="CFG_004",
                message="min_password_length doit être un entier positif",
                location="auth.min_password_length",
                value=str(length),
                severity=IssueSeverity.BLOCKING,
            )

        if length < self.MIN_PASSWORD_LENGTH:
            return ConfigIssue(
                rule_id="CFG_004",
                message=f"min_password_length {length} inférieure à {self.MIN_PASSWORD_LENGTH}",
                location="auth.min_password_length",
                value=str(length),
                severity=IssueSeverity.WARNING,
            )

        return None

    def _validate_cfg_005(self, config: Dict[str, Any]) -> Optional[ConfigIssue]:
        """CFG_005: Niveau de log connu."""
        level = (config.get("logging") or {}).get("min_level", "INFO")

        if not isinstance(level, str) or level.upper() not in self.LOG_LEVELS:
            return ConfigIssue(
                rule_id="CFG_005",
                message=f"Niveau de log inconnu: {level}",
                location="logging.min_level",
                value=str(level),
                severity=IssueSeverity.BLOCKING,
            )

        return None

    def _validate_cfg_006(self, config: Dict[str, Any]) -> Optional[ConfigIssue]:
        """CFG_006: Paramètres de verrouillage login entiers."""
        auth = config.get("auth", {})
        max_failed = auth.get("max_failed_logins", 5)
        lockout = auth.get("lockout_minutes", 15)

        if isinstance(max_failed, bool) or not isinstance(max_failed, int) or max_failed < 0:
            return ConfigIssue(
                rule_id="CFG_006",
                message="max_failed_logins doit être un entier >= 0",
                location="auth.max_failed_logins",
                value=str(max_failed),
                severity=IssueSeverity.BLOCKING,
            )

        if isinstance(lockout, bool) or not isinstance(lockout, int) or lockout < 1:
            return ConfigIssue(
                rule_id="CFG_006",
                message="lockout_minutes doit être un entier >= 1",
                location="auth.lockout_minutes",
                value=str(lockout),
                severity=IssueSeverity.BLOCKING,
            )

        return None

    def _validate_page_002(self, config: Dict[str, Any]) -> Optional[ConfigIssue]:
        """PAGE_002: Limites autorisées positives, limite par défaut incluse."""
        catalog = config.get("catalog", {})
        allowed = catalog.get("allowed_limits", [10, 20, 50])
        default = catalog.get("default_limit", 10)

        if not isinstance(allowed, list) or not allowed:
            return ConfigIssue(
                rule_id="PAGE_002",
                message="allowed_limits doit être une liste non vide",
                location="catalog.allowed_limits",
                value=str(allowed),
                severity=IssueSeverity.BLOCKING,
            )

        for limit in allowed:
            if isinstance(limit, bool) or not isinstance(limit, int) or limit <= 0:
                return ConfigIssue(
                    rule_id="PAGE_002",
                    message=f"Limite {limit!r} invalide (entier positif attendu)",
                    location="catalog.allowed_limits",
                    value=str(limit),
                    severity=IssueSeverity.BLOCKING,
                )

        if default not in allowed:
            return ConfigIssue(
                rule_id="PAGE_002",
                message=f"default_limit {default} absent de allowed_limits",
                location="catalog.default_limit",
                value=str(default),
                severity=IssueSeverity.BLOCKING,
            )

        return None
