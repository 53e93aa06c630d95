"""
Tests unitaires pour ConfigValidator.
"""

import pytest

from storefront.core.config_validator import ConfigValidator
from storefront.core.interfaces import ConfigCheckResult, IConfigValidator, IssueSeverity

from tests.fakes import TEST_SECRET


def valid_config() -> dict:
    return {
        "version": "1.0",
        "auth": {
            "token_secret": TEST_SECRET,
            "token_ttl_seconds": 900,
            "pbkdf2_iterations": 600_000,
            "min_password_length": 8,
        },
        "catalog": {"allowed_limits": [10, 20, 50], "default_limit": 10},
        "logging": {"min_level": "INFO"},
    }


class TestConfigValidator:
    """Tests pour ConfigValidator."""

    def setup_method(self):
        """Setup avant chaque test."""
        self.validator = ConfigValidator()

    def test_implements_interface(self):
        assert isinstance(self.validator, IConfigValidator)

    def test_valid_config_passes(self):
        result = self.validator.validate(valid_config())

        assert isinstance(result, ConfigCheckResult)
        assert result.valid is True
        assert result.errors == []
        assert result.warnings == []

    def test_CFG_001_short_secret(self):
        """CFG_001: Secret < 32 octets bloquant, valeur non recopiée."""
        config = valid_config()
        config["auth"]["token_secret"] = "s" * 31

        issue = self.validator.validate_rule("CFG_001", config)

        assert issue is not None
        assert issue.severity == IssueSeverity.BLOCKING
        assert issue.value is None

    def test_CFG_001_missing_secret(self):
        config = valid_config()
        del config["auth"]["token_secret"]
        assert self.validator.validate_rule("CFG_001", config) is not None

    @pytest.mark.parametrize("ttl", [0, -1, 86401, "900", True])
    def test_CFG_002_ttl_out_of_bounds(self, ttl):
        """CFG_002: TTL hors [1, 86400]."""
        config = valid_config()
        config["auth"]["token_ttl_seconds"] = ttl
        assert self.validator.validate_rule("CFG_002", config) is not None

    @pytest.mark.parametrize("ttl", [1, 86400])
    def test_CFG_002_bounds_inclusive(self, ttl):
        config = valid_config()
        config["auth"]["token_ttl_seconds"] = ttl
        assert self.validator.validate_rule("CFG_002", config) is None

    def test_CFG_003_low_iterations(self):
        """CFG_003: Itérations < 100000."""
        config = valid_config()
        config["auth"]["pbkdf2_iterations"] = 99_999
        assert self.validator.validate_rule("CFG_003", config) is not None

    def test_CFG_004_weak_password_policy_is_warning(self):
        """CFG_004: Longueur minimale < 8 → avertissement, config valide."""
        config = valid_config()
        config["auth"]["min_password_length"] = 6

        result = self.validator.validate(config)

        assert result.valid is True
        assert [w.rule_id for w in result.warnings] == ["CFG_004"]

    @pytest.mark.parametrize("length", [0, -3, "8"])
    def test_CFG_004_invalid_length_is_blocking(self, length):
        config = valid_config()
        config["auth"]["min_password_length"] = length

        issue = self.validator.validate_rule("CFG_004", config)

        assert issue is not None
        assert issue.severity == IssueSeverity.BLOCKING

    @pytest.mark.parametrize("level", ["VERBOSE", "", 3])
    def test_CFG_005_unknown_level(self, level):
        config = valid_config()
        config["logging"]["min_level"] = level
        assert self.validator.validate_rule("CFG_005", config) is not None

    def test_CFG_005_level_case_insensitive(self):
        config = valid_config()
        config["logging"]["min_level"] = "warn"
        assert self.validator.validate_rule("CFG_005", config) is None

    @pytest.mark.parametrize(
        "catalog",
        [
            {"allowed_limits": [], "default_limit": 10},
            {"allowed_limits": [10, 0], "default_limit": 10},
            {"allowed_limits": [10, "20"], "default_limit": 10},
            {"allowed_limits": [20, 50], "default_limit": 10},
        ],
    )
    def test_PAGE_002_invalid_limits(self, catalog):
        config = valid_config()
        config["catalog"] = catalog
        assert self.validator.validate_rule("PAGE_002", config) is not None

    @pytest.mark.parametrize(
        "field_name,value",
        [
            ("max_failed_logins", -1),
            ("max_failed_logins", "5"),
            ("max_failed_logins", True),
            ("lockout_minutes", 0),
            ("lockout_minutes", "15"),
            ("lockout_minutes", 1.5),
        ],
    )
    def test_CFG_006_invalid_lockout_settings(self, field_name, value):
        """CFG_006: Verrouillage login mal typé ou hors bornes → bloquant."""
        config = valid_config()
        config["auth"][field_name] = value

        issue = self.validator.validate_rule("CFG_006", config)

        assert issue is not None
        assert issue.severity == IssueSeverity.BLOCKING
        assert issue.location == f"auth.{field_name}"

    def test_CFG_006_throttle_disabled_accepted(self):
        config = valid_config()
        config["auth"]["max_failed_logins"] = 0
        assert self.validator.validate_rule("CFG_006", config) is None

    def test_not_fail_fast(self):
        """Toutes les violations sont retournées."""
        config = valid_config()
        config["auth"]["token_secret"] = "short"
        config["auth"]["token_ttl_seconds"] = 0
        config["auth"]["pbkdf2_iterations"] = 10

        result = self.validator.validate(config)

        assert result.valid is False
        assert {e.rule_id for e in result.errors} == {"CFG_001", "CFG_002", "CFG_003"}

    def test_unknown_rule(self):
        issue = self.validator.validate_rule("CFG_999", valid_config())
        assert issue is not None
        assert issue.severity == IssueSeverity.BLOCKING
