"""
Tests unitaires EmailAddress

Invariant testé:
    AUTH_004: Email normalisé et conforme à la grammaire stricte
"""

import pytest

from storefront.auth.email_address import EmailAddress
from storefront.core.errors import ValidationError


class TestEmailAddressNormalization:
    """Tests normalisation."""

    def test_AUTH_004_trim_and_lowercase(self):
        """AUTH_004: Espaces retirés, minuscules."""
        assert EmailAddress.parse("  Jane.Doe@Example.COM ").value == "jane.doe@example.com"

    def test_str_returns_value(self):
        assert str(EmailAddress.parse("jane@example.com")) == "jane@example.com"

    def test_equal_after_normalization(self):
        """Deux saisies équivalentes donnent la même valeur."""
        assert EmailAddress.parse("JANE@example.com") == EmailAddress.parse("jane@EXAMPLE.com")

    @pytest.mark.parametrize(
        "raw",
        [
            "jane@example.com",
            "jane.doe+shop@mail.example.co.uk",
            "j_d-1@sub-domain.example.io",
        ],
    )
    def test_valid_addresses_accepted(self, raw):
        assert EmailAddress.parse(raw).value == raw


class TestEmailAddressRejection:
    """Tests grammaire stricte."""

    @pytest.mark.parametrize(
        "raw",
        [
            "",
            "   ",
            "plainaddress",
            "@example.com",
            "jane@",
            "jane@@example.com",
            "jane@example",
            "jane@example.c",
            ".jane@example.com",
            "jane.@example.com",
            "ja..ne@example.com",
            "jane doe@example.com",
            "jane@-example.com",
            "jane@example-.com",
            "jane@example.123",
        ],
    )
    def test_AUTH_004_malformed_rejected(self, raw):
        """AUTH_004: Email malformé → ValidationError."""
        with pytest.raises(ValidationError) as exc_info:
            EmailAddress.parse(raw)
        assert exc_info.value.invariant == "AUTH_004"

    def test_non_string_rejected(self):
        with pytest.raises(ValidationError):
            EmailAddress.parse(None)

    def test_local_part_too_long_rejected(self):
        """Partie locale > 64 caractères refusée."""
        with pytest.raises(ValidationError):
            EmailAddress.parse("a" * 65 + "@example.com")

    def test_address_too_long_rejected(self):
        """Adresse > 254 caractères refusée."""
        domain = ".".join(["a" * 60] * 5) + ".com"
        with pytest.raises(ValidationError):
            EmailAddress.parse(f"jane@{domain}")

    def test_validation_error_is_value_error(self):
        """ValidationError reste un ValueError."""
        with pytest.raises(ValueError):
            EmailAddress.parse("invalid")
