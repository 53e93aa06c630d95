"""
Tests unitaires TokenIssuer

Invariants testés:
    TOK_001: Signature vérifiable uniquement avec le secret serveur
    TOK_002: expires_at strictement postérieur à issued_at
    TOK_003: Token rejeté si now > expires_at
    TOK_004: Secret injecté par configuration
"""

import pytest
import jwt
from datetime import datetime, timedelta, timezone

from storefront.auth.interfaces import ITokenIssuer, SessionToken
from storefront.auth.token_issuer import TokenIssuer
from storefront.core.errors import InvalidToken, TokenExpired

from tests.fakes import FakeClock, TEST_SECRET


NOW = datetime(2024, 6, 1, 12, 0, 0, tzinfo=timezone.utc)


# ══════════════════════════════════════════════════════════════════════════════
# TESTS CONFIGURATION (TOK_004)
# ══════════════════════════════════════════════════════════════════════════════


class TestTokenIssuerConfig:
    """Tests construction."""

    def test_implements_interface(self):
        """TokenIssuer implémente ITokenIssuer."""
        assert isinstance(TokenIssuer(TEST_SECRET), ITokenIssuer)

    def test_max_ttl_constant(self):
        """TTL maximal 86400s."""
        assert ITokenIssuer.MAX_TTL_SECONDS == 86400

    def test_short_secret_rejected(self):
        """Secret < 32 octets refusé."""
        with pytest.raises(ValueError):
            TokenIssuer("too-short")

    @pytest.mark.parametrize("ttl", [0, -1, 86401])
    def test_ttl_out_of_bounds_rejected(self, ttl):
        """TTL hors [1, 86400] refusé."""
        with pytest.raises(ValueError):
            TokenIssuer(TEST_SECRET, ttl_seconds=ttl)


# ══════════════════════════════════════════════════════════════════════════════
# TESTS SIGN / VERIFY
# ══════════════════════════════════════════════════════════════════════════════


class TestTokenIssuerRoundTrip:
    """Tests signature puis vérification."""

    def setup_method(self):
        self.clock = FakeClock(NOW)
        self.issuer = TokenIssuer(TEST_SECRET, ttl_seconds=900, clock=self.clock)

    def test_verify_returns_identity_and_window(self):
        """verify(sign(x)).subject == x, fenêtre = TTL."""
        session = self.issuer.verify(self.issuer.sign("jane@example.com"))

        assert isinstance(session, SessionToken)
        assert session.subject == "jane@example.com"
        assert session.issued_at == NOW
        assert session.expires_at == NOW + timedelta(seconds=900)

    def test_claims_are_sub_iat_exp(self):
        """Payload porte sub, iat, exp en secondes."""
        token = self.issuer.sign("jane@example.com")
        payload = jwt.decode(token, TEST_SECRET, algorithms=["HS256"], options={"verify_exp": False})

        assert payload["sub"] == "jane@example.com"
        assert payload["exp"] - payload["iat"] == 900

    def test_empty_identity_rejected(self):
        """Identité vide refusée."""
        with pytest.raises(ValueError):
            self.issuer.sign("")

    def test_valid_at_exact_expiry(self):
        """now == exp → encore valide (rejet si now > exp)."""
        token = self.issuer.sign("jane@example.com")
        self.clock.advance(timedelta(seconds=900))
        assert self.issuer.verify(token).subject == "jane@example.com"

    def test_TOK_003_expired_token_rejected(self):
        """TOK_003: now > exp → TokenExpired."""
        token = self.issuer.sign("jane@example.com")
        self.clock.advance(timedelta(seconds=901))

        with pytest.raises(TokenExpired) as exc_info:
            self.issuer.verify(token)

        assert exc_info.value.invariant == "TOK_003"
        assert exc_info.value.status_code == 401

    def test_expired_is_an_invalid_token(self):
        """TokenExpired est un InvalidToken."""
        assert issubclass(TokenExpired, InvalidToken)


# ══════════════════════════════════════════════════════════════════════════════
# TESTS REJET (TOK_001, TOK_002)
# ══════════════════════════════════════════════════════════════════════════════


class TestTokenIssuerRejection:
    """Tests tokens invalides."""

    def setup_method(self):
        self.clock = FakeClock(NOW)
        self.issuer = TokenIssuer(TEST_SECRET, clock=self.clock)

    def _encode(self, payload, secret=TEST_SECRET, algorithm="HS256"):
        return jwt.encode(payload, secret, algorithm=algorithm)

    def test_TOK_001_foreign_secret_rejected(self):
        """TOK_001: Token signé avec un autre secret → InvalidToken."""
        other = TokenIssuer("another-secret-0123456789-abcdefghij", clock=self.clock)
        with pytest.raises(InvalidToken):
            self.issuer.verify(other.sign("jane@example.com"))

    def test_TOK_001_tampered_payload_rejected(self):
        """TOK_001: Payload altéré → InvalidToken."""
        header, _, signature = self.issuer.sign("jane@example.com").split(".")
        forged_payload = self._encode({"sub": "admin@example.com", "iat": 1, "exp": 2}).split(".")[1]

        with pytest.raises(InvalidToken):
            self.issuer.verify(f"{header}.{forged_payload}.{signature}")

    def test_garbage_rejected(self):
        """Chaîne non JWT → InvalidToken."""
        with pytest.raises(InvalidToken):
            self.issuer.verify("not.a.token")

    def test_empty_token_rejected(self):
        """Token vide → InvalidToken."""
        with pytest.raises(InvalidToken):
            self.issuer.verify("")

    def test_none_algorithm_rejected(self):
        """alg=none refusé."""
        iat = int(NOW.timestamp())
        token = jwt.encode({"sub": "jane@example.com", "iat": iat, "exp": iat + 60}, None, algorithm="none")
        with pytest.raises(InvalidToken):
            self.issuer.verify(token)

    @pytest.mark.parametrize("missing", ["sub", "iat", "exp"])
    def test_missing_claim_rejected(self, missing):
        """Claim obligatoire absent → InvalidToken."""
        iat = int(NOW.timestamp())
        payload = {"sub": "jane@example.com", "iat": iat, "exp": iat + 60}
        del payload[missing]

        with pytest.raises(InvalidToken):
            self.issuer.verify(self._encode(payload))

    def test_TOK_002_exp_not_after_iat_rejected(self):
        """TOK_002: exp <= iat → InvalidToken."""
        iat = int(NOW.timestamp())
        token = self._encode({"sub": "jane@example.com", "iat": iat, "exp": iat})

        with pytest.raises(InvalidToken) as exc_info:
            self.issuer.verify(token)

        assert exc_info.value.invariant == "TOK_002"

    def test_empty_subject_rejected(self):
        """sub vide → InvalidToken."""
        iat = int(NOW.timestamp())
        token = self._encode({"sub": "", "iat": iat, "exp": iat + 60})

        with pytest.raises(InvalidToken):
            self.issuer.verify(token)

    def test_error_message_is_generic(self):
        """Le détail PyJWT n'est jamais exposé."""
        with pytest.raises(InvalidToken) as exc_info:
            self.issuer.verify("abc")
        assert exc_info.value.message == "Invalid token"


class TestSessionToken:
    """Tests SessionToken."""

    def test_TOK_002_window_must_be_positive(self):
        """TOK_002: expires_at <= issued_at refusé à la construction."""
        with pytest.raises(InvalidToken):
            SessionToken(subject="jane@example.com", issued_at=NOW, expires_at=NOW)
