"""
Auth: Email Address

Valeur email normalisée et validée.

Invariant:
    AUTH_004: Email normalisé et conforme à la grammaire stricte
"""

import re
from dataclasses import dataclass

from ..core.errors import ValidationError


_LOCAL_ATOM = r"[A-Za-z0-9!#$%&'*+/=?^_`{|}~-]+"
_DOMAIN_LABEL = r"[A-Za-z0-9](?:[A-Za-z0-9-]{0,61}[A-Za-z0-9])?"

EMAIL_PATTERN = re.compile(
    rf"^{_LOCAL_ATOM}(?:\.{_LOCAL_ATOM})*@(?:{_DOMAIN_LABEL}\.)+[A-Za-z]{{2,63}}$"
)

MAX_EMAIL_LENGTH = 254
MAX_LOCAL_PART_LENGTH = 64


@dataclass(frozen=True)
class EmailAddress:
    """
    Email normalisé (trim + minuscules).

    Example:
        email = EmailAddress.parse("  Jane.Doe@Example.COM ")
        email.value  # "jane.doe@example.com"
    """

    value: str

    @classmethod
    def parse(cls, raw: str) -> "EmailAddress":
        """
        Normalise et valide un email.

        Raises:
            ValidationError: Email absent ou malformé
        """
        if not isinstance(raw, str):
            raise ValidationError("Email must be a string", invariant="AUTH_004")

        normalized = raw.strip().lower()

        if not normalized or len(normalized) > MAX_EMAIL_LENGTH:
            raise ValidationError("Invalid email address", invariant="AUTH_004")

        local_part = normalized.split("@", 1)[0]
        if len(local_part) > MAX_LOCAL_PART_LENGTH or not EMAIL_PATTERN.match(normalized):
            raise ValidationError("Invalid email address", invariant="AUTH_004")

        return cls(normalized)

    def __str__(self) -> str:
        return self.value
