"""
Storefront Core - Taxonomie des erreurs

Toute erreur métier est typée et porte son statut transport (ERR_001).
La frontière HTTP mappe `status_code` sans connaître les sous-classes.
"""

from typing import Any, Dict, Optional


class StorefrontError(Exception):
    """
    Erreur de base du core.

    Attributes:
        code: Identifiant stable exposé au client
        status_code: Statut HTTP correspondant
        invariant: Invariant violé (optionnel)
    """

    code: str = "storefront_error"
    status_code: int = 500

    def __init__(self, message: str, invariant: Optional[str] = None):
        self.message = message
        self.invariant = invariant
        super().__init__(message)

    def to_dict(self) -> Dict[str, Any]:
        """Corps de réponse exposé au client."""
        return {"error": self.code, "message": self.message}


# ══════════════════════════════════════════════════════════════════════════════
# 400
# ══════════════════════════════════════════════════════════════════════════════


class ValidationError(StorefrontError, ValueError):
    """Entrée malformée (email, page, limit, produit...)."""

    code = "validation_error"
    status_code = 400


class InvalidInput(ValidationError):
    """Entrée vide ou hors contraintes d'une primitive (hasher)."""

    code = "invalid_input"


class InvalidPageParameter(ValidationError):
    """Paramètre de pagination invalide."""

    code = "invalid_page_parameter"

    def __init__(self, parameter: str, value: Any, message: str, invariant: Optional[str] = None):
        self.parameter = parameter
        self.value = value
        super().__init__(message, invariant=invariant)

    def to_dict(self) -> Dict[str, Any]:
        body = super().to_dict()
        body["parameter"] = self.parameter
        return body


class InvalidProductError(ValidationError):
    """Produit violant CAT_001."""

    code = "invalid_product"

    def __init__(self, message: str):
        super().__init__(message, invariant="CAT_001")


# ══════════════════════════════════════════════════════════════════════════════
# 401
# ══════════════════════════════════════════════════════════════════════════════


class AuthenticationFailed(StorefrontError):
    """Identifiants refusés. Message volontairement générique (AUTH_006)."""

    code = "authentication_failed"
    status_code = 401

    def __init__(self, message: str = "Invalid credentials"):
        super().__init__(message, invariant="AUTH_006")


class InvalidToken(StorefrontError):
    """Token malformé ou signature invalide."""

    code = "invalid_token"
    status_code = 401

    def __init__(self, message: str = "Invalid token", invariant: Optional[str] = "TOK_001"):
        super().__init__(message, invariant=invariant)


class TokenExpired(InvalidToken):
    """Token expiré."""

    code = "token_expired"

    def __init__(self, message: str = "Token expired"):
        super().__init__(message, invariant="TOK_003")


# ══════════════════════════════════════════════════════════════════════════════
# 404 / 409 / 500
# ══════════════════════════════════════════════════════════════════════════════


class NotFound(StorefrontError):
    """Ressource inexistante."""

    code = "not_found"
    status_code = 404


class ProductNotFound(NotFound):
    """Produit inexistant."""

    code = "product_not_found"

    def __init__(self, product_id: Any):
        self.product_id = product_id
        super().__init__(f"Product not found: {product_id}")


class DuplicateUser(StorefrontError):
    """Email déjà enregistré (AUTH_005)."""

    code = "duplicate_user"
    status_code = 409

    def __init__(self, message: str = "User already exists"):
        super().__init__(message, invariant="AUTH_005")


class InfrastructureError(StorefrontError):
    """Échec du store ou du réseau. Propagé, jamais relancé (ERR_003)."""

    code = "infrastructure_error"
    status_code = 500

    def __init__(self, message: str = "Infrastructure failure"):
        super().__init__(message, invariant="ERR_003")

    def to_dict(self) -> Dict[str, Any]:
        # Détails driver jamais exposés au client
        return {"error": self.code, "message": "Internal server error"}
