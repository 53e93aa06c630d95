"""
Catalog: Interfaces

Types du catalogue et contrat du repository produits.

Invariants:
    CAT_001: Dimensions et poids strictement positifs
    CAT_002: Volume et densité dérivés, jamais stockés
    PAGE_001-005: Pagination
"""

import math
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Generic, List, TypeVar

from ..core.errors import InvalidProductError


T = TypeVar("T")


@dataclass(frozen=True)
class Product:
    """
    Article vendable du catalogue.

    Attributes:
        id: Identifiant produit
        description: Libellé
        price: Prix unitaire (> 0)
        width: Largeur en cm (> 0)
        height: Hauteur en cm (> 0)
        length: Longueur en cm (> 0)
        weight: Poids en kg (> 0)
    """

    id: Any
    description: str
    price: float
    width: float
    height: float
    length: float
    weight: float

    def __post_init__(self):
        """Validation des contraintes (CAT_001)."""
        for name in ("price", "width", "height", "length", "weight"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, (int, float)):
                raise InvalidProductError(f"{name} must be a number, got {value!r}")
            if not math.isfinite(value) or value <= 0:
                raise InvalidProductError(f"{name} must be strictly positive, got {value!r}")

        # Dimensions positives mais volume arrondi à 0 ou densité non finie
        volume = self.volume
        if volume == 0:
            raise InvalidProductError("dimensions yield a zero volume")
        if not math.isfinite(self.weight / volume):
            raise InvalidProductError("dimensions and weight yield a non-finite density")

    @property
    def volume(self) -> float:
        """Volume en m³ (dimensions en cm)."""
        return (self.width / 100) * (self.height / 100) * (self.length / 100)

    @property
    def density(self) -> float:
        """Densité en kg/m³."""
        return self.weight / self.volume


@dataclass(frozen=True)
class ProductDetails:
    """Produit augmenté de ses grandeurs dérivées (CAT_002)."""

    product: Product
    volume: float
    density: float

    @classmethod
    def of(cls, product: Product) -> "ProductDetails":
        return cls(product=product, volume=product.volume, density=product.density)


@dataclass(frozen=True)
class PageRequest:
    """
    Intention de pagination validée.

    Attributes:
        page: Numéro de page (>= 1)
        limit: Taille de page
    """

    page: int
    limit: int

    @property
    def offset(self) -> int:
        """CAT_003: offset = (page - 1) * limit."""
        return (self.page - 1) * self.limit


@dataclass(frozen=True)
class ProductPage:
    """Résultat brut du repository: une page et le total."""

    items: List[Product]
    total_items: int


@dataclass(frozen=True)
class PageResult(Generic[T]):
    """
    Enveloppe de réponse paginée.

    Invariants:
        PAGE_004: total_pages = ceil(total_items / items_per_page)
        has_next_page <=> current_page < total_pages
    """

    items: List[T]
    current_page: int
    total_pages: int
    total_items: int
    items_per_page: int
    has_next_page: bool
    has_previous_page: bool

    def metadata(self) -> dict:
        """Métadonnées de pagination (forme exposée par l'API)."""
        return {
            "currentPage": self.current_page,
            "totalPages": self.total_pages,
            "totalItems": self.total_items,
            "itemsPerPage": self.items_per_page,
            "hasNextPage": self.has_next_page,
            "hasPreviousPage": self.has_previous_page,
        }


class IProductRepository(ABC):
    """Interface accès produits."""

    @abstractmethod
    async def list_paged(self, page_request: PageRequest) -> ProductPage:
        """
        Retourne une page de produits et le nombre total.

        Raises:
            InfrastructureError: Échec du store
        """
        pass

    @abstractmethod
    async def get(self, product_id: Any) -> Product:
        """
        Retourne un produit.

        Raises:
            ProductNotFound: Produit inexistant
            InfrastructureError: Échec du store
        """
        pass


class IPaginationPolicy(ABC):
    """Interface validation des paramètres et calcul des métadonnées."""

    @abstractmethod
    def parse(self, raw_page: Any, raw_limit: Any) -> PageRequest:
        """
        Raises:
            InvalidPageParameter: page ou limit invalide
        """
        pass

    @abstractmethod
    def build_result(self, items: List[T], total_items: int, page_request: PageRequest) -> PageResult[T]:
        pass
