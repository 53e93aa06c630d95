"""
Catalog: Produits et pagination

Invariants couverts:
- PAGE_001-005 (Pagination)
- CAT_001-004 (Catalogue)
"""

from .interfaces import (
    IProductRepository,
    IPaginationPolicy,
    Product,
    ProductDetails,
    PageRequest,
    ProductPage,
    PageResult,
)
from .pagination import PaginationPolicy
from .product_repository import InMemoryProductRepository, ProductRepositoryDatabase
from .use_cases import ListProductsUseCase, GetProductUseCase

__all__ = [
    # Interfaces
    "IProductRepository",
    "IPaginationPolicy",
    # Data classes
    "Product",
    "ProductDetails",
    "PageRequest",
    "ProductPage",
    "PageResult",
    # Implementations
    "PaginationPolicy",
    "InMemoryProductRepository",
    "ProductRepositoryDatabase",
    # Use cases
    "ListProductsUseCase",
    "GetProductUseCase",
]
