"""
Catalog: Use Cases

Listing paginé et détail produit. Un seul appel store par étape, sans cache
ni retry: les erreurs du repository sont propagées telles quelles.
"""

from typing import Any, Optional

from ..logging import IStructuredLogger
from .interfaces import IPaginationPolicy, IProductRepository, PageResult, Product, ProductDetails


class ListProductsUseCase:
    """
    Liste les produits d'une page.

    Example:
        list_products = ListProductsUseCase(repository, PaginationPolicy())
        result = await list_products.execute("2", "20")
    """

    def __init__(
        self,
        repository: IProductRepository,
        policy: IPaginationPolicy,
        logger: Optional[IStructuredLogger] = None,
    ):
        self._repository = repository
        self._policy = policy
        self._logger = logger

    async def execute(self, raw_page: Any = None, raw_limit: Any = None) -> PageResult[Product]:
        """
        Args:
            raw_page: page brute (None = défaut)
            raw_limit: limit brute (None = défaut)

        Raises:
            InvalidPageParameter: Paramètre invalide, aucun appel store
            InfrastructureError: Échec du store
        """
        page_request = self._policy.parse(raw_page, raw_limit)
        page = await self._repository.list_paged(page_request)
        result = self._policy.build_result(page.items, page.total_items, page_request)

        if self._logger:
            self._logger.debug(
                "Products listed",
                page=result.current_page,
                limit=result.items_per_page,
                returned=len(result.items),
                total=result.total_items,
            )

        return result


class GetProductUseCase:
    """Retourne un produit et ses grandeurs dérivées."""

    def __init__(self, repository: IProductRepository):
        self._repository = repository

    async def execute(self, product_id: Any) -> ProductDetails:
        """
        Raises:
            ProductNotFound: Produit inexistant
            InfrastructureError: Échec du store
        """
        product = await self._repository.get(product_id)
        return ProductDetails.of(product)
