"""
Catalog: Product Repositories

Invariants:
    CAT_003: offset = (page - 1) * limit
    CAT_004: Total calculé par requête COUNT séparée
    ERR_003: Échec du store propagé en InfrastructureError
"""

from typing import Any, Dict, Iterable, Mapping

from ..core.errors import InfrastructureError, InvalidProductError, ProductNotFound
from ..core.interfaces import Connection
from .interfaces import IProductRepository, PageRequest, Product, ProductPage


def row_to_product(row: Mapping[str, Any]) -> Product:
    """
    Mappe une ligne `products` vers Product.

    Raises:
        InfrastructureError: Colonne absente ou valeurs violant CAT_001
    """
    try:
        return Product(
            id=row["id"],
            description=row["description"],
            price=_as_number(row["price"]),
            width=_as_number(row["width"]),
            height=_as_number(row["height"]),
            length=_as_number(row["length"]),
            weight=_as_number(row["weight"]),
        )
    except KeyError as e:
        raise InfrastructureError(f"Malformed products row: missing {e}") from e
    except InvalidProductError as e:
        raise InfrastructureError(f"Invalid product row {row.get('id')!r}: {e.message}") from e


def _as_number(value: Any) -> Any:
    # Les drivers renvoient NUMERIC en Decimal
    if value is not None and not isinstance(value, (bool, int, float)):
        try:
            return float(value)
        except (TypeError, ValueError):
            return value
    return value


class InMemoryProductRepository(IProductRepository):
    """
    Repository en mémoire, trié par id.

    Example:
        repository = InMemoryProductRepository([Product(...), Product(...)])
    """

    def __init__(self, products: Iterable[Product] = ()):
        self._products: Dict[Any, Product] = {}
        for product in products:
            self.add(product)

    def add(self, product: Product) -> None:
        """Ajoute ou remplace un produit."""
        self._products[product.id] = product

    async def list_paged(self, page_request: PageRequest) -> ProductPage:
        ordered = sorted(self._products.values(), key=lambda p: p.id)
        start = page_request.offset
        return ProductPage(
            items=ordered[start:start + page_request.limit],
            total_items=len(ordered),
        )

    async def get(self, product_id: Any) -> Product:
        product = self._products.get(product_id)
        if product is None:
            raise ProductNotFound(product_id)
        return product

    def __len__(self) -> int:
        return len(self._products)


class ProductRepositoryDatabase(IProductRepository):
    """
    Repository adossé à une base relationnelle.

    Table attendue: products(id, description, price, width, height, length, weight).
    Aucune interpolation: limit, offset et id passent en paramètres.
    """

    COLUMNS = "id, description, price, width, height, length, weight"
    SELECT_PAGE = f"SELECT {COLUMNS} FROM products ORDER BY id LIMIT %s OFFSET %s"
    COUNT = "SELECT COUNT(*) AS total FROM products"
    SELECT_BY_ID = f"SELECT {COLUMNS} FROM products WHERE id = %s"

    def __init__(self, connection: Connection):
        """
        Args:
            connection: Connexion asynchrone (collaborateur externe)
        """
        self._connection = connection

    async def list_paged(self, page_request: PageRequest) -> ProductPage:
        """
        Lit une page puis le total.

        Raises:
            InfrastructureError: Échec du store ou ligne invalide
        """
        try:
            rows = await self._connection.fetch_all(
                self.SELECT_PAGE, (page_request.limit, page_request.offset)
            )
            count_row = await self._connection.fetch_one(self.COUNT, ())
        except Exception as e:
            raise InfrastructureError(f"Product listing failed: {e}") from e

        items = [row_to_product(row) for row in rows]
        return ProductPage(items=items, total_items=self._total(count_row))

    async def get(self, product_id: Any) -> Product:
        """
        Raises:
            ProductNotFound: Aucune ligne
            InfrastructureError: Échec du store ou ligne invalide
        """
        try:
            row = await self._connection.fetch_one(self.SELECT_BY_ID, (product_id,))
        except Exception as e:
            raise InfrastructureError(f"Product lookup failed: {e}") from e

        if row is None:
            raise ProductNotFound(product_id)

        return row_to_product(row)

    @staticmethod
    def _total(count_row: Any) -> int:
        if count_row is None:
            raise InfrastructureError("Product count returned no row")
        try:
            total = int(count_row["total"])
        except (KeyError, TypeError, ValueError) as e:
            raise InfrastructureError(f"Malformed count row: {e}") from e
        if total < 0:
            raise InfrastructureError(f"Negative product count: {total}")
        return total
