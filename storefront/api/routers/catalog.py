"""
API: Routes catalogue
"""

from dataclasses import asdict
from typing import Optional

from fastapi import APIRouter, Depends, Query

from ..container import Container
from ..dependencies import get_container


router = APIRouter(prefix="/api/products", tags=["catalog"])


@router.get("")
async def list_products(
    page: Optional[str] = Query(None),
    limit: Optional[str] = Query(None),
    container: Container = Depends(get_container),
):
    # Valeurs brutes: la validation appartient à PaginationPolicy
    result = await container.list_products.execute(page, limit)
    return {
        "data": [asdict(product) for product in result.items],
        "pagination": result.metadata(),
    }


@router.get("/{product_id}")
async def get_product(product_id: int, container: Container = Depends(get_container)):
    details = await container.get_product.execute(product_id)
    body = asdict(details.product)
    body["volume"] = details.volume
    body["density"] = details.density
    return body
