from fastapi import APIRouter, Depends

from ..container import Container
from ..dependencies import get_container


router = APIRouter(tags=["health"])


@router.get("/health")
def health(container: Container = Depends(get_container)):
    return {
        "status": "ok",
        "version": container.config.version,
        "environment": container.config.environment,
    }
