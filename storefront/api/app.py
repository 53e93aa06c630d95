"""
API: Application factory
"""

import os
from typing import Optional

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException

from ..core.config_loader import ConfigLoader
from ..core.errors import StorefrontError
from .container import Container
from .errors import (
    http_exception_handler,
    storefront_error_handler,
    unhandled_exception_handler,
    validation_error_handler,
)
from .middleware import CorrelationIdMiddleware
from .routers.auth import router as auth_router
from .routers.catalog import router as catalog_router
from .routers.health import router as health_router


ENVIRONMENT_VARIABLE = "STOREFRONT_ENV"
CONFIG_PATH_VARIABLE = "STOREFRONT_CONFIG_PATH"


def create_app(container: Optional[Container] = None) -> FastAPI:
    """
    Construit l'application HTTP.

    Args:
        container: Graphe d'objets; chargé depuis config/<STOREFRONT_ENV>.yaml si absent

    Raises:
        ConfigIntegrityError: Configuration absente ou invalide
    """
    if container is None:
        environment = os.environ.get(ENVIRONMENT_VARIABLE, "default")
        loader = ConfigLoader(os.environ.get(CONFIG_PATH_VARIABLE, "config"))
        container = Container.from_config(loader.load(environment))

    app = FastAPI(
        title="Storefront",
        version=container.config.version,
        redirect_slashes=False,
    )
    app.state.container = container

    app.add_middleware(CorrelationIdMiddleware)

    app.add_exception_handler(StorefrontError, storefront_error_handler)  # type: ignore[arg-type]
    app.add_exception_handler(RequestValidationError, validation_error_handler)  # type: ignore[arg-type]
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)  # type: ignore[arg-type]
    app.add_exception_handler(Exception, unhandled_exception_handler)

    app.include_router(health_router)
    app.include_router(auth_router)
    app.include_router(catalog_router)

    container.logger.info(
        "Application created",
        environment=container.config.environment,
        version=container.config.version,
    )

    return app
