"""
API: Exception handlers

Invariants:
    ERR_001: Toute erreur métier mappée par son status_code
    ERR_002: Aucune exception non gérée exposée au transport
"""

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from ..core.errors import InfrastructureError, StorefrontError
from ..logging import IStructuredLogger


def _logger(request: Request) -> IStructuredLogger:
    return request.app.state.container.logger


def storefront_error_handler(request: Request, exc: StorefrontError) -> JSONResponse:
    if isinstance(exc, InfrastructureError):
        _logger(request).error(
            "Infrastructure failure",
            path=request.url.path,
            error=exc.message,
        )
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = []
    for e in exc.errors():
        loc = e.get("loc") or ()
        errors.append(
            {
                "path": ".".join(str(x) for x in loc if x != "body"),
                "message": e.get("msg", "Invalid value"),
            }
        )
    return JSONResponse(
        status_code=400,
        content={"error": "validation_error", "message": "Request validation failed", "details": errors},
    )


def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    status_code = int(exc.status_code or 500)
    if status_code == 404:
        content = {"error": "not_found", "message": "Route not found"}
    else:
        content = {"error": "http_error", "message": str(exc.detail)}
    return JSONResponse(status_code=status_code, content=content, headers=getattr(exc, "headers", None))


def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    # Trace complète côté logs, réponse générique côté client
    _logger(request).error(
        "Unhandled exception",
        path=request.url.path,
        method=request.method,
        exception_type=type(exc).__name__,
        exception=str(exc),
    )
    return JSONResponse(
        status_code=500,
        content={"error": "internal_error", "message": "Internal server error"},
    )
