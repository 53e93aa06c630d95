"""
API: Correlation middleware
"""

import uuid

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware

from ..logging import correlation_id_var


class CorrelationIdMiddleware(BaseHTTPMiddleware):
    """
    Accepte un X-Correlation-ID entrant ou génère un UUID4, le place dans le
    contexte du logger et le renvoie dans la réponse.
    """

    header_name = "X-Correlation-ID"

    async def dispatch(self, request: Request, call_next):
        inbound = request.headers.get(self.header_name)
        correlation_id = (inbound.strip() if inbound else "") or str(uuid.uuid4())

        request.state.correlation_id = correlation_id
        token = correlation_id_var.set(correlation_id)
        try:
            response = await call_next(request)
            response.headers[self.header_name] = correlation_id
            return response
        finally:
            correlation_id_var.reset(token)
