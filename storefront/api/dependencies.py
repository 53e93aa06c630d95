from fastapi import Request

from .container import Container


def get_container(request: Request) -> Container:
    """Container attaché à l'application par create_app."""
    return request.app.state.container
