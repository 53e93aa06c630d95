"""
API: Frontière HTTP (FastAPI)

Invariants couverts:
- ERR_001-002 (Mapping des erreurs)
"""

from .app import create_app
from .container import Container

__all__ = [
    "create_app",
    "Container",
]
