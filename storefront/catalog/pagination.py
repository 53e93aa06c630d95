"""
Catalog: Pagination Policy

Invariants:
    PAGE_001: page entier >= 1, défaut 1
    PAGE_002: limit dans l'ensemble autorisé, défaut 10
    PAGE_003: Valeur invalide rejetée, jamais corrigée silencieusement
    PAGE_004: total_pages = ceil(total_items / limit)
    PAGE_005: Page au-delà de total_pages = liste vide, pas d'erreur
"""

import re
from typing import Any, Iterable, List, Optional, Tuple, TypeVar

from ..core.errors import InvalidPageParameter
from .interfaces import IPaginationPolicy, PageRequest, PageResult


T = TypeVar("T")

_INTEGER_PATTERN = re.compile(r"^[+-]?[0-9]+$")


class PaginationPolicy(IPaginationPolicy):
    """
    Validation des paramètres page/limit et calcul des métadonnées.

    Une page au-delà de la dernière n'est pas ramenée à la dernière page:
    l'état de pagination reste idempotent si le total change entre deux requêtes.

    Example:
        policy = PaginationPolicy()
        request = policy.parse("2", "20")
        result = policy.build_result(items, total_items=45, page_request=request)
    """

    DEFAULT_PAGE: int = 1
    DEFAULT_LIMIT: int = 10
    ALLOWED_LIMITS: Tuple[int, ...] = (10, 20, 50)

    def __init__(self, allowed_limits: Optional[Iterable[int]] = None, default_limit: Optional[int] = None):
        """
        Args:
            allowed_limits: Tailles de page autorisées (défaut: 10, 20, 50)
            default_limit: Taille si absente (défaut: 10)

        Raises:
            ValueError: default_limit hors de allowed_limits
        """
        self.allowed_limits = tuple(sorted(set(allowed_limits))) if allowed_limits else self.ALLOWED_LIMITS
        self.default_limit = default_limit if default_limit is not None else self.DEFAULT_LIMIT

        if any(limit <= 0 for limit in self.allowed_limits):
            raise ValueError("allowed_limits must be positive")
        if self.default_limit not in self.allowed_limits:
            raise ValueError(f"default_limit {self.default_limit} not in {self.allowed_limits}")

    def parse(self, raw_page: Any, raw_limit: Any) -> PageRequest:
        """
        Valide page et limit bruts (query string ou entiers).

        Raises:
            InvalidPageParameter: Valeur non entière, page < 1, limit hors ensemble
        """
        page = self._to_int("page", raw_page, self.DEFAULT_PAGE)
        if page < 1:
            raise InvalidPageParameter("page", raw_page, "page must be an integer >= 1", invariant="PAGE_001")

        limit = self._to_int("limit", raw_limit, self.default_limit)
        if limit not in self.allowed_limits:
            allowed = ", ".join(str(v) for v in self.allowed_limits)
            raise InvalidPageParameter("limit", raw_limit, f"limit must be one of {allowed}", invariant="PAGE_002")

        return PageRequest(page=page, limit=limit)

    def build_result(self, items: List[T], total_items: int, page_request: PageRequest) -> PageResult[T]:
        """
        Calcule les métadonnées de la page (PAGE_004, PAGE_005).

        Raises:
            ValueError: total_items négatif
        """
        if total_items < 0:
            raise ValueError(f"total_items must be >= 0, got {total_items}")

        limit = page_request.limit
        total_pages = -(-total_items // limit)

        return PageResult(
            items=list(items),
            current_page=page_request.page,
            total_pages=total_pages,
            total_items=total_items,
            items_per_page=limit,
            has_next_page=page_request.page < total_pages,
            has_previous_page=page_request.page > 1,
        )

    def _to_int(self, name: str, raw: Any, default: int) -> int:
        """Convertit une valeur brute; None ou chaîne vide = absent."""
        if raw is None:
            return default

        if isinstance(raw, bool):
            raise InvalidPageParameter(name, raw, f"{name} must be an integer", invariant="PAGE_003")

        if isinstance(raw, int):
            return raw

        if isinstance(raw, str):
            stripped = raw.strip()
            if stripped == "":
                return default
            if _INTEGER_PATTERN.match(stripped):
                return int(stripped)

        raise InvalidPageParameter(name, raw, f"{name} must be an integer", invariant="PAGE_003")
