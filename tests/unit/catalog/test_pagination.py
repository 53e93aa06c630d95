"""
Tests unitaires PaginationPolicy

Invariants testés:
    PAGE_001: page entier >= 1, défaut 1
    PAGE_002: limit dans l'ensemble autorisé, défaut 10
    PAGE_003: Valeur invalide rejetée, jamais corrigée
    PAGE_004: total_pages = ceil(total_items / limit)
    PAGE_005: Page au-delà de total_pages = liste vide
"""

import math

import pytest

from storefront.catalog.interfaces import IPaginationPolicy, PageRequest
from storefront.catalog.pagination import PaginationPolicy
from storefront.core.errors import InvalidPageParameter, ValidationError


# ══════════════════════════════════════════════════════════════════════════════
# TESTS PARSE
# ══════════════════════════════════════════════════════════════════════════════


class TestPaginationParse:
    """Tests validation des paramètres."""

    def setup_method(self):
        self.policy = PaginationPolicy()

    def test_implements_interface(self):
        assert isinstance(self.policy, IPaginationPolicy)

    @pytest.mark.parametrize("raw_page,raw_limit", [(None, None), ("", ""), ("  ", None)])
    def test_defaults_when_absent(self, raw_page, raw_limit):
        """PAGE_001/PAGE_002: Absent → page 1, limit 10."""
        assert self.policy.parse(raw_page, raw_limit) == PageRequest(page=1, limit=10)

    @pytest.mark.parametrize("raw_limit", ["10", "20", "50", 10, 20, 50])
    def test_PAGE_002_allowed_limits(self, raw_limit):
        assert self.policy.parse("1", raw_limit).limit == int(raw_limit)

    def test_string_page_parsed(self):
        assert self.policy.parse("3", "20") == PageRequest(page=3, limit=20)

    @pytest.mark.parametrize("raw_page", ["0", "-1", 0, -5])
    def test_PAGE_001_page_below_one_rejected(self, raw_page):
        """PAGE_001: page < 1 → InvalidPageParameter."""
        with pytest.raises(InvalidPageParameter) as exc_info:
            self.policy.parse(raw_page, None)

        assert exc_info.value.parameter == "page"
        assert exc_info.value.invariant == "PAGE_001"

    @pytest.mark.parametrize("raw_limit", ["15", "0", "100", 5, -10])
    def test_PAGE_002_limit_outside_set_rejected(self, raw_limit):
        """PAGE_002: limit hors {10, 20, 50} → InvalidPageParameter."""
        with pytest.raises(InvalidPageParameter) as exc_info:
            self.policy.parse(None, raw_limit)

        assert exc_info.value.parameter == "limit"
        assert exc_info.value.invariant == "PAGE_002"

    @pytest.mark.parametrize("raw", ["abc", "1.5", "1e2", "0x10", 1.5, 2.0, True, [1], "١"])
    def test_PAGE_003_non_integer_page_rejected(self, raw):
        """PAGE_003: Valeur non entière jamais arrondie."""
        with pytest.raises(InvalidPageParameter) as exc_info:
            self.policy.parse(raw, None)

        assert exc_info.value.parameter == "page"

    @pytest.mark.parametrize("raw", ["abc", "10.0", 10.0, False])
    def test_PAGE_003_non_integer_limit_rejected(self, raw):
        with pytest.raises(InvalidPageParameter) as exc_info:
            self.policy.parse(None, raw)

        assert exc_info.value.parameter == "limit"

    def test_error_is_validation_error(self):
        """InvalidPageParameter → 400 avec nom du paramètre."""
        with pytest.raises(ValidationError) as exc_info:
            self.policy.parse("x", None)

        body = exc_info.value.to_dict()
        assert exc_info.value.status_code == 400
        assert body["parameter"] == "page"

    def test_custom_limits(self):
        policy = PaginationPolicy(allowed_limits=[5, 25], default_limit=5)
        assert policy.parse(None, None).limit == 5
        assert policy.parse(None, "25").limit == 25
        with pytest.raises(InvalidPageParameter):
            policy.parse(None, "10")

    def test_default_limit_must_be_allowed(self):
        with pytest.raises(ValueError):
            PaginationPolicy(allowed_limits=[10, 20], default_limit=50)


# ══════════════════════════════════════════════════════════════════════════════
# TESTS BUILD RESULT
# ══════════════════════════════════════════════════════════════════════════════


class TestPaginationBuildResult:
    """Tests métadonnées."""

    def setup_method(self):
        self.policy = PaginationPolicy()

    def test_middle_page(self):
        result = self.policy.build_result(list(range(10)), 45, PageRequest(page=2, limit=10))

        assert result.current_page == 2
        assert result.total_pages == 5
        assert result.total_items == 45
        assert result.items_per_page == 10
        assert result.has_next_page is True
        assert result.has_previous_page is True

    def test_last_page(self):
        result = self.policy.build_result(list(range(5)), 45, PageRequest(page=5, limit=10))

        assert result.has_next_page is False
        assert result.has_previous_page is True

    def test_empty_catalog(self):
        """0 produit → 0 page, aucune navigation."""
        result = self.policy.build_result([], 0, PageRequest(page=1, limit=10))

        assert result.total_pages == 0
        assert result.has_next_page is False
        assert result.has_previous_page is False

    def test_PAGE_005_beyond_last_page_not_clamped(self):
        """PAGE_005: Page au-delà → liste vide, métadonnées exactes."""
        result = self.policy.build_result([], 45, PageRequest(page=9, limit=10))

        assert result.items == []
        assert result.current_page == 9
        assert result.total_pages == 5
        assert result.has_next_page is False
        assert result.has_previous_page is True

    @pytest.mark.parametrize("total", [0, 1, 9, 10, 11, 49, 50, 51, 1000])
    @pytest.mark.parametrize("limit", [10, 20, 50])
    def test_PAGE_004_total_pages_is_ceiling(self, total, limit):
        """PAGE_004: total_pages = ceil(total / limit)."""
        result = self.policy.build_result([], total, PageRequest(page=1, limit=limit))

        assert result.total_pages == math.ceil(total / limit)
        assert result.has_next_page == (1 < result.total_pages)

    def test_negative_total_rejected(self):
        with pytest.raises(ValueError):
            self.policy.build_result([], -1, PageRequest(page=1, limit=10))

    def test_metadata_shape(self):
        result = self.policy.build_result([], 45, PageRequest(page=2, limit=20))

        assert result.metadata() == {
            "currentPage": 2,
            "totalPages": 3,
            "totalItems": 45,
            "itemsPerPage": 20,
            "hasNextPage": True,
            "hasPreviousPage": True,
        }


class TestPageRequest:
    """Tests offset."""

    @pytest.mark.parametrize("page,limit,offset", [(1, 10, 0), (2, 10, 10), (3, 20, 40), (4, 50, 150)])
    def test_offset(self, page, limit, offset):
        assert PageRequest(page=page, limit=limit).offset == offset
