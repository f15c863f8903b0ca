"""
Unit tests for slug generation.
"""

from services.slug_service import FALLBACK_SLUG, UniqueSlugGenerator
from utils.text_utils import generate_slug, strip_accents


# ===================
# TEXT HELPER TESTS
# ===================

class TestTextHelpers:
    """Tests for generate_slug and strip_accents."""

    def test_generate_slug(self):
        assert generate_slug("Apto en Chapinero") == "apto-en-chapinero"
        assert generate_slug("Casa Campestre: Año 2020!") == "casa-campestre-ano-2020"

    def test_strip_accents(self):
        assert strip_accents("Área construida, Baños") == "Area construida, Banos"
        assert strip_accents(None) == ""


# ===================
# UNIQUE SLUG TESTS
# ===================

class TestUniqueSlugGenerator:
    """Tests for UniqueSlugGenerator."""

    def test_unique_suffixes(self):
        slugs = UniqueSlugGenerator()
        assert slugs("Apto") == "apto"
        assert slugs("Apto") == "apto-2"
        assert slugs("APTO") == "apto-3"

    def test_seeded_with_existing(self):
        slugs = UniqueSlugGenerator(existing_slugs=["casa", "casa-2"])
        assert slugs("Casa") == "casa-3"

    def test_fallback_for_symbols(self):
        slugs = UniqueSlugGenerator()
        assert slugs("★★★") == FALLBACK_SLUG

    def test_generators_are_independent(self):
        assert UniqueSlugGenerator()("Apto") == UniqueSlugGenerator()("Apto") == "apto"
