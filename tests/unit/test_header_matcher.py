"""
Unit tests for column header matching.

Covers normalization and the exact / contains / fuzzy tiers.
"""

import pytest

from models.property_import import MatchConfidence
from parsers.header_matcher import (
    COLUMN_MAP,
    ColumnMatch,
    expand_abbreviations,
    match_column,
    normalize_header,
)


# ===================
# NORMALIZATION TESTS
# ===================

class TestNormalizeHeader:
    """Tests for normalize_header."""

    @pytest.mark.parametrize("raw,expected", [
        ("Área Construida (m²)", "area construida"),
        ("Precio Venta COP $", "precio venta"),
        ("Valor (USD)", "valor"),
        ("N° Habitaciones", "numero habitaciones"),
        ("No. Baños", "numero banos"),
        ("# Parqueaderos", "numero parqueaderos"),
        ("  Tipo   de   Inmueble ", "tipo de inmueble"),
        ("area_privada", "area privada"),
    ])
    def test_normalizes_common_headers(self, raw, expected):
        assert normalize_header(raw) == expected

    def test_none_is_empty(self):
        assert normalize_header(None) == ""

    def test_keeps_words_containing_unit_letters(self):
        """Units are only removed as whole tokens."""
        assert normalize_header("Metros cuadrados") == "metros cuadrados"


# ===================
# EXACT TIER TESTS
# ===================

class TestExactMatching:
    """Headers found directly in the dictionary."""

    def test_raw_header_exact(self):
        assert match_column("Precio") == ColumnMatch("sale_price", MatchConfidence.EXACT)

    def test_case_and_whitespace_insensitive(self):
        match = match_column("  PRECIO VENTA ")
        assert match.field == "sale_price"
        assert match.confidence == MatchConfidence.EXACT

    def test_accented_header(self):
        assert match_column("Título").field == "title"
        assert match_column("Baños").field == "bathrooms"

    @pytest.mark.parametrize("raw,field", [
        ("Año construcción", "year_built"),
        ("Ano construccion", "year_built"),
        ("AÑO CONSTRUCCION", "year_built"),
        ("Tel. Propietario", "owner_phone"),
        ("Cel propietario", "owner_phone"),
    ])
    def test_back_office_export_headers(self, raw, field):
        match = match_column(raw)
        assert match.field == field
        assert match.confidence == MatchConfidence.EXACT

    def test_normalized_header_exact(self):
        """Units and brackets removed before lookup."""
        match = match_column("Área Construida (m²)")
        assert match.field == "built_area_m2"
        assert match.confidence == MatchConfidence.EXACT

    def test_currency_removed_before_lookup(self):
        match = match_column("Valor de venta (COP)")
        assert match.field == "sale_price"
        assert match.confidence == MatchConfidence.EXACT

    def test_every_dictionary_key_matches_exactly(self):
        for key, field in COLUMN_MAP.items():
            match = match_column(key)
            assert match.field == field, key
            assert match.confidence == MatchConfidence.EXACT


# ===================
# CONTAINS TIER TESTS
# ===================

class TestContainsMatching:
    """Headers that contain a dictionary key."""

    def test_longest_key_wins(self):
        """'precio arriendo' beats the shorter 'precio'."""
        match = match_column("Precio arriendo mensual")
        assert match.field == "rent_price"
        assert match.confidence == MatchConfidence.CONTAINS

    def test_truncated_header(self):
        """Header shorter than the key it belongs to."""
        match = match_column("Habitac.")
        assert match.field == "bedrooms"
        assert match.confidence == MatchConfidence.CONTAINS

    def test_number_marker_header(self):
        assert match_column("N° Habitaciones").field == "bedrooms"

    def test_short_header_below_floor_is_not_contained(self):
        assert match_column("Zon") is None

    def test_floor_is_configurable(self):
        match = match_column("Zon", min_contains_length=3)
        assert match.field == "zone"
        assert match.confidence == MatchConfidence.CONTAINS


# ===================
# FUZZY TIER TESTS
# ===================

class TestFuzzyMatching:
    """Abbreviated headers."""

    @pytest.mark.parametrize("raw,field", [
        ("Hab.", "bedrooms"),
        ("Adm.", "admin_fee"),
        ("Dpto.", "state_department"),
        ("Tel.", "owner_phone"),
    ])
    def test_abbreviations(self, raw, field):
        match = match_column(raw)
        assert match.field == field
        assert match.confidence == MatchConfidence.FUZZY

    def test_expand_exact_abbreviation(self):
        assert expand_abbreviations("hab") == "habitaciones"

    def test_expand_truncated_word(self):
        assert expand_abbreviations("habitac") == "habitaciones"

    def test_does_not_expand_unrelated_word(self):
        """'terraza' starts with 'terr' but is not a prefix of 'terreno'."""
        assert expand_abbreviations("terraza") == "terraza"


# ===================
# UNMAPPED TESTS
# ===================

class TestUnmatched:
    """Headers with no counterpart."""

    @pytest.mark.parametrize("raw", ["Orientación", "Vista", "", "   ", None])
    def test_returns_none(self, raw):
        assert match_column(raw) is None
