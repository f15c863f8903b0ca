"""
Unit tests for cell value normalizers.
"""

from datetime import date, datetime

import pytest

from models.property_import import (
    Availability,
    BusinessType,
    PropertyStatus,
    PropertyType,
)
from parsers.value_normalizers import (
    clean_numeric_value,
    normalize_availability,
    normalize_business_type,
    normalize_currency,
    normalize_email,
    normalize_property_status,
    normalize_property_type,
    normalize_stratum,
    normalize_year_built,
    parse_features,
    parse_image_urls,
    to_nullable_number,
    to_number,
    to_optional_str,
)


# ===================
# NUMERIC TESTS
# ===================

class TestCleanNumericValue:
    """Tests for clean_numeric_value."""

    @pytest.mark.parametrize("raw,expected", [
        ("$350.000.000", 350000000),
        ("85,5", 85.5),
        ("1,200,000.50", 1200000.5),
        ("1.500", 1500),
        ("85.5", 85.5),
        ("120 m²", 120),
        ("COP 1.500.000", 1500000),
        ("COP $ 350.000", 350000),
        ("US$ 250,000", 250000),
        ("350.000 COP", 350000),
        ("1.250.000,75", 1250000.75),
        ("  42 ", 42),
    ])
    def test_parses_text_formats(self, raw, expected):
        assert clean_numeric_value(raw) == pytest.approx(expected)

    @pytest.mark.parametrize("raw", ["N/A", "", "-", "null", "abc", None])
    def test_unusable_returns_none(self, raw):
        assert clean_numeric_value(raw) is None

    def test_numbers_pass_through(self):
        assert clean_numeric_value(1500) == 1500.0
        assert clean_numeric_value(85.5) == 85.5

    def test_non_finite_is_none(self):
        assert clean_numeric_value(float("nan")) is None
        assert clean_numeric_value(float("inf")) is None

    def test_booleans_are_not_numbers(self):
        assert clean_numeric_value(True) is None


class TestNumericWrappers:
    """Defaults for required and optional numeric fields."""

    def test_to_number_defaults_to_zero(self):
        assert to_number(None) == 0
        assert to_number("N/A") == 0
        assert to_number("$1.000") == 1000

    def test_to_nullable_number_keeps_none(self):
        assert to_nullable_number("") is None
        assert to_nullable_number("85,5") == 85.5

    @pytest.mark.parametrize("raw,expected", [
        ("2,5", 2.5),
        ("3,5", 3.5),
        ("3", 3),
        (2.5, 2.5),
    ])
    def test_counts_keep_fractions(self, raw, expected):
        """Half baths are real; counts are never rounded."""
        assert to_number(raw) == expected

    @pytest.mark.parametrize("raw,expected", [
        (4, 4),
        ("6", 6),
        (1.0, 1),
        (0, None),
        (7, None),
        ("3,5", None),
        (2.5, None),
        ("N/A", None),
    ])
    def test_stratum_range(self, raw, expected):
        assert normalize_stratum(raw) == expected

    @pytest.mark.parametrize("raw,expected", [
        ("2010", 2010),
        (1998.0, 1998),
        (datetime(2015, 6, 1), 2015),
        (date(2001, 1, 1), 2001),
        (5, None),
        ("2010,5", None),
        ("hace 10 años", None),
        (None, None),
    ])
    def test_year_built(self, raw, expected):
        assert normalize_year_built(raw) == expected


# ===================
# TEXT TESTS
# ===================

class TestTextNormalizers:
    """Tests for text cells."""

    def test_trims_text(self):
        assert to_optional_str("  Chapinero ") == "Chapinero"

    def test_blank_is_none(self):
        assert to_optional_str("   ") is None
        assert to_optional_str(None) is None
        assert to_optional_str(float("nan")) is None

    def test_whole_float_codes_lose_decimal(self):
        assert to_optional_str(1001.0) == "1001"
        assert to_optional_str(12.5) == "12.5"

    def test_dates_render_iso(self):
        assert to_optional_str(datetime(2024, 3, 1)) == "2024-03-01"

    @pytest.mark.parametrize("raw,expected", [
        (None, "COP"),
        ("usd", "USD"),
        ("$", "COP"),
        ("Pesos", "COP"),
        ("Dólares", "USD"),
        ("EUR", "EUR"),
    ])
    def test_currency(self, raw, expected):
        assert normalize_currency(raw) == expected

    def test_currency_custom_default(self):
        assert normalize_currency("", default="USD") == "USD"

    def test_email_lowercased(self):
        assert normalize_email(" Ana.Gomez@Correo.COM ") == "ana.gomez@correo.com"
        assert normalize_email(None) is None


# ===================
# CATEGORY TESTS
# ===================

class TestCategories:
    """Enum fields fall back to their defaults."""

    @pytest.mark.parametrize("raw,expected", [
        ("Apartamento", PropertyType.APARTAMENTO),
        ("Apto", PropertyType.APARTAMENTO),
        ("CASA", PropertyType.CASA),
        ("Casa Campestre", PropertyType.CASA_CAMPESTRE),
        ("Dúplex", PropertyType.DUPLEX),
        ("Local comercial", PropertyType.LOCAL),
        ("Terreno", PropertyType.LOTE),
        ("castillo", PropertyType.APARTAMENTO),
        (None, PropertyType.APARTAMENTO),
    ])
    def test_property_type(self, raw, expected):
        assert normalize_property_type(raw) == expected

    @pytest.mark.parametrize("raw,expected", [
        ("Venta", BusinessType.VENTA),
        ("ARRIENDO", BusinessType.ARRIENDO),
        ("Venta y Arriendo", BusinessType.VENTA_ARRIENDO),
        ("permuta", BusinessType.VENTA),
        ("", BusinessType.VENTA),
    ])
    def test_business_type(self, raw, expected):
        assert normalize_business_type(raw) == expected

    @pytest.mark.parametrize("raw,expected", [
        ("Nuevo", PropertyStatus.NUEVO),
        ("En construcción", PropertyStatus.EN_CONSTRUCCION),
        ("EN CONSTRUCCION", PropertyStatus.EN_CONSTRUCCION),
        ("Remodelada", PropertyStatus.REMODELADO),
        ("desconocido", PropertyStatus.USADO),
    ])
    def test_property_status(self, raw, expected):
        assert normalize_property_status(raw) == expected

    @pytest.mark.parametrize("raw,expected", [
        ("Vendido", Availability.VENDIDO),
        ("Arrendada", Availability.ARRENDADO),
        ("Separado", Availability.RESERVADO),
        (None, Availability.DISPONIBLE),
    ])
    def test_availability(self, raw, expected):
        assert normalize_availability(raw) == expected

    def test_categories_serialize_as_strings(self):
        assert normalize_property_type("Casa") == "casa"
        assert normalize_business_type("Arriendo") == "arriendo"


# ===================
# LIST TESTS
# ===================

class TestLists:
    """Features and image URLs."""

    def test_features_split_on_all_delimiters(self):
        features = parse_features("Piscina, Gimnasio; BBQ|Portería 24h\nAscensor")
        assert features == ["Piscina", "Gimnasio", "BBQ", "Portería 24h", "Ascensor"]

    def test_features_skip_empty_items(self):
        assert parse_features("Piscina,, ;") == ["Piscina"]

    def test_features_empty(self):
        assert parse_features(None) == []
        assert parse_features("") == []

    def test_images_keep_only_urls(self):
        images = parse_image_urls(
            "https://cdn.example.com/1.jpg, N/A; http://cdn.example.com/2.png | foto.jpg"
        )
        assert images == ["https://cdn.example.com/1.jpg", "http://cdn.example.com/2.png"]

    def test_images_empty(self):
        assert parse_image_urls(None) == []
