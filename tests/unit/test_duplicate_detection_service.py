"""
Unit tests for duplicate detection.
"""

from models.property_import import ImportRow, LocalizedText, PropertyImportRecord
from services.duplicate_detection_service import (
    detect_duplicates_in_file,
    exclude_existing_external_codes,
    property_fingerprint,
)
from utils.text_utils import generate_slug


def _record(title: str = "Apto en Chapinero", **kwargs) -> PropertyImportRecord:
    defaults = {
        "title": LocalizedText(es=title),
        "slug": generate_slug(title),
        "city": "Bogotá",
        "built_area_m2": 85.5,
        "sale_price": 350000000,
    }
    defaults.update(kwargs)
    return PropertyImportRecord(**defaults)


def _row(row_number: int, record=None, errors=None) -> ImportRow:
    return ImportRow(row_number=row_number, data={}, errors=errors or [], property=record)


# ===================
# FINGERPRINT TESTS
# ===================

class TestPropertyFingerprint:
    """Tests for property_fingerprint."""

    def test_format(self):
        record = _record(external_code="REF-1")
        assert property_fingerprint(record) == "apto en chapinero|bogotá|85.5|350000000|ref-1"

    def test_rent_price_used_when_no_sale_price(self):
        record = _record(sale_price=0, rent_price=2500000, built_area_m2=None)
        assert property_fingerprint(record) == "apto en chapinero|bogotá||2500000|"

    def test_case_and_whitespace_insensitive(self):
        a = _record(title="Apto en Chapinero", city="Bogotá")
        b = _record(title="  APTO EN CHAPINERO ", city="BOGOTÁ")
        assert property_fingerprint(a) == property_fingerprint(b)


# ===================
# IN-FILE DUPLICATE TESTS
# ===================

class TestDetectDuplicatesInFile:
    """Tests for detect_duplicates_in_file."""

    def test_later_occurrence_flagged(self):
        rows = [_row(2, _record()), _row(3, _record()), _row(4, _record())]
        assert detect_duplicates_in_file(rows) == {3, 4}

    def test_different_city_not_duplicate(self):
        rows = [_row(2, _record()), _row(3, _record(city="Medellín"))]
        assert detect_duplicates_in_file(rows) == set()

    def test_different_code_not_duplicate(self):
        rows = [
            _row(2, _record(external_code="A-1")),
            _row(3, _record(external_code="A-2")),
        ]
        assert detect_duplicates_in_file(rows) == set()

    def test_invalid_rows_ignored(self):
        rows = [
            _row(2, None, errors=["Título es requerido (mínimo 3 caracteres)"]),
            _row(3, _record()),
        ]
        assert detect_duplicates_in_file(rows) == set()

    def test_empty(self):
        assert detect_duplicates_in_file([]) == set()


# ===================
# EXISTING CODE TESTS
# ===================

class TestExcludeExistingExternalCodes:
    """Tests for exclude_existing_external_codes."""

    def test_skips_known_codes(self):
        records = [
            _record(external_code="A-1"),
            _record(external_code="A-2"),
            _record(external_code=None),
        ]

        kept, skipped = exclude_existing_external_codes(records, ["A-1", None])

        assert skipped == 1
        assert [r.external_code for r in kept] == ["A-2", None]

    def test_no_existing_codes(self):
        records = [_record(external_code="A-1")]
        kept, skipped = exclude_existing_external_codes(records, [])

        assert kept == records
        assert skipped == 0

