"""
Duplicate detection for property imports.

Only compares rows within the uploaded file. Matching against properties
already stored for the tenant is the persistence layer's job;
exclude_existing_external_codes() is the helper it uses for that.
"""

from typing import Iterable, Optional

import structlog

from models.property_import import ImportRow, PropertyImportRecord

logger = structlog.get_logger(__name__)


def property_fingerprint(record: PropertyImportRecord) -> str:
    """
    Key identifying "the same listing" inside one file.

    title | city | built area | first non-zero price | external code
    """
    price = record.sale_price or record.rent_price
    return "|".join([
        _clean_text(record.title.es),
        _clean_text(record.city),
        _format_number(record.built_area_m2),
        _format_number(price),
        _clean_text(record.external_code),
    ])


def detect_duplicates_in_file(rows: list[ImportRow]) -> set[int]:
    """
    Find rows repeating an earlier row of the same file.

    Rows without a property (failed validation) are not compared. The first
    occurrence of a fingerprint stays valid.

    Returns:
        Row numbers of the later occurrences
    """
    seen: dict[str, int] = {}
    duplicates: set[int] = set()

    for row in rows:
        if row.property is None:
            continue
        fingerprint = property_fingerprint(row.property)
        if fingerprint in seen:
            duplicates.add(row.row_number)
            logger.debug(
                "duplicate_row_detected",
                row=row.row_number,
                original_row=seen[fingerprint],
            )
        else:
            seen[fingerprint] = row.row_number

    return duplicates


def exclude_existing_external_codes(
    records: list[PropertyImportRecord],
    existing_codes: Iterable[str],
) -> tuple[list[PropertyImportRecord], int]:
    """
    Drop records whose external_code already exists for the tenant.

    Records without an external code are always kept.

    Returns:
        (records to insert, number skipped)
    """
    existing = {code for code in existing_codes if code}
    kept = [
        r for r in records
        if not (r.external_code and r.external_code in existing)
    ]
    skipped = len(records) - len(kept)
    if skipped:
        logger.info("existing_codes_skipped", skipped=skipped, kept=len(kept))
    return kept, skipped


def _clean_text(value: Optional[str]) -> str:
    return (value or "").strip().lower()


def _format_number(value: Optional[float]) -> str:
    if value is None:
        return ""
    if float(value).is_integer():
        return str(int(value))
    return str(value)
