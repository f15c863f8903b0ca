"""
Property import preview.

Pipeline for one uploaded file:
    bytes -> sheet rows -> column mapping -> row validation
          -> in-file duplicate demotion -> ImportPreview

Nothing here writes anywhere. The caller shows the preview, lets the user
adjust column overrides (re-running the preview as often as needed) and
finally inserts preview.valid_properties().
"""

from typing import Mapping, Optional

import structlog

from config.settings import Settings, get_settings
from exceptions import ImportTooLargeError
from models.manual_mapping import OverrideValue
from models.property_import import (
    ImportPreview,
    ImportRow,
    LocalizedText,
    PreviewSample,
    PropertyImportRecord,
    RawRow,
)
from parsers.value_normalizers import (
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
from parsers.workbook_reader import FileInput, read_property_workbook
from services.column_mapping_service import map_columns
from services.duplicate_detection_service import detect_duplicates_in_file
from services.slug_service import SlugGenerator, UniqueSlugGenerator

logger = structlog.get_logger(__name__)

TITLE_MIN_LENGTH = 3
TITLE_REQUIRED_ERROR = "Título es requerido (mínimo 3 caracteres)"
DUPLICATE_IN_FILE_ERROR = "Posible duplicado dentro del archivo"
PLACEHOLDER_TITLE = "Sin título"

# Row 1 is the header; data starts at spreadsheet row 2
FIRST_DATA_ROW = 2


def generate_import_preview(
    file: FileInput,
    manual_overrides: Optional[Mapping[str, OverrideValue]] = None,
    slug_generator: Optional[SlugGenerator] = None,
    settings: Optional[Settings] = None,
) -> ImportPreview:
    """
    Build the import preview for an uploaded spreadsheet.

    Safe to call repeatedly with different overrides: every call starts
    from the raw bytes and shares no state with earlier calls.

    Args:
        file: Raw bytes (xlsx/xls/csv), binary file-like object or path
        manual_overrides: {raw header: field name | "_ignore" | ColumnOverride}
        slug_generator: title -> slug; defaults to a fresh UniqueSlugGenerator
        settings: Import settings; defaults to the application settings

    Returns:
        ImportPreview with every row, mappings, counts and a sample

    Raises:
        ExcelParseError: If the file is not a readable spreadsheet
        InvalidColumnOverrideError: If an override targets a field outside
            MAPPABLE_FIELDS. Overrides come from the caller, not the file, so
            this is a caller error. Problems inside a readable file never
            raise; they end up in ImportRow.errors or unmapped_headers.
    """
    settings = settings or get_settings()
    logger.info(
        "generating_import_preview",
        override_count=len(manual_overrides or {}),
    )

    workbook = read_property_workbook(file)

    mapping = map_columns(
        workbook.rows,
        manual_overrides,
        min_contains_length=settings.import_contains_min_length,
        headers=workbook.headers,
    )

    rows = validate_and_transform_rows(
        mapping.mapped_rows,
        slug_generator=slug_generator or UniqueSlugGenerator(),
        default_currency=settings.import_default_currency,
    )

    duplicates = detect_duplicates_in_file(rows)
    for row in rows:
        if row.row_number in duplicates:
            row.errors.append(DUPLICATE_IN_FILE_ERROR)
            row.property = None

    preview = ImportPreview(
        rows=rows,
        column_mappings=mapping.column_mappings,
        unmapped_headers=mapping.unmapped_headers,
        sheet_name=workbook.sheet_name,
        sheet_names=workbook.sheet_names,
        total_rows=len(rows),
        valid_count=sum(1 for r in rows if r.property is not None),
        error_count=sum(1 for r in rows if r.errors),
        duplicate_count=len(duplicates),
        preview=build_preview_sample(rows, settings.import_preview_sample_size),
    )

    logger.info(
        "import_preview_generated",
        sheet=preview.sheet_name,
        total_rows=preview.total_rows,
        valid_count=preview.valid_count,
        error_count=preview.error_count,
        duplicate_count=preview.duplicate_count,
        unmapped_headers=preview.unmapped_headers,
    )
    return preview


def validate_and_transform_rows(
    mapped_rows: list[RawRow],
    slug_generator: Optional[SlugGenerator] = None,
    default_currency: str = "COP",
) -> list[ImportRow]:
    """
    Validate mapped rows and build canonical property records.

    A row gets a property only when it has no errors. Bad cells never
    produce errors; they fall back to defaults.

    Args:
        mapped_rows: Rows keyed by canonical field name
        slug_generator: title -> slug; defaults to a fresh UniqueSlugGenerator
        default_currency: Currency when the row has none

    Returns:
        One ImportRow per input row, in order
    """
    slug_generator = slug_generator or UniqueSlugGenerator()
    import_rows = []

    for idx, row in enumerate(mapped_rows):
        errors = []
        title = to_optional_str(row.get("title")) or ""

        if len(title) < TITLE_MIN_LENGTH:
            errors.append(TITLE_REQUIRED_ERROR)

        record = None
        if not errors:
            record = _build_record(row, title, slug_generator, default_currency)

        import_rows.append(ImportRow(
            row_number=idx + FIRST_DATA_ROW,
            data=row,
            errors=errors,
            property=record,
        ))

    invalid = sum(1 for r in import_rows if r.errors)
    if invalid:
        logger.debug("rows_failed_validation", invalid_count=invalid, total=len(import_rows))

    return import_rows


def build_preview_sample(rows: list[ImportRow], size: int = 5) -> list[PreviewSample]:
    """Flat projection of the first rows for the preview table."""
    sample = []
    for row in rows[:size]:
        record = row.property
        if record is None:
            sample.append(PreviewSample(
                row_number=row.row_number,
                title=to_optional_str(row.data.get("title")) or "-",
                has_error=True,
                errors=list(row.errors),
            ))
            continue

        sample.append(PreviewSample(
            row_number=row.row_number,
            title=record.title.es,
            property_type=record.property_type,
            business_type=record.business_type,
            price=record.sale_price or record.rent_price,
            city=record.city or "-",
            area=record.built_area_m2 or 0,
            bedrooms=record.bedrooms,
            bathrooms=record.bathrooms,
            image_count=len(record.images),
        ))
    return sample


def enforce_row_limit(row_count: int, max_rows: Optional[int] = None) -> None:
    """
    Reject files with too many data rows before importing them.

    Raises:
        ImportTooLargeError: If row_count exceeds the limit
    """
    max_rows = max_rows if max_rows is not None else get_settings().import_max_rows
    if row_count > max_rows:
        logger.warning("import_too_large", row_count=row_count, max_rows=max_rows)
        raise ImportTooLargeError(row_count, max_rows)


# ===================
# HELPER FUNCTIONS
# ===================

def _build_record(
    row: RawRow,
    title: str,
    slug_generator: SlugGenerator,
    default_currency: str,
) -> PropertyImportRecord:
    title = title or PLACEHOLDER_TITLE
    description = to_optional_str(row.get("description"))

    return PropertyImportRecord(
        title=LocalizedText(es=title),
        description=LocalizedText(es=description) if description else None,
        slug=slug_generator(title),
        property_type=normalize_property_type(row.get("property_type")),
        business_type=normalize_business_type(row.get("business_type")),
        property_status=normalize_property_status(row.get("property_status")),
        availability=normalize_availability(row.get("availability")),
        sale_price=to_number(row.get("sale_price")),
        rent_price=to_number(row.get("rent_price")),
        currency=normalize_currency(row.get("currency"), default=default_currency),
        admin_fee=to_number(row.get("admin_fee")),
        city=to_optional_str(row.get("city")),
        state_department=to_optional_str(row.get("state_department")),
        zone=to_optional_str(row.get("zone")),
        address=to_optional_str(row.get("address")),
        locality=to_optional_str(row.get("locality")),
        built_area_m2=to_nullable_number(row.get("built_area_m2")),
        private_area_m2=to_nullable_number(row.get("private_area_m2")),
        land_area_m2=to_nullable_number(row.get("land_area_m2")),
        bedrooms=to_number(row.get("bedrooms")),
        bathrooms=to_number(row.get("bathrooms")),
        parking_spots=to_number(row.get("parking_spots")),
        stratum=normalize_stratum(row.get("stratum")),
        year_built=normalize_year_built(row.get("year_built")),
        features=parse_features(row.get("features")),
        is_published=True,
        is_featured=False,
        external_code=to_optional_str(row.get("external_code")),
        owner_name=to_optional_str(row.get("owner_name")),
        owner_phone=to_optional_str(row.get("owner_phone")),
        owner_email=normalize_email(row.get("owner_email")),
        commission_value=to_nullable_number(row.get("commission_value")),
        commission_type=to_optional_str(row.get("commission_type")),
        private_notes=to_optional_str(row.get("private_notes")),
        images=parse_image_urls(row.get("images")),
    )
