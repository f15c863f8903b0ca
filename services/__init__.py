"""
Business logic services.

Each service handles one step of the property import.
"""

from services.column_mapping_service import map_columns, ColumnMappingResult
from services.duplicate_detection_service import (
    property_fingerprint,
    detect_duplicates_in_file,
    exclude_existing_external_codes,
)
from services.slug_service import SlugGenerator, UniqueSlugGenerator
from services.property_import_service import (
    generate_import_preview,
    validate_and_transform_rows,
    build_preview_sample,
    enforce_row_limit,
    TITLE_REQUIRED_ERROR,
    DUPLICATE_IN_FILE_ERROR,
)

__all__ = [
    "map_columns",
    "ColumnMappingResult",
    "property_fingerprint",
    "detect_duplicates_in_file",
    "exclude_existing_external_codes",
    "SlugGenerator",
    "UniqueSlugGenerator",
    "generate_import_preview",
    "validate_and_transform_rows",
    "build_preview_sample",
    "enforce_row_limit",
    "TITLE_REQUIRED_ERROR",
    "DUPLICATE_IN_FILE_ERROR",
]
