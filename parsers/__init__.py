"""
Spreadsheet parsing for property imports.

workbook_reader: file bytes -> header-keyed rows
header_matcher: raw header -> canonical field
value_normalizers: raw cell -> typed field value
"""

from parsers.workbook_reader import (
    read_property_workbook,
    select_sheet,
    WorkbookRows,
    PREFERRED_SHEET_NAMES,
)
from parsers.header_matcher import (
    normalize_header,
    match_column,
    ColumnMatch,
    COLUMN_MAP,
    CONTAINS_MIN_LENGTH,
)
from parsers.value_normalizers import (
    clean_numeric_value,
    to_number,
    to_nullable_number,
    parse_features,
    parse_image_urls,
)

__all__ = [
    # Workbook
    "read_property_workbook",
    "select_sheet",
    "WorkbookRows",
    "PREFERRED_SHEET_NAMES",

    # Headers
    "normalize_header",
    "match_column",
    "ColumnMatch",
    "COLUMN_MAP",
    "CONTAINS_MIN_LENGTH",

    # Values
    "clean_numeric_value",
    "to_number",
    "to_nullable_number",
    "parse_features",
    "parse_image_urls",
]
