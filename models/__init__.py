"""
Pydantic models for validation and serialization.
"""

from models.manual_mapping import (
    IGNORE_COLUMN,
    ColumnOverride,
    OverrideValue,
    normalize_overrides,
)
from models.property_import import (
    RawRow,
    MatchConfidence,
    PropertyType,
    BusinessType,
    PropertyStatus,
    Availability,
    MAPPABLE_FIELDS,
    MAPPABLE_FIELD_NAMES,
    ColumnMapping,
    LocalizedText,
    PropertyImportRecord,
    ImportRow,
    PreviewSample,
    ImportPreview,
)

__all__ = [
    # Manual overrides
    "IGNORE_COLUMN",
    "ColumnOverride",
    "OverrideValue",
    "normalize_overrides",

    # Property import
    "RawRow",
    "MatchConfidence",
    "PropertyType",
    "BusinessType",
    "PropertyStatus",
    "Availability",
    "MAPPABLE_FIELDS",
    "MAPPABLE_FIELD_NAMES",
    "ColumnMapping",
    "LocalizedText",
    "PropertyImportRecord",
    "ImportRow",
    "PreviewSample",
    "ImportPreview",
]
