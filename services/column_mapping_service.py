"""
Column mapping for property imports.

Turns spreadsheet headers into canonical field names, honoring the manual
overrides the user picks in the import dialog.
"""

from dataclasses import dataclass, field
from typing import Mapping, Optional

import structlog

from exceptions import InvalidColumnOverrideError
from models.manual_mapping import ColumnOverride, OverrideValue, normalize_overrides
from models.property_import import (
    MAPPABLE_FIELD_NAMES,
    ColumnMapping,
    MatchConfidence,
    RawRow,
)
from parsers.header_matcher import CONTAINS_MIN_LENGTH, match_column

logger = structlog.get_logger(__name__)


@dataclass
class ColumnMappingResult:
    """Rows re-keyed to canonical fields plus mapping diagnostics."""
    mapped_rows: list[RawRow] = field(default_factory=list)
    column_mappings: list[ColumnMapping] = field(default_factory=list)
    unmapped_headers: list[str] = field(default_factory=list)


def map_columns(
    raw_rows: list[RawRow],
    manual_overrides: Optional[Mapping[str, OverrideValue]] = None,
    min_contains_length: int = CONTAINS_MIN_LENGTH,
    headers: Optional[list[str]] = None,
) -> ColumnMappingResult:
    """
    Map raw headers to canonical fields and re-key every row.

    Rules:
        - headers come from the first row unless given
        - an override decides its header; an ignore override hides it
        - each canonical field is claimed by one header only; overrides
          claim first (in override order), then automatic matches in
          column order

    Args:
        raw_rows: Header-keyed rows from the workbook reader
        manual_overrides: {raw header: field name | "_ignore" | ColumnOverride}
        min_contains_length: Length floor for contains matching
        headers: Header text as written in the file, aligned with the row
            keys. Differs from the keys only for repeated headers.

    Returns:
        ColumnMappingResult

    Raises:
        InvalidColumnOverrideError: If an override targets an unknown field
    """
    if not raw_rows:
        return ColumnMappingResult()

    keys = list(raw_rows[0].keys())
    labels = list(headers) if headers is not None and len(headers) == len(keys) else keys
    overrides = normalize_overrides(manual_overrides)
    _validate_overrides(overrides)

    # Column position -> mapping
    assigned: dict[int, ColumnMapping] = {}
    claimed: set[str] = set()
    ignored: set[str] = set()

    # Manual choices first; a repeated header is decided at its first column
    for header, override in overrides.items():
        if header not in labels:
            logger.debug("override_header_not_in_file", header=header)
            continue
        if override.is_ignore:
            ignored.add(header)
            continue
        if override.target_field in claimed:
            continue
        claimed.add(override.target_field)
        assigned[labels.index(header)] = ColumnMapping(
            raw_header=header,
            mapped_field=override.target_field,
            confidence=MatchConfidence.EXACT,
        )

    # Automatic matching for the rest
    for position, header in enumerate(labels):
        if header in ignored:
            continue
        if header in overrides and labels.index(header) == position:
            continue
        match = match_column(header, min_contains_length)
        if match is None or match.field in claimed:
            continue
        claimed.add(match.field)
        assigned[position] = ColumnMapping(
            raw_header=header,
            mapped_field=match.field,
            confidence=match.confidence,
        )

    positions = sorted(assigned)
    column_mappings = [assigned[p] for p in positions]
    unmapped_headers = [
        header for position, header in enumerate(labels)
        if position not in assigned and header not in ignored
    ]

    mapped_rows = [
        {assigned[p].mapped_field: row.get(keys[p]) for p in positions}
        for row in raw_rows
    ]

    logger.info(
        "columns_mapped",
        header_count=len(labels),
        mapped_count=len(column_mappings),
        unmapped_count=len(unmapped_headers),
        ignored_count=len(ignored),
        override_count=len(overrides),
    )

    return ColumnMappingResult(
        mapped_rows=mapped_rows,
        column_mappings=column_mappings,
        unmapped_headers=unmapped_headers,
    )


def _validate_overrides(overrides: dict[str, ColumnOverride]) -> None:
    for header, override in overrides.items():
        if override.is_ignore:
            continue
        if override.target_field not in MAPPABLE_FIELD_NAMES:
            raise InvalidColumnOverrideError(header, str(override.target_field))
