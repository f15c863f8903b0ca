"""
Spreadsheet reader for property imports.

Accepts the raw bytes of an .xlsx, .xls or .csv upload and returns the rows
of the most relevant sheet as header-keyed dicts.
"""

import csv
from dataclasses import dataclass, field
from io import BytesIO, StringIO
from pathlib import Path
from typing import Any, BinaryIO, Union

import pandas as pd
import structlog

from exceptions import ExcelParseError
from models.property_import import RawRow

logger = structlog.get_logger(__name__)

# Sheets that hold the listing in common back-office exports (case-insensitive)
PREFERRED_SHEET_NAMES = (
    "propiedades",
    "inmuebles",
    "properties",
    "datos",
    "listado",
    "inventario",
    "catalogo",
)

# Name given to the single sheet of a CSV file
CSV_SHEET_NAME = "Sheet1"

# Candidate CSV delimiters, and how many lines the sniffer looks at
CSV_DELIMITERS = ",;\t|"
CSV_SNIFF_LINES = 20

_XLSX_MAGIC = b"PK\x03\x04"
_XLS_MAGIC = b"\xd0\xcf\x11\xe0\xa1\xb1\x1a\xe1"

FileInput = Union[bytes, bytearray, BinaryIO, str, Path]


@dataclass
class WorkbookRows:
    """Rows of the selected sheet."""
    sheet_name: str
    sheet_names: list[str] = field(default_factory=list)
    headers: list[str] = field(default_factory=list)
    rows: list[RawRow] = field(default_factory=list)
    blank_rows_skipped: int = 0


def read_property_workbook(file: FileInput) -> WorkbookRows:
    """
    Read an import file into header-keyed rows.

    Empty cells become None and fully blank rows are dropped.

    Args:
        file: Raw bytes, a binary file-like object, or a path

    Returns:
        WorkbookRows for the selected sheet

    Raises:
        ExcelParseError: If the content is not a readable spreadsheet
    """
    data = _read_bytes(file)
    logger.info("reading_workbook", size_bytes=len(data))

    if data.startswith(_XLSX_MAGIC) or data.startswith(_XLS_MAGIC):
        engine = "openpyxl" if data.startswith(_XLSX_MAGIC) else "xlrd"
        sheet_names, sheet_name, df = _read_excel(data, engine)
    else:
        sheet_names, sheet_name, df = [CSV_SHEET_NAME], CSV_SHEET_NAME, _read_csv(data)

    result = _rows_from_frame(df, sheet_name, sheet_names)

    logger.info(
        "workbook_read",
        sheet=result.sheet_name,
        sheet_count=len(result.sheet_names),
        row_count=len(result.rows),
        blank_rows_skipped=result.blank_rows_skipped,
    )
    return result


def select_sheet(sheet_names: list[str]) -> str:
    """Prefer a sheet named like a property listing, else the first sheet."""
    for name in sheet_names:
        if str(name).strip().lower() in PREFERRED_SHEET_NAMES:
            return name
    return sheet_names[0]


# ===================
# FORMAT READERS
# ===================

def _read_bytes(file: FileInput) -> bytes:
    if isinstance(file, (bytes, bytearray)):
        return bytes(file)
    if isinstance(file, (str, Path)):
        try:
            return Path(file).read_bytes()
        except OSError as e:
            logger.error("import_file_read_failed", error=str(e))
            raise ExcelParseError(
                message="Failed to read import file",
                details={"original_error": str(e)}
            )
    return file.read()


def _read_excel(data: bytes, engine: str) -> tuple[list[str], str, pd.DataFrame]:
    try:
        excel = pd.ExcelFile(BytesIO(data), engine=engine)
        sheet_names = [str(name) for name in excel.sheet_names]
        if not sheet_names:
            raise ValueError("workbook has no sheets")
        sheet_name = select_sheet(sheet_names)
        df = excel.parse(sheet_name, header=None, dtype=object)
    except Exception as e:
        logger.error("excel_read_failed", engine=engine, error=str(e))
        raise ExcelParseError(
            message="Failed to read Excel file",
            details={"original_error": str(e)}
        )
    return sheet_names, sheet_name, df


def _read_csv(data: bytes) -> pd.DataFrame:
    text = _decode_text(data)
    if "\x00" in text:
        logger.error("csv_read_failed", error="binary content")
        raise ExcelParseError(
            message="File is not a spreadsheet",
            details={"original_error": "binary content is not CSV"}
        )
    if not text.strip():
        return pd.DataFrame()

    delimiter = _sniff_delimiter(text)
    try:
        return pd.read_csv(
            StringIO(text), sep=delimiter, header=None, dtype=str, keep_default_na=False
        )
    except Exception as e:
        logger.error("csv_read_failed", delimiter=delimiter, error=str(e))
        raise ExcelParseError(
            message="Failed to read CSV file",
            details={"original_error": str(e)}
        )


def _sniff_delimiter(text: str) -> str:
    """
    Pick the CSV delimiter from the first lines of the file.

    Only real delimiters are candidates, so a single-column file is never
    split on a letter or a space. "," when nothing fits.
    """
    sample = "\n".join(text.splitlines()[:CSV_SNIFF_LINES])
    try:
        return csv.Sniffer().sniff(sample, delimiters=CSV_DELIMITERS).delimiter
    except csv.Error:
        logger.debug("csv_delimiter_defaulted", default=",")
        return ","


def _decode_text(data: bytes) -> str:
    try:
        return data.decode("utf-8-sig")
    except UnicodeDecodeError:
        # Excel on Windows saves CSV as cp1252/latin-1
        return data.decode("latin-1")


# ===================
# ROW EXTRACTION
# ===================

def _rows_from_frame(df: pd.DataFrame, sheet_name: str, sheet_names: list[str]) -> WorkbookRows:
    """
    Turn a header=None frame into header-keyed rows.

    The first row holds the headers, kept verbatim. Repeated headers get
    unique row keys ("Precio", "Precio.1") while `headers` keeps the
    original text, aligned with the row keys.
    """
    result = WorkbookRows(sheet_name=sheet_name, sheet_names=sheet_names)
    if df.empty:
        return result

    header_cells, *data = df.itertuples(index=False, name=None)
    headers = [_header_text(cell, position) for position, cell in enumerate(header_cells)]
    unnamed = [_clean_cell(cell) is None for cell in header_cells]
    keys = _unique_keys(headers)

    for cells in data:
        row = {key: _clean_cell(value) for key, value in zip(keys, cells)}
        if all(value is None for value in row.values()):
            result.blank_rows_skipped += 1
            continue
        result.rows.append(row)

    # Header-less columns with no data are export artifacts
    dropped = {
        key for key, is_unnamed in zip(keys, unnamed)
        if is_unnamed and all(row[key] is None for row in result.rows)
    }
    if dropped:
        for row in result.rows:
            for key in dropped:
                del row[key]

    result.headers = [header for header, key in zip(headers, keys) if key not in dropped]
    return result


def _header_text(cell: Any, position: int) -> str:
    value = _clean_cell(cell)
    if value is None:
        return f"Unnamed: {position}"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def _unique_keys(headers: list[str]) -> list[str]:
    keys = []
    seen = set()
    for header in headers:
        key = header
        suffix = 1
        while key in seen:
            key = f"{header}.{suffix}"
            suffix += 1
        seen.add(key)
        keys.append(key)
    return keys


def _clean_cell(value: Any) -> Any:
    """Plain Python value for a cell; empty and whitespace-only cells become None."""
    if value is None:
        return None
    if isinstance(value, str):
        return value if value.strip() else None
    if pd.isna(value):
        return None
    if isinstance(value, pd.Timestamp):
        return value.to_pydatetime()
    if pd.api.types.is_bool(value):
        return bool(value)
    if pd.api.types.is_integer(value):
        return int(value)
    if pd.api.types.is_float(value):
        return float(value)
    return value
