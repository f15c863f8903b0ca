"""
Custom exception classes for the application.

Row-level problems in an import file are never raised; they are collected
as strings on each ImportRow. These exceptions cover files that cannot be
read at all and caller mistakes.
"""

from typing import Optional, Any
from datetime import datetime, timezone


class AppError(Exception):
    """
    Base exception for all application errors.

    All custom exceptions inherit from this.

    Attributes:
        code: Error code (e.g., "EXCEL_PARSE_ERROR")
        message: Human-readable message
        status_code: HTTP status code for the caller's request layer
        details: Additional context
    """

    def __init__(
        self,
        code: str,
        message: str,
        status_code: int = 500,
        details: Optional[dict[str, Any]] = None
    ):
        self.code = code
        self.message = message
        self.status_code = status_code
        self.details = details or {}
        self.timestamp = datetime.now(timezone.utc).isoformat()
        super().__init__(message)

    def to_dict(self) -> dict:
        """Convert to API response format."""
        return {
            "error": {
                "code": self.code,
                "message": self.message,
                "details": self.details,
                "timestamp": self.timestamp
            }
        }


class ValidationError(AppError):
    """Validation failed (422)."""

    def __init__(
        self,
        message: str,
        code: str = "VALIDATION_ERROR",
        details: Optional[dict] = None
    ):
        super().__init__(
            code=code,
            message=message,
            status_code=422,
            details=details
        )


# ===================
# IMPORT ERRORS
# ===================

class ExcelParseError(ValidationError):
    """Spreadsheet (xlsx/xls/csv) could not be read."""

    def __init__(
        self,
        message: str,
        details: Optional[dict] = None
    ):
        super().__init__(
            code="EXCEL_PARSE_ERROR",
            message=message,
            details=details
        )


class ImportTooLargeError(ValidationError):
    """Import file has more data rows than allowed."""

    def __init__(self, row_count: int, max_rows: int):
        super().__init__(
            code="IMPORT_TOO_LARGE",
            message=f"Máximo {max_rows} propiedades por importación",
            details={"row_count": row_count, "max_rows": max_rows}
        )


class InvalidColumnOverrideError(ValidationError):
    """Manual column override targets an unknown field."""

    def __init__(self, header: str, field: str):
        super().__init__(
            code="INVALID_COLUMN_OVERRIDE",
            message=f"Unknown target field for column '{header}': {field}",
            details={"header": header, "field": field}
        )
