"""
Custom exceptions module.
"""

from exceptions.errors import (
    # Base exceptions
    AppError,
    ValidationError,

    # Property import
    ExcelParseError,
    ImportTooLargeError,
    InvalidColumnOverrideError,
)

__all__ = [
    # Base
    "AppError",
    "ValidationError",

    # Property import
    "ExcelParseError",
    "ImportTooLargeError",
    "InvalidColumnOverrideError",
]
