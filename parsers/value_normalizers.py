"""
Cell value normalizers for property imports.

Every function here accepts whatever the spreadsheet reader produced
(str, int, float, datetime, None, NaN) and never raises: a bad cell falls
back to 0, None or a default category so one typo cannot block a row.
"""

import math
import re
from datetime import date, datetime
from types import MappingProxyType
from typing import Any, Optional

from models.property_import import (
    Availability,
    BusinessType,
    PropertyStatus,
    PropertyType,
)
from utils.text_utils import strip_accents

# Cells that mean "no value"
EMPTY_MARKERS = frozenset({"", "-", "--", "n/a", "na", "n.a.", "null", "none"})

# Valid Colombian estrato range
STRATUM_MIN = 1
STRATUM_MAX = 6

YEAR_BUILT_MIN = 1800
YEAR_BUILT_MAX = 2100


# ===================
# ENUM SYNONYMS
# ===================

PROPERTY_TYPE_MAP = MappingProxyType({
    "apartamento": PropertyType.APARTAMENTO,
    "apto": PropertyType.APARTAMENTO,
    "apartment": PropertyType.APARTAMENTO,
    "departamento": PropertyType.APARTAMENTO,
    "casa": PropertyType.CASA,
    "house": PropertyType.CASA,
    "casa campestre": PropertyType.CASA_CAMPESTRE,
    "casa de campo": PropertyType.CASA_CAMPESTRE,
    "finca": PropertyType.FINCA,
    "farm": PropertyType.FINCA,
    "apartaestudio": PropertyType.APARTAESTUDIO,
    "aparta estudio": PropertyType.APARTAESTUDIO,
    "studio": PropertyType.APARTAESTUDIO,
    "duplex": PropertyType.DUPLEX,
    "dúplex": PropertyType.DUPLEX,
    "penthouse": PropertyType.PENTHOUSE,
    "ph": PropertyType.PENTHOUSE,
    "local": PropertyType.LOCAL,
    "local comercial": PropertyType.LOCAL,
    "oficina": PropertyType.OFICINA,
    "office": PropertyType.OFICINA,
    "lote": PropertyType.LOTE,
    "lot": PropertyType.LOTE,
    "terreno": PropertyType.LOTE,
    "bodega": PropertyType.BODEGA,
    "warehouse": PropertyType.BODEGA,
    "consultorio": PropertyType.CONSULTORIO,
})

BUSINESS_TYPE_MAP = MappingProxyType({
    "venta": BusinessType.VENTA,
    "sale": BusinessType.VENTA,
    "vender": BusinessType.VENTA,
    "arriendo": BusinessType.ARRIENDO,
    "arrendamiento": BusinessType.ARRIENDO,
    "rent": BusinessType.ARRIENDO,
    "alquiler": BusinessType.ARRIENDO,
    "venta y arriendo": BusinessType.VENTA_ARRIENDO,
    "venta/arriendo": BusinessType.VENTA_ARRIENDO,
    "venta - arriendo": BusinessType.VENTA_ARRIENDO,
    "arriendo y venta": BusinessType.VENTA_ARRIENDO,
    "ambos": BusinessType.VENTA_ARRIENDO,
    "both": BusinessType.VENTA_ARRIENDO,
})

PROPERTY_STATUS_MAP = MappingProxyType({
    "nuevo": PropertyStatus.NUEVO,
    "nueva": PropertyStatus.NUEVO,
    "new": PropertyStatus.NUEVO,
    "estrenar": PropertyStatus.NUEVO,
    "para estrenar": PropertyStatus.NUEVO,
    "usado": PropertyStatus.USADO,
    "usada": PropertyStatus.USADO,
    "used": PropertyStatus.USADO,
    "en construccion": PropertyStatus.EN_CONSTRUCCION,
    "en construcción": PropertyStatus.EN_CONSTRUCCION,
    "sobre planos": PropertyStatus.EN_CONSTRUCCION,
    "under construction": PropertyStatus.EN_CONSTRUCCION,
    "remodelado": PropertyStatus.REMODELADO,
    "remodelada": PropertyStatus.REMODELADO,
    "renovated": PropertyStatus.REMODELADO,
})

AVAILABILITY_MAP = MappingProxyType({
    "disponible": Availability.DISPONIBLE,
    "available": Availability.DISPONIBLE,
    "activo": Availability.DISPONIBLE,
    "activa": Availability.DISPONIBLE,
    "vendido": Availability.VENDIDO,
    "vendida": Availability.VENDIDO,
    "sold": Availability.VENDIDO,
    "arrendado": Availability.ARRENDADO,
    "arrendada": Availability.ARRENDADO,
    "rented": Availability.ARRENDADO,
    "reservado": Availability.RESERVADO,
    "reservada": Availability.RESERVADO,
    "separado": Availability.RESERVADO,
    "reserved": Availability.RESERVADO,
})


# ===================
# NUMBERS
# ===================

_CURRENCY_PREFIX = re.compile(r"^(?:us\$|cop|usd|\$)\s*", re.IGNORECASE)
_UNIT_SUFFIX = re.compile(r"\s*(?:m²|m2|mts2?|mt2?|ha|m)\.?$", re.IGNORECASE)
_CURRENCY_SUFFIX = re.compile(r"\s*(?:cop|usd|pesos)$", re.IGNORECASE)
_COLOMBIAN_FORMAT = re.compile(r"\d{1,3}(\.\d{3})+(,\d{1,2})?")
_COMMA_DECIMAL = re.compile(r"\d+,\d{1,2}")
_US_FORMAT = re.compile(r"\d{1,3}(,\d{3})+(\.\d+)?")
_NOT_NUMERIC = re.compile(r"[^\d.\-]")
_LEADING_FLOAT = re.compile(r"-?(?:\d+(?:\.\d*)?|\.\d+)")


def clean_numeric_value(value: Any) -> Optional[float]:
    """
    Parse a number from a spreadsheet cell.

    Handles Colombian and US formats:
        "$350.000.000" -> 350000000
        "85,5"         -> 85.5
        "1,200,000.50" -> 1200000.5
        "120 m²"       -> 120
        "N/A", ""      -> None

    Returns:
        Finite float, or None if the cell holds no usable number
    """
    if value is None or isinstance(value, bool):
        return None

    if isinstance(value, (int, float)):
        number = float(value)
        return number if math.isfinite(number) else None

    text = str(value).strip()
    if text.lower() in EMPTY_MARKERS:
        return None

    # Strip repeated currency prefixes ("COP $ 350.000") and a unit suffix
    previous = None
    while previous != text:
        previous = text
        text = _CURRENCY_PREFIX.sub("", text).strip()
    text = _CURRENCY_SUFFIX.sub("", text).strip()
    text = _UNIT_SUFFIX.sub("", text).strip()

    if text.lower() in EMPTY_MARKERS:
        return None

    if _COLOMBIAN_FORMAT.fullmatch(text):
        text = text.replace(".", "").replace(",", ".")
    elif _COMMA_DECIMAL.fullmatch(text):
        text = text.replace(",", ".")
    elif _US_FORMAT.fullmatch(text):
        text = text.replace(",", "")
    else:
        text = _NOT_NUMERIC.sub("", text)

    match = _LEADING_FLOAT.match(text)
    if not match:
        return None
    try:
        number = float(match.group(0))
    except ValueError:
        return None
    return number if math.isfinite(number) else None


def to_number(value: Any) -> float:
    """Number for required numeric fields (prices, fees, counts). Falls back to 0.

    Counts keep fractions: "2,5" baños is 2.5, never rounded.
    """
    number = clean_numeric_value(value)
    return number if number is not None else 0


def to_nullable_number(value: Any) -> Optional[float]:
    """Number for optional measurements (areas). Keeps None."""
    return clean_numeric_value(value)


def to_nullable_int(value: Any) -> Optional[int]:
    """Whole number (stratum, year). Fractions like "3,5" are not rounded; they give None."""
    number = clean_numeric_value(value)
    if number is None or not number.is_integer():
        return None
    return int(number)


def normalize_stratum(value: Any) -> Optional[int]:
    """Estrato 1-6; anything else is treated as missing."""
    stratum = to_nullable_int(value)
    if stratum is None or not STRATUM_MIN <= stratum <= STRATUM_MAX:
        return None
    return stratum


def normalize_year_built(value: Any) -> Optional[int]:
    """Construction year. Dates keep their year; implausible years are dropped."""
    if isinstance(value, (datetime, date)):
        return value.year
    year = to_nullable_int(value)
    if year is None or not YEAR_BUILT_MIN <= year <= YEAR_BUILT_MAX:
        return None
    return year


# ===================
# TEXT
# ===================

def to_optional_str(value: Any) -> Optional[str]:
    """
    Convert a cell to trimmed text, returning None for empty/NaN.

    Whole floats lose the ".0" Excel adds to numeric codes (1001.0 -> "1001").
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, float):
        if not math.isfinite(value):
            return None
        if value.is_integer():
            return str(int(value))
    if isinstance(value, datetime):
        return value.date().isoformat() if value.time() == datetime.min.time() else value.isoformat()
    if isinstance(value, date):
        return value.isoformat()
    text = str(value).strip()
    return text if text else None


def normalize_currency(value: Any, default: str = "COP") -> str:
    """Currency code, uppercased. Falls back to the default."""
    text = to_optional_str(value)
    if not text:
        return default
    text = text.upper()
    if text in ("$", "PESOS", "PESO", "PESOS COLOMBIANOS"):
        return "COP"
    if text in ("US$", "DOLARES", "DÓLARES", "DOLAR", "DÓLAR"):
        return "USD"
    return text


def normalize_email(value: Any) -> Optional[str]:
    text = to_optional_str(value)
    return text.lower() if text else None


# ===================
# CATEGORIES
# ===================

def _lookup_category(value: Any, table: MappingProxyType, default):
    text = to_optional_str(value)
    if not text:
        return default
    key = text.lower().strip()
    found = table.get(key)
    if found is None:
        found = table.get(strip_accents(key))
    return found if found is not None else default


def normalize_property_type(value: Any) -> PropertyType:
    return _lookup_category(value, PROPERTY_TYPE_MAP, PropertyType.APARTAMENTO)


def normalize_business_type(value: Any) -> BusinessType:
    return _lookup_category(value, BUSINESS_TYPE_MAP, BusinessType.VENTA)


def normalize_property_status(value: Any) -> PropertyStatus:
    return _lookup_category(value, PROPERTY_STATUS_MAP, PropertyStatus.USADO)


def normalize_availability(value: Any) -> Availability:
    return _lookup_category(value, AVAILABILITY_MAP, Availability.DISPONIBLE)


# ===================
# LISTS
# ===================

_LIST_DELIMITERS = re.compile(r"[,;|\n]")


def parse_features(value: Any) -> list[str]:
    """
    Split a features cell into items.

    "Piscina, Gimnasio; BBQ|Portería 24h" -> ["Piscina", "Gimnasio", "BBQ", "Portería 24h"]
    """
    text = to_optional_str(value)
    if not text:
        return []
    return [item.strip() for item in _LIST_DELIMITERS.split(text) if item.strip()]


def parse_image_urls(value: Any) -> list[str]:
    """Split an images cell, keeping only http(s) URLs."""
    return [
        item for item in parse_features(value)
        if item.lower().startswith(("http://", "https://"))
    ]
