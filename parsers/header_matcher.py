"""
Column header matching for property spreadsheets.

Real-estate back offices (Wasi, Domus, hand-made Excel) export the same
fields under very different headers: "Precio Venta", "Valor de venta (COP)",
"Vlr. venta", "N° Habitaciones", "Habitac.", "Área const. m²"...

Matching tiers, first hit wins:
    1. exact     - lowercase/trimmed header is a dictionary key
    2. exact     - normalized header (no accents, units, currency) is a key
    3. contains  - normalized header contains a key or vice versa,
                   longest key wins
    4. fuzzy     - abbreviations expanded ("hab" -> "habitaciones"),
                   then exact and contains again
"""

import re
from dataclasses import dataclass
from types import MappingProxyType
from typing import Optional

from models.property_import import MatchConfidence
from utils.text_utils import strip_accents

# Both the header and the key must be at least this long for tier 3.
# Stops "area" or "tipo" style fragments from matching inside unrelated words.
CONTAINS_MIN_LENGTH = 4


# ===================
# HEADER DICTIONARY
# ===================

COLUMN_MAP = MappingProxyType({
    # Title
    "titulo": "title",
    "título": "title",
    "nombre": "title",
    "name": "title",
    "title": "title",
    "nombre del inmueble": "title",
    "titulo del inmueble": "title",
    "título del inmueble": "title",
    "titulo anuncio": "title",
    "título anuncio": "title",

    # Description
    "descripcion": "description",
    "descripción": "description",
    "description": "description",
    "descripcion del inmueble": "description",
    "descripción del inmueble": "description",
    "detalle": "description",
    "detalles": "description",

    # Property type
    "tipo": "property_type",
    "tipo de inmueble": "property_type",
    "tipo inmueble": "property_type",
    "tipo de propiedad": "property_type",
    "tipo propiedad": "property_type",
    "clase de inmueble": "property_type",
    "type": "property_type",
    "property type": "property_type",

    # Business type
    "negocio": "business_type",
    "tipo de negocio": "business_type",
    "tipo negocio": "business_type",
    "operacion": "business_type",
    "operación": "business_type",
    "tipo de operacion": "business_type",
    "tipo de operación": "business_type",
    "gestion": "business_type",
    "gestión": "business_type",
    "business type": "business_type",

    # Pricing
    "precio venta": "sale_price",
    "precio de venta": "sale_price",
    "valor venta": "sale_price",
    "valor de venta": "sale_price",
    "venta": "sale_price",
    "valor": "sale_price",
    "precio": "sale_price",
    "price": "sale_price",
    "sale price": "sale_price",
    "precio arriendo": "rent_price",
    "precio de arriendo": "rent_price",
    "valor arriendo": "rent_price",
    "valor de arriendo": "rent_price",
    "canon de arrendamiento": "rent_price",
    "canon": "rent_price",
    "arriendo": "rent_price",
    "alquiler": "rent_price",
    "renta": "rent_price",
    "rent price": "rent_price",
    "administracion": "admin_fee",
    "administración": "admin_fee",
    "cuota de administracion": "admin_fee",
    "cuota de administración": "admin_fee",
    "valor administracion": "admin_fee",
    "valor administración": "admin_fee",
    "admon": "admin_fee",
    "admin fee": "admin_fee",
    "moneda": "currency",
    "divisa": "currency",
    "currency": "currency",

    # Location
    "ciudad": "city",
    "municipio": "city",
    "city": "city",
    "departamento": "state_department",
    "depto": "state_department",
    "state": "state_department",
    "zona": "zone",
    "barrio": "zone",
    "sector": "zone",
    "zone": "zone",
    "neighborhood": "zone",
    "direccion": "address",
    "dirección": "address",
    "address": "address",
    "localidad": "locality",
    "comuna": "locality",
    "locality": "locality",

    # Rooms and areas
    "habitaciones": "bedrooms",
    "numero de habitaciones": "bedrooms",
    "número de habitaciones": "bedrooms",
    "alcobas": "bedrooms",
    "cuartos": "bedrooms",
    "dormitorios": "bedrooms",
    "bedrooms": "bedrooms",
    "rooms": "bedrooms",
    "baños": "bathrooms",
    "banos": "bathrooms",
    "numero de baños": "bathrooms",
    "número de baños": "bathrooms",
    "bathrooms": "bathrooms",
    "parqueaderos": "parking_spots",
    "parqueadero": "parking_spots",
    "numero de parqueaderos": "parking_spots",
    "número de parqueaderos": "parking_spots",
    "garajes": "parking_spots",
    "garaje": "parking_spots",
    "parking": "parking_spots",
    "estrato": "stratum",
    "estrato socioeconomico": "stratum",
    "estrato socioeconómico": "stratum",
    "stratum": "stratum",
    "area": "built_area_m2",
    "área": "built_area_m2",
    "area construida": "built_area_m2",
    "área construida": "built_area_m2",
    "area total": "built_area_m2",
    "área total": "built_area_m2",
    "metros cuadrados": "built_area_m2",
    "built area": "built_area_m2",
    "area privada": "private_area_m2",
    "área privada": "private_area_m2",
    "area util": "private_area_m2",
    "área útil": "private_area_m2",
    "private area": "private_area_m2",
    "area terreno": "land_area_m2",
    "área terreno": "land_area_m2",
    "area del terreno": "land_area_m2",
    "área del terreno": "land_area_m2",
    "area lote": "land_area_m2",
    "área lote": "land_area_m2",
    "land area": "land_area_m2",
    "año": "year_built",
    "ano": "year_built",
    "año de construccion": "year_built",
    "año de construcción": "year_built",
    "año construcción": "year_built",
    "ano construccion": "year_built",
    "año construccion": "year_built",
    "antiguedad": "year_built",
    "antigüedad": "year_built",
    "year built": "year_built",

    # Features
    "caracteristicas": "features",
    "características": "features",
    "amenidades": "features",
    "comodidades": "features",
    "features": "features",

    # State
    "estado": "property_status",
    "estado del inmueble": "property_status",
    "condicion": "property_status",
    "condición": "property_status",
    "status": "property_status",
    "disponibilidad": "availability",
    "availability": "availability",

    # External code
    "codigo": "external_code",
    "código": "external_code",
    "codigo inmueble": "external_code",
    "código inmueble": "external_code",
    "codigo interno": "external_code",
    "código interno": "external_code",
    "referencia": "external_code",
    "ref": "external_code",
    "code": "external_code",
    "id": "external_code",

    # Owner
    "propietario": "owner_name",
    "nombre propietario": "owner_name",
    "nombre del propietario": "owner_name",
    "owner": "owner_name",
    "owner name": "owner_name",
    "telefono propietario": "owner_phone",
    "teléfono propietario": "owner_phone",
    "celular propietario": "owner_phone",
    "tel propietario": "owner_phone",
    "cel propietario": "owner_phone",
    "telefono": "owner_phone",
    "teléfono": "owner_phone",
    "celular": "owner_phone",
    "owner phone": "owner_phone",
    "email propietario": "owner_email",
    "correo propietario": "owner_email",
    "correo": "owner_email",
    "email": "owner_email",
    "owner email": "owner_email",

    # Commission
    "comision": "commission_value",
    "comisión": "commission_value",
    "porcentaje comision": "commission_value",
    "commission": "commission_value",
    "tipo de comision": "commission_type",
    "tipo de comisión": "commission_type",
    "tipo comision": "commission_type",
    "commission type": "commission_type",

    # Notes
    "notas": "private_notes",
    "notas privadas": "private_notes",
    "notas internas": "private_notes",
    "observaciones": "private_notes",
    "notes": "private_notes",

    # Images
    "imagenes": "images",
    "imágenes": "images",
    "url imagenes": "images",
    "fotos": "images",
    "fotografias": "images",
    "fotografías": "images",
    "images": "images",
    "photos": "images",
})

# Abbreviation prefix -> full word. Longest prefixes first.
ABBREVIATIONS = MappingProxyType({
    "habitac": "habitaciones",
    "descrip": "descripcion",
    "propiet": "propietario",
    "caract": "caracteristicas",
    "constr": "construida",
    "parqs": "parqueaderos",
    "garaj": "garajes",
    "admon": "administracion",
    "admin": "administracion",
    "antig": "antiguedad",
    "depto": "departamento",
    "comis": "comision",
    "const": "construida",
    "carac": "caracteristicas",
    "habs": "habitaciones",
    "parq": "parqueaderos",
    "dpto": "departamento",
    "desc": "descripcion",
    "disp": "disponibilidad",
    "oper": "operacion",
    "prec": "precio",
    "priv": "privada",
    "terr": "terreno",
    "estr": "estrato",
    "foto": "fotos",
    "hab": "habitaciones",
    "alc": "alcobas",
    "adm": "administracion",
    "ban": "banos",
    "cod": "codigo",
    "ref": "referencia",
    "dir": "direccion",
    "tel": "telefono",
    "cel": "celular",
    "obs": "observaciones",
    "img": "imagenes",
    "neg": "negocio",
    "vlr": "valor",
    "val": "valor",
    "vr": "valor",
})


@dataclass(frozen=True)
class ColumnMatch:
    """Canonical field a header maps to, and how it was found."""
    field: str
    confidence: MatchConfidence


# ===================
# NORMALIZATION
# ===================

_NUMBER_MARKER = re.compile(r"(?<![a-z0-9])(?:n[°º]|no\.|num\.?)(?![a-z0-9])|#")
_BRACKETS = re.compile(r"[()\[\]{}]")
_AREA_UNITS = re.compile(r"(?<![a-z0-9])(?:m²|m2|mts2|mts|mt2|mt)(?![a-z0-9])")
_CURRENCY = re.compile(r"(?<![a-z0-9])(?:cop|usd)(?![a-z0-9])|\$")
_PUNCTUATION = re.compile(r"[^\w\s]|_")
_WHITESPACE = re.compile(r"\s+")


def normalize_header(header: Optional[str]) -> str:
    """
    Reduce a raw header to a comparable form.

    "Área Construida (m²)" -> "area construida"
    "Precio Venta COP $"   -> "precio venta"
    "N° Habitaciones"      -> "numero habitaciones"
    """
    if header is None:
        return ""

    text = strip_accents(str(header).lower())
    text = _NUMBER_MARKER.sub(" numero ", text)
    text = _BRACKETS.sub(" ", text)
    text = _AREA_UNITS.sub(" ", text)
    text = _CURRENCY.sub(" ", text)
    text = _PUNCTUATION.sub(" ", text)
    return _WHITESPACE.sub(" ", text).strip()


def _build_normalized_map() -> MappingProxyType:
    normalized = {}
    for key, field in COLUMN_MAP.items():
        normalized.setdefault(normalize_header(key), field)
    return MappingProxyType(normalized)


NORMALIZED_COLUMN_MAP = _build_normalized_map()

# (raw key, normalized key, field) in dictionary order, for the contains tier
_CONTAINS_CANDIDATES = tuple(
    (key, normalize_header(key), field) for key, field in COLUMN_MAP.items()
)


# ===================
# MATCHING
# ===================

def match_column(
    raw_header: Optional[str],
    min_contains_length: int = CONTAINS_MIN_LENGTH,
) -> Optional[ColumnMatch]:
    """
    Decide which canonical field a spreadsheet header represents.

    Args:
        raw_header: Header text exactly as it appears in the file
        min_contains_length: Minimum length of header and key for contains matching

    Returns:
        ColumnMatch, or None when the header is not recognized
    """
    if raw_header is None:
        return None

    lowered = str(raw_header).lower().strip()
    if not lowered:
        return None

    # 1. Exact on the raw header
    field = COLUMN_MAP.get(lowered)
    if field:
        return ColumnMatch(field, MatchConfidence.EXACT)

    # 2. Exact on the normalized header
    normalized = normalize_header(lowered)
    field = _lookup_exact(normalized)
    if field:
        return ColumnMatch(field, MatchConfidence.EXACT)

    # 3. Contains
    field = _match_contains(normalized, min_contains_length)
    if field:
        return ColumnMatch(field, MatchConfidence.CONTAINS)

    # 4. Abbreviation expansion
    expanded = expand_abbreviations(normalize_header(lowered.rstrip(".")))
    if expanded and expanded != normalized:
        field = _lookup_exact(expanded) or _match_contains(expanded, min_contains_length)
        if field:
            return ColumnMatch(field, MatchConfidence.FUZZY)

    return None


def expand_abbreviations(normalized: str) -> str:
    """
    Expand abbreviated words of a normalized header.

    A word expands when it equals a known abbreviation, or starts with one
    and is itself a prefix of the full word ("habitac" -> "habitaciones",
    but "terraza" stays "terraza").
    """
    words = []
    for word in normalized.split():
        words.append(_expand_word(word))
    return " ".join(words)


def _expand_word(word: str) -> str:
    for abbreviation, full in ABBREVIATIONS.items():
        if word == abbreviation:
            return full
        if word.startswith(abbreviation) and full.startswith(word):
            return full
    return word


def _lookup_exact(normalized: str) -> Optional[str]:
    if not normalized:
        return None
    return COLUMN_MAP.get(normalized) or NORMALIZED_COLUMN_MAP.get(normalized)


def _match_contains(normalized: str, min_length: int) -> Optional[str]:
    """Longest dictionary key contained in the header, or containing it."""
    if len(normalized) < min_length:
        return None

    best_field = None
    best_length = 0
    for key, normalized_key, field in _CONTAINS_CANDIDATES:
        if len(normalized_key) < min_length:
            continue
        if normalized_key in normalized or normalized in normalized_key:
            if len(key) > best_length:
                best_field = field
                best_length = len(key)
    return best_field
