"""
Property import schemas.

Structures produced by the spreadsheet import preview: column mappings,
the canonical property record, per-row results and the aggregate preview.
"""

from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field

# Header-keyed cells exactly as read from the sheet (str / int / float / datetime / None)
RawRow = dict[str, Any]


class MatchConfidence(str, Enum):
    """Strategy that produced a column mapping (display only)."""
    EXACT = "exact"
    CONTAINS = "contains"
    FUZZY = "fuzzy"


class PropertyType(str, Enum):
    APARTAMENTO = "apartamento"
    CASA = "casa"
    CASA_CAMPESTRE = "casa_campestre"
    APARTAESTUDIO = "apartaestudio"
    DUPLEX = "duplex"
    PENTHOUSE = "penthouse"
    LOCAL = "local"
    OFICINA = "oficina"
    LOTE = "lote"
    FINCA = "finca"
    BODEGA = "bodega"
    CONSULTORIO = "consultorio"


class BusinessType(str, Enum):
    VENTA = "venta"
    ARRIENDO = "arriendo"
    VENTA_ARRIENDO = "venta_arriendo"


class PropertyStatus(str, Enum):
    NUEVO = "nuevo"
    USADO = "usado"
    EN_CONSTRUCCION = "en_construccion"
    REMODELADO = "remodelado"


class Availability(str, Enum):
    DISPONIBLE = "disponible"
    VENDIDO = "vendido"
    ARRENDADO = "arrendado"
    RESERVADO = "reservado"


# Ordered options for the manual-override dropdown in the import dialog
MAPPABLE_FIELDS: tuple[dict[str, str], ...] = (
    {"value": "title", "label": "Título"},
    {"value": "description", "label": "Descripción"},
    {"value": "property_type", "label": "Tipo de inmueble"},
    {"value": "business_type", "label": "Tipo de negocio"},
    {"value": "property_status", "label": "Estado del inmueble"},
    {"value": "availability", "label": "Disponibilidad"},
    {"value": "sale_price", "label": "Precio de venta"},
    {"value": "rent_price", "label": "Precio de arriendo"},
    {"value": "currency", "label": "Moneda"},
    {"value": "admin_fee", "label": "Administración"},
    {"value": "city", "label": "Ciudad"},
    {"value": "state_department", "label": "Departamento"},
    {"value": "zone", "label": "Zona / Barrio"},
    {"value": "address", "label": "Dirección"},
    {"value": "locality", "label": "Localidad"},
    {"value": "built_area_m2", "label": "Área construida (m²)"},
    {"value": "private_area_m2", "label": "Área privada (m²)"},
    {"value": "land_area_m2", "label": "Área del terreno (m²)"},
    {"value": "bedrooms", "label": "Habitaciones"},
    {"value": "bathrooms", "label": "Baños"},
    {"value": "parking_spots", "label": "Parqueaderos"},
    {"value": "stratum", "label": "Estrato"},
    {"value": "year_built", "label": "Año de construcción"},
    {"value": "features", "label": "Características"},
    {"value": "images", "label": "Imágenes (URLs)"},
    {"value": "external_code", "label": "Código / Referencia"},
    {"value": "owner_name", "label": "Nombre del propietario"},
    {"value": "owner_phone", "label": "Teléfono del propietario"},
    {"value": "owner_email", "label": "Email del propietario"},
    {"value": "commission_value", "label": "Comisión"},
    {"value": "commission_type", "label": "Tipo de comisión"},
    {"value": "private_notes", "label": "Notas privadas"},
)

MAPPABLE_FIELD_NAMES = frozenset(f["value"] for f in MAPPABLE_FIELDS)


class ColumnMapping(BaseModel):
    """One recognized spreadsheet header and the field it feeds."""
    model_config = ConfigDict(use_enum_values=True)

    raw_header: str
    mapped_field: str
    confidence: MatchConfidence


class LocalizedText(BaseModel):
    """Bilingual text container. Imports only fill Spanish."""
    es: str
    en: Optional[str] = None


class PropertyImportRecord(BaseModel):
    """
    Canonical property ready for insertion.

    Counts and prices are always numbers (0 when missing); optional
    measurements are None when missing.
    """
    model_config = ConfigDict(use_enum_values=True)

    title: LocalizedText
    description: Optional[LocalizedText] = None
    slug: str

    property_type: PropertyType = PropertyType.APARTAMENTO
    business_type: BusinessType = BusinessType.VENTA
    property_status: PropertyStatus = PropertyStatus.USADO
    availability: Availability = Availability.DISPONIBLE

    # Pricing
    sale_price: float = 0
    rent_price: float = 0
    currency: str = "COP"
    admin_fee: float = 0

    # Location
    city: Optional[str] = None
    state_department: Optional[str] = None
    zone: Optional[str] = None
    address: Optional[str] = None
    locality: Optional[str] = None

    # Rooms and areas
    built_area_m2: Optional[float] = None
    private_area_m2: Optional[float] = None
    land_area_m2: Optional[float] = None
    bedrooms: float = 0
    bathrooms: float = 0
    parking_spots: float = 0
    stratum: Optional[int] = Field(None, ge=1, le=6, description="Colombian estrato 1-6")
    year_built: Optional[int] = None
    features: list[str] = Field(default_factory=list)

    # Publication
    is_published: bool = True
    is_featured: bool = False
    external_code: Optional[str] = None

    # Private fields
    owner_name: Optional[str] = None
    owner_phone: Optional[str] = None
    owner_email: Optional[str] = None
    commission_value: Optional[float] = None
    commission_type: Optional[str] = None
    private_notes: Optional[str] = None

    images: list[str] = Field(default_factory=list)


class ImportRow(BaseModel):
    """
    One data row of the uploaded sheet.

    `property` is set if and only if `errors` is empty.
    """

    row_number: int = Field(description="Spreadsheet row (1-based, header is row 1)")
    data: RawRow = Field(default_factory=dict)
    errors: list[str] = Field(default_factory=list)
    property: Optional[PropertyImportRecord] = None

    def is_valid(self) -> bool:
        return self.property is not None


class PreviewSample(BaseModel):
    """Flat projection of a row for the preview table."""
    model_config = ConfigDict(populate_by_name=True)

    row_number: int
    title: str
    property_type: str = "-"
    business_type: str = "-"
    price: float = 0
    city: str = "-"
    area: float = 0
    bedrooms: float = 0
    bathrooms: float = 0
    image_count: int = 0
    has_error: bool = Field(False, alias="_error")
    errors: list[str] = Field(default_factory=list)


class ImportPreview(BaseModel):
    """Aggregate result of previewing one import file."""

    rows: list[ImportRow] = Field(default_factory=list)
    column_mappings: list[ColumnMapping] = Field(default_factory=list)
    unmapped_headers: list[str] = Field(default_factory=list)
    sheet_name: str
    sheet_names: list[str] = Field(default_factory=list)

    total_rows: int = 0
    valid_count: int = 0
    error_count: int = 0
    duplicate_count: int = 0

    preview: list[PreviewSample] = Field(default_factory=list)

    def valid_rows(self) -> list[ImportRow]:
        """Rows that passed validation and duplicate checks."""
        return [r for r in self.rows if r.property is not None]

    def valid_properties(self) -> list[PropertyImportRecord]:
        """Records to hand to the persistence layer."""
        return [r.property for r in self.rows if r.property is not None]

    def to_dict(self) -> dict:
        """Convert to dictionary for API response."""
        return self.model_dump(mode="json", by_alias=True)
