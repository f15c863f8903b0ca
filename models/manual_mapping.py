"""Manual column overrides chosen by the user during import preview."""

from typing import Literal, Mapping, Optional, Union

from pydantic import BaseModel, ConfigDict

# Value the import dialog's dropdown sends for "ignore this column"
IGNORE_COLUMN = "_ignore"


class ColumnOverride(BaseModel):
    """
    User-provided decision for one spreadsheet header.

    Either map the header to a canonical field, or ignore it entirely
    (the header then shows up neither as mapped nor as unmapped).
    """
    model_config = ConfigDict(frozen=True)

    action: Literal["map", "ignore"]
    target_field: Optional[str] = None

    @classmethod
    def ignore(cls) -> "ColumnOverride":
        return cls(action="ignore")

    @classmethod
    def map_to(cls, target_field: str) -> "ColumnOverride":
        return cls(action="map", target_field=target_field)

    @property
    def is_ignore(self) -> bool:
        return self.action == "ignore"


OverrideValue = Union[str, ColumnOverride]


def normalize_overrides(
    manual_overrides: Optional[Mapping[str, OverrideValue]],
) -> dict[str, ColumnOverride]:
    """
    Convert raw UI overrides ({header: field | "_ignore"}) to ColumnOverride.

    Empty values mean "let the matcher decide" and are dropped.
    Insertion order is preserved; it decides which override claims a field first.
    """
    if not manual_overrides:
        return {}

    normalized: dict[str, ColumnOverride] = {}
    for header, value in manual_overrides.items():
        if isinstance(value, ColumnOverride):
            normalized[header] = value
            continue
        if value is None or not str(value).strip():
            continue
        value = str(value).strip()
        if value == IGNORE_COLUMN:
            normalized[header] = ColumnOverride.ignore()
        else:
            normalized[header] = ColumnOverride.map_to(value)
    return normalized
