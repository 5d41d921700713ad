"""Base classes and shared types for NavRoute contracts.

Unit conventions (all contracts and API responses):
- **Distances**: nautical miles (NM) — suffix ``_nm``
- **Altitudes / elevations**: feet AMSL — suffix ``_ft``
- **Frequencies**: kilohertz — suffix ``_khz``
- **Headings/angles**: degrees — suffix ``_deg``
- **Coordinates**: WGS84 decimal degrees
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class ContractModel(BaseModel):
    """Base model with JSON-friendly serialization.

    - Enums serialize as string values.
    - ``to_dict()`` produces a JSON-safe dict without ``None`` fields.
    """

    model_config = ConfigDict(
        populate_by_name=True,
        use_enum_values=True,
    )

    def to_dict(self) -> dict[str, Any]:
        """Dump to a JSON-compatible dict."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class GeoPoint(BaseModel):
    """WGS84 geographic coordinate."""

    latitude: float = Field(..., ge=-90.0, le=90.0)
    longitude: float = Field(..., ge=-180.0, le=180.0)

    model_config = ConfigDict(frozen=True)
