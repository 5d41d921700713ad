"""Airport, Navaid, Airway — read-only navigation reference data.

Loaded from the SQLite reference database (one file per AIRAC cycle) by the
query services in ``navroute.persistence.navdata``.  Never mutated.

``NavGraph`` and ``GraphEdge`` are **derived** structures built from the
airway table for IFR pathfinding — never persisted.
"""

from __future__ import annotations

from dataclasses import dataclass

from pydantic import Field, computed_field, field_validator

from navroute.contracts.common import ContractModel, GeoPoint
from navroute.contracts.enums import NavaidType


class Airport(ContractModel):
    """An airport, addressable by its primary identifier or any alias."""

    icao: str = Field(..., min_length=1, max_length=8, description="Primary identifier")
    aliases: list[str] = Field(
        default_factory=list,
        description="Alternate identifiers (IATA, GPS code, local code)",
    )
    name: str = ""
    latitude: float = Field(..., ge=-90.0, le=90.0)
    longitude: float = Field(..., ge=-180.0, le=180.0)
    elevation_ft: int | None = None
    municipality: str | None = None
    airport_type: str | None = Field(
        default=None, description="e.g. 'small_airport', 'large_airport', 'heliport'"
    )

    @field_validator("icao", mode="before")
    @classmethod
    def upper_icao(cls, v: str) -> str:
        return v.strip().upper()

    @field_validator("aliases", mode="before")
    @classmethod
    def upper_aliases(cls, v: list[str]) -> list[str]:
        return [alias.strip().upper() for alias in v if alias and alias.strip()]

    @property
    def position(self) -> GeoPoint:
        return GeoPoint(latitude=self.latitude, longitude=self.longitude)

    @property
    def has_icao_code(self) -> bool:
        """True for 4-character ICAO identifiers (KJFK), false for local codes (00A)."""
        return len(self.icao) == 4

    @computed_field  # type: ignore[prop-decorator]
    @property
    def display_name(self) -> str:
        """Identifier with its aliases, e.g. ``KJFK (also: JFK)``."""
        if not self.aliases:
            return self.icao
        return f"{self.icao} (also: {', '.join(self.aliases)})"


class Navaid(ContractModel):
    """A VOR, NDB, or named GPS fix."""

    identifier: str = Field(..., min_length=1, max_length=8)
    navaid_type: NavaidType
    name: str = ""
    latitude: float = Field(..., ge=-90.0, le=90.0)
    longitude: float = Field(..., ge=-180.0, le=180.0)
    frequency_khz: float | None = None

    @field_validator("identifier", mode="before")
    @classmethod
    def upper_identifier(cls, v: str) -> str:
        return v.strip().upper()

    @property
    def position(self) -> GeoPoint:
        return GeoPoint(latitude=self.latitude, longitude=self.longitude)


class AirwayFix(ContractModel):
    """One fix on one airway's ordered path."""

    fix_identifier: str = Field(..., min_length=1)
    latitude: float = Field(..., ge=-90.0, le=90.0)
    longitude: float = Field(..., ge=-180.0, le=180.0)
    sequence: int = Field(default=0, ge=0)
    minimum_altitude_ft: int | None = None  # MEA published with this segment


class Airway(ContractModel):
    """A published airway: consecutive fixes define traversable segments.

    Airways are undirected for travel purposes.
    """

    id: str = Field(..., min_length=1, description="e.g. 'V4', 'J60'")
    airway_type: str | None = Field(default=None, description="'VICTOR' or 'JET'")
    fixes: list[AirwayFix] = Field(default_factory=list)


class ClosestFix(ContractModel):
    """Airway fix nearest to a query point."""

    fix_identifier: str
    latitude: float
    longitude: float
    distance_nm: float = Field(..., ge=0)


@dataclass(frozen=True)
class GraphEdge:
    """Directed edge of the airway graph."""

    to: str
    distance_nm: float
    airway_id: str


NavGraph = dict[str, list[GraphEdge]]
