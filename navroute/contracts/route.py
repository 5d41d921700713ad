"""RouteOptions, GeneratedWaypoint, GeneratedRoute — route generation I/O.

All models here are **calculated**: built per request from reference data
and never persisted.
"""

from pydantic import Field

from navroute.contracts.common import ContractModel, GeoPoint
from navroute.contracts.enums import FlightRules, RouteStrategy, WaypointKind

DEFAULT_MAX_SEGMENT_NM = 50.0
DEFAULT_CORRIDOR_WIDTH_NM = 10.0


class RouteOptions(ContractModel):
    """Caller-supplied route generation configuration."""

    strategy: RouteStrategy = RouteStrategy.DIRECT
    flight_rules: FlightRules = FlightRules.VFR
    max_segment_nm: float = Field(
        default=DEFAULT_MAX_SEGMENT_NM,
        gt=0,
        le=1000,
        description="Target spacing between consecutive waypoints",
    )
    corridor_width_nm: float = Field(
        default=DEFAULT_CORRIDOR_WIDTH_NM,
        gt=0,
        le=200,
        description="Half-width of the navaid search corridor around the direct track",
    )


class GeneratedWaypoint(ContractModel):
    """One waypoint of a generated route.

    Every identifier is a real airport, navaid, or airway fix.
    """

    identifier: str = Field(..., min_length=1)
    latitude: float = Field(..., ge=-90.0, le=90.0)
    longitude: float = Field(..., ge=-180.0, le=180.0)
    kind: WaypointKind
    name: str = ""
    airway: str | None = Field(default=None, description="Airway used to reach this fix")

    @property
    def position(self) -> GeoPoint:
        return GeoPoint(latitude=self.latitude, longitude=self.longitude)

    def formatted(self) -> str:
        """Flight plan notation, e.g. ``STL 3851.483N 09029.093W``."""
        from navroute.services.geodesy import format_coordinate

        lat = format_coordinate(self.latitude, is_latitude=True)
        lon = format_coordinate(self.longitude, is_latitude=False)
        return f"{self.identifier} {lat} {lon}"


# ---------------------------------------------------------------------------
# API models
# ---------------------------------------------------------------------------


class GenerateRouteRequest(ContractModel):
    """Body of ``POST /api/routes/generate``."""

    departure: str = Field(..., min_length=1, max_length=8)
    destination: str = Field(..., min_length=1, max_length=8)
    options: RouteOptions = Field(default_factory=RouteOptions)


class RouteLeg(ContractModel):
    """One leg between consecutive waypoints."""

    from_identifier: str
    to_identifier: str
    distance_nm: float = Field(..., ge=0)
    bearing_deg: float = Field(..., ge=0, lt=360, description="Initial true course")


class GeneratedRoute(ContractModel):
    """Generated route with summary distances and per-leg courses."""

    departure: str
    destination: str
    options: RouteOptions
    total_distance_nm: float = Field(..., ge=0, description="Direct great-circle distance")
    route_distance_nm: float = Field(..., ge=0, description="Sum of leg distances")
    waypoints: list[GeneratedWaypoint]
    legs: list[RouteLeg] = Field(default_factory=list)
