"""NavRoute data contracts — Pydantic v2 models for route waypoint generation.

Data authority
--------------

**SQLite** (shared read-only reference data, rebuilt per AIRAC cycle):
- ``Airport`` — queried by primary identifier or alias
- ``Navaid`` — queried by identifier, radius, or corridor
- ``Airway`` / ``AirwayFix`` — ordered fix sequences per airway

Calculated (never persisted)
----------------------------
- ``NavGraph`` / ``GraphEdge`` — bidirectional airway graph for IFR routing
- ``GeneratedWaypoint`` — one waypoint of a generated route
- ``RouteLeg`` — distance and initial course between consecutive waypoints
- ``GeneratedRoute`` — API response DTO with summary distances and legs
"""

from navroute.contracts.enums import (
    FlightRules,
    NavaidType,
    RouteStrategy,
    WaypointKind,
)
from navroute.contracts.common import ContractModel, GeoPoint
from navroute.contracts.navdata import (
    Airport,
    Airway,
    AirwayFix,
    ClosestFix,
    GraphEdge,
    Navaid,
    NavGraph,
)
from navroute.contracts.route import (
    GeneratedRoute,
    GeneratedWaypoint,
    GenerateRouteRequest,
    RouteLeg,
    RouteOptions,
)

__all__ = [
    # Enums
    "FlightRules",
    "NavaidType",
    "RouteStrategy",
    "WaypointKind",
    # Common
    "ContractModel",
    "GeoPoint",
    # Reference data
    "Airport",
    "Airway",
    "AirwayFix",
    "ClosestFix",
    "GraphEdge",
    "Navaid",
    "NavGraph",
    # Route generation
    "GeneratedRoute",
    "GeneratedWaypoint",
    "GenerateRouteRequest",
    "RouteLeg",
    "RouteOptions",
]
