"""Enumerations shared across all NavRoute contracts."""

from enum import Enum


class NavaidType(str, Enum):
    """Radio navaid or named fix category, as published in the navaid table."""
    VOR = "VOR"
    VORTAC = "VORTAC"
    VOR_DME = "VOR-DME"
    NDB = "NDB"
    FIX = "FIX"
    GPS = "GPS"


class WaypointKind(str, Enum):
    """Kind of a generated waypoint, as shown to the pilot."""
    AIRPORT = "airport"
    VOR = "vor"
    NDB = "ndb"
    FIX = "fix"
    GPS = "gps"


class RouteStrategy(str, Enum):
    """Route generation policy."""
    DIRECT = "direct"
    AIRWAYS = "airways"
    TERRAIN = "terrain"
    WEATHER = "weather"  # Not implemented: behaves exactly like DIRECT


class FlightRules(str, Enum):
    VFR = "VFR"
    IFR = "IFR"
