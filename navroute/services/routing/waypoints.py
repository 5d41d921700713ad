"""GeneratedWaypoint builders shared by the corridor search and the pathfinder."""

from __future__ import annotations

import logging

from navroute.contracts.enums import WaypointKind
from navroute.contracts.navdata import Airport, Navaid
from navroute.contracts.route import GeneratedRoute, GeneratedWaypoint, RouteLeg, RouteOptions
from navroute.services.geodesy import distance_nm, initial_bearing_deg
from navroute.services.routing.constants import MIN_WAYPOINT_SPACING_NM

logger = logging.getLogger(__name__)


def kind_for_navaid_type(navaid_type: str) -> WaypointKind:
    """Map a navaid type to the waypoint kind shown to the pilot."""
    upper = getattr(navaid_type, "value", navaid_type).upper()
    if "VOR" in upper:
        return WaypointKind.VOR
    if "NDB" in upper:
        return WaypointKind.NDB
    if upper in ("FIX", "GPS"):
        return WaypointKind.FIX
    return WaypointKind.GPS


def airport_waypoint(airport: Airport) -> GeneratedWaypoint:
    return GeneratedWaypoint(
        identifier=airport.icao,
        latitude=airport.latitude,
        longitude=airport.longitude,
        kind=WaypointKind.AIRPORT,
        name=airport.name,
    )


def navaid_waypoint(navaid: Navaid, airway: str | None = None) -> GeneratedWaypoint:
    return GeneratedWaypoint(
        identifier=navaid.identifier,
        latitude=navaid.latitude,
        longitude=navaid.longitude,
        kind=kind_for_navaid_type(navaid.navaid_type),
        name=navaid.name or navaid.identifier,
        airway=airway,
    )


def drop_crowded_tail(waypoints: list[GeneratedWaypoint]) -> list[GeneratedWaypoint]:
    """Remove trailing intermediates closer than the minimum spacing to the destination.

    The first and last waypoints are never removed.
    """
    while len(waypoints) > 2 and distance_nm(waypoints[-2], waypoints[-1]) < MIN_WAYPOINT_SPACING_NM:
        dropped = waypoints.pop(-2)
        logger.debug("Dropped %s: too close to destination", dropped.identifier)
    return waypoints


def route_distance_nm(waypoints: list[GeneratedWaypoint]) -> float:
    """Sum of leg distances along the waypoint sequence."""
    return sum(distance_nm(a, b) for a, b in zip(waypoints, waypoints[1:]))


def route_legs(waypoints: list[GeneratedWaypoint]) -> list[RouteLeg]:
    """Distance and initial true course of each leg, rounded to 0.1."""
    return [
        RouteLeg(
            from_identifier=a.identifier,
            to_identifier=b.identifier,
            distance_nm=round(distance_nm(a, b), 1),
            bearing_deg=round(initial_bearing_deg(a, b), 1) % 360.0,
        )
        for a, b in zip(waypoints, waypoints[1:])
    ]


def summarize_route(
    departure: Airport,
    destination: Airport,
    options: RouteOptions,
    waypoints: list[GeneratedWaypoint],
) -> GeneratedRoute:
    return GeneratedRoute(
        departure=departure.icao,
        destination=destination.icao,
        options=options,
        total_distance_nm=round(distance_nm(departure, destination), 1),
        route_distance_nm=round(route_distance_nm(waypoints), 1),
        waypoints=waypoints,
        legs=route_legs(waypoints),
    )
