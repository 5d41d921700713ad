"""VFR corridor search: real navaids and airports along the great-circle track.

Evenly spaced synthetic points are laid on the great circle, then each one
is replaced by the best real navaid (or, failing that, the nearest ICAO
airport) within a detour tolerance.  Points with no acceptable replacement
are skipped: every emitted waypoint is something a pilot can navigate to
and call out on the radio.
"""

from __future__ import annotations

import logging
import math

from navroute.contracts.common import GeoPoint
from navroute.contracts.navdata import Airport, Navaid
from navroute.contracts.route import GeneratedWaypoint
from navroute.persistence.navdata.airport_query import AirportQueryService
from navroute.persistence.navdata.navaid_query import NavaidQueryService
from navroute.services.geodesy import distance_nm, interpolate
from navroute.services.routing.constants import (
    DETOUR_TOLERANCE_FRACTION,
    MIN_DETOUR_TOLERANCE_NM,
    MIN_WAYPOINT_SPACING_NM,
    NAVAID_TYPE_SCORE_FACTOR,
    NAVAID_TYPE_WEIGHTS,
)
from navroute.services.routing.waypoints import (
    airport_waypoint,
    drop_crowded_tail,
    navaid_waypoint,
)

logger = logging.getLogger(__name__)


def detour_tolerance_nm(max_segment_nm: float) -> float:
    """Maximum distance between a synthetic point and its real replacement."""
    return max(max_segment_nm * DETOUR_TOLERANCE_FRACTION, MIN_DETOUR_TOLERANCE_NM)


def navaid_score(navaid: Navaid, distance: float) -> float:
    """Higher is better: favours VORTAC > VOR-DME > VOR > NDB > fix, then proximity."""
    weight = NAVAID_TYPE_WEIGHTS.get(getattr(navaid.navaid_type, "value", navaid.navaid_type), 0)
    return weight * NAVAID_TYPE_SCORE_FACTOR - distance


class CorridorSearch:
    """Corridor-constrained nearest-real-waypoint search (VFR policy)."""

    def __init__(self, navaids: NavaidQueryService, airports: AirportQueryService):
        self._navaids = navaids
        self._airports = airports

    def generate(
        self,
        departure: Airport,
        destination: Airport,
        max_segment_nm: float,
        corridor_width_nm: float,
    ) -> list[GeneratedWaypoint]:
        """Departure, zero or more real intermediates, destination."""
        waypoints = [airport_waypoint(departure)]

        total = distance_nm(departure, destination)
        num_segments = math.ceil(total / max_segment_nm)
        if num_segments <= 1:
            logger.info("Direct flight (%.1f nm): no intermediate waypoints", total)
            waypoints.append(airport_waypoint(destination))
            return waypoints

        synthetic = [
            interpolate(departure, destination, i / num_segments)
            for i in range(1, num_segments)
        ]
        path = [departure.position, *synthetic, destination.position]
        corridor = self._navaids.find_along_path(path, corridor_width_nm)
        logger.info(
            "Corridor search: %d segments over %.1f nm, %d navaids within %.0f nm",
            num_segments,
            total,
            len(corridor),
            corridor_width_nm,
        )

        tolerance = detour_tolerance_nm(max_segment_nm)
        used = {departure.icao, destination.icao}

        for index, point in enumerate(synthetic, start=1):
            previous = waypoints[-1]
            waypoint = self._best_navaid(point, corridor, used, tolerance, previous)
            if waypoint is None:
                waypoint = self._nearest_airport(point, used, tolerance, previous)
            if waypoint is None:
                logger.debug("Synthetic point %d: no real waypoint, skipped", index)
                continue

            logger.debug("Synthetic point %d: using %s (%s)", index, waypoint.identifier, waypoint.kind)
            waypoints.append(waypoint)
            used.add(waypoint.identifier)

        waypoints.append(airport_waypoint(destination))
        return drop_crowded_tail(waypoints)

    # ------------------------------------------------------------------
    # Candidate selection
    # ------------------------------------------------------------------

    @staticmethod
    def _best_navaid(
        point: GeoPoint,
        corridor: list[Navaid],
        used: set[str],
        tolerance: float,
        previous: GeneratedWaypoint,
    ) -> GeneratedWaypoint | None:
        best: Navaid | None = None
        best_score = -math.inf
        for navaid in corridor:
            if navaid.identifier in used:
                continue
            dist = distance_nm(point, navaid)
            if dist > tolerance:
                continue
            score = navaid_score(navaid, dist)
            if score > best_score:
                best, best_score = navaid, score

        if best is None:
            return None
        if distance_nm(previous, best) < MIN_WAYPOINT_SPACING_NM:
            logger.debug("Rejected %s: within %.0f nm of %s", best.identifier, MIN_WAYPOINT_SPACING_NM, previous.identifier)
            return None
        return navaid_waypoint(best)

    def _nearest_airport(
        self,
        point: GeoPoint,
        used: set[str],
        tolerance: float,
        previous: GeneratedWaypoint,
    ) -> GeneratedWaypoint | None:
        nearby = self._airports.find_near(point, tolerance, None, icao_only=True)
        for airport in nearby:
            if not airport.has_icao_code or airport.icao in used:
                continue
            if distance_nm(previous, airport) < MIN_WAYPOINT_SPACING_NM:
                continue
            return airport_waypoint(airport)
        return None
