"""IFR routing along published airways.

Multi-source / multi-target Dijkstra over the bidirectional airway graph:
seeded with every fix near the departure, stopped at the first fix near the
destination popped from the frontier.  Changing airway costs a fixed
transition penalty so routes do not zig-zag between airways.

Every failure (empty graph, no seed within tolerance, disconnected seeds)
yields an empty list; the caller falls back to the VFR corridor search.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass

from navroute.contracts.enums import WaypointKind
from navroute.contracts.navdata import Airport, NavGraph
from navroute.contracts.route import GeneratedWaypoint
from navroute.persistence.navdata.airway_query import AirwayQueryService
from navroute.persistence.navdata.navaid_query import NavaidQueryService
from navroute.services.geodesy import distance_nm
from navroute.services.routing.constants import (
    MAX_SEEDS_PER_SIDE,
    MIN_WAYPOINT_SPACING_NM,
    SEED_FALLBACK_MAX_NM,
    SEED_SEARCH_RADIUS_NM,
    TRANSITION_PENALTY_NM,
)
from navroute.services.routing.frontier import FrontierFactory, SortedListFrontier
from navroute.services.routing.waypoints import (
    airport_waypoint,
    drop_crowded_tail,
    navaid_waypoint,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PathStep:
    """A fix on the found path and the airway flown to reach it (None for the seed)."""

    fix_identifier: str
    airway_id: str | None


def shortest_airway_path(
    graph: NavGraph,
    sources: dict[str, float],
    targets: set[str],
    frontier_factory: FrontierFactory = SortedListFrontier,
    transition_penalty_nm: float = TRANSITION_PENALTY_NM,
) -> list[PathStep]:
    """Cheapest path from any source to any target.

    *sources* maps each seed fix to its initial cost.  Relaxing an edge
    costs its distance, plus *transition_penalty_nm* when its airway differs
    from the one used to reach the current fix (leaving a seed is free).
    Returns ``[]`` when no target is reachable.
    """
    best: dict[str, float] = {}
    came_from: dict[str, str | None] = {}
    via_airway: dict[str, str | None] = {}
    settled: set[str] = set()
    frontier = frontier_factory()

    for node, cost in sources.items():
        if node not in graph or cost >= best.get(node, math.inf):
            continue
        best[node] = cost
        came_from[node] = None
        via_airway[node] = None
        frontier.push(cost, node)

    while len(frontier):
        cost, node = frontier.pop()
        if node in settled or cost > best[node]:
            continue
        settled.add(node)

        if node in targets:
            logger.debug("Reached %s at cost %.1f (%d fixes settled)", node, cost, len(settled))
            return _reconstruct(node, came_from, via_airway)

        current_airway = via_airway[node]
        for edge in graph.get(node, []):
            if edge.to in settled:
                continue
            penalty = (
                transition_penalty_nm
                if current_airway is not None and edge.airway_id != current_airway
                else 0.0
            )
            new_cost = cost + edge.distance_nm + penalty
            if new_cost < best.get(edge.to, math.inf):
                best[edge.to] = new_cost
                came_from[edge.to] = node
                via_airway[edge.to] = edge.airway_id
                frontier.push(new_cost, edge.to)

    logger.debug("Frontier exhausted after %d fixes: no target reachable", len(settled))
    return []


def _reconstruct(
    target: str,
    came_from: dict[str, str | None],
    via_airway: dict[str, str | None],
) -> list[PathStep]:
    steps: list[PathStep] = []
    node: str | None = target
    while node is not None:
        steps.append(PathStep(fix_identifier=node, airway_id=via_airway[node]))
        node = came_from[node]
    steps.reverse()
    return steps


class AirwayPathfinder:
    """IFR policy: departure → airway fixes → destination."""

    def __init__(
        self,
        navaids: NavaidQueryService,
        airways: AirwayQueryService,
        frontier_factory: FrontierFactory = SortedListFrontier,
    ):
        self._navaids = navaids
        self._airways = airways
        self._frontier_factory = frontier_factory

    def find_route(self, departure: Airport, destination: Airport) -> list[GeneratedWaypoint]:
        graph = self._airways.build_graph()
        if not graph:
            logger.info("IFR routing: airway graph is empty")
            return []

        departure_seeds = self.select_seeds(departure, graph)
        destination_seeds = self.select_seeds(destination, graph)
        if not departure_seeds or not destination_seeds:
            logger.info(
                "IFR routing: no airway entry near %s",
                departure.icao if not departure_seeds else destination.icao,
            )
            return []

        path = shortest_airway_path(
            graph,
            sources=dict(departure_seeds),
            targets={fix for fix, _ in destination_seeds},
            frontier_factory=self._frontier_factory,
        )
        if not path:
            logger.info("IFR routing: no airway path %s → %s", departure.icao, destination.icao)
            return []

        airways_flown = [s.airway_id for s in path if s.airway_id]
        logger.info(
            "IFR routing: %d fixes via %s",
            len(path),
            "-".join(dict.fromkeys(airways_flown)) or "direct",
        )
        return self._assemble(departure, destination, path)

    def select_seeds(self, airport: Airport, graph: NavGraph) -> list[tuple[str, float]]:
        """Up to five nearest graph fixes around *airport*, with their distances.

        Navaids within the search radius first; otherwise the single closest
        airway fix if it lies within the fallback radius.
        """
        seeds = [
            (navaid.identifier, distance_nm(airport, navaid))
            for navaid in self._navaids.find_near(airport, SEED_SEARCH_RADIUS_NM)
            if navaid.identifier in graph
        ]
        if seeds:
            return seeds[:MAX_SEEDS_PER_SIDE]

        closest = self._airways.find_closest_fix(airport)
        if (
            closest is not None
            and closest.distance_nm <= SEED_FALLBACK_MAX_NM
            and closest.fix_identifier in graph
        ):
            return [(closest.fix_identifier, closest.distance_nm)]
        return []

    def _assemble(
        self,
        departure: Airport,
        destination: Airport,
        path: list[PathStep],
    ) -> list[GeneratedWaypoint]:
        waypoints = [airport_waypoint(departure)]
        used = {departure.icao, destination.icao}

        for step in path:
            if step.fix_identifier in used:
                continue
            waypoint = self._fix_waypoint(step)
            if waypoint is None:
                logger.warning("IFR routing: no coordinates for fix %s", step.fix_identifier)
                continue
            if distance_nm(waypoints[-1], waypoint) < MIN_WAYPOINT_SPACING_NM:
                logger.debug("Dropped %s: within %.0f nm of %s", waypoint.identifier, MIN_WAYPOINT_SPACING_NM, waypoints[-1].identifier)
                continue
            waypoints.append(waypoint)
            used.add(waypoint.identifier)

        waypoints.append(airport_waypoint(destination))
        return drop_crowded_tail(waypoints)

    def _fix_waypoint(self, step: PathStep) -> GeneratedWaypoint | None:
        label = f" ({step.airway_id})" if step.airway_id else ""
        navaid = self._navaids.get(step.fix_identifier)
        if navaid is not None:
            waypoint = navaid_waypoint(navaid, airway=step.airway_id)
            return waypoint.model_copy(update={"name": f"{waypoint.name}{label}"})

        coords = self._airways.get_fix_coordinates(step.fix_identifier)
        if coords is None:
            return None
        return GeneratedWaypoint(
            identifier=step.fix_identifier,
            latitude=coords.latitude,
            longitude=coords.longitude,
            kind=WaypointKind.FIX,
            name=f"{step.fix_identifier}{label}",
            airway=step.airway_id,
        )
