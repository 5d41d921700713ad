"""Route waypoint generation: strategy dispatch between IFR airways and VFR corridor search.

Strategies:
- ``direct``: VFR corridor search; IFR tries airways first, then falls back
  to the corridor search.
- ``airways``: ``direct`` with IFR rules forced.
- ``terrain``: corridor search with denser waypoints (no elevation data).
- ``weather``: not implemented, identical to ``direct``.

An unresolvable airport identifier yields an empty route; no routing
failure ever raises.
"""

from __future__ import annotations

import asyncio
import logging

from navroute.contracts.enums import FlightRules, RouteStrategy
from navroute.contracts.navdata import Airport
from navroute.contracts.route import GeneratedWaypoint, RouteOptions
from navroute.persistence.navdata.airport_query import AirportQueryService
from navroute.persistence.navdata.airway_query import AirwayQueryService
from navroute.persistence.navdata.db_manager import NavDataManager
from navroute.persistence.navdata.navaid_query import NavaidQueryService
from navroute.services.geodesy import distance_nm
from navroute.services.routing.airway_pathfinder import AirwayPathfinder
from navroute.services.routing.constants import TERRAIN_MAX_SEGMENT_NM
from navroute.services.routing.corridor_search import CorridorSearch
from navroute.services.routing.frontier import FrontierFactory, SortedListFrontier
from navroute.services.routing.waypoints import airport_waypoint

logger = logging.getLogger(__name__)


class RouteGenerator:
    """Generates filable waypoint sequences between two airports."""

    def __init__(
        self,
        airports: AirportQueryService,
        navaids: NavaidQueryService,
        airways: AirwayQueryService,
        frontier_factory: FrontierFactory = SortedListFrontier,
    ):
        self._airports = airports
        self._corridor = CorridorSearch(navaids, airports)
        self._pathfinder = AirwayPathfinder(navaids, airways, frontier_factory)

    @classmethod
    def from_manager(
        cls,
        manager: NavDataManager,
        frontier_factory: FrontierFactory = SortedListFrontier,
    ) -> "RouteGenerator":
        return cls(
            AirportQueryService(manager),
            NavaidQueryService(manager),
            AirwayQueryService(manager),
            frontier_factory,
        )

    async def generate_route(
        self,
        departure_id: str,
        destination_id: str,
        options: RouteOptions | None = None,
    ) -> list[GeneratedWaypoint]:
        """Resolve both airports, then generate the route.

        Returns ``[]`` if either identifier does not resolve.
        """
        options = options or RouteOptions()
        departure, destination = await asyncio.gather(
            asyncio.to_thread(self._airports.resolve, departure_id),
            asyncio.to_thread(self._airports.resolve, destination_id),
        )
        if departure is None or destination is None:
            logger.warning(
                "Cannot generate route %s → %s: unknown %s",
                departure_id,
                destination_id,
                departure_id if departure is None else destination_id,
            )
            return []
        return self.generate_route_for(departure, destination, options)

    def generate_route_for(
        self,
        departure: Airport,
        destination: Airport,
        options: RouteOptions,
    ) -> list[GeneratedWaypoint]:
        """Generate a route between two resolved airports."""
        total = distance_nm(departure, destination)
        strategy = RouteStrategy(options.strategy)
        logger.info(
            "Generating route %s → %s (%.1f nm, strategy=%s, rules=%s)",
            departure.icao,
            destination.icao,
            total,
            strategy.value,
            FlightRules(options.flight_rules).value,
        )

        if departure.icao == destination.icao:
            return [airport_waypoint(departure), airport_waypoint(destination)]

        if strategy == RouteStrategy.AIRWAYS:
            waypoints = self._direct(
                departure,
                destination,
                options.model_copy(update={"flight_rules": FlightRules.IFR}),
            )
        elif strategy == RouteStrategy.TERRAIN:
            waypoints = self._corridor.generate(
                departure,
                destination,
                min(options.max_segment_nm, TERRAIN_MAX_SEGMENT_NM),
                options.corridor_width_nm,
            )
        elif strategy == RouteStrategy.WEATHER:
            # TODO: route around convective cells once radar data is available
            logger.warning("Weather avoidance is not implemented; using direct routing")
            waypoints = self._direct(departure, destination, options)
        else:
            waypoints = self._direct(departure, destination, options)

        logger.info("Generated %d waypoints", len(waypoints))
        return waypoints

    def _direct(
        self,
        departure: Airport,
        destination: Airport,
        options: RouteOptions,
    ) -> list[GeneratedWaypoint]:
        if options.flight_rules == FlightRules.IFR:
            waypoints = self._pathfinder.find_route(departure, destination)
            if waypoints:
                return waypoints
            logger.info("No airway route found; falling back to corridor search")

        return self._corridor.generate(
            departure,
            destination,
            options.max_segment_nm,
            options.corridor_width_nm,
        )
