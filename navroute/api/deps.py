"""FastAPI dependency injection wiring."""

from __future__ import annotations

from fastapi import Depends, Request

from navroute.persistence.navdata.airport_query import AirportQueryService
from navroute.persistence.navdata.airway_query import AirwayQueryService
from navroute.persistence.navdata.db_manager import NavDataManager
from navroute.persistence.navdata.navaid_query import NavaidQueryService
from navroute.services.routing.route_generator import RouteGenerator


# ------------------------------------------------------------------
# Reference data (singletons from app.state)
# ------------------------------------------------------------------


def get_navdata_manager(request: Request) -> NavDataManager:
    return request.app.state.navdata_manager


def get_route_generator(request: Request) -> RouteGenerator:
    """Shared generator: keeps the airway graph built once per cycle."""
    return request.app.state.route_generator


# ------------------------------------------------------------------
# Query services (stateless, one instance per request)
# ------------------------------------------------------------------


def get_airport_query(
    manager: NavDataManager = Depends(get_navdata_manager),
) -> AirportQueryService:
    return AirportQueryService(manager)


def get_navaid_query(
    manager: NavDataManager = Depends(get_navdata_manager),
) -> NavaidQueryService:
    return NavaidQueryService(manager)


def get_airway_query(
    manager: NavDataManager = Depends(get_navdata_manager),
) -> AirwayQueryService:
    return AirwayQueryService(manager)
