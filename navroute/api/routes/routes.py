"""Route generation endpoint."""

from __future__ import annotations

import asyncio

from fastapi import APIRouter, Depends, HTTPException

from navroute.api.deps import get_airport_query, get_route_generator
from navroute.contracts.route import GenerateRouteRequest
from navroute.persistence.errors import NavDataNotReadyError
from navroute.persistence.navdata.airport_query import AirportQueryService
from navroute.services.routing.route_generator import RouteGenerator
from navroute.services.routing.waypoints import summarize_route

router = APIRouter(prefix="/routes", tags=["routes"])


@router.post("/generate")
async def generate_route(
    body: GenerateRouteRequest,
    airports: AirportQueryService = Depends(get_airport_query),
    generator: RouteGenerator = Depends(get_route_generator),
) -> dict:
    """Generate a filable waypoint sequence between two airports."""
    try:
        departure, destination = await asyncio.gather(
            asyncio.to_thread(airports.resolve, body.departure),
            asyncio.to_thread(airports.resolve, body.destination),
        )
        if departure is None:
            raise HTTPException(status_code=404, detail=f"Airport {body.departure} not found")
        if destination is None:
            raise HTTPException(status_code=404, detail=f"Airport {body.destination} not found")

        waypoints = await asyncio.to_thread(
            generator.generate_route_for, departure, destination, body.options
        )
    except NavDataNotReadyError:
        raise HTTPException(status_code=503, detail="Navigation database not loaded")

    route = summarize_route(departure, destination, body.options, waypoints)
    return route.to_dict()
