"""Airport, navaid and airway lookup endpoints."""

from __future__ import annotations

import asyncio

from fastapi import APIRouter, Depends, HTTPException, Query

from navroute.api.deps import get_airport_query, get_airway_query, get_navaid_query
from navroute.persistence.errors import NavDataNotReadyError
from navroute.persistence.navdata.airport_query import SEARCH_LIMIT, AirportQueryService
from navroute.persistence.navdata.airway_query import AirwayQueryService
from navroute.persistence.navdata.navaid_query import NavaidQueryService

router = APIRouter(tags=["navdata"])


@router.get("/airports")
async def search_airports(
    q: str = Query(..., min_length=1),
    limit: int = Query(SEARCH_LIMIT, ge=1, le=SEARCH_LIMIT),
    svc: AirportQueryService = Depends(get_airport_query),
) -> list[dict]:
    """Exact identifier matches first, then prefix, then name or municipality."""
    try:
        results = await asyncio.to_thread(svc.search, q, limit)
    except NavDataNotReadyError:
        raise HTTPException(status_code=503, detail="Navigation database not loaded")
    return [ad.to_dict() for ad in results]


@router.get("/airports/{identifier}")
async def get_airport(
    identifier: str,
    svc: AirportQueryService = Depends(get_airport_query),
) -> dict:
    try:
        result = await asyncio.to_thread(svc.resolve, identifier)
    except NavDataNotReadyError:
        raise HTTPException(status_code=503, detail="Navigation database not loaded")
    if result is None:
        raise HTTPException(status_code=404, detail=f"Airport {identifier} not found")
    return result.to_dict()


@router.get("/navaids/{identifier}")
async def get_navaid(
    identifier: str,
    svc: NavaidQueryService = Depends(get_navaid_query),
) -> dict:
    try:
        result = await asyncio.to_thread(svc.get, identifier)
    except NavDataNotReadyError:
        raise HTTPException(status_code=503, detail="Navigation database not loaded")
    if result is None:
        raise HTTPException(status_code=404, detail=f"Navaid {identifier} not found")
    return result.to_dict()


@router.get("/airways/{airway_id}")
async def get_airway(
    airway_id: str,
    svc: AirwayQueryService = Depends(get_airway_query),
) -> dict:
    try:
        result = await asyncio.to_thread(svc.get_airway, airway_id)
    except NavDataNotReadyError:
        raise HTTPException(status_code=503, detail="Navigation database not loaded")
    if result is None:
        raise HTTPException(status_code=404, detail=f"Airway {airway_id} not found")
    return result.to_dict()
