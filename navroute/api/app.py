"""FastAPI application factory."""

from __future__ import annotations

import asyncio
import logging
import os
from contextlib import asynccontextmanager
from pathlib import Path

from dotenv import load_dotenv
from fastapi import FastAPI

# Load .env file from project root (must be before other imports)
load_dotenv()
from fastapi.middleware.cors import CORSMiddleware  # noqa: E402

from navroute.api.routes import navdata, routes  # noqa: E402
from navroute.persistence.errors import NavDataNotReadyError  # noqa: E402
from navroute.persistence.navdata.airport_query import AirportQueryService  # noqa: E402
from navroute.persistence.navdata.db_manager import NavDataManager  # noqa: E402
from navroute.persistence.navdata.navaid_query import NavaidQueryService  # noqa: E402
from navroute.services.routing.route_generator import RouteGenerator  # noqa: E402

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Load the navigation reference database on startup."""
    manager = NavDataManager()
    db_path = os.environ.get("NAVDATA_DB_PATH")
    cycle = os.environ.get("NAVDATA_CYCLE", "local")
    if db_path:
        try:
            manager.load(Path(db_path), cycle=cycle)
        except (FileNotFoundError, NavDataNotReadyError) as exc:
            logger.warning("Navigation database unavailable: %s", exc)
    else:
        logger.warning("NAVDATA_DB_PATH not set; route generation disabled")

    app.state.navdata_manager = manager
    app.state.route_generator = RouteGenerator.from_manager(manager)
    yield


app = FastAPI(
    title="NavRoute API",
    description="Route waypoint generation for VFR and IFR flight planning",
    version="0.1.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=os.environ.get("CORS_ORIGINS", "http://localhost:5173").split(","),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(routes.router, prefix="/api")
app.include_router(navdata.router, prefix="/api")


@app.get("/api/health")
async def health():
    manager: NavDataManager = app.state.navdata_manager
    result = {
        "status": "ok",
        "airac_cycle": manager.current_cycle,
        "navdata_ready": manager.is_ready,
    }

    if manager.is_ready:
        try:
            result["airport_count"] = await asyncio.to_thread(
                AirportQueryService(manager).count
            )
            result["navaid_counts"] = await asyncio.to_thread(
                NavaidQueryService(manager).statistics
            )
        except Exception as exc:
            result["navdata_error"] = str(exc)

    return result
