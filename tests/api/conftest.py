"""Shared fixtures for API tests."""

from __future__ import annotations

import httpx
import pytest

from navroute.api.app import app
from navroute.persistence.navdata.db_manager import NavDataManager
from navroute.services.routing.route_generator import RouteGenerator


def _install(manager: NavDataManager):
    app.state.navdata_manager = manager
    app.state.route_generator = RouteGenerator.from_manager(manager)
    return app


@pytest.fixture
def test_app(navdata_manager):
    """FastAPI app serving the fixture navigation database."""
    yield _install(navdata_manager)
    app.dependency_overrides.clear()


@pytest.fixture
def unready_app():
    """FastAPI app whose navigation database was never loaded."""
    yield _install(NavDataManager())
    app.dependency_overrides.clear()


async def _client(application):
    transport = httpx.ASGITransport(app=application)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as c:
        yield c


@pytest.fixture
async def client(test_app):
    """httpx AsyncClient wired to the test app."""
    async for c in _client(test_app):
        yield c


@pytest.fixture
async def unready_client(unready_app):
    async for c in _client(unready_app):
        yield c
