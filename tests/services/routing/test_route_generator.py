"""Tests for route strategy dispatch and the route-level invariants."""

from __future__ import annotations

import re

import pytest

from navroute.contracts.route import GeneratedWaypoint, RouteOptions
from navroute.persistence.errors import NavDataNotReadyError
from navroute.persistence.navdata.db_manager import NavDataManager
from navroute.services.geodesy import distance_nm
from navroute.services.routing.frontier import HeapFrontier
from navroute.services.routing.route_generator import RouteGenerator

PAIRS = [
    ("XXXX", "YYYY"),
    ("PAAA", "PBBB"),
    ("QAAA", "QBBB"),
    ("DEPA", "DESA"),
    ("DESA", "DEPA"),
    ("ISOA", "DESA"),
    ("XXXX", "DEPA"),
]

OPTION_SETS = [
    RouteOptions(max_segment_nm=30),
    RouteOptions(max_segment_nm=15),
    RouteOptions(flight_rules="IFR"),
    RouteOptions(strategy="airways"),
    RouteOptions(strategy="terrain"),
    RouteOptions(strategy="weather", flight_rules="IFR"),
]

SYNTHETIC = re.compile(r"^WPT\d+$")


def _ids(route: list[GeneratedWaypoint]) -> list[str]:
    return [w.identifier for w in route]


def _assert_invariants(route: list[GeneratedWaypoint], dep: str, dest: str) -> None:
    assert route[0].identifier == dep and route[0].kind == "airport"
    assert route[-1].identifier == dest and route[-1].kind == "airport"
    assert len(set(_ids(route))) == len(route)
    assert not any(SYNTHETIC.match(ident) for ident in _ids(route))
    for a, b in zip(route[1:-1], route[2:]):
        assert distance_nm(a, b) >= 10.0
    if len(route) > 2:
        assert distance_nm(route[0], route[1]) >= 10.0


class TestGenerateRoute:
    async def test_unknown_departure(self, generator):
        assert await generator.generate_route("ZZZZ", "YYYY") == []

    async def test_unknown_destination(self, generator):
        assert await generator.generate_route("XXXX", "ZZZZ") == []

    async def test_resolves_aliases(self, generator):
        route = await generator.generate_route("x", "Y", RouteOptions(max_segment_nm=30))
        assert _ids(route) == ["XXXX", "MID", "YYYY"]

    async def test_default_options(self, generator):
        route = await generator.generate_route("DEPA", "DESA")
        assert _ids(route) == ["DEPA", "AAA", "NNN", "DDD", "DESA"]

    async def test_same_airport(self, generator):
        assert _ids(await generator.generate_route("DEPA", "DPA")) == ["DEPA", "DEPA"]

    async def test_not_ready_propagates(self):
        generator = RouteGenerator.from_manager(NavDataManager())
        with pytest.raises(NavDataNotReadyError):
            await generator.generate_route("DEPA", "DESA")


class TestStrategies:
    @pytest.fixture
    def endpoints(self, airport_query):
        return airport_query.resolve("DEPA"), airport_query.resolve("DESA")

    def test_vfr_direct_uses_corridor(self, generator, endpoints):
        route = generator.generate_route_for(*endpoints, RouteOptions())
        assert all(w.airway is None for w in route)

    def test_ifr_direct_uses_airways(self, generator, endpoints):
        route = generator.generate_route_for(*endpoints, RouteOptions(flight_rules="IFR"))
        assert _ids(route) == ["DEPA", "AAA", "BBB", "CCC", "DDD", "DESA"]

    def test_airways_forces_ifr(self, generator, endpoints):
        airways = generator.generate_route_for(*endpoints, RouteOptions(strategy="airways"))
        ifr = generator.generate_route_for(*endpoints, RouteOptions(flight_rules="IFR"))
        assert airways == ifr
        assert airways[2].airway == "V1"

    def test_airways_does_not_mutate_options(self, generator, endpoints):
        options = RouteOptions(strategy="airways")
        generator.generate_route_for(*endpoints, options)
        assert options.flight_rules == "VFR"

    def test_weather_behaves_like_direct(self, generator, endpoints):
        for rules in ("VFR", "IFR"):
            weather = generator.generate_route_for(
                *endpoints, RouteOptions(strategy="weather", flight_rules=rules)
            )
            direct = generator.generate_route_for(*endpoints, RouteOptions(flight_rules=rules))
            assert weather == direct

    def test_terrain_at_least_as_dense_as_direct(self, generator, endpoints):
        terrain = generator.generate_route_for(*endpoints, RouteOptions(strategy="terrain"))
        direct = generator.generate_route_for(*endpoints, RouteOptions())
        assert len(terrain) >= len(direct)
        assert all(w.airway is None for w in terrain)

    def test_terrain_never_widens_segments(self, generator, airport_query):
        dep, dest = airport_query.resolve("X"), airport_query.resolve("Y")
        terrain = generator.generate_route_for(dep, dest, RouteOptions(strategy="terrain", max_segment_nm=100))
        assert _ids(terrain) == ["XXXX", "MID", "YYYY"]

    def test_ifr_falls_back_when_airways_disconnected(self, generator, airport_query):
        dep, dest = airport_query.resolve("ISOA"), airport_query.resolve("DESA")
        ifr = generator.generate_route_for(dep, dest, RouteOptions(flight_rules="IFR"))
        vfr = generator.generate_route_for(dep, dest, RouteOptions())
        assert ifr == vfr
        assert ifr[0].identifier == "ISOA" and ifr[-1].identifier == "DESA"

    def test_ifr_falls_back_without_nearby_airways(self, generator, airport_query):
        dep, dest = airport_query.resolve("XXXX"), airport_query.resolve("YYYY")
        route = generator.generate_route_for(dep, dest, RouteOptions(flight_rules="IFR", max_segment_nm=30))
        assert _ids(route) == ["XXXX", "MID", "YYYY"]


class TestRouteInvariants:
    @pytest.mark.parametrize("dep, dest", PAIRS)
    @pytest.mark.parametrize("options", OPTION_SETS, ids=lambda o: f"{o.strategy}-{o.flight_rules}-{o.max_segment_nm:g}")
    def test_invariants(self, generator, airport_query, dep, dest, options):
        route = generator.generate_route_for(
            airport_query.resolve(dep), airport_query.resolve(dest), options
        )
        _assert_invariants(route, dep, dest)

    @pytest.mark.parametrize("dep, dest", PAIRS)
    def test_deterministic(self, generator, airport_query, dep, dest):
        a, b = airport_query.resolve(dep), airport_query.resolve(dest)
        options = RouteOptions(flight_rules="IFR", max_segment_nm=30)
        assert generator.generate_route_for(a, b, options) == generator.generate_route_for(a, b, options)

    @pytest.mark.parametrize("dep, dest", PAIRS)
    def test_frontier_choice_does_not_change_routes(self, navdata_manager, generator, airport_query, dep, dest):
        heap_generator = RouteGenerator.from_manager(navdata_manager, frontier_factory=HeapFrontier)
        a, b = airport_query.resolve(dep), airport_query.resolve(dest)
        options = RouteOptions(strategy="airways")
        assert heap_generator.generate_route_for(a, b, options) == generator.generate_route_for(a, b, options)
