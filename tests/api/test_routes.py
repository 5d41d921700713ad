"""Tests for the route generation endpoint."""

from __future__ import annotations

import pytest


class TestGenerateRouteAPI:
    async def test_vfr_route(self, client):
        resp = await client.post(
            "/api/routes/generate",
            json={"departure": "X", "destination": "yyyy", "options": {"max_segment_nm": 30}},
        )
        assert resp.status_code == 200
        data = resp.json()
        assert data["departure"] == "XXXX"
        assert data["destination"] == "YYYY"
        assert [w["identifier"] for w in data["waypoints"]] == ["XXXX", "MID", "YYYY"]
        assert data["waypoints"][1]["kind"] == "vor"
        assert "airway" not in data["waypoints"][1]
        assert data["options"] == {
            "strategy": "direct",
            "flight_rules": "VFR",
            "max_segment_nm": 30.0,
            "corridor_width_nm": 10.0,
        }

    async def test_distances(self, client):
        resp = await client.post(
            "/api/routes/generate",
            json={"departure": "XXXX", "destination": "YYYY", "options": {"max_segment_nm": 30}},
        )
        data = resp.json()
        assert data["total_distance_nm"] == pytest.approx(60.0, abs=0.1)
        assert data["route_distance_nm"] == pytest.approx(data["total_distance_nm"], abs=0.1)

    async def test_legs(self, client):
        resp = await client.post(
            "/api/routes/generate",
            json={"departure": "XXXX", "destination": "YYYY", "options": {"max_segment_nm": 30}},
        )
        legs = resp.json()["legs"]
        assert [(leg["from_identifier"], leg["to_identifier"]) for leg in legs] == [
            ("XXXX", "MID"),
            ("MID", "YYYY"),
        ]
        assert [leg["bearing_deg"] for leg in legs] == [90.0, 90.0]
        assert [leg["distance_nm"] for leg in legs] == [30.0, 30.0]

    async def test_ifr_route_carries_airways(self, client):
        resp = await client.post(
            "/api/routes/generate",
            json={"departure": "DPA", "destination": "DSA", "options": {"strategy": "airways"}},
        )
        assert resp.status_code == 200
        waypoints = resp.json()["waypoints"]
        assert [w["identifier"] for w in waypoints] == ["DEPA", "AAA", "BBB", "CCC", "DDD", "DESA"]
        assert [w.get("airway") for w in waypoints[2:5]] == ["V1", "V1", "V1"]

    async def test_default_options(self, client):
        resp = await client.post("/api/routes/generate", json={"departure": "DEPA", "destination": "DESA"})
        assert resp.status_code == 200
        assert resp.json()["options"]["strategy"] == "direct"

    async def test_unknown_airport(self, client):
        resp = await client.post("/api/routes/generate", json={"departure": "ZZZZ", "destination": "DESA"})
        assert resp.status_code == 404
        assert "ZZZZ" in resp.json()["detail"]

    async def test_invalid_options(self, client):
        resp = await client.post(
            "/api/routes/generate",
            json={"departure": "DEPA", "destination": "DESA", "options": {"max_segment_nm": -5}},
        )
        assert resp.status_code == 422

    async def test_unknown_strategy(self, client):
        resp = await client.post(
            "/api/routes/generate",
            json={"departure": "DEPA", "destination": "DESA", "options": {"strategy": "scenic"}},
        )
        assert resp.status_code == 422

    async def test_not_loaded(self, unready_client):
        resp = await unready_client.post(
            "/api/routes/generate", json={"departure": "DEPA", "destination": "DESA"}
        )
        assert resp.status_code == 503
