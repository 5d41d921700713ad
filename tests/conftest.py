"""Shared fixtures: a small navigation reference database built with the real ETL.

Geography (all identifiers are fictitious):

- Equator corridor: XXXX (0N 0E) to YYYY (0N 1E), VOR MID at the midpoint.
- Airport fallback: PAAA to PBBB along 10N, ICAO airport PMID and local
  airport 00P near the midpoint, no navaids.
- Spacing: QAAA to QBBB along 20N, NDB QNB 3 NM from QAAA.
- Airways along 40N: DEPA (101W) to DESA (95W) on V1 AAA-BBB-CCC-DDD,
  NDB NNN on track but off the airways.  CCC is published only on the
  airway.  V9 EEE-FFF near ISOA is disconnected from V1.
"""

from __future__ import annotations

from pathlib import Path

import pytest

from navroute.etl.navdata_builder import NavDataBuilder
from navroute.etl.navdata_parser import parse_navdata
from navroute.persistence.navdata.airport_query import AirportQueryService
from navroute.persistence.navdata.airway_query import AirwayQueryService
from navroute.persistence.navdata.db_manager import NavDataManager
from navroute.persistence.navdata.navaid_query import NavaidQueryService
from navroute.services.routing.route_generator import RouteGenerator


def _airport(icao, lat, lon, name="", aliases=(), kind="small_airport"):
    return {
        "icao": icao,
        "name": name or icao,
        "latitude_deg": lat,
        "longitude_deg": lon,
        "elevation_ft": 100,
        "municipality": None,
        "type": kind,
        "aliases": list(aliases),
    }


def _navaid(ident, navaid_type, lat, lon, name="", frequency_khz=None):
    return {
        "identifier": ident,
        "name": name or ident,
        "type": navaid_type,
        "latitude_deg": lat,
        "longitude_deg": lon,
        "frequency_khz": frequency_khz,
    }


def _airway(airway_id, fixes, mea=None):
    return {
        "id": airway_id,
        "type": "VICTOR",
        "segments": [
            {
                "fix_identifier": ident,
                "sequence": seq,
                "latitude_deg": lat,
                "longitude_deg": lon,
                "minimum_altitude": mea,
            }
            for seq, (ident, lat, lon) in enumerate(fixes, start=1)
        ],
    }


AIRPORTS = {
    "XXXX": _airport("XXXX", 0.0, 0.0, "Equator West", aliases=["X"]),
    "YYYY": _airport("YYYY", 0.0, 1.0, "Equator East", aliases=["Y", "yy1"]),
    "PAAA": _airport("PAAA", 10.0, 0.0),
    "PBBB": _airport("PBBB", 10.0, 1.0),
    "PMID": _airport("PMID", 10.0, 0.55, "Midfield", aliases=["PMD"]),
    "00P": _airport("00P", 10.0, 0.5, "Local Strip"),
    "QAAA": _airport("QAAA", 20.0, 0.0),
    "QBBB": _airport("QBBB", 20.0, 0.7),
    "DEPA": _airport("DEPA", 40.0, -101.0, "Departure Field", aliases=["DPA"]),
    "DESA": _airport("DESA", 40.0, -95.0, "Destination Field", aliases=["DSA"]),
    "ISOA": _airport("ISOA", 45.0, -100.3, "Isolated Field"),
}

NAVAIDS = {
    "MID": _navaid("MID", "VOR", 0.0, 0.5, "Midpoint", 113900),
    "QNB": _navaid("QNB", "NDB", 20.0, 0.05, "Q Beacon", 350),
    "AAA": _navaid("AAA", "VOR", 40.0, -100.5, "Alpha", 112000),
    "BBB": _navaid("BBB", "FIX", 40.3, -98.5, "Bravo"),
    "NNN": _navaid("NNN", "NDB", 40.0, -97.0, "November", 400),
    "DDD": _navaid("DDD", "VOR-DME", 40.0, -95.5, "Delta", 115300),
}

AIRWAYS = {
    "V1": _airway(
        "V1",
        [
            ("AAA", 40.0, -100.5),
            ("BBB", 40.3, -98.5),
            ("CCC", 39.8, -97.5),
            ("DDD", 40.0, -95.5),
        ],
        mea=4000,
    ),
    "V9": _airway("V9", [("EEE", 45.0, -100.0), ("FFF", 45.0, -99.5)]),
}


@pytest.fixture
def navdata_exports() -> tuple[dict, dict, dict]:
    return AIRPORTS, NAVAIDS, AIRWAYS


@pytest.fixture
def navdata_db(tmp_path: Path, navdata_exports) -> Path:
    """Reference database built through the parser and builder."""
    return NavDataBuilder(tmp_path / "navdata_test.db").build(parse_navdata(*navdata_exports))


@pytest.fixture
def navdata_manager(navdata_db: Path) -> NavDataManager:
    manager = NavDataManager()
    manager.load(navdata_db, cycle="test")
    return manager


@pytest.fixture
def airport_query(navdata_manager) -> AirportQueryService:
    return AirportQueryService(navdata_manager)


@pytest.fixture
def navaid_query(navdata_manager) -> NavaidQueryService:
    return NavaidQueryService(navdata_manager)


@pytest.fixture
def airway_query(navdata_manager) -> AirwayQueryService:
    return AirwayQueryService(navdata_manager)


@pytest.fixture
def generator(navdata_manager) -> RouteGenerator:
    return RouteGenerator.from_manager(navdata_manager)
