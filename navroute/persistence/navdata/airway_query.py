"""Airway queries on the navigation reference database → Airway contracts + NavGraph."""

from __future__ import annotations

import logging
from itertools import groupby
from pathlib import Path

from navroute.contracts.common import GeoPoint
from navroute.contracts.navdata import Airway, AirwayFix, ClosestFix, GraphEdge, NavGraph
from navroute.persistence.navdata.db_manager import NavDataManager
from navroute.services.geodesy import Located, haversine_nm

logger = logging.getLogger(__name__)


class AirwayQueryService:
    """Read-only airway lookups and airway graph construction.

    The graph is built once per loaded reference database and reused:
    reference data is immutable for the lifetime of an AIRAC cycle.
    """

    def __init__(self, manager: NavDataManager):
        self._manager = manager
        self._graph: NavGraph | None = None
        self._graph_key: tuple[Path | None, str | None] | None = None

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def get_airway(self, airway_id: str) -> Airway | None:
        conn = self._manager.get_connection()
        try:
            rows = conn.execute(
                """
                SELECT airway_id, airway_type, sequence, fix_identifier, latitude, longitude,
                       minimum_altitude_ft
                FROM airway_fix
                WHERE airway_id = ?
                ORDER BY sequence
                """,
                (airway_id.strip().upper(),),
            ).fetchall()
        finally:
            conn.close()

        if not rows:
            return None
        return Airway(
            id=rows[0]["airway_id"],
            airway_type=rows[0]["airway_type"],
            fixes=[
                AirwayFix(
                    fix_identifier=r["fix_identifier"],
                    latitude=r["latitude"],
                    longitude=r["longitude"],
                    sequence=r["sequence"],
                    minimum_altitude_ft=r["minimum_altitude_ft"],
                )
                for r in rows
            ],
        )

    def build_graph(self) -> NavGraph:
        """Bidirectional adjacency graph of all airways.

        Each pair of consecutive fixes on an airway contributes one edge in
        each direction, weighted by great-circle distance and labelled with
        the airway ID.  The returned graph is shared: do not mutate it.
        """
        key = (self._manager.db_path, self._manager.current_cycle)
        if self._graph is not None and self._graph_key == key:
            return self._graph

        conn = self._manager.get_connection()
        try:
            rows = conn.execute(
                """
                SELECT airway_id, sequence, fix_identifier, latitude, longitude
                FROM airway_fix
                ORDER BY airway_id, sequence
                """
            ).fetchall()
        finally:
            conn.close()

        graph: NavGraph = {}
        airway_count = 0
        for airway_id, fixes in groupby(rows, key=lambda r: r["airway_id"]):
            airway_count += 1
            fixes = list(fixes)
            for frm, to in zip(fixes, fixes[1:]):
                if frm["fix_identifier"] == to["fix_identifier"]:
                    continue
                dist = haversine_nm(
                    frm["latitude"], frm["longitude"], to["latitude"], to["longitude"]
                )
                graph.setdefault(frm["fix_identifier"], []).append(
                    GraphEdge(to=to["fix_identifier"], distance_nm=dist, airway_id=airway_id)
                )
                graph.setdefault(to["fix_identifier"], []).append(
                    GraphEdge(to=frm["fix_identifier"], distance_nm=dist, airway_id=airway_id)
                )

        logger.info(
            "Built airway graph: %d airways, %d nodes, %d directed edges",
            airway_count,
            len(graph),
            sum(len(edges) for edges in graph.values()),
        )
        self._graph = graph
        self._graph_key = key
        return graph

    def get_fix_coordinates(self, identifier: str) -> GeoPoint | None:
        """Coordinates of a fix as published on any airway."""
        conn = self._manager.get_connection()
        try:
            row = conn.execute(
                """
                SELECT latitude, longitude FROM airway_fix
                WHERE fix_identifier = ?
                ORDER BY airway_id, sequence
                LIMIT 1
                """,
                (identifier.strip().upper(),),
            ).fetchone()
        finally:
            conn.close()
        if row is None:
            return None
        return GeoPoint(latitude=row["latitude"], longitude=row["longitude"])

    def find_closest_fix(self, point: Located) -> ClosestFix | None:
        """Airway fix nearest to *point*, over every airway (ties: first published)."""
        conn = self._manager.get_connection()
        try:
            rows = conn.execute(
                """
                SELECT fix_identifier, latitude, longitude FROM airway_fix
                ORDER BY airway_id, sequence
                """
            ).fetchall()
        finally:
            conn.close()

        closest: ClosestFix | None = None
        for r in rows:
            dist = haversine_nm(point.latitude, point.longitude, r["latitude"], r["longitude"])
            if closest is None or dist < closest.distance_nm:
                closest = ClosestFix(
                    fix_identifier=r["fix_identifier"],
                    latitude=r["latitude"],
                    longitude=r["longitude"],
                    distance_nm=dist,
                )
        return closest
