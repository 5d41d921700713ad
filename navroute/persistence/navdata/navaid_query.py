"""Navaid queries on the navigation reference database → Navaid contracts."""

from __future__ import annotations

import sqlite3

from navroute.contracts.navdata import Navaid
from navroute.persistence.navdata.db_manager import NavDataManager
from navroute.services.geodesy import (
    Located,
    bounding_box,
    haversine_nm,
    point_to_segment_nm,
)


class NavaidQueryService:
    """Read-only VOR / NDB / fix lookups: by identifier, radius, or corridor."""

    def __init__(self, manager: NavDataManager):
        self._manager = manager

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def get(self, identifier: str) -> Navaid | None:
        conn = self._manager.get_connection()
        try:
            row = conn.execute(
                "SELECT * FROM navaid WHERE identifier = ?",
                (identifier.strip().upper(),),
            ).fetchone()
        finally:
            conn.close()
        return self._row_to_navaid(row) if row is not None else None

    def find_near(self, point: Located, radius_nm: float) -> list[Navaid]:
        """Navaids within *radius_nm* of *point*, nearest first."""
        if radius_nm <= 0:
            return []

        conn = self._manager.get_connection()
        try:
            rows = self._rows_in_box(conn, [point], radius_nm)
        finally:
            conn.close()

        results: list[tuple[float, Navaid]] = []
        for r in rows:
            dist = haversine_nm(point.latitude, point.longitude, r["latitude"], r["longitude"])
            if dist <= radius_nm:
                results.append((dist, self._row_to_navaid(r)))

        results.sort(key=lambda x: (x[0], x[1].identifier))
        return [nav for _, nav in results]

    def find_along_path(
        self,
        points: list[Located],
        corridor_width_nm: float,
    ) -> list[Navaid]:
        """Navaids within *corridor_width_nm* of the polyline through *points*.

        Each navaid appears once, in encounter order: by path segment, then
        by identifier within a segment.
        """
        if len(points) < 2 or corridor_width_nm <= 0:
            return []

        conn = self._manager.get_connection()
        try:
            rows = self._rows_in_box(conn, points, corridor_width_nm)
        finally:
            conn.close()

        candidates = [self._row_to_navaid(r) for r in rows]
        results: list[Navaid] = []
        seen: set[str] = set()

        for start, end in zip(points, points[1:]):
            for navaid in candidates:
                if navaid.identifier in seen:
                    continue
                if point_to_segment_nm(navaid, start, end) <= corridor_width_nm:
                    results.append(navaid)
                    seen.add(navaid.identifier)

        return results

    def statistics(self) -> dict[str, int]:
        """Navaid count per type."""
        conn = self._manager.get_connection()
        try:
            rows = conn.execute(
                "SELECT navaid_type, COUNT(*) AS n FROM navaid GROUP BY navaid_type"
            ).fetchall()
        finally:
            conn.close()
        return {r["navaid_type"]: r["n"] for r in rows}

    # ------------------------------------------------------------------
    # Private
    # ------------------------------------------------------------------

    @staticmethod
    def _rows_in_box(
        conn: sqlite3.Connection, points: list[Located], buffer_nm: float
    ) -> list[sqlite3.Row]:
        lat_min, lat_max, lon_min, lon_max = bounding_box(points, buffer_nm)
        if lon_min is None:
            return conn.execute(
                """
                SELECT * FROM navaid
                WHERE latitude BETWEEN ? AND ?
                ORDER BY identifier
                """,
                (lat_min, lat_max),
            ).fetchall()
        return conn.execute(
            """
            SELECT * FROM navaid
            WHERE latitude BETWEEN ? AND ?
              AND longitude BETWEEN ? AND ?
            ORDER BY identifier
            """,
            (lat_min, lat_max, lon_min, lon_max),
        ).fetchall()

    @staticmethod
    def _row_to_navaid(row: sqlite3.Row) -> Navaid:
        return Navaid(
            identifier=row["identifier"],
            navaid_type=row["navaid_type"],
            name=row["name"] or "",
            latitude=row["latitude"],
            longitude=row["longitude"],
            frequency_khz=row["frequency_khz"],
        )
