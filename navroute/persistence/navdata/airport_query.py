"""Airport queries on the navigation reference database → Airport contracts."""

from __future__ import annotations

import logging
import sqlite3

from navroute.contracts.common import GeoPoint
from navroute.contracts.navdata import Airport
from navroute.persistence.navdata.db_manager import NavDataManager
from navroute.services.geodesy import bounding_box, haversine_nm

logger = logging.getLogger(__name__)

SEARCH_LIMIT = 20


def _escape_like(text: str) -> str:
    return text.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


class AirportQueryService:
    """Read-only airport lookups.

    Any identifier (ICAO, IATA, GPS code, local code) resolves to one
    canonical record.  Primary identifiers take precedence over aliases.
    """

    def __init__(self, manager: NavDataManager):
        self._manager = manager

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def resolve(self, identifier: str) -> Airport | None:
        """Lookup an airport by primary identifier or alias (full record)."""
        ident = identifier.strip().upper()
        if not ident:
            return None

        conn = self._manager.get_connection()
        try:
            row = conn.execute("SELECT * FROM airport WHERE icao = ?", (ident,)).fetchone()
            if row is None:
                alias_row = conn.execute(
                    "SELECT icao FROM airport_alias WHERE alias = ?", (ident,)
                ).fetchone()
                if alias_row is None:
                    logger.debug("No airport for identifier %s", ident)
                    return None
                row = conn.execute(
                    "SELECT * FROM airport WHERE icao = ?", (alias_row["icao"],)
                ).fetchone()
                if row is None:
                    return None

            return self._row_to_airport(row, self._aliases(conn, row["icao"]))
        finally:
            conn.close()

    def find_near(
        self,
        point: GeoPoint,
        radius_nm: float,
        max_results: int | None = 5,
        icao_only: bool = False,
    ) -> list[Airport]:
        """Airports within *radius_nm* of *point*, nearest first (no aliases).

        ``max_results=None`` returns every match.  With ``icao_only`` only
        airports whose primary identifier is a 4-character ICAO code are
        considered, before the cap is applied.
        """
        if radius_nm <= 0 or (max_results is not None and max_results <= 0):
            return []

        conn = self._manager.get_connection()
        try:
            rows = self._rows_in_box(conn, point, radius_nm, icao_only)
        finally:
            conn.close()

        candidates: list[tuple[float, Airport]] = []
        for r in rows:
            dist = haversine_nm(point.latitude, point.longitude, r["latitude"], r["longitude"])
            if dist <= radius_nm:
                candidates.append((dist, self._row_to_airport(r, [])))

        candidates.sort(key=lambda c: (c[0], c[1].icao))
        if max_results is not None:
            candidates = candidates[:max_results]
        return [ad for _, ad in candidates]

    def search(self, query: str, limit: int = SEARCH_LIMIT) -> list[Airport]:
        """Search airports by identifier, alias, name or municipality.

        Three passes, each ordered by ICAO identifier:

        1. exact primary identifier or alias
        2. primary identifier or alias starting with the query
        3. name or municipality containing the query (case-insensitive)

        Earlier passes rank first and an airport appears once.
        """
        term = query.strip()
        if not term or limit <= 0:
            return []
        ident = term.upper()
        pattern = _escape_like(ident)

        conn = self._manager.get_connection()
        try:
            phases = [
                (
                    """
                    SELECT * FROM airport WHERE icao = ?
                       OR icao IN (SELECT icao FROM airport_alias WHERE alias = ?)
                    ORDER BY icao
                    """,
                    (ident, ident),
                ),
                (
                    """
                    SELECT * FROM airport WHERE icao LIKE ? ESCAPE '\\'
                       OR icao IN (
                           SELECT icao FROM airport_alias WHERE alias LIKE ? ESCAPE '\\'
                       )
                    ORDER BY icao
                    """,
                    (pattern + "%", pattern + "%"),
                ),
                (
                    """
                    SELECT * FROM airport
                    WHERE upper(name) LIKE ? ESCAPE '\\'
                       OR upper(coalesce(municipality, '')) LIKE ? ESCAPE '\\'
                    ORDER BY icao
                    """,
                    ("%" + pattern + "%", "%" + pattern + "%"),
                ),
            ]

            seen: set[str] = set()
            rows: list[sqlite3.Row] = []
            for sql, params in phases:
                for row in conn.execute(sql, params).fetchall():
                    if row["icao"] in seen:
                        continue
                    seen.add(row["icao"])
                    rows.append(row)
                    if len(rows) >= limit:
                        break
                if len(rows) >= limit:
                    break

            results = [self._row_to_airport(r, self._aliases(conn, r["icao"])) for r in rows]
        finally:
            conn.close()

        logger.debug("Airport search %r: %d results", term, len(results))
        return results

    def count(self) -> int:
        conn = self._manager.get_connection()
        try:
            return conn.execute("SELECT COUNT(*) FROM airport").fetchone()[0]
        finally:
            conn.close()

    # ------------------------------------------------------------------
    # Private
    # ------------------------------------------------------------------

    @staticmethod
    def _aliases(conn: sqlite3.Connection, icao: str) -> list[str]:
        return [
            r["alias"]
            for r in conn.execute(
                "SELECT alias FROM airport_alias WHERE icao = ? ORDER BY position",
                (icao,),
            ).fetchall()
        ]

    @staticmethod
    def _rows_in_box(
        conn: sqlite3.Connection,
        point: GeoPoint,
        radius_nm: float,
        icao_only: bool = False,
    ) -> list[sqlite3.Row]:
        lat_min, lat_max, lon_min, lon_max = bounding_box([point], radius_nm)
        icao_clause = " AND length(icao) = 4" if icao_only else ""
        if lon_min is None:
            return conn.execute(
                "SELECT * FROM airport WHERE latitude BETWEEN ? AND ?" + icao_clause,
                (lat_min, lat_max),
            ).fetchall()
        return conn.execute(
            """
            SELECT * FROM airport
            WHERE latitude BETWEEN ? AND ?
              AND longitude BETWEEN ? AND ?
            """
            + icao_clause,
            (lat_min, lat_max, lon_min, lon_max),
        ).fetchall()

    @staticmethod
    def _row_to_airport(row: sqlite3.Row, aliases: list[str]) -> Airport:
        return Airport(
            icao=row["icao"],
            aliases=aliases,
            name=row["name"] or "",
            latitude=row["latitude"],
            longitude=row["longitude"],
            elevation_ft=int(row["elevation_ft"]) if row["elevation_ft"] is not None else None,
            municipality=row["municipality"],
            airport_type=row["airport_type"],
        )
