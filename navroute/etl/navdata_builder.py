"""Build the navigation reference SQLite database from parsed navigation data."""

from __future__ import annotations

import logging
import sqlite3
from pathlib import Path

from navroute.etl.navdata_parser import ParsedNavData

logger = logging.getLogger(__name__)


class NavDataBuilder:
    """Builds the reference database used by the navdata query services."""

    def __init__(self, db_path: Path):
        self._db_path = db_path

    def build(self, data: ParsedNavData) -> Path:
        """Build the complete reference database.

        Steps:
        1. Create tables
        2. Insert parsed data (primary identifiers win over aliases)
        3. Create coordinate and identifier indexes
        """
        if self._db_path.exists():
            self._db_path.unlink()

        conn = sqlite3.connect(str(self._db_path))
        try:
            self._create_tables(conn)
            self._insert_data(conn, data)
            self._create_indexes(conn)
            conn.commit()
            conn.execute("VACUUM")
        finally:
            conn.close()

        size = self._db_path.stat().st_size
        logger.info("Built navigation DB: %s (%d bytes)", self._db_path, size)
        return self._db_path

    def _create_tables(self, conn: sqlite3.Connection) -> None:
        conn.executescript("""
            CREATE TABLE airport (
                icao TEXT PRIMARY KEY,
                name TEXT,
                latitude REAL NOT NULL,
                longitude REAL NOT NULL,
                elevation_ft INTEGER,
                municipality TEXT,
                airport_type TEXT
            );

            CREATE TABLE airport_alias (
                alias TEXT PRIMARY KEY,
                icao TEXT NOT NULL REFERENCES airport(icao),
                position INTEGER NOT NULL
            );

            CREATE TABLE navaid (
                identifier TEXT PRIMARY KEY,
                navaid_type TEXT NOT NULL,
                name TEXT,
                latitude REAL NOT NULL,
                longitude REAL NOT NULL,
                frequency_khz REAL
            );

            CREATE TABLE airway_fix (
                airway_id TEXT NOT NULL,
                airway_type TEXT,
                sequence INTEGER NOT NULL,
                fix_identifier TEXT NOT NULL,
                latitude REAL NOT NULL,
                longitude REAL NOT NULL,
                minimum_altitude_ft INTEGER,
                PRIMARY KEY (airway_id, sequence)
            );
        """)

    def _insert_data(self, conn: sqlite3.Connection, data: ParsedNavData) -> None:
        conn.executemany(
            """
            INSERT OR IGNORE INTO airport
                (icao, name, latitude, longitude, elevation_ft, municipality, airport_type)
            VALUES
                (:icao, :name, :latitude, :longitude, :elevation_ft, :municipality, :airport_type)
            """,
            data.airports,
        )

        primaries = {ad["icao"] for ad in data.airports}
        alias_rows = [
            {"alias": alias, "icao": ad["icao"], "position": pos}
            for ad in data.airports
            for pos, alias in enumerate(ad.get("aliases", []))
            if alias not in primaries
        ]
        conn.executemany(
            "INSERT OR REPLACE INTO airport_alias (alias, icao, position) VALUES (:alias, :icao, :position)",
            alias_rows,
        )

        conn.executemany(
            """
            INSERT OR IGNORE INTO navaid
                (identifier, navaid_type, name, latitude, longitude, frequency_khz)
            VALUES
                (:identifier, :navaid_type, :name, :latitude, :longitude, :frequency_khz)
            """,
            data.navaids,
        )

        conn.executemany(
            """
            INSERT OR IGNORE INTO airway_fix
                (airway_id, airway_type, sequence, fix_identifier, latitude, longitude,
                 minimum_altitude_ft)
            VALUES
                (:airway_id, :airway_type, :sequence, :fix_identifier, :latitude, :longitude,
                 :minimum_altitude_ft)
            """,
            data.airway_fixes,
        )

        logger.info(
            "Inserted %d airports (%d aliases), %d navaids, %d airway fixes",
            len(data.airports),
            len(alias_rows),
            len(data.navaids),
            len(data.airway_fixes),
        )

    def _create_indexes(self, conn: sqlite3.Connection) -> None:
        conn.executescript("""
            CREATE INDEX idx_airport_lat_lon ON airport(latitude, longitude);
            CREATE INDEX idx_airport_alias_icao ON airport_alias(icao);
            CREATE INDEX idx_navaid_lat_lon ON navaid(latitude, longitude);
            CREATE INDEX idx_airway_fix_ident ON airway_fix(fix_identifier);
        """)
