"""Unit tests for NavDataManager."""

from __future__ import annotations

import sqlite3
from pathlib import Path

import pytest

from navroute.persistence.errors import NavDataNotReadyError
from navroute.persistence.navdata.db_manager import NavDataManager


class TestNavDataManager:
    def test_not_ready_by_default(self):
        manager = NavDataManager()
        assert not manager.is_ready
        assert manager.current_cycle is None
        assert manager.db_path is None

    def test_get_connection_raises_when_not_ready(self):
        manager = NavDataManager()
        with pytest.raises(NavDataNotReadyError):
            manager.get_connection()

    def test_load_missing_file_raises(self, tmp_path: Path):
        manager = NavDataManager()
        with pytest.raises(FileNotFoundError):
            manager.load(tmp_path / "nonexistent.db")
        assert not manager.is_ready

    def test_load_rejects_db_without_reference_tables(self, tmp_path: Path):
        db_path = tmp_path / "other.db"
        conn = sqlite3.connect(str(db_path))
        conn.execute("CREATE TABLE airport (icao TEXT)")
        conn.close()

        manager = NavDataManager()
        with pytest.raises(NavDataNotReadyError, match="navaid"):
            manager.load(db_path)
        assert not manager.is_ready

    def test_load_sets_cycle_and_path(self, navdata_db: Path):
        manager = NavDataManager()
        manager.load(navdata_db, cycle="2604")
        assert manager.is_ready
        assert manager.current_cycle == "2604"
        assert manager.db_path == navdata_db

    def test_connection_is_read_only(self, navdata_manager):
        conn = navdata_manager.get_connection()
        try:
            with pytest.raises(sqlite3.OperationalError):
                conn.execute("DELETE FROM airport")
        finally:
            conn.close()

    def test_connection_rows_by_name(self, navdata_manager):
        conn = navdata_manager.get_connection()
        try:
            row = conn.execute("SELECT icao FROM airport WHERE icao = 'DEPA'").fetchone()
        finally:
            conn.close()
        assert row["icao"] == "DEPA"

    def test_unload(self, navdata_manager):
        navdata_manager.unload()
        assert not navdata_manager.is_ready
        with pytest.raises(NavDataNotReadyError):
            navdata_manager.get_connection()
