"""Navigation reference database manager — load, serve read-only connections."""

from __future__ import annotations

import logging
import sqlite3
from pathlib import Path

from navroute.persistence.errors import NavDataNotReadyError

logger = logging.getLogger(__name__)

REQUIRED_TABLES = ("airport", "airport_alias", "navaid", "airway_fix")


class NavDataManager:
    """Manages the read-only navigation reference database lifecycle.

    - ``load()`` points the manager at an AIRAC cycle database built by
      ``navroute.etl``.
    - Opens read-only connections (each caller gets its own; no locks).
    - Constructed explicitly and injected into query services, so tests
      can load small fixture databases.
    """

    def __init__(self) -> None:
        self._current_cycle: str | None = None
        self._local_path: Path | None = None

    # ------------------------------------------------------------------
    # Properties
    # ------------------------------------------------------------------

    @property
    def current_cycle(self) -> str | None:
        return self._current_cycle

    @property
    def db_path(self) -> Path | None:
        return self._local_path

    @property
    def is_ready(self) -> bool:
        return self._local_path is not None and self._local_path.exists()

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def load(self, path: Path, cycle: str = "local") -> None:
        """Use *path* as the reference database for *cycle*.

        Raises ``FileNotFoundError`` if the file is missing and
        ``NavDataNotReadyError`` if it lacks the reference tables.
        """
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Navigation database not found: {path}")

        conn = sqlite3.connect(f"file:{path}?mode=ro", uri=True)
        try:
            rows = conn.execute(
                "SELECT name FROM sqlite_master WHERE type='table'"
            ).fetchall()
        finally:
            conn.close()

        missing = set(REQUIRED_TABLES) - {r[0] for r in rows}
        if missing:
            raise NavDataNotReadyError(
                f"Navigation database {path} is missing tables: {', '.join(sorted(missing))}"
            )

        self._local_path = path
        self._current_cycle = cycle
        logger.info("Loaded navigation database %s (cycle %s)", path, cycle)

    def unload(self) -> None:
        self._local_path = None
        self._current_cycle = None

    # ------------------------------------------------------------------
    # Connection
    # ------------------------------------------------------------------

    def get_connection(self) -> sqlite3.Connection:
        """Open a new read-only SQLite connection.

        Each call returns a fresh connection. The caller is responsible
        for closing it (use ``try/finally``).
        """
        if not self.is_ready:
            raise NavDataNotReadyError(
                "Navigation database not available. Call load() first."
            )

        conn = sqlite3.connect(f"file:{self._local_path}?mode=ro", uri=True)
        conn.row_factory = sqlite3.Row
        return conn
