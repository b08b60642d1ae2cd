"""SQLite persistence for cumulative player experience.

All disk I/O goes through :class:`ExperienceStore`.  The store owns a single
connection that the bot opens once the gateway reports readiness and closes on
shutdown.  Outside that window, or after a database error, the store runs in
degraded mode: reads report ``0`` and writes are dropped, so a persistence
problem can never break the kill-event pipeline or a command handler.
"""

from __future__ import annotations

import logging
import os
import sqlite3
import threading
from pathlib import Path
from .models import INT32_MAX

log = logging.getLogger(__name__)

TABLE_NAME = "PlayerExp"
DEFAULT_DATABASE_FILE = "Leveling.sqlite"

SCHEMA_SQL = f"""
CREATE TABLE IF NOT EXISTS {TABLE_NAME} (
    UserKey VARCHAR(64) NOT NULL PRIMARY KEY,
    Exp INTEGER NOT NULL DEFAULT 0
)
"""


def _is_site_packages(path: Path) -> bool:
    """Return ``True`` if ``path`` is inside a site/dist-packages directory."""

    normalized = {part.lower() for part in path.parts}
    return "site-packages" in normalized or "dist-packages" in normalized


def resolve_storage_root(package_root: Path) -> Path:
    """Determine where the experience database should live.

    Data stays alongside the source tree when the project runs from a checkout.
    When the package is installed into a site-packages directory (usually
    read-only and replaced on upgrades) the working directory is used instead,
    and ``LEVEL_DATA_ROOT`` overrides both.
    """

    override = os.getenv("LEVEL_DATA_ROOT")
    if override:
        return Path(override).expanduser().resolve()

    if _is_site_packages(package_root) or not os.access(package_root, os.W_OK):
        return Path.cwd().resolve()

    return package_root.resolve()


# ---------------------------------------------------------------------------
# ExperienceStore implementation
# ---------------------------------------------------------------------------


def _clamp_exp(value: int) -> int:
    return max(0, min(int(value), INT32_MAX))


class ExperienceStore:
    """Durable ``UserKey -> Exp`` mapping with get/upsert semantics."""

    def __init__(self, path: Path | str) -> None:
        self.path = Path(path)
        self._connection: sqlite3.Connection | None = None
        self._lock = threading.RLock()

    @property
    def is_open(self) -> bool:
        return self._connection is not None

    def open(self) -> bool:
        """Connect and create the ``PlayerExp`` table if it is missing.

        Returns ``False`` and leaves the store degraded when the database cannot
        be initialised; the failure is logged rather than raised.
        """

        if self._connection is not None:
            return True
        connection: sqlite3.Connection | None = None
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            connection = sqlite3.connect(self.path, check_same_thread=False)
            with connection:
                connection.execute(SCHEMA_SQL)
        except (sqlite3.Error, OSError):
            log.exception("Failed to initialise experience database at %s", self.path)
            if connection is not None:
                connection.close()
            return False
        self._connection = connection
        log.info("Experience database initialised at %s", self.path)
        return True

    def close(self) -> None:
        with self._lock:
            connection, self._connection = self._connection, None
        if connection is not None:
            connection.close()
            log.info("Experience database closed")

    def __enter__(self) -> "ExperienceStore":
        self.open()
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def _read(self, key: str) -> int | None:
        # None when the store is unavailable or the SELECT fails; 0 when absent.
        connection = self._connection
        if connection is None:
            log.debug("Experience store unavailable; cannot read %s", key)
            return None
        try:
            row = connection.execute(
                f"SELECT Exp FROM {TABLE_NAME} WHERE UserKey = ?", (key,)
            ).fetchone()
        except sqlite3.Error:
            log.error("Failed to read experience for %s", key, exc_info=True)
            return None
        if row is None:
            return 0
        return int(row[0])

    def get(self, key: str) -> int:
        """Return the stored experience for ``key``, or ``0`` when absent."""

        value = self._read(key)
        return 0 if value is None else value

    def upsert(self, key: str, exp: int) -> None:
        """Set the experience for ``key`` exactly, creating the record if needed."""

        connection = self._connection
        if connection is None:
            log.debug("Experience store unavailable; dropping write for %s", key)
            return
        value = _clamp_exp(exp)
        try:
            with connection:
                connection.execute(
                    f"INSERT INTO {TABLE_NAME} (UserKey, Exp) VALUES (?, ?) "
                    "ON CONFLICT(UserKey) DO UPDATE SET Exp = excluded.Exp",
                    (key, value),
                )
        except sqlite3.Error:
            log.error("Failed to write experience for %s", key, exc_info=True)

    def add_delta(self, key: str, delta: int) -> None:
        """Add ``delta`` to the stored value; negative deltas count as zero."""

        with self._lock:
            current = self._read(key)
            if current is None:
                return
            self.upsert(key, current + max(0, delta))

    def subtract_delta(self, key: str, delta: int) -> None:
        """Subtract ``delta`` from the stored value, flooring the result at zero."""

        with self._lock:
            current = self._read(key)
            if current is None:
                return
            self.upsert(key, max(0, current - max(0, delta)))


__all__ = [
    "DEFAULT_DATABASE_FILE",
    "ExperienceStore",
    "TABLE_NAME",
    "resolve_storage_root",
]
