from __future__ import annotations

import logging
import sqlite3
from pathlib import Path
from typing import Iterable, List

from hotelbot.exceptions import PersistenceError
from hotelbot.models import LogRecord

logger = logging.getLogger(__name__)

_COLUMNS = "id, room_number, check_in_ms, check_out_ms, variant_name, password"


class SQLiteReservationLog:
    """Reservation log keyed by reservation id in an SQLite table."""

    def __init__(self, db_url: str):
        # Format: sqlite:///path
        if db_url.startswith("sqlite:///"):
            self.db_path = db_url.replace("sqlite:///", "")
        else:
            self.db_path = db_url

        Path(self.db_path).parent.mkdir(parents=True, exist_ok=True)
        logger.info(f"SQLiteReservationLog initialised. Database path: {self.db_path}")

    def _conn(self) -> sqlite3.Connection:
        try:
            conn = sqlite3.connect(self.db_path)
            conn.row_factory = sqlite3.Row
            return conn
        except sqlite3.Error as e:
            logger.error(f"Database connection error: {e}")
            raise PersistenceError(f"Could not connect to database: {e}") from e

    @staticmethod
    def _row_values(record: LogRecord) -> tuple:
        return (
            record.id,
            record.room_number,
            record.check_in_ms,
            record.check_out_ms,
            record.variant_name,
            record.password,
        )

    # ------------------------------------
    # Lifecycle
    # ------------------------------------
    def init(self) -> None:
        try:
            with self._conn() as conn:
                conn.execute(
                    """
                    CREATE TABLE IF NOT EXISTS reservations (
                        id TEXT PRIMARY KEY,
                        room_number INTEGER NOT NULL,
                        check_in_ms INTEGER NOT NULL,
                        check_out_ms INTEGER NOT NULL,
                        variant_name TEXT NOT NULL,
                        password TEXT NOT NULL DEFAULT '',
                        created_at DATETIME DEFAULT CURRENT_TIMESTAMP
                    )
                    """
                )
                conn.commit()
        except sqlite3.Error as e:
            logger.error(f"SQLite error while creating tables: {e}")
            raise PersistenceError(f"Could not create tables: {e}") from e

    # ------------------------------------
    # Writes
    # ------------------------------------
    def append(self, record: LogRecord) -> None:
        try:
            with self._conn() as conn:
                conn.execute(
                    f"INSERT INTO reservations ({_COLUMNS}) VALUES (?, ?, ?, ?, ?, ?)",
                    self._row_values(record),
                )
                conn.commit()
        except sqlite3.Error as e:
            logger.error(f"Inserting reservation {record.id} failed: {e}")
            raise PersistenceError(f"Could not store reservation {record.id}: {e}") from e

    def rewrite_all(self, records: Iterable[LogRecord]) -> None:
        rows = [self._row_values(r) for r in records]
        try:
            # The connection context manager commits both statements or neither
            with self._conn() as conn:
                conn.execute("DELETE FROM reservations")
                conn.executemany(
                    f"INSERT INTO reservations ({_COLUMNS}) VALUES (?, ?, ?, ?, ?, ?)",
                    rows,
                )
        except sqlite3.Error as e:
            logger.error(f"Rewriting reservations table failed: {e}")
            raise PersistenceError(f"Could not rewrite reservations: {e}") from e

    # ------------------------------------
    # Reads
    # ------------------------------------
    def load(self) -> List[LogRecord]:
        try:
            with self._conn() as conn:
                cur = conn.execute(f"SELECT {_COLUMNS} FROM reservations ORDER BY rowid")
                return [
                    LogRecord(
                        id=row["id"],
                        room_number=row["room_number"],
                        check_in_ms=row["check_in_ms"],
                        check_out_ms=row["check_out_ms"],
                        variant_name=row["variant_name"],
                        password=row["password"] or "",
                    )
                    for row in cur.fetchall()
                ]
        except sqlite3.Error as e:
            logger.error(f"Loading reservations failed: {e}")
            raise PersistenceError(f"Could not load reservations: {e}") from e
