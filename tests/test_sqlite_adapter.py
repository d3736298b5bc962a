import gc
import os
import tempfile
import time

import pytest

from hotelbot.adapters import ReservationLog, SQLiteReservationLog
from hotelbot.exceptions import PersistenceError
from hotelbot.models import LogRecord


def make_db_url(tmpdir: str) -> str:
    db_path = os.path.join(tmpdir, "hotelbot_test.db")
    return f"sqlite:///{db_path}"


def make_record(id: str, room: int, password: str = "pw") -> LogRecord:
    return LogRecord(
        id=id,
        room_number=room,
        check_in_ms=1754006400000,
        check_out_ms=1754179200000,
        variant_name="Standard",
        password=password,
    )


def test_sqlite_log_crud_flow():
    with tempfile.TemporaryDirectory() as td:
        db = SQLiteReservationLog(make_db_url(td))

        try:
            db.init()
            assert isinstance(db, ReservationLog)
            assert db.load() == []

            first = make_record("20250801-101", 101)
            second = make_record("20250801-102", 102, password="")
            db.append(first)
            db.append(second)
            assert db.load() == [first, second]

            # duplicate id violates the primary key
            with pytest.raises(PersistenceError):
                db.append(make_record("20250801-101", 101))

            db.rewrite_all([second])
            assert db.load() == [second]

            db.rewrite_all([])
            assert db.load() == []
        finally:
            # Windows'ta SQLite bağlantılarının kapanması için cleanup
            del db
            gc.collect()
            time.sleep(0.1)


def test_sqlite_log_init_is_idempotent():
    with tempfile.TemporaryDirectory() as td:
        db = SQLiteReservationLog(make_db_url(td))
        try:
            db.init()
            db.append(make_record("20250801-101", 101))
            db.init()
            assert len(db.load()) == 1
        finally:
            del db
            gc.collect()
            time.sleep(0.1)
