import os
import stat
import tempfile

import pytest

from hotelbot.adapters import FlatFileReservationLog, ReservationLog
from hotelbot.exceptions import PersistenceError
from hotelbot.models import LogRecord


def make_record(id="20250801-101", room=101, password="secret") -> LogRecord:
    return LogRecord(
        id=id,
        room_number=room,
        check_in_ms=1754006400000,
        check_out_ms=1754179200000,
        variant_name="Standard",
        password=password,
    )


def make_log(tmpdir: str) -> FlatFileReservationLog:
    log = FlatFileReservationLog(os.path.join(tmpdir, "reservations.txt"))
    log.init()
    return log


class TestFlatFileReservationLog:
    """Test suite for the comma separated reservation log."""

    def test_satisfies_protocol(self):
        with tempfile.TemporaryDirectory() as td:
            assert isinstance(make_log(td), ReservationLog)

    def test_append_then_load_round_trip(self):
        with tempfile.TemporaryDirectory() as td:
            log = make_log(td)
            record = make_record()
            log.append(record)

            loaded = log.load()
            assert loaded == [record]

    def test_line_format(self):
        with tempfile.TemporaryDirectory() as td:
            log = make_log(td)
            log.append(make_record())
            with open(log.path, encoding="utf-8") as fh:
                content = fh.read()
            assert content == "20250801-101,101,1754006400000,1754179200000,Standard,secret\n"

    def test_missing_file_loads_empty(self):
        with tempfile.TemporaryDirectory() as td:
            log = FlatFileReservationLog(os.path.join(td, "nothing-here.txt"))
            assert log.load() == []

    def test_file_url_prefix(self):
        with tempfile.TemporaryDirectory() as td:
            path = os.path.join(td, "reservations.txt")
            log = FlatFileReservationLog(f"file://{path}")
            assert str(log.path) == path

    def test_short_and_malformed_lines_are_skipped(self):
        with tempfile.TemporaryDirectory() as td:
            log = make_log(td)
            with open(log.path, "w", encoding="utf-8") as fh:
                fh.write("20250801-101,101,1754006400000,1754179200000,Standard,secret\n")
                fh.write("\n")
                fh.write("20250805-102,102,1754\n")
                fh.write("20250806-102,abc,1754006400000,1754179200000,Standard,x\n")

            loaded = log.load()
            assert [r.id for r in loaded] == ["20250801-101"]

    def test_legacy_five_field_line_has_empty_password(self):
        with tempfile.TemporaryDirectory() as td:
            log = make_log(td)
            with open(log.path, "w", encoding="utf-8") as fh:
                fh.write("7,201,1754006400000,1754179200000,Suite\n")

            [record] = log.load()
            assert record.id == "7"
            assert record.room_number == 201
            assert record.password == ""

    def test_rewrite_all_replaces_contents(self):
        with tempfile.TemporaryDirectory() as td:
            log = make_log(td)
            log.append(make_record("20250801-101", 101))
            log.append(make_record("20250801-102", 102))

            log.rewrite_all([make_record("20250801-102", 102)])
            assert [r.id for r in log.load()] == ["20250801-102"]
            # no temporary files left behind
            assert os.listdir(td) == ["reservations.txt"]

    def test_rewrite_all_with_no_records_empties_log(self):
        with tempfile.TemporaryDirectory() as td:
            log = make_log(td)
            log.append(make_record())
            log.rewrite_all([])
            assert log.load() == []

    def test_append_after_torn_write(self):
        with tempfile.TemporaryDirectory() as td:
            log = make_log(td)
            with open(log.path, "w", encoding="utf-8") as fh:
                fh.write("20250801-101,101,1754006400000,1754179200000,Standard,secret\n")
                fh.write("20250803-102,102,17540")

            log.append(make_record("20250810-201", 201))
            assert [r.id for r in log.load()] == ["20250801-101", "20250810-201"]

    def test_comma_in_password_is_rejected(self):
        with tempfile.TemporaryDirectory() as td:
            log = make_log(td)
            with pytest.raises(PersistenceError):
                log.append(make_record(password="a,b"))
            assert log.load() == []

    def test_unreadable_path_raises_persistence_error(self):
        with tempfile.TemporaryDirectory() as td:
            # a directory where the log file should be
            path = os.path.join(td, "reservations.txt")
            os.mkdir(path)
            with pytest.raises(PersistenceError):
                FlatFileReservationLog(path).load()

    def test_undecodable_line_is_skipped_alone(self):
        with tempfile.TemporaryDirectory() as td:
            log = make_log(td)
            log.append(make_record("20250801-101", 101))
            log.append(make_record("20250801-102", 102))
            with open(log.path, "ab") as fh:
                # crash in the middle of a two byte character
                fh.write("20250810-201,201,1754784000000,1754956800000,Suite,pé".encode("utf-8")[:-1])

            assert [r.id for r in log.load()] == ["20250801-101", "20250801-102"]

    def test_undecodable_line_in_the_middle(self):
        with tempfile.TemporaryDirectory() as td:
            log = make_log(td)
            with open(log.path, "wb") as fh:
                fh.write(b"20250801-101,101,1754006400000,1754179200000,Standard,a\n")
                fh.write(b"\xff\xfe\x00garbage\n")
                fh.write(b"20250801-102,102,1754006400000,1754179200000,Standard,b\n")

            assert [r.id for r in log.load()] == ["20250801-101", "20250801-102"]

    def test_password_whitespace_survives_round_trip(self):
        with tempfile.TemporaryDirectory() as td:
            log = make_log(td)
            log.append(make_record(password=" secret "))
            log.append(make_record("20250801-102", 102, password="tail "))

            first, second = log.load()
            assert first.password == " secret "
            assert second.password == "tail "

    def test_numeric_fields_tolerate_padding(self):
        with tempfile.TemporaryDirectory() as td:
            log = make_log(td)
            with open(log.path, "w", encoding="utf-8") as fh:
                fh.write("20250801-101, 101 ,1754006400000, 1754179200000,Standard,pw\n")

            [record] = log.load()
            assert record.room_number == 101
            assert record.check_out_ms == 1754179200000

    def test_rewrite_all_keeps_file_mode(self):
        with tempfile.TemporaryDirectory() as td:
            log = make_log(td)
            log.append(make_record())
            os.chmod(log.path, 0o644)

            log.rewrite_all([])
            assert stat.S_IMODE(os.stat(log.path).st_mode) == 0o644

    def test_append_to_unwritable_location_raises_persistence_error(self):
        with tempfile.TemporaryDirectory() as td:
            # a directory where the log file should be
            path = os.path.join(td, "reservations.txt")
            os.mkdir(path)
            log = FlatFileReservationLog(path)
            with pytest.raises(PersistenceError):
                log.append(make_record())
