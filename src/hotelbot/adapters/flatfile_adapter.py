from __future__ import annotations

import logging
import os
import shutil
import tempfile
from pathlib import Path
from typing import Iterable, List, Optional

from hotelbot.exceptions import PersistenceError
from hotelbot.models import LogRecord

logger = logging.getLogger(__name__)

FIELD_SEPARATOR = ","
# id, room_number, check_in_ms, check_out_ms, variant_name[, password]
MIN_FIELDS = 5


def format_line(record: LogRecord) -> str:
    """Serialise one record as a comma separated line (without newline)."""
    for label, value in (("id", record.id), ("variant name", record.variant_name), ("password", record.password)):
        if FIELD_SEPARATOR in value or "\n" in value or "\r" in value:
            raise PersistenceError(f"Reservation {label} may not contain commas or line breaks")
    return FIELD_SEPARATOR.join(
        [
            record.id,
            str(record.room_number),
            str(record.check_in_ms),
            str(record.check_out_ms),
            record.variant_name,
            record.password,
        ]
    )


def parse_line(line: str) -> Optional[LogRecord]:
    """Parse one log line. Returns None for lines that should be skipped."""
    line = line.rstrip("\r\n")
    if not line.strip():
        return None

    fields = line.split(FIELD_SEPARATOR)
    if len(fields) < MIN_FIELDS:
        logger.warning(f"Skipping short reservation log line ({len(fields)} fields)")
        return None

    try:
        room_number = int(fields[1].strip())
        check_in_ms = int(fields[2].strip())
        check_out_ms = int(fields[3].strip())
    except ValueError:
        logger.warning(f"Skipping malformed reservation log line for id '{fields[0]}'")
        return None

    # The password is kept byte for byte; only the structural fields are trimmed
    return LogRecord(
        id=fields[0].strip(),
        room_number=room_number,
        check_in_ms=check_in_ms,
        check_out_ms=check_out_ms,
        variant_name=fields[4].strip(),
        password=fields[5] if len(fields) > 5 else "",
    )


class FlatFileReservationLog:
    """Newline delimited, comma separated reservation log.

    New bookings are appended. Removals rewrite the whole file through a
    temporary sibling file that atomically replaces the log.
    """

    def __init__(self, path: str):
        # Format: file:///path or a plain path
        if path.startswith("file://"):
            path = path[len("file://"):]
        self.path = Path(path)
        logger.info(f"FlatFileReservationLog initialised. Log path: {self.path}")

    # ------------------------------------
    # Lifecycle
    # ------------------------------------
    def init(self) -> None:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.touch(exist_ok=True)
        except OSError as e:
            logger.error(f"Could not create reservation log {self.path}: {e}")
            raise PersistenceError(f"Could not create reservation log: {e}") from e

    # ------------------------------------
    # Writes
    # ------------------------------------
    def append(self, record: LogRecord) -> None:
        data = (format_line(record) + "\n").encode("utf-8")
        try:
            with open(self.path, "ab+") as fh:
                # A torn trailing write must not swallow the new record
                if fh.seek(0, os.SEEK_END) > 0:
                    fh.seek(-1, os.SEEK_END)
                    if fh.read(1) != b"\n":
                        data = b"\n" + data
                fh.write(data)
        except OSError as e:
            logger.error(f"Appending reservation {record.id} to log failed: {e}")
            raise PersistenceError(f"Could not append reservation {record.id}: {e}") from e

    def rewrite_all(self, records: Iterable[LogRecord]) -> None:
        lines = [format_line(r) + "\n" for r in records]
        tmp_path = None
        try:
            fd, tmp_path = tempfile.mkstemp(
                prefix=f".{self.path.name}.", suffix=".tmp", dir=str(self.path.parent)
            )
            with os.fdopen(fd, "w", encoding="utf-8", newline="\n") as fh:
                fh.writelines(lines)
                fh.flush()
                os.fsync(fh.fileno())
            if self.path.exists():
                shutil.copymode(self.path, tmp_path)
            os.replace(tmp_path, self.path)
            tmp_path = None
        except OSError as e:
            logger.error(f"Rewriting reservation log failed: {e}")
            raise PersistenceError(f"Could not rewrite reservation log: {e}") from e
        finally:
            if tmp_path is not None and os.path.exists(tmp_path):
                os.unlink(tmp_path)
        logger.info(f"Reservation log rewritten with {len(lines)} record(s)")

    # ------------------------------------
    # Reads
    # ------------------------------------
    def load(self) -> List[LogRecord]:
        if not self.path.exists():
            return []
        try:
            with open(self.path, "rb") as fh:
                raw_lines = fh.readlines()
        except OSError as e:
            logger.error(f"Reading reservation log {self.path} failed: {e}")
            raise PersistenceError(f"Could not read reservation log: {e}") from e

        records = []
        for lineno, raw in enumerate(raw_lines, start=1):
            # A torn multibyte write only costs the line it landed on
            try:
                line = raw.decode("utf-8")
            except UnicodeDecodeError as e:
                logger.warning(f"Skipping undecodable reservation log line {lineno}: {e}")
                continue
            record = parse_line(line)
            if record is not None:
                records.append(record)
        return records
