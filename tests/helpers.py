"""Shared test doubles for the reservation log."""
from datetime import date
from typing import Iterable, List

from hotelbot.exceptions import PersistenceError
from hotelbot.models import LogRecord, to_epoch_ms

LAYOUT = {101: "Standard", 102: "Standard", 201: "Suite"}


class InMemoryLog:
    """Reservation log double that keeps records in a list."""

    def __init__(self, records: Iterable[LogRecord] = ()):
        self.records: List[LogRecord] = list(records)
        self.rewrites = 0

    def init(self) -> None:
        pass

    def append(self, record: LogRecord) -> None:
        self.records.append(record)

    def rewrite_all(self, records: Iterable[LogRecord]) -> None:
        self.rewrites += 1
        self.records = list(records)

    def load(self) -> List[LogRecord]:
        return list(self.records)


class BrokenLog(InMemoryLog):
    """Log whose every write fails."""

    def append(self, record: LogRecord) -> None:
        raise PersistenceError("disk full")

    def rewrite_all(self, records: Iterable[LogRecord]) -> None:
        raise PersistenceError("disk full")


class UnreadableLog(InMemoryLog):
    def load(self) -> List[LogRecord]:
        raise PersistenceError("cannot read")


def record_for(id: str, room: int, first: date, last: date, password: str = "pw") -> LogRecord:
    return LogRecord(id, room, to_epoch_ms(first), to_epoch_ms(last), "Standard", password)


class UnreadableOnceLog(InMemoryLog):
    """Log whose first read fails, as when the file is briefly unavailable."""

    def __init__(self, records: Iterable[LogRecord] = ()):
        super().__init__(records)
        self.failed = False

    def load(self) -> List[LogRecord]:
        if not self.failed:
            self.failed = True
            raise PersistenceError("cannot read")
        return super().load()
