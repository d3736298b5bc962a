from __future__ import annotations

from typing import Iterable, List, Protocol, runtime_checkable

from hotelbot.models import LogRecord


@runtime_checkable
class ReservationLog(Protocol):
    # lifecycle
    def init(self) -> None: ...

    # writes
    def append(self, record: LogRecord) -> None: ...
    def rewrite_all(self, records: Iterable[LogRecord]) -> None: ...

    # reads
    def load(self) -> List[LogRecord]: ...
