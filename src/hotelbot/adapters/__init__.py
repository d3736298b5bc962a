from .base import ReservationLog
from .flatfile_adapter import FlatFileReservationLog
from .sqlite_adapter import SQLiteReservationLog

__all__ = [
    "ReservationLog",
    "FlatFileReservationLog",
    "SQLiteReservationLog",
]
