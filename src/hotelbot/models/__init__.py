from .date_range import DateRange, to_epoch_ms, from_epoch_ms
from .room import Room, RoomVariant, STANDARD, SUITE, VARIANTS, get_variant
from .reservation import Reservation, LogRecord, make_reservation_id

__all__ = [
    "DateRange",
    "to_epoch_ms",
    "from_epoch_ms",
    "Room",
    "RoomVariant",
    "STANDARD",
    "SUITE",
    "VARIANTS",
    "get_variant",
    "Reservation",
    "LogRecord",
    "make_reservation_id",
]
