"""Custom exceptions for Hotel Bot."""
from __future__ import annotations

from typing import Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from hotelbot.models import Reservation


class HotelBotError(Exception):
    """Base exception for all Hotel Bot errors."""
    pass


class ConfigurationError(HotelBotError):
    """Raised when configuration is invalid or missing."""
    pass


class InvalidRangeError(HotelBotError):
    """Raised when a stay's check-out is not after its check-in."""
    pass


class NoAvailabilityError(HotelBotError):
    """Raised when no room matches the requested variant and dates."""
    pass


class DuplicateReservationIdError(HotelBotError):
    """Raised when a reservation with the same derived id already exists."""

    def __init__(self, reservation_id: str):
        self.reservation_id = reservation_id
        super().__init__(f"Reservation {reservation_id} already exists")


class NotFoundError(HotelBotError):
    """Raised when a reservation, room or room variant cannot be found."""
    pass


class ReservationNotFoundError(NotFoundError):
    def __init__(self, reservation_id: str):
        self.reservation_id = reservation_id
        super().__init__(f"Reservation {reservation_id} not found")


class RoomNotFoundError(NotFoundError):
    def __init__(self, room_number: int):
        self.room_number = room_number
        super().__init__(f"Room {room_number} not found")


class UnknownVariantError(NotFoundError):
    def __init__(self, variant_name: str):
        self.variant_name = variant_name
        super().__init__(f"Unknown room type '{variant_name}'")


class InvalidPasswordError(HotelBotError):
    """Raised when a password cannot be stored in the reservation log."""
    pass


class PasswordMismatchError(HotelBotError):
    """Raised when a cancellation password does not match the stored one."""
    pass


class OccupancyError(HotelBotError):
    """Raised on an invalid check-in / check-out transition."""
    pass


class PersistenceError(HotelBotError):
    """Raised when reading or writing the reservation log fails.

    When raised after an in-memory change has already been applied,
    ``reservation`` holds the affected record so callers can report the
    change as done-but-not-durable.
    """

    def __init__(self, message: str, reservation: Optional["Reservation"] = None):
        self.reservation = reservation
        super().__init__(message)
