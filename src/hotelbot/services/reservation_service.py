from __future__ import annotations

import logging
from datetime import date, datetime, timezone, tzinfo
from typing import Dict, List, Optional

from hotelbot.adapters.base import ReservationLog
from hotelbot.exceptions import (
    DuplicateReservationIdError,
    InvalidPasswordError,
    InvalidRangeError,
    NoAvailabilityError,
    OccupancyError,
    PasswordMismatchError,
    PersistenceError,
    ReservationNotFoundError,
)
from hotelbot.models import (
    DateRange,
    LogRecord,
    Reservation,
    Room,
    from_epoch_ms,
    get_variant,
    make_reservation_id,
    to_epoch_ms,
)
from hotelbot.services.availability_service import AvailabilityIndex
from hotelbot.services.room_catalog import RoomCatalog

logger = logging.getLogger(__name__)

_FORBIDDEN_PASSWORD_CHARS = (",", "\n", "\r")


def _require_valid(stay: DateRange) -> None:
    if not stay.is_valid():
        raise InvalidRangeError(
            f"Check-out ({stay.check_out}) must be after check-in ({stay.check_in})"
        )


class ReservationStore:
    """
    Authoritative id -> reservation mapping.

    Every booking change goes through here so the availability index, the
    in-memory map and the reservation log stay consistent: bookings are
    appended to the log, removals rewrite it from the in-memory map.
    """

    def __init__(
        self,
        catalog: RoomCatalog,
        log: ReservationLog,
        index: Optional[AvailabilityIndex] = None,
        tz: tzinfo = timezone.utc,
    ):
        self.catalog = catalog
        self.log = log
        self.index = index or AvailabilityIndex()
        self.tz = tz
        self._reservations: Dict[str, Reservation] = {}
        # room_number -> id of the reservation currently checked in
        self._in_house: Dict[int, str] = {}
        # True while the log could not be read; rewrites are refused until a load succeeds
        self._log_unreadable = False

    # ------------------------------------
    # Record mapping
    # ------------------------------------
    def _to_record(self, reservation: Reservation) -> LogRecord:
        room = self.catalog.get_room(reservation.room_number)
        return LogRecord(
            id=reservation.id,
            room_number=reservation.room_number,
            check_in_ms=to_epoch_ms(reservation.stay.check_in, self.tz),
            check_out_ms=to_epoch_ms(reservation.stay.check_out, self.tz),
            variant_name=room.variant.name,
            password=reservation.password,
        )

    def _from_record(self, record: LogRecord) -> Reservation:
        stay = DateRange(
            from_epoch_ms(record.check_in_ms, self.tz),
            from_epoch_ms(record.check_out_ms, self.tz),
        )
        return Reservation(
            id=record.id,
            room_number=record.room_number,
            stay=stay,
            password=record.password,
        )

    # ------------------------------------
    # Startup
    # ------------------------------------
    def load(self, today: Optional[date] = None) -> int:
        """
        Rebuild the store from the reservation log.

        Every valid record is loaded for lookup; only stays whose check-out is
        still ahead of ``today`` are blocked again in the availability index.
        An unreadable log leaves the store empty and blocks log rewrites
        until a later load succeeds.
        """
        self._reservations.clear()
        self._in_house.clear()
        self._log_unreadable = False
        for room in self.catalog:
            room.reserved_ranges.clear()
            room.occupied = False

        try:
            records = self.log.load()
        except PersistenceError as e:
            logger.error(f"Reservation log unreadable, starting with an empty store: {e}")
            self._log_unreadable = True
            return 0

        today = today or datetime.now(self.tz).date()
        blocked = 0
        for record in records:
            room = self.catalog.find_room_or_none(record.room_number)
            if room is None:
                logger.warning(f"Skipping reservation {record.id}: unknown room {record.room_number}")
                continue
            if record.id in self._reservations:
                logger.warning(f"Skipping duplicate reservation id {record.id} in log")
                continue

            reservation = self._from_record(record)
            if not reservation.stay.is_valid():
                logger.warning(f"Skipping reservation {record.id}: check-out not after check-in")
                continue
            if reservation.id != make_reservation_id(reservation.stay.check_in, room.room_number):
                logger.warning(f"Reservation {record.id} uses a legacy id; keeping it as stored")

            self._reservations[reservation.id] = reservation
            if reservation.stay.check_out > today:
                self.index.reserve(room, reservation.stay)
                blocked += 1

        logger.info(
            f"Loaded {len(self._reservations)} reservation(s) from log, {blocked} still blocking rooms"
        )
        return len(self._reservations)

    # ------------------------------------
    # Queries
    # ------------------------------------
    def count_available(self, stay: DateRange) -> int:
        _require_valid(stay)
        return sum(1 for room in self.catalog if self.index.is_available(room, stay))

    def find_room(self, variant_name: str, stay: DateRange) -> Optional[Room]:
        """First free room of the variant in catalog order. Does not reserve it."""
        _require_valid(stay)
        variant = get_variant(variant_name)
        for room in self.catalog:
            if room.variant == variant and self.index.is_available(room, stay):
                return room
        return None

    def get(self, reservation_id: str) -> Optional[Reservation]:
        return self._reservations.get(reservation_id)

    def require(self, reservation_id: str) -> Reservation:
        reservation = self._reservations.get(reservation_id)
        if reservation is None:
            raise ReservationNotFoundError(reservation_id)
        return reservation

    def list_reservations(self) -> List[Reservation]:
        return list(self._reservations.values())

    def occupant_of(self, room_number: int) -> Optional[Reservation]:
        """Reservation currently checked in to the room, if any."""
        reservation_id = self._in_house.get(room_number)
        return self._reservations.get(reservation_id) if reservation_id else None

    def is_checked_in(self, reservation_id: str) -> bool:
        reservation = self.require(reservation_id)
        return self._in_house.get(reservation.room_number) == reservation_id

    # ------------------------------------
    # Mutations
    # ------------------------------------
    def create(self, room: Room, stay: DateRange, password: str = "") -> Reservation:
        """
        Book ``room`` for ``stay``.

        The id is derived from check-in day and room number, so a second
        booking for the same room and check-in day is rejected even when its
        check-out differs. If the log append fails the booking stays in memory
        and PersistenceError is raised carrying it.
        """
        _require_valid(stay)
        password = password or ""
        if any(c in password for c in _FORBIDDEN_PASSWORD_CHARS):
            raise InvalidPasswordError("Password may not contain commas or line breaks")

        room = self.catalog.get_room(room.room_number)
        reservation_id = make_reservation_id(stay.check_in, room.room_number)
        if reservation_id in self._reservations:
            raise DuplicateReservationIdError(reservation_id)
        if not self.index.is_available(room, stay):
            raise NoAvailabilityError(
                f"Room {room.room_number} is already reserved between {stay.check_in} and {stay.check_out}"
            )

        reservation = Reservation(
            id=reservation_id,
            room_number=room.room_number,
            stay=stay,
            password=password,
        )
        self.index.reserve(room, stay)
        self._reservations[reservation_id] = reservation
        logger.info(
            f"Reservation {reservation_id} created: room {room.room_number}, "
            f"{stay.check_in} to {stay.check_out}"
        )

        try:
            self.log.append(self._to_record(reservation))
        except PersistenceError as e:
            logger.warning(f"Reservation {reservation_id} kept in memory but not written to log: {e}")
            raise PersistenceError(str(e), reservation=reservation) from e
        return reservation

    def cancel(self, reservation_id: str, password: str) -> Reservation:
        """Password gated removal of a booking that has not been checked in."""
        reservation = self.require(reservation_id)
        if not reservation.password_matches(password or ""):
            logger.warning(f"Cancellation of {reservation_id} refused: password mismatch")
            raise PasswordMismatchError(f"Password does not match reservation {reservation_id}")
        if self.is_checked_in(reservation_id):
            raise OccupancyError(
                f"Reservation {reservation_id} is checked in; check out instead of cancelling"
            )

        self._remove(reservation)
        logger.info(f"Reservation {reservation_id} cancelled")
        self._rewrite_log(reservation)
        return reservation

    def delete_after_checkout(self, reservation_id: str) -> Reservation:
        """Operator authorised removal once the guest has left. No password check."""
        reservation = self.require(reservation_id)
        self._remove(reservation)
        logger.info(f"Reservation {reservation_id} removed after check-out")
        self._rewrite_log(reservation)
        return reservation

    def set_occupied(self, reservation_id: str, value: bool) -> None:
        """Toggle the room's occupancy flag. Never touches the index or the log."""
        reservation = self.require(reservation_id)
        room = self.catalog.get_room(reservation.room_number)
        room.occupied = value
        if value:
            self._in_house[room.room_number] = reservation_id
        elif self._in_house.get(room.room_number) == reservation_id:
            del self._in_house[room.room_number]

    def _remove(self, reservation: Reservation) -> None:
        room = self.catalog.get_room(reservation.room_number)
        self.index.release(room, reservation.stay)
        del self._reservations[reservation.id]
        if self._in_house.get(room.room_number) == reservation.id:
            del self._in_house[room.room_number]
            room.occupied = False

    def _rewrite_log(self, removed: Reservation) -> None:
        if self._log_unreadable:
            logger.error(
                f"Reservation {removed.id} removed in memory only: the reservation log could not be "
                f"read at startup and will not be overwritten"
            )
            raise PersistenceError(
                "Reservation log was unreadable at startup; refusing to overwrite it",
                reservation=removed,
            )
        records = [self._to_record(r) for r in self._reservations.values()]
        try:
            self.log.rewrite_all(records)
        except PersistenceError as e:
            logger.warning(f"Reservation {removed.id} removed in memory but log rewrite failed: {e}")
            raise PersistenceError(str(e), reservation=removed) from e
