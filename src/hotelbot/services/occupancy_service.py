from __future__ import annotations

import logging
from typing import Tuple

from hotelbot.exceptions import OccupancyError
from hotelbot.models import Reservation
from hotelbot.services.reservation_service import ReservationStore

logger = logging.getLogger(__name__)


class OccupancyService:
    """
    Check-in / check-out flow on top of the ReservationStore.

    A reservation moves CREATED -> OCCUPIED (check-in) -> deleted (check-out).
    Occupancy is operational state only; it is never written to the log.
    """

    def __init__(self, store: ReservationStore):
        self.store = store

    def charge_for(self, reservation_id: str) -> int:
        """Nightly rate of the booked room times the number of nights."""
        reservation = self.store.require(reservation_id)
        room = self.store.catalog.get_room(reservation.room_number)
        return room.variant.charge_for(reservation.stay)

    def check_in(self, reservation_id: str) -> Reservation:
        reservation = self.store.require(reservation_id)
        room = self.store.catalog.get_room(reservation.room_number)
        if room.occupied:
            raise OccupancyError(f"Room {room.room_number} is already occupied")

        self.store.set_occupied(reservation_id, True)
        logger.info(f"Reservation {reservation_id} checked in to room {room.room_number}")
        return reservation

    def check_out(self, reservation_id: str) -> int:
        """Finish the stay and delete the reservation. Returns the amount due."""
        reservation = self.store.require(reservation_id)
        if not self.store.is_checked_in(reservation_id):
            raise OccupancyError(f"Reservation {reservation_id} is not checked in")

        charge = self.charge_for(reservation_id)
        self.store.set_occupied(reservation_id, False)
        logger.info(
            f"Reservation {reservation_id} checked out of room {reservation.room_number}, charge {charge}"
        )
        self.store.delete_after_checkout(reservation_id)
        return charge

    def check_out_room(self, room_number: int) -> Tuple[Reservation, int]:
        """Check out whichever reservation currently occupies ``room_number``."""
        self.store.catalog.get_room(room_number)
        reservation = self.store.occupant_of(room_number)
        if reservation is None:
            raise OccupancyError(f"No checked-in reservation for room {room_number}")
        return reservation, self.check_out(reservation.id)
