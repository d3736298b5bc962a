from __future__ import annotations

import logging
from typing import Any, Dict, Optional

from hotelbot.tools import tool, get_store
from hotelbot.models import DateRange, Reservation
from hotelbot.exceptions import (
    DuplicateReservationIdError,
    HotelBotError,
    InvalidPasswordError,
    InvalidRangeError,
    NoAvailabilityError,
    NotFoundError,
    PasswordMismatchError,
    PersistenceError,
)

logger = logging.getLogger(__name__)


# ------------------------------------
# Helpers (validation & id extraction)
# ------------------------------------
def _parse_stay(check_in: str, check_out: str) -> DateRange:
    """Parse two YYYY-MM-DD dates; raises InvalidRangeError on bad input."""
    try:
        stay = DateRange.from_iso(check_in.strip(), check_out.strip())
    except (AttributeError, ValueError) as e:
        raise InvalidRangeError("Invalid date format. Please use YYYY-MM-DD.") from e
    if not stay.is_valid():
        raise InvalidRangeError("Check-out date must be after the check-in date.")
    return stay


def _extract_reservation_id(reservation_id: Any) -> str:
    """Accept reservation ids as strings (e.g. '20250801-101') or plain numbers."""
    if isinstance(reservation_id, bool) or not isinstance(reservation_id, (str, int)):
        raise ValueError(f"Reservation ID must be str or int, got {type(reservation_id)}")
    value = str(reservation_id).strip()
    if not value:
        raise ValueError("Reservation ID is empty")
    return value


def _reservation_details(reservation: Reservation) -> Dict[str, Any]:
    store = get_store()
    room = store.catalog.get_room(reservation.room_number)
    details = reservation.to_dict()
    details["room_type"] = room.variant.name
    details["charge"] = room.variant.charge_for(reservation.stay)
    details["checked_in"] = store.is_checked_in(reservation.id)
    return details


def _booked(reservation: Reservation, warning: Optional[str] = None) -> Dict[str, Any]:
    result: Dict[str, Any] = {
        "success": True,
        "reservation": _reservation_details(reservation),
        "message": f"Reservation {reservation.id} confirmed. Please keep your reservation number.",
    }
    if warning:
        result["warning"] = warning
    return result


# ------------------------------------
# TOOLS IMPLEMENTATION
# ------------------------------------
@tool
def list_availability(check_in: str, check_out: str) -> Dict[str, Any]:
    """
    Count rooms of any type that are free for the whole stay.

    Args:
        check_in: Check-in date (YYYY-MM-DD)
        check_out: Check-out date (YYYY-MM-DD)
    """
    try:
        stay = _parse_stay(check_in, check_out)
    except InvalidRangeError as e:
        return {"error": str(e)}

    store = get_store()
    return {
        "success": True,
        "check_in": stay.check_in.isoformat(),
        "check_out": stay.check_out.isoformat(),
        "nights": stay.nights(),
        "available_rooms": store.count_available(stay),
    }


@tool
def get_room_rates() -> Dict[str, Any]:
    """
    List room types offered by the hotel with their nightly rate and room numbers.
    """
    catalog = get_store().catalog
    room_types = []
    for variant in catalog.variants():
        room_types.append({
            "name": variant.name,
            "nightly_rate": variant.nightly_rate,
            "rooms": [r.room_number for r in catalog.rooms_of_variant(variant.name)],
        })
    return {"success": True, "room_types": room_types}


@tool
def find_room(room_type: str, check_in: str, check_out: str) -> Dict[str, Any]:
    """
    Find the first free room of a given type for the stay. Does not book it.

    Args:
        room_type: Room type name (e.g. Standard, Suite)
        check_in: Check-in date (YYYY-MM-DD)
        check_out: Check-out date (YYYY-MM-DD)
    """
    try:
        stay = _parse_stay(check_in, check_out)
        room = get_store().find_room(room_type, stay)
    except (InvalidRangeError, NotFoundError) as e:
        return {"error": str(e)}

    if room is None:
        return {"error": f"No {room_type} room is available from {stay.check_in} to {stay.check_out}."}
    return {"success": True, "room": room.to_dict(), "charge": room.variant.charge_for(stay)}


@tool
def book_room(room_number: int, check_in: str, check_out: str, password: str) -> Dict[str, Any]:
    """
    Book a specific room. The password is required later to cancel the booking.

    Args:
        room_number: Room number (e.g. 101)
        check_in: Check-in date (YYYY-MM-DD)
        check_out: Check-out date (YYYY-MM-DD)
        password: Cancellation password chosen by the guest
    """
    store = get_store()
    try:
        number = int(room_number)
    except (TypeError, ValueError):
        return {"error": f"Invalid room number: {room_number}"}

    try:
        stay = _parse_stay(check_in, check_out)
        room = store.catalog.get_room(number)
        reservation = store.create(room, stay, password)
    except PersistenceError as e:
        if e.reservation is None:
            return {"error": str(e)}
        return _booked(e.reservation, warning=f"Reservation saved in memory only: {e}")
    except DuplicateReservationIdError as e:
        return {"error": f"{e}. This room already has a booking starting on {check_in}."}
    except (InvalidPasswordError, InvalidRangeError, NotFoundError, NoAvailabilityError) as e:
        return {"error": str(e)}

    return _booked(reservation)


@tool
def book_room_type(room_type: str, check_in: str, check_out: str, password: str) -> Dict[str, Any]:
    """
    Book the first free room of a given type for the stay.

    Args:
        room_type: Room type name (e.g. Standard, Suite)
        check_in: Check-in date (YYYY-MM-DD)
        check_out: Check-out date (YYYY-MM-DD)
        password: Cancellation password chosen by the guest
    """
    found = find_room(room_type, check_in, check_out)
    if "error" in found:
        return found
    return book_room(found["room"]["room_number"], check_in, check_out, password)


@tool
def lookup_reservation(reservation_id: str) -> Dict[str, Any]:
    """
    Get reservation details by reservation number (e.g. 20250801-101).

    Args:
        reservation_id: Reservation number
    """
    try:
        res_id = _extract_reservation_id(reservation_id)
    except ValueError as e:
        return {"error": str(e)}

    reservation = get_store().get(res_id)
    if reservation is None:
        return {"error": f"Reservation {res_id} not found."}
    return {"success": True, "reservation": _reservation_details(reservation)}


@tool
def cancel_reservation(reservation_id: str, password: str) -> Dict[str, Any]:
    """
    Cancel a reservation. The password given at booking time must match.

    Args:
        reservation_id: Reservation number
        password: Cancellation password chosen at booking time
    """
    try:
        res_id = _extract_reservation_id(reservation_id)
    except ValueError as e:
        return {"error": str(e)}

    try:
        get_store().cancel(res_id, password)
    except PersistenceError as e:
        if e.reservation is None:
            return {"error": str(e)}
        return {
            "success": True,
            "message": f"Reservation {res_id} cancelled.",
            "warning": f"Cancellation not yet saved to the reservation log: {e}",
        }
    except PasswordMismatchError:
        return {"error": "Password does not match. The reservation was not cancelled."}
    except HotelBotError as e:
        return {"error": str(e)}

    return {"success": True, "message": f"Reservation {res_id} cancelled."}
