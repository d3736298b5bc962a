from __future__ import annotations

import logging
from typing import Any, Dict, Optional

from hotelbot.tools import tool, get_occupancy_service
from hotelbot.config import get_config
from hotelbot.exceptions import HotelBotError, PersistenceError
from hotelbot.tools.reservation_tools import _extract_reservation_id

logger = logging.getLogger(__name__)


def _operator_denied(operator_password: Optional[str]) -> Optional[Dict[str, Any]]:
    """Front desk gate: only enforced when OPERATOR_PASSWORD is configured."""
    expected = get_config().get_operator_password()
    if expected and operator_password != expected:
        logger.warning("Front desk operation refused: wrong operator password")
        return {"error": "Operator password is incorrect."}
    return None


def _checked_out(reservation_id: str, room_number: int, charge: int, warning: Optional[str] = None) -> Dict[str, Any]:
    result: Dict[str, Any] = {
        "success": True,
        "reservation_id": reservation_id,
        "room_number": room_number,
        "charge": charge,
        "message": f"Check-out complete for room {room_number}. Amount due: {charge}",
    }
    if warning:
        result["warning"] = warning
    return result


@tool
def check_in(reservation_id: str, operator_password: Optional[str] = None) -> Dict[str, Any]:
    """
    Mark the guest of a reservation as checked in (room occupied).

    Args:
        reservation_id: Reservation number
        operator_password: Front desk password, if the hotel configured one
    """
    denied = _operator_denied(operator_password)
    if denied:
        return denied
    try:
        res_id = _extract_reservation_id(reservation_id)
        reservation = get_occupancy_service().check_in(res_id)
    except (ValueError, HotelBotError) as e:
        return {"error": str(e)}

    return {
        "success": True,
        "reservation_id": reservation.id,
        "room_number": reservation.room_number,
        "message": f"Check-in complete: room {reservation.room_number}",
    }


@tool
def check_out(reservation_id: str, operator_password: Optional[str] = None) -> Dict[str, Any]:
    """
    Check out a checked-in reservation and return the amount to charge.

    Args:
        reservation_id: Reservation number
        operator_password: Front desk password, if the hotel configured one
    """
    denied = _operator_denied(operator_password)
    if denied:
        return denied

    service = get_occupancy_service()
    try:
        res_id = _extract_reservation_id(reservation_id)
        reservation = service.store.require(res_id)
        charge = service.charge_for(res_id)
        service.check_out(res_id)
    except ValueError as e:
        return {"error": str(e)}
    except PersistenceError as e:
        if e.reservation is None:
            return {"error": str(e)}
        return _checked_out(res_id, reservation.room_number, charge,
                            warning=f"Check-out not yet saved to the reservation log: {e}")
    except HotelBotError as e:
        return {"error": str(e)}

    return _checked_out(res_id, reservation.room_number, charge)


@tool
def check_out_room(room_number: int, operator_password: Optional[str] = None) -> Dict[str, Any]:
    """
    Check out whoever is currently checked in to a room and return the amount to charge.

    Args:
        room_number: Room number (e.g. 101)
        operator_password: Front desk password, if the hotel configured one
    """
    denied = _operator_denied(operator_password)
    if denied:
        return denied

    try:
        number = int(room_number)
    except (TypeError, ValueError):
        return {"error": f"Invalid room number: {room_number}"}

    service = get_occupancy_service()
    occupant = service.store.occupant_of(number)
    charge = service.charge_for(occupant.id) if occupant else 0
    try:
        reservation, charge = service.check_out_room(number)
    except PersistenceError as e:
        if e.reservation is None:
            return {"error": str(e)}
        return _checked_out(e.reservation.id, number, charge,
                            warning=f"Check-out not yet saved to the reservation log: {e}")
    except HotelBotError as e:
        return {"error": str(e)}

    return _checked_out(reservation.id, number, charge)
