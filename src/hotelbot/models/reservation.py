from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Any, Dict

from hotelbot.models.date_range import DateRange


def make_reservation_id(check_in: date, room_number: int) -> str:
    """'20250801-101' style id: one live booking per room and check-in day."""
    return f"{check_in:%Y%m%d}-{room_number}"


@dataclass(frozen=True)
class Reservation:
    """Hotel booking. Owned by the ReservationStore, never by a Room."""

    id: str
    room_number: int
    stay: DateRange
    password: str = ""

    def password_matches(self, password: str) -> bool:
        # Legacy records without a password accept any input
        if not self.password:
            return True
        return self.password == password

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "id": self.id,
            "room_number": self.room_number,
        }
        data.update(self.stay.to_dict())
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> Reservation:
        return cls(
            id=data["id"],
            room_number=int(data["room_number"]),
            stay=DateRange.from_iso(data["check_in"], data["check_out"]),
            password=data.get("password") or "",
        )


@dataclass(frozen=True)
class LogRecord:
    """One persisted reservation, as stored on disk."""

    id: str
    room_number: int
    check_in_ms: int
    check_out_ms: int
    variant_name: str
    password: str = ""
