from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Set

from hotelbot.exceptions import UnknownVariantError
from hotelbot.models.date_range import DateRange


@dataclass(frozen=True)
class RoomVariant:
    """Room type: only data differs between variants, never behaviour."""

    name: str
    nightly_rate: int

    def charge_for(self, stay: DateRange) -> int:
        return self.nightly_rate * stay.nights()


STANDARD = RoomVariant(name="Standard", nightly_rate=9000)
SUITE = RoomVariant(name="Suite", nightly_rate=30000)

VARIANTS: Dict[str, RoomVariant] = {
    STANDARD.name: STANDARD,
    SUITE.name: SUITE,
}


def get_variant(name: str) -> RoomVariant:
    """Look up a catalog variant by name, ignoring case and surrounding spaces."""
    wanted = (name or "").strip().lower()
    for variant in VARIANTS.values():
        if variant.name.lower() == wanted:
            return variant
    raise UnknownVariantError(name)


@dataclass
class Room:
    """Physical room. ``reserved_ranges`` is a projection of live reservations."""

    room_number: int
    variant: RoomVariant
    reserved_ranges: Set[DateRange] = field(default_factory=set)
    occupied: bool = field(default=False)

    def to_dict(self) -> Dict[str, object]:
        return {
            "room_number": self.room_number,
            "room_type": self.variant.name,
            "nightly_rate": self.variant.nightly_rate,
            "occupied": self.occupied,
        }
