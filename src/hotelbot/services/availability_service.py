from __future__ import annotations

from hotelbot.models import DateRange, Room


class AvailabilityIndex:
    """Answers "is room R free for range X" from each room's reserved ranges.

    Rooms are independent, so every query only looks at the ranges held by a
    single room.
    """

    def is_available(self, room: Room, stay: DateRange) -> bool:
        return not any(reserved.overlaps(stay) for reserved in room.reserved_ranges)

    def reserve(self, room: Room, stay: DateRange) -> None:
        """Block ``stay`` on ``room``. Callers must have checked availability first."""
        room.reserved_ranges.add(stay)

    def release(self, room: Room, stay: DateRange) -> bool:
        """Unblock the exact interval. Releasing an unknown range is a no-op."""
        if stay in room.reserved_ranges:
            room.reserved_ranges.discard(stay)
            return True
        return False
