from __future__ import annotations

import logging
from typing import Dict, Iterator, List, Mapping, Optional

from hotelbot.exceptions import ConfigurationError, RoomNotFoundError
from hotelbot.models import Room, RoomVariant, get_variant

logger = logging.getLogger(__name__)


class RoomCatalog:
    """Fixed set of physical rooms, kept in insertion order."""

    def __init__(self) -> None:
        self._rooms: Dict[int, Room] = {}

    @classmethod
    def from_layout(cls, layout: Mapping[int, str]) -> RoomCatalog:
        """Build a catalog from ``{room_number: variant_name}``."""
        catalog = cls()
        for room_number, variant_name in layout.items():
            catalog.add_room(room_number, get_variant(variant_name))
        logger.info(f"Room catalog built with {len(catalog)} room(s)")
        return catalog

    def add_room(self, room_number: int, variant: RoomVariant) -> Room:
        if room_number in self._rooms:
            raise ConfigurationError(f"Room {room_number} is defined twice")
        room = Room(room_number=room_number, variant=variant)
        self._rooms[room_number] = room
        return room

    def get_room(self, room_number: int) -> Room:
        room = self._rooms.get(room_number)
        if room is None:
            raise RoomNotFoundError(room_number)
        return room

    def find_room_or_none(self, room_number: int) -> Optional[Room]:
        return self._rooms.get(room_number)

    def rooms_of_variant(self, variant_name: str) -> List[Room]:
        variant = get_variant(variant_name)
        return [r for r in self._rooms.values() if r.variant == variant]

    def variants(self) -> List[RoomVariant]:
        """Distinct room variants present in the catalog, in catalog order."""
        seen: List[RoomVariant] = []
        for room in self._rooms.values():
            if room.variant not in seen:
                seen.append(room.variant)
        return seen

    def __iter__(self) -> Iterator[Room]:
        return iter(self._rooms.values())

    def __len__(self) -> int:
        return len(self._rooms)

    def __contains__(self, room_number: object) -> bool:
        return room_number in self._rooms
