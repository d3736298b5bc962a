"""
Base configuration abstractions for Hotel Bot.
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import timezone, tzinfo
from typing import Dict, Optional

from hotelbot.adapters.base import ReservationLog
from hotelbot.services import RoomCatalog, ReservationStore


class HotelBotConfig(ABC):
    """Abstract configuration contract for a hotel deployment."""

    @abstractmethod
    def get_store_url(self) -> str:
        """Return the reservation log location (flat file path or sqlite:/// URL)."""

    @abstractmethod
    def get_room_layout(self) -> Dict[int, str]:
        """Return ``{room_number: room type name}`` in catalog order."""

    @abstractmethod
    def create_log(self) -> ReservationLog:
        """
        Create and initialise the reservation log for this deployment.
        Returns:
            ReservationLog: ready to append / rewrite / load
        """

    def get_timezone(self) -> tzinfo:
        """Timezone whose midnights are stored as epoch milliseconds. Default: UTC"""
        return timezone.utc

    def get_operator_password(self) -> Optional[str]:
        """Optional front desk password for check-in / check-out."""
        return None

    def get_hotel_display_name(self) -> str:
        """Human friendly hotel label for UI surfaces."""
        return "Hotel Bot"

    def create_catalog(self) -> RoomCatalog:
        return RoomCatalog.from_layout(self.get_room_layout())

    def create_store(self) -> ReservationStore:
        """Wire catalog, log and store together and replay the log."""
        store = ReservationStore(
            catalog=self.create_catalog(),
            log=self.create_log(),
            tz=self.get_timezone(),
        )
        store.load()
        return store
