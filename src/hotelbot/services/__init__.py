from .room_catalog import RoomCatalog
from .availability_service import AvailabilityIndex
from .reservation_service import ReservationStore
from .occupancy_service import OccupancyService

__all__ = [
    "RoomCatalog",
    "AvailabilityIndex",
    "ReservationStore",
    "OccupancyService",
]
