"""Hotel Bot Core - room inventory, reservations and occupancy"""

__version__ = "0.1.0"

# Core abstractions
from .base_config import HotelBotConfig

# Exceptions
from .exceptions import (
    HotelBotError,
    ConfigurationError,
    InvalidRangeError,
    NoAvailabilityError,
    DuplicateReservationIdError,
    NotFoundError,
    ReservationNotFoundError,
    RoomNotFoundError,
    UnknownVariantError,
    InvalidPasswordError,
    PasswordMismatchError,
    OccupancyError,
    PersistenceError,
)

# Config management
from .config import get_config, set_config

# Adapters
from .adapters.base import ReservationLog
from .adapters.flatfile_adapter import FlatFileReservationLog
from .adapters.sqlite_adapter import SQLiteReservationLog

# Engine
from .services import AvailabilityIndex, OccupancyService, ReservationStore, RoomCatalog

# Tools
from .tools import get_store, set_store

__all__ = [
    # Version
    "__version__",

    # Core
    "HotelBotConfig",

    # Exceptions
    "HotelBotError",
    "ConfigurationError",
    "InvalidRangeError",
    "NoAvailabilityError",
    "DuplicateReservationIdError",
    "NotFoundError",
    "ReservationNotFoundError",
    "RoomNotFoundError",
    "UnknownVariantError",
    "InvalidPasswordError",
    "PasswordMismatchError",
    "OccupancyError",
    "PersistenceError",

    # Config
    "get_config",
    "set_config",

    # Adapters
    "ReservationLog",
    "FlatFileReservationLog",
    "SQLiteReservationLog",

    # Engine
    "AvailabilityIndex",
    "OccupancyService",
    "ReservationStore",
    "RoomCatalog",

    # Tool Utilities
    "get_store",
    "set_store",
]
