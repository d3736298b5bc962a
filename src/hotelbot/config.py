from __future__ import annotations

import importlib
import logging
import os
from datetime import timezone, tzinfo
from typing import Dict, Optional, Type
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from dotenv import load_dotenv

from hotelbot.base_config import HotelBotConfig
from hotelbot.adapters.base import ReservationLog
from hotelbot.adapters.flatfile_adapter import FlatFileReservationLog
from hotelbot.adapters.sqlite_adapter import SQLiteReservationLog
from hotelbot.exceptions import ConfigurationError

load_dotenv()

DEFAULT_CONFIG_CLASS = "hotelbot.config.EnvironmentHotelBotConfig"
CONFIG_ENV_KEY = "HOTELBOT_CONFIG"
DEFAULT_STORE_URL = "reservations.txt"
DEFAULT_ROOM_LAYOUT = "101:Standard,102:Standard,201:Suite"

logger = logging.getLogger(__name__)


def _import_config_class(path: str) -> Type[HotelBotConfig]:
    try:
        module_path, class_name = path.rsplit(".", 1)
    except ValueError as exc:
        raise ConfigurationError(f"Invalid config path '{path}'") from exc

    try:
        module = importlib.import_module(module_path)
    except ImportError as exc:
        raise ConfigurationError(f"Could not import module '{module_path}'") from exc

    try:
        cls = getattr(module, class_name)
    except AttributeError as exc:
        raise ConfigurationError(f"Config class '{class_name}' not found in '{module_path}'") from exc

    if not isinstance(cls, type) or not issubclass(cls, HotelBotConfig):
        raise ConfigurationError(f"{path} is not a subclass of HotelBotConfig")

    return cls


def parse_room_layout(value: str) -> Dict[int, str]:
    """Parse ``"101:Standard,102:Standard,201:Suite"`` into an ordered dict."""
    layout: Dict[int, str] = {}
    for item in value.split(","):
        item = item.strip()
        if not item:
            continue
        if ":" not in item:
            raise ConfigurationError(f"Invalid room entry '{item}', expected NUMBER:TYPE")
        number, variant_name = item.split(":", 1)
        try:
            room_number = int(number.strip())
        except ValueError as exc:
            raise ConfigurationError(f"Invalid room number '{number.strip()}'") from exc
        if room_number in layout:
            raise ConfigurationError(f"Room {room_number} is defined twice")
        layout[room_number] = variant_name.strip()
    return layout


class EnvironmentHotelBotConfig(HotelBotConfig):
    """Default configuration that reads from environment variables."""

    def __init__(self) -> None:
        self._env = os.environ

    def get_store_url(self) -> str:
        return self._env.get("RESERVATION_STORE_URL", DEFAULT_STORE_URL)

    def get_room_layout(self) -> Dict[int, str]:
        return parse_room_layout(self._env.get("HOTEL_ROOMS", DEFAULT_ROOM_LAYOUT))

    def get_timezone(self) -> tzinfo:
        name = self._env.get("HOTEL_TIMEZONE")
        if not name:
            return timezone.utc
        try:
            return ZoneInfo(name)
        except (ZoneInfoNotFoundError, ValueError) as exc:
            raise ConfigurationError(f"Unknown timezone '{name}'") from exc

    def get_operator_password(self) -> Optional[str]:
        return self._env.get("OPERATOR_PASSWORD") or None

    def get_hotel_display_name(self) -> str:
        return self._env.get("HOTEL_NAME", "Hotel Bot")

    def create_log(self) -> ReservationLog:
        url = self.get_store_url()
        if url.startswith("sqlite:///"):
            log: ReservationLog = SQLiteReservationLog(url)
        else:
            log = FlatFileReservationLog(url)
        log.init()
        return log


_CONFIG: Optional[HotelBotConfig] = None


def get_config() -> HotelBotConfig:
    global _CONFIG
    if _CONFIG is None:
        class_path = os.getenv(CONFIG_ENV_KEY, DEFAULT_CONFIG_CLASS)
        cls = _import_config_class(class_path)
        _CONFIG = cls()
    return _CONFIG


def set_config(config: Optional[HotelBotConfig]) -> None:
    global _CONFIG
    _CONFIG = config
