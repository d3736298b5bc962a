from __future__ import annotations

from typing import Callable, Dict, List, Optional

from langchain_core.tools import StructuredTool

from hotelbot.config import get_config
from hotelbot.services import OccupancyService, ReservationStore

# Global engine instances
_store: Optional[ReservationStore] = None
_occupancy_service: Optional[OccupancyService] = None


# ------------------------------------
# Engine wiring
# ------------------------------------
def tool(func: Callable) -> Callable:
    """Decorator to mark a function as a front-end facing tool."""
    func._is_tool = True
    func._tool_name = func.__name__
    func._tool_description = func.__doc__ or ""
    return func


def get_store() -> ReservationStore:
    """
    Get or create the reservation store.

    The store is created via config.create_store(), which also replays the
    reservation log so availability reflects previous runs.
    """
    global _store
    if _store is None:
        _store = get_config().create_store()
    return _store


def set_store(store: Optional[ReservationStore]) -> None:
    """Set a custom store instance (useful for testing). Resets the occupancy service."""
    global _store, _occupancy_service
    _store = store
    _occupancy_service = None


def get_occupancy_service() -> OccupancyService:
    global _occupancy_service
    if _occupancy_service is None:
        _occupancy_service = OccupancyService(get_store())
    return _occupancy_service


def set_occupancy_service(service: Optional[OccupancyService]) -> None:
    global _occupancy_service
    _occupancy_service = service


# ------------------------------------
# Tool functions
# ------------------------------------
from .reservation_tools import (
    list_availability,
    get_room_rates,
    find_room,
    book_room,
    book_room_type,
    lookup_reservation,
    cancel_reservation,
)
from .room_tools import (
    check_in,
    check_out,
    check_out_room,
)

_TOOL_FUNCTIONS = [
    list_availability,
    get_room_rates,
    find_room,
    book_room,
    book_room_type,
    lookup_reservation,
    cancel_reservation,
    check_in,
    check_out,
    check_out_room,
]

# LangChain cache
_tools: Optional[List[StructuredTool]] = None
_tool_map: Dict[str, StructuredTool] = {}


def get_tools() -> List[StructuredTool]:
    """Return LangChain `StructuredTool` descriptors for every tool (lazy init)."""
    global _tools, _tool_map
    if _tools is None:
        _tools = [
            StructuredTool.from_function(
                func=func,
                name=func._tool_name,
                description=func._tool_description.strip(),
            )
            for func in _TOOL_FUNCTIONS
        ]
        _tool_map = {t.name: t for t in _tools}
    return _tools


def get_tool_map() -> Dict[str, StructuredTool]:
    """Map tool names to `StructuredTool` instances."""
    if not _tool_map:
        get_tools()
    return _tool_map


__all__ = [
    # Utilities
    "tool",
    "get_store",
    "set_store",
    "get_occupancy_service",
    "set_occupancy_service",

    # Tools
    "list_availability",
    "get_room_rates",
    "find_room",
    "book_room",
    "book_room_type",
    "lookup_reservation",
    "cancel_reservation",
    "check_in",
    "check_out",
    "check_out_room",

    # LangChain helpers
    "get_tools",
    "get_tool_map",
]
