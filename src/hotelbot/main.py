from __future__ import annotations

import logging
from datetime import datetime, timedelta

from hotelbot.config import get_config
from hotelbot.models import DateRange
from hotelbot.tools import get_store, get_tool_map

logging.basicConfig(format="%(asctime)s - %(name)s - %(levelname)s - %(message)s", level=logging.INFO)
logger = logging.getLogger(__name__)


def main():
    """
    Bootstrap the engine: build the catalog, replay the reservation log and
    expose the tool set a front-end (menu, GUI, chat agent) talks to.
    """
    try:
        config = get_config()
        store = get_store()

        today = datetime.now(store.tz).date()
        tonight = DateRange(today, today + timedelta(days=1))
        logger.info(
            f"{config.get_hotel_display_name()}: {len(store.catalog)} room(s), "
            f"{len(store.list_reservations())} reservation(s), "
            f"{store.count_available(tonight)} free tonight"
        )
        logger.info(f"Tools ready: {', '.join(get_tool_map())}")
    except KeyboardInterrupt:
        logger.info("Stopped by user")
    except Exception as e:
        logger.error(f"System Error: {e}", exc_info=True)


if __name__ == "__main__":
    main()
