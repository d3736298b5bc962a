import os
import sys

import pytest

# Add the project src directory to PYTHONPATH for tests
CURRENT_DIR = os.path.dirname(__file__)
SRC_PATH = os.path.abspath(os.path.join(CURRENT_DIR, "..", "src"))
if SRC_PATH not in sys.path:
    sys.path.insert(0, SRC_PATH)


@pytest.fixture(autouse=True)
def reset_engine_globals():
    """Every test starts without a cached config or store."""
    from hotelbot.config import set_config
    from hotelbot.tools import set_store

    set_config(None)
    set_store(None)
    yield
    set_config(None)
    set_store(None)
