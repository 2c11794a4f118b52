"""
Bundled static resources.

Currently the placeholder plugin icon written to ``Resources/Icon128.png``
when the caller supplies none.
"""

from __future__ import annotations

import logging
from functools import cache
from pathlib import Path

logger = logging.getLogger(__name__)

_DATA_DIR = Path(__file__).parent

DEFAULT_ICON_FILENAME = "Icon128.png"


@cache
def default_icon() -> bytes:
    """Return the bytes of the bundled placeholder icon."""
    path = _DATA_DIR / DEFAULT_ICON_FILENAME
    data = path.read_bytes()
    logger.debug("Loaded default icon (%d bytes) from %s", len(data), path)
    return data
