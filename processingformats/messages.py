from __future__ import annotations

import logging

from .base import ProcessingEntity
from .hypocenter import Hypocenter
from .jsoncodec import deserialize
from .site import Site
from .traveltime import TravelTimeData, TravelTimePlotData, TravelTimeRequest

logger = logging.getLogger(__name__)

ENTITY_TYPES: dict[str, type[ProcessingEntity]] = {
    "site": Site,
    "hypocenter": Hypocenter,
    "traveltimedata": TravelTimeData,
    "traveltimeplotdata": TravelTimePlotData,
    "traveltimerequest": TravelTimeRequest,
}


def parse_message(text: str | bytes, kind: str) -> ProcessingEntity:
    """Parse JSON text into the entity registered under ``kind``.

    Raises JsonParseError for malformed text and EntityTypeError when the
    document is not a JSON object. Field problems are left to validation.
    """
    try:
        entity_cls = ENTITY_TYPES[kind.lower()]
    except KeyError:
        raise ValueError(f"Unknown message type {kind!r}") from None

    node = deserialize(text)
    entity = entity_cls.from_json(node)
    logger.debug("Parsed %s with %d keys", entity_cls.__name__, len(node))
    return entity
