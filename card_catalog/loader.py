"""Read the bundled dataset and hand it to the decoder."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

from card_catalog.codec import DecodeError, decode
from card_catalog.models import CardCatalog

logger = logging.getLogger(__name__)

BUNDLED_DATASET = Path(__file__).parent / "data" / "cards.json"


def load_catalog(path: Optional[str] = None) -> CardCatalog:
    """Load the catalog once at startup.

    A missing, unreadable or malformed dataset means the catalog is
    unavailable: the error is logged and an empty catalog is returned so
    the browser still renders (with no cards).
    """
    dataset = Path(path) if path else BUNDLED_DATASET
    try:
        raw = dataset.read_bytes()
    except OSError as exc:
        logger.error("Could not read dataset %s: %s", dataset, exc)
        return CardCatalog()

    try:
        catalog = decode(raw)
    except DecodeError as exc:
        logger.error("Catalog unavailable, %s is malformed: %s", dataset, exc)
        return CardCatalog()

    logger.info("Loaded %d cards from %s", len(catalog), dataset)
    return catalog
