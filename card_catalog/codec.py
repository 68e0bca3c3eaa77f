"""Decode and encode the Scryfall-shaped card list document.

The dataset is a Scryfall list object::

    {"object": "list", "total_cards": 2, "has_more": false,
     "data": [{"id": ..., "name": ..., "type_line": ..., ...}, ...]}

Only the fields the catalog models are read; anything else in a record
(mana_cost, prices, set metadata, ...) is ignored. No file or network
I/O happens here: callers hand over bytes they have already read.
"""

from __future__ import annotations

import json
import logging
from types import MappingProxyType
from typing import Any, Dict, List, Optional, Union

from card_catalog.models import IMAGE_SIZES, Card, CardCatalog, ImageURIs

logger = logging.getLogger(__name__)

REQUIRED_FIELDS = ("id", "name", "type_line", "oracle_text")


class DecodeError(ValueError):
    """The dataset is not well-formed JSON or a card record is incomplete."""


def decode(raw: Union[bytes, str]) -> CardCatalog:
    """Parse a card list document into a CardCatalog.

    Raises:
        DecodeError: on malformed JSON, a missing or non-string required
            field, an empty name, a wrongly typed optional field, or a duplicate card id.
    """
    try:
        doc = json.loads(raw)
    except (json.JSONDecodeError, UnicodeDecodeError, RecursionError) as exc:
        raise DecodeError(f"Dataset is not valid JSON: {exc}") from exc

    if not isinstance(doc, dict):
        raise DecodeError(f"Dataset root must be an object, got {type(doc).__name__}")
    records = doc.get("data")
    if not isinstance(records, list):
        raise DecodeError("Dataset is missing the 'data' card list")

    cards: List[Card] = []
    seen: set = set()
    for i, record in enumerate(records):
        card = _decode_card(record, i)
        if card.id in seen:
            raise DecodeError(f"data[{i}]: duplicate id '{card.id}'")
        seen.add(card.id)
        cards.append(card)

    total_cards = doc.get("total_cards", len(cards))
    if not isinstance(total_cards, int) or isinstance(total_cards, bool):
        total_cards = len(cards)

    catalog = CardCatalog(
        cards=tuple(cards),
        object=str(doc.get("object", "list")),
        total_cards=total_cards,
        has_more=bool(doc.get("has_more", False)),
    )
    logger.debug("Decoded %d cards (source reports %d)", len(catalog), catalog.total_cards)
    return catalog


def encode(catalog: CardCatalog) -> bytes:
    """Serialize a CardCatalog back to the list document decode() reads.

    Absent optional fields are omitted rather than written as null.
    """
    doc = {
        "object": catalog.object,
        "total_cards": catalog.total_cards,
        "has_more": catalog.has_more,
        "data": [_encode_card(card) for card in catalog.cards],
    }
    return json.dumps(doc, indent=2, ensure_ascii=False).encode("utf-8")


# ------------------------------------------------------------------
# Internal
# ------------------------------------------------------------------


def _decode_card(raw: Any, index: int) -> Card:
    prefix = f"data[{index}]"
    if not isinstance(raw, dict):
        raise DecodeError(f"{prefix}: card record must be an object")

    for required in REQUIRED_FIELDS:
        if required not in raw or raw[required] is None:
            raise DecodeError(f"{prefix}: missing required field '{required}'")
        if not isinstance(raw[required], str):
            raise DecodeError(f"{prefix}: field '{required}' must be a string")

    if not raw["name"]:
        raise DecodeError(f"{prefix}: field 'name' must not be empty")

    return Card(
        id=raw["id"],
        name=raw["name"],
        type_line=raw["type_line"],
        oracle_text=raw["oracle_text"],
        collector_number=_optional_str(raw, "collector_number", prefix),
        image_uris=_decode_image_uris(raw.get("image_uris"), prefix),
        legalities=_decode_legalities(raw.get("legalities"), prefix),
    )


def _optional_str(raw: Dict[str, Any], key: str, prefix: str) -> Optional[str]:
    value = raw.get(key)
    if value is None:
        return None
    if not isinstance(value, str):
        raise DecodeError(f"{prefix}: field '{key}' must be a string")
    return value


def _decode_image_uris(raw: Any, prefix: str) -> Optional[ImageURIs]:
    if raw is None:
        return None
    if not isinstance(raw, dict):
        raise DecodeError(f"{prefix}: 'image_uris' must be an object")
    # Scryfall also ships "png" and "border_crop"; only the four slots are kept
    return ImageURIs(**{
        size: _optional_str(raw, size, f"{prefix}.image_uris") for size in IMAGE_SIZES
    })


def _decode_legalities(raw: Any, prefix: str):
    if raw is None:
        return None
    if not isinstance(raw, dict):
        raise DecodeError(f"{prefix}: 'legalities' must be an object")
    for fmt, status in raw.items():
        if not isinstance(status, str):
            raise DecodeError(f"{prefix}.legalities: status for '{fmt}' must be a string")
    if not raw:
        return None
    return MappingProxyType(dict(raw))


def _encode_card(card: Card) -> Dict[str, Any]:
    out: Dict[str, Any] = {
        "id": card.id,
        "name": card.name,
        "type_line": card.type_line,
        "oracle_text": card.oracle_text,
    }
    if card.collector_number is not None:
        out["collector_number"] = card.collector_number
    if card.image_uris is not None:
        uris: Dict[str, str] = {}
        for size in IMAGE_SIZES:
            url = card.image_uris.get(size)
            if url is not None:
                uris[size] = url
        out["image_uris"] = uris
    if card.legalities is not None:
        out["legalities"] = dict(card.legalities)
    return out
