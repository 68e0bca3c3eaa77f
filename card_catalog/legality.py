"""Format legality classification for detail-view badges."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Dict, List

from card_catalog.models import Card


class LegalityStatus(Enum):
    LEGAL = "legal"
    NOT_LEGAL = "not legal"
    RESTRICTED = "restricted"
    BANNED = "banned"
    UNKNOWN = "unknown"


_KNOWN_STATUSES: Dict[str, LegalityStatus] = {
    "legal": LegalityStatus.LEGAL,
    "not legal": LegalityStatus.NOT_LEGAL,
    "restricted": LegalityStatus.RESTRICTED,
    "banned": LegalityStatus.BANNED,
}

# Badge colours as rich style names
BADGE_STYLES: Dict[LegalityStatus, str] = {
    LegalityStatus.LEGAL: "white on green",
    LegalityStatus.NOT_LEGAL: "white on grey50",
    LegalityStatus.RESTRICTED: "white on red",
    LegalityStatus.BANNED: "white on red",
    LegalityStatus.UNKNOWN: "white on grey50",
}


@dataclass(frozen=True)
class LegalityRow:
    """One badge in the detail view's legalities grid."""

    format: str  # e.g. "commander", "standard"
    status: str  # raw value from the dataset, shown on the badge
    classification: LegalityStatus


def classify(status: str) -> LegalityStatus:
    """Map a raw status string to a LegalityStatus.

    Case-insensitive exact match; anything unrecognised, including the
    empty string, is UNKNOWN. Never raises.
    """
    return _KNOWN_STATUSES.get(status.lower(), LegalityStatus.UNKNOWN)


def badge_style(status: LegalityStatus) -> str:
    return BADGE_STYLES[status]


def legality_rows(card: Card) -> List[LegalityRow]:
    """Return the card's legalities sorted by format name."""
    if not card.legalities:
        return []
    return [
        LegalityRow(format=fmt, status=status, classification=classify(status))
        for fmt, status in sorted(card.legalities.items())
    ]
