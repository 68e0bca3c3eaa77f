"""Card catalog data models.

A catalog is decoded once from the bundled dataset and never mutated:
every model here is a frozen dataclass, and derived views (sorted,
filtered) are new tuples of the same Card objects.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, Mapping, Optional, Tuple

IMAGE_SIZES: Tuple[str, ...] = ("small", "normal", "large", "art_crop")


@dataclass(frozen=True)
class ImageURIs:
    """Named artwork URLs for a card; any slot may be missing."""

    small: Optional[str] = None
    normal: Optional[str] = None
    large: Optional[str] = None
    art_crop: Optional[str] = None

    def get(self, size: str) -> Optional[str]:
        """Return the URL for a slot name ("small", "art_crop", ...)."""
        if size not in IMAGE_SIZES:
            raise ValueError(f"Unknown image size '{size}'. Known: {list(IMAGE_SIZES)}")
        return getattr(self, size)


@dataclass(frozen=True)
class Card:
    """One catalog entry."""

    id: str  # Scryfall UUID, also the render-list key
    name: str
    type_line: str
    oracle_text: str
    collector_number: Optional[str] = None  # e.g. "12", "12a", "★"
    image_uris: Optional[ImageURIs] = None
    legalities: Optional[Mapping[str, str]] = None  # format -> status, unordered

    def __post_init__(self) -> None:
        # An empty legalities map means the same as none at all
        if self.legalities is not None and not self.legalities:
            object.__setattr__(self, "legalities", None)

    def image_url(self, size: str) -> Optional[str]:
        """Return the artwork URL for a slot, or None when absent."""
        if self.image_uris is None:
            return None
        return self.image_uris.get(size)

    def __hash__(self) -> int:
        return hash(self.id)


@dataclass(frozen=True)
class CardCatalog:
    """Immutable ordered sequence of cards loaded from the dataset.

    `total_cards` and `has_more` are copied from the source document for
    display only; the whole list is always loaded eagerly.
    """

    cards: Tuple[Card, ...] = ()
    object: str = "list"
    total_cards: int = 0
    has_more: bool = False

    def __len__(self) -> int:
        return len(self.cards)

    def __iter__(self) -> Iterator[Card]:
        return iter(self.cards)

    def get(self, card_id: str) -> Optional[Card]:
        for card in self.cards:
            if card.id == card_id:
                return card
        return None
