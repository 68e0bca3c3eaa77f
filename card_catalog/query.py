"""In-memory sort and filter over a loaded catalog.

Everything here is a pure function of its arguments. The visible list
is always filter(sort(cards)), so typing into the search box never
reorders what is already on screen.
"""

from __future__ import annotations

from enum import Enum
from typing import Iterable, Tuple

from card_catalog.models import Card


class SortCriterion(Enum):
    """Sort options offered by the browse picker; values are the labels."""

    NAME = "Name"
    COLLECTOR_NUMBER = "Collector Number"

    @property
    def slug(self) -> str:
        """Config/CLI spelling, e.g. "collector-number"."""
        return self.name.lower().replace("_", "-")

    @classmethod
    def from_slug(cls, slug: str) -> "SortCriterion":
        for criterion in cls:
            if criterion.slug == slug:
                return criterion
        raise ValueError(
            f"Unknown sort '{slug}'. Available: {[c.slug for c in cls]}"
        )


def sort_by(cards: Iterable[Card], criterion: SortCriterion) -> Tuple[Card, ...]:
    """Return the cards ordered by the criterion.

    Names compare case-sensitively; a missing collector number sorts as
    the empty string. sorted() is stable, so ties keep their input order.
    """
    if criterion is SortCriterion.NAME:
        return tuple(sorted(cards, key=lambda c: c.name))
    if criterion is SortCriterion.COLLECTOR_NUMBER:
        return tuple(sorted(cards, key=lambda c: c.collector_number or ""))
    raise ValueError(f"Unsupported sort criterion: {criterion!r}")


def filter_cards(cards: Iterable[Card], search_text: str) -> Tuple[Card, ...]:
    """Keep cards whose name or collector number contains the search text.

    Matching is case-insensitive substring containment with no other
    normalisation. An empty search returns the input unchanged.
    """
    cards = tuple(cards)
    if not search_text:
        return cards

    needle = search_text.lower()
    return tuple(card for card in cards if _matches(card, needle))


def visible_cards(
    cards: Iterable[Card], criterion: SortCriterion, search_text: str = ""
) -> Tuple[Card, ...]:
    """The list shown to the user: sort first, then filter."""
    return filter_cards(sort_by(cards, criterion), search_text)


def _matches(card: Card, needle: str) -> bool:
    if needle in card.name.lower():
        return True
    return card.collector_number is not None and needle in card.collector_number.lower()
