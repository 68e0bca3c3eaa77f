"""Browsing state for the catalog views.

CatalogBrowser is the single source of truth the renderers read: the
loaded catalog plus the user's inputs (search text, sort, selected
card, overlay flag). The visible list is derived on every access and
never stored, so it cannot drift from the inputs.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Optional, Tuple

from card_catalog.legality import LegalityRow, legality_rows
from card_catalog.models import Card, CardCatalog
from card_catalog.query import SortCriterion, visible_cards

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CardDetail:
    """Everything the detail view shows for one card."""

    card: Card
    header_image_url: Optional[str]
    overlay_image_url: Optional[str]
    legalities: List[LegalityRow]


class CatalogBrowser:
    """Holds user inputs over an immutable catalog and derives the views."""

    def __init__(
        self,
        catalog: CardCatalog,
        sort: SortCriterion = SortCriterion.NAME,
        detail_size: str = "art_crop",
        overlay_size: str = "large",
    ) -> None:
        self._catalog = catalog
        self._detail_size = detail_size
        self._overlay_size = overlay_size
        self.sort = sort
        self.search_text = ""
        self._selected_id: Optional[str] = None
        self._overlay_shown = False

    @property
    def catalog(self) -> CardCatalog:
        return self._catalog

    @property
    def visible(self) -> Tuple[Card, ...]:
        return visible_cards(self._catalog.cards, self.sort, self.search_text)

    def search(self, text: str) -> Tuple[Card, ...]:
        self.search_text = text
        return self.visible

    def clear_search(self) -> Tuple[Card, ...]:
        return self.search("")

    def set_sort(self, sort: SortCriterion) -> Tuple[Card, ...]:
        self.sort = sort
        return self.visible

    # ------------------------------------------------------------------
    # Detail view
    # ------------------------------------------------------------------

    @property
    def selected(self) -> Optional[Card]:
        if self._selected_id is None:
            return None
        return self._catalog.get(self._selected_id)

    @property
    def overlay_shown(self) -> bool:
        return self._overlay_shown

    def select(self, card_id: str) -> CardDetail:
        """Open the detail view for a card.

        Raises:
            KeyError: if the id is not in the catalog.
        """
        card = self._catalog.get(card_id)
        if card is None:
            raise KeyError(card_id)
        self._selected_id = card_id
        self._overlay_shown = False
        logger.debug("Selected %s (%s)", card.name, card.id)
        return self.detail(card)

    def back(self) -> None:
        """Leave the detail view."""
        self._selected_id = None
        self._overlay_shown = False

    def toggle_overlay(self) -> bool:
        """Show or hide the enlarged image; no-op outside the detail view."""
        if self._selected_id is None:
            return False
        self._overlay_shown = not self._overlay_shown
        return self._overlay_shown

    def detail(self, card: Card) -> CardDetail:
        return CardDetail(
            card=card,
            header_image_url=card.image_url(self._detail_size),
            overlay_image_url=card.image_url(self._overlay_size),
            legalities=legality_rows(card),
        )
