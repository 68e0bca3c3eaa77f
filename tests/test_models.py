"""Tests for the catalog data models."""

import dataclasses

import pytest

from card_catalog.models import Card, CardCatalog, ImageURIs


BOLT = Card(
    id="f29ba16f",
    name="Lightning Bolt",
    type_line="Instant",
    oracle_text="Lightning Bolt deals 3 damage to any target.",
    collector_number="161",
    image_uris=ImageURIs(
        normal="https://cards.scryfall.io/normal/bolt.jpg",
        art_crop="https://cards.scryfall.io/art_crop/bolt.jpg",
    ),
)


def test_card_is_frozen():
    with pytest.raises(dataclasses.FrozenInstanceError):
        BOLT.name = "Chain Lightning"


def test_optional_fields_default_to_none():
    card = Card(id="x", name="Island", type_line="Basic Land", oracle_text="")
    assert card.collector_number is None
    assert card.image_uris is None
    assert card.legalities is None


def test_image_url_by_slot():
    assert BOLT.image_url("art_crop") == "https://cards.scryfall.io/art_crop/bolt.jpg"
    assert BOLT.image_url("large") is None


def test_image_url_without_uris():
    card = Card(id="x", name="Island", type_line="Basic Land", oracle_text="")
    assert card.image_url("large") is None


def test_image_url_unknown_slot():
    with pytest.raises(ValueError, match="Unknown image size"):
        BOLT.image_url("png")


def test_card_hashable_with_legalities():
    card = dataclasses.replace(BOLT, legalities={"modern": "legal"})
    assert card in {card}


def test_catalog_lookup_and_iteration():
    island = Card(id="land-001", name="Island", type_line="Basic Land", oracle_text="")
    catalog = CardCatalog(cards=(BOLT, island), total_cards=2)
    assert len(catalog) == 2
    assert list(catalog) == [BOLT, island]
    assert catalog.get("land-001") is island
    assert catalog.get("missing") is None


def test_empty_catalog():
    catalog = CardCatalog()
    assert len(catalog) == 0
    assert catalog.has_more is False


def test_empty_legalities_normalised_to_none():
    card = Card(id="x", name="Plains", type_line="Basic Land", oracle_text="", legalities={})
    assert card.legalities is None
    assert card == Card(id="x", name="Plains", type_line="Basic Land", oracle_text="")
