"""Tests for the browsing state behind the grid and detail views."""

import pytest

from card_catalog.browser import CatalogBrowser
from card_catalog.models import Card, CardCatalog, ImageURIs
from card_catalog.query import SortCriterion


ZEBRA = Card(
    id="1",
    name="Zebra",
    type_line="Creature — Zebra",
    oracle_text="",
    collector_number="002",
    image_uris=ImageURIs(
        large="https://example.com/large/zebra.jpg",
        art_crop="https://example.com/art/zebra.jpg",
    ),
    legalities={"vintage": "legal", "commander": "banned"},
)
APPLE = Card(id="2", name="Apple", type_line="Artifact — Food", oracle_text="", collector_number="001")
ZAP = Card(id="3", name="Zap", type_line="Instant", oracle_text="", collector_number="010")

CATALOG = CardCatalog(cards=(ZEBRA, APPLE, ZAP), total_cards=3)


@pytest.fixture
def browser():
    return CatalogBrowser(CATALOG)


def test_initial_view_sorted_by_name(browser):
    assert browser.visible == (APPLE, ZAP, ZEBRA)
    assert browser.search_text == ""


def test_search_recomputes_visible(browser):
    assert browser.search("z") == (ZAP, ZEBRA)
    assert browser.visible == (ZAP, ZEBRA)
    assert browser.clear_search() == (APPLE, ZAP, ZEBRA)


def test_sort_change(browser):
    assert browser.set_sort(SortCriterion.COLLECTOR_NUMBER) == (APPLE, ZEBRA, ZAP)


def test_search_does_not_reorder(browser):
    browser.set_sort(SortCriterion.COLLECTOR_NUMBER)
    before = browser.visible
    after = browser.search("z")
    assert [c for c in before if c in after] == list(after)


def test_catalog_untouched(browser):
    browser.search("zeb")
    browser.set_sort(SortCriterion.COLLECTOR_NUMBER)
    assert browser.catalog.cards == (ZEBRA, APPLE, ZAP)


def test_select_builds_detail(browser):
    detail = browser.select("1")
    assert browser.selected is ZEBRA
    assert detail.card is ZEBRA
    assert detail.header_image_url == "https://example.com/art/zebra.jpg"
    assert detail.overlay_image_url == "https://example.com/large/zebra.jpg"
    assert [r.format for r in detail.legalities] == ["commander", "vintage"]


def test_select_card_without_images(browser):
    detail = browser.select("2")
    assert detail.header_image_url is None
    assert detail.overlay_image_url is None
    assert detail.legalities == []


def test_select_unknown_id(browser):
    with pytest.raises(KeyError):
        browser.select("nope")
    assert browser.selected is None


def test_overlay_toggle(browser):
    assert browser.toggle_overlay() is False  # nothing selected
    browser.select("1")
    assert browser.overlay_shown is False
    assert browser.toggle_overlay() is True
    assert browser.overlay_shown is True
    assert browser.toggle_overlay() is False


def test_back_and_reselect_reset_overlay(browser):
    browser.select("1")
    browser.toggle_overlay()
    browser.select("3")
    assert browser.overlay_shown is False
    browser.toggle_overlay()
    browser.back()
    assert browser.selected is None
    assert browser.overlay_shown is False


def test_custom_image_sizes():
    browser = CatalogBrowser(CATALOG, detail_size="large", overlay_size="art_crop")
    detail = browser.select("1")
    assert detail.header_image_url.endswith("large/zebra.jpg")
    assert detail.overlay_image_url.endswith("art/zebra.jpg")


def test_empty_catalog_browses():
    browser = CatalogBrowser(CardCatalog())
    assert browser.visible == ()
    assert browser.search("bolt") == ()
