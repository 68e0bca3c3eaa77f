"""Tests for loading the dataset at startup."""

import logging

from card_catalog.loader import BUNDLED_DATASET, load_catalog


def test_bundled_dataset_loads():
    assert BUNDLED_DATASET.exists()
    catalog = load_catalog()
    assert len(catalog) > 0
    ids = [c.id for c in catalog]
    assert len(ids) == len(set(ids))
    assert all(c.name for c in catalog)


def test_load_from_path(tmp_path):
    path = tmp_path / "cards.json"
    path.write_text(
        '{"object": "list", "total_cards": 1, "has_more": false, "data": ['
        '{"id": "1", "name": "Island", "type_line": "Basic Land", "oracle_text": ""}]}'
    )
    catalog = load_catalog(str(path))
    assert [c.name for c in catalog] == ["Island"]


def test_malformed_dataset_gives_empty_catalog(tmp_path, caplog):
    path = tmp_path / "cards.json"
    path.write_text('{"data": [{"id": "1", "name": "Island"}]}')
    with caplog.at_level(logging.ERROR):
        catalog = load_catalog(str(path))
    assert len(catalog) == 0
    assert "Catalog unavailable" in caplog.text


def test_missing_dataset_gives_empty_catalog(tmp_path, caplog):
    with caplog.at_level(logging.ERROR):
        catalog = load_catalog(str(tmp_path / "missing.json"))
    assert len(catalog) == 0
    assert "Could not read dataset" in caplog.text
