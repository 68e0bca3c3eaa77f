"""YAML configuration loader and validation."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from card_catalog.models import IMAGE_SIZES
from card_catalog.query import SortCriterion

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = Path("catalog.yaml")


@dataclass
class DatasetConfig:
    """Where the card list comes from."""

    path: Optional[str] = None  # None -> bundled card_catalog/data/cards.json


@dataclass
class BrowseConfig:
    """Grid view settings."""

    default_sort: str = "name"  # "name" or "collector-number"
    grid_columns: int = 3


@dataclass
class ImagesConfig:
    """Which artwork slot each view shows, and how it is fetched."""

    grid_size: str = "large"
    detail_size: str = "art_crop"
    overlay_size: str = "large"
    timeout_seconds: float = 30.0
    concurrency: int = 5


@dataclass
class AppConfig:
    """Top-level application configuration."""

    dataset: DatasetConfig = field(default_factory=DatasetConfig)
    browse: BrowseConfig = field(default_factory=BrowseConfig)
    images: ImagesConfig = field(default_factory=ImagesConfig)

    @property
    def default_sort(self) -> SortCriterion:
        return SortCriterion.from_slug(self.browse.default_sort)


def load_config(path: Optional[Path] = None, dataset: Optional[str] = None) -> AppConfig:
    """Load configuration from a YAML file, falling back to defaults."""
    config_path = path or DEFAULT_CONFIG_PATH
    if not config_path.exists():
        logger.info("No config file at %s, using defaults", config_path)
        config = AppConfig()
    else:
        logger.info("Loading config from %s", config_path)
        with open(config_path, "r", encoding="utf-8") as f:
            raw = yaml.safe_load(f)
        config = _parse_config(raw) if raw else AppConfig()

    # CLI dataset override
    if dataset:
        config.dataset.path = dataset

    _validate_config(config)
    return config


def _parse_config(raw: Dict[str, Any]) -> AppConfig:
    """Parse raw YAML dict into AppConfig."""
    config = AppConfig()

    if "dataset" in raw:
        ds = raw["dataset"] or {}
        config.dataset = DatasetConfig(path=ds.get("path"))

    if "browse" in raw:
        br = raw["browse"] or {}
        config.browse = BrowseConfig(
            default_sort=str(br.get("default_sort", config.browse.default_sort)),
            grid_columns=br.get("grid_columns", config.browse.grid_columns),
        )

    if "images" in raw:
        img = raw["images"] or {}
        config.images = ImagesConfig(
            grid_size=img.get("grid_size", config.images.grid_size),
            detail_size=img.get("detail_size", config.images.detail_size),
            overlay_size=img.get("overlay_size", config.images.overlay_size),
            timeout_seconds=img.get("timeout_seconds", config.images.timeout_seconds),
            concurrency=img.get("concurrency", config.images.concurrency),
        )

    return config


def _validate_config(config: AppConfig) -> None:
    """Validate config and raise on errors."""
    known_sorts = [c.slug for c in SortCriterion]
    if config.browse.default_sort not in known_sorts:
        raise ValueError(
            f"Config error: unknown default_sort '{config.browse.default_sort}'. "
            f"Known: {known_sorts}"
        )

    if not isinstance(config.browse.grid_columns, int) or config.browse.grid_columns < 1:
        raise ValueError("Config error: grid_columns must be a positive integer")

    for key in ("grid_size", "detail_size", "overlay_size"):
        size = getattr(config.images, key)
        if size not in IMAGE_SIZES:
            raise ValueError(
                f"Config error: unknown image size '{size}' for {key}. "
                f"Known: {list(IMAGE_SIZES)}"
            )

    if not isinstance(config.images.timeout_seconds, (int, float)) or config.images.timeout_seconds <= 0:
        raise ValueError("Config error: timeout_seconds must be positive")

    if not isinstance(config.images.concurrency, int) or config.images.concurrency < 1:
        raise ValueError("Config error: concurrency must be a positive integer")

    logger.info(
        "Config validated: dataset=%s, sort=%s, grid=%s, detail=%s",
        config.dataset.path or "<bundled>",
        config.browse.default_sort,
        config.images.grid_size,
        config.images.detail_size,
    )
