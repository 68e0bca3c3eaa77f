"""Terminal browser for the card catalog."""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from pathlib import Path
from typing import List, Optional

from rich.console import Console, Group
from rich.logging import RichHandler
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from card_catalog.browser import CardDetail, CatalogBrowser
from card_catalog.config import AppConfig, load_config
from card_catalog.images import ImageLoader, ImagePhase, ImageResult
from card_catalog.legality import badge_style
from card_catalog.loader import load_catalog
from card_catalog.models import IMAGE_SIZES, Card
from card_catalog.query import SortCriterion

console = Console()


def main(argv: Optional[List[str]] = None) -> None:
    """Entry point for the CLI."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    # Set up logging
    level = logging.WARNING
    if args.verbose == 1:
        level = logging.INFO
    elif args.verbose >= 2:
        level = logging.DEBUG

    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, rich_tracebacks=True)],
    )

    if not hasattr(args, "func"):
        parser.print_help()
        return

    args.func(args)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="card-catalog",
        description="Browse a bundled trading-card dataset",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="count",
        default=0,
        help="Increase verbosity (-v info, -vv debug)",
    )
    parser.add_argument(
        "-c", "--config",
        type=Path,
        default=None,
        help="Path to catalog.yaml (default: catalog.yaml)",
    )
    parser.add_argument(
        "--dataset",
        type=str,
        default=None,
        help="Card list JSON to load instead of the bundled dataset",
    )

    subparsers = parser.add_subparsers(title="commands", dest="command")

    # browse
    browse_parser = subparsers.add_parser("browse", help="Show the card grid")
    browse_parser.add_argument(
        "--sort",
        choices=[c.slug for c in SortCriterion],
        default=None,
        help="Sort order (default from config: name)",
    )
    browse_parser.add_argument(
        "--search",
        type=str,
        default="",
        help="Only cards whose name or collector number contains this text",
    )
    browse_parser.set_defaults(func=_cmd_browse)

    # show
    show_parser = subparsers.add_parser("show", help="Show the detail view for a card")
    show_parser.add_argument("card_id", help="Card id (Scryfall UUID)")
    show_parser.add_argument(
        "--enlarge",
        action="store_true",
        help="Also show the enlarged image overlay",
    )
    show_parser.add_argument(
        "--no-images",
        action="store_true",
        help="Do not fetch artwork, only list the URLs",
    )
    show_parser.set_defaults(func=_cmd_show)

    # fetch
    fetch_parser = subparsers.add_parser("fetch", help="Fetch one artwork slot for a card")
    fetch_parser.add_argument("card_id", help="Card id (Scryfall UUID)")
    fetch_parser.add_argument(
        "--size",
        choices=list(IMAGE_SIZES),
        default=None,
        help="Image slot (default from config: large)",
    )
    fetch_parser.set_defaults(func=_cmd_fetch)

    return parser


def _load_app_config(args: argparse.Namespace) -> AppConfig:
    """Load config, applying CLI overrides."""
    try:
        return load_config(args.config, dataset=args.dataset)
    except ValueError as exc:
        console.print(f"[red]{exc}[/red]")
        sys.exit(1)


def _open_browser(config: AppConfig) -> CatalogBrowser:
    catalog = load_catalog(config.dataset.path)
    return CatalogBrowser(
        catalog,
        sort=config.default_sort,
        detail_size=config.images.detail_size,
        overlay_size=config.images.overlay_size,
    )


def _select_or_exit(browser: CatalogBrowser, card_id: str) -> CardDetail:
    try:
        return browser.select(card_id)
    except KeyError:
        console.print(f"[red]No card with id {card_id}[/red]")
        sys.exit(1)


# ------------------------------------------------------------------
# Command handlers
# ------------------------------------------------------------------


def _cmd_browse(args: argparse.Namespace) -> None:
    config = _load_app_config(args)
    browser = _open_browser(config)
    if args.sort:
        browser.set_sort(SortCriterion.from_slug(args.sort))
    browser.search(args.search)

    cards = browser.visible
    console.print(
        f"\n[bold]Cards[/bold]  sorted by {browser.sort.value}"
        + (f", matching '{browser.search_text}'" if browser.search_text else "")
    )

    if not cards:
        console.print("[yellow]No cards to show[/yellow]")
        return

    console.print(_render_grid(cards, config.browse.grid_columns, config.images.grid_size))
    console.print(f"{len(cards)} of {len(browser.catalog)} cards")


def _cmd_show(args: argparse.Namespace) -> None:
    config = _load_app_config(args)
    browser = _open_browser(config)
    detail = _select_or_exit(browser, args.card_id)
    if args.enlarge:
        browser.toggle_overlay()

    # The large image is only loaded once the overlay is shown
    urls = [detail.header_image_url]
    if browser.overlay_shown:
        urls.append(detail.overlay_image_url)

    if args.no_images:
        slots = [_render_unfetched(url) for url in urls]
    else:
        slots = [_render_image(r) for r in asyncio.run(_fetch_images(config, urls))]

    console.print(_render_detail(detail, slots[0]))
    if browser.overlay_shown:
        console.print(Panel(slots[1], title="Enlarged", border_style="white"))


def _cmd_fetch(args: argparse.Namespace) -> None:
    config = _load_app_config(args)
    browser = _open_browser(config)
    detail = _select_or_exit(browser, args.card_id)

    size = args.size or config.images.grid_size
    (result,) = asyncio.run(_fetch_images(config, [detail.card.image_url(size)]))

    table = Table(title=f"{detail.card.name} ({size})")
    table.add_column("Field", style="cyan")
    table.add_column("Value")
    table.add_row("URL", result.url or "-")
    table.add_row("Phase", _render_image(result))
    table.add_row("Bytes", str(len(result.content)))
    table.add_row("Content type", result.content_type or "-")
    console.print(table)

    if result.phase is ImagePhase.FAILED:
        sys.exit(1)


async def _fetch_images(config: AppConfig, urls: List[Optional[str]]) -> List[ImageResult]:
    loader = ImageLoader(
        timeout=config.images.timeout_seconds,
        concurrency=config.images.concurrency,
    )
    try:
        return await loader.load_many(urls)
    finally:
        await loader.close()


# ------------------------------------------------------------------
# Rendering
# ------------------------------------------------------------------


def _render_grid(cards: tuple, columns: int, image_size: str) -> Table:
    grid = Table.grid(padding=(0, 1), expand=True)
    for _ in range(columns):
        grid.add_column(ratio=1)

    tiles = [_render_tile(card, image_size) for card in cards]
    for start in range(0, len(tiles), columns):
        row = tiles[start:start + columns]
        row += [Text("")] * (columns - len(row))
        grid.add_row(*row)
    return grid


def _render_tile(card: Card, image_size: str) -> Panel:
    body = Text(card.name, style="bold", justify="center")
    if card.image_url(image_size) is None:
        body.append("\n[no image]", style="grey50")
    return Panel(
        body,
        subtitle=card.collector_number or None,
        title=card.id[:8],
        border_style="grey50",
    )


def _render_detail(detail: CardDetail, header: Text) -> Panel:
    card = detail.card
    parts: list = [header, Text(card.name, style="bold")]
    if card.collector_number is not None:
        parts.append(Text(f"Collector Number: {card.collector_number}", style="grey50"))
    parts.append(Text(card.type_line))
    parts.append(Text(card.oracle_text))

    if detail.legalities:
        badges = Table.grid(padding=(0, 1))
        badges.add_column()
        badges.add_column(width=16)
        badges.add_column()
        badges.add_column(width=16)
        cells: list = []
        for row in detail.legalities:
            cells.append(Text(f" {row.status} ", style=badge_style(row.classification)))
            cells.append(Text(row.format, no_wrap=True, overflow="ellipsis"))
        for start in range(0, len(cells), 4):
            chunk = cells[start:start + 4]
            chunk += [Text("")] * (4 - len(chunk))
            badges.add_row(*chunk)
        parts.append(Text("\nLegalities", style="bold underline"))
        parts.append(badges)

    return Panel(Group(*parts), title=card.name)


def _render_image(result: ImageResult) -> Text:
    if result.phase is ImagePhase.EMPTY:
        return Text("[no image]", style="grey50")
    if result.phase is ImagePhase.LOADING:
        return Text(f"… {result.url}", style="yellow")
    if result.phase is ImagePhase.FAILED:
        return Text(f"⚠ {result.url} ({result.error})", style="red")
    return Text(f"✔ {result.url} ({len(result.content)} bytes)", style="green")


def _render_unfetched(url: Optional[str]) -> Text:
    if not url:
        return Text("[no image]", style="grey50")
    return Text(f"not fetched: {url}", style="grey50")
