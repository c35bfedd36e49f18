"""Functionality behind the routes."""

import asyncio
import logging
from pathlib import Path
import re

import data
from domain.document import menu_from_text
from domain.feed import menu_from_feed
from domain.models import Menu, WeekNumber
from domain.repository import MenuRepository


logger = logging.getLogger(__name__)


_DIGITS = re.compile(r"\d+")


def digits_only(text: str) -> str | None:
    match = _DIGITS.search(text)
    return match.group(0) if match else None


async def feed_menu(
    week_number: WeekNumber,
    *,
    feed: data.FeedClient,
    suffixes: list[str],
) -> Menu:
    record = await feed.snapshot()
    return menu_from_feed(record, week_number, suffixes)


async def stored_menu(week_number: WeekNumber, *, repository: MenuRepository) -> Menu:
    return await repository.get(week_number)


async def menu_from_upload(
    name: str,
    content: bytes,
    *,
    repository: MenuRepository,
    uploads_dir: Path,
) -> Menu | None:
    """Store an uploaded deck, parse it and persist the menu.

    Returns None for uploads that cannot be tied to a week.
    """
    # Keep only the final path component of whatever the client sent.
    name = Path(name).name
    if not name.strip("."):
        return None

    await asyncio.to_thread((uploads_dir / name).write_bytes, content)
    logger.info("Finished uploading %s", name)

    text = await data.text_from_slides_file(content)
    menu = menu_from_text(text)

    week_number = digits_only(name) or digits_only(str(menu.week_number or ""))
    if week_number is None:
        logger.warning("No week number in %s, not storing it", name)
        return None

    await repository.save(menu, week_number)
    logger.info("Created menu for week %s", week_number)
    return menu


async def menus_from_uploads(
    files: list[tuple[str, bytes]],
    *,
    repository: MenuRepository,
    uploads_dir: Path,
) -> list[Menu]:
    menus = await asyncio.gather(
        *(
            menu_from_upload(
                name, content, repository=repository, uploads_dir=uploads_dir
            )
            for name, content in files
        )
    )
    return [m for m in menus if m is not None]
