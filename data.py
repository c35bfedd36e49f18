"""Getting menu material out of the outside world: slide decks and the feed."""

import asyncio
import io
import json
import logging
import re
from typing import Any, AsyncIterator
import warnings
import zipfile

import bs4
import httpx


logger = logging.getLogger(__name__)

# Slide XML is read with html.parser.
warnings.filterwarnings("ignore", category=bs4.XMLParsedAsHTMLWarning)


class InvalidSlideDeck(Exception):
    pass


class FeedError(Exception):
    pass


_SLIDE = re.compile(r"^ppt/slides/slide(\d+)\.xml$")


def _paragraph_text(p: bs4.Tag) -> str:
    # Soft breaks (shift+enter) split a paragraph into separate lines.
    return "".join(
        "\n" if node.name == "a:br" else node.get_text()
        for node in p.find_all(["a:t", "a:br"])
    )


def _slide_lines(xml: bytes) -> list[str]:
    soup = bs4.BeautifulSoup(xml, features="html.parser")
    return [_paragraph_text(p) for p in soup.find_all("a:p")]


def text_from_slides(data: bytes) -> str:
    """Text of a .pptx deck, one line per paragraph, slides in order."""
    try:
        with zipfile.ZipFile(io.BytesIO(data)) as deck:
            slides = sorted(
                (int(m.group(1)), name)
                for name in deck.namelist()
                if (m := _SLIDE.match(name))
            )
            if not slides:
                raise InvalidSlideDeck("No slides in document.")
            lines = [line for _, name in slides for line in _slide_lines(deck.read(name))]
    except zipfile.BadZipFile as e:
        raise InvalidSlideDeck(f"Not a slide deck: {e}") from e
    return "\n".join(lines)


async def text_from_slides_file(data: bytes) -> str:
    return await asyncio.to_thread(text_from_slides, data)


async def _events(resp: httpx.Response) -> AsyncIterator[tuple[str, str]]:
    """Server-sent events as (event, data) pairs."""
    event, data = "message", []
    async for line in resp.aiter_lines():
        if not line:
            if data:
                yield event, "\n".join(data)
            event, data = "message", []
        elif line.startswith("event:"):
            event = line[len("event:") :].strip()
        elif line.startswith("data:"):
            data.append(line[len("data:") :].strip())
    if data:
        yield event, "\n".join(data)


class FeedClient:
    """One-shot reader of a realtime database location.

    Subscribes to the location's event stream, takes the first snapshot and
    unsubscribes. The whole exchange is bounded by `timeout` seconds.
    """

    def __init__(
        self,
        url: str,
        *,
        timeout: float = 10.0,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        if not url:
            raise ValueError("No feed url configured.")
        self.url = url
        self.timeout = timeout
        self.http_client = httpx.AsyncClient() if http_client is None else http_client

    async def snapshot(self) -> dict[str, Any]:
        try:
            async with asyncio.timeout(self.timeout):
                return await self._first_put()
        except TimeoutError as e:
            raise FeedError(f"No snapshot from feed within {self.timeout}s") from e
        except httpx.HTTPError as e:
            raise FeedError(f"Could not fetch feed: {e}") from e

    async def _first_put(self) -> dict[str, Any]:
        logger.info("Subscribing to %s", self.url)
        async with self.http_client.stream(
            "GET",
            self.url,
            headers={"Accept": "text/event-stream"},
            timeout=None,
            follow_redirects=True,
        ) as resp:
            resp.raise_for_status()
            async for event, data in _events(resp):
                match event:
                    case "put":
                        logger.info("Got snapshot, unsubscribing")
                        return self._parse(data)
                    case "cancel" | "auth_revoked":
                        raise FeedError(f"Feed closed the subscription: {event}")
                    case _:
                        continue
        raise FeedError("Feed closed before sending a snapshot.")

    @staticmethod
    def _parse(data: str) -> dict[str, Any]:
        try:
            payload = json.loads(data)
        except json.JSONDecodeError as e:
            raise FeedError(f"Malformed feed data: {e}") from e
        record = payload.get("data") if isinstance(payload, dict) else None
        if not isinstance(record, dict):
            raise FeedError("Malformed feed data: no record.")
        return record

    async def aclose(self) -> None:
        await self.http_client.aclose()
