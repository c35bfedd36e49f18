import asyncio
import json
from typing import Any

import httpx
import pytest

from data import FeedClient, FeedError
from domain.feed import MalformedFeedRecord, MissingWeeklyMenu, menu_from_feed, same_week


def feed_record(number: Any = 12) -> dict[str, Any]:
    days = [
        {
            "text": text,
            "dishes": [
                {"header": "1. Varmrett", "subHeader": f"{dish} 64 grader"},
                {"header": "2. Suppe", "subHeader": "Løksuppe"},
            ],
        }
        for text, dish in (
            ("MANDAG", "Fiskegrateng"),
            ("TYSDAG", "Taco"),
            ("ONSDAG", "Lasagne"),
            ("TORSDAG", "Kjøttkaker"),
            ("FREDAG", "Pizza"),
            ("LØRDAG", "Graut"),
        )
    ]
    return {
        "Context": {
            "weeklyMenu": {
                "content": [
                    {"number": 11, "days": []},
                    {"number": number, "days": days},
                ]
            }
        }
    }


def test_menu_from_feed() -> None:
    got = menu_from_feed(feed_record(), "12")
    assert got.week_number == "12"
    assert [d.day for d in got.days] == ["Mandag", "Tirsdag", "Onsdag", "Torsdag", "Fredag"]
    assert got.days[0].dishes == ("Varmrett: Fiskegrateng", "Suppe: Løksuppe")


def test_menu_from_feed_cleans_dishes() -> None:
    record = feed_record()
    record["Context"]["weeklyMenu"]["content"][1]["days"][0]["dishes"] = [
        {"header": "3. Kjøttkaker", "subHeader": "med tyttebær 64 grader"},
        {"header": "", "subHeader": ""},
    ]
    got = menu_from_feed(record, 12)
    assert got.days[0].dishes == ("Kjøttkaker: med tyttebær",)


@pytest.mark.parametrize("number", (12, "12", " 12"))
def test_menu_from_feed_loose_week_match(number: Any) -> None:
    assert len(menu_from_feed(feed_record(number), 12).days) == 5


@pytest.mark.parametrize(
    "record",
    (
        {},
        {"Context": {}},
        {"Context": {"weeklyMenu": None}},
        feed_record(number=13),
    ),
)
def test_menu_from_feed_missing(record: dict[str, Any]) -> None:
    with pytest.raises(MissingWeeklyMenu, match="missing weekly menu"):
        menu_from_feed(record, 12)


@pytest.mark.parametrize(
    "record",
    (
        {"Context": "x"},
        {"Context": ["x"]},
        {"Context": {"weeklyMenu": []}},
        {"Context": {"weeklyMenu": {"content": "x"}}},
        {"Context": {"weeklyMenu": {"content": ["x"]}}},
        {"Context": {"weeklyMenu": {"content": [{"number": 12, "days": "x"}]}}},
        {"Context": {"weeklyMenu": {"content": [{"number": 12, "days": [1]}]}}},
        {"Context": {"weeklyMenu": {"content": [{"number": 12, "days": [{"dishes": {}}]}]}}},
        {"Context": {"weeklyMenu": {"content": [{"number": 12, "days": [{"dishes": ["x"]}]}]}}},
    ),
)
def test_menu_from_feed_malformed(record: dict[str, Any]) -> None:
    with pytest.raises(MalformedFeedRecord, match="Malformed feed record"):
        menu_from_feed(record, 12)


@pytest.mark.parametrize(
    "left,right,expected",
    (
        (12, "12", True),
        (12, "012", True),
        (12.0, 12, True),
        ("12.0", "12", True),
        (12, "13", False),
        (12.5, "12", False),
        ("12/13", "12/13", True),
        ("abc", "12", False),
        (None, "12", False),
    ),
)
def test_same_week(left: Any, right: Any, expected: bool) -> None:
    assert same_week(left, right) is expected


def sse(*events: tuple[str, Any]) -> bytes:
    return "".join(
        f"event: {event}\ndata: {json.dumps(data)}\n\n" for event, data in events
    ).encode()


def client_for(handler: Any, timeout: float = 1.0) -> FeedClient:
    return FeedClient(
        "https://lunch.example/admin.json",
        timeout=timeout,
        http_client=httpx.AsyncClient(transport=httpx.MockTransport(handler)),
    )


@pytest.mark.asyncio
async def test_snapshot_first_put() -> None:
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        body = sse(
            ("keep-alive", None),
            ("put", {"path": "/", "data": feed_record()}),
            ("put", {"path": "/", "data": {"later": True}}),
        )
        return httpx.Response(200, content=body)

    got = await client_for(handler).snapshot()
    assert got == feed_record()
    assert seen[0].headers["accept"] == "text/event-stream"


@pytest.mark.asyncio
async def test_snapshot_http_error() -> None:
    client = client_for(lambda request: httpx.Response(503))
    with pytest.raises(FeedError):
        await client.snapshot()


@pytest.mark.asyncio
async def test_snapshot_cancelled() -> None:
    client = client_for(lambda request: httpx.Response(200, content=sse(("cancel", None))))
    with pytest.raises(FeedError, match="cancel"):
        await client.snapshot()


@pytest.mark.asyncio
async def test_snapshot_malformed() -> None:
    body = b"event: put\ndata: {not json\n\n"
    client = client_for(lambda request: httpx.Response(200, content=body))
    with pytest.raises(FeedError, match="Malformed"):
        await client.snapshot()


@pytest.mark.asyncio
async def test_snapshot_times_out() -> None:
    async def handler(request: httpx.Request) -> httpx.Response:
        await asyncio.sleep(5)
        return httpx.Response(200)

    with pytest.raises(FeedError, match="No snapshot"):
        await client_for(handler, timeout=0.05).snapshot()


def test_feed_client_needs_url() -> None:
    with pytest.raises(ValueError):
        FeedClient("")


@pytest.mark.asyncio
async def test_snapshot_follows_redirects() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        if request.url.host == "lunch.example":
            return httpx.Response(
                307, headers={"Location": "https://shard.lunch.example/admin.json"}
            )
        return httpx.Response(
            200, content=sse(("put", {"path": "/", "data": feed_record()}))
        )

    assert await client_for(handler).snapshot() == feed_record()
