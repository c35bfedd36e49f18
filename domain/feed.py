"""Maps the published admin record of the realtime database to a `Menu`.

The record looks like::

    {
        "Context": {
            "weeklyMenu": {
                "content": [
                    {
                        "number": 12,
                        "days": [
                            {
                                "text": "MANDAG",
                                "dishes": [
                                    {"header": "1. Varmrett", "subHeader": "Fiskesuppe 64 grader"},
                                ],
                            },
                        ],
                    },
                ],
            },
        },
    }

Days are listed Monday first and may run into the weekend.
"""

from typing import Any, Iterable

from domain.classify import SEPARATOR, normalize_day
from domain.cleaning import DEFAULT_SUFFIXES, clean
from domain.models import Day, Menu, WeekNumber
from domain.sorting import sort_days


WORKING_DAYS = 5


class FeedRecordError(Exception):
    pass


class MissingWeeklyMenu(FeedRecordError):
    def __init__(self, message: str = "missing weekly menu") -> None:
        super().__init__(message)


class MalformedFeedRecord(FeedRecordError):
    def __init__(self, where: str, expected: type) -> None:
        super().__init__(f"Malformed feed record: {where} is not a {expected.__name__}")


def _field(container: dict[str, Any], key: str, expected: type, where: str) -> Any:
    """`container[key]` checked against `expected`; missing or null gives None."""
    value = container.get(key)
    if value is not None and not isinstance(value, expected):
        raise MalformedFeedRecord(where, expected)
    return value


def _items(values: list[Any], where: str) -> list[dict[str, Any]]:
    for value in values:
        if not isinstance(value, dict):
            raise MalformedFeedRecord(f"{where} item", dict)
    return values


def _as_int(value: Any) -> int | None:
    try:
        number = float(str(value).strip())
    except ValueError:
        return None
    return int(number) if number.is_integer() else None


def same_week(left: Any, right: Any) -> bool:
    """Loose equality: the feed stores numbers, requests carry strings."""
    a, b = _as_int(left), _as_int(right)
    if a is not None and b is not None:
        return a == b
    return str(left).strip() == str(right).strip()


def _dish(entry: dict[str, Any], suffixes: tuple[str, ...]) -> str:
    header = clean(str(entry.get("header") or ""), suffixes)
    description = clean(str(entry.get("subHeader") or ""), suffixes)
    if not description:
        return header
    if not header:
        return description
    return f"{header}{SEPARATOR} {description}"


def _day(entry: dict[str, Any], suffixes: tuple[str, ...]) -> Day:
    dishes = _items(_field(entry, "dishes", list, "dishes") or [], "dishes")
    return Day(
        day=normalize_day(str(entry.get("text") or "")),
        dishes=tuple(d for d in (_dish(d, suffixes) for d in dishes) if d),
    )


def find_week(record: dict[str, Any], week_number: WeekNumber) -> dict[str, Any]:
    context = _field(record, "Context", dict, "Context") or {}
    weekly_menu = _field(context, "weeklyMenu", dict, "weeklyMenu")
    if not weekly_menu:
        raise MissingWeeklyMenu()
    content = _items(_field(weekly_menu, "content", list, "content") or [], "content")
    for entry in content:
        if same_week(entry.get("number"), week_number):
            return entry
    raise MissingWeeklyMenu()


def menu_from_feed(
    record: dict[str, Any],
    week_number: WeekNumber,
    suffixes: Iterable[str] = DEFAULT_SUFFIXES,
) -> Menu:
    suffixes = tuple(suffixes)
    entry = find_week(record, week_number)
    days = _items(_field(entry, "days", list, "days") or [], "days")
    return sort_days(
        Menu(
            week_number=week_number,
            days=tuple(_day(d, suffixes) for d in days[:WORKING_DAYS]),
        )
    )
