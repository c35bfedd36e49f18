"""Line classification for menu text.

Every line of a menu document is exactly one of:

- `DayLine`: a weekday heading ("MANDAG", "Tysdag 12.03").
- `WeekLine`: the week marker ("UKE 12").
- `DishLine`: "<category>: <description>", possibly repaired from
  "<category> <description>".
- `Noise`: anything else. Headers, decoration, footers. Ignored.
"""

from dataclasses import dataclass
import re


WEEKDAYS: tuple[str, ...] = ("Mandag", "Tirsdag", "Onsdag", "Torsdag", "Fredag")
WEEKEND: tuple[str, ...] = ("Lørdag", "Søndag")

# Nynorsk spellings that turn up in the slides.
SPELLING_VARIANTS: dict[str, str] = {
    "måndag": "Mandag",
    "tysdag": "Tirsdag",
}

CATEGORIES: tuple[str, ...] = ("Varmrett", "Suppe", "Temadag")

SEPARATOR = ":"


def _alternatives(names: list[str]) -> str:
    return "|".join(re.escape(n) for n in names)


_WEEKDAY_NAMES = [d.lower() for d in WEEKDAYS] + list(SPELLING_VARIANTS)
_ALL_DAY_NAMES = _WEEKDAY_NAMES + [d.lower() for d in WEEKEND]

# A day heading starts with the name and carries no category separator.
_DAY_LINE = re.compile(
    rf"^({_alternatives(_WEEKDAY_NAMES)})\b[^{SEPARATOR}]*$", re.IGNORECASE
)
_ANY_DAY = re.compile(rf"^({_alternatives(_ALL_DAY_NAMES)})\b", re.IGNORECASE)
_WEEK_LINE = re.compile(r"^uke\D*?(\d+(?:[./-]\d+)*)", re.IGNORECASE)
_CATEGORY_LINE = re.compile(
    rf"^({_alternatives(list(CATEGORIES))})\b\s*(.+)$", re.IGNORECASE
)


@dataclass(frozen=True)
class DayLine:
    day: str


@dataclass(frozen=True)
class DishLine:
    dish: str


@dataclass(frozen=True)
class WeekLine:
    week_number: str


@dataclass(frozen=True)
class Noise:
    line: str


Line = DayLine | DishLine | WeekLine | Noise


def normalize_day(token: str) -> str:
    """Canonical weekday name for a token, weekend included.

    Tokens that are not day names are only capitalised.
    """
    token = token.strip()
    match = _ANY_DAY.match(token)
    if match is None:
        return token.capitalize()
    name = match.group(1).lower()
    return SPELLING_VARIANTS.get(name, name.capitalize())


def weekday(line: str) -> str | None:
    """The canonical weekday a heading line denotes, if any."""
    match = _DAY_LINE.match(line.strip())
    if match is None:
        return None
    return normalize_day(match.group(1))


def week(line: str) -> str | None:
    """Raw week fragment following "UKE". Not necessarily an integer."""
    match = _WEEK_LINE.match(line.strip())
    return match.group(1) if match else None


def dish(line: str) -> str | None:
    line = line.strip()
    if SEPARATOR in line:
        return line
    match = _CATEGORY_LINE.match(line)
    if match is None:
        return None
    keyword, remainder = match.groups()
    return f"{keyword.capitalize()}{SEPARATOR} {remainder.strip()}"


def classify(line: str) -> Line:
    if (day := weekday(line)) is not None:
        return DayLine(day)
    if (week_number := week(line)) is not None:
        return WeekLine(week_number)
    if (entry := dish(line)) is not None:
        return DishLine(entry)
    return Noise(line)
