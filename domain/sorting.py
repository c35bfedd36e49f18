import logging

from domain.models import Day, Menu


logger = logging.getLogger(__name__)


WEIGHTS: dict[str, int] = {
    "mandag": 1,
    "tirsdag": 2,
    "onsdag": 3,
    "torsdag": 4,
    "fredag": 5,
    "lørdag": 6,
    "søndag": 7,
}

# Unknown names sort after the week, in the order they arrived.
UNKNOWN_WEIGHT = len(WEIGHTS) + 1


def weight(day: Day) -> int:
    try:
        return WEIGHTS[day.day.lower()]
    except KeyError:
        logger.warning("Unknown weekday %r", day.day)
        return UNKNOWN_WEIGHT


def sort_days(menu: Menu) -> Menu:
    return menu.model_copy(update={"days": tuple(sorted(menu.days, key=weight))})
