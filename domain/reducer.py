"""Folds classified menu lines into a `Menu`.

Single pass, strictly in input order. A line is never reinterpreted based on
what comes after it.
"""

from dataclasses import dataclass, replace
import functools
import logging
from typing import Iterable

from domain.classify import DayLine, DishLine, Noise, WeekLine, classify
from domain.models import Day, Menu


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ParseState:
    days: tuple[Day, ...] = ()
    current_day: str = ""
    week_number: str | None = None

    def to_menu(self) -> Menu:
        return Menu(week_number=self.week_number, days=self.days)


def _start_day(state: ParseState, name: str) -> ParseState:
    if any(d.day == name for d in state.days):
        # Repeated heading: keep filling the entry we already have.
        logger.warning("Day %s appears more than once, merging", name)
        return replace(state, current_day=name)
    return replace(state, days=(*state.days, Day(day=name)), current_day=name)


def _add_dish(state: ParseState, dish: str) -> ParseState:
    if not any(d.day == state.current_day for d in state.days):
        logger.debug("Dropping dish before any day: %s", dish)
        return state
    days = tuple(
        d.with_dish(dish) if d.day == state.current_day else d for d in state.days
    )
    return replace(state, days=days)


def step(state: ParseState, line: str) -> ParseState:
    match classify(line):
        case DayLine(day=name):
            return _start_day(state, name)
        case DishLine(dish=dish):
            return _add_dish(state, dish)
        case WeekLine(week_number=week_number):
            return replace(state, week_number=week_number)
        case Noise():
            logger.debug("Ignoring line: %s", line)
            return state


def reduce_lines(lines: Iterable[str]) -> Menu:
    """Unsorted menu for a sequence of trimmed, non-empty lines."""
    return functools.reduce(step, lines, ParseState()).to_menu()
