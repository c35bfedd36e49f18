from domain.models import Menu
from domain.reducer import reduce_lines
from domain.sorting import sort_days


def lines(text: str) -> list[str]:
    return [line.strip() for line in text.splitlines() if line.strip()]


def menu_from_text(text: str) -> Menu:
    """Menu for the full text extracted from a menu slide deck."""
    return sort_days(reduce_lines(lines(text)))
