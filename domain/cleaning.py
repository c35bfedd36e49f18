"""Strips ordinals, caterer boilerplate and whitespace from menu fragments."""

import re
from typing import Iterable


DEFAULT_SUFFIXES: tuple[str, ...] = ("64 grader",)


_ORDINAL = re.compile(r"^\d+\.\s+")


def strip_ordinal(text: str) -> str:
    return _ORDINAL.sub("", text)


def strip_suffixes(text: str, suffixes: Iterable[str] = DEFAULT_SUFFIXES) -> str:
    for suffix in suffixes:
        if suffix and text.lower().endswith(suffix.lower()):
            text = text[: -len(suffix)].rstrip()
    return text


def clean(text: str, suffixes: Iterable[str] = DEFAULT_SUFFIXES) -> str:
    """Clean a raw fragment.

    "1. Fiskesuppe" -> "Fiskesuppe"
    "med tyttebær 64 grader" -> "med tyttebær"

    Runs until nothing changes, so stacked ordinals or suffixes go too and
    cleaning twice gives the same result as cleaning once.
    """
    suffixes = tuple(suffixes)
    previous = None
    text = text.strip()
    while text != previous:
        previous = text
        text = strip_suffixes(strip_ordinal(text), suffixes).strip()
    return text
