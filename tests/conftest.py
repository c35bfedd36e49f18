import io
from typing import Callable
import zipfile

import pytest


SLIDE = """<?xml version="1.0" encoding="UTF-8" standalone="yes"?>
<p:sld xmlns:a="http://schemas.openxmlformats.org/drawingml/2006/main"
       xmlns:p="http://schemas.openxmlformats.org/presentationml/2006/main">
<p:cSld><p:spTree><p:sp><p:txBody>{paragraphs}</p:txBody></p:sp></p:spTree></p:cSld>
</p:sld>"""


def runs(text: str) -> str:
    # Split runs the way editors do, mid-word.
    half = len(text) // 2
    return f"<a:r><a:t>{text[:half]}</a:t></a:r><a:r><a:t>{text[half:]}</a:t></a:r>"


def paragraph(text: str) -> str:
    # Newlines become soft line breaks.
    body = "<a:br/>".join(runs(part) for part in text.splitlines())
    return f"<a:p>{body}</a:p>"


def deck(*slides: list[str]) -> bytes:
    buf = io.BytesIO()
    with zipfile.ZipFile(buf, "w") as zf:
        zf.writestr("[Content_Types].xml", "<Types/>")
        for i, lines in enumerate(slides, start=1):
            zf.writestr(
                f"ppt/slides/slide{i}.xml",
                SLIDE.format(paragraphs="".join(paragraph(l) for l in lines)),
            )
    return buf.getvalue()


MENU_DECK = deck(
    ["UKE 12", "Lunsjmeny"],
    ["MANDAG", "Varmrett: Fiskesuppe"],
    ["TIRSDAG", "Suppe Kyllingsuppe"],
)


@pytest.fixture
def make_deck() -> Callable[..., bytes]:
    return deck


@pytest.fixture
def menu_deck() -> bytes:
    return MENU_DECK
