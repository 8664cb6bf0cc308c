import pytest
from paperlens.engine import Browser
from paperlens.models import Corpus, Document


def _seed() -> Corpus:
    return Corpus(documents=[
        Document(title="Café con leche", body="Über die Quantenmechanik", id="a"),
        Document(title="A naïve approach", body="appears here", id="b"),
        Document(title="量子 computing", body="", id="c"),
    ])


@pytest.mark.e2e
def test_unicode_case_folding():
    b = Browser()
    try:
        b.load(_seed())
        assert b.search("CAFÉ") == [0]
        assert b.search("über") == [0]
        assert b.search("NAÏVE approach") == [1]
        assert b.search("量子") == [2]
        hit = b.hits()[0]
        assert hit.highlight == [0, 1]
    finally:
        b.shutdown()


@pytest.mark.e2e
def test_unicode_backspace_in_search():
    b = Browser()
    try:
        b.load(_seed())
        for ch in "naïx":
            b.type_char(ch)
        assert b.visible_count() == 0
        b.backspace()
        assert b.session.query == "naï"
        assert b.visible_indices() == [1]
    finally:
        b.shutdown()
