import pytest
from paperlens.engine import Browser
from paperlens.loader import synthetic_corpus
from paperlens.models import SearchHit


@pytest.mark.e2e
def test_topk_limit_and_result_types():
    b = Browser()
    try:
        b.load(synthetic_corpus(60))
        b.search("analysis")
        rows = b.hits(limit=2)
        assert isinstance(rows, list)
        assert len(rows) <= 2

        r = rows[0]
        assert isinstance(r, SearchHit)
        assert isinstance(r.document.title, str) and r.document.title
        assert 0 <= r.corpus_index < len(b.documents)
        assert all(isinstance(i, int) and 0 <= i < len(r.document.title) for i in r.highlight)

        assert len(b.hits(limit=None)) == b.visible_count()
        b.search("")
        assert len(b.hits()) == 20
    finally:
        b.shutdown()
