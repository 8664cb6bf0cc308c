# src/e2e/test_selection_sync.py

import pytest
from paperlens.loader import synthetic_corpus
from paperlens.models import Document
from paperlens.selection import SelectionSynchronizer, half_page_step
from paperlens.session import QuerySession


def _papers(n: int = 5) -> list[Document]:
    return [
        Document(title=f"Paper {i}", body=f"Summary for paper {i}", id=f"id-{i}")
        for i in range(1, n + 1)
    ]


class _Corpus:
    """Mutable stand-in for the owner of the corpus length."""

    def __init__(self, docs):
        self.docs = list(docs)

    def __len__(self):
        return len(self.docs)


def _setup(docs=None):
    corpus = _Corpus(docs if docs is not None else _papers())
    session = QuerySession()
    session.set_corpus(corpus.docs)
    sync = SelectionSynchronizer(session, lambda: len(corpus))
    return corpus, session, sync


def _invariant(sync: SelectionSynchronizer) -> None:
    n = sync.visible_count()
    if n == 0:
        assert sync.selected is None
    else:
        assert sync.selected is not None and 0 <= sync.selected < n


def test_initial_cursor_on_first_row():
    _, _, sync = _setup()
    assert sync.selected == 0
    assert sync.selected_corpus_index() == 0


def test_empty_corpus_has_no_selection():
    _, _, sync = _setup([])
    assert sync.selected is None
    sync.move_down()
    sync.select_last()
    assert sync.selected is None


def test_scroll_and_jump():
    _, _, sync = _setup()
    sync.select_first()
    sync.scroll_down(2)
    assert sync.selected == 2
    sync.scroll_up(1)
    assert sync.selected == 1
    sync.scroll_by(100)
    assert sync.selected == 4
    sync.scroll_by(-100)
    assert sync.selected == 0
    sync.select_last()
    assert sync.selected == 4
    sync.move_down()
    assert sync.selected == 4
    sync.move_up()
    assert sync.selected == 3


def test_select_out_of_range_is_clamped():
    _, _, sync = _setup()
    sync.select(42)
    assert sync.selected == 4
    sync.select(-3)
    assert sync.selected == 0


@pytest.mark.parametrize("height, step", [(0, 1), (1, 1), (2, 1), (3, 1), (4, 2), (20, 10), (50, 25), (100, 50)])
def test_half_page_step(height, step):
    assert half_page_step(height) == step


def test_half_page_step_rejects_negative():
    with pytest.raises(ValueError):
        half_page_step(-1)


def test_page_moves_half_viewport():
    _, _, sync = _setup(_papers(30))
    sync.page_down(20)
    assert sync.selected == 10
    sync.page_down(20)
    sync.page_down(20)
    assert sync.selected == 29
    sync.page_up(4)
    assert sync.selected == 27


def test_query_change_snaps_to_top_or_none():
    _, session, sync = _setup()
    sync.select_last()
    for ch in "zzz":
        session.push_char(ch)
        sync.on_query_changed()
    assert sync.visible_count() == 0
    assert sync.selected is None
    assert sync.get_corpus_index(0) is None

    session.clear()
    sync.on_query_changed()
    assert sync.selected == 0


def test_visible_to_corpus_translation_while_filtering():
    corpus, session, sync = _setup()
    session.set_query("paper 3")
    sync.on_query_changed()
    assert sync.visible_count() == 1
    assert sync.get_corpus_index(0) == 2
    assert sync.get_corpus_index(1) is None
    assert sync.get_corpus_index(-1) is None


def test_leave_search_restores_corpus_position():
    corpus, session, sync = _setup()
    sync.enter_search(corpus.docs)
    session.set_query("paper 4")
    sync.on_query_changed()
    assert sync.selected_corpus_index() == 3
    sync.leave_search()
    assert not session.is_active()
    assert sync.selected == 3


def test_leave_search_with_stale_index_falls_back():
    corpus, session, sync = _setup()
    session.set_query("paper 5")
    sync.on_query_changed()
    assert sync.selected_corpus_index() == 4
    corpus.docs = corpus.docs[:3]     # refreshed underneath the search
    sync.leave_search()
    assert sync.selected == 0

    corpus.docs = []
    session.set_query("paper")
    sync.leave_search()
    assert sync.selected is None


def test_enter_search_revalidates_active_query():
    corpus, session, sync = _setup()
    session.set_query("paper")
    sync.on_query_changed()
    sync.select_last()
    assert sync.selected == 4
    corpus.docs = corpus.docs[:2]
    sync.enter_search(corpus.docs)
    assert session.query == "paper"
    assert sync.visible_count() == 2
    assert sync.selected == 1


def test_enter_search_without_query_rebuilds():
    corpus, session, sync = _setup()
    corpus.docs = _papers(7)
    sync.enter_search(corpus.docs)
    assert session.haystack_count() == 7
    assert sync.visible_count() == 7


def test_invariant_holds_over_mixed_operations():
    docs = synthetic_corpus(30).documents
    corpus, session, sync = _setup(docs)
    steps = [
        lambda: sync.page_down(10),
        lambda: sync.select_last(),
        lambda: (session.push_char("a"), sync.on_query_changed()),
        lambda: sync.move_down(),
        lambda: (session.push_char("n"), sync.on_query_changed()),
        lambda: (session.push_char("a"), sync.on_query_changed()),
        lambda: sync.page_up(3),
        lambda: (session.push_char("q"), sync.on_query_changed()),
        lambda: sync.move_up(),
        lambda: (session.pop_char(), sync.on_query_changed()),
        lambda: sync.select_last(),
        lambda: sync.leave_search(),
        lambda: sync.scroll_by(-7),
        lambda: sync.enter_search(corpus.docs),
        lambda: (session.set_query("robotics"), sync.on_query_changed()),
        lambda: sync.scroll_down(5),
        lambda: sync.leave_search(),
        lambda: sync.select(1000),
    ]
    for step in steps:
        step()
        _invariant(sync)


def test_every_visible_row_maps_into_the_corpus():
    docs = synthetic_corpus(100).documents
    corpus, session, sync = _setup(docs)
    session.set_query("analysis")
    sync.on_query_changed()
    assert sync.visible_count() > 0
    for pos in range(sync.visible_count()):
        idx = sync.get_corpus_index(pos)
        assert idx is not None and 0 <= idx < len(docs)
        assert session.engine.score("analysis", docs[idx].haystack()) >= session.engine.config.strictness_threshold
