# src/e2e/test_session_incremental.py

import pytest
from paperlens.models import Document
from paperlens.session import QuerySession


def _papers(n: int = 5) -> list[Document]:
    return [
        Document(title=f"Paper {i}", body=f"Summary for paper {i}", id=f"id-{i}", authors=("Alice",))
        for i in range(1, n + 1)
    ]


def _session(docs=None) -> QuerySession:
    s = QuerySession()
    s.set_corpus(docs if docs is not None else _papers())
    return s


def _type(s: QuerySession, text: str) -> None:
    for ch in text:
        s.push_char(ch)


def test_set_corpus_identity_order():
    s = _session()
    assert not s.is_active()
    assert s.filtered_indices() == [0, 1, 2, 3, 4]
    assert s.haystack_count() == 5


def test_no_match_then_backspace_restores():
    s = _session()
    _type(s, "zzz")
    assert s.filtered_count() == 0
    for _ in range(3):
        s.pop_char()
    assert s.query == ""
    assert s.filtered_indices() == [0, 1, 2, 3, 4]


def test_single_result_maps_to_first_document():
    s = _session()
    _type(s, "Paper 1")
    assert s.filtered_indices() == [0]
    assert s.corpus_index_at(0) == 0
    assert s.corpus_index_at(1) is None
    assert s.corpus_index_at(-1) is None


def test_every_keystroke_reranks():
    s = QuerySession()
    s.set_corpus([
        Document(title="Rust Programming", body="Safety and speed", id="r"),
        Document(title="Python Data", body="Easy and slow", id="p"),
    ])
    s.push_char("P")
    assert s.filtered_count() == 2
    s.push_char("y")
    assert s.filtered_indices() == [1]
    s.pop_char()
    assert s.filtered_count() == 2


def test_pop_char_removes_one_code_point():
    s = _session()
    _type(s, "量子")
    s.pop_char()
    assert s.query == "量"
    s.push_char("é")
    s.pop_char()
    assert s.query == "量"


def test_pop_on_empty_query_is_noop():
    s = _session()
    s.pop_char()
    assert s.query == ""
    assert s.filtered_count() == 5


def test_push_char_rejects_strings():
    s = _session()
    with pytest.raises(ValueError):
        s.push_char("ab")
    with pytest.raises(ValueError):
        s.push_char("")


def test_clear_keeps_haystacks():
    s = _session()
    _type(s, "paper 2")
    s.clear()
    assert not s.is_active()
    assert s.haystack_count() == 5
    assert s.filtered_count() == 5


def test_set_corpus_resets_query_but_reindex_keeps_it():
    s = _session()
    _type(s, "paper")
    s.reindex(_papers(3))
    assert s.query == "paper"
    assert s.filtered_indices() == [0, 1, 2]
    s.set_corpus(_papers(2))
    assert s.query == ""
    assert s.filtered_indices() == [0, 1]


def test_body_text_is_searched():
    s = _session()
    s.set_query("summary")
    assert s.filtered_count() == 5
    assert all(relevant for _, relevant in s.match_relevance(_papers()))


def test_rendered_titles_follow_ranked_order():
    docs = [
        Document(title="Advanced Rust", body="", id="a"),
        Document(title="Rust", body="", id="b"),
    ]
    s = _session(docs)
    s.set_query("rust")
    assert s.rendered_titles(docs) == ["Rust", "Advanced Rust"]


def test_integrity_check_catches_shrunken_corpus():
    s = _session()
    s.set_query("paper 5")
    s.verify_indices_integrity(5)
    with pytest.raises(AssertionError):
        s.verify_indices_integrity(3)


def test_empty_corpus():
    s = _session([])
    s.push_char("a")
    assert s.filtered_count() == 0
    assert s.corpus_index_at(0) is None


def test_highlight_uses_current_query():
    s = _session()
    assert s.highlight_indices("Paper 1") == []
    s.set_query("pap")
    assert s.highlight_indices("Paper 1") == [0, 1, 2]
