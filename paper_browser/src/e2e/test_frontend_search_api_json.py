import pytest
from paperlens.engine import Browser
from paperlens.models import Corpus, Document
from frontend.web import app as flask_app


def _seed() -> Browser:
    b = Browser()
    b.load(Corpus(documents=[
        Document(title=f"Paper {i}", body=f"Summary for paper {i}", id=f"id-{i}", authors=("Alice",))
        for i in range(1, 6)
    ]))
    return b


@pytest.mark.e2e
def test_frontend_search_api_json(monkeypatch):
    b = _seed()
    import frontend.web as webmod
    monkeypatch.setattr(webmod, "_browser", b)

    client = flask_app.test_client()
    rv = client.get("/api/search?q=paper%201&k=3")
    assert rv.status_code == 200
    data = rv.get_json()
    assert isinstance(data, list) and len(data) == 1
    first = data[0]
    for key in ("corpus_index", "id", "title", "authors", "summary", "updated", "published", "highlight"):
        assert key in first
    assert first["id"] == "id-1"
    assert first["highlight"] == [0, 1, 2, 3, 4, 6]

    rv = client.get("/api/search?q=&k=2")
    assert [r["corpus_index"] for r in rv.get_json()] == [0, 1]

    assert client.get("/api/search?q=x&k=0").status_code == 400
    b.shutdown()


@pytest.mark.e2e
def test_frontend_document_lookup(monkeypatch):
    import frontend.web as webmod
    monkeypatch.setattr(webmod, "_browser", _seed())
    client = flask_app.test_client()
    rv = client.get("/api/documents/2")
    assert rv.status_code == 200
    assert rv.get_json()["title"] == "Paper 3"
    assert client.get("/api/documents/99").status_code == 404
