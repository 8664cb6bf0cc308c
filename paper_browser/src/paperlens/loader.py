from __future__ import annotations
import json
import logging
import os
import xml.etree.ElementTree as ET
from typing import Iterable, List, Optional

from .models import Corpus, Document

log = logging.getLogger(__name__)

ATOM_NS = "http://www.w3.org/2005/Atom"
_NS = {"a": ATOM_NS}

FEED_EXTS = (".xml", ".atom")
JSON_EXTS = (".json",)


class FeedParseError(ValueError):
    """The feed is not XML/JSON we understand, or a required field is missing."""


def _required_text(node: ET.Element, tag: str) -> str:
    child = node.find(f"a:{tag}", _NS)
    if child is None:
        raise FeedParseError(f"Missing required field: {tag}")
    return child.text or ""


def _authors(entry: ET.Element) -> tuple[str, ...]:
    names = []
    for author in entry.findall("a:author", _NS):
        name = author.find("a:name", _NS)
        if name is not None and name.text:
            names.append(name.text)
    return tuple(names)


def parse_feed(content: str, *, only_new: bool = True, source: str = "") -> Corpus:
    """
    Parse an arXiv API (Atom) response into a Corpus.

    With only_new, entries whose `updated` differs from `published` (revised
    papers) are skipped, so the list shows new submissions only.
    """
    try:
        root = ET.fromstring(content)
    except ET.ParseError as exc:
        raise FeedParseError(f"Failed to parse XML: {exc}") from exc

    feed_updated = _required_text(root, "updated")
    docs: List[Document] = []
    for entry in root.findall("a:entry", _NS):
        title = _required_text(entry, "title")
        doc_id = _required_text(entry, "id")
        summary = _required_text(entry, "summary")
        updated = _required_text(entry, "updated")
        published = _required_text(entry, "published")
        if only_new and updated != published:
            continue
        docs.append(Document(
            title=title.replace("\n ", ""),   # arXiv wraps long titles this way
            body=summary.replace("\n", " "),
            id=doc_id,
            authors=_authors(entry),
            updated=updated,
            published=published,
            metadata={"source": source} if source else {},
        ))
    return Corpus(documents=docs, updated=feed_updated)


def load_json(content: str, *, source: str = "") -> Corpus:
    """
    JSON corpus: either a list of article objects or {"updated": ..., "articles": [...]}.
    Each article needs "title", "id" and "summary" (or "body").
    """
    try:
        data = json.loads(content)
    except json.JSONDecodeError as exc:
        raise FeedParseError(f"Failed to parse JSON: {exc}") from exc

    updated = ""
    if isinstance(data, dict):
        updated = str(data.get("updated", ""))
        data = data.get("articles", [])
    if not isinstance(data, list):
        raise FeedParseError("JSON corpus must be a list of articles")

    docs: List[Document] = []
    for i, row in enumerate(data):
        if not isinstance(row, dict):
            raise FeedParseError(f"article #{i} is not an object")
        for key in ("title", "id"):
            if key not in row:
                raise FeedParseError(f"Missing required field: {key} (article #{i})")
        body = row.get("summary", row.get("body"))
        if body is None:
            raise FeedParseError(f"Missing required field: summary (article #{i})")
        extra = {k: v for k, v in row.items()
                 if k not in {"title", "id", "summary", "body", "authors", "updated", "published"}}
        if source:
            extra["source"] = source
        docs.append(Document(
            title=str(row["title"]),
            body=str(body),
            id=str(row["id"]),
            authors=tuple(str(a) for a in row.get("authors", ())),
            updated=str(row.get("updated", "")),
            published=str(row.get("published", "")),
            metadata=extra,
        ))
    return Corpus(documents=docs, updated=updated)


def _iter_corpus_files(paths: Iterable[str]) -> Iterable[str]:
    """Yield feed files: explicit files as given, directories walked in sorted order."""
    for p in paths:
        if os.path.isdir(p):
            found = []
            for dirpath, _, filenames in os.walk(p):
                for fn in filenames:
                    if fn.lower().endswith(FEED_EXTS + JSON_EXTS):
                        found.append(os.path.join(dirpath, fn))
            yield from sorted(found)
        elif os.path.isfile(p):
            yield p
        else:
            raise FileNotFoundError(p)


def load_file(path: str, *, only_new: bool = True) -> Corpus:
    low = path.lower()
    with open(path, "r", encoding="utf-8") as f:
        content = f.read()
    if low.endswith(JSON_EXTS):
        return load_json(content, source=path)
    if low.endswith(FEED_EXTS):
        return parse_feed(content, only_new=only_new, source=path)
    raise ValueError(f"Unsupported corpus file type: {path}")


def load_corpus(paths: List[str], *, only_new: bool = True) -> Corpus:
    """
    Load and concatenate every feed under `paths` (files or folders).
    The newest feed `updated` stamp wins.
    """
    paths = list(paths)
    if not paths:
        raise ValueError("load_corpus(): at least one path is required")

    docs: List[Document] = []
    updated = ""
    file_count = 0
    for path in _iter_corpus_files(paths):
        part = load_file(path, only_new=only_new)
        docs.extend(part.documents)
        updated = max(updated, part.updated)
        file_count += 1
        log.info("Loaded %d articles from %s", len(part.documents), path)

    log.info("Corpus ready: files=%d articles=%d", file_count, len(docs))
    return Corpus(documents=docs, updated=updated)


# ---- synthetic corpus (demo + tests) ----

_NOISE_PREFIXES = [
    "Analysis of", "Study on", "Investigation into", "Research on", "Exploration of",
    "Survey of", "Review of", "Advances in", "Novel Approaches to", "Theoretical Framework for",
]
_NOISE_TOPICS = [
    "distributed systems", "network protocols", "database optimization", "compiler design",
    "operating systems", "computer graphics", "human-computer interaction",
    "software engineering", "cybersecurity", "data structures", "algorithm complexity",
    "parallel computing", "web technologies", "mobile development", "cloud computing",
    "blockchain technology", "artificial intelligence", "robotics", "bioinformatics",
    "computational biology",
]
_NOISE_AUTHORS = [
    "John Doe", "Jane Smith", "Alex Johnson", "Sarah Wilson", "Michael Brown",
    "Emily Davis", "David Miller", "Lisa Garcia", "Robert Martinez", "Jennifer Lopez",
    "Christopher Lee", "Amanda Taylor", "Daniel Anderson", "Michelle Thomas", "James Jackson",
]


def synthetic_corpus(size: int, *, seed_documents: Optional[List[Document]] = None) -> Corpus:
    """
    Deterministic filler corpus: optional seed documents first, then
    "<prefix> <topic>" articles until `size` is reached (or the seeds are
    truncated to `size`).
    """
    if size < 0:
        raise ValueError(f"size must be >= 0, got {size}")
    docs = list(seed_documents or [])[:size]
    counter = len(docs) + 1
    while len(docs) < size:
        prefix = _NOISE_PREFIXES[counter % len(_NOISE_PREFIXES)]
        topic = _NOISE_TOPICS[counter % len(_NOISE_TOPICS)]
        author = _NOISE_AUTHORS[counter % len(_NOISE_AUTHORS)]
        docs.append(Document(
            title=f"{prefix} {topic}",
            body=(f"This paper presents {prefix.lower()} in the context of {topic}. "
                  "We propose novel methods and evaluate their effectiveness through "
                  "comprehensive experiments."),
            id=f"cs.DC/{counter:04d}",
            authors=(author,),
            updated="2024-01-05",
            published="2024-01-05",
        ))
        counter += 1
    return Corpus(documents=docs, updated="2024-01-05")
