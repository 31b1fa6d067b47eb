"""Indexer: normalizes each document's tokens, counts keywords, and
merges the per-document counts into a KeywordIndex.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from pathlib import Path

from core.sources import (
    SourceUnavailableError,
    load_document_list,
    load_noise_words,
    read_document_tokens,
    resolve_document,
)
from core.store import KeywordIndex, Occurrence
from core.text import normalize
from core.validator import load_collection

logger = logging.getLogger(__name__)


# ── Per-document counting ───────────────────────────────────────────

def index_document(
    document_id: str,
    tokens: Iterable[str],
    noise_words: frozenset[str],
) -> dict[str, Occurrence]:
    """Count keyword occurrences in one document.

    Returns {keyword: Occurrence} with one entry per distinct keyword,
    in first-seen order.
    """
    keywords: dict[str, Occurrence] = {}
    for token in tokens:
        keyword = normalize(token, noise_words)
        if keyword is None:
            continue
        if keyword not in keywords:
            keywords[keyword] = Occurrence(document_id, 0)
        keywords[keyword].frequency += 1
    return keywords


def index_documents(
    documents: Iterable[tuple[str, Iterable[str]]],
    noise_words: frozenset[str],
    index: KeywordIndex | None = None,
) -> KeywordIndex:
    """Index in-memory (document_id, tokens) pairs in order."""
    if index is None:
        index = KeywordIndex()
    for document_id, tokens in documents:
        keywords = index_document(document_id, tokens, noise_words)
        index.merge_document(keywords, document_id)
        logger.debug("Indexed %s (%d keywords)", document_id, len(keywords))
    return index


# ── Main entry point ───────────────────────────────────────────────

def index_collection(collection_path: str | Path, index: KeywordIndex) -> dict:
    """Index every document listed by a collection config into `index`.

    A document is read in full before anything from it is merged, so an
    unavailable document never leaves a partial entry behind.  With
    on_missing_document="abort" the SourceUnavailableError propagates
    and documents merged before it stay in the index.  A name listed
    more than once is indexed the first time only.

    Returns a summary dict with counts.
    """
    col = load_collection(collection_path)
    noise_words = load_noise_words(col["noise_words"])
    names = load_document_list(col["documents"])

    skipped: list[str] = []
    duplicates: list[str] = []
    seen = set(index.documents)
    indexed = 0
    for name in names:
        if name in seen:
            logger.warning("Skipping %s: listed more than once", name)
            duplicates.append(name)
            continue
        seen.add(name)

        try:
            tokens = read_document_tokens(resolve_document(name, col["documents"]))
        except SourceUnavailableError as e:
            if col["on_missing_document"] == "abort":
                raise
            logger.warning("Skipping %s: %s", name, e.reason)
            skipped.append(name)
            continue

        keywords = index_document(name, tokens, noise_words)
        index.merge_document(keywords, name)
        indexed += 1
        logger.debug("Indexed %s (%d tokens, %d keywords)", name, len(tokens), len(keywords))

    stats = index.stats()
    logger.info(
        "Indexed collection %s: %d documents, %d keywords",
        col["name"],
        indexed,
        stats["keywords"],
    )
    return {
        "name": col["name"],
        "documents": indexed,
        "skipped": skipped,
        "duplicates": duplicates,
        "keywords": stats["keywords"],
        "occurrences": stats["occurrences"],
        "max_results": col["max_results"],
    }
