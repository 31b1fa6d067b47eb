"""Search engine: ranked union of two keywords' occurrence lists.

Both lists come out of the index already sorted by descending
frequency.  The merge repeatedly emits whichever front is more frequent
(keyword1 wins ties), drops that document from the other list so it is
never emitted twice, then drains whatever is left.  Queries work on
copies and never modify the index.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from core.store import KeywordIndex, Occurrence

logger = logging.getLogger(__name__)

MAX_RESULTS = 5


@dataclass
class SearchHit:
    document: str
    frequency: int
    keyword: str

    def to_dict(self) -> dict:
        return {
            "document": self.document,
            "frequency": self.frequency,
            "keyword": self.keyword,
        }


def _remove_document(occs: list[Occurrence], document: str) -> None:
    for i, occ in enumerate(occs):
        if occ.document == document:
            del occs[i]
            return


def merge_occurrences(
    keyword1: str,
    occs1: list[Occurrence],
    keyword2: str,
    occs2: list[Occurrence],
    max_results: int = MAX_RESULTS,
) -> list[SearchHit]:
    """Merge two descending-frequency lists into at most max_results hits."""
    first, second = list(occs1), list(occs2)
    hits: list[SearchHit] = []

    while first and second and len(hits) < max_results:
        if first[0].frequency >= second[0].frequency:
            occ, keyword, other = first.pop(0), keyword1, second
        else:
            occ, keyword, other = second.pop(0), keyword2, first
        hits.append(SearchHit(occ.document, occ.frequency, keyword))
        _remove_document(other, occ.document)

    rest, keyword = (first, keyword1) if first else (second, keyword2)
    for occ in rest:
        if len(hits) >= max_results:
            break
        hits.append(SearchHit(occ.document, occ.frequency, keyword))

    return hits


def search_hits(
    keyword1: str,
    keyword2: str,
    index: KeywordIndex,
    max_results: int = MAX_RESULTS,
) -> list[SearchHit]:
    """Documents containing keyword1 or keyword2, most frequent first.

    Keywords are matched exactly against the lower-cased index; an
    unknown keyword contributes no hits.
    """
    hits = merge_occurrences(
        keyword1,
        index.occurrences(keyword1),
        keyword2,
        index.occurrences(keyword2),
        max_results,
    )
    logger.debug("search(%r, %r) -> %d hits", keyword1, keyword2, len(hits))
    return hits


def search(
    keyword1: str,
    keyword2: str,
    index: KeywordIndex,
    max_results: int = MAX_RESULTS,
) -> list[str]:
    return [h.document for h in search_hits(keyword1, keyword2, index, max_results)]
