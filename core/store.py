"""In-memory keyword index for keyseek.

Maps each keyword to its occurrences across all documents, kept in
descending order of frequency.  Documents are merged in one at a time
and never removed; the whole index lives for a single session.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class Occurrence:
    document: str
    frequency: int


# ── Ordered insertion ───────────────────────────────────────────────


def insert_last_occurrence(occs: list[Occurrence]) -> int:
    """Move the last occurrence into place among the sorted ones before it.

    Binary-searches occs[:-1] (non-increasing by frequency) and returns
    the final position.  Among equal frequencies the landing spot
    depends on probe order, so ties keep no particular order.
    """
    frequency = occs[-1].frequency
    left, right = 0, len(occs) - 2
    index = len(occs) - 1

    while left <= right:
        middle = (left + right) // 2
        probe = occs[middle].frequency
        if probe == frequency:
            index = middle
            break
        if probe < frequency:
            right = middle - 1
            if left > right:
                index = middle
        else:
            left = middle + 1
            if left > right:
                index = middle + 1

    if index != len(occs) - 1:
        occs.insert(index, occs.pop())
    return index


class KeywordIndex:
    def __init__(self):
        self._index: dict[str, list[Occurrence]] = {}
        self._documents: dict[str, None] = {}  # merge order

    # ── Writes ──────────────────────────────────────────────────────

    def merge_document(
        self,
        keywords: dict[str, Occurrence],
        document: str | None = None,
    ) -> None:
        """Insert one document's keyword occurrences into the index.

        `document` records a document even when it yielded no keywords.
        Raises ValueError if the document was already merged; the index
        is left unchanged in that case.
        """
        incoming = {occ.document for occ in keywords.values()}
        if document is not None:
            incoming.add(document)
        already = sorted(d for d in incoming if d in self._documents)
        if already:
            raise ValueError(f"Document already indexed: {', '.join(already)}")

        for keyword, occ in keywords.items():
            occs = self._index.setdefault(keyword, [])
            occs.append(occ)
            insert_last_occurrence(occs)
            self._documents.setdefault(occ.document)

        if document is not None:
            self._documents.setdefault(document)

    # ── Reads ───────────────────────────────────────────────────────

    def occurrences(self, keyword: str) -> list[Occurrence]:
        """Ordered occurrences for a keyword; empty if it was never indexed."""
        return list(self._index.get(keyword, []))

    def keywords(self) -> list[str]:
        return sorted(self._index)

    @property
    def documents(self) -> list[str]:
        return list(self._documents)

    @property
    def document_count(self) -> int:
        return len(self._documents)

    def stats(self) -> dict:
        return {
            "documents": self.document_count,
            "keywords": len(self._index),
            "occurrences": sum(len(occs) for occs in self._index.values()),
        }

    def __contains__(self, keyword: object) -> bool:
        return keyword in self._index

    def __len__(self) -> int:
        return len(self._index)
