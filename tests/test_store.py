from __future__ import annotations

import random

import pytest

from core.store import KeywordIndex, Occurrence, insert_last_occurrence


def _occs(*freqs: int) -> list[Occurrence]:
    return [Occurrence(f"d{i}", f) for i, f in enumerate(freqs)]


def _freqs(occs: list[Occurrence]) -> list[int]:
    return [o.frequency for o in occs]


# ── insert_last_occurrence ──────────────────────────────────────────


def test_single_occurrence_stays_put():
    occs = _occs(3)
    assert insert_last_occurrence(occs) == 0
    assert _freqs(occs) == [3]


@pytest.mark.parametrize(
    "existing, new, position",
    [
        ([5, 3, 1], 7, 0),
        ([5, 3, 1], 4, 1),
        ([5, 3, 1], 2, 2),
        ([5, 3], 1, 2),
        ([5, 4, 3, 2, 1], 6, 0),
        ([9, 7, 5, 3], 4, 3),
    ],
)
def test_new_occurrence_lands_in_sorted_position(existing, new, position):
    occs = _occs(*existing)
    new_occ = Occurrence("new", new)
    occs.append(new_occ)

    assert insert_last_occurrence(occs) == position
    assert occs[position] is new_occ
    assert _freqs(occs) == sorted(existing + [new], reverse=True)


def test_equal_frequency_lands_on_first_probe_match():
    occs = _occs(5, 3, 1)
    new_occ = Occurrence("new", 3)
    occs.append(new_occ)

    assert insert_last_occurrence(occs) == 1
    assert [o.document for o in occs] == ["d0", "new", "d1", "d2"]


# ── KeywordIndex ────────────────────────────────────────────────────


def test_merge_keeps_every_list_non_increasing():
    rng = random.Random(7)
    index = KeywordIndex()
    for d in range(60):
        doc = f"doc{d}"
        keywords = {
            kw: Occurrence(doc, rng.randint(1, 6))
            for kw in ("alpha", "beta", "gamma")
            if rng.random() < 0.7
        }
        index.merge_document(keywords, doc)

        for kw in index.keywords():
            freqs = _freqs(index.occurrences(kw))
            assert freqs == sorted(freqs, reverse=True)


def test_merge_conserves_one_occurrence_per_document():
    rng = random.Random(11)
    index = KeywordIndex()
    expected: dict[str, set[str]] = {}
    for d in range(40):
        doc = f"doc{d}"
        keywords = {}
        for kw in ("red", "green", "blue", "cyan"):
            if rng.random() < 0.5:
                keywords[kw] = Occurrence(doc, rng.randint(1, 4))
                expected.setdefault(kw, set()).add(doc)
        index.merge_document(keywords, doc)

    for kw, docs in expected.items():
        listed = [o.document for o in index.occurrences(kw)]
        assert len(listed) == len(docs)
        assert set(listed) == docs


def test_occurrences_unknown_keyword_is_empty():
    assert KeywordIndex().occurrences("missing") == []


def test_occurrences_returns_a_copy():
    index = KeywordIndex()
    index.merge_document({"cat": Occurrence("A", 2)}, "A")

    occs = index.occurrences("cat")
    occs.clear()

    assert index.occurrences("cat") == [Occurrence("A", 2)]


def test_documents_include_empty_documents_in_merge_order():
    index = KeywordIndex()
    index.merge_document({"cat": Occurrence("A", 1)}, "A")
    index.merge_document({}, "empty")
    index.merge_document({"dog": Occurrence("B", 1)}, "B")

    assert index.documents == ["A", "empty", "B"]
    assert index.document_count == 3


def test_stats_and_membership():
    index = KeywordIndex()
    index.merge_document({"cat": Occurrence("A", 2), "sat": Occurrence("A", 1)}, "A")
    index.merge_document({"cat": Occurrence("B", 1)}, "B")

    assert index.stats() == {"documents": 2, "keywords": 2, "occurrences": 3}
    assert "cat" in index
    assert "dog" not in index
    assert len(index) == 2
    assert index.keywords() == ["cat", "sat"]


def test_merging_a_document_twice_is_rejected():
    index = KeywordIndex()
    index.merge_document({"cat": Occurrence("A", 2)}, "A")

    with pytest.raises(ValueError, match="already indexed: A"):
        index.merge_document({"cat": Occurrence("A", 2), "dog": Occurrence("A", 1)}, "A")

    assert index.occurrences("cat") == [Occurrence("A", 2)]
    assert "dog" not in index
    assert index.documents == ["A"]
