from __future__ import annotations

import json

import pytest

NOISE_WORDS = "the is\n"

DOCUMENTS = {
    "a.txt": "The cat sat. The cat ran!",
    "b.txt": "A cat is fast.",
    "c.txt": "Fast dogs chase the fast cat, fast!",
}


@pytest.fixture
def make_collection(tmp_path):
    """Write a collection to tmp_path and return its config path."""

    def _make(
        documents: dict[str, str] | None = None,
        listed: list[str] | None = None,
        policy: str = "abort",
        **extra,
    ):
        documents = DOCUMENTS if documents is None else documents
        listed = list(documents) if listed is None else listed

        docs_dir = tmp_path / "docs"
        docs_dir.mkdir(exist_ok=True)
        for name, text in documents.items():
            (docs_dir / name).write_text(text, encoding="utf-8")
        (docs_dir / "docs.txt").write_text("\n".join(listed) + "\n")
        (tmp_path / "noisewords.txt").write_text(NOISE_WORDS)

        config = {
            "name": "sample",
            "noise_words": "noisewords.txt",
            "documents": "docs/docs.txt",
            "on_missing_document": policy,
            **extra,
        }
        config_path = tmp_path / "collection.json"
        config_path.write_text(json.dumps(config))
        return config_path

    return _make


@pytest.fixture
def collection(make_collection):
    return make_collection()
