"""Shared text preprocessing for indexer and sources.

A keyword is a lowercase run of ASCII letters that is not a noise word.
Punctuation is tolerated only at the end of a raw token.
"""

from __future__ import annotations

import string
from collections.abc import Iterable

TRAILING_PUNCTUATION = frozenset(".!?,;:")
_ASCII_LETTERS = frozenset(string.ascii_letters)


def split_tokens(text: str) -> list[str]:
    """Split raw document text on whitespace."""
    return text.split()


def make_noise_words(words: Iterable[str]) -> frozenset[str]:
    """Build the immutable noise-word set; entries are lower-cased."""
    return frozenset(w.lower() for w in words if w)


def normalize(token: str, noise_words: frozenset[str]) -> str | None:
    """Strip trailing punctuation → require letters only → lowercase → drop noise words.

    Returns None for anything that is not a keyword; never raises.
    """
    end = len(token)
    while end and token[end - 1] in TRAILING_PUNCTUATION:
        end -= 1
    word = token[:end]
    if not word:
        return None

    if any(c not in _ASCII_LETTERS for c in word):
        return None

    word = word.lower()
    if word in noise_words:
        return None
    return word
