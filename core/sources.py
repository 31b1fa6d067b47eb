"""File-backed sources: noise words, document lists, document text.

These are the only places keyseek touches the filesystem.  Any missing
or unreadable file surfaces as SourceUnavailableError so callers can
tell a bad source apart from a bad config.
"""

from __future__ import annotations

from pathlib import Path

from core.text import make_noise_words, split_tokens


class SourceUnavailableError(RuntimeError):
    def __init__(self, path: str | Path, reason: str = "not found"):
        self.path = str(path)
        self.reason = reason
        super().__init__(f"Source unavailable: {self.path} ({reason})")


def _read_text(path: str | Path) -> str:
    try:
        return Path(path).read_text(encoding="utf-8")
    except FileNotFoundError:
        raise SourceUnavailableError(path) from None
    except (OSError, UnicodeDecodeError) as e:
        raise SourceUnavailableError(path, str(e)) from e


def load_noise_words(path: str | Path) -> frozenset[str]:
    return make_noise_words(split_tokens(_read_text(path)))


def load_document_list(path: str | Path) -> list[str]:
    """Document names in listed order.  Each name doubles as its document id."""
    return split_tokens(_read_text(path))


def resolve_document(name: str, list_path: str | Path) -> Path:
    """Relative document names are taken from the list file's directory."""
    doc_path = Path(name)
    if doc_path.is_absolute():
        return doc_path
    return Path(list_path).parent / doc_path


def read_document_tokens(path: str | Path) -> list[str]:
    return split_tokens(_read_text(path))
