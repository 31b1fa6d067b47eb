"""Two-level collection config validation: syntactic, semantic.

Syntactic = structure and types.
Semantic  = the files the config points at actually exist.
"""

from __future__ import annotations

import json
from pathlib import Path

from core.searcher import MAX_RESULTS
from core.sources import SourceUnavailableError, load_document_list, resolve_document

MISSING_POLICIES = {"abort", "skip"}
DEFAULT_MISSING_POLICY = "abort"


# ── Syntactic Validation ────────────────────────────────────────────

def validate_syntactic(config: dict) -> list[str]:
    """Check required fields and types.  Returns list of error strings."""
    errors: list[str] = []

    if not isinstance(config, dict):
        return ["Config must be a JSON object."]

    for field in ("name", "noise_words", "documents"):
        if not isinstance(config.get(field), str) or not config[field]:
            errors.append(f"'{field}' is required and must be a non-empty string.")

    policy = config.get("on_missing_document", DEFAULT_MISSING_POLICY)
    if policy not in MISSING_POLICIES:
        errors.append(
            f"'on_missing_document' must be one of {sorted(MISSING_POLICIES)}, got '{policy}'."
        )

    search = config.get("search")
    if search is not None:
        if not isinstance(search, dict):
            errors.append("'search' must be an object if provided.")
        else:
            mr = search.get("max_results", MAX_RESULTS)
            # bool is an int subclass
            if not isinstance(mr, int) or isinstance(mr, bool) or mr < 1:
                errors.append("'search.max_results' must be a positive integer.")

    return errors


# ── Semantic Validation ─────────────────────────────────────────────

def validate_semantic(config: dict, base_dir: str | Path) -> list[str]:
    """Check that noise words, the document list and its documents exist."""
    errors: list[str] = []
    base = Path(base_dir)

    noise_path = base / config["noise_words"]
    if not noise_path.is_file():
        errors.append(f"Noise word file not found: {noise_path}")

    list_path = base / config["documents"]
    try:
        names = load_document_list(list_path)
    except SourceUnavailableError as e:
        errors.append(f"Document list unavailable: {e.path}")
        return errors

    if not names:
        errors.append(f"Document list is empty: {list_path}")

    repeated = sorted({n for n in names if names.count(n) > 1})
    if repeated:
        errors.append(f"Documents listed more than once: {repeated}")

    policy = config.get("on_missing_document", DEFAULT_MISSING_POLICY)
    if policy == "abort":
        missing = [n for n in names if not resolve_document(n, list_path).is_file()]
        if missing:
            errors.append(
                f"Documents not found: {missing}. "
                "Fix the document list or set 'on_missing_document' to 'skip'."
            )

    return errors


# ── Loading ─────────────────────────────────────────────────────────

def _read_config(config_path: str | Path) -> dict:
    return json.loads(Path(config_path).read_text(encoding="utf-8"))


def load_collection(config_path: str | Path) -> dict:
    """Load a collection config, apply defaults and resolve paths.

    Raises ValueError on syntactic errors.  A missing config file is
    reported as SourceUnavailableError.
    """
    path = Path(config_path)
    try:
        config = _read_config(path)
    except FileNotFoundError:
        raise SourceUnavailableError(path) from None
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise ValueError(f"Invalid JSON in {path}: {e}") from e

    errors = validate_syntactic(config)
    if errors:
        raise ValueError("; ".join(errors))

    base = path.parent
    return {
        "name": config["name"],
        "noise_words": base / config["noise_words"],
        "documents": base / config["documents"],
        "on_missing_document": config.get("on_missing_document", DEFAULT_MISSING_POLICY),
        "max_results": (config.get("search") or {}).get("max_results", MAX_RESULTS),
    }


# ── Top-level validate ──────────────────────────────────────────────

def validate_config(config_path: str | Path) -> tuple[bool, list[str]]:
    """Run syntactic + semantic validation on a config file.

    Returns (passed, errors).
    """
    path = Path(config_path)
    try:
        config = _read_config(path)
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        return False, [f"Invalid JSON: {e}"]
    except FileNotFoundError:
        return False, [f"Config file not found: {config_path}"]

    syn_errors = validate_syntactic(config)
    if syn_errors:
        return False, syn_errors

    sem_errors = validate_semantic(config, path.parent)
    if sem_errors:
        return False, sem_errors

    return True, []
