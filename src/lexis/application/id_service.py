"""Stable identifiers for vocabulary items and their cards."""

from ulid import ULID

WORD_ID_PREFIX = "word_"


def generate_word_id() -> str:
    """Generate a stable, sortable word ID using ULID."""
    return f"{WORD_ID_PREFIX}{ULID()}"


def is_generated_id(word_id: str) -> bool:
    return word_id.startswith(WORD_ID_PREFIX) and len(word_id) == len(WORD_ID_PREFIX) + 26
