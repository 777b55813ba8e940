"""
Bulk vocabulary import from YAML.

Accepted shapes::

    - source: hello
      target: olá
      level: A1
      category: phrase

or a mapping with the same list under ``items`` (other top-level keys become
defaults for every entry, e.g. a shared ``lesson_id``).
"""

import logging
from dataclasses import replace
from pathlib import Path
from typing import Any

import yaml
import yaml.constructor

from lexis.domain.errors import ImportFormatError
from lexis.domain.vocabulary import VocabularyCategory, VocabularyItem, VocabularyStore

from .id_service import generate_word_id

logger = logging.getLogger(__name__)

_OPTIONAL_TEXT = ("pronunciation", "example_sentence", "example_translation", "notes")


class UniqueKeyLoader(yaml.SafeLoader):
    """
    YAML loader that forbids duplicate keys and records line numbers.
    """

    def construct_mapping(self, node, deep=False):
        seen = set()
        for key_node, _ in node.value:
            key = self.construct_object(key_node, deep=deep)
            if key in seen:
                raise yaml.constructor.ConstructorError(
                    None, None, f"found duplicate key '{key}'", key_node.start_mark
                )
            seen.add(key)

        result = super().construct_mapping(node, deep)
        if isinstance(result, dict):
            # Inject line number (1-based)
            result["__line__"] = node.start_mark.line + 1
        return result


def load_entries(text: str) -> list[dict[str, Any]]:
    """Parse an import document into a list of raw entry mappings."""
    try:
        data = yaml.load(text, Loader=UniqueKeyLoader)
    except yaml.YAMLError as e:
        raise ImportFormatError(f"Invalid YAML: {e}") from e

    if data is None:
        return []

    defaults: dict[str, Any] = {}
    if isinstance(data, dict):
        if "items" not in data:
            raise ImportFormatError("Expected a list of entries or a mapping with 'items'")
        defaults = {k: v for k, v in data.items() if k not in ("items", "__line__")}
        data = data["items"]

    if not isinstance(data, list):
        raise ImportFormatError("'items' must be a list of entries")

    entries = []
    for raw in data:
        if not isinstance(raw, dict):
            logger.warning(f"Skipping non-mapping entry: {raw!r}")
            continue
        entries.append({**defaults, **raw})
    return entries


def _text(value: Any) -> str:
    return "" if value is None else str(value).strip()


def entry_to_item(entry: dict[str, Any], current_date: str) -> VocabularyItem | None:
    """Build an item from one raw entry, or None if it lacks source/target."""
    source = _text(entry.get("source"))
    target = _text(entry.get("target"))
    if not source or not target:
        line = entry.get("__line__", "?")
        logger.warning(f"Skipping entry at line {line}: 'source' and 'target' are required")
        return None

    tags = entry.get("tags") or []
    if isinstance(tags, str):
        tags = [tags]

    optional = {key: _text(entry.get(key)) or None for key in _OPTIONAL_TEXT}

    return VocabularyItem(
        id=_text(entry.get("id")) or generate_word_id(),
        source=source,
        target=target,
        lesson_id=_text(entry.get("lesson_id")),
        level=_text(entry.get("level")),
        language_pair=_text(entry.get("language_pair")),
        category=VocabularyCategory.parse(entry.get("category")),
        added_at=current_date,
        tags=tuple(_text(t) for t in tags if _text(t)),
        **optional,
    )


def import_vocabulary(path: Path, store: VocabularyStore, current_date: str) -> int:
    """
    Add every valid entry of a YAML file to ``store``.

    Returns the number of items added.
    """
    entries = load_entries(path.read_text(encoding="utf-8"))

    added = 0
    for entry in entries:
        item = entry_to_item(entry, current_date)
        if item is None:
            continue
        existing = store.get(item.id)
        if existing is not None and existing.in_srs:
            item = replace(item, in_srs=True)
        store.add(item)
        added += 1

    logger.info(f"Imported {added}/{len(entries)} entries from {path}")
    return added
