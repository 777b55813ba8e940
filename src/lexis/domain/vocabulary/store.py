"""
Indexed vocabulary bank.

The store owns the primary id -> item mapping and four secondary indices
(level, lesson, language pair, category), each mapping a key to the ids
carrying it in insertion order. Every mutation goes through ``add``,
``remove`` or ``mark_in_srs``; readers only ever receive copies of the
index lists, so the indices cannot drift from the primary mapping.
"""

import logging
from collections.abc import Iterator
from dataclasses import replace

from .models import VocabularyCategory, VocabularyItem, VocabularyStats

logger = logging.getLogger(__name__)

IndexName = str

INDEX_NAMES: tuple[IndexName, ...] = ("by_level", "by_lesson", "by_language_pair", "by_category")


def _index_keys(item: VocabularyItem) -> dict[IndexName, str]:
    return {
        "by_level": item.level,
        "by_lesson": item.lesson_id,
        "by_language_pair": item.language_pair,
        "by_category": item.category.value,
    }


class VocabularyStore:
    def __init__(self, items: "list[VocabularyItem] | None" = None):
        self._items: dict[str, VocabularyItem] = {}
        self._indices: dict[IndexName, dict[str, list[str]]] = {name: {} for name in INDEX_NAMES}
        for item in items or []:
            self.add(item)

    # ---------- Mutation ----------

    def add(self, item: VocabularyItem) -> None:
        """
        Insert an item and index it under its own keys.

        Re-adding an existing id replaces the old entry, including its
        index positions.
        """
        if item.id in self._items:
            self.remove(item.id)

        self._items[item.id] = item
        for name, key in _index_keys(item).items():
            self._indices[name].setdefault(key, []).append(item.id)
        logger.debug(f"Added vocabulary item {item.id}")

    def remove(self, item_id: str) -> VocabularyItem | None:
        """Drop an item from the primary mapping and from every index."""
        item = self._items.pop(item_id, None)
        if item is None:
            return None

        for name, key in _index_keys(item).items():
            index = self._indices[name]
            ids = [i for i in index.get(key, []) if i != item_id]
            if ids:
                index[key] = ids
            else:
                index.pop(key, None)
        logger.debug(f"Removed vocabulary item {item_id}")
        return item

    def mark_in_srs(self, item_id: str) -> bool:
        item = self._items.get(item_id)
        if item is None:
            return False
        if not item.in_srs:
            # Indexed keys are unchanged, so the indices stay valid.
            self._items[item_id] = replace(item, in_srs=True)
        return True

    # ---------- Lookup ----------

    def get(self, item_id: str) -> VocabularyItem | None:
        return self._items.get(item_id)

    def all(self) -> list[VocabularyItem]:
        return list(self._items.values())

    def _lookup(self, name: IndexName, key: str) -> list[VocabularyItem]:
        ids = self._indices[name].get(key, [])
        return [self._items[i] for i in ids if i in self._items]

    def by_level(self, level: str) -> list[VocabularyItem]:
        return self._lookup("by_level", level)

    def by_lesson(self, lesson_id: str) -> list[VocabularyItem]:
        return self._lookup("by_lesson", lesson_id)

    def by_language_pair(self, language_pair: str) -> list[VocabularyItem]:
        return self._lookup("by_language_pair", language_pair)

    def by_category(self, category: VocabularyCategory | str) -> list[VocabularyItem]:
        if not isinstance(category, VocabularyCategory):
            # Unknown strings are a lookup miss, not a fallback to OTHER.
            match = [c for c in VocabularyCategory if c.value.lower() == str(category).lower()]
            if not match:
                return []
            category = match[0]
        return self._lookup("by_category", category.value)

    def not_in_srs(self) -> list[VocabularyItem]:
        return [item for item in self._items.values() if not item.in_srs]

    def search(self, query: str, limit: int | None = None) -> list[VocabularyItem]:
        """
        Case-insensitive search over source, target and tags.

        Items whose source or target equals the query come first; the
        relative order within each group is insertion order.
        """
        matches = [item for item in self._items.values() if item.matches_query(query)]
        matches.sort(key=lambda item: not item.is_exact_match(query))
        if limit is not None:
            matches = matches[: max(limit, 0)]
        return matches

    # ---------- Introspection ----------

    def index(self, name: IndexName) -> dict[str, list[str]]:
        """A copy of one secondary index, e.g. ``index("by_level")``."""
        return {key: list(ids) for key, ids in self._indices[name].items()}

    def stats(self) -> VocabularyStats:
        total = len(self._items)
        in_srs = sum(1 for item in self._items.values() if item.in_srs)
        return VocabularyStats(
            total=total,
            in_srs=in_srs,
            not_in_srs=total - in_srs,
            by_level={key: len(ids) for key, ids in self._indices["by_level"].items()},
            by_category={
                VocabularyCategory(key).display_name: len(ids)
                for key, ids in self._indices["by_category"].items()
            },
        )

    @property
    def is_empty(self) -> bool:
        return not self._items

    def __len__(self) -> int:
        return len(self._items)

    def __contains__(self, item_id: object) -> bool:
        return item_id in self._items

    def __iter__(self) -> Iterator[VocabularyItem]:
        return iter(list(self._items.values()))
