"""
Domain models for the vocabulary bank.

A ``VocabularyItem`` is a dictionary entry, independent of review state.
Items are frozen so that the fields the store indexes on cannot change
behind its back; updates go through ``dataclasses.replace`` and the store.
"""

from dataclasses import dataclass, field
from enum import Enum


class VocabularyCategory(str, Enum):
    NOUN = "Noun"
    VERB = "Verb"
    ADJECTIVE = "Adjective"
    ADVERB = "Adverb"
    PRONOUN = "Pronoun"
    PREPOSITION = "Preposition"
    CONJUNCTION = "Conjunction"
    INTERJECTION = "Interjection"
    PHRASE = "Phrase"
    EXPRESSION = "Expression"
    IDIOM = "Idiom"
    GRAMMAR = "Grammar"
    OTHER = "Other"

    @property
    def display_name(self) -> str:
        return self.value

    @property
    def icon(self) -> str:
        """Material icon name shown next to the category."""
        return _CATEGORY_ICONS[self]

    @classmethod
    def all(cls) -> list["VocabularyCategory"]:
        return list(cls)

    @classmethod
    def parse(cls, text: "str | VocabularyCategory | None") -> "VocabularyCategory":
        """Case-insensitive lookup; anything unrecognized is OTHER."""
        if isinstance(text, cls):
            return text
        if not text:
            return cls.OTHER
        return _CATEGORY_LOOKUP.get(str(text).strip().lower(), cls.OTHER)


_CATEGORY_ICONS = {
    VocabularyCategory.NOUN: "category",
    VocabularyCategory.VERB: "directions_run",
    VocabularyCategory.ADJECTIVE: "palette",
    VocabularyCategory.ADVERB: "speed",
    VocabularyCategory.PRONOUN: "person",
    VocabularyCategory.PREPOSITION: "place",
    VocabularyCategory.CONJUNCTION: "link",
    VocabularyCategory.INTERJECTION: "chat_bubble",
    VocabularyCategory.PHRASE: "short_text",
    VocabularyCategory.EXPRESSION: "format_quote",
    VocabularyCategory.IDIOM: "lightbulb",
    VocabularyCategory.GRAMMAR: "rule",
    VocabularyCategory.OTHER: "label",
}

_CATEGORY_LOOKUP = {c.value.lower(): c for c in VocabularyCategory}


@dataclass(frozen=True)
class VocabularyItem:
    """
    A word or phrase with its translation.

    Attributes:
        id: Unique identifier, shared with the item's Card when promoted.
        source: Text in the learner's language.
        target: Text in the language being learned.
        lesson_id: Lesson the item was introduced in.
        level: CEFR level (A1-C2).
        language_pair: Pair code, e.g. "en_to_pt_br".
        category: Part of speech or kind of entry.
        added_at: ISO date the item entered the bank.
        tags: Free-form labels, searchable.
        in_srs: Whether a Card exists for this item.
    """

    id: str
    source: str
    target: str
    lesson_id: str
    level: str
    language_pair: str
    category: VocabularyCategory
    added_at: str
    pronunciation: str | None = None
    example_sentence: str | None = None
    example_translation: str | None = None
    notes: str | None = None
    tags: tuple[str, ...] = field(default_factory=tuple)
    in_srs: bool = False

    def __post_init__(self):
        # Plain strings are accepted; unrecognized ones become OTHER.
        object.__setattr__(self, "category", VocabularyCategory.parse(self.category))
        object.__setattr__(self, "tags", tuple(self.tags))

    def matches_query(self, query: str) -> bool:
        """Case-insensitive substring match on source, target or any tag."""
        needle = query.lower()
        return (
            needle in self.source.lower()
            or needle in self.target.lower()
            or any(needle in tag.lower() for tag in self.tags)
        )

    def is_exact_match(self, query: str) -> bool:
        needle = query.lower()
        return self.source.lower() == needle or self.target.lower() == needle


@dataclass(frozen=True)
class VocabularyStats:
    """Counts describing a vocabulary bank. ``by_category`` uses display names."""

    total: int
    in_srs: int
    not_in_srs: int
    by_level: dict[str, int] = field(default_factory=dict)
    by_category: dict[str, int] = field(default_factory=dict)
