"""
Persisted shapes of the domain entities.

Field names are the stable on-disk contract. Unknown fields are ignored,
missing optional fields become None or empty, and out-of-range numbers are
clamped back into their valid bands instead of being rejected.
"""

from dataclasses import asdict
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from lexis.domain import dates
from lexis.domain.constants import MAX_EASE_FACTOR, MAX_QUALITY, MIN_EASE_FACTOR, MIN_QUALITY
from lexis.domain.srs import Card
from lexis.domain.state import StudyState
from lexis.domain.vocabulary import VocabularyCategory, VocabularyItem, VocabularyStore
from lexis.domain.vocabulary.store import INDEX_NAMES

STATE_VERSION = 1


class CardRecord(BaseModel):
    model_config = ConfigDict(extra="ignore")

    word_id: str
    source_word: str
    target_word: str
    language_pair: str
    level: str
    lesson_id: str
    pronunciation: str | None = None
    example_sentence: str | None = None

    ease_factor: float
    interval: int
    repetitions: int
    next_review_date: str
    last_reviewed: str | None = None

    total_reviews: int
    correct_reviews: int
    last_quality: int | None = None
    created_at: str

    @field_validator("next_review_date", "last_reviewed", "created_at", mode="before")
    @classmethod
    def normalize_date(cls, v: Any) -> Any:
        # Stored dates are always zero-padded YYYY-MM-DD.
        if isinstance(v, str):
            return dates.from_ordinal(dates.to_ordinal(v))
        return v

    @field_validator("ease_factor")
    @classmethod
    def clamp_ease(cls, v: float) -> float:
        return min(max(v, MIN_EASE_FACTOR), MAX_EASE_FACTOR)

    @field_validator("interval", "repetitions", "total_reviews", "correct_reviews")
    @classmethod
    def non_negative(cls, v: int) -> int:
        return max(v, 0)

    @field_validator("last_quality")
    @classmethod
    def clamp_quality(cls, v: int | None) -> int | None:
        if v is None:
            return None
        return min(max(v, MIN_QUALITY), MAX_QUALITY)

    @model_validator(mode="after")
    def cap_correct_reviews(self) -> "CardRecord":
        if self.correct_reviews > self.total_reviews:
            self.correct_reviews = self.total_reviews
        return self

    @classmethod
    def from_domain(cls, card: Card) -> "CardRecord":
        return cls.model_validate(asdict(card))

    def to_domain(self) -> Card:
        return Card(**self.model_dump())


class VocabularyItemRecord(BaseModel):
    model_config = ConfigDict(extra="ignore")

    id: str
    source: str
    target: str
    pronunciation: str | None = None
    example_sentence: str | None = None
    example_translation: str | None = None
    lesson_id: str
    level: str
    language_pair: str
    category: VocabularyCategory = VocabularyCategory.OTHER
    notes: str | None = None
    tags: list[str] = Field(default_factory=list)
    in_srs: bool = False
    added_at: str

    @field_validator("category", mode="before")
    @classmethod
    def parse_category(cls, v: Any) -> VocabularyCategory:
        return VocabularyCategory.parse(v)

    @field_validator("tags", mode="before")
    @classmethod
    def none_to_empty(cls, v: Any) -> Any:
        return [] if v is None else v

    @classmethod
    def from_domain(cls, item: VocabularyItem) -> "VocabularyItemRecord":
        return cls.model_validate(asdict(item))

    def to_domain(self) -> VocabularyItem:
        data = self.model_dump()
        data["tags"] = tuple(data["tags"])
        return VocabularyItem(**data)


class VocabularyStoreRecord(BaseModel):
    """
    The bank as stored: items by id plus the four indices.

    Indices are written for readers of the file but rebuilt from the items on
    load, so a stale or hand-edited index cannot corrupt the store.
    """

    model_config = ConfigDict(extra="ignore")

    items: dict[str, VocabularyItemRecord] = Field(default_factory=dict)
    by_level: dict[str, list[str]] = Field(default_factory=dict)
    by_lesson: dict[str, list[str]] = Field(default_factory=dict)
    by_language_pair: dict[str, list[str]] = Field(default_factory=dict)
    by_category: dict[str, list[str]] = Field(default_factory=dict)

    @model_validator(mode="before")
    @classmethod
    def default_item_ids(cls, data: Any) -> Any:
        # An item without its own id takes the key it is stored under.
        if isinstance(data, dict) and isinstance(data.get("items"), dict):
            data = dict(data)
            data["items"] = {
                key: ({"id": key, **value} if isinstance(value, dict) else value)
                for key, value in data["items"].items()
            }
        return data

    @classmethod
    def from_domain(cls, store: VocabularyStore) -> "VocabularyStoreRecord":
        return cls(
            items={item.id: VocabularyItemRecord.from_domain(item) for item in store.all()},
            **{name: store.index(name) for name in INDEX_NAMES},
        )

    def to_domain(self) -> VocabularyStore:
        return VocabularyStore([record.to_domain() for record in self.items.values()])


class StudyStateRecord(BaseModel):
    model_config = ConfigDict(extra="ignore")

    version: int = STATE_VERSION
    cards: list[CardRecord] = Field(default_factory=list)
    vocabulary: VocabularyStoreRecord = Field(default_factory=VocabularyStoreRecord)

    @classmethod
    def from_domain(cls, state: StudyState) -> "StudyStateRecord":
        return cls(
            cards=[CardRecord.from_domain(card) for card in state.cards.values()],
            vocabulary=VocabularyStoreRecord.from_domain(state.vocabulary),
        )

    def to_domain(self) -> StudyState:
        cards = [record.to_domain() for record in self.cards]
        return StudyState(
            cards={card.word_id: card for card in cards},
            vocabulary=self.vocabulary.to_domain(),
        )
