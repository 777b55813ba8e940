"""
Domain models for spaced-repetition review.

These are plain data structures with no I/O. The only mutation path for a
``Card``'s scheduling state is ``SrsScheduler.apply_update``.
"""

from dataclasses import dataclass
from enum import Enum, IntEnum

from lexis.domain import dates
from lexis.domain.constants import (
    FAMILIAR_TIER,
    INITIAL_EASE_FACTOR,
    MASTERED_TIER,
    MAX_QUALITY,
    MIN_QUALITY,
    PROFICIENT_TIER,
    SUCCESS_QUALITY,
)


class MasteryLevel(str, Enum):
    """
    Display classification of a card, derived from its review history.

    Never stored: always recomputed by ``Card.mastery_level()``.
    """

    NEW = "New"
    LEARNING = "Learning"
    FAMILIAR = "Familiar"
    PROFICIENT = "Proficient"
    MASTERED = "Mastered"

    @property
    def display_name(self) -> str:
        return self.value

    @property
    def color(self) -> str:
        """Hex colour used by the host UI for this tier."""
        return _MASTERY_COLORS[self]

    @classmethod
    def classify(cls, repetitions: int, ease_factor: float) -> "MasteryLevel":
        """
        Map (repetitions, ease_factor) onto a tier.

        Repetition counts of 3-10 whose ease is below their tier's threshold
        fall back to LEARNING, as does anything else not matched below.
        """
        if repetitions == 0:
            return cls.NEW
        if repetitions <= 2:
            return cls.LEARNING

        for level, (min_reps, max_reps, min_ease) in (
            (cls.FAMILIAR, FAMILIAR_TIER),
            (cls.PROFICIENT, PROFICIENT_TIER),
            (cls.MASTERED, MASTERED_TIER),
        ):
            in_band = repetitions >= min_reps and (max_reps is None or repetitions <= max_reps)
            if in_band and ease_factor >= min_ease:
                return level

        return cls.LEARNING


_MASTERY_COLORS = {
    MasteryLevel.NEW: "#9E9E9E",
    MasteryLevel.LEARNING: "#FF9800",
    MasteryLevel.FAMILIAR: "#FFEB3B",
    MasteryLevel.PROFICIENT: "#8BC34A",
    MasteryLevel.MASTERED: "#4CAF50",
}


class ReviewQuality(IntEnum):
    """Learner self-assessment of one review, 0 (no recall) to 5 (perfect)."""

    BLACKOUT = 0
    INCORRECT = 1
    INCORRECT_EASY = 2
    CORRECT_DIFFICULT = 3
    CORRECT_HESITATION = 4
    PERFECT = 5

    @classmethod
    def from_value(cls, value: int) -> "ReviewQuality | None":
        if MIN_QUALITY <= value <= MAX_QUALITY:
            return cls(value)
        return None

    @classmethod
    def clamp(cls, value: int) -> "ReviewQuality":
        return cls(min(max(int(value), MIN_QUALITY), MAX_QUALITY))

    @property
    def is_successful(self) -> bool:
        return self >= SUCCESS_QUALITY

    @property
    def display_name(self) -> str:
        return _QUALITY_NAMES[self]


_QUALITY_NAMES = {
    ReviewQuality.BLACKOUT: "Forgot",
    ReviewQuality.INCORRECT: "Wrong",
    ReviewQuality.INCORRECT_EASY: "Almost",
    ReviewQuality.CORRECT_DIFFICULT: "Hard",
    ReviewQuality.CORRECT_HESITATION: "Good",
    ReviewQuality.PERFECT: "Easy",
}


@dataclass(frozen=True)
class ReviewUpdate:
    """
    Outcome of scheduling one review.

    Attributes:
        new_ease_factor: Ease factor after the review, within [1.3, 2.5].
        new_interval: Days until the next review.
        new_repetitions: Successful-review streak after the review.
        next_review_date: ISO date of the next review.
        quality: The clamped 0-5 rating that produced this update.
        was_successful: True when quality >= 3.
    """

    new_ease_factor: float
    new_interval: int
    new_repetitions: int
    next_review_date: str
    quality: int
    was_successful: bool


@dataclass
class Card:
    """
    Review record for one vocabulary word.

    ``word_id`` ties the card to its ``VocabularyItem``. ``lesson_id``,
    ``level`` and ``language_pair`` are provenance only.
    """

    word_id: str
    source_word: str
    target_word: str
    language_pair: str
    level: str
    lesson_id: str
    next_review_date: str
    created_at: str

    pronunciation: str | None = None
    example_sentence: str | None = None

    # SM-2 state
    ease_factor: float = INITIAL_EASE_FACTOR
    interval: int = 0
    repetitions: int = 0
    last_reviewed: str | None = None

    # Performance history
    total_reviews: int = 0
    correct_reviews: int = 0
    last_quality: int | None = None

    @classmethod
    def new(
        cls,
        word_id: str,
        source_word: str,
        target_word: str,
        language_pair: str,
        level: str,
        lesson_id: str,
        current_date: str,
    ) -> "Card":
        """A fresh card, due immediately on ``current_date``."""
        return cls(
            word_id=word_id,
            source_word=source_word,
            target_word=target_word,
            language_pair=language_pair,
            level=level,
            lesson_id=lesson_id,
            next_review_date=current_date,
            created_at=current_date,
        )

    @classmethod
    def with_details(
        cls,
        word_id: str,
        source_word: str,
        target_word: str,
        language_pair: str,
        level: str,
        lesson_id: str,
        pronunciation: str | None,
        example_sentence: str | None,
        current_date: str,
    ) -> "Card":
        card = cls.new(
            word_id, source_word, target_word, language_pair, level, lesson_id, current_date
        )
        card.pronunciation = pronunciation
        card.example_sentence = example_sentence
        return card

    def is_due(self, current_date: str) -> bool:
        # Fixed-width zero-padded ISO dates compare chronologically as strings.
        return self.next_review_date <= current_date

    def days_overdue(self, current_date: str) -> int:
        """Days past the scheduled review (negative if not yet due)."""
        return dates.days_between(self.next_review_date, current_date)

    def accuracy_rate(self) -> float:
        """Percentage of reviews answered correctly, 0-100."""
        if self.total_reviews == 0:
            return 0.0
        return self.correct_reviews / self.total_reviews * 100.0

    def is_weak(self, ease_threshold: float, accuracy_threshold: float) -> bool:
        """Either a low ease factor or a low accuracy is enough."""
        return self.ease_factor < ease_threshold or self.accuracy_rate() < accuracy_threshold

    def mastery_level(self) -> MasteryLevel:
        return MasteryLevel.classify(self.repetitions, self.ease_factor)

    def mastery_info(self) -> dict[str, str]:
        level = self.mastery_level()
        return {"level": level.name.title(), "name": level.display_name, "color": level.color}
