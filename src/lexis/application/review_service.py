"""
Review service, the application layer orchestrator.

Coordinates the vocabulary bank, the learner's cards and the scheduler on
behalf of the host application. All dates are passed in explicitly.
"""

import logging

from lexis.domain.constants import (
    DEFAULT_WEAK_ACCURACY_THRESHOLD,
    DEFAULT_WEAK_EASE_THRESHOLD,
)
from lexis.domain.errors import CardNotFoundError, VocabularyItemNotFoundError
from lexis.domain.srs import Card, ReviewUpdate
from lexis.domain.state import StudyState
from lexis.domain.stats import CardStats
from lexis.domain.vocabulary import VocabularyItem, VocabularyStats

from .scheduler import SrsScheduler

logger = logging.getLogger(__name__)


class ReviewService:
    """
    Application service for promoting vocabulary and reviewing cards.

    Operates on a ``StudyState`` owned by the caller; persisting it is the
    caller's job.
    """

    def __init__(
        self,
        state: StudyState,
        scheduler: SrsScheduler | None = None,
        weak_ease_threshold: float = DEFAULT_WEAK_EASE_THRESHOLD,
        weak_accuracy_threshold: float = DEFAULT_WEAK_ACCURACY_THRESHOLD,
    ):
        """
        Args:
            state: Cards and vocabulary bank to operate on.
            scheduler: Optional custom scheduler; uses default if not provided.
            weak_ease_threshold: Ease below this marks a card as weak.
            weak_accuracy_threshold: Accuracy (%) below this marks a card as weak.
        """
        self.state = state
        self._scheduler = scheduler or SrsScheduler()
        self.weak_ease_threshold = weak_ease_threshold
        self.weak_accuracy_threshold = weak_accuracy_threshold

    # ---------- Vocabulary ----------

    def add_item(self, item: VocabularyItem) -> None:
        self.state.vocabulary.add(item)

    def get_item(self, item_id: str) -> VocabularyItem:
        item = self.state.vocabulary.get(item_id)
        if item is None:
            raise VocabularyItemNotFoundError(item_id)
        return item

    def search(self, query: str, limit: int | None = None) -> list[VocabularyItem]:
        return self.state.vocabulary.search(query, limit)

    def promote(self, item_id: str, current_date: str) -> Card:
        """
        Create a card for a vocabulary item and flag the item as in SRS.

        The item stays in the bank. If the card already exists it is
        returned untouched.
        """
        item = self.get_item(item_id)

        existing = self.state.cards.get(item_id)
        if existing is not None:
            self.state.vocabulary.mark_in_srs(item_id)
            return existing

        card = Card.with_details(
            word_id=item.id,
            source_word=item.source,
            target_word=item.target,
            language_pair=item.language_pair,
            level=item.level,
            lesson_id=item.lesson_id,
            pronunciation=item.pronunciation,
            example_sentence=item.example_sentence,
            current_date=current_date,
        )
        self.state.cards[card.word_id] = card
        self.state.vocabulary.mark_in_srs(item_id)
        logger.info(f"Promoted {item_id} to a review card")
        return card

    # ---------- Reviews ----------

    def get_card(self, word_id: str) -> Card:
        card = self.state.cards.get(word_id)
        if card is None:
            raise CardNotFoundError(word_id)
        return card

    def preview(self, word_id: str, quality: int, current_date: str) -> ReviewUpdate:
        """Compute the update a review would produce without applying it."""
        return self._scheduler.calculate_next_review(self.get_card(word_id), quality, current_date)

    def review(self, word_id: str, quality: int, current_date: str) -> ReviewUpdate:
        card = self.get_card(word_id)
        update = self._scheduler.calculate_next_review(card, quality, current_date)
        self._scheduler.apply_update(card, update, current_date)
        logger.info(
            f"Review of {word_id} {'passed' if update.was_successful else 'failed'}; "
            f"next review {update.next_review_date}"
        )
        return update

    def session_queue(self, current_date: str, limit: int | None = None) -> list[Card]:
        """Due cards, hardest first, capped at ``limit``."""
        due = self._scheduler.get_due_cards(self.state.card_list(), current_date)
        queue = self._scheduler.sort_by_priority(due, current_date)
        return queue if limit is None else queue[:limit]

    def due_cards(self, current_date: str) -> list[Card]:
        return self._scheduler.get_due_cards(self.state.card_list(), current_date)

    def weak_cards(self) -> list[Card]:
        return self._scheduler.get_weak_cards(
            self.state.card_list(), self.weak_ease_threshold, self.weak_accuracy_threshold
        )

    def new_cards(self) -> list[Card]:
        return self._scheduler.get_new_cards(self.state.card_list())

    # ---------- Statistics ----------

    def card_stats(self, current_date: str) -> CardStats:
        return CardStats.from_cards(self.state.card_list(), current_date)

    def vocabulary_stats(self) -> VocabularyStats:
        return self.state.vocabulary.stats()
