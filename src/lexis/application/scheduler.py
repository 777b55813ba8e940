"""
SM-2 scheduler for vocabulary cards.

Scheduling is split in two steps: ``calculate_next_review`` computes a
``ReviewUpdate`` without touching the card, and ``apply_update`` writes it.
A computed update can therefore be previewed or logged before it is applied.
"""

import logging
import math
from collections.abc import Iterable

from lexis.domain import dates
from lexis.domain.constants import (
    FAILURE_EASE_PENALTY,
    FIRST_INTERVAL,
    MAX_EASE_FACTOR,
    MIN_EASE_FACTOR,
    RELEARN_INTERVAL,
    SECOND_INTERVAL,
)
from lexis.domain.srs import Card, ReviewQuality, ReviewUpdate

logger = logging.getLogger(__name__)


def clamp_ease(ease_factor: float) -> float:
    return min(max(ease_factor, MIN_EASE_FACTOR), MAX_EASE_FACTOR)


def ease_delta(quality: int) -> float:
    """
    SM-2 ease adjustment for a successful review.

    +0.10 for a 5, 0.00 for a 4, -0.14 for a 3.
    """
    miss = 5 - quality
    return 0.1 - miss * (0.08 + miss * 0.02)


def _round_half_up(value: float) -> int:
    # Intervals are non-negative; round() would round 2.5 down to 2.
    return int(math.floor(value + 0.5))


class SrsScheduler:
    """
    Computes review schedules. Stateless and side-effect free apart from
    ``apply_update``.
    """

    def calculate_next_review(self, card: Card, quality: int, current_date: str) -> ReviewUpdate:
        """
        Work out the card's next schedule for a review rated ``quality``.

        Args:
            card: The card being reviewed. Not modified.
            quality: 0-5 rating; values outside that range are clamped.
            current_date: ISO date of the review.
        """
        rating = ReviewQuality.clamp(quality)

        if rating.is_successful:
            new_repetitions = card.repetitions + 1
            if new_repetitions == 1:
                new_interval = FIRST_INTERVAL
            elif new_repetitions == 2:
                new_interval = SECOND_INTERVAL
            else:
                # Grows from the previous interval, using the previous ease.
                new_interval = max(_round_half_up(card.interval * card.ease_factor), 1)
            new_ease = clamp_ease(card.ease_factor + ease_delta(rating))
        else:
            new_repetitions = 0
            new_interval = RELEARN_INTERVAL
            new_ease = max(card.ease_factor - FAILURE_EASE_PENALTY, MIN_EASE_FACTOR)

        return ReviewUpdate(
            new_ease_factor=new_ease,
            new_interval=new_interval,
            new_repetitions=new_repetitions,
            next_review_date=dates.add_days(current_date, new_interval),
            quality=int(rating),
            was_successful=rating.is_successful,
        )

    def apply_update(self, card: Card, update: ReviewUpdate, current_date: str) -> None:
        """Write ``update`` into ``card`` and record the review in its history."""
        card.ease_factor = clamp_ease(update.new_ease_factor)
        card.interval = update.new_interval
        card.repetitions = update.new_repetitions
        card.next_review_date = update.next_review_date
        card.last_reviewed = current_date
        card.last_quality = update.quality
        card.total_reviews += 1
        if update.was_successful:
            card.correct_reviews += 1

        logger.debug(
            f"Reviewed {card.word_id}: q={update.quality} ease={card.ease_factor:.2f} "
            f"interval={card.interval} next={card.next_review_date}"
        )

    def review(self, card: Card, quality: int, current_date: str) -> ReviewUpdate:
        """Calculate and apply in one step."""
        update = self.calculate_next_review(card, quality, current_date)
        self.apply_update(card, update, current_date)
        return update

    # ---------- Collection helpers ----------

    def get_due_cards(self, cards: Iterable[Card], current_date: str) -> list[Card]:
        return [card for card in cards if card.is_due(current_date)]

    def get_weak_cards(
        self,
        cards: Iterable[Card],
        ease_threshold: float,
        accuracy_threshold: float,
    ) -> list[Card]:
        return [card for card in cards if card.is_weak(ease_threshold, accuracy_threshold)]

    def get_new_cards(self, cards: Iterable[Card]) -> list[Card]:
        return [card for card in cards if card.total_reviews == 0]

    def sort_by_priority(self, cards: Iterable[Card], current_date: str) -> list[Card]:
        """
        Order cards for a study session.

        Due cards come before cards that are not due; within each group the
        lowest ease factor (hardest card) comes first. The sort is stable.
        """
        return sorted(cards, key=lambda card: (not card.is_due(current_date), card.ease_factor))
