"""
Summary statistics over a collection of cards.

A ``CardStats`` is a snapshot: recompute it whenever the cards change.
"""

from collections.abc import Iterable
from dataclasses import asdict, dataclass

from lexis.domain.srs import Card, MasteryLevel


@dataclass(frozen=True)
class CardStats:
    """
    Attributes:
        total_cards: Number of cards summarized.
        due_today: Cards whose next review is on or before the given date.
        new_cards .. mastered_cards: Cards per mastery tier; they sum to total_cards.
        average_ease_factor: Mean ease over all cards, reviewed or not.
        average_accuracy: Mean accuracy (0-100) over cards with at least one review.
    """

    total_cards: int = 0
    due_today: int = 0
    new_cards: int = 0
    learning_cards: int = 0
    familiar_cards: int = 0
    proficient_cards: int = 0
    mastered_cards: int = 0
    average_ease_factor: float = 0.0
    average_accuracy: float = 0.0

    @classmethod
    def from_cards(cls, cards: Iterable[Card], current_date: str) -> "CardStats":
        tiers = {level: 0 for level in MasteryLevel}
        total = 0
        due = 0
        ease_sum = 0.0
        accuracy_sum = 0.0
        reviewed = 0

        for card in cards:
            total += 1
            if card.is_due(current_date):
                due += 1
            tiers[card.mastery_level()] += 1
            ease_sum += card.ease_factor
            if card.total_reviews > 0:
                reviewed += 1
                accuracy_sum += card.accuracy_rate()

        if total == 0:
            return cls()

        return cls(
            total_cards=total,
            due_today=due,
            new_cards=tiers[MasteryLevel.NEW],
            learning_cards=tiers[MasteryLevel.LEARNING],
            familiar_cards=tiers[MasteryLevel.FAMILIAR],
            proficient_cards=tiers[MasteryLevel.PROFICIENT],
            mastered_cards=tiers[MasteryLevel.MASTERED],
            average_ease_factor=ease_sum / total,
            average_accuracy=accuracy_sum / reviewed if reviewed else 0.0,
        )

    def by_mastery(self) -> dict[MasteryLevel, int]:
        return {
            MasteryLevel.NEW: self.new_cards,
            MasteryLevel.LEARNING: self.learning_cards,
            MasteryLevel.FAMILIAR: self.familiar_cards,
            MasteryLevel.PROFICIENT: self.proficient_cards,
            MasteryLevel.MASTERED: self.mastered_cards,
        }

    def to_dict(self) -> dict:
        return asdict(self)
