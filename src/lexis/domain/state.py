"""Everything a learner's session persists: their cards and vocabulary bank."""

from dataclasses import dataclass, field

from lexis.domain.srs import Card
from lexis.domain.vocabulary import VocabularyStore


@dataclass
class StudyState:
    cards: dict[str, Card] = field(default_factory=dict)
    vocabulary: VocabularyStore = field(default_factory=VocabularyStore)

    def card_list(self) -> list[Card]:
        return list(self.cards.values())
