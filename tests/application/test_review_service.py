from unittest.mock import MagicMock

import pytest

from lexis.application.review_service import ReviewService
from lexis.application.scheduler import SrsScheduler
from lexis.domain.errors import CardNotFoundError, LexisError, VocabularyItemNotFoundError
from lexis.domain.srs import ReviewUpdate


@pytest.fixture
def service(state):
    return ReviewService(state)


def test_promote_creates_card_and_keeps_item(service, make_item):
    service.add_item(
        make_item("vocab_010", "cat", "gato", pronunciation="GAH-too", example_sentence="O gato.")
    )

    card = service.promote("vocab_010", "2024-01-15")

    assert card.word_id == "vocab_010"
    assert card.source_word == "cat"
    assert card.target_word == "gato"
    assert card.pronunciation == "GAH-too"
    assert card.example_sentence == "O gato."
    assert card.is_due("2024-01-15")
    assert service.state.cards["vocab_010"] is card
    assert service.get_item("vocab_010").in_srs


def test_promote_twice_returns_existing_card(service):
    first = service.promote("vocab_001", "2024-01-15")
    service.review("vocab_001", 5, "2024-01-15")

    second = service.promote("vocab_001", "2024-02-01")

    assert second is first
    assert second.total_reviews == 1
    assert len(service.state.cards) == 1


def test_promote_unknown_item(service):
    with pytest.raises(VocabularyItemNotFoundError) as exc:
        service.promote("missing", "2024-01-15")
    assert isinstance(exc.value, LexisError)
    assert isinstance(exc.value, LookupError)


def test_review_unknown_card(service):
    with pytest.raises(CardNotFoundError):
        service.review("vocab_001", 4, "2024-01-15")


def test_preview_does_not_apply(service):
    card = service.promote("vocab_001", "2024-01-15")

    update = service.preview("vocab_001", 4, "2024-01-15")

    assert update.next_review_date == "2024-01-16"
    assert card.total_reviews == 0
    assert card.next_review_date == "2024-01-15"


def test_review_applies(service):
    card = service.promote("vocab_001", "2024-01-15")

    update = service.review("vocab_001", 4, "2024-01-15")

    assert update.was_successful
    assert card.next_review_date == "2024-01-16"
    assert card.total_reviews == 1


def test_review_delegates_to_scheduler(state):
    scheduler = MagicMock(spec=SrsScheduler)
    update = ReviewUpdate(2.5, 1, 1, "2024-01-16", 4, True)
    scheduler.calculate_next_review.return_value = update
    service = ReviewService(state, scheduler=scheduler)
    card = service.promote("vocab_001", "2024-01-15")

    assert service.review("vocab_001", 4, "2024-01-15") is update

    scheduler.calculate_next_review.assert_called_once_with(card, 4, "2024-01-15")
    scheduler.apply_update.assert_called_once_with(card, update, "2024-01-15")


def test_session_queue_only_due_and_hardest_first(service):
    for item_id in ("vocab_001", "vocab_002", "vocab_003", "vocab_004"):
        service.promote(item_id, "2024-01-15")
    service.state.cards["vocab_002"].ease_factor = 1.6
    service.state.cards["vocab_003"].next_review_date = "2024-02-01"

    queue = service.session_queue("2024-01-15")

    assert [c.word_id for c in queue] == ["vocab_002", "vocab_001", "vocab_004"]
    assert len(service.session_queue("2024-01-15", limit=1)) == 1


def test_weak_and_new_cards_use_thresholds(state):
    service = ReviewService(state, weak_ease_threshold=1.5, weak_accuracy_threshold=0.0)
    service.promote("vocab_001", "2024-01-15")
    service.promote("vocab_002", "2024-01-15")
    service.state.cards["vocab_002"].ease_factor = 1.4

    assert [c.word_id for c in service.weak_cards()] == ["vocab_002"]
    assert len(service.new_cards()) == 2


def test_stats(service):
    service.promote("vocab_001", "2024-01-15")
    service.review("vocab_001", 5, "2024-01-15")
    service.promote("vocab_002", "2024-01-15")

    card_stats = service.card_stats("2024-01-15")
    vocab_stats = service.vocabulary_stats()

    assert card_stats.total_cards == 2
    assert card_stats.due_today == 1
    assert card_stats.learning_cards == 1
    assert card_stats.new_cards == 1
    assert card_stats.average_accuracy == pytest.approx(100.0)
    assert vocab_stats.in_srs == 2
    assert vocab_stats.not_in_srs == 2
