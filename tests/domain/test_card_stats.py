import pytest

from lexis.domain.srs import MasteryLevel
from lexis.domain.stats import CardStats


def test_empty_collection_is_all_zero():
    stats = CardStats.from_cards([], "2024-01-15")

    assert stats == CardStats()
    assert stats.total_cards == 0
    assert stats.average_ease_factor == 0.0
    assert stats.average_accuracy == 0.0


def test_from_cards(make_card):
    cards = [
        make_card("new"),  # due today, never reviewed
        make_card(
            "learning",
            repetitions=1,
            total_reviews=2,
            correct_reviews=1,
            ease_factor=2.3,
            next_review_date="2024-01-20",
        ),
        make_card(
            "familiar",
            repetitions=4,
            total_reviews=4,
            correct_reviews=4,
            ease_factor=2.1,
            next_review_date="2024-01-10",
        ),
        make_card(
            "mastered",
            repetitions=12,
            total_reviews=20,
            correct_reviews=18,
            ease_factor=2.5,
            next_review_date="2024-03-01",
        ),
    ]

    stats = CardStats.from_cards(cards, "2024-01-15")

    assert stats.total_cards == 4
    assert stats.due_today == 2
    assert stats.new_cards == 1
    assert stats.learning_cards == 1
    assert stats.familiar_cards == 1
    assert stats.proficient_cards == 0
    assert stats.mastered_cards == 1
    # Ease averages over every card, including the unreviewed one.
    assert stats.average_ease_factor == pytest.approx((2.5 + 2.3 + 2.1 + 2.5) / 4)
    # Accuracy averages only over reviewed cards: 50%, 100%, 90%.
    assert stats.average_accuracy == pytest.approx((50.0 + 100.0 + 90.0) / 3)


def test_tier_counts_sum_to_total(make_card):
    cards = [
        make_card(str(reps), repetitions=reps, ease_factor=ease)
        for reps in range(0, 15)
        for ease in (1.3, 2.0, 2.2, 2.5)
    ]

    stats = CardStats.from_cards(cards, "2024-01-15")

    assert sum(stats.by_mastery().values()) == stats.total_cards == len(cards)
    assert stats.by_mastery()[MasteryLevel.NEW] == 4


def test_no_reviewed_cards_gives_zero_accuracy(make_card):
    stats = CardStats.from_cards([make_card("a"), make_card("b")], "2024-01-15")
    assert stats.average_accuracy == 0.0
    assert stats.average_ease_factor == pytest.approx(2.5)


def test_accepts_generators(make_card):
    stats = CardStats.from_cards((make_card(str(i)) for i in range(3)), "2024-01-15")
    assert stats.total_cards == 3
    assert stats.to_dict()["due_today"] == 3
