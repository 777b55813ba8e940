import pytest

from lexis.domain.srs import Card
from lexis.domain.state import StudyState
from lexis.domain.vocabulary import VocabularyCategory, VocabularyItem, VocabularyStore


@pytest.fixture(autouse=True)
def mock_home(tmp_path, monkeypatch):
    """Points HOME at a temp dir so no real config or state is read."""
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    for var in ("LEXIS_STATE_FILE", "LEXIS_WEAK_EASE_THRESHOLD", "LEXIS_WEAK_ACCURACY_THRESHOLD"):
        monkeypatch.delenv(var, raising=False)
    return home


@pytest.fixture
def make_card():
    """Factory for cards created on 2024-01-15, with any field overridden."""

    def _make(word_id: str = "vocab_001", **overrides) -> Card:
        card = Card.new(
            word_id=word_id,
            source_word="hello",
            target_word="olá",
            language_pair="en_to_pt_br",
            level="A1",
            lesson_id="greetings",
            current_date="2024-01-15",
        )
        for key, value in overrides.items():
            setattr(card, key, value)
        return card

    return _make


@pytest.fixture
def make_item():
    def _make(
        item_id: str,
        source: str,
        target: str,
        level: str = "A1",
        lesson_id: str = "greetings",
        language_pair: str = "en_to_pt_br",
        category: VocabularyCategory = VocabularyCategory.PHRASE,
        **extra,
    ) -> VocabularyItem:
        return VocabularyItem(
            id=item_id,
            source=source,
            target=target,
            lesson_id=lesson_id,
            level=level,
            language_pair=language_pair,
            category=category,
            added_at="2024-01-15",
            **extra,
        )

    return _make


@pytest.fixture
def store(make_item):
    return VocabularyStore(
        [
            make_item("vocab_001", "hello", "olá"),
            make_item("vocab_002", "goodbye", "tchau"),
            make_item("vocab_003", "good morning", "bom dia", tags=("morning",)),
            make_item(
                "vocab_004",
                "dog",
                "cachorro",
                level="A2",
                lesson_id="animals",
                category=VocabularyCategory.NOUN,
            ),
        ]
    )


@pytest.fixture
def state(store):
    return StudyState(vocabulary=store)
