"""
JSON encoding of cards, vocabulary items, the vocabulary bank and full
study state.

Decoding never guesses: malformed JSON or a payload that fails validation
raises ``PersistenceError`` with the underlying error chained.
"""

from typing import TypeVar

from pydantic import BaseModel, TypeAdapter, ValidationError

from lexis.domain.errors import PersistenceError
from lexis.domain.srs import Card
from lexis.domain.state import StudyState
from lexis.domain.vocabulary import VocabularyItem, VocabularyStore

from .records import CardRecord, StudyStateRecord, VocabularyItemRecord, VocabularyStoreRecord

RecordT = TypeVar("RecordT", bound=BaseModel)

_card_list = TypeAdapter(list[CardRecord])


def _validate(model: type[RecordT], text: str | bytes, what: str) -> RecordT:
    try:
        return model.model_validate_json(text)
    except ValidationError as e:
        raise PersistenceError(f"Could not decode {what}: {e}") from e


def _dump(record: BaseModel, indent: int | None) -> str:
    return record.model_dump_json(indent=indent)


# ---------- Cards ----------


def serialize_card(card: Card, indent: int | None = None) -> str:
    return _dump(CardRecord.from_domain(card), indent)


def deserialize_card(text: str | bytes) -> Card:
    return _validate(CardRecord, text, "card").to_domain()


def serialize_cards(cards: list[Card], indent: int | None = None) -> str:
    records = [CardRecord.from_domain(card) for card in cards]
    return _card_list.dump_json(records, indent=indent).decode("utf-8")


def deserialize_cards(text: str | bytes) -> list[Card]:
    try:
        records = _card_list.validate_json(text)
    except ValidationError as e:
        raise PersistenceError(f"Could not decode card list: {e}") from e
    return [record.to_domain() for record in records]


# ---------- Vocabulary ----------


def serialize_item(item: VocabularyItem, indent: int | None = None) -> str:
    return _dump(VocabularyItemRecord.from_domain(item), indent)


def deserialize_item(text: str | bytes) -> VocabularyItem:
    return _validate(VocabularyItemRecord, text, "vocabulary item").to_domain()


def serialize_store(store: VocabularyStore, indent: int | None = None) -> str:
    return _dump(VocabularyStoreRecord.from_domain(store), indent)


def deserialize_store(text: str | bytes) -> VocabularyStore:
    return _validate(VocabularyStoreRecord, text, "vocabulary bank").to_domain()


# ---------- Full state ----------


def serialize_state(state: StudyState, indent: int | None = 2) -> str:
    return _dump(StudyStateRecord.from_domain(state), indent)


def deserialize_state(text: str | bytes) -> StudyState:
    return _validate(StudyStateRecord, text, "study state").to_domain()
