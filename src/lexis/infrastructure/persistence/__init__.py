# Infrastructure Persistence Package
from .json_codec import (
    deserialize_card,
    deserialize_cards,
    deserialize_item,
    deserialize_state,
    deserialize_store,
    serialize_card,
    serialize_cards,
    serialize_item,
    serialize_state,
    serialize_store,
)
from .repository import JsonStateRepository

__all__ = [
    "JsonStateRepository",
    "deserialize_card",
    "deserialize_cards",
    "deserialize_item",
    "deserialize_state",
    "deserialize_store",
    "serialize_card",
    "serialize_cards",
    "serialize_item",
    "serialize_state",
    "serialize_store",
]
