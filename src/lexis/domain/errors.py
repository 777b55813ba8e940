"""Exceptions surfaced to the host application."""


class LexisError(Exception):
    """Base class for every error lexis raises on purpose."""


class PersistenceError(LexisError):
    """Persisted state could not be decoded or failed validation."""


class ImportFormatError(LexisError):
    """A vocabulary import file is not in the expected shape."""


class CardNotFoundError(LexisError, LookupError):
    def __init__(self, word_id: str):
        super().__init__(f"No card with id '{word_id}'")
        self.word_id = word_id


class VocabularyItemNotFoundError(LexisError, LookupError):
    def __init__(self, item_id: str):
        super().__init__(f"No vocabulary item with id '{item_id}'")
        self.item_id = item_id
