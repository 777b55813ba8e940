# Domain Vocabulary Package
from .models import VocabularyCategory, VocabularyItem, VocabularyStats
from .store import VocabularyStore

__all__ = ["VocabularyCategory", "VocabularyItem", "VocabularyStats", "VocabularyStore"]
