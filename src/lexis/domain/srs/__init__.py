# Domain SRS Package
from .models import Card, MasteryLevel, ReviewQuality, ReviewUpdate

__all__ = ["Card", "MasteryLevel", "ReviewQuality", "ReviewUpdate"]
