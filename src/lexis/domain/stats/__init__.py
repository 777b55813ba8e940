# Domain Stats Package
from .models import CardStats

__all__ = ["CardStats"]
