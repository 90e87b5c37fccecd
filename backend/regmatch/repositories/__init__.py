from .base import BaseRepository
from .rule_repository import RuleRepository

__all__ = [
    "BaseRepository",
    "RuleRepository",
]
