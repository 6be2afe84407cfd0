# Domain Package
from .errors import InvalidInput, NotFound, RecallError
from .models import Card, Deck, ReviewOutcome, SchedulingState, StudySession
from .ports import CardStore

__all__ = [
    "Card",
    "CardStore",
    "Deck",
    "InvalidInput",
    "NotFound",
    "RecallError",
    "ReviewOutcome",
    "SchedulingState",
    "StudySession",
]
