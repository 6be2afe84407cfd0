"""
Domain models for decks, cards and their scheduling state.

These are pure data structures with no I/O or external dependencies.
"""

from dataclasses import dataclass, field, replace
from datetime import datetime

from .constants import DEFAULT_EASE_FACTOR, DEFAULT_INTERVAL


@dataclass(frozen=True)
class SchedulingState:
    """
    SM-2 scheduling state for a card.

    Attributes:
        next_review_date: UTC timestamp at which the card becomes due.
        repetitions: Consecutive successful reviews since the last reset.
        ease_factor: Multiplier for interval growth (never below 1.3).
        interval: Days between the last review and next_review_date.
    """

    next_review_date: datetime
    repetitions: int = 0
    ease_factor: float = DEFAULT_EASE_FACTOR
    interval: int = DEFAULT_INTERVAL

    @classmethod
    def initial(cls, created_at: datetime) -> "SchedulingState":
        """Default state for a freshly created card, due immediately."""
        return cls(next_review_date=created_at)

    @property
    def is_new(self) -> bool:
        return self.repetitions == 0


@dataclass(frozen=True)
class Card:
    """
    A front/back text pair plus its scheduling state.
    """

    id: int
    deck_id: int
    front: str
    back: str
    state: SchedulingState
    created_at: datetime
    updated_at: datetime

    @property
    def is_new(self) -> bool:
        return self.state.is_new

    @property
    def next_review_date(self) -> datetime:
        return self.state.next_review_date

    @property
    def due_order(self) -> tuple[datetime, int]:
        """Sort key for a due set: earliest review date first, ties by id."""
        return (self.next_review_date, self.id)

    def is_due(self, now: datetime) -> bool:
        return self.next_review_date <= now

    def with_state(self, state: SchedulingState, updated_at: datetime) -> "Card":
        return replace(self, state=state, updated_at=updated_at)


@dataclass(frozen=True)
class Deck:
    id: int
    name: str
    created_at: datetime
    description: str = ""
    owner_id: int | None = None


@dataclass
class StudySession:
    """Due cards for a deck plus the new/review split shown at session start."""

    deck_id: int
    due_cards: list[Card] = field(default_factory=list)
    total_due: int = 0
    new_cards: int = 0
    review_cards: int = 0


@dataclass
class ReviewOutcome:
    """Result of a single review, after the new state has been persisted."""

    card: Card
    next_review_date: datetime
    interval: int
    session_complete: bool = False
