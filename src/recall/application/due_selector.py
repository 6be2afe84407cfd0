"""
Due-set selection for study sessions.

Picks every card of a deck whose next review date has arrived, most
overdue first.
"""

from collections.abc import Iterable
from datetime import datetime

from recall.domain.clock import as_utc
from recall.domain.errors import NotFound
from recall.domain.models import Card
from recall.domain.ports import CardStore


def select_due(cards: Iterable[Card], now: datetime) -> list[Card]:
    """
    Filter cards down to the due ones and order them.

    Returns:
        Cards with next_review_date <= now, ascending by next_review_date,
        ties broken by card id.
    """
    now = as_utc(now)
    return sorted((c for c in cards if c.is_due(now)), key=lambda c: c.due_order)


def due_cards(store: CardStore, deck_id: int, now: datetime) -> list[Card]:
    """
    Due cards for a deck.

    Raises:
        NotFound: The deck does not exist.
    """
    if not store.deck_exists(deck_id):
        raise NotFound("deck", deck_id)
    return store.list_due(deck_id, as_utc(now))


def summarize(cards: list[Card]) -> tuple[int, int, int]:
    """
    Count the due set for a session summary.

    Returns:
        (total, new, review) where new cards have never been passed since
        their last reset (repetitions == 0).
    """
    new = sum(1 for c in cards if c.is_new)
    return len(cards), new, len(cards) - new
