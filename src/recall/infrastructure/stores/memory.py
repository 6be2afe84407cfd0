"""
In-memory card store.

Keeps decks and cards in dictionaries. Used by the test-suite and by the
"memory" backend for throwaway sessions.
"""

import threading
from dataclasses import replace
from datetime import datetime

from recall.domain.clock import as_utc
from recall.domain.errors import NotFound
from recall.domain.models import Card, Deck, SchedulingState
from recall.domain.ports import CardStore


class InMemoryCardStore(CardStore):
    def __init__(self):
        self._decks: dict[int, Deck] = {}
        self._cards: dict[int, Card] = {}
        self._next_deck_id = 1
        self._next_card_id = 1
        self._lock = threading.RLock()

    # --- Scheduling ---

    def load(self, card_id: int) -> Card:
        try:
            return self._cards[card_id]
        except KeyError:
            raise NotFound("card", card_id) from None

    def save(self, card_id: int, state: SchedulingState, now: datetime) -> Card:
        with self._lock:
            card = self.load(card_id).with_state(state, as_utc(now))
            self._cards[card_id] = card
            return card

    def list_due(self, deck_id: int, now: datetime) -> list[Card]:
        now = as_utc(now)
        due = [c for c in self.list_cards(deck_id) if c.is_due(now)]
        return sorted(due, key=lambda c: c.due_order)

    # --- Decks ---

    def create_deck(
        self, name: str, description: str, owner_id: int | None, now: datetime
    ) -> Deck:
        with self._lock:
            deck = Deck(
                id=self._next_deck_id,
                name=name,
                description=description,
                owner_id=owner_id,
                created_at=as_utc(now),
            )
            self._decks[deck.id] = deck
            self._next_deck_id += 1
            return deck

    def get_deck(self, deck_id: int) -> Deck:
        try:
            return self._decks[deck_id]
        except KeyError:
            raise NotFound("deck", deck_id) from None

    def list_decks(self, owner_id: int | None = None) -> list[Deck]:
        decks = sorted(self._decks.values(), key=lambda d: d.id)
        if owner_id is None:
            return decks
        return [d for d in decks if d.owner_id == owner_id]

    def update_deck(self, deck_id: int, name: str, description: str) -> Deck:
        with self._lock:
            deck = replace(self.get_deck(deck_id), name=name, description=description)
            self._decks[deck_id] = deck
            return deck

    def delete_deck(self, deck_id: int) -> None:
        with self._lock:
            self.get_deck(deck_id)
            for card_id in [c.id for c in self._cards.values() if c.deck_id == deck_id]:
                del self._cards[card_id]
            del self._decks[deck_id]

    # --- Cards ---

    def create_card(self, deck_id: int, front: str, back: str, now: datetime) -> Card:
        now = as_utc(now)
        with self._lock:
            self.get_deck(deck_id)
            card = Card(
                id=self._next_card_id,
                deck_id=deck_id,
                front=front,
                back=back,
                state=SchedulingState.initial(now),
                created_at=now,
                updated_at=now,
            )
            self._cards[card.id] = card
            self._next_card_id += 1
            return card

    def list_cards(self, deck_id: int) -> list[Card]:
        self.get_deck(deck_id)
        return sorted(
            (c for c in self._cards.values() if c.deck_id == deck_id), key=lambda c: c.id
        )

    def update_card_text(self, card_id: int, front: str, back: str, now: datetime) -> Card:
        with self._lock:
            card = replace(self.load(card_id), front=front, back=back, updated_at=as_utc(now))
            self._cards[card_id] = card
            return card

    def delete_card(self, card_id: int) -> None:
        with self._lock:
            self.load(card_id)
            del self._cards[card_id]
