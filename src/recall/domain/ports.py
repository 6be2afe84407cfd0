"""
Ports (interfaces) for card and deck persistence.

These define the contract that infrastructure stores must implement.
Application services depend on these abstractions, not concrete implementations.
"""

from abc import ABC, abstractmethod
from datetime import datetime

from .errors import NotFound
from .models import Card, Deck, SchedulingState


class CardStore(ABC):
    """
    Port for storing decks, cards and card scheduling state.

    Implementations:
        - InMemoryCardStore: dict-backed, used by tests and the "memory" backend.
        - SqliteCardStore: persists to a SQLite database file.

    Every lookup of a missing card or deck raises NotFound.
    """

    # --- Scheduling ---

    @abstractmethod
    def load(self, card_id: int) -> Card:
        """Fetch a card together with its scheduling state."""

    @abstractmethod
    def save(self, card_id: int, state: SchedulingState, now: datetime) -> Card:
        """
        Replace the scheduling state of a card.

        Args:
            card_id: The card to update.
            state: The new scheduling state.
            now: Timestamp recorded as the card's updated_at.

        Returns:
            The card as stored after the update.
        """

    @abstractmethod
    def list_due(self, deck_id: int, now: datetime) -> list[Card]:
        """
        Cards of a deck with next_review_date <= now.

        Returns:
            Cards sorted by next_review_date ascending, ties by card id.
        """

    # --- Decks ---

    @abstractmethod
    def create_deck(
        self, name: str, description: str, owner_id: int | None, now: datetime
    ) -> Deck:
        pass

    @abstractmethod
    def get_deck(self, deck_id: int) -> Deck:
        pass

    @abstractmethod
    def list_decks(self, owner_id: int | None = None) -> list[Deck]:
        pass

    @abstractmethod
    def update_deck(self, deck_id: int, name: str, description: str) -> Deck:
        pass

    @abstractmethod
    def delete_deck(self, deck_id: int) -> None:
        """Delete a deck and every card in it."""

    def deck_exists(self, deck_id: int) -> bool:
        try:
            self.get_deck(deck_id)
        except NotFound:
            return False
        return True

    # --- Cards ---

    @abstractmethod
    def create_card(self, deck_id: int, front: str, back: str, now: datetime) -> Card:
        pass

    @abstractmethod
    def list_cards(self, deck_id: int) -> list[Card]:
        pass

    @abstractmethod
    def update_card_text(self, card_id: int, front: str, back: str, now: datetime) -> Card:
        pass

    @abstractmethod
    def delete_card(self, card_id: int) -> None:
        pass

    def count_cards(self, deck_id: int) -> int:
        return len(self.list_cards(deck_id))

    def close(self) -> None:
        """Release any underlying resources."""
