"""Deck management: thin validation and logging over the card store."""

import logging

from recall.domain.clock import utcnow
from recall.domain.errors import InvalidInput
from recall.domain.models import Deck
from recall.domain.ports import CardStore

logger = logging.getLogger(__name__)


def _require_name(name: str | None) -> str:
    if name is None or not name.strip():
        raise InvalidInput("Deck name is required")
    return name.strip()


class DeckService:
    def __init__(self, store: CardStore):
        self._store = store

    def list_decks(self, owner_id: int | None = None) -> list[Deck]:
        logger.info(f"Fetching decks for user: {owner_id}")
        return self._store.list_decks(owner_id)

    def get_deck(self, deck_id: int) -> Deck:
        logger.info(f"Fetching deck: {deck_id}")
        return self._store.get_deck(deck_id)

    def create_deck(
        self, name: str, description: str | None = None, owner_id: int | None = None
    ) -> Deck:
        logger.info(f"Creating deck for user: {owner_id}")
        deck = self._store.create_deck(
            _require_name(name), description or "", owner_id, utcnow()
        )
        logger.info(f"Deck created: {deck.id}")
        return deck

    def update_deck(self, deck_id: int, name: str, description: str | None = None) -> Deck:
        logger.info(f"Updating deck: {deck_id}")
        return self._store.update_deck(deck_id, _require_name(name), description or "")

    def delete_deck(self, deck_id: int) -> None:
        logger.info(f"Deleting deck: {deck_id}")
        self._store.delete_deck(deck_id)
