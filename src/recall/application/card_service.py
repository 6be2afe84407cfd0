"""Card management: text validation over the card store. Scheduling lives in StudyService."""

import logging

from recall.domain.clock import utcnow
from recall.domain.errors import InvalidInput
from recall.domain.models import Card
from recall.domain.ports import CardStore

logger = logging.getLogger(__name__)


def _require_text(front: str | None, back: str | None) -> tuple[str, str]:
    if front is None or not front.strip():
        raise InvalidInput("Front text is required")
    if back is None or not back.strip():
        raise InvalidInput("Back text is required")
    return front, back


class CardService:
    def __init__(self, store: CardStore):
        self._store = store

    def list_cards(self, deck_id: int) -> list[Card]:
        logger.info(f"Fetching cards for deck: {deck_id}")
        return self._store.list_cards(deck_id)

    def get_card(self, card_id: int) -> Card:
        logger.info(f"Fetching card: {card_id}")
        return self._store.load(card_id)

    def create_card(self, deck_id: int, front: str, back: str) -> Card:
        """New cards start with default scheduling state and are due immediately."""
        logger.info(f"Creating card for deck: {deck_id}")
        front, back = _require_text(front, back)
        card = self._store.create_card(deck_id, front, back, utcnow())
        logger.info(f"Card created: {card.id}")
        return card

    def update_card(self, card_id: int, front: str, back: str) -> Card:
        logger.info(f"Updating card: {card_id}")
        front, back = _require_text(front, back)
        return self._store.update_card_text(card_id, front, back, utcnow())

    def delete_card(self, card_id: int) -> None:
        logger.info(f"Deleting card: {card_id}")
        self._store.delete_card(card_id)

    def count_cards(self, deck_id: int) -> int:
        return self._store.count_cards(deck_id)
