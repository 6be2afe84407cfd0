"""
Study Service: application layer orchestrator.

Sequences the pure scheduler and due-set selector with the card store:
validate, look up, compute, then persist.
"""

import logging
import threading
from datetime import datetime

from recall.domain.clock import as_utc, utcnow
from recall.domain.models import ReviewOutcome, StudySession
from recall.domain.ports import CardStore

from .due_selector import due_cards, summarize
from .scheduler import apply_review, validate_quality

logger = logging.getLogger(__name__)


class StudyService:
    """
    Application service for study sessions and reviews.

    Depends on the CardStore abstraction, not a concrete store.
    """

    def __init__(self, store: CardStore):
        self._store = store
        # load -> apply -> save must not interleave for the same card
        self._review_lock = threading.Lock()

    def start_session(self, deck_id: int, now: datetime | None = None) -> StudySession:
        """
        Collect the due cards of a deck.

        Raises:
            NotFound: The deck does not exist.
        """
        now = as_utc(now) if now is not None else utcnow()
        logger.info(f"Starting study session for deck: {deck_id}")

        cards = due_cards(self._store, deck_id, now)
        total, new, review = summarize(cards)

        return StudySession(
            deck_id=deck_id,
            due_cards=cards,
            total_due=total,
            new_cards=new,
            review_cards=review,
        )

    def submit_review(
        self, card_id: int, quality: int, now: datetime | None = None
    ) -> ReviewOutcome:
        """
        Review a card and persist its new scheduling state.

        Quality is validated before the card is touched, so a rejected review
        leaves the stored state unchanged.

        Raises:
            InvalidInput: quality is missing or outside [0, 5].
            NotFound: The card does not exist.
        """
        logger.info(f"Reviewing card: {card_id} with quality: {quality}")
        quality = validate_quality(quality)
        now = as_utc(now) if now is not None else utcnow()

        with self._review_lock:
            card = self._store.load(card_id)
            new_state = apply_review(card.state, quality, now)
            card = self._store.save(card_id, new_state, now)

        remaining = self._store.list_due(card.deck_id, now)
        logger.info(f"Card reviewed: {card_id}, next review: {card.next_review_date}")

        return ReviewOutcome(
            card=card,
            next_review_date=card.next_review_date,
            interval=card.state.interval,
            session_complete=not remaining,
        )
