import logging
import time
from contextlib import asynccontextmanager
from datetime import datetime
from functools import lru_cache

from fastapi import Depends, FastAPI, Header, HTTPException, Response
from pydantic import BaseModel, ConfigDict, StrictInt
from pydantic.alias_generators import to_camel

from recall.application.card_service import CardService
from recall.application.deck_service import DeckService
from recall.application.study_service import StudyService
from recall.consts import VERSION
from recall.domain.errors import InvalidInput, NotFound, RecallError
from recall.domain.models import Card, Deck
from recall.domain.ports import CardStore

# Setup logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger("recall.server")


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup
    logger.info(f"Recall Server v{VERSION} starting up...")
    yield
    # Shutdown
    logger.info("Recall Server shutting down...")


app = FastAPI(
    title="Recall Server",
    description="Flashcard decks and SM-2 study sessions.",
    version=VERSION,
    lifespan=lifespan,
)

start_time = time.time()


@lru_cache(maxsize=1)
def get_store() -> CardStore:
    """The process-wide card store, built from the resolved configuration."""
    from recall.application.config import resolve_config
    from recall.application.factory import get_card_store

    return get_card_store(resolve_config())


def get_study_service(store: CardStore = Depends(get_store)) -> StudyService:
    # One StudyService per store so its review lock is shared across requests.
    return _study_service_for(store)


@lru_cache(maxsize=8)
def _study_service_for(store: CardStore) -> StudyService:
    return StudyService(store)


def _http_error(e: RecallError) -> HTTPException:
    if isinstance(e, NotFound):
        return HTTPException(status_code=404, detail=str(e))
    if isinstance(e, InvalidInput):
        return HTTPException(status_code=400, detail=str(e))
    return HTTPException(status_code=500, detail=str(e))


# ---------------------------------------------------------------------------
# Payloads
# ---------------------------------------------------------------------------


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class HealthResponse(BaseModel):
    status: str
    version: str
    uptime_seconds: float


class DeckPayload(CamelModel):
    id: int
    name: str
    description: str
    owner_id: int | None
    created_at: datetime

    @classmethod
    def from_deck(cls, deck: Deck) -> "DeckPayload":
        return cls(
            id=deck.id,
            name=deck.name,
            description=deck.description,
            owner_id=deck.owner_id,
            created_at=deck.created_at,
        )


class CardPayload(CamelModel):
    id: int
    front: str
    back: str
    deck_id: int
    repetitions: int
    ease_factor: float
    interval: int
    next_review_date: datetime
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_card(cls, card: Card) -> "CardPayload":
        return cls(
            id=card.id,
            front=card.front,
            back=card.back,
            deck_id=card.deck_id,
            repetitions=card.state.repetitions,
            ease_factor=card.state.ease_factor,
            interval=card.state.interval,
            next_review_date=card.state.next_review_date,
            created_at=card.created_at,
            updated_at=card.updated_at,
        )


class DeckRequest(CamelModel):
    name: str
    description: str | None = None


class CardRequest(CamelModel):
    front: str
    back: str


class StudySessionPayload(CamelModel):
    deck_id: int
    due_cards: list[CardPayload]
    total_due: int
    new_cards: int
    review_cards: int


class ReviewRequest(CamelModel):
    # Missing quality is a domain-level InvalidInput (400), not a schema error.
    quality: StrictInt | None = None


class ReviewPayload(CamelModel):
    card: CardPayload
    next_review_date: datetime
    interval: int
    session_complete: bool


# ---------------------------------------------------------------------------
# Meta
# ---------------------------------------------------------------------------


@app.get("/health", response_model=HealthResponse)
async def health_check():
    """
    Simple health check to verify server is reachable.
    """
    return HealthResponse(status="ok", version=VERSION, uptime_seconds=time.time() - start_time)


@app.get("/version")
async def get_version():
    return {"version": VERSION}


# ---------------------------------------------------------------------------
# Decks
# ---------------------------------------------------------------------------


@app.get("/api/decks", response_model=list[DeckPayload])
def list_decks(
    store: CardStore = Depends(get_store),
    x_user_id: int | None = Header(default=None),
):
    return [DeckPayload.from_deck(d) for d in DeckService(store).list_decks(x_user_id)]


@app.get("/api/decks/{deck_id}", response_model=DeckPayload)
def get_deck(deck_id: int, store: CardStore = Depends(get_store)):
    try:
        return DeckPayload.from_deck(DeckService(store).get_deck(deck_id))
    except RecallError as e:
        raise _http_error(e) from e


@app.post("/api/decks", response_model=DeckPayload)
def create_deck(
    req: DeckRequest,
    store: CardStore = Depends(get_store),
    x_user_id: int | None = Header(default=None),
):
    try:
        deck = DeckService(store).create_deck(req.name, req.description, x_user_id)
        return DeckPayload.from_deck(deck)
    except RecallError as e:
        raise _http_error(e) from e


@app.put("/api/decks/{deck_id}", response_model=DeckPayload)
def update_deck(deck_id: int, req: DeckRequest, store: CardStore = Depends(get_store)):
    try:
        deck = DeckService(store).update_deck(deck_id, req.name, req.description)
        return DeckPayload.from_deck(deck)
    except RecallError as e:
        raise _http_error(e) from e


@app.delete("/api/decks/{deck_id}", status_code=204)
def delete_deck(deck_id: int, store: CardStore = Depends(get_store)):
    try:
        DeckService(store).delete_deck(deck_id)
    except RecallError as e:
        raise _http_error(e) from e
    return Response(status_code=204)


# ---------------------------------------------------------------------------
# Cards
# ---------------------------------------------------------------------------


@app.get("/api/decks/{deck_id}/cards", response_model=list[CardPayload])
def list_cards(deck_id: int, store: CardStore = Depends(get_store)):
    try:
        return [CardPayload.from_card(c) for c in CardService(store).list_cards(deck_id)]
    except RecallError as e:
        raise _http_error(e) from e


def _card_in_deck(store: CardStore, deck_id: int, card_id: int) -> Card:
    card = CardService(store).get_card(card_id)
    if card.deck_id != deck_id:
        raise NotFound("card", card_id)
    return card


@app.get("/api/decks/{deck_id}/cards/{card_id}", response_model=CardPayload)
def get_card(deck_id: int, card_id: int, store: CardStore = Depends(get_store)):
    try:
        return CardPayload.from_card(_card_in_deck(store, deck_id, card_id))
    except RecallError as e:
        raise _http_error(e) from e


@app.post("/api/decks/{deck_id}/cards", response_model=CardPayload)
def create_card(deck_id: int, req: CardRequest, store: CardStore = Depends(get_store)):
    try:
        card = CardService(store).create_card(deck_id, req.front, req.back)
        return CardPayload.from_card(card)
    except RecallError as e:
        raise _http_error(e) from e


@app.put("/api/decks/{deck_id}/cards/{card_id}", response_model=CardPayload)
def update_card(
    deck_id: int, card_id: int, req: CardRequest, store: CardStore = Depends(get_store)
):
    try:
        _card_in_deck(store, deck_id, card_id)
        card = CardService(store).update_card(card_id, req.front, req.back)
        return CardPayload.from_card(card)
    except RecallError as e:
        raise _http_error(e) from e


@app.delete("/api/decks/{deck_id}/cards/{card_id}", status_code=204)
def delete_card(deck_id: int, card_id: int, store: CardStore = Depends(get_store)):
    try:
        _card_in_deck(store, deck_id, card_id)
        CardService(store).delete_card(card_id)
    except RecallError as e:
        raise _http_error(e) from e
    return Response(status_code=204)


# ---------------------------------------------------------------------------
# Study
# ---------------------------------------------------------------------------


@app.post("/api/study/decks/{deck_id}/start", response_model=StudySessionPayload)
def start_study_session(
    deck_id: int, service: StudyService = Depends(get_study_service)
):
    """Return the deck's due cards, most overdue first, with new/review counts."""
    try:
        session = service.start_session(deck_id)
    except RecallError as e:
        raise _http_error(e) from e

    return StudySessionPayload(
        deck_id=session.deck_id,
        due_cards=[CardPayload.from_card(c) for c in session.due_cards],
        total_due=session.total_due,
        new_cards=session.new_cards,
        review_cards=session.review_cards,
    )


@app.post("/api/study/cards/{card_id}/review", response_model=ReviewPayload)
def review_card(
    card_id: int, req: ReviewRequest, service: StudyService = Depends(get_study_service)
):
    """Apply a 0-5 quality rating to a card and persist its next schedule."""
    try:
        outcome = service.submit_review(card_id, req.quality)
    except RecallError as e:
        if isinstance(e, InvalidInput):
            logger.warning(f"Rejected review for card {card_id}: {e}")
        raise _http_error(e) from e

    return ReviewPayload(
        card=CardPayload.from_card(outcome.card),
        next_review_date=outcome.next_review_date,
        interval=outcome.interval,
        session_complete=outcome.session_complete,
    )
