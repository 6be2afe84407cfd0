"""Tests for StudyService orchestration: session start and review submission."""

from concurrent.futures import ThreadPoolExecutor
from datetime import timedelta
from unittest.mock import MagicMock

import pytest

from recall.application.study_service import StudyService
from recall.domain.constants import MAX_INTERVAL
from recall.domain.errors import InvalidInput, NotFound
from recall.domain.ports import CardStore


@pytest.fixture
def deck_with_cards(store, now):
    deck = store.create_deck("Spanish", "", None, now - timedelta(days=1))
    hola = store.create_card(deck.id, "hola", "hello", now - timedelta(hours=2))
    adios = store.create_card(deck.id, "adios", "goodbye", now - timedelta(hours=1))
    return deck, hola, adios


def test_start_session_lists_due_cards(store, now, deck_with_cards):
    deck, hola, adios = deck_with_cards

    session = StudyService(store).start_session(deck.id, now)

    assert session.deck_id == deck.id
    assert [c.id for c in session.due_cards] == [hola.id, adios.id]
    assert session.total_due == 2
    assert session.new_cards == 2
    assert session.review_cards == 0


def test_start_session_unknown_deck(store, now):
    with pytest.raises(NotFound):
        StudyService(store).start_session(42, now)


def test_submit_review_persists_new_state(store, now, deck_with_cards):
    _, hola, _ = deck_with_cards
    service = StudyService(store)

    outcome = service.submit_review(hola.id, 5, now)

    stored = store.load(hola.id)
    assert stored.state.repetitions == 1
    assert stored.state.interval == 1
    assert stored.state.ease_factor == pytest.approx(2.6)
    assert stored.next_review_date == now + timedelta(days=1)
    assert stored.updated_at == now
    assert outcome.interval == 1
    assert outcome.next_review_date == now + timedelta(days=1)
    assert outcome.card == stored


def test_reviewed_card_moves_from_new_to_review(store, now, deck_with_cards):
    deck, hola, _ = deck_with_cards
    service = StudyService(store)

    service.submit_review(hola.id, 4, now)
    later = now + timedelta(days=1)
    session = service.start_session(deck.id, later)

    assert session.total_due == 2
    assert session.new_cards == 1
    assert session.review_cards == 1


def test_session_complete_after_last_due_card(store, now, deck_with_cards):
    _, hola, adios = deck_with_cards
    service = StudyService(store)

    first = service.submit_review(hola.id, 4, now)
    second = service.submit_review(adios.id, 4, now)

    assert first.session_complete is False
    assert second.session_complete is True


def test_failed_review_keeps_card_in_tomorrows_session(store, now, deck_with_cards):
    deck, hola, _ = deck_with_cards
    service = StudyService(store)

    service.submit_review(hola.id, 1, now)

    assert service.start_session(deck.id, now).total_due == 1
    assert service.start_session(deck.id, now + timedelta(days=1)).total_due == 2


@pytest.mark.parametrize("quality", [7, -1, None, "5"])
def test_invalid_quality_leaves_stored_state_untouched(store, now, deck_with_cards, quality):
    _, hola, _ = deck_with_cards
    before = store.load(hola.id)

    with pytest.raises(InvalidInput):
        StudyService(store).submit_review(hola.id, quality, now)

    assert store.load(hola.id) == before


def test_invalid_quality_is_rejected_before_lookup():
    store = MagicMock(spec=CardStore)

    with pytest.raises(InvalidInput):
        StudyService(store).submit_review(1, 9)

    store.load.assert_not_called()
    store.save.assert_not_called()


def test_review_unknown_card(store, now):
    with pytest.raises(NotFound):
        StudyService(store).submit_review(404, 3, now)


def test_full_learning_sequence(store, now, deck_with_cards):
    _, hola, _ = deck_with_cards
    service = StudyService(store)

    t = now
    intervals = []
    for quality in (5, 4, 5, 3, 0, 4):
        outcome = service.submit_review(hola.id, quality, t)
        intervals.append(outcome.interval)
        t = outcome.next_review_date

    # 1 -> 6 -> round(6 * 2.6) -> round(16 * 2.7) -> reset -> restart ramp
    assert intervals == [1, 6, 16, 43, 1, 1]
    card = store.load(hola.id)
    assert card.state.repetitions == 1
    assert card.state.ease_factor == pytest.approx(2.7 - 0.14 - 0.8)


def test_repeated_perfect_reviews_stay_within_interval_cap(store, now, deck_with_cards):
    _, hola, _ = deck_with_cards
    service = StudyService(store)

    for _ in range(30):
        outcome = service.submit_review(hola.id, 5, now)

    assert outcome.interval == MAX_INTERVAL
    card = store.load(hola.id)
    assert card.state.interval == MAX_INTERVAL
    assert card.next_review_date == now + timedelta(days=MAX_INTERVAL)


def test_concurrent_reviews_of_one_card_are_serialized(store, now, deck_with_cards):
    _, hola, _ = deck_with_cards
    service = StudyService(store)

    with ThreadPoolExecutor(max_workers=8) as pool:
        list(pool.map(lambda _: service.submit_review(hola.id, 4, now), range(16)))

    assert store.load(hola.id).state.repetitions == 16
