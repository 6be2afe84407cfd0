"""Tests for DeckService and CardService."""

import pytest

from recall.application.card_service import CardService
from recall.application.deck_service import DeckService
from recall.application.scheduler import apply_review
from recall.domain.errors import InvalidInput, NotFound


@pytest.fixture
def decks(store):
    return DeckService(store)


@pytest.fixture
def cards(store):
    return CardService(store)


# --- Decks ---


def test_create_and_get_deck(decks):
    deck = decks.create_deck("  Spanish  ", "Basic vocabulary", owner_id=7)

    fetched = decks.get_deck(deck.id)
    assert fetched == deck
    assert fetched.name == "Spanish"
    assert fetched.description == "Basic vocabulary"
    assert fetched.owner_id == 7


@pytest.mark.parametrize("name", ["", "   ", None])
def test_create_deck_requires_name(decks, name):
    with pytest.raises(InvalidInput):
        decks.create_deck(name)


def test_list_decks_by_owner(decks):
    a = decks.create_deck("A", owner_id=1)
    b = decks.create_deck("B", owner_id=2)
    c = decks.create_deck("C", owner_id=1)

    assert [d.id for d in decks.list_decks(1)] == [a.id, c.id]
    assert [d.id for d in decks.list_decks(2)] == [b.id]
    assert [d.id for d in decks.list_decks()] == [a.id, b.id, c.id]


def test_update_deck(decks):
    deck = decks.create_deck("Old", "desc")

    updated = decks.update_deck(deck.id, "New", None)

    assert updated.name == "New"
    assert updated.description == ""
    assert decks.get_deck(deck.id).name == "New"


def test_update_missing_deck(decks):
    with pytest.raises(NotFound):
        decks.update_deck(99, "Name")


def test_delete_deck_removes_its_cards(store, decks, cards):
    deck = decks.create_deck("Doomed")
    card = cards.create_card(deck.id, "q", "a")

    decks.delete_deck(deck.id)

    with pytest.raises(NotFound):
        decks.get_deck(deck.id)
    with pytest.raises(NotFound):
        cards.get_card(card.id)


def test_delete_missing_deck(decks):
    with pytest.raises(NotFound):
        decks.delete_deck(5)


# --- Cards ---


def test_create_card_has_default_schedule(decks, cards):
    deck = decks.create_deck("D")

    card = cards.create_card(deck.id, "front", "back")

    assert card.deck_id == deck.id
    assert card.state.repetitions == 0
    assert card.state.ease_factor == 2.5
    assert card.state.interval == 1
    assert card.next_review_date == card.created_at
    assert card.is_new


@pytest.mark.parametrize("front,back", [("", "b"), ("f", ""), ("  ", "b"), (None, "b")])
def test_create_card_requires_text(decks, cards, front, back):
    deck = decks.create_deck("D")
    with pytest.raises(InvalidInput):
        cards.create_card(deck.id, front, back)


def test_create_card_in_missing_deck(cards):
    with pytest.raises(NotFound):
        cards.create_card(3, "f", "b")


def test_update_card_keeps_schedule(store, decks, cards, now):
    deck = decks.create_deck("D")
    card = cards.create_card(deck.id, "f", "b")
    reviewed = store.save(card.id, apply_review(card.state, 5, now), now)

    updated = cards.update_card(card.id, "f2", "b2")

    assert (updated.front, updated.back) == ("f2", "b2")
    assert updated.state == reviewed.state


def test_list_and_count_cards(decks, cards):
    deck = decks.create_deck("D")
    first = cards.create_card(deck.id, "1", "one")
    second = cards.create_card(deck.id, "2", "two")

    assert [c.id for c in cards.list_cards(deck.id)] == [first.id, second.id]
    assert cards.count_cards(deck.id) == 2


def test_list_cards_missing_deck(cards):
    with pytest.raises(NotFound):
        cards.list_cards(12)


def test_delete_card(decks, cards):
    deck = decks.create_deck("D")
    card = cards.create_card(deck.id, "f", "b")

    cards.delete_card(card.id)

    assert cards.count_cards(deck.id) == 0
    with pytest.raises(NotFound):
        cards.delete_card(card.id)
