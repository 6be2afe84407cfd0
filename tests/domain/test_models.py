"""Tests for the domain value types."""

from datetime import timedelta

from recall.domain.models import Card, SchedulingState


def make_card(card_id, due):
    return Card(
        id=card_id,
        deck_id=1,
        front="q",
        back="a",
        state=SchedulingState(next_review_date=due),
        created_at=due,
        updated_at=due,
    )


def test_card_is_due_at_or_before_now(now):
    assert make_card(1, now).is_due(now)
    assert make_card(1, now - timedelta(seconds=1)).is_due(now)
    assert not make_card(1, now + timedelta(microseconds=1)).is_due(now)


def test_due_order_breaks_ties_by_id(now):
    cards = [make_card(3, now), make_card(2, now), make_card(1, now - timedelta(days=1))]

    ordered = sorted(cards, key=lambda c: c.due_order)

    assert [c.id for c in ordered] == [1, 2, 3]


def test_initial_state_is_new_and_due_on_creation(now):
    state = SchedulingState.initial(now)

    assert state.is_new
    assert (state.repetitions, state.ease_factor, state.interval) == (0, 2.5, 1)
    assert make_card(1, now).with_state(state, now).is_due(now)
