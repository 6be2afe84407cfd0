from datetime import datetime, timedelta, timezone

import pytest

from recall.domain.clock import format_timestamp, parse_timestamp
from recall.domain.errors import NotFound
from recall.domain.models import SchedulingState
from recall.infrastructure.stores.sqlite import SqliteCardStore


@pytest.fixture
def db_path(tmp_path):
    return tmp_path / "nested" / "recall.db"


def test_creates_parent_directory(db_path):
    with SqliteCardStore(db_path):
        pass
    assert db_path.exists()


def test_state_survives_reopen(db_path, now):
    with SqliteCardStore(db_path) as store:
        deck = store.create_deck("Persisted", "desc", 3, now)
        card = store.create_card(deck.id, "front", "back", now)
        state = SchedulingState(
            next_review_date=now + timedelta(days=16),
            repetitions=3,
            ease_factor=2.7,
            interval=16,
        )
        store.save(card.id, state, now)

    with SqliteCardStore(db_path) as store:
        reloaded = store.load(card.id)
        assert reloaded.state == state
        assert store.get_deck(deck.id).owner_id == 3


def test_context_manager_closes_connection(db_path):
    with SqliteCardStore(db_path) as store:
        pass
    assert store.conn is None


def test_due_query_compares_across_microseconds(now):
    with SqliteCardStore(":memory:") as store:
        deck = store.create_deck("D", "", None, now)
        card = store.create_card(deck.id, "f", "b", now)
        store.save(card.id, SchedulingState(next_review_date=now + timedelta(microseconds=1)), now)

        assert store.list_due(deck.id, now) == []
        assert len(store.list_due(deck.id, now + timedelta(microseconds=1))) == 1


def test_non_utc_timestamps_are_normalized(now):
    plus_two = timezone(timedelta(hours=2))
    local_now = now.astimezone(plus_two)

    with SqliteCardStore(":memory:") as store:
        deck = store.create_deck("D", "", None, local_now)
        card = store.create_card(deck.id, "f", "b", local_now)

        assert card.created_at == now
        assert card.created_at.tzinfo == timezone.utc


def test_save_missing_card(now):
    with SqliteCardStore(":memory:") as store:
        with pytest.raises(NotFound):
            store.save(1, SchedulingState(next_review_date=now), now)


def test_timestamp_format_round_trip():
    stamp = datetime(2024, 1, 2, 3, 4, 5, 6, tzinfo=timezone.utc)

    assert format_timestamp(stamp) == "2024-01-02 03:04:05.000006"
    assert parse_timestamp(format_timestamp(stamp)) == stamp
