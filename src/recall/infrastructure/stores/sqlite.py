"""
SQLite card store.

Persists decks and cards (including scheduling state) in a single SQLite
database. Timestamps are stored as fixed-width UTC strings so that the
due-date query can order and compare them directly.
"""

import logging
import sqlite3
import threading
from datetime import datetime
from pathlib import Path

from recall.domain.clock import as_utc, format_timestamp, parse_timestamp
from recall.domain.errors import NotFound
from recall.domain.models import Card, Deck, SchedulingState
from recall.domain.ports import CardStore

logger = logging.getLogger(__name__)

SCHEMA = """
CREATE TABLE IF NOT EXISTS decks (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    name TEXT NOT NULL,
    description TEXT NOT NULL DEFAULT '',
    owner_id INTEGER,
    created_at TEXT NOT NULL
);

CREATE TABLE IF NOT EXISTS cards (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    deck_id INTEGER NOT NULL REFERENCES decks(id) ON DELETE CASCADE,
    front TEXT NOT NULL,
    back TEXT NOT NULL,
    repetitions INTEGER NOT NULL DEFAULT 0 CHECK(repetitions >= 0),
    ease_factor REAL NOT NULL DEFAULT 2.5 CHECK(ease_factor >= 1.3),
    interval_days INTEGER NOT NULL DEFAULT 1 CHECK(interval_days >= 1),
    next_review_date TEXT NOT NULL,
    created_at TEXT NOT NULL,
    updated_at TEXT NOT NULL
);

CREATE INDEX IF NOT EXISTS idx_cards_deck_due ON cards(deck_id, next_review_date);
"""

_CARD_COLUMNS = (
    "id, deck_id, front, back, repetitions, ease_factor, interval_days, "
    "next_review_date, created_at, updated_at"
)


def _row_to_card(row: sqlite3.Row) -> Card:
    return Card(
        id=row["id"],
        deck_id=row["deck_id"],
        front=row["front"],
        back=row["back"],
        state=SchedulingState(
            next_review_date=parse_timestamp(row["next_review_date"]),
            repetitions=row["repetitions"],
            ease_factor=row["ease_factor"],
            interval=row["interval_days"],
        ),
        created_at=parse_timestamp(row["created_at"]),
        updated_at=parse_timestamp(row["updated_at"]),
    )


def _row_to_deck(row: sqlite3.Row) -> Deck:
    return Deck(
        id=row["id"],
        name=row["name"],
        description=row["description"],
        owner_id=row["owner_id"],
        created_at=parse_timestamp(row["created_at"]),
    )


class SqliteCardStore(CardStore):
    """
    CardStore backed by SQLite.

    Usage:
        with SqliteCardStore("~/.local/share/recall/recall.db") as store:
            store.create_deck("Spanish", "", None, utcnow())

    Pass ":memory:" for a throwaway database.
    """

    def __init__(self, db_path: Path | str):
        self.db_path = str(db_path)
        if self.db_path != ":memory:":
            Path(self.db_path).parent.mkdir(parents=True, exist_ok=True)
        self.conn = sqlite3.connect(self.db_path, timeout=5, check_same_thread=False)
        self.conn.row_factory = sqlite3.Row
        if self.db_path != ":memory:":
            self.conn.execute("PRAGMA journal_mode=WAL")
        self.conn.execute("PRAGMA foreign_keys=ON")
        self.conn.executescript(SCHEMA)
        self.conn.commit()
        self._lock = threading.RLock()
        logger.debug(f"Opened card store at {self.db_path}")

    def __enter__(self) -> "SqliteCardStore":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()

    def close(self) -> None:
        with self._lock:
            if self.conn is not None:
                self.conn.close()
                self.conn = None

    def _execute(self, sql: str, params: tuple = ()) -> sqlite3.Cursor:
        with self._lock:
            cur = self.conn.execute(sql, params)
            self.conn.commit()
            return cur

    def _query(self, sql: str, params: tuple = ()) -> list[sqlite3.Row]:
        with self._lock:
            return self.conn.execute(sql, params).fetchall()

    # --- Scheduling ---

    def load(self, card_id: int) -> Card:
        rows = self._query(f"SELECT {_CARD_COLUMNS} FROM cards WHERE id = ?", (card_id,))
        if not rows:
            raise NotFound("card", card_id)
        return _row_to_card(rows[0])

    def save(self, card_id: int, state: SchedulingState, now: datetime) -> Card:
        cur = self._execute(
            """
            UPDATE cards
            SET repetitions = ?, ease_factor = ?, interval_days = ?,
                next_review_date = ?, updated_at = ?
            WHERE id = ?
            """,
            (
                state.repetitions,
                state.ease_factor,
                state.interval,
                format_timestamp(state.next_review_date),
                format_timestamp(now),
                card_id,
            ),
        )
        if cur.rowcount == 0:
            raise NotFound("card", card_id)
        return self.load(card_id)

    def list_due(self, deck_id: int, now: datetime) -> list[Card]:
        self.get_deck(deck_id)
        rows = self._query(
            f"""
            SELECT {_CARD_COLUMNS} FROM cards
            WHERE deck_id = ? AND next_review_date <= ?
            ORDER BY next_review_date ASC, id ASC
            """,
            (deck_id, format_timestamp(now)),
        )
        return [_row_to_card(r) for r in rows]

    # --- Decks ---

    def create_deck(
        self, name: str, description: str, owner_id: int | None, now: datetime
    ) -> Deck:
        cur = self._execute(
            "INSERT INTO decks (name, description, owner_id, created_at) VALUES (?, ?, ?, ?)",
            (name, description, owner_id, format_timestamp(now)),
        )
        return self.get_deck(cur.lastrowid)

    def get_deck(self, deck_id: int) -> Deck:
        rows = self._query("SELECT * FROM decks WHERE id = ?", (deck_id,))
        if not rows:
            raise NotFound("deck", deck_id)
        return _row_to_deck(rows[0])

    def list_decks(self, owner_id: int | None = None) -> list[Deck]:
        if owner_id is None:
            rows = self._query("SELECT * FROM decks ORDER BY id")
        else:
            rows = self._query("SELECT * FROM decks WHERE owner_id = ? ORDER BY id", (owner_id,))
        return [_row_to_deck(r) for r in rows]

    def update_deck(self, deck_id: int, name: str, description: str) -> Deck:
        cur = self._execute(
            "UPDATE decks SET name = ?, description = ? WHERE id = ?",
            (name, description, deck_id),
        )
        if cur.rowcount == 0:
            raise NotFound("deck", deck_id)
        return self.get_deck(deck_id)

    def delete_deck(self, deck_id: int) -> None:
        with self._lock:
            self.get_deck(deck_id)
            self.conn.execute("DELETE FROM cards WHERE deck_id = ?", (deck_id,))
            self.conn.execute("DELETE FROM decks WHERE id = ?", (deck_id,))
            self.conn.commit()

    # --- Cards ---

    def create_card(self, deck_id: int, front: str, back: str, now: datetime) -> Card:
        self.get_deck(deck_id)
        stamp = format_timestamp(as_utc(now))
        cur = self._execute(
            """
            INSERT INTO cards (deck_id, front, back, next_review_date, created_at, updated_at)
            VALUES (?, ?, ?, ?, ?, ?)
            """,
            (deck_id, front, back, stamp, stamp, stamp),
        )
        return self.load(cur.lastrowid)

    def list_cards(self, deck_id: int) -> list[Card]:
        self.get_deck(deck_id)
        rows = self._query(
            f"SELECT {_CARD_COLUMNS} FROM cards WHERE deck_id = ? ORDER BY id", (deck_id,)
        )
        return [_row_to_card(r) for r in rows]

    def update_card_text(self, card_id: int, front: str, back: str, now: datetime) -> Card:
        cur = self._execute(
            "UPDATE cards SET front = ?, back = ?, updated_at = ? WHERE id = ?",
            (front, back, format_timestamp(now), card_id),
        )
        if cur.rowcount == 0:
            raise NotFound("card", card_id)
        return self.load(card_id)

    def delete_card(self, card_id: int) -> None:
        cur = self._execute("DELETE FROM cards WHERE id = ?", (card_id,))
        if cur.rowcount == 0:
            raise NotFound("card", card_id)

    def count_cards(self, deck_id: int) -> int:
        self.get_deck(deck_id)
        rows = self._query("SELECT COUNT(*) AS n FROM cards WHERE deck_id = ?", (deck_id,))
        return rows[0]["n"]
