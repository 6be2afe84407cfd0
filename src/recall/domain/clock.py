"""Timestamp helpers. Everything recall stores is timezone-aware UTC."""

from datetime import datetime, timezone

from .constants import TIMESTAMP_FORMAT


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def as_utc(value: datetime) -> datetime:
    """Normalize a datetime to aware UTC. Naive values are taken to be UTC already."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def format_timestamp(value: datetime) -> str:
    """
    Serialize to a fixed-width UTC string.

    Fixed width keeps lexical order equal to chronological order, which the
    SQLite store relies on for its due-date index.
    """
    return as_utc(value).strftime(TIMESTAMP_FORMAT)


def parse_timestamp(text: str) -> datetime:
    return datetime.strptime(text, TIMESTAMP_FORMAT).replace(tzinfo=timezone.utc)
