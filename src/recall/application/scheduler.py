"""
SM-2 review scheduler.

This is a pure computation module with no I/O: it takes a card's scheduling
state and a quality rating and returns the next state. Persisting the result
is the caller's job.
"""

import math
from datetime import datetime, timedelta
from enum import IntEnum

from recall.domain.clock import as_utc, utcnow
from recall.domain.constants import (
    DEFAULT_INTERVAL,
    FIRST_INTERVAL,
    MAX_INTERVAL,
    MAX_QUALITY,
    MIN_EASE_FACTOR,
    MIN_QUALITY,
    PASSING_QUALITY,
    SECOND_INTERVAL,
)
from recall.domain.errors import InvalidInput
from recall.domain.models import SchedulingState


class Rating(IntEnum):
    """Answer buttons offered by the study screen."""

    AGAIN = 0
    HARD = 3
    GOOD = 4
    EASY = 5


def validate_quality(quality: object) -> int:
    """
    Check that quality is an integer in [0, 5].

    Raises:
        InvalidInput: quality is missing, not an int, or out of range.
    """
    if quality is None:
        raise InvalidInput("Quality is required")
    # bool is an int subclass; True/False are not ratings
    if isinstance(quality, bool) or not isinstance(quality, int):
        raise InvalidInput(f"Quality must be an integer, got {type(quality).__name__}")
    if quality < MIN_QUALITY or quality > MAX_QUALITY:
        raise InvalidInput(f"Quality must be between {MIN_QUALITY} and {MAX_QUALITY}")
    return int(quality)


def ease_delta(quality: int) -> float:
    """
    Ease factor adjustment for a rating.

    q=5 -> +0.10, q=4 -> 0.00, q=3 -> -0.14, q=2 -> -0.32, q=1 -> -0.54, q=0 -> -0.80
    """
    miss = MAX_QUALITY - quality
    return 0.1 - miss * (0.08 + miss * 0.02)


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def next_interval(state: SchedulingState) -> int:
    """
    Interval after a successful review, from the pre-review repetition count.

    Capped at MAX_INTERVAL days so the next review date stays representable.
    """
    if state.repetitions == 0:
        return FIRST_INTERVAL
    if state.repetitions == 1:
        return SECOND_INTERVAL
    return min(MAX_INTERVAL, max(1, round_half_up(state.interval * state.ease_factor)))


def apply_review(
    state: SchedulingState, quality: int, now: datetime | None = None
) -> SchedulingState:
    """
    Apply one review to a scheduling state.

    The interval is computed with the ease factor as it was before this
    review; the updated ease factor only affects the next review.

    Args:
        state: Current scheduling state. Not modified.
        quality: Self-assessed recall, 0 (blackout) to 5 (perfect).
        now: Review time. Defaults to the current UTC time.

    Returns:
        A new SchedulingState with next_review_date = now + interval days.

    Raises:
        InvalidInput: quality is missing or outside [0, 5].
    """
    quality = validate_quality(quality)
    now = as_utc(now) if now is not None else utcnow()

    if quality < PASSING_QUALITY:
        repetitions = 0
        interval = DEFAULT_INTERVAL
    else:
        interval = next_interval(state)
        repetitions = state.repetitions + 1

    ease_factor = max(MIN_EASE_FACTOR, state.ease_factor + ease_delta(quality))

    return SchedulingState(
        next_review_date=now + timedelta(days=interval),
        repetitions=repetitions,
        ease_factor=ease_factor,
        interval=interval,
    )
