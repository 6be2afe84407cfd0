"""recall: flashcard decks reviewed on an SM-2 schedule."""

from recall.consts import VERSION

__version__ = VERSION
