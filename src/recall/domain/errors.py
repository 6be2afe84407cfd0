"""
Domain errors.

Raised by the scheduler, the card stores and the application services.
The HTTP and CLI layers map them to status codes and exit codes.
"""


class RecallError(Exception):
    """Base class for every error raised by recall itself."""


class InvalidInput(RecallError, ValueError):
    """A caller supplied a value the operation cannot accept (e.g. quality 7)."""


class NotFound(RecallError, LookupError):
    """A referenced card or deck does not exist."""

    def __init__(self, kind: str, identifier: int):
        self.kind = kind
        self.identifier = identifier
        super().__init__(f"{kind.capitalize()} not found: {identifier}")
