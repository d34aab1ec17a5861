"""Error handling utilities."""

from typing import Iterable


class TaskboardError(Exception):
    """Base exception for the taskboard backend."""
    pass


class ValidationError(TaskboardError):
    """Client-supplied task data violates one or more field constraints.

    ``errors`` keeps every individual violation; the exception message is
    all of them joined with ``", "`` so a client can fix its payload in one
    round trip.
    """

    def __init__(self, errors: Iterable[str]):
        self.errors = list(errors)
        super().__init__(", ".join(self.errors))

    @property
    def message(self) -> str:
        return str(self)
