"""Error taxonomy shared by the pure core and the persistence services."""

from __future__ import annotations

from typing import Any, Mapping, Sequence


class SquadkitError(RuntimeError):
    """Base class for errors that carry a short user-facing message."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(SquadkitError):
    """Raised when a caller-side precondition fails before any mutation."""


class PolicyViolation(SquadkitError):
    """Raised when a change would break a roster or selection invariant."""


class PersistenceError(SquadkitError):
    """Raised when the data store rejects a write part-way through an operation.

    Writes issued before ``step`` stay committed; ``completed`` lists them so
    the caller can retry only what is left. ``context`` holds whatever the
    retry needs (for example the ids of teams that were already created).
    """

    def __init__(
        self,
        message: str,
        *,
        step: str,
        completed: Sequence[str] = (),
        context: Mapping[str, Any] | None = None,
    ):
        super().__init__(message)
        self.step = step
        self.completed = tuple(completed)
        self.context = dict(context or {})


__all__ = [
    "SquadkitError",
    "ValidationError",
    "PolicyViolation",
    "PersistenceError",
]
