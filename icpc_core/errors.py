"""Error taxonomy for scoreboard operations.

Errors never leave the engine half-mutated: every check that raises runs before
the state is touched, so callers may report the error and keep going.
"""
from __future__ import annotations


class ScoreboardError(Exception):
    """Base class; ``kind`` is a stable machine-readable tag."""

    kind = "scoreboard_error"

    def __init__(self, kind: str | None = None, message: str | None = None) -> None:
        if kind is not None:
            self.kind = kind
        self.message = message or self.kind
        super().__init__(self.message)


class StateError(ScoreboardError):
    """Operation is not valid in the current contest phase."""

    kind = "invalid_state"


class NotFoundError(ScoreboardError):
    """Referenced team or problem does not exist."""

    kind = "not_found"


__all__ = ["ScoreboardError", "StateError", "NotFoundError"]
