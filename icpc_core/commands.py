"""Text protocol tokenizer and command dispatcher.

Accepted lines::

    ADDTEAM <team>
    START DURATION <minutes> PROBLEM <count>
    SUBMIT <problem> BY <team> WITH <status> AT <time>
    FLUSH | FREEZE | SCROLL | END
    QUERY_RANKING <team>
    QUERY_SUBMISSION <team> WHERE PROBLEM=<problem|ALL> AND STATUS=<status|ALL>

``parse_command_line`` turns a line into a ``CommandPayload``;
``apply_command`` validates it and runs it against a ``Scoreboard``. Phase and
lookup failures come back inside the outcome so a stream of commands never
stops on them; malformed commands raise ``ValueError``.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, List

from .contest import Scoreboard
from .errors import ScoreboardError
from .types import CommandPayload
from .validation import InputSanitizer

logger = logging.getLogger(__name__)


@dataclass
class CommandOutcome:
    """Result of applying one command."""

    type: str
    ok: bool
    result: Any = None
    error: ScoreboardError | None = None
    # Snapshot of the frozen flag when the command finished.
    frozen: bool = False
    team: str | None = None


def _expect(tokens: List[str], index: int, keyword: str, line: str) -> None:
    if len(tokens) <= index or tokens[index] != keyword:
        raise ValueError(f"expected {keyword!r} at position {index} in {line!r}")


def _int_token(tokens: List[str], index: int, line: str) -> int:
    try:
        return int(tokens[index], 10)
    except (IndexError, ValueError):
        raise ValueError(f"expected integer at position {index} in {line!r}") from None


def _filter_token(token: str, prefix: str, line: str) -> str:
    if not token.startswith(prefix) or len(token) == len(prefix):
        raise ValueError(f"expected {prefix}<value> in {line!r}")
    return token[len(prefix):]


def parse_command_line(line: str) -> CommandPayload | None:
    """Tokenize one protocol line; blank lines give None."""
    tokens = line.split()
    if not tokens:
        return None
    name = tokens[0]

    if name in {"FLUSH", "FREEZE", "SCROLL", "END"}:
        return {"type": name}

    if name in {"ADDTEAM", "QUERY_RANKING"}:
        if len(tokens) < 2:
            raise ValueError(f"{name} requires a team name: {line!r}")
        return {"type": name, "team": tokens[1]}

    if name == "START":
        _expect(tokens, 1, "DURATION", line)
        _expect(tokens, 3, "PROBLEM", line)
        return {
            "type": name,
            "duration": _int_token(tokens, 2, line),
            "problemCount": _int_token(tokens, 4, line),
        }

    if name == "SUBMIT":
        if len(tokens) < 8:
            raise ValueError(f"SUBMIT needs 8 tokens: {line!r}")
        _expect(tokens, 2, "BY", line)
        _expect(tokens, 4, "WITH", line)
        _expect(tokens, 6, "AT", line)
        return {
            "type": name,
            "problem": tokens[1],
            "team": tokens[3],
            "status": tokens[5],
            "time": _int_token(tokens, 7, line),
        }

    if name == "QUERY_SUBMISSION":
        if len(tokens) < 6:
            raise ValueError(f"QUERY_SUBMISSION needs 6 tokens: {line!r}")
        _expect(tokens, 2, "WHERE", line)
        _expect(tokens, 4, "AND", line)
        return {
            "type": name,
            "team": tokens[1],
            "problemFilter": _filter_token(tokens[3], "PROBLEM=", line),
            "statusFilter": _filter_token(tokens[5], "STATUS=", line),
        }

    raise ValueError(f"unknown command {name!r}")


def _check_status_label(board: Scoreboard, status: str | None) -> None:
    if status is None:
        return
    if status not in board.rules.status_labels:
        raise ValueError(f"unknown status {status!r}, expected one of {board.rules.status_labels}")


def apply_command(board: Scoreboard, cmd: CommandPayload) -> CommandOutcome:
    """Validate ``cmd`` and apply it to ``board``.

    Returns:
        CommandOutcome; ``ok`` is False when the scoreboard rejected the
        command (``error`` holds the StateError/NotFoundError).

    Raises:
        ValueError: the command is malformed.
    """
    validated = InputSanitizer.validate_and_sanitize_cmd(dict(cmd))
    ctype = validated.type

    # Query filters are plain matches; an unknown label simply finds nothing.
    if ctype == "SUBMIT":
        _check_status_label(board, validated.status)

    try:
        if ctype == "ADDTEAM":
            result = board.register_team(validated.team)
        elif ctype == "START":
            result = board.start_contest(validated.duration, validated.problemCount)
        elif ctype == "SUBMIT":
            result = board.submit(
                validated.problem, validated.team, validated.status, validated.time
            )
        elif ctype == "FLUSH":
            result = board.flush()
        elif ctype == "FREEZE":
            result = board.freeze()
        elif ctype == "SCROLL":
            result = board.scroll()
        elif ctype == "QUERY_RANKING":
            result = board.query_ranking(validated.team)
        elif ctype == "QUERY_SUBMISSION":
            result = board.query_submission(
                validated.team, validated.problemFilter, validated.statusFilter
            )
        else:
            # END carries no state change.
            result = None
    except ScoreboardError as exc:
        logger.warning(f"{ctype} rejected: {exc.kind}")
        return CommandOutcome(
            type=ctype, ok=False, error=exc, frozen=board.is_frozen, team=validated.team
        )

    return CommandOutcome(
        type=ctype, ok=True, result=result, frozen=board.is_frozen, team=validated.team
    )


__all__ = ["CommandOutcome", "apply_command", "parse_command_line"]
