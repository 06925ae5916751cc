"""Command-line driver: stream protocol lines through a Scoreboard."""

import logging
import sys
from typing import List

import click

from .commands import CommandOutcome, apply_command, parse_command_line
from .config import ScoringRules
from .contest import Scoreboard

logger = logging.getLogger(__name__)

# (command type, error kind) -> message
ERROR_MESSAGES = {
    ("ADDTEAM", "already_started"): "[Error]Add failed: competition has started.",
    ("ADDTEAM", "duplicate_name"): "[Error]Add failed: duplicated team name.",
    ("START", "already_started"): "[Error]Start failed: competition has started.",
    ("FREEZE", "already_frozen"): "[Error]Freeze failed: scoreboard has been frozen.",
    ("FREEZE", "not_started"): "[Error]Freeze failed: competition has not started.",
    ("SCROLL", "not_frozen"): "[Error]Scroll failed: scoreboard has not been frozen.",
    ("QUERY_RANKING", "team_not_found"): "[Error]Query ranking failed: cannot find the team.",
    ("QUERY_SUBMISSION", "team_not_found"): "[Error]Query submission failed: cannot find the team.",
}

FROZEN_WARNING = (
    "[Warning]Scoreboard is frozen. The ranking may be inaccurate until it were scrolled."
)


def render_outcome(outcome: CommandOutcome) -> List[str]:
    """Message lines for one applied command."""
    if not outcome.ok:
        if outcome.type == "SUBMIT":
            # Rejected submissions are only logged by apply_command.
            return []
        kind = outcome.error.kind if outcome.error is not None else "unknown"
        return [ERROR_MESSAGES.get((outcome.type, kind), f"[Error]{outcome.type} failed: {kind}.")]

    ctype = outcome.type
    if ctype == "ADDTEAM":
        return ["[Info]Add successfully."]
    if ctype == "START":
        return ["[Info]Competition starts."]
    if ctype == "SUBMIT":
        return []
    if ctype == "FLUSH":
        return ["[Info]Flush scoreboard."]
    if ctype == "FREEZE":
        return ["[Info]Freeze scoreboard."]
    if ctype == "SCROLL":
        result = outcome.result
        lines = ["[Info]Scroll scoreboard."]
        lines.extend(row.format() for row in result.before)
        lines.extend(change.format() for change in result.changes)
        lines.extend(row.format() for row in result.after)
        return lines
    if ctype == "QUERY_RANKING":
        query = outcome.result
        lines = ["[Info]Complete query ranking."]
        if query.frozen_warning:
            lines.append(FROZEN_WARNING)
        lines.append(f"{query.team} NOW AT RANKING {query.rank}")
        return lines
    if ctype == "QUERY_SUBMISSION":
        sub = outcome.result
        lines = ["[Info]Complete query submission."]
        if sub is None:
            lines.append("Cannot find any submission.")
        else:
            lines.append(f"{outcome.team} {sub.problem} {sub.status} {sub.time}")
        return lines
    if ctype == "END":
        return ["[Info]Competition ends."]
    return []


def run_stream(lines, board: Scoreboard, echo=click.echo) -> int:
    """Apply lines until END or input runs out; returns commands applied."""
    applied = 0
    for lineno, line in enumerate(lines, start=1):
        try:
            cmd = parse_command_line(line)
            if cmd is None:
                continue
            outcome = apply_command(board, cmd)
        except ValueError as exc:
            logger.warning(f"line {lineno}: skipped malformed command: {exc}")
            continue
        for message in render_outcome(outcome):
            echo(message)
        applied += 1
        if outcome.type == "END":
            break
    return applied


@click.command()
@click.argument("source", type=click.File("r"), default="-")
@click.option(
    "--penalty-minutes",
    type=click.IntRange(min=0),
    default=20,
    show_default=True,
    help="Penalty per wrong attempt before acceptance.",
)
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    default="WARNING",
    show_default=True,
)
def main(source, penalty_minutes: int, log_level: str) -> None:
    """Run an ICPC scoreboard session from SOURCE (stdin by default)."""
    logging.basicConfig(
        stream=sys.stderr,
        level=getattr(logging, log_level.upper()),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    board = Scoreboard(ScoringRules(penalty_minutes=penalty_minutes))
    applied = run_stream(source, board)
    logger.info(f"Processed {applied} commands")


if __name__ == "__main__":
    main()
