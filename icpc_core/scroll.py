"""Scroll controller: reveal frozen problems one at a time.

Each step ranks the teams under frozen visibility, picks the lowest-ranked team
that still has a frozen problem, reveals its lowest-numbered frozen problem and
re-ranks. When the revealed team climbs, a ``RankChange`` names the team that
held its new rank just before the reveal.

The loop terminates because every step clears exactly one frozen flag and
nothing re-freezes during a scroll. Each step re-sorts all teams, so a scroll
costs O(frozen statuses x teams x problems); fine at contest scale.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Sequence

from .config import DEFAULT_RULES, ScoringRules
from .ledger import Team, reset_freeze_counters, reveal_problem
from .ranking import flush_ranks, rank_teams
from .render import RankChange, ScoreboardRow, build_rows
from .standing import compute_standing

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RevealStep:
    team: str
    problem: str
    old_rank: int
    new_rank: int
    solved: bool


@dataclass(frozen=True)
class ScrollResult:
    before: tuple[ScoreboardRow, ...]
    steps: tuple[RevealStep, ...]
    changes: tuple[RankChange, ...]
    after: tuple[ScoreboardRow, ...]


def _lowest_team_with_frozen(ordered: Sequence[Team]) -> Team | None:
    for team in reversed(ordered):
        if team.has_frozen_problem():
            return team
    return None


def scroll_scoreboard(
    teams: Sequence[Team],
    problems: Sequence[str],
    *,
    freeze_cycle: int,
    rules: ScoringRules = DEFAULT_RULES,
) -> ScrollResult:
    """Drain every frozen status and return the full reveal transcript.

    The caller owns the phase flag; this only touches teams.
    """
    ordered = flush_ranks(teams, rules)
    before = build_rows(ordered, problems, rules)

    steps: List[RevealStep] = []
    changes: List[RankChange] = []
    while True:
        ordered = rank_teams(teams, include_frozen=False, rules=rules)
        team = _lowest_team_with_frozen(ordered)
        if team is None:
            break
        problem = team.first_frozen_problem(problems)
        if problem is None:
            break

        old_rank = team.rank
        previous_ranks = [(other.name, other.rank) for other in ordered]
        ps = reveal_problem(team, problem, freeze_cycle=freeze_cycle, rules=rules)
        flush_ranks(teams, rules)
        new_rank = team.rank
        steps.append(
            RevealStep(
                team=team.name,
                problem=problem,
                old_rank=old_rank,
                new_rank=new_rank,
                solved=ps.solved,
            )
        )
        logger.debug(f"Revealed {team.name} {problem}: rank {old_rank} -> {new_rank}")

        if new_rank < old_rank:
            displaced = next(
                (name for name, rank in previous_ranks if rank == new_rank and name != team.name),
                "",
            )
            standing = compute_standing(team, include_frozen=False, rules=rules)
            change = RankChange(
                team=team.name,
                displaced=displaced,
                solved=standing.solved,
                penalty=standing.penalty,
            )
            changes.append(change)
            logger.debug(f"Rank change: {change.format()}")

    after = build_rows(rank_teams(teams, include_frozen=False, rules=rules), problems, rules)
    reset_freeze_counters(teams)
    return ScrollResult(
        before=before,
        steps=tuple(steps),
        changes=tuple(changes),
        after=after,
    )
