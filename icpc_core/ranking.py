"""Ranking engine (ICPC comparator with a strict total order).

Comparator, highest priority first:
- more solved problems;
- lower penalty;
- solve times compared largest-first, smaller time wins at the first difference;
- team name ascending.

The name fallback means two teams never share a rank number.
"""
from __future__ import annotations

from typing import Iterable, List, Tuple

from .config import DEFAULT_RULES, ScoringRules
from .ledger import Team
from .standing import compute_standing


def standing_sort_key(
    team: Team,
    include_frozen: bool = False,
    rules: ScoringRules = DEFAULT_RULES,
) -> Tuple[int, int, Tuple[int, ...], str]:
    standing = compute_standing(team, include_frozen, rules)
    # Equal solved counts imply equal-length vectors, so plain tuple order
    # gives the per-position "smaller wins" rule.
    return (-standing.solved, standing.penalty, standing.solve_times, team.name)


def rank_teams(
    teams: Iterable[Team],
    include_frozen: bool = False,
    rules: ScoringRules = DEFAULT_RULES,
) -> List[Team]:
    """Return teams best-first without touching their stored ranks."""
    return sorted(teams, key=lambda team: standing_sort_key(team, include_frozen, rules))


def flush_ranks(teams: Iterable[Team], rules: ScoringRules = DEFAULT_RULES) -> List[Team]:
    """Store 1-based ranks from the visible (frozen-hiding) order.

    Idempotent: a second call with no mutation in between yields the same ranks.
    """
    ordered = rank_teams(teams, include_frozen=False, rules=rules)
    for position, team in enumerate(ordered, start=1):
        team.rank = position
    return ordered


def assign_initial_ranks(teams: Iterable[Team]) -> List[Team]:
    """Before any submission ranks follow team names."""
    ordered = sorted(teams, key=lambda team: team.name)
    for position, team in enumerate(ordered, start=1):
        team.rank = position
    return ordered
