"""Standing calculator: solved count, penalty and tie-break vector for one team."""
from __future__ import annotations

from dataclasses import dataclass

from .config import DEFAULT_RULES, ScoringRules
from .ledger import Team


@dataclass(frozen=True)
class Standing:
    solved: int
    penalty: int
    # Counted solve times, largest first.
    solve_times: tuple[int, ...]


def compute_standing(
    team: Team,
    include_frozen: bool = False,
    rules: ScoringRules = DEFAULT_RULES,
) -> Standing:
    """Recompute the team's standing from its problem statuses.

    A solved problem counts unless it is frozen and ``include_frozen`` is False.
    Nothing is cached; call again after any mutation.
    """
    times: list[int] = []
    penalty = 0
    for ps in team.problems.values():
        if not ps.solved:
            continue
        if ps.frozen and not include_frozen:
            continue
        times.append(ps.solve_time)
        penalty += ps.solve_time + rules.penalty_minutes * ps.wrong_before_first_success
    times.sort(reverse=True)
    return Standing(solved=len(times), penalty=penalty, solve_times=tuple(times))
