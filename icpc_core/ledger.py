"""Submission ledger and per-problem status tracking.

Every submission a team makes is appended to ``Team.submissions`` in arrival
order. The per-problem ``ProblemStatus`` aggregate is derived from it:

- While the scoreboard is visible, submissions update the status directly
  (first acceptance wins, wrong attempts before it are counted).
- While frozen, submissions on unsolved problems only mark the status frozen
  and bump ``submissions_after_freeze``; the verdicts are replayed later by
  ``reveal_problem`` during a scroll.
- Once a status is solved nothing can change it again.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, List, Sequence

from .config import DEFAULT_RULES, ScoringRules

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Submission:
    problem: str
    status: str
    time: int
    # True when the scoreboard was visible at arrival.
    before_freeze: bool
    # Freeze cycle the submission was hidden in (0 when visible).
    freeze_cycle: int = 0


@dataclass
class ProblemStatus:
    solved: bool = False
    solve_time: int = 0
    wrong_before_first_success: int = 0
    # Visible wrong attempts; after a reveal of an unsolved problem this also
    # holds the replayed wrong attempts (display only).
    wrong_before_freeze: int = 0
    submissions_after_freeze: int = 0
    frozen: bool = False


@dataclass
class Team:
    name: str
    rank: int = 0
    problems: Dict[str, ProblemStatus] = field(default_factory=dict)
    submissions: List[Submission] = field(default_factory=list)

    def status(self, problem: str) -> ProblemStatus:
        return self.problems[problem]

    def has_frozen_problem(self) -> bool:
        return any(ps.frozen for ps in self.problems.values())

    def first_frozen_problem(self, problem_order: Sequence[str]) -> str | None:
        """Lowest-numbered frozen problem by the contest's problem order."""
        for problem in problem_order:
            ps = self.problems.get(problem)
            if ps is not None and ps.frozen:
                return problem
        return None


def record_submission(
    team: Team,
    problem: str,
    status: str,
    time: int,
    *,
    frozen: bool,
    freeze_cycle: int = 0,
    rules: ScoringRules = DEFAULT_RULES,
) -> Submission:
    """Append a submission to the ledger and fold it into the problem status.

    ``problem`` must already be tracked for the team.
    """
    ps = team.status(problem)
    submission = Submission(
        problem=problem,
        status=status,
        time=time,
        before_freeze=not frozen,
        freeze_cycle=freeze_cycle if frozen else 0,
    )
    team.submissions.append(submission)

    if ps.solved:
        # First acceptance wins; later submissions only live in the ledger.
        return submission

    if frozen:
        ps.frozen = True
        ps.submissions_after_freeze += 1
    elif rules.is_accepted(status):
        ps.solved = True
        ps.solve_time = time
        ps.wrong_before_first_success = ps.wrong_before_freeze
    else:
        ps.wrong_before_freeze += 1

    logger.debug(
        f"Recorded {team.name} {problem} {status} @{time} (frozen={frozen}, solved={ps.solved})"
    )
    return submission


def reveal_problem(
    team: Team,
    problem: str,
    *,
    freeze_cycle: int,
    rules: ScoringRules = DEFAULT_RULES,
) -> ProblemStatus:
    """Unfreeze one problem and replay its hidden submissions in arrival order.

    Only submissions hidden during ``freeze_cycle`` are replayed, so attempts
    revealed by an earlier scroll are never counted twice.
    """
    ps = team.status(problem)
    ps.frozen = False

    replay_wrong = 0
    for sub in team.submissions:
        if sub.problem != problem or sub.before_freeze or sub.freeze_cycle != freeze_cycle:
            continue
        if ps.solved:
            break
        if rules.is_accepted(sub.status):
            ps.solved = True
            ps.solve_time = sub.time
            ps.wrong_before_first_success = ps.wrong_before_freeze + replay_wrong
        else:
            replay_wrong += 1

    if not ps.solved:
        ps.wrong_before_freeze += replay_wrong
    return ps


def reset_freeze_counters(teams: Sequence[Team]) -> None:
    for team in teams:
        for ps in team.problems.values():
            ps.submissions_after_freeze = 0
