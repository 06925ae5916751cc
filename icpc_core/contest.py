"""Core scoreboard state transitions (pure in-memory, no I/O).

``Scoreboard`` is the single state object for one contest session:

- phase: ``ContestPhase.NOT_STARTED`` -> ``RUNNING`` <-> ``FROZEN``
- teams keyed by name, each with its submission ledger and problem statuses
- problem identifiers fixed at start (first N letters of the alphabet)

Operations either complete or raise ``StateError``/``NotFoundError`` before
touching any state. ``flush`` stores ranks from the visible order; queries read
stored ranks, so they go stale while the board is frozen until a scroll.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Dict, List, Tuple

from .config import DEFAULT_RULES, ScoringRules
from .errors import NotFoundError, StateError
from .ledger import ProblemStatus, Submission, Team, record_submission
from .ranking import assign_initial_ranks, flush_ranks, rank_teams
from .render import ScoreboardRow, build_rows
from .scroll import ScrollResult, scroll_scoreboard

logger = logging.getLogger(__name__)


class ContestPhase(str, Enum):
    NOT_STARTED = "not_started"
    RUNNING = "running"
    FROZEN = "frozen"


@dataclass(frozen=True)
class RankingQuery:
    team: str
    rank: int
    # Stored rank may hide frozen submissions until the next scroll.
    frozen_warning: bool


class Scoreboard:
    def __init__(self, rules: ScoringRules | None = None) -> None:
        self.rules: ScoringRules = rules or DEFAULT_RULES
        self.phase: ContestPhase = ContestPhase.NOT_STARTED
        self.teams: Dict[str, Team] = {}
        self.problems: Tuple[str, ...] = ()
        # Advisory only; submissions are not checked against it.
        self.duration: int = 0
        self.freeze_cycle: int = 0

    @property
    def started(self) -> bool:
        return self.phase is not ContestPhase.NOT_STARTED

    @property
    def is_frozen(self) -> bool:
        return self.phase is ContestPhase.FROZEN

    def _team(self, name: str) -> Team:
        team = self.teams.get(name)
        if team is None:
            raise NotFoundError("team_not_found", f"cannot find the team {name!r}")
        return team

    def register_team(self, name: str) -> Team:
        if self.started:
            raise StateError("already_started", "competition has started")
        if name in self.teams:
            raise StateError("duplicate_name", f"duplicated team name {name!r}")
        team = Team(name=name)
        self.teams[name] = team
        assign_initial_ranks(self.teams.values())
        logger.debug(f"Registered team {name}")
        return team

    def start_contest(self, duration: int, problem_count: int) -> Tuple[str, ...]:
        if self.started:
            raise StateError("already_started", "competition has started")
        problems = self.rules.problem_ids(problem_count)
        self.duration = duration
        self.problems = problems
        for team in self.teams.values():
            team.problems = {p: ProblemStatus() for p in problems}
        assign_initial_ranks(self.teams.values())
        self.phase = ContestPhase.RUNNING
        logger.info(
            f"Contest started: {len(self.teams)} teams, problems {''.join(problems)}, "
            f"duration {duration}"
        )
        return problems

    def submit(self, problem: str, team: str, status: str, time: int) -> Submission:
        if not self.started:
            raise StateError("not_started", "competition has not started")
        target = self._team(team)
        if problem not in self.problems:
            raise NotFoundError("problem_not_found", f"cannot find the problem {problem!r}")
        if time < 0:
            raise ValueError(f"submission time must be non-negative, got {time}")
        return record_submission(
            target,
            problem,
            status,
            time,
            frozen=self.is_frozen,
            freeze_cycle=self.freeze_cycle,
            rules=self.rules,
        )

    def flush(self) -> List[Team]:
        return flush_ranks(self.teams.values(), self.rules)

    def freeze(self) -> None:
        if self.is_frozen:
            raise StateError("already_frozen", "scoreboard has been frozen")
        if not self.started:
            raise StateError("not_started", "competition has not started")
        self.freeze_cycle += 1
        self.phase = ContestPhase.FROZEN
        logger.info(f"Scoreboard frozen (cycle {self.freeze_cycle})")

    def scroll(self) -> ScrollResult:
        if not self.is_frozen:
            raise StateError("not_frozen", "scoreboard has not been frozen")
        result = scroll_scoreboard(
            list(self.teams.values()),
            self.problems,
            freeze_cycle=self.freeze_cycle,
            rules=self.rules,
        )
        self.phase = ContestPhase.RUNNING
        logger.info(
            f"Scroll finished: {len(result.steps)} reveals, {len(result.changes)} rank changes"
        )
        return result

    def scoreboard_rows(self) -> Tuple[ScoreboardRow, ...]:
        ordered = rank_teams(self.teams.values(), include_frozen=False, rules=self.rules)
        return build_rows(ordered, self.problems, self.rules)

    def query_ranking(self, team: str) -> RankingQuery:
        target = self._team(team)
        return RankingQuery(team=target.name, rank=target.rank, frozen_warning=self.is_frozen)

    def query_submission(
        self,
        team: str,
        problem: str | None = None,
        status: str | None = None,
    ) -> Submission | None:
        """Most recent submission matching both filters, or None.

        A filter of ``None`` or the rules' wildcard (``ALL``) matches anything.
        """
        target = self._team(team)
        wildcard = self.rules.wildcard
        for sub in reversed(target.submissions):
            if problem not in (None, wildcard) and sub.problem != problem:
                continue
            if status not in (None, wildcard) and sub.status != status:
                continue
            return sub
        return None
