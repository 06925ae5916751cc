"""Plain-text scoreboard rows and rank-change lines."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

from .config import DEFAULT_RULES, ScoringRules
from .ledger import ProblemStatus, Team
from .standing import compute_standing


@dataclass(frozen=True)
class ScoreboardRow:
    team: str
    rank: int
    solved: int
    penalty: int
    cells: tuple[str, ...]

    def format(self) -> str:
        head = f"{self.team} {self.rank} {self.solved} {self.penalty}"
        if not self.cells:
            return head
        return head + " " + " ".join(self.cells)


@dataclass(frozen=True)
class RankChange:
    team: str
    displaced: str
    solved: int
    penalty: int

    def format(self) -> str:
        return f"{self.team} {self.displaced} {self.solved} {self.penalty}"


def format_cell(ps: ProblemStatus | None) -> str:
    """Render one problem cell.

    ``.`` untried, ``-N`` unsolved with N wrong attempts, ``+``/``+N`` solved,
    ``N/M`` or ``-N/M`` while hidden (M submissions after freeze).
    """
    if ps is None:
        return "."
    if ps.frozen:
        prefix = "" if ps.wrong_before_freeze == 0 else "-"
        return f"{prefix}{ps.wrong_before_freeze}/{ps.submissions_after_freeze}"
    if ps.solved:
        if ps.wrong_before_first_success > 0:
            return f"+{ps.wrong_before_first_success}"
        return "+"
    if ps.wrong_before_freeze == 0:
        return "."
    return f"-{ps.wrong_before_freeze}"


def build_row(
    team: Team,
    problems: Sequence[str],
    rules: ScoringRules = DEFAULT_RULES,
) -> ScoreboardRow:
    standing = compute_standing(team, include_frozen=False, rules=rules)
    return ScoreboardRow(
        team=team.name,
        rank=team.rank,
        solved=standing.solved,
        penalty=standing.penalty,
        cells=tuple(format_cell(team.problems.get(p)) for p in problems),
    )


def build_rows(
    ordered: Sequence[Team],
    problems: Sequence[str],
    rules: ScoringRules = DEFAULT_RULES,
) -> tuple[ScoreboardRow, ...]:
    return tuple(build_row(team, problems, rules) for team in ordered)
