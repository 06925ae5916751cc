from .commands import CommandOutcome, apply_command, parse_command_line
from .config import DEFAULT_RULES, ScoringRules
from .contest import ContestPhase, RankingQuery, Scoreboard
from .errors import NotFoundError, ScoreboardError, StateError
from .ledger import ProblemStatus, Submission, Team, record_submission, reveal_problem
from .ranking import assign_initial_ranks, flush_ranks, rank_teams, standing_sort_key
from .render import RankChange, ScoreboardRow, build_rows, format_cell
from .scroll import RevealStep, ScrollResult, scroll_scoreboard
from .standing import Standing, compute_standing
from .types import CommandPayload
from .validation import InputSanitizer, ValidatedCmd

__all__ = [
    "CommandOutcome",
    "CommandPayload",
    "ContestPhase",
    "DEFAULT_RULES",
    "InputSanitizer",
    "NotFoundError",
    "ProblemStatus",
    "RankChange",
    "RankingQuery",
    "RevealStep",
    "ScoreboardError",
    "ScoreboardRow",
    "Scoreboard",
    "ScoringRules",
    "ScrollResult",
    "Standing",
    "StateError",
    "Submission",
    "Team",
    "ValidatedCmd",
    "apply_command",
    "assign_initial_ranks",
    "build_rows",
    "compute_standing",
    "flush_ranks",
    "format_cell",
    "parse_command_line",
    "rank_teams",
    "record_submission",
    "reveal_problem",
    "scroll_scoreboard",
    "standing_sort_key",
]
