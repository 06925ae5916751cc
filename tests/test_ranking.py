import pytest

from icpc_core import (
    ProblemStatus,
    ScoringRules,
    Team,
    compute_standing,
    flush_ranks,
    rank_teams,
    record_submission,
)


def _team(name, problems="AB"):
    return Team(name=name, problems={p: ProblemStatus() for p in problems})


def _names(teams):
    return [team.name for team in teams]


def test_fewer_penalty_ranks_higher():
    a = _team("A")
    b = _team("B")
    record_submission(a, "A", "Wrong_Answer", 2, frozen=False)
    record_submission(a, "A", "Accepted", 10, frozen=False)
    record_submission(b, "A", "Accepted", 5, frozen=False)

    assert compute_standing(a).penalty == 30
    assert compute_standing(b).penalty == 5
    ordered = flush_ranks([a, b])
    assert _names(ordered) == ["B", "A"]
    assert (b.rank, a.rank) == (1, 2)


def test_more_solved_beats_lower_penalty():
    slow = _team("slow")
    fast = _team("fast")
    record_submission(slow, "A", "Accepted", 200, frozen=False)
    record_submission(slow, "B", "Accepted", 250, frozen=False)
    record_submission(fast, "A", "Accepted", 1, frozen=False)
    assert _names(rank_teams([fast, slow])) == ["slow", "fast"]


def test_standing_tie_break_vector_is_descending():
    team = _team("t")
    record_submission(team, "A", "Accepted", 10, frozen=False)
    record_submission(team, "B", "Accepted", 50, frozen=False)
    standing = compute_standing(team)
    assert standing.solved == 2
    assert standing.penalty == 60
    assert standing.solve_times == (50, 10)


def test_equal_penalty_prefers_smaller_latest_solve():
    early_late = _team("aaa")
    even = _team("zzz")
    record_submission(early_late, "A", "Accepted", 10, frozen=False)
    record_submission(early_late, "B", "Accepted", 50, frozen=False)
    record_submission(even, "A", "Accepted", 30, frozen=False)
    record_submission(even, "B", "Accepted", 30, frozen=False)

    assert _names(flush_ranks([early_late, even])) == ["zzz", "aaa"]


def test_full_tie_falls_back_to_name_with_distinct_ranks():
    teams = [_team(name) for name in ("delta", "bravo", "charlie")]
    for team in teams:
        record_submission(team, "A", "Accepted", 15, frozen=False)
    ordered = flush_ranks(teams)
    assert _names(ordered) == ["bravo", "charlie", "delta"]
    assert sorted(team.rank for team in teams) == [1, 2, 3]


def test_frozen_solved_problem_counts_only_when_included():
    team = _team("t")
    team.problems["A"] = ProblemStatus(solved=True, solve_time=7, frozen=True)
    assert compute_standing(team, include_frozen=False).solved == 0
    included = compute_standing(team, include_frozen=True)
    assert included.solved == 1
    assert included.penalty == 7


def test_flush_is_idempotent():
    teams = [_team(name) for name in ("x", "y", "z")]
    record_submission(teams[2], "A", "Accepted", 9, frozen=False)
    flush_ranks(teams)
    first = {team.name: team.rank for team in teams}
    flush_ranks(teams)
    assert {team.name: team.rank for team in teams} == first


def test_penalty_minutes_come_from_rules():
    team = _team("t")
    record_submission(team, "A", "Wrong_Answer", 1, frozen=False)
    record_submission(team, "A", "Accepted", 10, frozen=False)
    assert compute_standing(team, rules=ScoringRules(penalty_minutes=5)).penalty == 15


@pytest.mark.parametrize("count", [-1, 27])
def test_problem_ids_out_of_range(count):
    with pytest.raises(ValueError):
        ScoringRules().problem_ids(count)


def test_rules_reject_unknown_accepted_label():
    with pytest.raises(ValueError):
        ScoringRules(accepted_status="OK")
