from icpc_core import ContestPhase, RankChange, RevealStep, Scoreboard


def _board(teams, problem_count=2):
    board = Scoreboard()
    for name in teams:
        board.register_team(name)
    board.start_contest(300, problem_count)
    return board


def _frozen_contest():
    board = _board(["alpha", "beta", "gamma"])
    board.submit("A", "alpha", "Accepted", 10)
    board.submit("A", "beta", "Accepted", 20)
    board.freeze()
    board.submit("B", "gamma", "Accepted", 30)
    board.submit("A", "gamma", "Wrong_Answer", 35)
    board.submit("A", "gamma", "Accepted", 40)
    board.submit("B", "beta", "Wrong_Answer", 50)
    return board


def test_frozen_submissions_not_visible_before_scroll():
    board = _frozen_contest()
    board.flush()
    query = board.query_ranking("gamma")
    assert query.rank == 3
    assert query.frozen_warning is True
    assert [row.format() for row in board.scoreboard_rows()] == [
        "alpha 1 1 10 + .",
        "beta 2 1 20 + 0/1",
        "gamma 3 0 0 0/2 0/1",
    ]


def test_scroll_reveals_lowest_team_first():
    board = _frozen_contest()
    result = board.scroll()

    assert [row.format() for row in result.before] == [
        "alpha 1 1 10 + .",
        "beta 2 1 20 + 0/1",
        "gamma 3 0 0 0/2 0/1",
    ]
    assert result.steps == (
        RevealStep(team="gamma", problem="A", old_rank=3, new_rank=3, solved=True),
        RevealStep(team="gamma", problem="B", old_rank=3, new_rank=1, solved=True),
        RevealStep(team="beta", problem="B", old_rank=3, new_rank=3, solved=False),
    )
    assert result.changes == (RankChange(team="gamma", displaced="alpha", solved=2, penalty=90),)
    assert [change.format() for change in result.changes] == ["gamma alpha 2 90"]
    assert [row.format() for row in result.after] == [
        "gamma 1 2 90 +1 +",
        "alpha 2 1 10 + .",
        "beta 3 1 20 + -1",
    ]


def test_scroll_clears_frozen_state_and_counters():
    board = _frozen_contest()
    board.scroll()
    assert board.phase is ContestPhase.RUNNING
    assert board.is_frozen is False
    for team in board.teams.values():
        for ps in team.problems.values():
            assert ps.frozen is False
            assert ps.submissions_after_freeze == 0
    query = board.query_ranking("gamma")
    assert query.rank == 1
    assert query.frozen_warning is False


def test_scroll_without_frozen_problems_keeps_board():
    board = _board(["a", "b"])
    board.submit("A", "b", "Accepted", 5)
    board.freeze()
    # Already solved, so this stays visible and nothing freezes.
    board.submit("A", "b", "Wrong_Answer", 8)
    result = board.scroll()
    assert result.steps == ()
    assert result.changes == ()
    assert result.before == result.after
    assert [row.format() for row in result.after] == ["b 1 1 5 + .", "a 2 0 0 . ."]


def test_repeated_freeze_cycles_count_each_attempt_once():
    board = _board(["x", "y"], problem_count=1)
    board.submit("A", "x", "Wrong_Answer", 5)
    board.freeze()
    board.submit("A", "x", "Wrong_Answer", 10)
    first = board.scroll()
    assert first.after[0].format() == "x 1 0 0 -2"

    board.freeze()
    board.submit("A", "x", "Wrong_Answer", 20)
    second = board.scroll()
    assert second.before[0].format() == "x 1 0 0 -2/1"
    assert second.after[0].format() == "x 1 0 0 -3"


def test_frozen_accept_after_scroll_adds_penalty_with_all_attempts():
    board = _board(["solo", "zed"], problem_count=1)
    board.submit("A", "solo", "Wrong_Answer", 1)
    board.freeze()
    board.submit("A", "solo", "Wrong_Answer", 2)
    board.submit("A", "solo", "Accepted", 30)
    result = board.scroll()
    assert result.after[0].format() == "solo 1 1 70 +2"
    assert result.changes == ()


def test_rank_change_names_team_previously_at_new_rank():
    board = _board(["a", "b", "c", "d"], problem_count=1)
    board.submit("A", "a", "Accepted", 50)
    board.submit("A", "b", "Accepted", 60)
    board.freeze()
    board.submit("A", "d", "Accepted", 55)
    result = board.scroll()
    # d moves from 4th to 2nd, passing b.
    assert [change.format() for change in result.changes] == ["d b 1 55"]
    assert [row.team for row in result.after] == ["a", "d", "b", "c"]
