import numpy as np
import pytest

from tttgame.config import GameConfig
from tttgame.errors import ConfigurationError, MatchStateError
from tttgame.history import History
from tttgame.match import Match, MatchState, resolve_first_mover
from tttgame.players import computer_player

FIRST_P1 = GameConfig(first_mover="player1")


def test_round_win_scores_and_records(scripted):
    x = scripted("Ann", "X", [1, 2, 3])
    o = scripted("Bob", "O", [4, 5])
    m = Match(x, o, FIRST_P1)
    assert m.current_marker == "X"
    outcomes = [m.play_turn() for _ in range(4)]
    assert outcomes == [None] * 4
    out = m.play_turn()
    assert out is not None
    assert out.winner_marker == "X"
    assert not out.is_draw
    assert not out.concludes_match
    assert m.scores() == {"X": 1, "O": 0}
    assert m.state is MatchState.ROUND_CONCLUDED
    recs = m.history.rounds_for(1)
    assert len(recs) == 1
    assert recs[0].player1.score == 1
    assert recs[0].winner_marker == "X"


def test_turns_alternate(scripted):
    x = scripted("Ann", "X", [1, 2, 3])
    o = scripted("Bob", "O", [4, 5])
    m = Match(x, o, FIRST_P1)
    order = []
    while m.state is MatchState.AWAITING_MOVE:
        order.append(m.current_marker)
        m.play_turn()
    assert order == ["X", "O", "X", "O", "X"]


def test_no_moves_after_round_concludes(scripted):
    x = scripted("Ann", "X", [1, 2, 3, 9])
    o = scripted("Bob", "O", [4, 5])
    m = Match(x, o, FIRST_P1)
    m.play_round()
    before = m.board.to_string()
    with pytest.raises(MatchStateError):
        m.play_turn()
    assert m.board.to_string() == before


def test_draw_leaves_scores(scripted):
    x = scripted("Ann", "X", [1, 3, 4, 8, 9])
    o = scripted("Bob", "O", [2, 5, 6, 7])
    m = Match(x, o, FIRST_P1)
    out = m.play_round()
    assert out.is_draw
    assert m.scores() == {"X": 0, "O": 0}
    assert m.board.is_full()
    assert m.history.rounds_for(1)[0].winner is None


def test_next_round_restarts_from_first_mover(scripted):
    # O moves first and loses; next round still starts with O
    x = scripted("Ann", "X", [1, 2, 3, 1])
    o = scripted("Bob", "O", [4, 9, 8, 5])
    m = Match(x, o, GameConfig(first_mover="player2"))
    out = m.play_round()
    assert out.winner_marker == "X"
    m.next_round()
    assert m.round_number == 2
    assert m.current_marker == "O"
    assert m.board.unmarked_positions() == list(range(1, 10))
    m.play_turn()
    assert m.board[5] == "O"


def test_next_round_only_after_round_concludes(scripted):
    m = Match(scripted("Ann", "X", []), scripted("Bob", "O", []), FIRST_P1)
    with pytest.raises(MatchStateError):
        m.next_round()
    with pytest.raises(MatchStateError):
        m.start_next_match()


def test_match_concludes_at_win_score_and_resets(scripted):
    x = scripted("Ann", "X", [1, 2, 3, 1, 2, 3])
    o = scripted("Bob", "O", [4, 5, 4, 5])
    m = Match(x, o, FIRST_P1)
    out = m.play()
    assert out.concludes_match
    assert out.round_number == 2
    assert out.match_winner.name == "Ann"
    assert [s.score for s in out.scores] == [2, 0]
    assert dict(out.cells)[3] == "X"
    assert m.state is MatchState.MATCH_CONCLUDED
    assert m.scores() == {"X": 0, "O": 0}
    assert m.board.unmarked_positions() == list(range(1, 10))
    with pytest.raises(MatchStateError):
        m.play_turn()


def test_start_next_match_keeps_first_mover(scripted):
    x = scripted("Ann", "X", [1, 2, 3, 1, 2, 3, 1, 3, 4, 8, 9, 1, 2, 3, 1, 2, 3])
    o = scripted("Bob", "O", [4, 5, 4, 5, 2, 5, 6, 7, 4, 5, 4, 5])
    m = Match(x, o, FIRST_P1)
    m.play()
    m.start_next_match()
    assert m.match_number == 2
    assert m.round_number == 1
    assert m.first_marker == "X"
    assert m.current_marker == "X"
    assert m.match_winner is None
    assert m.state is MatchState.AWAITING_MOVE
    # second match: a draw, then two wins for Ann
    out = m.play()
    assert out.match_number == 2
    assert out.round_number == 3
    recs = m.history.all_records()
    assert list(recs) == [1, 2]
    assert [len(recs[k]) for k in recs] == [2, 3]
    assert [r.round_number for r in recs[2]] == [1, 2, 3]
    assert recs[2][0].winner_marker is None


def test_start_next_match_reapplies_policy_when_configured(scripted):
    cfg = GameConfig(win_score=1, first_mover="player2", rerandomize_first_mover=True)
    x = scripted("Ann", "X", [1, 2, 3])
    o = scripted("Bob", "O", [4, 5, 6])
    m = Match(x, o, cfg, first_marker="X", match_number=4)
    assert m.current_marker == "X"
    m.play_round()
    m.start_next_match()
    assert m.match_number == 5
    assert m.first_marker == "O"


def test_explicit_first_marker_overrides_policy(scripted):
    x = scripted("Ann", "X", [1, 2, 3])
    o = scripted("Bob", "O", [4, 5])
    m = Match(x, o, GameConfig(win_score=1, first_mover="player1"))
    m.play_round()
    m.start_next_match(first_marker="O")
    assert m.current_marker == "O"


def test_scores_reset_at_match_start(scripted):
    x = scripted("Ann", "X", [])
    x.score = 5
    m = Match(x, scripted("Bob", "O", []), FIRST_P1)
    assert m.scores() == {"X": 0, "O": 0}


def test_distinct_markers_required(scripted):
    with pytest.raises(ConfigurationError):
        Match(scripted("Ann", "X", []), scripted("Bob", "X", []), FIRST_P1)


def test_unknown_first_marker(scripted):
    with pytest.raises(ConfigurationError):
        Match(scripted("Ann", "X", []), scripted("Bob", "O", []), FIRST_P1, first_marker="Z")


def test_resolve_first_mover_policies(scripted):
    a = scripted("Ann", "X", [])
    b = scripted("Bob", "O", [])
    assert resolve_first_mover("player1", a, b) == "X"
    assert resolve_first_mover("player2", a, b) == "O"
    rng = np.random.default_rng(0)
    seen = {resolve_first_mover("random", a, b, rng) for _ in range(40)}
    assert seen == {"X", "O"}
    assert resolve_first_mover("ask", a, b, chooser=lambda p1, p2: p2.marker) == "O"
    with pytest.raises(ConfigurationError):
        resolve_first_mover("ask", a, b)
    with pytest.raises(ConfigurationError):
        resolve_first_mover("ask", a, b, chooser=lambda p1, p2: "Z")
    with pytest.raises(ConfigurationError):
        resolve_first_mover("loudest", a, b)


def test_automated_match_runs_to_threshold():
    rng = np.random.default_rng(7)
    hal = computer_player("Hal", "X", "heuristic", rng)
    r2 = computer_player("R2", "O", "random", rng)
    history = History()
    m = Match(hal, r2, GameConfig(win_score=3, first_mover="random"), history=history, rng=rng)
    out = m.play()
    assert out.match_winner.score == 3
    recs = history.rounds_for(1)
    assert len(recs) == out.round_number
    prev = (0, 0)
    for rec in recs:
        cur = (rec.player1.score, rec.player2.score)
        gained = (cur[0] - prev[0], cur[1] - prev[1])
        if rec.winner_marker is None:
            assert gained == (0, 0)
        else:
            assert sorted(gained) == [0, 1]
        prev = cur
    assert max(prev) == 3
