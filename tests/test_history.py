import pytest

from tttgame.history import History, RoundRecord
from tttgame.players import PlayerSnapshot


def snap(name, marker, score):
    return PlayerSnapshot(name, marker, score)


def _filled() -> History:
    h = History()
    h.record_round(1, 1, snap("Ann", "X", 1), snap("Hal", "O", 0), "X")
    h.record_round(1, 2, snap("Ann", "X", 1), snap("Hal", "O", 0), None)
    h.record_round(1, 3, snap("Ann", "X", 2), snap("Hal", "O", 0), "X")
    h.record_round(2, 1, snap("Ann", "X", 0), snap("Hal", "O", 1), "O")
    return h


def test_groups_by_match_in_insertion_order():
    h = _filled()
    recs = h.all_records()
    assert list(recs) == [1, 2]
    assert [r.round_number for r in recs[1]] == [1, 2, 3]
    assert len(recs[2]) == 1
    assert h.match_count() == 2
    assert len(h) == 4


def test_match_numbers_keep_insertion_order_not_sorted():
    h = History()
    h.record_round(3, 1, snap("A", "X", 0), snap("B", "O", 0))
    h.record_round(1, 1, snap("A", "X", 0), snap("B", "O", 0))
    assert list(h.all_records()) == [3, 1]


def test_records_are_immutable():
    rec = _filled().rounds_for(1)[0]
    assert isinstance(rec, RoundRecord)
    with pytest.raises(AttributeError):
        rec.round_number = 9  # type: ignore[misc]


def test_summary_text():
    recs = _filled().rounds_for(1)
    assert recs[0].summary == "Round 1: Score 1 - 0. Ann played X, Hal played O. Ann won."
    assert recs[1].summary.endswith("It's a tie.")
    assert str(recs[2]) == recs[2].summary


def test_replay_lines():
    lines = list(_filled().replay())
    assert lines[0] == "Match 1"
    assert lines[4] == "Match 2"
    assert lines[5].startswith("Round 1: Score 0 - 1.")
    assert len(lines) == 6


def test_unknown_match_has_no_rounds():
    assert _filled().rounds_for(7) == ()


def test_to_frame():
    pd = pytest.importorskip("pandas")
    df = _filled().to_frame()
    assert isinstance(df, pd.DataFrame)
    assert len(df) == 4
    assert df["match_number"].tolist() == [1, 1, 1, 2]
    assert df.loc[3, "player2_score"] == 1
    assert df["winner_marker"].isna().sum() == 1


def test_empty_frame_has_columns():
    pytest.importorskip("pandas")
    df = History().to_frame()
    assert len(df) == 0
    assert "winner_marker" in df.columns
