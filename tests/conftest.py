from typing import Iterable, List

import pytest

from tttgame.board import Board
from tttgame.players import Player


class ScriptedSource:
    """Move source that replays a fixed list of positions."""

    def __init__(self, moves: Iterable[int]):
        self.moves: List[int] = list(moves)
        self.seen: List[str] = []

    def choose(self, board: Board, own_marker: str, opponent_marker: str) -> int:
        self.seen.append(board.to_string())
        return self.moves.pop(0)


@pytest.fixture
def scripted():
    def make(name: str, marker: str, moves: Iterable[int]) -> Player:
        return Player(name, marker, ScriptedSource(moves))

    return make
