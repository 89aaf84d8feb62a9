"""
Players: identity (name, marker, score) plus a move source.

A move source only *chooses* a position; placing the marker is left to the
match so that board mutation stays in one place.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Optional, Protocol

import numpy as np

from .board import Board
from .config import validate_marker, validate_name
from .errors import InvalidMove
from .tactics import Strategy, choose_move, get_strategy

logger = logging.getLogger(__name__)


class CellChooser(Protocol):
    def request_cell_choice(self, valid_positions: List[int]) -> int: ...


class MoveSource(Protocol):
    def choose(self, board: Board, own_marker: str, opponent_marker: str) -> int: ...


class InteractiveMoveSource:
    """Delegates the choice to the I/O collaborator (a human at a console)."""

    def __init__(self, io: CellChooser) -> None:
        self.io = io

    def choose(self, board: Board, own_marker: str, opponent_marker: str) -> int:
        valid = board.unmarked_positions()
        pos = self.io.request_cell_choice(valid)
        if pos not in valid:
            raise InvalidMove(pos)
        return pos


class AutomatedMoveSource:
    def __init__(self, strategy: Strategy = choose_move, rng: Optional[np.random.Generator] = None) -> None:
        self.strategy = strategy
        self.rng = rng if rng is not None else np.random.default_rng()

    def choose(self, board: Board, own_marker: str, opponent_marker: str) -> int:
        return self.strategy(board, own_marker, opponent_marker, self.rng)


@dataclass(frozen=True)
class PlayerSnapshot:
    name: str
    marker: str
    score: int


@dataclass(eq=False)
class Player:
    name: str
    marker: str
    source: MoveSource
    score: int = 0

    def __post_init__(self) -> None:
        validate_name(self.name)
        validate_marker(self.marker)

    @property
    def interactive(self) -> bool:
        return isinstance(self.source, InteractiveMoveSource)

    def produce_move(self, board: Board, opponent_marker: str) -> int:
        pos = self.source.choose(board, self.marker, opponent_marker)
        logger.debug("%s (%s) chose %s", self.name, self.marker, pos)
        return pos

    def snapshot(self) -> PlayerSnapshot:
        return PlayerSnapshot(self.name, self.marker, self.score)


def human_player(name: str, marker: str, io: CellChooser) -> Player:
    return Player(name, marker, InteractiveMoveSource(io))


def computer_player(
    name: str,
    marker: str,
    strategy: str = "heuristic",
    rng: Optional[np.random.Generator] = None,
) -> Player:
    return Player(name, marker, AutomatedMoveSource(get_strategy(strategy), rng))
