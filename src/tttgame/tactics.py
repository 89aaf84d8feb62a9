"""
Move selection for the automated opponent.

The heuristic takes an immediate win, otherwise blocks the opponent's
immediate win, otherwise takes the center, otherwise picks uniformly among
the unmarked positions.
"""
from __future__ import annotations

import logging
from typing import Callable, Dict, Optional

import numpy as np

from .board import CENTER, Board
from .errors import ConfigurationError

logger = logging.getLogger(__name__)

Strategy = Callable[[Board, str, str, Optional[np.random.Generator]], int]


def _pick_random(board: Board, rng: Optional[np.random.Generator]) -> int:
    # always sample from the live board, never a list computed earlier
    candidates = board.unmarked_positions()
    if rng is None:
        rng = np.random.default_rng()
    return int(rng.choice(candidates))


def choose_move(
    board: Board,
    own_marker: str,
    opponent_marker: str,
    rng: Optional[np.random.Generator] = None,
) -> int:
    if board.has_opportunity(own_marker):
        pos = board.opportunity_position(own_marker)
        logger.debug("%s takes the win at %s", own_marker, pos)
        return pos  # type: ignore[return-value]
    if board.has_opportunity(opponent_marker):
        pos = board.opportunity_position(opponent_marker)
        logger.debug("%s blocks %s at %s", own_marker, opponent_marker, pos)
        return pos  # type: ignore[return-value]
    if board[CENTER] is None:
        logger.debug("%s takes the center", own_marker)
        return CENTER
    pos = _pick_random(board, rng)
    logger.debug("%s picks %s at random", own_marker, pos)
    return pos


def random_move(
    board: Board,
    own_marker: str,
    opponent_marker: str,
    rng: Optional[np.random.Generator] = None,
) -> int:
    return _pick_random(board, rng)


STRATEGIES: Dict[str, Strategy] = {
    "heuristic": choose_move,
    "random": random_move,
}


def get_strategy(name: str) -> Strategy:
    try:
        return STRATEGIES[name]
    except KeyError:
        raise ConfigurationError(
            f"Unknown strategy {name!r}; choose one of {', '.join(STRATEGIES)}"
        ) from None
