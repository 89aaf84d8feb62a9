"""
Round/match state machine.

A match alternates turns between two players, concludes each round on a win
or a full board, scores the round winner, records the round in the history
and ends once a player's score reaches ``config.win_score``. Every round of a
match starts with the same first mover.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Dict, Optional, Tuple

import numpy as np

from .board import Board
from .config import GameConfig
from .errors import ConfigurationError, MatchStateError
from .history import History
from .players import Player, PlayerSnapshot

logger = logging.getLogger(__name__)

FirstMoverChooser = Callable[[Player, Player], str]


class MatchState(Enum):
    AWAITING_MOVE = "awaiting_move"
    ROUND_CONCLUDED = "round_concluded"
    MATCH_CONCLUDED = "match_concluded"


@dataclass(frozen=True)
class RoundOutcome:
    match_number: int
    round_number: int
    winner_marker: Optional[str]
    scores: Tuple[PlayerSnapshot, PlayerSnapshot]
    cells: Tuple[Tuple[int, Optional[str]], ...]
    match_winner: Optional[PlayerSnapshot] = None

    @property
    def is_draw(self) -> bool:
        return self.winner_marker is None

    @property
    def concludes_match(self) -> bool:
        return self.match_winner is not None


def resolve_first_mover(
    policy: str,
    player1: Player,
    player2: Player,
    rng: Optional[np.random.Generator] = None,
    chooser: Optional[FirstMoverChooser] = None,
) -> str:
    """Return the marker that moves first under ``policy``."""
    if policy == "player1":
        return player1.marker
    if policy == "player2":
        return player2.marker
    if policy == "random":
        rng = rng if rng is not None else np.random.default_rng()
        return (player1.marker, player2.marker)[int(rng.integers(2))]
    if policy == "ask":
        if chooser is None:
            raise ConfigurationError("first-mover policy 'ask' needs a chooser")
        marker = chooser(player1, player2)
        if marker not in (player1.marker, player2.marker):
            raise ConfigurationError(f"Chooser returned unknown marker {marker!r}")
        return marker
    raise ConfigurationError(f"Unknown first-mover policy {policy!r}")


class Match:
    def __init__(
        self,
        player1: Player,
        player2: Player,
        config: Optional[GameConfig] = None,
        first_marker: Optional[str] = None,
        history: Optional[History] = None,
        rng: Optional[np.random.Generator] = None,
        chooser: Optional[FirstMoverChooser] = None,
        match_number: int = 1,
    ) -> None:
        if player1.marker == player2.marker:
            raise ConfigurationError(
                f"Players must hold distinct markers, both have {player1.marker!r}"
            )
        self.player1 = player1
        self.player2 = player2
        self.config = config if config is not None else GameConfig()
        self.history = history if history is not None else History()
        self.rng = rng if rng is not None else np.random.default_rng(self.config.seed)
        self.chooser = chooser
        self.board = Board(self.config.winning_lines)
        self.match_number = match_number
        self.match_winner: Optional[PlayerSnapshot] = None
        self._begin(first_marker)

    def _begin(self, first_marker: Optional[str]) -> None:
        if first_marker is None:
            first_marker = resolve_first_mover(
                self.config.first_mover, self.player1, self.player2, self.rng, self.chooser
            )
        elif first_marker not in (self.player1.marker, self.player2.marker):
            raise ConfigurationError(f"Unknown first marker {first_marker!r}")
        self.first_marker = first_marker
        self.current_marker = first_marker
        self.round_number = 1
        self.player1.score = 0
        self.player2.score = 0
        self.board.reset()
        self.state = MatchState.AWAITING_MOVE
        logger.debug(
            "match %d begins; %s moves first, playing to %d",
            self.match_number, first_marker, self.config.win_score,
        )

    @property
    def players(self) -> Tuple[Player, Player]:
        return (self.player1, self.player2)

    def player_for(self, marker: str) -> Player:
        for p in self.players:
            if p.marker == marker:
                return p
        raise KeyError(marker)

    def opponent_of(self, player: Player) -> Player:
        return self.player2 if player is self.player1 else self.player1

    @property
    def current_player(self) -> Player:
        return self.player_for(self.current_marker)

    @property
    def first_player(self) -> Player:
        return self.player_for(self.first_marker)

    def scores(self) -> Dict[str, int]:
        return {p.marker: p.score for p in self.players}

    def play_turn(self) -> Optional[RoundOutcome]:
        """Let the current player move; return the outcome if the round concluded."""
        if self.state is not MatchState.AWAITING_MOVE:
            raise MatchStateError(f"No move expected while {self.state.value}")
        player = self.current_player
        opponent = self.opponent_of(player)
        pos = player.produce_move(self.board, opponent.marker)
        self.board.place(pos, player.marker)
        if self.board.someone_won() or self.board.is_full():
            return self._conclude_round()
        self.current_marker = opponent.marker
        return None

    def _conclude_round(self) -> RoundOutcome:
        winner_marker = self.board.winning_marker()
        if winner_marker is not None:
            self.player_for(winner_marker).score += 1
        self.history.record_round(
            self.match_number, self.round_number, self.player1, self.player2, winner_marker
        )
        champion = next(
            (p for p in self.players if p.score >= self.config.win_score), None
        )
        outcome = RoundOutcome(
            match_number=self.match_number,
            round_number=self.round_number,
            winner_marker=winner_marker,
            scores=(self.player1.snapshot(), self.player2.snapshot()),
            cells=tuple(self.board.cells().items()),
            match_winner=champion.snapshot() if champion is not None else None,
        )
        logger.debug(
            "match %d round %d concluded: %s",
            self.match_number, self.round_number, winner_marker or "draw",
        )
        if champion is None:
            self.state = MatchState.ROUND_CONCLUDED
            return outcome
        self.match_winner = outcome.match_winner
        self.state = MatchState.MATCH_CONCLUDED
        self.player1.score = 0
        self.player2.score = 0
        self.board.reset()
        logger.debug("match %d won by %s", self.match_number, champion.name)
        return outcome

    def next_round(self) -> None:
        if self.state is not MatchState.ROUND_CONCLUDED:
            raise MatchStateError(f"Cannot start a new round while {self.state.value}")
        self.board.reset()
        self.round_number += 1
        self.current_marker = self.first_marker
        self.state = MatchState.AWAITING_MOVE

    def start_next_match(self, first_marker: Optional[str] = None) -> None:
        """Begin a fresh match: scores at 0, round 1, same or re-decided first mover."""
        if self.state is not MatchState.MATCH_CONCLUDED:
            raise MatchStateError(f"Cannot start a new match while {self.state.value}")
        if first_marker is None and not self.config.rerandomize_first_mover:
            first_marker = self.first_marker
        self.match_number += 1
        self.match_winner = None
        self._begin(first_marker)

    def play_round(self) -> RoundOutcome:
        while True:
            outcome = self.play_turn()
            if outcome is not None:
                return outcome

    def play(self) -> RoundOutcome:
        """Play rounds until the match concludes; return the deciding round."""
        while True:
            outcome = self.play_round()
            if outcome.concludes_match:
                return outcome
            self.next_round()
