"""Interactive session: setup, a loop of matches, and the closing history replay."""
from __future__ import annotations

import logging
from typing import Optional

import numpy as np

from .config import GameConfig, opponent_marker_for
from .console import DIVIDER, ConsoleIO, render_board
from .history import History
from .match import Match, RoundOutcome
from .players import Player, computer_player, human_player

logger = logging.getLogger(__name__)


def _first_mover_chooser(io: ConsoleIO, rng: np.random.Generator):
    def choose(human: Player, computer: Player) -> str:
        if io.request_yes_no("Do you want to decide who makes the first move?"):
            return io.request_option(
                "Who should start first? (P)layer or (C)omputer?",
                {"p": human.marker, "c": computer.marker},
            )
        return (human.marker, computer.marker)[int(rng.integers(2))]

    return choose


def _show_scores(io: ConsoleIO, match: Match, outcome: Optional[RoundOutcome] = None) -> None:
    s1, s2 = outcome.scores if outcome is not None else (match.player1.snapshot(), match.player2.snapshot())
    io.show(f"Score: {s1.name} - {s1.score}  {s2.name} - {s2.score}")


def _show_board(io: ConsoleIO, match: Match) -> None:
    io.clear()
    _show_scores(io, match)
    human, computer = match.players
    io.show(f"You're {human.marker}. {computer.name} is {computer.marker}.")
    io.show("")
    io.show(render_board(match.board.cells()))
    io.show("")


def play_match(io: ConsoleIO, match: Match) -> RoundOutcome:
    while True:
        _show_board(io, match)
        outcome = None
        while outcome is None:
            mover = match.current_player
            outcome = match.play_turn()
            if outcome is None and not mover.interactive:
                _show_board(io, match)
        io.clear()
        io.show(render_board(outcome.cells))
        if outcome.is_draw:
            io.show("It's a tie!")
        else:
            io.show(f"{match.player_for(outcome.winner_marker).name} won!")  # type: ignore[arg-type]
        _show_scores(io, match, outcome)
        io.show(DIVIDER)
        if outcome.concludes_match:
            io.show(f"{outcome.match_winner.name} won the match!")  # type: ignore[union-attr]
            return outcome
        io.pause("Press Enter to continue to the next round.")
        match.next_round()


def run_session(io: ConsoleIO, config: GameConfig) -> History:
    rng = np.random.default_rng(config.seed)
    io.clear()
    io.show("Welcome to Tic Tac Toe!")
    io.show("Before we start we need to set the game up ...")
    human_name = io.request_free_text("What's your name?")
    computer_name = io.request_free_text("What's the computer's name?")
    human_marker = io.request_marker()
    human = human_player(human_name, human_marker, io)
    computer = computer_player(
        computer_name, opponent_marker_for(human_marker), config.strategy, rng
    )
    match = Match(
        human, computer, config,
        history=History(), rng=rng, chooser=_first_mover_chooser(io, rng),
    )
    io.show("Great! We're good to go! Let's sum up ...")
    io.show(f"You have '{human.marker}', {computer.name} has '{computer.marker}'.")
    io.show(f"We are playing to {config.win_score} wins.")
    io.show(f"{match.first_player.name} will take the first move.")
    io.pause("Press Enter to continue to the first round.")

    while True:
        play_match(io, match)
        if not io.request_yes_no("Would you like to play again?"):
            break
        match.start_next_match()
        io.show("Let's play again!")
        io.show(f"{match.first_player.name} will take the first move.")
        io.show("")

    if io.request_yes_no("Do you want to see the history of the game?"):
        io.show("=" * 15 + " Game History " + "=" * 13)
        for line in match.history.replay():
            io.show(line)
        io.show(DIVIDER)
    io.show("Thanks for playing Tic Tac Toe! Goodbye!")
    logger.debug("session finished after %d match(es)", match.history.match_count())
    return match.history
