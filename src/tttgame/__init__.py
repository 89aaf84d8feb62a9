"""tttgame package.

Board, automated opponent, players, the round/match state machine and the
match history, plus a thin console shell.

Convenience imports are exposed for common workflows.
"""

from .board import Board
from .config import GameConfig, load_config
from .errors import ConfigurationError, InvalidMove, MatchStateError, TTTError
from .history import History, RoundRecord
from .match import Match, MatchState, RoundOutcome
from .players import Player, computer_player, human_player
from .tactics import choose_move, get_strategy

__all__ = [
    "Board",
    "GameConfig",
    "load_config",
    "choose_move",
    "get_strategy",
    "Player",
    "human_player",
    "computer_player",
    "Match",
    "MatchState",
    "RoundOutcome",
    "History",
    "RoundRecord",
    "TTTError",
    "InvalidMove",
    "ConfigurationError",
    "MatchStateError",
]
