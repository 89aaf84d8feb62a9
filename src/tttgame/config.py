"""Engine configuration.

Environment-first: values come from ``TTT_*`` variables when set, explicit
overrides (usually CLI flags) take precedence, defaults fill the rest.
"""
from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from typing import Dict, Optional, Tuple

from .errors import ConfigurationError

logger = logging.getLogger(__name__)

Line = Tuple[int, int, int]

# rows, then columns, then the two diagonals; order is the tie-break for
# winner and opportunity scans
WINNING_LINES: Tuple[Line, ...] = (
    (1, 2, 3), (4, 5, 6), (7, 8, 9),
    (1, 4, 7), (2, 5, 8), (3, 6, 9),
    (1, 5, 9), (3, 5, 7),
)

DEFAULT_WIN_SCORE = 2
FIRST_MOVER_POLICIES = ("player1", "player2", "random", "ask")
STRATEGY_NAMES = ("heuristic", "random")

# markers that read like an "O" on the board
O_LOOKALIKES = frozenset("QDoO0")

# characters that stand for an empty cell in board strings
EMPTY_CHAR = "."
EMPTY_CHARS = frozenset((EMPTY_CHAR, "_", " "))

_TRUTHY = {"1", "true", "yes", "y", "on"}
_FALSY = {"0", "false", "no", "n", "off", ""}


@dataclass(frozen=True)
class GameConfig:
    win_score: int = DEFAULT_WIN_SCORE
    winning_lines: Tuple[Line, ...] = field(default=WINNING_LINES)
    strategy: str = "heuristic"
    first_mover: str = "ask"
    rerandomize_first_mover: bool = False
    seed: Optional[int] = None

    def __post_init__(self) -> None:
        if isinstance(self.win_score, bool) or not isinstance(self.win_score, int) or self.win_score < 1:
            raise ConfigurationError(f"win_score must be a positive integer, got {self.win_score!r}")
        if self.strategy not in STRATEGY_NAMES:
            raise ConfigurationError(
                f"Unknown strategy {self.strategy!r}; choose one of {', '.join(STRATEGY_NAMES)}"
            )
        if self.first_mover not in FIRST_MOVER_POLICIES:
            raise ConfigurationError(
                f"Unknown first-mover policy {self.first_mover!r}; "
                f"choose one of {', '.join(FIRST_MOVER_POLICIES)}"
            )
        for line in self.winning_lines:
            if len(line) != 3 or any(p not in range(1, 10) for p in line):
                raise ConfigurationError(f"Winning line {line!r} must hold three positions in 1..9")


def _env_int(name: str) -> Optional[int]:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return None
    try:
        return int(raw)
    except ValueError:
        raise ConfigurationError(f"{name} must be an integer, got {raw!r}") from None


def _env_bool(name: str) -> Optional[bool]:
    raw = os.getenv(name)
    if raw is None:
        return None
    val = raw.strip().lower()
    if val in _TRUTHY:
        return True
    if val in _FALSY:
        return False
    raise ConfigurationError(f"{name} must be a boolean flag, got {raw!r}")


def load_config(**overrides: object) -> GameConfig:
    """Build a :class:`GameConfig` from env vars and explicit overrides.

    Overrides whose value is ``None`` are ignored so argparse namespaces can
    be passed through without filtering.
    """
    values: Dict[str, object] = {}
    env = {
        "win_score": _env_int("TTT_WIN_SCORE"),
        "strategy": os.getenv("TTT_STRATEGY") or None,
        "first_mover": os.getenv("TTT_FIRST_MOVER") or None,
        "rerandomize_first_mover": _env_bool("TTT_RERANDOMIZE_FIRST_MOVER"),
        "seed": _env_int("TTT_SEED"),
    }
    for key, val in env.items():
        if val is not None:
            values[key] = val
    unknown = set(overrides) - set(GameConfig.__dataclass_fields__)
    if unknown:
        raise ConfigurationError(f"Unknown config option(s): {', '.join(sorted(unknown))}")
    for key, val in overrides.items():
        if val is not None:
            values[key] = val
    cfg = GameConfig(**values)  # type: ignore[arg-type]
    logger.debug("resolved config %s", cfg)
    return cfg


def validate_marker(symbol: str) -> str:
    """Return ``symbol`` if it is a usable marker.

    One character that cannot be read as an empty cell: no digit, blank,
    ``.`` or ``_``.
    """
    if (
        not isinstance(symbol, str)
        or len(symbol) != 1
        or symbol.isspace()
        or symbol.isdigit()
        or symbol in EMPTY_CHARS
    ):
        raise ConfigurationError(
            f"Marker must be a single character other than a digit, blank, '.' or '_', got {symbol!r}"
        )
    return symbol


def opponent_marker_for(symbol: str) -> str:
    return "X" if symbol in O_LOOKALIKES else "O"


def validate_name(name: str) -> str:
    if not isinstance(name, str) or not name.strip():
        raise ConfigurationError("Player name must be a non-empty string")
    return name
