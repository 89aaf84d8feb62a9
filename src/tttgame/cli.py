from __future__ import annotations

import argparse
import logging
from typing import Optional

import numpy as np

from .board import Board
from .config import FIRST_MOVER_POLICIES, STRATEGY_NAMES, load_config, validate_marker
from .console import ConsoleIO, render_board
from .errors import ConfigurationError, InvalidMove
from .session import run_session
from .tactics import get_strategy


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="tttgame", description="Tic-tac-toe match engine")
    sub = p.add_subparsers(dest="cmd")
    p.add_argument("--verbose", "-v", action="store_true", help="Enable verbose logging")
    p.add_argument("--version", action="store_true", help="Print version and exit")
    p.add_argument(
        "--info",
        action="store_true",
        help="Print environment and dependency info and exit",
    )
    p.add_argument("--seed", type=int, default=None, help="Seed for the computer's random choices")

    p_play = sub.add_parser("play", help="Play against the computer in the console")
    p_play.add_argument(
        "--win-score", type=int, default=None, help="Round wins needed to take a match (default: 2)"
    )
    p_play.add_argument(
        "--strategy", choices=STRATEGY_NAMES, default=None, help="Computer strategy (default: heuristic)"
    )
    p_play.add_argument(
        "--first-mover",
        choices=FIRST_MOVER_POLICIES,
        default=None,
        help="Who moves first: player1 (you), player2 (computer), random, or ask (default)",
    )
    p_play.add_argument(
        "--rerandomize-first-mover",
        action="store_true",
        default=None,
        help="Re-apply the first-mover policy at the start of every new match",
    )

    p_sug = sub.add_parser("suggest", help="Show the computer's move for a board")
    p_sug.add_argument("--board", required=True, help="Board string, e.g. XX.O..... ('.' = empty)")
    p_sug.add_argument("--marker", default="O", help="Marker of the side to move (default: O)")
    p_sug.add_argument("--opponent", default="X", help="Opponent marker (default: X)")
    p_sug.add_argument("--strategy", choices=STRATEGY_NAMES, default="heuristic")

    p_win = sub.add_parser("winner", help="Report the winner (if any) of a board")
    p_win.add_argument("--board", required=True, help="Board string, e.g. XXXOO....")
    p_win.add_argument("--show", action="store_true", help="Also draw the board")

    return p


def _print_info() -> None:
    import importlib.util
    import platform
    import sys

    print(f"python={sys.version.split()[0]} platform={platform.platform()}")
    for pkg in ["numpy", "pandas"]:
        spec = importlib.util.find_spec(pkg)
        if spec is None:
            print(f"{pkg}=<not installed>")
        else:
            mod = __import__(pkg)
            ver = getattr(mod, "__version__", "?")
            print(f"{pkg}={ver}")


def _parse_board(raw: str) -> Optional[Board]:
    try:
        return Board.from_string(raw)
    except (ValueError, InvalidMove) as exc:
        logging.error("Invalid board string: %s", exc)
        return None


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    ns = parser.parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if getattr(ns, "verbose", False) else logging.INFO,
                        format="[%(levelname)s] %(message)s")

    if ns.version:
        try:
            from importlib.metadata import version as _ver

            print(_ver("tttgame"))
        except Exception:
            print("unknown")
        return 0
    if ns.info:
        _print_info()
        return 0

    if ns.cmd == "play":
        try:
            cfg = load_config(
                win_score=ns.win_score,
                strategy=ns.strategy,
                first_mover=ns.first_mover,
                rerandomize_first_mover=ns.rerandomize_first_mover,
                seed=ns.seed,
            )
        except ConfigurationError as exc:
            logging.error("%s", exc)
            return 2
        try:
            run_session(ConsoleIO(), cfg)
        except (EOFError, KeyboardInterrupt):
            logging.warning("Input closed; leaving the game.")
            return 1
        return 0

    if ns.cmd == "suggest":
        board = _parse_board(ns.board)
        if board is None:
            return 2
        try:
            marker = validate_marker(ns.marker)
            opponent = validate_marker(ns.opponent)
        except ConfigurationError as exc:
            logging.error("%s", exc)
            return 2
        if marker == opponent:
            logging.error("Marker and opponent marker must differ.")
            return 2
        if board.someone_won() or board.is_full():
            logging.error("Board is already decided; no move to suggest.")
            return 2
        strategy = get_strategy(ns.strategy)
        move = strategy(board, marker, opponent, np.random.default_rng(ns.seed))
        logging.info("to_move=%s move=%d unmarked=%s", marker, move, board.unmarked_positions())
        return 0

    if ns.cmd == "winner":
        board = _parse_board(ns.board)
        if board is None:
            return 2
        if ns.show:
            print(render_board(board.cells()))
        logging.info(
            "winner=%s full=%s unmarked=%s",
            board.winning_marker() or "none",
            board.is_full(),
            board.unmarked_positions(),
        )
        return 0

    parser.print_help()
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
