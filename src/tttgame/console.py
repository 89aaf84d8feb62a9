"""
Console I/O collaborator.

Owns every prompt and re-prompt loop so the engine only ever sees validated
values: a cell from the offered positions, a yes/no answer, non-empty text.
"""
from __future__ import annotations

import sys
from typing import Dict, Iterable, Mapping, Optional, Sequence, TextIO, Tuple, TypeVar

from .config import validate_marker
from .errors import ConfigurationError

T = TypeVar("T")

DIVIDER = "-" * 42
YES_NO: Dict[str, bool] = {"y": True, "yes": True, "n": False, "no": False}


def joinor(items: Sequence[object], delimiter: str = ", ", word: str = "or") -> str:
    """``[1, 2, 3]`` -> ``"1, 2, or 3"``."""
    keys = [str(k) for k in items]
    if not keys:
        return ""
    if len(keys) == 1:
        return keys[0]
    if len(keys) == 2:
        return f"{keys[0]} {word} {keys[1]}"
    return delimiter.join(keys[:-1]) + f"{delimiter}{word} {keys[-1]}"


def _cell(pos: int, mark: Optional[str]) -> str:
    # empty cells show their position number in brackets
    return f"[{pos}]" if mark is None else f" {mark} "


def render_board(cells: Mapping[int, Optional[str]] | Iterable[Tuple[int, Optional[str]]]) -> str:
    grid = dict(cells)
    rows = []
    for start in (1, 4, 7):
        rows.append("     |     |")
        rows.append(" " + " | ".join(_cell(p, grid[p]) for p in range(start, start + 3)))
        rows.append("     |     |")
    sep = "-----|-----|-----"
    return "\n".join(rows[0:3] + [sep] + rows[3:6] + [sep] + rows[6:9])


class ConsoleIO:
    def __init__(self, stdin: Optional[TextIO] = None, stdout: Optional[TextIO] = None) -> None:
        self.stdin = stdin if stdin is not None else sys.stdin
        self.stdout = stdout if stdout is not None else sys.stdout

    def show(self, text: str = "") -> None:
        print(text, file=self.stdout)

    def clear(self) -> None:
        if self.stdout.isatty():
            self.stdout.write("\033[2J\033[H")

    def _read(self, prompt: str) -> str:
        if prompt:
            self.show(prompt)
        line = self.stdin.readline()
        if line == "":
            raise EOFError("input closed")
        return line.rstrip("\r\n")

    def request_cell_choice(self, valid_positions: Sequence[int]) -> int:
        prompt = f"Choose a square: {joinor(valid_positions)}"
        while True:
            raw = self._read(prompt).strip()
            if raw.isdigit() and int(raw) in valid_positions:
                return int(raw)
            prompt = "Sorry, that's not a valid choice."

    def request_yes_no(self, prompt: str) -> bool:
        while True:
            raw = self._read(f"{prompt} (y/n)").strip().lower()
            if raw in YES_NO:
                return YES_NO[raw]
            self.show("Sorry, must be y or n.")

    def request_free_text(self, prompt: str, non_empty: bool = True) -> str:
        while True:
            raw = self._read(prompt)
            if raw.strip() or not non_empty:
                return raw.strip()
            self.show("Sorry, must enter a value.")

    def request_option(self, prompt: str, options: Mapping[str, T]) -> T:
        while True:
            raw = self._read(prompt).strip().lower()
            if raw in options:
                return options[raw]
            self.show(f"Input seems to be incorrect. Choose {joinor(list(options))}.")

    def request_marker(self) -> str:
        prompt = 'Please choose the marker you would like to use (one character; no digits, blanks, "." or "_"):'
        while True:
            raw = self._read(prompt).strip()
            try:
                return validate_marker(raw)
            except ConfigurationError:
                self.show("Sorry, that's not a valid choice.")

    def pause(self, prompt: str = "Press Enter to continue.") -> None:
        self._read(prompt)
