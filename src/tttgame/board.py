"""
The 3x3 board: nine positions (1-9, row-major), each empty or holding a marker.

Win and opportunity detection scan the winning lines in declared order
(rows, columns, diagonals); the first qualifying line wins ties.
"""
from __future__ import annotations

from typing import Dict, List, Optional, Sequence, Tuple

from .config import EMPTY_CHAR, EMPTY_CHARS, WINNING_LINES, Line
from .errors import InvalidMove

POSITIONS: Tuple[int, ...] = tuple(range(1, 10))
CENTER = 5

class Board:
    def __init__(self, winning_lines: Sequence[Line] = WINNING_LINES) -> None:
        self.winning_lines: Tuple[Line, ...] = tuple(tuple(line) for line in winning_lines)  # type: ignore[misc]
        self._cells: Dict[int, Optional[str]] = {}
        self.reset()

    @classmethod
    def from_string(cls, raw: str, winning_lines: Sequence[Line] = WINNING_LINES) -> "Board":
        """Parse 9 characters, row-major; ``.``, ``_``, space or a digit mean empty."""
        if len(raw) != 9:
            raise ValueError(f"Board string must have 9 characters, got {len(raw)}")
        board = cls(winning_lines)
        for pos, ch in zip(POSITIONS, raw):
            if ch in EMPTY_CHARS or ch.isdigit():
                continue
            board.place(pos, ch)
        return board

    def to_string(self) -> str:
        return "".join(m if m is not None else EMPTY_CHAR for m in self._cells.values())

    def __repr__(self) -> str:
        return f"Board({self.to_string()!r})"

    def __getitem__(self, position: int) -> Optional[str]:
        return self._cells[position]

    def cells(self) -> Dict[int, Optional[str]]:
        return dict(self._cells)

    def place(self, position: int, marker: str) -> None:
        if position not in self._cells:
            raise InvalidMove(position, "position must be in 1..9")
        if self._cells[position] is not None:
            raise InvalidMove(position, f"already marked by {self._cells[position]!r}")
        self._cells[position] = marker

    def unmarked_positions(self) -> List[int]:
        return [pos for pos, mark in self._cells.items() if mark is None]

    def is_full(self) -> bool:
        return not self.unmarked_positions()

    def marked_count(self, marker: str) -> int:
        return sum(1 for mark in self._cells.values() if mark == marker)

    def winning_marker(self) -> Optional[str]:
        for line in self.winning_lines:
            marks = [self._cells[p] for p in line]
            if marks[0] is not None and marks.count(marks[0]) == len(marks):
                return marks[0]
        return None

    def someone_won(self) -> bool:
        return self.winning_marker() is not None

    def opportunity_position(self, marker: str) -> Optional[int]:
        """Empty cell of the first line holding two ``marker`` cells and one empty cell."""
        for line in self.winning_lines:
            marks = [self._cells[p] for p in line]
            if marks.count(marker) == 2 and marks.count(None) == 1:
                return line[marks.index(None)]
        return None

    def has_opportunity(self, marker: str) -> bool:
        return self.opportunity_position(marker) is not None

    def reset(self) -> None:
        self._cells = {pos: None for pos in POSITIONS}
