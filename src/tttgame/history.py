"""
Append-only ledger of round outcomes, grouped by match number.

Match and round numbers are taken as given; ordering follows insertion.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Iterator, List, Optional, Tuple

from .players import Player, PlayerSnapshot


@dataclass(frozen=True)
class RoundRecord:
    match_number: int
    round_number: int
    player1: PlayerSnapshot
    player2: PlayerSnapshot
    winner_marker: Optional[str] = None

    @property
    def winner(self) -> Optional[PlayerSnapshot]:
        for snap in (self.player1, self.player2):
            if snap.marker == self.winner_marker:
                return snap
        return None

    @property
    def summary(self) -> str:
        p1, p2 = self.player1, self.player2
        head = (
            f"Round {self.round_number}: Score {p1.score} - {p2.score}. "
            f"{p1.name} played {p1.marker}, {p2.name} played {p2.marker}."
        )
        w = self.winner
        return f"{head} {w.name} won." if w is not None else f"{head} It's a tie."

    def __str__(self) -> str:
        return self.summary


class History:
    def __init__(self) -> None:
        self._records: Dict[int, List[RoundRecord]] = {}

    def record_round(
        self,
        match_number: int,
        round_number: int,
        player1: Player | PlayerSnapshot,
        player2: Player | PlayerSnapshot,
        winner_marker: Optional[str] = None,
    ) -> RoundRecord:
        s1 = player1.snapshot() if isinstance(player1, Player) else player1
        s2 = player2.snapshot() if isinstance(player2, Player) else player2
        rec = RoundRecord(match_number, round_number, s1, s2, winner_marker)
        self._records.setdefault(match_number, []).append(rec)
        return rec

    def all_records(self) -> Dict[int, Tuple[RoundRecord, ...]]:
        return {num: tuple(recs) for num, recs in self._records.items()}

    def rounds_for(self, match_number: int) -> Tuple[RoundRecord, ...]:
        return tuple(self._records.get(match_number, ()))

    def match_count(self) -> int:
        return len(self._records)

    def __len__(self) -> int:
        return sum(len(recs) for recs in self._records.values())

    def __iter__(self) -> Iterator[RoundRecord]:
        for recs in self._records.values():
            yield from recs

    def replay(self) -> Iterator[str]:
        """Display lines: a ``Match N`` header followed by that match's rounds."""
        for num, recs in self._records.items():
            yield f"Match {num}"
            for rec in recs:
                yield rec.summary

    def to_frame(self) -> Any:
        """One row per round as a ``pandas.DataFrame`` (requires pandas)."""
        import pandas as pd  # type: ignore

        columns = [
            "match_number", "round_number",
            "player1_name", "player1_marker", "player1_score",
            "player2_name", "player2_marker", "player2_score",
            "winner_marker",
        ]
        rows = [
            {
                "match_number": r.match_number,
                "round_number": r.round_number,
                "player1_name": r.player1.name,
                "player1_marker": r.player1.marker,
                "player1_score": r.player1.score,
                "player2_name": r.player2.name,
                "player2_marker": r.player2.marker,
                "player2_score": r.player2.score,
                "winner_marker": r.winner_marker,
            }
            for r in self
        ]
        return pd.DataFrame(rows, columns=columns)
