"""
Serializable game snapshot.

The snapshot is what gets persisted and what a fresh session is restored
from. Stored totals are informational only: ``to_ledger`` re-derives them
from the score sequences, and players saved without a color get the palette
color for their registration index.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from pydantic import BaseModel, ConfigDict, Field

from scoreboard.logic.enums import GamePhase
from scoreboard.logic.exceptions import SnapshotError
from scoreboard.logic.ledger import palette_color
from scoreboard.logic.state import Player, ScoreLedger

if TYPE_CHECKING:
    from collections.abc import Sequence


class SnapshotPlayer(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str = Field(min_length=1)
    name: str = Field(min_length=1)
    scores: tuple[int, ...] = ()
    total: int = 0
    color: str | None = None


class GameSnapshot(BaseModel):
    """Full externally visible state: players with totals, round counter and phase."""

    model_config = ConfigDict(frozen=True)

    players: tuple[SnapshotPlayer, ...] = ()
    round: int = Field(default=1, ge=1)
    status: GamePhase = GamePhase.SETUP

    @classmethod
    def from_ledger(cls, ledger: ScoreLedger, phase: GamePhase) -> GameSnapshot:
        return cls(
            players=tuple(
                SnapshotPlayer(id=p.id, name=p.name, scores=p.scores, total=p.total, color=p.color)
                for p in ledger.players
            ),
            round=ledger.round_number,
            status=phase,
        )

    def to_ledger(self, palette: Sequence[str]) -> ScoreLedger:
        """
        Rebuild the ledger this snapshot describes.

        Raises SnapshotError when the stored data could not have been produced
        by a real game (duplicate ids, uneven score sequences, a round counter
        that disagrees with them, or a phase inconsistent with the players).
        """
        ids = [p.id for p in self.players]
        if len(set(ids)) != len(ids):
            raise SnapshotError("Duplicate player id in snapshot")

        expected_length = self.round - 1
        for p in self.players:
            if len(p.scores) != expected_length:
                raise SnapshotError(
                    f"Player {p.id} has {len(p.scores)} scores, expected {expected_length} for round {self.round}"
                )

        if self.status == GamePhase.SETUP and self.round != 1:
            raise SnapshotError(f"Setup snapshot must be at round 1, got {self.round}")
        if self.status != GamePhase.SETUP and not self.players:
            raise SnapshotError(f"{self.status} snapshot has no players")

        players = tuple(
            Player(
                id=p.id,
                name=p.name,
                scores=p.scores,
                color=p.color or palette_color(index, palette),
            )
            for index, p in enumerate(self.players)
        )
        return ScoreLedger(players=players, round_number=self.round)
