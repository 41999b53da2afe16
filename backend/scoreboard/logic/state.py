"""
Ledger state models for the scorekeeper.

Both models are frozen: every change produces a new object through
``model_copy`` so a round commit applies to all players at once or not at all.
"""

from pydantic import BaseModel, ConfigDict, computed_field


class Player(BaseModel):
    """A registered player and the scores committed for them, one per round."""

    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    color: str
    scores: tuple[int, ...] = ()

    @computed_field  # type: ignore[prop-decorator]
    @property
    def total(self) -> int:
        return sum(self.scores)


class ScoreLedger(BaseModel):
    """
    Authoritative record of players, per-round scores and the round counter.

    ``round_number`` starts at 1 and is always one more than the length of
    every player's score sequence.
    """

    model_config = ConfigDict(frozen=True)

    players: tuple[Player, ...] = ()
    round_number: int = 1

    def get_player(self, player_id: str) -> Player | None:
        return next((p for p in self.players if p.id == player_id), None)

    @property
    def player_ids(self) -> tuple[str, ...]:
        return tuple(p.id for p in self.players)
