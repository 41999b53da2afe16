"""
Read-only projection models handed to the presentation layer.
"""

from pydantic import BaseModel, ConfigDict

from scoreboard.logic.enums import GamePhase


class PlayerView(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    color: str
    scores: tuple[int, ...]
    total: int
    progress: float  # total / visual max, clamped to [0, 1] for bar rendering


class RankingEntry(BaseModel):
    model_config = ConfigDict(frozen=True)

    rank: int  # 1-based position in the ranking
    player_id: str
    name: str
    color: str
    total: int


class EntryView(BaseModel):
    """Staged scores while round entry is open. Empty strings mean nothing entered."""

    model_config = ConfigDict(frozen=True)

    values: dict[str, str]
    focused_player_id: str | None


class GameView(BaseModel):
    """Everything a presentation layer needs to render the current session."""

    model_config = ConfigDict(frozen=True)

    phase: GamePhase
    round_number: int
    goal_score: int
    can_start: bool
    players: tuple[PlayerView, ...]
    ranking: tuple[RankingEntry, ...]
    leader_ids: tuple[str, ...]
    entry: EntryView | None = None
