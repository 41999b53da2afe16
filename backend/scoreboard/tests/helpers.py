"""State builders shared by scoreboard tests."""

from __future__ import annotations

from typing import TYPE_CHECKING

from scoreboard.logic.settings import DEFAULT_PALETTE
from scoreboard.logic.state import Player, ScoreLedger

if TYPE_CHECKING:
    from collections.abc import Sequence

    from scoreboard.logic.controller import GameController


def create_player(
    index: int = 0,
    *,
    player_id: str | None = None,
    name: str | None = None,
    scores: Sequence[int] = (),
    color: str | None = None,
) -> Player:
    """Create a Player as if registered at ``index``."""
    return Player(
        id=player_id if player_id is not None else f"p{index}",
        name=name if name is not None else f"Player{index}",
        scores=tuple(scores),
        color=color if color is not None else DEFAULT_PALETTE[index % len(DEFAULT_PALETTE)],
    )


def create_ledger(*score_rows: Sequence[int], names: Sequence[str] | None = None) -> ScoreLedger:
    """Create a ledger with one player per score row. Rows must have equal length."""
    players = tuple(
        create_player(i, name=names[i] if names is not None else None, scores=row) for i, row in enumerate(score_rows)
    )
    rounds_played = len(score_rows[0]) if score_rows else 0
    return ScoreLedger(players=players, round_number=rounds_played + 1)


def key_in(controller: GameController, value: str) -> None:
    """Key a staged value digit by digit for the focused player."""
    for char in value:
        controller.digit(char)


def play_round(controller: GameController, scores: Sequence[str]) -> None:
    """Open entry, stage one value per player in registration order, and commit."""
    controller.open_round_entry()
    for index, value in enumerate(scores):
        if index:
            controller.confirm_and_advance()
        key_in(controller, value)
    controller.commit()
