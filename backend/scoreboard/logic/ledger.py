"""
Score ledger operations.

Pure functions over the frozen ``ScoreLedger``. None of them mutate their
input; each returns a new ledger (or the same one when the call is a no-op).
"""

from __future__ import annotations

from typing import TYPE_CHECKING
from uuid import uuid4

from scoreboard.logic.state import Player, ScoreLedger

if TYPE_CHECKING:
    from collections.abc import Mapping, Sequence

# Staged value meaning "no score entered yet"; commits as 0.
EMPTY_SCORE = ""


def palette_color(index: int, palette: Sequence[str]) -> str:
    """Return the color for the player registered at ``index``."""
    return palette[index % len(palette)]


def coerce_score(value: str | int | None) -> int:
    """
    Convert a staged score to an integer.

    Missing values, the empty sentinel and anything that does not parse as a
    base-10 integer all become 0.
    """
    if value is None:
        return 0
    if isinstance(value, int):
        return value
    try:
        return int(value, 10)
    except ValueError:
        return 0


def add_player(ledger: ScoreLedger, name: str, palette: Sequence[str]) -> ScoreLedger:
    """
    Return a ledger with a new player appended.

    The name is trimmed; a blank name leaves the ledger unchanged.
    Duplicate display names are allowed since players are keyed by id.
    """
    trimmed = name.strip()
    if not trimmed:
        return ledger

    player = Player(
        id=uuid4().hex,
        name=trimmed,
        color=palette_color(len(ledger.players), palette),
    )
    return ledger.model_copy(update={"players": (*ledger.players, player)})


def record_round(ledger: ScoreLedger, scores_by_player_id: Mapping[str, str | int | None]) -> ScoreLedger:
    """
    Commit one round for every player and advance the round counter.

    Players absent from the mapping score 0. Entries for unknown ids are ignored.
    """
    players = tuple(
        p.model_copy(update={"scores": (*p.scores, coerce_score(scores_by_player_id.get(p.id)))})
        for p in ledger.players
    )
    return ledger.model_copy(update={"players": players, "round_number": ledger.round_number + 1})


def threshold_reached(ledger: ScoreLedger, goal: int) -> bool:
    return any(p.total >= goal for p in ledger.players)


def ranking(ledger: ScoreLedger) -> list[Player]:
    """Players by descending total; ties keep registration order."""
    # sorted() is stable and reverse=True preserves the order of equal keys
    return sorted(ledger.players, key=lambda p: p.total, reverse=True)


def leaders(ledger: ScoreLedger) -> list[Player]:
    """All players sharing the highest total, in registration order."""
    if not ledger.players:
        return []
    top = max(p.total for p in ledger.players)
    return [p for p in ledger.players if p.total == top]
