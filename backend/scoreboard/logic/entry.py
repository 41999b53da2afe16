"""Staged score entry for the round currently being keyed in."""

from __future__ import annotations

from dataclasses import dataclass
from dataclasses import field as dataclass_field
from typing import TYPE_CHECKING

from scoreboard.logic.ledger import EMPTY_SCORE

if TYPE_CHECKING:
    from collections.abc import Sequence

_DIGITS = frozenset("0123456789")


@dataclass
class StagedEntry:
    """Draft scores for one round, keyed by player id, plus the focused player.

    Values stay as strings so digits can be appended one at a time. Every
    method returns True when it changed something and False when the input was
    ignored. Nothing here touches the ledger; the controller commits or
    discards the whole buffer.
    """

    order: tuple[str, ...]
    values: dict[str, str] = dataclass_field(default_factory=dict)
    focused_player_id: str | None = None
    max_length: int = 5

    @classmethod
    def open(cls, player_ids: Sequence[str], max_length: int = 5) -> StagedEntry:
        """Start a buffer with every player empty and focus on the first one."""
        order = tuple(player_ids)
        return cls(
            order=order,
            values=dict.fromkeys(order, EMPTY_SCORE),
            focused_player_id=order[0] if order else None,
            max_length=max_length,
        )

    @property
    def focused_value(self) -> str | None:
        if self.focused_player_id is None:
            return None
        return self.values[self.focused_player_id]

    def focus(self, player_id: str) -> bool:
        if player_id not in self.values:
            return False
        self.focused_player_id = player_id
        return True

    def digit(self, digit: str) -> bool:
        """Key a digit into the focused value.

        An empty value or a lone "0" is replaced instead of extended, so
        entries never carry leading zeros. Digits past ``max_length`` are dropped.
        """
        if self.focused_player_id is None or digit not in _DIGITS:
            return False
        current = self.values[self.focused_player_id]
        if current in (EMPTY_SCORE, "0"):
            self.values[self.focused_player_id] = digit
            return True
        if len(current) >= self.max_length:
            return False
        self.values[self.focused_player_id] = current + digit
        return True

    def clear(self) -> bool:
        if self.focused_player_id is None:
            return False
        self.values[self.focused_player_id] = EMPTY_SCORE
        return True

    def advance(self) -> bool:
        """Move focus to the next player. Stays put on the last one."""
        if self.focused_player_id is None:
            return False
        index = self.order.index(self.focused_player_id)
        if index >= len(self.order) - 1:
            return False
        self.focused_player_id = self.order[index + 1]
        return True
