"""
Game controller: the phase state machine around the score ledger.

One ``GameController`` is owned by one session. Every operation runs to
completion synchronously and returns True when it was accepted or False
when its guard rejected it. Rejections are silent no-ops: invalid input
never raises and never leaves the ledger half-updated.

Phases::

    Setup --start_game--> Active --commit (goal reached)--> Finished
      ^                      |                                  |
      +-------- reset -------+------------- reset --------------+

While ``Active``, round entry may be open (a ``StagedEntry`` exists). Entry
operations are only accepted while it is open, and ``commit`` is the only
way the round counter moves.
"""

from __future__ import annotations

from typing import TYPE_CHECKING
from uuid import uuid4

import structlog
from pydantic import ValidationError

from scoreboard.logic.entry import StagedEntry
from scoreboard.logic.enums import GameAction, GamePhase, NumpadKey
from scoreboard.logic.exceptions import SnapshotError
from scoreboard.logic.ledger import (
    add_player,
    leaders,
    ranking,
    record_round,
    threshold_reached,
)
from scoreboard.logic.settings import GameSettings
from scoreboard.logic.snapshot import GameSnapshot
from scoreboard.logic.state import ScoreLedger
from scoreboard.logic.types import EntryView, GameView, PlayerView, RankingEntry

if TYPE_CHECKING:
    from collections.abc import Callable

    from shared.storage import SnapshotStorage

logger = structlog.get_logger()

# Argument each by-name action needs; actions not listed take none.
_ACTION_ARGUMENT: dict[GameAction, str] = {
    GameAction.ADD_PLAYER: "name",
    GameAction.FOCUS: "player_id",
    GameAction.DIGIT: "digit",
    GameAction.PRESS_KEY: "key",
}


class GameController:
    """Session-owned state machine driving player registration, rounds and completion."""

    def __init__(
        self,
        settings: GameSettings | None = None,
        storage: SnapshotStorage | None = None,
        *,
        ledger: ScoreLedger | None = None,
        phase: GamePhase = GamePhase.SETUP,
    ) -> None:
        self._settings = settings or GameSettings()
        self._storage = storage
        self._ledger = ledger or ScoreLedger()
        self._phase = phase
        self._entry: StagedEntry | None = None
        self._log = logger.bind(session_id=uuid4().hex[:8])

    @classmethod
    def restore(cls, storage: SnapshotStorage, settings: GameSettings | None = None) -> GameController:
        """
        Build a controller from the stored snapshot, or a fresh one at Setup.

        A missing snapshot means no prior game. A stored snapshot that fails
        validation is logged and ignored the same way.
        """
        settings = settings or GameSettings()
        data = storage.load()
        if data is None:
            return cls(settings, storage)

        try:
            snapshot = GameSnapshot.model_validate(data)
            ledger = snapshot.to_ledger(settings.palette)
        except (ValidationError, SnapshotError):
            logger.warning("discarding invalid snapshot, starting fresh", exc_info=True)
            return cls(settings, storage)

        controller = cls(settings, storage, ledger=ledger, phase=snapshot.status)
        controller._log.info(
            "restored game",
            phase=snapshot.status,
            round_number=ledger.round_number,
            players=len(ledger.players),
        )
        return controller

    @property
    def settings(self) -> GameSettings:
        return self._settings

    @property
    def phase(self) -> GamePhase:
        return self._phase

    @property
    def ledger(self) -> ScoreLedger:
        return self._ledger

    @property
    def entry(self) -> StagedEntry | None:
        return self._entry

    @property
    def is_entry_open(self) -> bool:
        return self._entry is not None

    @property
    def can_start(self) -> bool:
        return self._phase == GamePhase.SETUP and bool(self._ledger.players)

    # --- Setup ---

    def add_player(self, name: str) -> bool:
        if self._phase != GamePhase.SETUP:
            return False
        ledger = add_player(self._ledger, name, self._settings.palette)
        if ledger is self._ledger:
            return False
        self._ledger = ledger
        player = ledger.players[-1]
        self._log.info("player added", player_id=player.id, name=player.name, color=player.color)
        self._save()
        return True

    def start_game(self) -> bool:
        if not self.can_start:
            return False
        self._phase = GamePhase.ACTIVE
        self._log.info("game started", players=len(self._ledger.players))
        self._save()
        return True

    # --- Round entry ---

    def open_round_entry(self) -> bool:
        """Open (or restart) entry for the current round with every player empty."""
        if self._phase != GamePhase.ACTIVE:
            return False
        self._entry = StagedEntry.open(self._ledger.player_ids, self._settings.max_entry_length)
        return True

    def focus(self, player_id: str) -> bool:
        return self._entry is not None and self._entry.focus(player_id)

    def digit(self, digit: str) -> bool:
        return self._entry is not None and self._entry.digit(digit)

    def clear(self) -> bool:
        return self._entry is not None and self._entry.clear()

    def confirm_and_advance(self) -> bool:
        return self._entry is not None and self._entry.advance()

    def press_key(self, key: str) -> bool:
        """Handle one numpad key: "OK" advances, "C" clears, digits are keyed in."""
        if key == NumpadKey.OK:
            return self.confirm_and_advance()
        if key == NumpadKey.CLEAR:
            return self.clear()
        return self.digit(key)

    def cancel(self) -> bool:
        if self._entry is None:
            return False
        self._entry = None
        return True

    def commit(self) -> bool:
        """
        Commit the staged round to the ledger and check the goal.

        The transition to Finished happens here, atomically with the commit,
        regardless of how long the presentation takes to reveal it.
        """
        if self._entry is None:
            return False
        staged = self._entry.values
        self._entry = None

        committed_round = self._ledger.round_number
        self._ledger = record_round(self._ledger, staged)
        self._log.info(
            "round committed",
            round_number=committed_round,
            scores={p.id: p.scores[-1] for p in self._ledger.players},
        )

        if threshold_reached(self._ledger, self._settings.goal_score):
            self._phase = GamePhase.FINISHED
            self._log.info(
                "game finished",
                goal_score=self._settings.goal_score,
                winners=[p.id for p in leaders(self._ledger)],
            )
        self._save()
        return True

    # --- Lifecycle ---

    def reset(self) -> bool:
        """Discard the whole game, including the stored snapshot, and return to Setup."""
        self._ledger = ScoreLedger()
        self._phase = GamePhase.SETUP
        self._entry = None
        self._log.info("game reset")
        if self._storage is not None:
            try:
                self._storage.clear()
            except OSError:
                self._log.exception("failed to clear snapshot")
        return True

    def dispatch(self, action: GameAction, **data: str) -> bool:
        """Invoke an operation by name. A missing required argument is a rejection."""
        handlers: dict[GameAction, Callable[..., bool]] = {
            GameAction.ADD_PLAYER: self.add_player,
            GameAction.START_GAME: self.start_game,
            GameAction.OPEN_ROUND_ENTRY: self.open_round_entry,
            GameAction.FOCUS: self.focus,
            GameAction.DIGIT: self.digit,
            GameAction.CLEAR: self.clear,
            GameAction.CONFIRM_AND_ADVANCE: self.confirm_and_advance,
            GameAction.PRESS_KEY: self.press_key,
            GameAction.CANCEL: self.cancel,
            GameAction.COMMIT: self.commit,
            GameAction.RESET: self.reset,
        }
        handler = handlers[action]
        argument = _ACTION_ARGUMENT.get(action)
        if argument is None:
            return handler()
        value = data.get(argument)
        if value is None:
            self._log.debug("action missing argument", action=action, argument=argument)
            return False
        return handler(value)

    # --- Output ---

    def snapshot(self) -> GameSnapshot:
        return GameSnapshot.from_ledger(self._ledger, self._phase)

    def view(self) -> GameView:
        visual_max = self._settings.visual_max_score
        players = tuple(
            PlayerView(
                id=p.id,
                name=p.name,
                color=p.color,
                scores=p.scores,
                total=p.total,
                progress=max(0.0, min(p.total / visual_max, 1.0)),
            )
            for p in self._ledger.players
        )
        ranked = tuple(
            RankingEntry(rank=index + 1, player_id=p.id, name=p.name, color=p.color, total=p.total)
            for index, p in enumerate(ranking(self._ledger))
        )
        entry = None
        if self._entry is not None:
            entry = EntryView(values=dict(self._entry.values), focused_player_id=self._entry.focused_player_id)
        return GameView(
            phase=self._phase,
            round_number=self._ledger.round_number,
            goal_score=self._settings.goal_score,
            can_start=self.can_start,
            players=players,
            ranking=ranked,
            leader_ids=tuple(p.id for p in leaders(self._ledger)),
            entry=entry,
        )

    def _save(self) -> None:
        """Persist the current snapshot. Failures are logged, never raised into gameplay."""
        if self._storage is None:
            return
        try:
            self._storage.save(self.snapshot().model_dump(mode="json"))
        except OSError:
            self._log.exception("failed to save snapshot")
