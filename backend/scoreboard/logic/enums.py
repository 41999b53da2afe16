"""
String enum definitions for scorekeeping concepts.
"""

from enum import StrEnum


class GamePhase(StrEnum):
    """Phase of a scorekeeping session. Values are the persisted snapshot status."""

    SETUP = "Setup"
    ACTIVE = "Active"
    FINISHED = "Finished"


class GameAction(StrEnum):
    """Controller operations a presentation layer may invoke by name."""

    ADD_PLAYER = "add_player"
    START_GAME = "start_game"
    OPEN_ROUND_ENTRY = "open_round_entry"
    FOCUS = "focus"
    DIGIT = "digit"
    CLEAR = "clear"
    CONFIRM_AND_ADVANCE = "confirm_and_advance"
    PRESS_KEY = "press_key"
    CANCEL = "cancel"
    COMMIT = "commit"
    RESET = "reset"


class NumpadKey(StrEnum):
    """Non-digit keys on the score entry numpad."""

    OK = "OK"
    CLEAR = "C"
