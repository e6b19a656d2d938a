"""
Battle exceptions and failure codes.

Action-level failures are reported as ``FailureReason`` values on the
result, never raised. Exceptions are reserved for misuse at setup time.
"""

from enum import Enum


class BattleError(Exception):
    """Base class for battle errors."""


class BattleSetupError(BattleError):
    """Raised when a battle cannot be started with the given rosters."""


class FailureReason(Enum):
    """Why an action was rejected."""
    NOT_YOUR_TURN = "not_your_turn"
    NOT_PLAYER_PHASE = "not_player_phase"
    DEAD_ACTOR = "dead_actor"
    DEAD_TARGET = "dead_target"
    INVALID_TARGET = "invalid_target"
    NOT_ENOUGH_MP = "not_enough_mp"
    NO_TARGETS = "no_targets"
    UNKNOWN_SKILL = "unknown_skill"
    UNKNOWN_ITEM = "unknown_item"
    CANNOT_FLEE = "cannot_flee"
    BATTLE_OVER = "battle_over"
