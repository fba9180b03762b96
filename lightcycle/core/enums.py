"""Enumerations used throughout the engine."""

from __future__ import annotations

from enum import IntEnum, unique


@unique
class DecisionMode(IntEnum):
    """Which heuristic set and weight table the decision engine consults."""

    STANDARD = 0
    PRECISION = 1


@unique
class Turn(IntEnum):
    """The three legal relative moves. Order is the tie-break order."""

    STRAIGHT = 0
    RIGHT = 1
    LEFT = 2


@unique
class Domain(IntEnum):
    """RNG domains for deterministic randomness isolation."""

    PERSONALITY = 0
    MOVE_SELECTION = 1
    QUOTE = 2


@unique
class Intent(IntEnum):
    """Host key presses after mapping."""

    UP = 0
    DOWN = 1
    LEFT = 2
    RIGHT = 3
    QUIT = 4


@unique
class EndReason(IntEnum):
    """Why a match stopped."""

    RUNNING = 0
    LAST_STANDING = 1   # Alive count dropped to 0 or 1
    TICK_CAP = 2
    ABORTED = 3         # Kill switch from the host
