"""Raw key presses -> Intents."""

from __future__ import annotations

import logging

from lightcycle.core.enums import Intent
from lightcycle.core.models import EAST, NORTH, SOUTH, WEST, Vector2

logger = logging.getLogger(__name__)

KEY_BINDINGS: dict[str, Intent] = {
    # Arrows
    "ArrowUp": Intent.UP,
    "ArrowDown": Intent.DOWN,
    "ArrowLeft": Intent.LEFT,
    "ArrowRight": Intent.RIGHT,
    # WASD
    "w": Intent.UP,
    "s": Intent.DOWN,
    "a": Intent.LEFT,
    "d": Intent.RIGHT,
    # vi
    "k": Intent.UP,
    "j": Intent.DOWN,
    "h": Intent.LEFT,
    "l": Intent.RIGHT,
    # Kill switch
    "q": Intent.QUIT,
    "Escape": Intent.QUIT,
    "Ctrl+C": Intent.QUIT,
}

INTENT_HEADINGS: dict[Intent, Vector2] = {
    Intent.UP: NORTH,
    Intent.DOWN: SOUTH,
    Intent.LEFT: WEST,
    Intent.RIGHT: EAST,
}


class InputMapper:
    """Translates host key names. Letter keys are case-insensitive."""

    __slots__ = ("_bindings",)

    def __init__(self, bindings: dict[str, Intent] | None = None) -> None:
        self._bindings = dict(bindings or KEY_BINDINGS)

    def map_key(self, key: str) -> Intent | None:
        intent = self._bindings.get(key)
        if intent is None and len(key) == 1:
            intent = self._bindings.get(key.lower())
        if intent is None:
            logger.debug("Ignoring unbound key %r", key)
        return intent

    def map_keys(self, keys: list[str]) -> list[Intent]:
        return [i for i in (self.map_key(k) for k in keys) if i is not None]


def heading_for(intent: Intent) -> Vector2 | None:
    """The absolute heading a direction intent asks for (None for QUIT)."""
    return INTENT_HEADINGS.get(intent)
