"""
Game-mode state machine.

Modes:
    NAME_ENTRY: waiting for the player to confirm a display name
    COUNTDOWN:  3-2-1 before the run starts
    PLAYING:    simulation running
    PAUSED:     simulation and cosmetics frozen
    GAME_OVER:  run ended (bounds or obstacle), waiting for restart
"""

from enum import Enum
from typing import Callable
import logging

logger = logging.getLogger(__name__)


class GameMode(Enum):
    """Game modes."""
    NAME_ENTRY = "nameEntry"
    COUNTDOWN = "countdown"
    PLAYING = "playing"
    PAUSED = "paused"
    GAME_OVER = "gameOver"


Listener = Callable[[GameMode, GameMode], None]


class ModeMachine:
    """
    Holds the current mode and refuses transitions that are not in the table.
    Listeners are told about every accepted transition.
    """

    VALID_TRANSITIONS: list[tuple[GameMode, GameMode]] = [
        (GameMode.NAME_ENTRY, GameMode.COUNTDOWN),
        (GameMode.COUNTDOWN, GameMode.PLAYING),
        (GameMode.PLAYING, GameMode.PAUSED),
        (GameMode.PAUSED, GameMode.PLAYING),
        (GameMode.PLAYING, GameMode.GAME_OVER),
        (GameMode.GAME_OVER, GameMode.COUNTDOWN),  # restart
    ]

    def __init__(self, initial: GameMode = GameMode.NAME_ENTRY) -> None:
        self._mode = initial
        self._listeners: list[Listener] = []
        self._valid = set(self.VALID_TRANSITIONS)
        logger.debug(f"ModeMachine initialized in {initial.name}")

    @property
    def mode(self) -> GameMode:
        return self._mode

    def can_transition(self, to_mode: GameMode) -> bool:
        return (self._mode, to_mode) in self._valid

    def transition(self, to_mode: GameMode) -> bool:
        """Move to `to_mode`. Returns False (and logs) if not allowed."""
        if not self.can_transition(to_mode):
            logger.warning(f"Invalid transition: {self._mode.name} -> {to_mode.name}")
            return False

        old = self._mode
        self._mode = to_mode
        logger.info(f"Mode transition: {old.name} -> {to_mode.name}")

        for listener in self._listeners:
            try:
                listener(old, to_mode)
            except Exception:
                logger.exception("Error in mode listener")
        return True

    def add_listener(self, callback: Listener) -> None:
        self._listeners.append(callback)

    def remove_listener(self, callback: Listener) -> None:
        if callback in self._listeners:
            self._listeners.remove(callback)
