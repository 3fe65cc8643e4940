"""Input intents and the controllers that produce them each tick."""

from enum import Enum
from typing import Dict, FrozenSet, Iterable, Optional, Protocol, Set


class Intent(Enum):
    """Named motion commands fed to an entity once per tick."""
    MOVE_FORWARD = "move_forward"
    MOVE_BACKWARD = "move_backward"
    ROTATE_LEFT = "rotate_left"
    ROTATE_RIGHT = "rotate_right"

    @property
    def is_translation(self) -> bool:
        return self in (Intent.MOVE_FORWARD, Intent.MOVE_BACKWARD)


# Rotations first, then translations
APPLY_ORDER = (
    Intent.ROTATE_RIGHT,
    Intent.ROTATE_LEFT,
    Intent.MOVE_FORWARD,
    Intent.MOVE_BACKWARD,
)


class Controller(Protocol):
    def intents(self) -> FrozenSet[Intent]:
        ...


class KeyboardState:
    """Tracks which bound keys are held down.

    Keys not present in the bindings are ignored.
    """

    def __init__(self, bindings: Dict[str, str]):
        self.bindings: Dict[str, Intent] = {
            key: Intent(name) for key, name in bindings.items()
        }
        self._held: Set[str] = set()

    def press(self, key: str):
        if key in self.bindings:
            self._held.add(key)

    def release(self, key: str):
        self._held.discard(key)

    def release_all(self):
        self._held.clear()

    def is_held(self, key: str) -> bool:
        return key in self._held

    def active(self) -> FrozenSet[Intent]:
        return frozenset(self.bindings[key] for key in self._held)


class KeyboardController:
    """Intents read from a KeyboardState."""

    def __init__(self, keyboard: KeyboardState):
        self.keyboard = keyboard

    def intents(self) -> FrozenSet[Intent]:
        return self.keyboard.active()


class Autopilot:
    """A fixed set of intents every tick."""

    def __init__(self, intents: Optional[Iterable[Intent]] = None):
        if intents is None:
            intents = (Intent.ROTATE_RIGHT, Intent.MOVE_FORWARD)
        self._intents = frozenset(intents)

    def intents(self) -> FrozenSet[Intent]:
        return self._intents
