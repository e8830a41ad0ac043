from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto
from typing import Optional


class InputAction(Enum):
    """Logical input actions understood by the labyrinth.

    Keeps physical devices (keyboard, gamepad) out of the core: movement only
    ever sees an InputVector built from these actions.
    """

    MOVE_UP = auto()
    MOVE_DOWN = auto()
    MOVE_LEFT = auto()
    MOVE_RIGHT = auto()
    CONFIRM = auto()  # e.g., Enter/Start
    BACK = auto()  # e.g., Escape/Back


MOVE_ACTIONS = frozenset(
    {InputAction.MOVE_UP, InputAction.MOVE_DOWN, InputAction.MOVE_LEFT, InputAction.MOVE_RIGHT}
)


@dataclass(frozen=True)
class InputEvent:
    """A press or release of a logical action, with an optional source tag."""

    action: InputAction
    pressed: bool
    source: Optional[str] = None


__all__ = ["InputAction", "InputEvent", "MOVE_ACTIONS"]
