from __future__ import annotations

import logging
from typing import Dict, Iterable, Optional, Set

from ..movement.resolver import InputVector
from .actions import InputAction, InputEvent, MOVE_ACTIONS

logger = logging.getLogger(__name__)


class InputMapper:
    """Rebindable mapping from physical keys to logical actions.

    Keys are strings normalized case-insensitively, so any backend (Arcade,
    pygame, a test script) can feed it by translating its key constants to
    names such as "W" or "LEFT" first.

    Example usage:
        mapper = InputMapper.default()
        mapper.translate_key("a")                 # -> InputAction.MOVE_LEFT
        mapper.vector_from_held({"D", "UP"})      # -> InputVector(1, -1)
    """

    def __init__(self, bindings: Optional[Dict[str, InputAction]] = None) -> None:
        self._bindings: Dict[str, InputAction] = {}
        self._aliases: Dict[str, str] = {}
        if bindings:
            for key, action in bindings.items():
                self.bind(key, action)

    @staticmethod
    def _normalize(key: str | int) -> Optional[str]:
        if key is None:
            return None
        if isinstance(key, int):
            return str(key)
        if not isinstance(key, str):
            return None
        k = key.strip()
        if not k:
            return None
        return k.upper()

    def bind(self, key: str | int, action: InputAction) -> None:
        nk = self._normalize(key)
        if nk is None:
            logger.warning("Attempted to bind invalid key: %r", key)
            return
        self._bindings[nk] = action

    def bind_many(self, keys: Iterable[str | int], action: InputAction) -> None:
        for k in keys:
            self.bind(k, action)

    def set_alias(self, physical: str | int, canonical_name: str) -> None:
        """Map a backend-specific key (e.g. an Arcade key code) to a canonical name."""
        nk = self._normalize(physical)
        cn = self._normalize(canonical_name)
        if nk and cn:
            self._aliases[nk] = cn

    def translate_key(self, key: str | int) -> Optional[InputAction]:
        nk = self._normalize(key)
        if nk is None:
            return None
        return self._bindings.get(self._aliases.get(nk, nk))

    def on_key_event(self, key: str | int, pressed: bool, source: str = "keyboard") -> Optional[InputEvent]:
        action = self.translate_key(key)
        if action is None:
            return None
        return InputEvent(action=action, pressed=pressed, source=source)

    def actions_from_held(self, keys: Iterable[str | int]) -> Set[InputAction]:
        actions = set()
        for key in keys:
            action = self.translate_key(key)
            if action is not None:
                actions.add(action)
        return actions

    def vector_from_held(self, keys: Iterable[str | int]) -> InputVector:
        """Fold the currently held keys into one movement vector; opposite keys cancel."""
        return vector_from_actions(self.actions_from_held(keys))

    @classmethod
    def default(cls) -> "InputMapper":
        """Arrows and WASD for movement, Enter/Return to confirm, Escape to go back."""
        mapper = cls()
        mapper.bind_many(["UP", "W"], InputAction.MOVE_UP)
        mapper.bind_many(["DOWN", "S"], InputAction.MOVE_DOWN)
        mapper.bind_many(["LEFT", "A"], InputAction.MOVE_LEFT)
        mapper.bind_many(["RIGHT", "D"], InputAction.MOVE_RIGHT)
        mapper.bind_many(["ENTER", "RETURN", "NUM_ENTER"], InputAction.CONFIRM)
        mapper.set_alias("RET", "ENTER")
        mapper.bind_many(["ESCAPE", "ESC"], InputAction.BACK)
        return mapper


def vector_from_actions(actions: Iterable[InputAction]) -> InputVector:
    held = set(actions) & MOVE_ACTIONS
    dx = (InputAction.MOVE_RIGHT in held) - (InputAction.MOVE_LEFT in held)
    dy = (InputAction.MOVE_DOWN in held) - (InputAction.MOVE_UP in held)
    return InputVector(int(dx), int(dy))


class HeldKeys:
    """Tracks which movement actions are held between press/release callbacks.

    ``feed`` turns every raw key into an InputEvent so the caller can react to
    one-shot actions such as CONFIRM or BACK; only movement actions are held.
    """

    def __init__(self, mapper: Optional[InputMapper] = None) -> None:
        self.mapper = mapper or InputMapper.default()
        self._down: Set[InputAction] = set()

    def feed(self, key: str | int, pressed: bool) -> Optional[InputEvent]:
        event = self.mapper.on_key_event(key, pressed)
        if event is None or event.action not in MOVE_ACTIONS:
            return event
        if pressed:
            self._down.add(event.action)
        else:
            self._down.discard(event.action)
        return event

    def press(self, key: str | int) -> Optional[InputEvent]:
        return self.feed(key, True)

    def release(self, key: str | int) -> Optional[InputEvent]:
        return self.feed(key, False)

    def clear(self) -> None:
        self._down.clear()

    def is_down(self, action: InputAction) -> bool:
        return action in self._down

    def vector(self) -> InputVector:
        return vector_from_actions(self._down)


__all__ = ["HeldKeys", "InputMapper", "vector_from_actions"]
