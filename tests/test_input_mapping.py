from __future__ import annotations

import pytest

from labyrinth.input.actions import InputAction
from labyrinth.input.mapping import HeldKeys, InputMapper, vector_from_actions
from labyrinth.movement.resolver import InputVector


def test_default_mapping_movement():
    m = InputMapper.default()
    assert m.translate_key("W") == InputAction.MOVE_UP
    assert m.translate_key("a") == InputAction.MOVE_LEFT
    assert m.translate_key("Down") == InputAction.MOVE_DOWN
    assert m.translate_key("RIGHT") == InputAction.MOVE_RIGHT


def test_default_mapping_menu_keys():
    m = InputMapper.default()
    assert m.translate_key("ENTER") == InputAction.CONFIRM
    assert m.translate_key("ret") == InputAction.CONFIRM
    assert m.translate_key("Esc") == InputAction.BACK
    assert m.translate_key("Q") is None
    assert m.translate_key("   ") is None


def test_rebinding_and_aliases():
    m = InputMapper.default()
    m.bind("I", InputAction.MOVE_UP)
    m.set_alias(65362, "UP")
    assert m.translate_key("W") == InputAction.MOVE_UP
    assert m.translate_key("i") == InputAction.MOVE_UP
    assert m.translate_key(65362) == InputAction.MOVE_UP


def test_on_key_event():
    m = InputMapper.default()
    evt = m.on_key_event("d", pressed=True)
    assert evt is not None
    assert evt.action == InputAction.MOVE_RIGHT
    assert evt.pressed is True
    assert evt.source == "keyboard"
    assert m.on_key_event("Z", pressed=True) is None


@pytest.mark.parametrize(
    "keys,expected",
    [
        ({"D"}, InputVector(1, 0)),
        ({"W", "RIGHT"}, InputVector(1, -1)),
        ({"A", "D"}, InputVector(0, 0)),
        ({"UP", "S", "LEFT"}, InputVector(-1, 0)),
        ({"ENTER"}, InputVector(0, 0)),
    ],
)
def test_vector_from_held(keys, expected):
    assert InputMapper.default().vector_from_held(keys) == expected


def test_vector_from_actions_ignores_menu_actions():
    assert vector_from_actions([InputAction.CONFIRM, InputAction.MOVE_DOWN]) == InputVector(0, 1)


def test_held_keys_track_press_and_release():
    held = HeldKeys()
    held.press("W")
    held.press("D")
    assert held.vector() == InputVector(1, -1)
    assert held.is_down(InputAction.MOVE_UP)

    held.release("W")
    assert held.vector() == InputVector(1, 0)
    assert held.press("F") is None

    held.clear()
    assert held.vector() == InputVector(0, 0)


def test_held_keys_report_one_shot_actions_without_holding_them():
    held = HeldKeys()
    event = held.press("ESC")
    assert event is not None
    assert event.action == InputAction.BACK
    assert event.pressed is True
    assert not held.is_down(InputAction.BACK)

    held.press("D")
    confirm = held.feed("RETURN", pressed=True)
    assert confirm.action == InputAction.CONFIRM
    assert held.vector() == InputVector(1, 0)

    released = held.release("D")
    assert released.action == InputAction.MOVE_RIGHT
    assert released.pressed is False
    assert held.vector() == InputVector(0, 0)
