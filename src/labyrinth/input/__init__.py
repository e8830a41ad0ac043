"""
Input abstraction layer.

Exposes:
- InputAction: Logical input actions.
- InputEvent: A press/release event for a logical action.
- InputMapper: Rebindable mapping from physical keys to actions and movement vectors.
- HeldKeys: Press/release tracker for event-driven backends.
"""
from .actions import InputAction, InputEvent
from .mapping import HeldKeys, InputMapper, vector_from_actions

__all__ = [
    "HeldKeys",
    "InputAction",
    "InputEvent",
    "InputMapper",
    "vector_from_actions",
]
