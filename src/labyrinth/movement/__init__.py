from .resolver import ControlledEntity, InputVector, MoveResult, MovementResolver

__all__ = ["ControlledEntity", "InputVector", "MoveResult", "MovementResolver"]
