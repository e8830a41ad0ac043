from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Sequence, Tuple

from ..maze.obstacles import Rect, world_to_cell

logger = logging.getLogger(__name__)

_AXIS_VALUES = (-1, 0, 1)


@dataclass(frozen=True)
class InputVector:
    """Per-frame directional input; each axis is -1, 0 or 1 (y grows downwards)."""

    dx: int = 0
    dy: int = 0

    def __post_init__(self) -> None:
        if self.dx not in _AXIS_VALUES or self.dy not in _AXIS_VALUES:
            raise ValueError(f"input axes must be -1, 0 or 1; got ({self.dx}, {self.dy})")

    @property
    def is_zero(self) -> bool:
        return self.dx == 0 and self.dy == 0


@dataclass
class ControlledEntity:
    """The player: a continuous position plus fixed speed and collision box.

    In the full game this would carry sprite and animation state; here it only
    holds what movement and collision need.
    """

    x: float
    y: float
    speed: float = 4.0
    half_extent: float = 14.0

    @property
    def position(self) -> Tuple[float, float]:
        return (self.x, self.y)

    @property
    def rect(self) -> Rect:
        return Rect.square(self.x, self.y, self.half_extent)

    def cell(self, cell_size: float) -> Tuple[int, int]:
        return world_to_cell(self.x, self.y, cell_size)


@dataclass
class MoveResult:
    new_pos: Tuple[float, float]
    moved: bool
    pushbacks_x: int = 0
    pushbacks_y: int = 0


class MovementResolver:
    """Moves the controlled entity and resolves overlaps with static obstacles.

    Both axes move in the same frame with no normalisation, so diagonal input
    covers more ground than axial input. Collision response undoes this frame's
    displacement: every obstacle still overlapping the entity (checked in list
    order, after earlier corrections) pushes it back by one full step on each
    axis that had input. Several overlapping obstacles mean several pushbacks.
    """

    def step(
        self,
        entity: ControlledEntity,
        direction: InputVector,
        obstacles: Sequence[Rect],
        dt: float = 1.0,
    ) -> MoveResult:
        """Advance ``entity`` in place by one frame and return the outcome.

        Args:
            entity: Entity to move; its position is mutated.
            direction: Input for this frame.
            obstacles: Static rectangles to resolve against.
            dt: Frame fraction; 1.0 is one frame and reproduces the per-frame step exactly.

        Returns:
            MoveResult whose ``moved`` is True whenever any axis had input, even
            if pushbacks cancelled the displacement.
        """
        if dt < 0:
            raise ValueError("dt must be >= 0")
        moved = not direction.is_zero
        if not moved:
            return MoveResult(new_pos=entity.position, moved=False)

        step = entity.speed * dt
        entity.x += step * direction.dx
        entity.y += step * direction.dy

        pushbacks_x = pushbacks_y = 0
        for obstacle in obstacles:
            if not entity.rect.overlaps(obstacle):
                continue
            if direction.dx:
                entity.x -= step * direction.dx
                pushbacks_x += 1
            if direction.dy:
                entity.y -= step * direction.dy
                pushbacks_y += 1

        if pushbacks_x or pushbacks_y:
            logger.debug(
                "Entity pushed back (%d x, %d y) to (%.1f, %.1f)",
                pushbacks_x,
                pushbacks_y,
                entity.x,
                entity.y,
            )
        return MoveResult(new_pos=entity.position, moved=True, pushbacks_x=pushbacks_x, pushbacks_y=pushbacks_y)


__all__ = [
    "ControlledEntity",
    "InputVector",
    "MoveResult",
    "MovementResolver",
]
