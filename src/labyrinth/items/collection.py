from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Callable, Iterable, List, Optional, Tuple

from ..fog.visibility import RevealState
from ..maze.obstacles import Rect, cell_center
from ..maze.tiles import Cell

logger = logging.getLogger(__name__)

DEFAULT_TARGET = 3


@dataclass
class Item:
    """A collectible sitting at the centre of a maze cell."""

    cell: Cell
    position: Tuple[float, float]
    size: float
    collected: bool = False

    @classmethod
    def at_cell(cls, cell: Cell, cell_size: float, size: float) -> "Item":
        return cls(cell=cell, position=cell_center(cell[0], cell[1], cell_size), size=size)

    @property
    def rect(self) -> Rect:
        return Rect.square(self.position[0], self.position[1], self.size / 2)


@dataclass
class ItemCollector:
    """Tracks active items, the running collected count and the win condition.

    - ``check`` collects every active item overlapping the given rectangle.
    - With ``require_revealed`` set, items still hidden in the fog cannot be
      picked up; the caller passes a reveal lookup for that.
    - ``won`` flips once ``collected_count`` reaches ``target``.
    """

    items: List[Item] = field(default_factory=list)
    target: int = DEFAULT_TARGET
    require_revealed: bool = True
    collected_count: int = 0

    def __post_init__(self) -> None:
        if self.target < 1:
            raise ValueError("target must be >= 1")

    @property
    def active(self) -> List[Item]:
        return [item for item in self.items if not item.collected]

    @property
    def won(self) -> bool:
        return self.collected_count >= self.target

    @property
    def remaining(self) -> int:
        return max(0, self.target - self.collected_count)

    def check(
        self,
        bounds: Rect,
        reveal: Optional[Callable[[Cell], RevealState]] = None,
    ) -> List[Item]:
        """Collect overlapping items and return the ones collected this call."""
        picked: List[Item] = []
        for item in self.active:
            if not item.rect.overlaps(bounds):
                continue
            if self.require_revealed and reveal is not None and reveal(item.cell) == RevealState.HIDDEN:
                logger.debug("Item at %s overlaps but is hidden; skipping", item.cell)
                continue
            item.collected = True
            self.collected_count += 1
            picked.append(item)
            logger.info("Collected item at %s (%d/%d)", item.cell, self.collected_count, self.target)
        return picked

    @classmethod
    def from_cells(
        cls,
        cells: Iterable[Cell],
        cell_size: float,
        item_size: float,
        target: int = DEFAULT_TARGET,
        require_revealed: bool = True,
    ) -> "ItemCollector":
        items = [Item.at_cell(cell, cell_size, item_size) for cell in cells]
        return cls(items=items, target=target, require_revealed=require_revealed)
