from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Callable, List, Optional, Tuple

from .events import LevelEvent
from .fog.visibility import RevealState, VisibilityTracker
from .items.collection import Item, ItemCollector
from .items.placement import place_items
from .maze.generator import BacktrackerGenerator, inject_loops
from .maze.obstacles import Rect, cell_center, obstacles_from_grid
from .maze.tiles import Cell, MazeGrid
from .movement.resolver import ControlledEntity, InputVector, MoveResult, MovementResolver
from .rng import LevelSeeds, SeedLike
from .settings import LabyrinthSettings

logger = logging.getLogger(__name__)

Listener = Callable[[LevelEvent, "LevelSession"], None]


@dataclass
class FrameResult:
    move: MoveResult
    cell: Cell
    cell_changed: bool
    collected: List[Item] = field(default_factory=list)
    won: bool = False


class LevelSession:
    """Holds one maze level: grid, obstacles, items, fog memory and the player.

    Each ``update`` runs the frame in a fixed order: movement and collision,
    then (if the player moved into a new cell) visibility, then item pickup.
    Presentation code either polls the public state or subscribes with
    ``add_listener``; nothing here draws or plays sounds.
    """

    def __init__(self, settings: Optional[LabyrinthSettings] = None, seed: SeedLike = None) -> None:
        self.settings = settings or LabyrinthSettings()
        self._listeners: List[Listener] = []
        self.seeds = LevelSeeds(seed if seed is not None else self.settings.seed)

        maze_cfg = self.settings.maze
        generator = BacktrackerGenerator(maze_cfg.carve_style)
        self.grid: MazeGrid = generator.generate(maze_cfg.width, maze_cfg.height, rng=self.seeds.rng("maze"))
        self.loops_opened = 0
        if maze_cfg.loops:
            self.loops_opened = inject_loops(self.grid, maze_cfg.loop_chance, self.seeds.rng("loops"))

        cell_size = self.settings.cell_size
        self.obstacles: List[Rect] = obstacles_from_grid(self.grid, cell_size)

        positions = place_items(
            self.grid,
            self.grid.start,
            self.settings.items.max_items,
            rng=self.seeds.rng("items"),
        )
        target = self.settings.items.target
        if self.settings.items.cap_target and 0 < len(positions) < target:
            logger.info("Only %d items placed; lowering the target from %d", len(positions), target)
            target = len(positions)
        self.collector = ItemCollector.from_cells(
            positions,
            cell_size,
            self.settings.item_size,
            target=target,
            require_revealed=self.settings.items.require_revealed,
        )
        if len(positions) < self.collector.target:
            logger.warning(
                "Only %d items placed for a target of %d; this level cannot be won",
                len(positions),
                self.collector.target,
            )

        sx, sy = cell_center(*self.grid.start, cell_size)
        self.entity = ControlledEntity(
            sx,
            sy,
            speed=self.settings.movement.speed,
            half_extent=self.settings.movement.half_extent,
        )
        self.resolver = MovementResolver()
        self.visibility = VisibilityTracker(self.grid.width, self.grid.height, self.settings.fog)
        self._cell: Cell = self.entity.cell(cell_size)
        self.visibility.update(*self._cell)
        self.frame = 0
        self.last_collected: List[Item] = []

        logger.info(
            "Level ready: %dx%d style=%d loops=%d items=%d seed=%s",
            self.grid.width,
            self.grid.height,
            self.grid.corridor_width,
            self.loops_opened,
            len(positions),
            self.seeds.seed,
        )

    # ---------- Listeners ----------
    def add_listener(self, listener: Listener) -> None:
        """Subscribe to level events (movement, cell change, item pickup, win)."""
        self._listeners.append(listener)

    def remove_listener(self, listener: Listener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def _emit(self, event: LevelEvent) -> None:
        for listener in list(self._listeners):
            try:
                listener(event, self)
            except Exception as ex:
                logger.exception("Listener errored on %s: %s", event, ex)

    # ---------- State ----------
    @property
    def player_cell(self) -> Cell:
        return self._cell

    @property
    def start_position(self) -> Tuple[float, float]:
        return cell_center(*self.grid.start, self.settings.cell_size)

    @property
    def items(self) -> List[Item]:
        return self.collector.items

    @property
    def collected_count(self) -> int:
        return self.collector.collected_count

    @property
    def won(self) -> bool:
        return self.collector.won

    def reveal_state_of(self, cell: Cell) -> RevealState:
        return self.visibility.reveal_state_of(cell)

    # ---------- Frame ----------
    def update(self, direction: InputVector, dt: float = 1.0) -> FrameResult:
        """Advance the level by one frame of input."""
        self.frame += 1
        was_won = self.won

        move = self.resolver.step(self.entity, direction, self.obstacles, dt)
        cell = self.entity.cell(self.settings.cell_size)
        cell_changed = False
        if move.moved:
            self._emit(LevelEvent.PLAYER_MOVED)
            if cell != self._cell:
                self._cell = cell
                cell_changed = True
                self.visibility.update(*cell)
                self._emit(LevelEvent.CELL_CHANGED)

        self.last_collected = self.collector.check(self.entity.rect, self.visibility.reveal_state_of)
        for _ in self.last_collected:
            self._emit(LevelEvent.ITEM_COLLECTED)
        if self.won and not was_won:
            logger.info("All items collected on frame %d", self.frame)
            self._emit(LevelEvent.ALL_ITEMS_COLLECTED)

        return FrameResult(
            move=move,
            cell=self._cell,
            cell_changed=cell_changed,
            collected=list(self.last_collected),
            won=self.won,
        )


__all__ = ["FrameResult", "LevelSession"]
