from __future__ import annotations

import dataclasses
import logging
from typing import Tuple

try:
    import arcade  # type: ignore
except Exception:  # pragma: no cover - optional for test envs
    arcade = None

from ..engine.loop import GameConfig, GameEngine
from ..events import LevelEvent
from ..fog.visibility import RevealState
from ..input.actions import InputAction
from ..input.mapping import HeldKeys, InputMapper
from ..maze.tiles import Tile
from ..session import LevelSession

logger = logging.getLogger(__name__)

WALL_COLOR = (0, 255, 0)
FLOOR_COLOR = (128, 128, 128)
ITEM_COLOR = (255, 255, 0)
PLAYER_COLOR = (60, 180, 255)
FOG_ALPHA = {RevealState.VISIBLE: 0, RevealState.REMEMBERED: 128, RevealState.HIDDEN: 255}

_ALIASED_KEYS = ("W", "A", "S", "D", "UP", "DOWN", "LEFT", "RIGHT", "ESCAPE", "ENTER", "RETURN")


def _keyboard_mapper() -> InputMapper:
    """Default bindings plus aliases from Arcade key codes to canonical names."""
    mapper = InputMapper.default()
    for name in _ALIASED_KEYS:
        code = getattr(arcade.key, name, None)
        if code is not None:
            mapper.set_alias(code, name)
    return mapper


class LabyrinthWindow:
    """Minimal Arcade window: polls held keys, steps the session, paints the fog.

    All game rules live in LevelSession; this class only translates key
    events and draws what ``reveal_state_of`` reports.
    """

    def __init__(self, session: LevelSession, tick_rate: float = 60.0):
        if arcade is None:
            raise RuntimeError("Arcade package is not installed; cannot create window")
        self.keys = HeldKeys(_keyboard_mapper())
        self.tick_rate = tick_rate
        cell = session.settings.cell_size
        width = session.grid.width * cell
        height = session.grid.height * cell
        self._window = arcade.Window(width, height, title="Dark Labyrinth")
        self._window.on_draw = self.on_draw
        self._window.on_update = self.on_update
        self._window.on_key_press = self.on_key_press
        self._window.on_key_release = self.on_key_release
        self._attach(session)
        logger.info("Arcade window initialized (%dx%d)", width, height)

    def _attach(self, session: LevelSession) -> None:
        self.session = session
        self.engine = GameEngine(session, lambda _s: self.keys.vector(), GameConfig(tick_rate=self.tick_rate))
        self._status = "Items: 0"
        session.add_listener(self._on_event)

    def _on_event(self, event: LevelEvent, session: LevelSession) -> None:
        if event is LevelEvent.ITEM_COLLECTED:
            self._status = f"Items: {session.collected_count}"
        elif event is LevelEvent.ALL_ITEMS_COLLECTED:
            self._status = f"Items: {session.collected_count} - you escaped the dark! Enter for a new maze"

    def _next_level(self) -> None:
        # same settings, fresh random seed
        self.session.remove_listener(self._on_event)
        self.keys.clear()
        self._attach(LevelSession(dataclasses.replace(self.session.settings, seed=None)))
        self.engine.start()
        logger.info("Started a new level (seed=%s)", self.session.seeds.seed)

    def run(self) -> None:
        self.engine.start()
        arcade.run()

    def _screen_rect(self, cx: float, cy: float, half: float) -> Tuple[float, float, float, float]:
        top = self._window.height - cy
        return cx - half, cx + half, top - half, top + half

    def on_draw(self) -> None:
        self._window.clear()
        session = self.session
        grid = session.grid
        cell = session.settings.cell_size
        half = cell / 2
        for y in range(grid.height):
            for x in range(grid.width):
                color = WALL_COLOR if grid.tiles[y][x] == Tile.WALL else FLOOR_COLOR
                arcade.draw_lrbt_rectangle_filled(*self._screen_rect(x * cell + half, y * cell + half, half), color)

        for item in session.collector.active:
            alpha = 255 - FOG_ALPHA[session.reveal_state_of(item.cell)]
            if alpha:
                rect = self._screen_rect(item.position[0], item.position[1], item.size / 2)
                arcade.draw_lrbt_rectangle_filled(*rect, (*ITEM_COLOR, alpha))

        entity = session.entity
        arcade.draw_lrbt_rectangle_filled(*self._screen_rect(entity.x, entity.y, entity.half_extent), PLAYER_COLOR)

        # fog goes on top of everything except the status line
        for y in range(grid.height):
            for x in range(grid.width):
                alpha = FOG_ALPHA[session.reveal_state_of((x, y))]
                if alpha:
                    rect = self._screen_rect(x * cell + half, y * cell + half, half)
                    arcade.draw_lrbt_rectangle_filled(*rect, (0, 0, 0, alpha))

        arcade.draw_text(self._status, 16, self._window.height - 40, (255, 255, 255), 24, bold=True)

    def on_update(self, delta_time: float) -> None:
        if self.engine.running:
            self.engine.update(delta_time)

    def on_key_press(self, symbol: int, modifiers: int) -> None:
        event = self.keys.press(symbol)
        if event is None:
            return
        if event.action is InputAction.BACK:
            self.engine.stop()
            self._window.close()
        elif event.action is InputAction.CONFIRM and self.session.won:
            self._next_level()

    def on_key_release(self, symbol: int, modifiers: int) -> None:
        self.keys.release(symbol)


def arcade_available() -> bool:
    return arcade is not None
