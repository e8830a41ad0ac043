from __future__ import annotations

import logging
import random
import time
from dataclasses import dataclass
from typing import Callable, Optional

from ..movement.resolver import InputVector
from ..session import FrameResult, LevelSession

logger = logging.getLogger(__name__)

InputSource = Callable[[LevelSession], InputVector]

_AXIAL = (InputVector(0, -1), InputVector(1, 0), InputVector(0, 1), InputVector(-1, 0))


@dataclass
class GameConfig:
    """Configuration for the frame loop.

    Attributes:
        tick_rate: Target updates per second for the loop. If 0 or None, updates as fast as possible.
        max_steps: If provided and > 0, the loop will automatically stop after this many updates.
        stop_on_win: Stop as soon as the level reports all items collected.
    """

    tick_rate: float = 60.0
    max_steps: Optional[int] = None
    stop_on_win: bool = True


class Wanderer:
    """Scripted input for headless runs: walks straight, turns on bumps or at random.

    Used as an InputSource so the loop can be exercised without a keyboard.
    """

    def __init__(self, rng: Optional[random.Random] = None, turn_chance: float = 1 / 45) -> None:
        self.rng = rng or random.Random(0)
        self.turn_chance = turn_chance
        self.direction = InputVector(1, 0)
        self._blocked = False

    def observe(self, result: FrameResult) -> None:
        self._blocked = bool(result.move.pushbacks_x or result.move.pushbacks_y)

    def __call__(self, session: LevelSession) -> InputVector:
        if self._blocked or self.rng.random() < self.turn_chance:
            self.direction = self.rng.choice([d for d in _AXIAL if d != self.direction])
            self._blocked = False
        return self.direction


class GameEngine:
    """A headless-friendly loop that feeds input into a LevelSession once per tick.

    Rendering backends (e.g. the Arcade view) call ``update`` from their own
    clock; CLI mode calls ``run`` which throttles to ``tick_rate``.
    """

    def __init__(self, session: LevelSession, input_source: InputSource, config: Optional[GameConfig] = None) -> None:
        self.session = session
        self.input_source = input_source
        self.config = config or GameConfig()
        self._running: bool = False
        self._step: int = 0
        self._last_time: Optional[float] = None
        self.last_result: Optional[FrameResult] = None

    @property
    def running(self) -> bool:
        return self._running

    @property
    def step(self) -> int:
        return self._step

    def start(self) -> None:
        """Start the engine loop state.

        Safe to call multiple times; subsequent calls are no-ops.
        """
        if self._running:
            logger.debug("GameEngine.start() called while already running")
            return
        self._running = True
        self._step = 0
        self._last_time = time.perf_counter()
        logger.info("GameEngine started (tick_rate=%s, max_steps=%s)", self.config.tick_rate, self.config.max_steps)

    def stop(self) -> None:
        """Stop the loop gracefully."""
        if not self._running:
            return
        self._running = False
        logger.info("GameEngine stopped at step=%s", self._step)

    def update(self, dt: float) -> None:
        """Perform a single update tick.

        Movement is frame-stepped, so the session always advances exactly one
        frame; ``dt`` (seconds) is only logged.
        """
        if not self._running:
            logger.debug("update() called while not running; ignored")
            return
        self._step += 1
        direction = self.input_source(self.session)
        self.last_result = self.session.update(direction)
        observe = getattr(self.input_source, "observe", None)
        if observe is not None:
            observe(self.last_result)
        logger.debug("Tick #%d (dt=%.4f) cell=%s", self._step, dt, self.last_result.cell)

        if self.config.stop_on_win and self.session.won:
            self.stop()
        elif self.config.max_steps is not None and self._step >= self.config.max_steps:
            self.stop()

    def run(self) -> None:
        """Run a blocking loop until stopped, won, or max_steps reached."""
        self.start()
        target_dt = 0.0
        if self.config.tick_rate and self.config.tick_rate > 0:
            target_dt = 1.0 / float(self.config.tick_rate)

        while self._running:
            now = time.perf_counter()
            dt = 0.0 if self._last_time is None else now - self._last_time
            self._last_time = now

            self.update(dt)

            if target_dt > 0:
                remaining = target_dt - (time.perf_counter() - now)
                if remaining > 0:
                    time.sleep(remaining)

        logger.info("Loop complete (steps=%d)", self._step)
