from __future__ import annotations

import logging
import os
from typing import Optional

from .engine.loop import GameConfig, GameEngine, Wanderer
from .session import LevelSession
from .settings import LabyrinthSettings

logger = logging.getLogger(__name__)

ENV_HEADLESS = "LABYRINTH_HEADLESS"
ENV_GUI = "LABYRINTH_GUI"


def run_headless(
    settings: LabyrinthSettings,
    seed=None,
    max_steps: Optional[int] = 600,
    tick_rate: float = 0.0,
) -> int:
    """Run a level in the console with a scripted wanderer as input.

    Args:
        settings: Level configuration.
        seed: Optional seed overriding ``settings.seed``.
        max_steps: Stop after N frames; defaults to 600 and is always bounded.
        tick_rate: Target frames per second; 0 runs as fast as possible.
    """
    if max_steps is None:
        # Safety in CI/headless: always bound the loop
        max_steps = 600

    print("Dark Labyrinth (headless)")
    session = LevelSession(settings, seed=seed)
    wanderer = Wanderer(session.seeds.rng("wanderer"))
    engine = GameEngine(session, wanderer, GameConfig(tick_rate=tick_rate, max_steps=max_steps))
    try:
        engine.run()
    except KeyboardInterrupt:
        engine.stop()
        print("Interrupted by user")
        return 130

    logger.debug("Final map:\n%s", "\n".join(session.grid.to_lines()))
    print(
        f"Loop complete (steps={engine.step}, seed={session.seeds.seed}, "
        f"items={session.collected_count}/{len(session.items)}, "
        f"visited={session.visibility.visited_count()}, won={session.won})"
    )
    return 0


def run_gui(settings: LabyrinthSettings, seed=None, tick_rate: float = 60.0) -> int:
    """Run a level in an Arcade window if available, otherwise fall back to headless."""
    from .ui.arcade_view import LabyrinthWindow, arcade_available

    if not arcade_available():
        logger.warning("Arcade not available; falling back to headless mode")
        return run_headless(settings, seed=seed)

    window = LabyrinthWindow(LevelSession(settings, seed=seed), tick_rate=tick_rate)
    logger.info("Launching Arcade window")
    window.run()
    logger.info("Arcade loop finished")
    return 0


def run_auto(settings: LabyrinthSettings, seed=None, max_steps: Optional[int] = None, tick_rate: float = 60.0) -> int:
    """Run GUI unless LABYRINTH_HEADLESS=1; LABYRINTH_GUI=1 forces the window."""
    if os.getenv(ENV_HEADLESS) == "1":
        return run_headless(settings, seed=seed, max_steps=max_steps, tick_rate=tick_rate)
    if os.getenv(ENV_GUI) == "1" or max_steps is None:
        return run_gui(settings, seed=seed, tick_rate=tick_rate)
    return run_headless(settings, seed=seed, max_steps=max_steps, tick_rate=tick_rate)
