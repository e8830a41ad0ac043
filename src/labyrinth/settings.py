from __future__ import annotations

import dataclasses
import logging
import os
from dataclasses import dataclass, field
from importlib import resources
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

import yaml
from platformdirs import user_config_dir

from .errors import MazeConfigError, SettingsError
from .fog.visibility import FogSettings
from .maze.generator import DEFAULT_LOOP_CHANCE, validate_dimensions
from .rng import resolve_seed

logger = logging.getLogger(__name__)

APP_NAME = "dark-labyrinth"
USER_SETTINGS_FILE = "settings.yaml"

ENV_SEED = "LABYRINTH_SEED"
ENV_WIDTH = "LABYRINTH_WIDTH"
ENV_HEIGHT = "LABYRINTH_HEIGHT"
ENV_CARVE_STYLE = "LABYRINTH_CARVE_STYLE"
ENV_RADIUS = "LABYRINTH_RADIUS"
ENV_CONFIG_DIR = "LABYRINTH_CONFIG_DIR"


@dataclass
class MazeSettings:
    width: int = 31
    height: int = 23
    carve_style: int = 2
    loops: bool = False
    loop_chance: float = DEFAULT_LOOP_CHANCE

    def __post_init__(self) -> None:
        validate_dimensions(self.width, self.height, self.carve_style)
        if not (0.0 <= self.loop_chance <= 1.0):
            raise MazeConfigError("loop_chance must be between 0.0 and 1.0")


@dataclass
class MovementSettings:
    speed: float = 4.0
    half_extent: float = 14.0

    def __post_init__(self) -> None:
        if self.speed <= 0:
            raise ValueError("speed must be > 0")
        if self.half_extent <= 0:
            raise ValueError("half_extent must be > 0")


@dataclass
class ItemSettings:
    max_items: int = 3
    target: int = 3
    size: Optional[float] = None  # defaults to cell_size / 6
    require_revealed: bool = True
    cap_target: bool = False  # lower the target to the number of items actually placed

    def __post_init__(self) -> None:
        if self.max_items < 0:
            raise ValueError("max_items must be >= 0")
        if self.target < 1:
            raise ValueError("target must be >= 1")


@dataclass
class LabyrinthSettings:
    """All per-level configuration; validated once when constructed."""

    cell_size: int = 32
    maze: MazeSettings = field(default_factory=MazeSettings)
    fog: FogSettings = field(default_factory=FogSettings)
    movement: MovementSettings = field(default_factory=MovementSettings)
    items: ItemSettings = field(default_factory=ItemSettings)
    seed: Optional[int | str] = None

    def __post_init__(self) -> None:
        if self.cell_size <= 0:
            raise ValueError("cell_size must be > 0")
        if self.movement.half_extent * 2 >= self.cell_size * self.maze.carve_style:
            logger.warning(
                "Entity box (%.1f) is not smaller than a %d-wide corridor; movement may be stuck",
                self.movement.half_extent * 2,
                self.maze.carve_style,
            )

    @property
    def item_size(self) -> float:
        return self.items.size if self.items.size is not None else self.cell_size / 6

    # ---------- Loading ----------
    @staticmethod
    def _load_yaml(path: Path) -> dict:
        try:
            with path.open("r", encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
        except (OSError, yaml.YAMLError) as exc:
            raise SettingsError(f"Could not read settings from {path}: {exc}") from exc
        if not isinstance(data, dict):
            raise SettingsError(f"Settings file {path} must contain a mapping")
        return data

    @classmethod
    def _deep_merge(cls, base: Mapping[str, Any], overlay: Optional[Mapping[str, Any]]) -> dict:
        merged = dict(base)
        for k, v in (overlay or {}).items():
            if isinstance(v, dict) and isinstance(base.get(k), dict):
                merged[k] = cls._deep_merge(base[k], v)
            else:
                merged[k] = v
        return merged

    @classmethod
    def _from_dict(cls, data: Mapping[str, Any]) -> "LabyrinthSettings":
        try:
            return cls(
                cell_size=int(data.get("cell_size", 32)),
                maze=MazeSettings(**data.get("maze", {})),
                fog=FogSettings(**data.get("fog", {})),
                movement=MovementSettings(**data.get("movement", {})),
                items=ItemSettings(**data.get("items", {})),
                seed=data.get("seed"),
            )
        except TypeError as exc:
            raise SettingsError(f"Unknown or malformed settings key: {exc}") from exc

    @staticmethod
    def default_data() -> dict:
        try:
            text = resources.files("labyrinth.config").joinpath("default_settings.yaml").read_text(encoding="utf-8")
            return yaml.safe_load(text) or {}
        except FileNotFoundError:
            logger.warning("Default settings not found; falling back to dataclass defaults.")
            return dataclasses.asdict(LabyrinthSettings())

    @staticmethod
    def user_settings_path() -> Path:
        override = os.getenv(ENV_CONFIG_DIR)
        base = Path(override).expanduser() if override else Path(user_config_dir(APP_NAME, appauthor=False))
        return base / USER_SETTINGS_FILE

    @classmethod
    def load(
        cls,
        user_path: Optional[Path] = None,
        preset: Optional[str] = None,
        env: Optional[Mapping[str, str]] = None,
    ) -> "LabyrinthSettings":
        """Build settings from packaged defaults, a user file, a preset, then env vars.

        - user_path: explicit YAML overlay; when None the platform config dir is
          checked and silently skipped if the file is absent.
        - preset: name under ``presets`` in the merged data (easy/normal/hard).
        - env: mapping of environment overrides (defaults to ``os.environ``).
        """
        data = cls.default_data()

        if user_path is not None:
            if not user_path.exists():
                raise SettingsError(f"Settings file not found: {user_path}")
            data = cls._deep_merge(data, cls._load_yaml(user_path))
            logger.info("Loaded user settings from %s", user_path)
        else:
            implicit = cls.user_settings_path()
            if implicit.exists():
                data = cls._deep_merge(data, cls._load_yaml(implicit))
                logger.info("Loaded user settings from %s", implicit)

        presets = data.pop("presets", {}) or {}
        if preset:
            if preset not in presets:
                raise SettingsError(f"Unknown preset '{preset}'; choose from {sorted(presets)}")
            data = cls._deep_merge(data, presets[preset])
            logger.info("Applied preset '%s'", preset)

        data = cls._apply_env(data, os.environ if env is None else env)
        settings = cls._from_dict(data)
        logger.debug("Settings merged: %s", settings)
        return settings

    @classmethod
    def _apply_env(cls, data: dict, env: Mapping[str, str]) -> dict:
        overlay: Dict[str, Any] = {}
        try:
            if env.get(ENV_SEED):
                overlay["seed"] = resolve_seed(env[ENV_SEED])
            maze: Dict[str, Any] = {}
            if env.get(ENV_WIDTH):
                maze["width"] = int(env[ENV_WIDTH])
            if env.get(ENV_HEIGHT):
                maze["height"] = int(env[ENV_HEIGHT])
            if env.get(ENV_CARVE_STYLE):
                maze["carve_style"] = int(env[ENV_CARVE_STYLE])
            if maze:
                overlay["maze"] = maze
            if env.get(ENV_RADIUS):
                overlay["fog"] = {"radius": int(env[ENV_RADIUS])}
        except ValueError as exc:
            raise SettingsError(f"Invalid numeric environment override: {exc}") from exc
        if overlay:
            logger.debug("Environment overrides: %s", overlay)
        return cls._deep_merge(data, overlay)

    def save(self, path: Path) -> None:
        data = dataclasses.asdict(self)
        if data.get("seed") is None:
            data.pop("seed")
        path.parent.mkdir(parents=True, exist_ok=True)
        with path.open("w", encoding="utf-8") as f:
            yaml.safe_dump(data, f, sort_keys=False)
        logger.info("Saved settings to %s", path)


__all__ = [
    "ItemSettings",
    "LabyrinthSettings",
    "MazeSettings",
    "MovementSettings",
]
