from __future__ import annotations

from pathlib import Path

import pytest

from labyrinth.errors import MazeConfigError, SettingsError
from labyrinth.settings import ENV_CONFIG_DIR, LabyrinthSettings, MovementSettings


@pytest.fixture(autouse=True)
def isolated_config_dir(tmp_path, monkeypatch):
    monkeypatch.setenv(ENV_CONFIG_DIR, str(tmp_path / "config"))
    return tmp_path / "config"


def write(path: Path, text: str) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")
    return path


def test_packaged_defaults():
    s = LabyrinthSettings.load(env={})
    assert s.cell_size == 32
    assert (s.maze.width, s.maze.height, s.maze.carve_style) == (31, 23, 2)
    assert s.maze.loops is False
    assert s.fog.radius == 10
    assert s.fog.dim_factor == pytest.approx(0.5)
    assert s.movement.speed == pytest.approx(4.0)
    assert (s.items.max_items, s.items.target) == (3, 3)
    assert s.items.require_revealed is True
    assert s.item_size == pytest.approx(32 / 6)
    assert s.seed is None


@pytest.mark.parametrize(
    "preset,style,loops,radius",
    [("easy", 3, True, 10), ("normal", 2, True, 5), ("hard", 1, False, 1)],
)
def test_presets(preset, style, loops, radius):
    s = LabyrinthSettings.load(preset=preset, env={})
    assert s.maze.carve_style == style
    assert s.maze.loops is loops
    assert s.fog.radius == radius
    assert s.maze.width == 31
    assert s.items.cap_target is (preset == "easy")


def test_unknown_preset():
    with pytest.raises(SettingsError):
        LabyrinthSettings.load(preset="nightmare", env={})


def test_user_file_overlays_defaults(tmp_path):
    path = write(tmp_path / "mine.yaml", "fog:\n  radius: 4\nmaze:\n  loops: true\n")
    s = LabyrinthSettings.load(user_path=path, env={})
    assert s.fog.radius == 4
    assert s.fog.dim_factor == pytest.approx(0.5)
    assert s.maze.loops is True
    assert s.maze.width == 31


def test_implicit_user_file_is_picked_up(isolated_config_dir):
    write(isolated_config_dir / "settings.yaml", "seed: abc\n")
    assert LabyrinthSettings.user_settings_path() == isolated_config_dir / "settings.yaml"
    assert LabyrinthSettings.load(env={}).seed == "abc"


def test_missing_explicit_file(tmp_path):
    with pytest.raises(SettingsError):
        LabyrinthSettings.load(user_path=tmp_path / "nope.yaml", env={})


@pytest.mark.parametrize("text", ["maze: [1, 2\n", "- just\n- a list\n", "maze:\n  depth: 3\n"])
def test_bad_user_files(tmp_path, text):
    path = write(tmp_path / "bad.yaml", text)
    with pytest.raises(SettingsError):
        LabyrinthSettings.load(user_path=path, env={})


def test_invalid_dimensions_are_rejected(tmp_path):
    path = write(tmp_path / "small.yaml", "maze:\n  width: 4\n")
    with pytest.raises(MazeConfigError):
        LabyrinthSettings.load(user_path=path, env={})


def test_environment_overrides_win():
    env = {
        "LABYRINTH_SEED": "7",
        "LABYRINTH_WIDTH": "21",
        "LABYRINTH_HEIGHT": "15",
        "LABYRINTH_CARVE_STYLE": "1",
        "LABYRINTH_RADIUS": "2",
    }
    s = LabyrinthSettings.load(preset="easy", env=env)
    assert s.seed == 7
    assert (s.maze.width, s.maze.height, s.maze.carve_style) == (21, 15, 1)
    assert s.fog.radius == 2
    assert s.maze.loops is True


def test_non_numeric_seed_is_kept_as_text():
    assert LabyrinthSettings.load(env={"LABYRINTH_SEED": "crypt"}).seed == "crypt"


def test_bad_numeric_override():
    with pytest.raises(SettingsError):
        LabyrinthSettings.load(env={"LABYRINTH_WIDTH": "wide"})


def test_save_and_reload(isolated_config_dir):
    s = LabyrinthSettings.load(preset="hard", env={})
    s.save(LabyrinthSettings.user_settings_path())
    again = LabyrinthSettings.load(env={})
    assert again == s


def test_movement_validation():
    with pytest.raises(ValueError):
        MovementSettings(speed=0)
