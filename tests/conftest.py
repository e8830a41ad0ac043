import sys
from pathlib import Path

import pytest

# Make 'src' importable without installing the package
ROOT = Path(__file__).resolve().parents[1]
src = ROOT / "src"
if str(src) not in sys.path:
    sys.path.insert(0, str(src))


@pytest.fixture(autouse=True)
def _no_user_settings(tmp_path_factory, monkeypatch):
    # keep a developer's own settings.yaml and LABYRINTH_* vars out of the tests
    for name in ("LABYRINTH_SEED", "LABYRINTH_WIDTH", "LABYRINTH_HEIGHT", "LABYRINTH_CARVE_STYLE", "LABYRINTH_RADIUS"):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("LABYRINTH_CONFIG_DIR", str(tmp_path_factory.mktemp("config")))
