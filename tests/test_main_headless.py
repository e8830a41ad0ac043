from __future__ import annotations

import os
import subprocess
import sys
from pathlib import Path

SRC = Path(__file__).resolve().parents[1] / "src"


def run_cli(tmp_path, *args):
    env = os.environ.copy()
    env["LABYRINTH_HEADLESS"] = "1"
    env["LABYRINTH_CONFIG_DIR"] = str(tmp_path)
    env["PYTHONPATH"] = os.pathsep.join(filter(None, [str(SRC), env.get("PYTHONPATH")]))
    cmd = [sys.executable, "-m", "labyrinth", *args]
    return subprocess.run(cmd, capture_output=True, text=True, env=env, timeout=30)


def test_headless_entrypoint_exits_successfully(tmp_path):
    proc = run_cli(tmp_path, "--headless", "--seed", "42", "--max-steps", "3", "--tick-rate", "0")

    assert proc.returncode == 0, proc.stderr
    assert "Dark Labyrinth (headless)" in proc.stdout
    assert "Loop complete (steps=3, seed=42" in proc.stdout


def test_bad_config_exits_with_usage_error(tmp_path):
    proc = run_cli(tmp_path, "--headless", "--config", str(tmp_path / "missing.yaml"))
    assert proc.returncode == 2
    assert "error:" in proc.stderr
