import os
import subprocess
import sys
from pathlib import Path

import numpy as np
import pytest

torch = pytest.importorskip("torch")
pytest.importorskip("matplotlib")

REPO_ROOT = Path(__file__).resolve().parent.parent
SRC_PATH = REPO_ROOT / "src"


def _env_with_src() -> dict[str, str]:
    env = os.environ.copy()
    env["PYTHONPATH"] = str(SRC_PATH)
    env["MPLBACKEND"] = "Agg"
    return env


def test_train_digits_workflow(tmp_path) -> None:
    rows = np.zeros((10, 266))
    rows[:, :256] = np.random.default_rng(0).integers(0, 2, size=(10, 256))
    for index in range(10):
        rows[index, 256 + index] = 1.0
    data_path = tmp_path / "semeion.data"
    np.savetxt(data_path, rows, fmt="%.4f")
    checkpoint_path = tmp_path / "digits.pt"
    plot_path = tmp_path / "accuracy.png"

    train_cmd = [
        sys.executable,
        "scripts/train_digits.py",
        "--data-path",
        str(data_path),
        "--hidden-layers",
        "1",
        "--rounds",
        "2",
        "--train-iterations",
        "5",
        "--test-iterations",
        "5",
        "--seed",
        "0",
        "--save-path",
        str(checkpoint_path),
        "--plot-path",
        str(plot_path),
    ]
    result = subprocess.run(
        train_cmd,
        cwd=REPO_ROOT,
        env=_env_with_src(),
        check=True,
        capture_output=True,
        text=True,
    )
    assert "10 training iterations performed" in result.stdout
    assert checkpoint_path.exists()
    assert plot_path.exists()


def test_prepare_semeion_copies_dataset(tmp_path) -> None:
    source = tmp_path / "source.data"
    source.write_text("0 1\n", encoding="utf-8")
    out_dir = tmp_path / "data"
    cmd = [
        sys.executable,
        "scripts/prepare_semeion.py",
        "--url",
        source.as_uri(),
        "--out-dir",
        str(out_dir),
    ]
    subprocess.run(cmd, cwd=REPO_ROOT, env=_env_with_src(), check=True, capture_output=True, text=True)
    assert (out_dir / "semeion.data").read_text(encoding="utf-8") == "0 1\n"
