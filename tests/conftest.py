from __future__ import annotations

from pathlib import Path

import matplotlib

matplotlib.use("Agg")
import matplotlib.pyplot as plt
import pandas as pd
import pytest

ROOT = Path(__file__).resolve().parents[1]

FLAG_ROWS = [
    # country, bars, stripes, red, green, blue, gold, white, black, orange
    ("France", 3, 0, 1, 0, 1, 0, 1, 0, 0),
    ("Italy", 3, 0, 1, 1, 0, 0, 1, 0, 0),
    ("Germany", 0, 3, 1, 0, 0, 1, 0, 1, 0),
    ("Sweden", 0, 0, 0, 0, 1, 1, 0, 0, 0),
    ("Ireland", 3, 0, 0, 1, 0, 0, 1, 0, 1),
    ("Austria", 0, 3, 1, 0, 0, 0, 1, 0, 0),
    ("Poland", 0, 2, 1, 0, 0, 0, 1, 0, 0),
    ("Netherlands", 0, 3, 1, 0, 1, 0, 1, 0, 0),
]
FLAG_HEADER = ["country", "bars", "stripes", "red", "green", "blue", "gold", "white", "black", "orange"]


@pytest.fixture
def flags() -> pd.DataFrame:
    return pd.DataFrame(FLAG_ROWS, columns=FLAG_HEADER)


@pytest.fixture
def flags_csv(tmp_path: Path, flags: pd.DataFrame) -> Path:
    p = tmp_path / "flags.csv"
    flags.to_csv(p, index=False)
    return p


@pytest.fixture
def bundled_csv() -> Path:
    return ROOT / "data" / "european_flags.csv"


@pytest.fixture(autouse=True)
def _close_figures():
    yield
    plt.close("all")
