from __future__ import annotations

from pathlib import Path

import matplotlib.pyplot as plt
import pandas as pd
import plotly.graph_objects as go
import pytest

from flagsets.euler import empty_regions, euler_diagram, region_sizes
from flagsets.exploration import (
    bars_stripes_chart,
    color_frequency_chart,
    color_frequency_plotly,
    colors_per_flag_chart,
    long_form_chart,
    save_figure,
)
from flagsets.transforms import color_sets, to_long
from flagsets.venn import colors_for_sets, venn_diagram


def test_exploration_charts_return_figures(flags: pd.DataFrame) -> None:
    for fig in (
        color_frequency_chart(flags),
        bars_stripes_chart(flags),
        colors_per_flag_chart(flags),
        long_form_chart(to_long(flags)),
    ):
        assert isinstance(fig, plt.Figure)


def test_color_frequency_bars_sorted(flags: pd.DataFrame) -> None:
    fig = color_frequency_chart(flags)
    heights = [p.get_height() for p in fig.axes[0].patches]
    assert heights == sorted(heights, reverse=True)
    assert heights[0] == 6


def test_color_frequency_plotly(flags: pd.DataFrame) -> None:
    fig = color_frequency_plotly(flags)
    assert isinstance(fig, go.Figure)
    assert sum(sum(trace.y) for trace in fig.data) == flags[["red", "green", "blue", "gold", "white", "black", "orange"]].sum().sum()


def test_save_figure(tmp_path: Path, flags: pd.DataFrame) -> None:
    path = save_figure(color_frequency_chart(flags), str(tmp_path / "figs"), "colour frequency")
    assert Path(path).name == "colour_frequency.png"
    assert Path(path).stat().st_size > 0


def test_colors_for_sets() -> None:
    assert colors_for_sets(["gold", "white", "mauve"]) == ["goldenrod", "whitesmoke", "lightgray"]


@pytest.mark.parametrize(
    "colours",
    [
        ["red", "white"],
        ["red", "white", "blue"],
        ["red", "green", "blue", "white"],
        ["red", "green", "blue", "gold", "white"],
        ["red", "green", "blue", "gold", "white", "black"],
    ],
)
def test_venn_diagram(flags: pd.DataFrame, colours: list) -> None:
    ax = venn_diagram(color_sets(flags), colours)
    assert ax.get_title() == f"Venn diagram: {', '.join(colours)}"


def test_venn_shows_empty_regions(flags: pd.DataFrame) -> None:
    ax = venn_diagram(color_sets(flags), ["red", "white", "blue"])
    labels = [t.get_text() for t in ax.texts]
    # Seven regions, two of them empty
    assert labels.count("0") == 2


@pytest.mark.parametrize("colours", [["red"], ["red", "green", "blue", "gold", "white", "black", "orange"]])
def test_venn_rejects_set_count(flags: pd.DataFrame, colours: list) -> None:
    with pytest.raises(ValueError, match="2 to 6 sets"):
        venn_diagram(color_sets(flags), colours)


def test_venn_rejects_unknown_set(flags: pd.DataFrame) -> None:
    with pytest.raises(ValueError, match="Unknown sets: purple"):
        venn_diagram(color_sets(flags), ["red", "purple"])


def test_region_sizes(flags: pd.DataFrame) -> None:
    sizes = region_sizes(color_sets(flags), ["red", "white", "blue"])
    assert sizes == {"001": 1, "010": 1, "011": 0, "100": 1, "101": 0, "110": 3, "111": 2}
    assert empty_regions(color_sets(flags), ["red", "white", "blue"]) == ["011", "101"]


def test_euler_hides_empty_regions(flags: pd.DataFrame) -> None:
    ax = euler_diagram(color_sets(flags), ["red", "white", "blue"])
    labels = [t.get_text() for t in ax.texts]
    assert "0" not in labels
    assert ax.get_title() == "Euler diagram: red, white, blue"


def test_euler_rejects_four_sets(flags: pd.DataFrame) -> None:
    with pytest.raises(ValueError, match="2 or 3 sets"):
        euler_diagram(color_sets(flags), ["red", "green", "blue", "white"])


def test_euler_rejects_empty_set(flags: pd.DataFrame) -> None:
    with pytest.raises(ValueError, match="empty sets: orange"):
        euler_diagram(color_sets(flags.assign(orange=0)), ["red", "orange"])


def test_two_set_venn_labels_counts(flags: pd.DataFrame) -> None:
    ax = venn_diagram(color_sets(flags), ["red", "white"])
    labels = [t.get_text() for t in ax.texts]
    # red only, white only, both
    for count in ("1", "5"):
        assert count in labels
    assert labels.count("1") == 2
