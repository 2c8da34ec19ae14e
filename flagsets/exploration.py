from __future__ import annotations
import os

import numpy as np
import pandas as pd
import matplotlib

# Use Agg backend for headless environments
matplotlib.use("Agg")
import matplotlib.pyplot as plt
from matplotlib.colors import ListedColormap
import plotly.express as px
import plotly.graph_objects as go

from .data_ingest import COLOR_COLUMNS, _get_logger
from .transforms import colors_per_flag

# Matplotlib colour for each flag colour column; gold/white adjusted so they
# stay visible on a white background.
PLOT_COLORS = {
    "red": "tab:red",
    "green": "tab:green",
    "blue": "tab:blue",
    "gold": "goldenrod",
    "white": "whitesmoke",
    "black": "black",
    "orange": "tab:orange",
}


def _color_frequency(df: pd.DataFrame) -> pd.Series:
    freq = df[list(COLOR_COLUMNS)].sum().sort_values(ascending=False)
    freq.name = "flags"
    return freq


def color_frequency_chart(df: pd.DataFrame) -> plt.Figure:
    """Bar chart of how many flags use each colour."""
    freq = _color_frequency(df)
    fig, ax = plt.subplots(figsize=(6.5, 3.6), dpi=150)
    ax.bar(
        freq.index,
        freq.values,
        color=[PLOT_COLORS[c] for c in freq.index],
        edgecolor="dimgray",
        linewidth=0.8,
    )
    for x, v in enumerate(freq.values):
        ax.text(x, v, str(int(v)), ha="center", va="bottom", fontsize=8)
    ax.set_title(f"Colour frequency across {len(df)} flags")
    ax.set_xlabel("Colour")
    ax.set_ylabel("Number of flags")
    fig.tight_layout()
    return fig


def bars_stripes_chart(df: pd.DataFrame) -> plt.Figure:
    """Side‑by‑side histograms of vertical bars and horizontal stripes."""
    fig, axes = plt.subplots(1, 2, figsize=(6.5, 3.0), dpi=150, sharey=True)
    for ax, col in zip(axes, ["bars", "stripes"]):
        counts = df[col].value_counts().sort_index()
        ax.bar(counts.index.astype(str), counts.values, color="steelblue")
        ax.set_title(col.capitalize())
        ax.set_xlabel(f"Number of {col}")
    axes[0].set_ylabel("Number of flags")
    fig.tight_layout()
    return fig


def colors_per_flag_chart(df: pd.DataFrame) -> plt.Figure:
    n = colors_per_flag(df)
    bins = np.arange(n.min(), n.max() + 2) - 0.5
    fig, ax = plt.subplots(figsize=(6.5, 3.0), dpi=150)
    ax.hist(n.values, bins=bins, color="slategray", edgecolor="white")
    ax.set_xticks(range(int(n.min()), int(n.max()) + 1))
    ax.set_title("Colours per flag")
    ax.set_xlabel("Distinct colours")
    ax.set_ylabel("Number of flags")
    fig.tight_layout()
    return fig


def long_form_chart(long_df: pd.DataFrame) -> plt.Figure:
    """Country x colour presence grid drawn from the long table."""
    colours = long_df[long_df["attribute"].isin(COLOR_COLUMNS)]
    grid = colours.pivot(index="country", columns="attribute", values="value")
    grid = grid.loc[:, [c for c in COLOR_COLUMNS if c in grid.columns]]
    height = max(3.0, 0.18 * len(grid))
    fig, ax = plt.subplots(figsize=(4.5, height), dpi=150)
    ax.imshow(grid.values, aspect="auto", cmap=ListedColormap(["white", "dimgray"]), vmin=0, vmax=1)
    ax.set_xticks(range(grid.shape[1]))
    ax.set_xticklabels(grid.columns.tolist(), fontsize=7, rotation=45)
    ax.set_yticks(range(grid.shape[0]))
    ax.set_yticklabels(grid.index.tolist(), fontsize=6)
    ax.set_title("Colour presence (long form)")
    fig.tight_layout()
    return fig


def color_frequency_plotly(df: pd.DataFrame) -> go.Figure:
    freq = _color_frequency(df).reset_index()
    freq.columns = ["colour", "flags"]
    fig = px.bar(
        freq,
        x="colour",
        y="flags",
        color="colour",
        color_discrete_map={c: PLOT_COLORS[c].replace("tab:", "") for c in COLOR_COLUMNS},
        text="flags",
    )
    fig.update_traces(marker_line_color="gray", marker_line_width=1)
    fig.update_layout(
        title="Colour frequency",
        xaxis_title="Colour",
        yaxis_title="Number of flags",
        showlegend=False,
        height=400,
        margin=dict(l=10, r=10, t=40, b=10),
    )
    return fig


def save_figure(fig: plt.Figure, output_dir: str, name: str) -> str:
    """Save a matplotlib figure as PNG, close it and return the path."""
    os.makedirs(output_dir, exist_ok=True)
    fname = f"{name}.png".replace("/", "_").replace(" ", "_")
    path = os.path.join(output_dir, fname)
    fig.savefig(path, bbox_inches="tight")
    plt.close(fig)
    _get_logger().info("Saved figure %s", path)
    return path
