"""Venn diagrams of flag colour sets.

Every logically possible region is drawn and labelled with its size,
empty ones included. Two or three sets use the classic unweighted layout
from matplotlib-venn; four to six sets use the pyvenn ``venn`` package,
which has fixed layouts up to six sets.
"""

from __future__ import annotations

from typing import Iterable, List, Mapping, Optional, Sequence

import matplotlib

matplotlib.use("Agg")
import matplotlib.pyplot as plt
from matplotlib_venn import venn2, venn3
from matplotlib_venn.layout.venn2 import DefaultLayoutAlgorithm as Venn2Layout
from matplotlib_venn.layout.venn3 import DefaultLayoutAlgorithm as Venn3Layout
from venn import venn as pyvenn

from .data_ingest import _get_logger
from .exploration import PLOT_COLORS


def colors_for_sets(names: Iterable[str]) -> List[str]:
    """Matplotlib colour per set name; unknown names fall back to grey."""
    return [PLOT_COLORS.get(n, "lightgray") for n in names]


def select_sets(sets: Mapping[str, Iterable[str]], colors: Optional[Sequence[str]]) -> dict:
    names = list(colors) if colors is not None else list(sets)
    unknown = [n for n in names if n not in sets]
    if unknown:
        raise ValueError(f"Unknown sets: {', '.join(unknown)}")
    return {n: set(sets[n]) for n in names}


def venn_diagram(
    sets: Mapping[str, Iterable[str]],
    colors: Optional[Sequence[str]] = None,
    ax: Optional[plt.Axes] = None,
) -> plt.Axes:
    """Draw an unweighted Venn diagram of the chosen sets (2 to 6)."""
    chosen = select_sets(sets, colors)
    n = len(chosen)
    if n < 2 or n > 6:
        raise ValueError(f"Venn diagrams need 2 to 6 sets, got {n}")
    if ax is None:
        _, ax = plt.subplots(figsize=(6, 6), dpi=150)
    names = list(chosen)
    if n <= 3:
        # Equal region areas regardless of size; labels still show real counts
        if n == 2:
            draw, layout = venn2, Venn2Layout(fixed_subset_sizes=(1,) * 3)
        else:
            draw, layout = venn3, Venn3Layout(fixed_subset_sizes=(1,) * 7)
        draw(
            subsets=[chosen[k] for k in names],
            set_labels=names,
            set_colors=colors_for_sets(names),
            alpha=0.5,
            ax=ax,
            layout_algorithm=layout,
        )
    else:
        pyvenn(chosen, fmt="{size}", cmap=colors_for_sets(names), fontsize=9, legend_loc="upper right", ax=ax)
    ax.set_title(f"Venn diagram: {', '.join(names)}")
    _get_logger().info("Drew Venn diagram for %d sets", n)
    return ax
