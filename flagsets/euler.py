"""Euler diagrams: area-weighted set diagrams without empty regions.

matplotlib-venn lays out two or three circles with areas proportional to
set and intersection sizes; regions with no members are then hidden so
only the intersections that occur in the data remain.
"""

from __future__ import annotations

from itertools import product
from typing import Dict, Iterable, List, Mapping, Optional, Sequence

import matplotlib

matplotlib.use("Agg")
import matplotlib.pyplot as plt
from matplotlib_venn import venn2, venn3

from .data_ingest import _get_logger
from .venn import colors_for_sets, select_sets


def region_sizes(sets: Mapping[str, Iterable[str]], colors: Optional[Sequence[str]] = None) -> Dict[str, int]:
    """Size of every exclusive region keyed by matplotlib-venn id ("10", "011", ...)."""
    chosen = select_sets(sets, colors)
    names = list(chosen)
    universe = set().union(*chosen.values())
    sizes: Dict[str, int] = {}
    for bits in product("01", repeat=len(names)):
        region_id = "".join(bits)
        if "1" not in region_id:
            continue
        members = set(universe)
        for name, bit in zip(names, bits):
            members = members & chosen[name] if bit == "1" else members - chosen[name]
        sizes[region_id] = len(members)
    return sizes


def empty_regions(sets: Mapping[str, Iterable[str]], colors: Optional[Sequence[str]] = None) -> List[str]:
    return sorted(k for k, v in region_sizes(sets, colors).items() if v == 0)


def euler_diagram(
    sets: Mapping[str, Iterable[str]],
    colors: Optional[Sequence[str]] = None,
    ax: Optional[plt.Axes] = None,
) -> plt.Axes:
    """Draw an area-weighted Euler diagram of two or three sets."""
    chosen = select_sets(sets, colors)
    names = list(chosen)
    n = len(names)
    if n not in (2, 3):
        raise ValueError(f"Euler diagrams support 2 or 3 sets, got {n}")
    empty_sets = [k for k, v in chosen.items() if not v]
    if empty_sets:
        raise ValueError(f"Cannot weight empty sets: {', '.join(empty_sets)}")
    if ax is None:
        _, ax = plt.subplots(figsize=(6, 6), dpi=150)
    draw = venn2 if n == 2 else venn3
    diagram = draw(
        subsets=[chosen[k] for k in names],
        set_labels=names,
        set_colors=colors_for_sets(names),
        alpha=0.5,
        ax=ax,
    )
    hidden = empty_regions(chosen)
    for region_id in hidden:
        label = diagram.get_label_by_id(region_id)
        if label is not None:
            label.set_text("")
        patch = diagram.get_patch_by_id(region_id)
        if patch is not None:
            patch.set_visible(False)
    ax.set_title(f"Euler diagram: {', '.join(names)}")
    _get_logger().info("Drew Euler diagram for %d sets, hid %d empty regions", n, len(hidden))
    return ax
