"""Upset plots of flag colour combinations.

Upset plots draw one column per colour combination instead of overlapping
shapes, so they scale past the three or four sets a Venn diagram can show.
This module adds a thin layer over ``upsetplot``:

- UpsetOptions: which intersections to keep (size/degree bounds,
  required or excluded colours) and how to sort/label them
- Highlight: a style applied to intersections matching present/absent
  colours (style_subsets)
- catplots: strip plots of the bars/stripes counts per intersection
"""

from __future__ import annotations

from dataclasses import dataclass, field, asdict
from typing import Any, Dict, Iterable, List, Optional, Sequence

import matplotlib

matplotlib.use("Agg")
import matplotlib.pyplot as plt
import numpy as np
import pandas as pd
from upsetplot import UpSet, from_indicators, query

from .data_ingest import COLOR_COLUMNS, COUNT_COLUMNS, _get_logger


@dataclass
class UpsetOptions:
    min_subset_size: Optional[int] = None
    max_subset_size: Optional[int] = None
    min_degree: Optional[int] = None
    max_degree: Optional[int] = None
    present: List[str] = field(default_factory=list)
    absent: List[str] = field(default_factory=list)
    sort_by: str = "cardinality"
    show_counts: bool = True
    show_percentages: bool = False

    @classmethod
    def from_dict(cls, d: Optional[Dict[str, Any]]) -> "UpsetOptions":
        d = dict(d or {})
        unknown = set(d) - set(cls.__dataclass_fields__)
        if unknown:
            raise ValueError(f"Unknown upset options: {', '.join(sorted(unknown))}")
        for key in ("present", "absent"):
            if d.get(key) is None:
                d.pop(key, None)
        return cls(**d)

    def query_kwargs(self) -> Dict[str, Any]:
        kw = asdict(self)
        for key in ("sort_by", "show_counts", "show_percentages"):
            kw.pop(key)
        kw.pop("present")
        kw.pop("absent")
        return kw


@dataclass
class Highlight:
    present: List[str] = field(default_factory=list)
    absent: List[str] = field(default_factory=list)
    facecolor: Optional[str] = None
    edgecolor: Optional[str] = None
    label: Optional[str] = None

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "Highlight":
        unknown = set(d) - set(cls.__dataclass_fields__)
        if unknown:
            raise ValueError(f"Unknown highlight settings: {', '.join(sorted(unknown))}")
        return cls(**d)


def upset_data(df: pd.DataFrame, colors: Optional[Sequence[str]] = None) -> pd.DataFrame:
    """Index the flags by boolean colour membership for upsetplot.

    The remaining columns (country, bars, stripes) are carried as data so
    they can be summarised per intersection.
    """
    colors = list(colors) if colors is not None else list(COLOR_COLUMNS)
    unknown = [c for c in colors if c not in df.columns]
    if unknown:
        raise ValueError(f"Unknown colour columns: {', '.join(unknown)}")
    indicators = df[colors].astype(bool)
    carried = df[["country"] + [c for c in COUNT_COLUMNS if c in df.columns]]
    return from_indicators(indicators, data=carried)


def _check_categories(data: pd.DataFrame, names: Iterable[str], what: str) -> None:
    unknown = [n for n in names if n not in data.index.names]
    if unknown:
        raise ValueError(f"Unknown {what} categories: {', '.join(unknown)}")


def filter_subsets(data: pd.DataFrame, options: Optional[UpsetOptions] = None) -> pd.DataFrame:
    """Keep the rows whose intersection passes every filter in options.

    present/absent are applied on the membership index; size and degree
    bounds go through upsetplot.query.
    """
    options = options or UpsetOptions()
    _check_categories(data, options.present + options.absent, "filter")
    mask = np.ones(len(data), dtype=bool)
    for name in options.present:
        mask &= np.asarray(data.index.get_level_values(name), dtype=bool)
    for name in options.absent:
        mask &= ~np.asarray(data.index.get_level_values(name), dtype=bool)
    selected = data[mask]
    if selected.empty:
        return selected
    return query(selected, sort_by=options.sort_by, **options.query_kwargs()).data


def subset_sizes(data: pd.DataFrame, options: Optional[UpsetOptions] = None) -> pd.Series:
    """Sizes of the intersections that survive the filter (may be empty)."""
    options = options or UpsetOptions()
    selected = filter_subsets(data, options)
    if selected.empty:
        return pd.Series(dtype="int64", name="size")
    return query(selected, sort_by=options.sort_by).subset_sizes


def upset_plot(
    df: pd.DataFrame,
    options: Optional[UpsetOptions] = None,
    highlights: Sequence[Highlight] = (),
    catplots: Sequence[str] = (),
    colors: Optional[Sequence[str]] = None,
    fig: Optional[plt.Figure] = None,
) -> plt.Figure:
    """Draw an upset plot of colour combinations.

    Raises ValueError if the filter leaves no intersection to draw.
    """
    log = _get_logger()
    options = options or UpsetOptions()
    data = upset_data(df, colors)
    selected = filter_subsets(data, options)
    if selected.empty:
        raise ValueError("No intersections left after filtering")
    n_intersections = selected.index.nunique()

    upset = UpSet(
        selected,
        subset_size="count",
        sort_by=options.sort_by,
        show_counts=options.show_counts,
        show_percentages=options.show_percentages,
    )
    for hl in highlights:
        _check_categories(data, hl.present + hl.absent, "highlight")
        upset.style_subsets(
            present=hl.present or None,
            absent=hl.absent or None,
            facecolor=hl.facecolor,
            edgecolor=hl.edgecolor,
            label=hl.label,
        )
    for col in catplots:
        if col not in selected.columns:
            raise ValueError(f"Cannot add catplot for unknown column '{col}'")
        upset.add_catplot(value=col, kind="strip", color="steelblue", elements=2)

    if fig is None:
        fig = plt.figure(figsize=(10, 6), dpi=150)
    upset.plot(fig=fig)
    log.info(
        "Drew upset plot: intersections=%d, highlights=%d, catplots=%d",
        n_intersections,
        len(highlights),
        len(catplots),
    )
    return fig
