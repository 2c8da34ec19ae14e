"""Table reshaping and set construction.

This module moves the flags table between its wide layout (one column per
attribute) and a long layout (one row per country/attribute/value), and
groups the long form into named colour sets. The set helpers also expose
the exclusive intersection regions that Venn, Euler and upset plots draw.
"""

from __future__ import annotations

from itertools import compress
from typing import Dict, FrozenSet, Iterable, List, Mapping, Optional, Tuple

import pandas as pd

from .data_ingest import COLOR_COLUMNS, COUNT_COLUMNS, _get_logger

ColorSets = Dict[str, FrozenSet[str]]

LONG_COLUMNS = ["country", "attribute", "value"]


def _is_long(df: pd.DataFrame) -> bool:
    return list(df.columns) == LONG_COLUMNS


def to_long(df: pd.DataFrame, attributes: Optional[Iterable[str]] = None) -> pd.DataFrame:
    """Reshape the wide flags table into country/attribute/value rows.

    Attribute order follows the wide column order; rows are sorted by
    country first.
    """
    if attributes is None:
        attributes = [c for c in df.columns if c in COUNT_COLUMNS + COLOR_COLUMNS]
    attributes = list(attributes)
    missing = [a for a in attributes if a not in df.columns]
    if missing:
        raise ValueError(f"Unknown attributes: {', '.join(missing)}")
    long_df = df.melt(id_vars="country", value_vars=attributes, var_name="attribute", value_name="value")
    long_df["attribute"] = pd.Categorical(long_df["attribute"], categories=attributes, ordered=True)
    long_df = long_df.sort_values(["country", "attribute"], kind="stable").reset_index(drop=True)
    long_df["attribute"] = long_df["attribute"].astype(str)
    _get_logger().info("Reshaped to long: rows=%d, attributes=%d", len(long_df), len(attributes))
    return long_df


def to_wide(long_df: pd.DataFrame) -> pd.DataFrame:
    """Reshape a long table back to one row per country.

    Column order follows first appearance of each attribute. Raises
    ValueError when a (country, attribute) pair occurs more than once or
    is missing.
    """
    if not _is_long(long_df):
        raise ValueError(f"Long table must have columns {LONG_COLUMNS}")
    dupes = long_df.duplicated(subset=["country", "attribute"])
    if dupes.any():
        pairs = long_df.loc[dupes, ["country", "attribute"]].astype(str).agg("/".join, axis=1)
        raise ValueError(f"Duplicate observations: {', '.join(pairs)}")
    order = list(dict.fromkeys(long_df["attribute"]))
    wide = long_df.pivot(index="country", columns="attribute", values="value").loc[:, order]
    gaps = wide.isna().stack()
    gaps = gaps[gaps]
    if not gaps.empty:
        pairs = [f"{country}/{attribute}" for country, attribute in gaps.index]
        raise ValueError(f"Missing observations: {', '.join(pairs)}")
    wide = wide.astype("int64")
    wide.columns.name = None
    return wide


def color_sets(df: pd.DataFrame) -> ColorSets:
    """Group countries by flag colour.

    Accepts either the wide table or its long form. Every colour is a key,
    including colours no flag uses.
    """
    long_df = df if _is_long(df) else to_long(df, [c for c in COLOR_COLUMNS if c in df.columns])
    present = long_df[long_df["attribute"].isin(COLOR_COLUMNS) & (long_df["value"] == 1)]
    grouped = {name: frozenset(grp) for name, grp in present.groupby("attribute")["country"]}
    sets: ColorSets = {c: grouped.get(c, frozenset()) for c in COLOR_COLUMNS}
    _get_logger().info("Built colour sets: %s", ", ".join(f"{k}={len(v)}" for k, v in sets.items()))
    return sets


def set_sizes(sets: Mapping[str, Iterable[str]]) -> pd.Series:
    return pd.Series({k: len(set(v)) for k, v in sets.items()}, name="size", dtype="int64")


def check_membership_counts(df: pd.DataFrame, sets: Mapping[str, Iterable[str]]) -> bool:
    """Verify each set size equals the matching colour column sum."""
    sizes = set_sizes(sets)
    unknown = [c for c in sizes.index if c not in df.columns]
    if unknown:
        raise ValueError(f"Sets without a matching column: {', '.join(unknown)}")
    sums = df[[c for c in sizes.index]].sum()
    mismatched = [f"{c} (set={sizes[c]}, column={int(sums[c])})" for c in sizes.index if sizes[c] != sums[c]]
    if mismatched:
        raise ValueError(f"Set sizes disagree with column sums: {'; '.join(mismatched)}")
    return True


def sets_to_indicators(
    sets: Mapping[str, Iterable[str]],
    universe: Optional[Iterable[str]] = None,
) -> pd.DataFrame:
    """Rebuild a 0/1 indicator table (countries x sets) from named sets.

    Countries that belong to no set are only present if passed in universe.
    """
    members = {k: set(v) for k, v in sets.items()}
    countries = set().union(*members.values()) if members else set()
    if universe is not None:
        countries |= set(universe)
    index = sorted(countries)
    out = pd.DataFrame(
        {k: [int(c in v) for c in index] for k, v in members.items()},
        index=pd.Index(index, name="country"),
        dtype="int64",
    )
    return out


def exclusive_intersections(sets: Mapping[str, Iterable[str]]) -> pd.Series:
    """Map each observed colour combination to the countries having exactly it.

    Index entries are tuples of set names in the input order; countries in
    no set are ignored.
    """
    names = list(sets)
    indicators = sets_to_indicators(sets)
    regions: Dict[Tuple[str, ...], List[str]] = {}
    for country, row in indicators.iterrows():
        key = tuple(compress(names, row.tolist()))
        if key:
            regions.setdefault(key, []).append(country)
    # Plain Index of tuples; a dict of tuple keys would become a MultiIndex
    index = pd.Index(list(regions), tupleize_cols=False, dtype=object)
    return pd.Series([tuple(v) for v in regions.values()], index=index, dtype=object, name="countries")


def colors_per_flag(df: pd.DataFrame) -> pd.Series:
    """Number of distinct colours on each flag, indexed by country."""
    counts = df.set_index("country")[list(COLOR_COLUMNS)].sum(axis=1)
    counts.name = "n_colors"
    return counts
