"""End‑to‑end workshop orchestration.

This module stitches together the ingestion, reshaping, charting and
set-diagram steps defined in the other modules. run_workshop walks the
workshop in order:

(a) load the flags table, (b) reshape it to long form, (c) draw the
exploratory charts, (d) group countries into colour sets, (e) draw the
Venn, Euler and upset views, and (f) reshape the long form back to wide
as the appendix round trip.
"""

from __future__ import annotations

import os
from typing import Any, Dict, List

from .config import load_config
from .data_ingest import _get_logger, load_flags
from .transforms import (
    to_long,
    to_wide,
    color_sets,
    set_sizes,
    check_membership_counts,
    exclusive_intersections,
)
from .exploration import (
    color_frequency_chart,
    bars_stripes_chart,
    colors_per_flag_chart,
    long_form_chart,
    save_figure,
)
from .venn import venn_diagram
from .euler import euler_diagram, empty_regions
from .upset import UpsetOptions, Highlight, upset_plot


def run_workshop(config: Dict[str, Any]) -> Dict[str, Any]:
    """
    Run every workshop step and save its artefacts.

    Args:
        config: Settings as returned by load_config (source, output_dir,
            venn_colors, euler_colors, upset, http_timeout).

    Returns:
        A summary dict with the set sizes, the membership check result,
        the round-trip result, the exclusive intersection sizes and the
        paths of every saved figure/table.
    """
    log = _get_logger()
    out_dir = config["output_dir"]
    os.makedirs(out_dir, exist_ok=True)

    # (a) load
    flags = load_flags(config["source"], timeout=int(config.get("http_timeout", 20)))

    # (b) reshape to long form
    long_df = to_long(flags)
    long_path = os.path.join(out_dir, "flags_long.csv")
    long_df.to_csv(long_path, index=False)

    # (c) exploratory charts
    figures: Dict[str, str] = {}
    figures["color_frequency"] = save_figure(color_frequency_chart(flags), out_dir, "color_frequency")
    figures["bars_stripes"] = save_figure(bars_stripes_chart(flags), out_dir, "bars_stripes")
    figures["colors_per_flag"] = save_figure(colors_per_flag_chart(flags), out_dir, "colors_per_flag")
    figures["long_form"] = save_figure(long_form_chart(long_df), out_dir, "long_form")

    # (d) named sets
    sets = color_sets(long_df)
    membership_ok = check_membership_counts(flags, sets)

    # (e) set-intersection views
    venn_colors: List[str] = list(config["venn_colors"])
    euler_colors: List[str] = list(config["euler_colors"])
    figures["venn"] = save_figure(venn_diagram(sets, venn_colors).figure, out_dir, "venn")
    figures["euler"] = save_figure(euler_diagram(sets, euler_colors).figure, out_dir, "euler")

    upset_cfg = config.get("upset", {})
    options = UpsetOptions.from_dict(upset_cfg.get("options"))
    highlights = [Highlight.from_dict(h) for h in upset_cfg.get("highlights", [])]
    catplots = list(upset_cfg.get("catplots", []))
    figures["upset"] = save_figure(upset_plot(flags, options, highlights, catplots), out_dir, "upset")

    # (f) appendix: long back to wide
    wide = to_wide(long_df)
    wide_path = os.path.join(out_dir, "flags_wide_roundtrip.csv")
    wide.to_csv(wide_path)
    original = flags.sort_values("country").reset_index(drop=True)
    roundtrip_ok = wide.reset_index().equals(original)
    if not roundtrip_ok:
        log.warning("Round trip wide -> long -> wide did not reproduce the original table")

    regions = exclusive_intersections(sets)
    log.info("Workshop finished: figures=%d, regions=%d, output=%s", len(figures), len(regions), out_dir)
    return {
        "rows": int(len(flags)),
        "set_sizes": set_sizes(sets).to_dict(),
        "membership_ok": membership_ok,
        "roundtrip_ok": bool(roundtrip_ok),
        "intersections": {"&".join(k): len(v) for k, v in regions.items()},
        "euler_hidden_regions": empty_regions(sets, euler_colors),
        "figures": figures,
        "tables": {"long": long_path, "wide": wide_path},
    }


if __name__ == "__main__":
    import argparse
    import pprint

    parser = argparse.ArgumentParser(description="Run the flag set-intersection workshop")
    parser.add_argument("--config", default="config/flagsets.yaml", help="Path to the YAML config")
    parser.add_argument("--source", help="CSV path or http(s) URL of the flags table")
    parser.add_argument("--output-dir", help="Directory for figures and tables")
    parser.add_argument("--venn-colors", nargs="+", help="Colours to draw in the Venn diagram")
    parser.add_argument("--handout", help="Optional PDF handout path")
    args = parser.parse_args()

    try:
        cfg = load_config(args.config)
        if args.source:
            cfg["source"] = args.source
        if args.output_dir:
            cfg["output_dir"] = args.output_dir
        if args.venn_colors:
            cfg["venn_colors"] = args.venn_colors
        summary = run_workshop(cfg)
        if args.handout:
            from .reporting import create_handout

            create_handout(summary, args.handout)
    except (ValueError, OSError) as exc:
        # requests errors derive from OSError
        parser.exit(1, f"Workshop failed: {exc}\n")
    pprint.pprint(summary)
