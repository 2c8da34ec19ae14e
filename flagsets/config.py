from __future__ import annotations

from typing import Any, Dict
import copy
import os
import yaml


DEFAULTS: Dict[str, Any] = {
    "source": "data/european_flags.csv",
    "output_dir": "outputs/workshop",
    "http_timeout": 20,
    "venn_colors": ["red", "white", "blue"],
    "euler_colors": ["red", "white", "blue"],
    "upset": {
        "options": {
            "sort_by": "cardinality",
            "show_counts": True,
            "show_percentages": False,
            "min_subset_size": None,
            "max_degree": None,
        },
        "highlights": [],
        "catplots": ["bars", "stripes"],
    },
}


def _merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    out = copy.deepcopy(base)
    for k, v in (override or {}).items():
        if isinstance(v, dict) and isinstance(out.get(k), dict):
            out[k] = _merge(out[k], v)
        else:
            out[k] = v
    return out


def load_config(yaml_path: str | None = "config/flagsets.yaml") -> Dict[str, Any]:
    """Load workshop settings from YAML on top of DEFAULTS.

    Passing None skips the file. FLAGSETS_SOURCE in the environment
    overrides the data source.
    """
    data: Dict[str, Any] = {}
    if yaml_path is not None:
        if not os.path.exists(yaml_path):
            raise FileNotFoundError(f"Config file not found: {yaml_path}")
        with open(yaml_path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    cfg = _merge(DEFAULTS, data.get("workshop", data))
    env_source = os.environ.get("FLAGSETS_SOURCE")
    if env_source:
        cfg["source"] = env_source
    return cfg
