#!/usr/bin/env python3
"""
Render every workshop figure and table, plus an optional PDF handout.

Usage:
  python -m scripts.render_workshop --config config/flagsets.yaml --handout outputs/workshop/handout.pdf

Or directly:
  python scripts/render_workshop.py --source https://example.org/flags.csv --output-dir outputs/workshop
"""

import argparse
import json
import sys
import pathlib

# Ensure project root is on sys.path when run as a script
ROOT = pathlib.Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from flagsets.config import load_config
from flagsets.pipeline import run_workshop
from flagsets.reporting import create_handout


def main():
    parser = argparse.ArgumentParser()
    parser.add_argument("--config", default="config/flagsets.yaml")
    parser.add_argument("--source", default=None)
    parser.add_argument("--output-dir", default=None)
    parser.add_argument("--handout", default=None)
    args = parser.parse_args()

    cfg = load_config(args.config)
    if args.source:
        cfg["source"] = args.source
    if args.output_dir:
        cfg["output_dir"] = args.output_dir
    summary = run_workshop(cfg)
    if args.handout:
        create_handout(summary, args.handout)
    print(json.dumps({k: summary[k] for k in ("rows", "set_sizes", "membership_ok", "roundtrip_ok")}, indent=2))
    print(f"Wrote {len(summary['figures'])} figures to {cfg['output_dir']}")


if __name__ == "__main__":
    main()
