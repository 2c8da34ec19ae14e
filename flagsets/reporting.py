from __future__ import annotations
import os
import unicodedata
from typing import Any, Dict

from fpdf import FPDF

from .data_ingest import _get_logger

SECTION_TITLES = {
    "color_frequency": "Colour frequency",
    "bars_stripes": "Bars and stripes",
    "colors_per_flag": "Colours per flag",
    "long_form": "Long form",
    "venn": "Venn diagram",
    "euler": "Euler diagram",
    "upset": "Upset plot",
}


def _sanitize_text(text: str) -> str:
    if text is None:
        return ""
    # Replace common Unicode punctuation with ASCII equivalents
    replacements = {
        "‐": "-",  # hyphen
        "–": "-",  # en dash
        "‘": "'",  # left single quote
        "’": "'",  # right single quote
        "“": '"',   # left double quote
        "”": '"',   # right double quote
        "…": "...",  # ellipsis
    }
    for k, v in replacements.items():
        text = text.replace(k, v)
    # Core PDF fonts are latin-1 only
    text_norm = unicodedata.normalize("NFKD", text)
    return text_norm.encode("latin-1", "ignore").decode("latin-1", "ignore")


def _line(pdf: FPDF, h: float, text: str) -> None:
    pdf.cell(0, h, _sanitize_text(text), new_x="LMARGIN", new_y="NEXT")


def create_handout(summary: Dict[str, Any], output_path: str) -> str:
    """Write a PDF handout with the workshop numbers and every saved figure.

    `summary` is the dict returned by pipeline.run_workshop.
    """
    out_dir = os.path.dirname(output_path)
    if out_dir:
        os.makedirs(out_dir, exist_ok=True)
    pdf = FPDF()
    pdf.set_auto_page_break(auto=True, margin=15)
    pdf.add_page()
    pdf.set_font("Helvetica", "B", 16)
    pdf.cell(0, 10, _sanitize_text("European Flags: Visualizing Set Intersections"), new_x="LMARGIN", new_y="NEXT", align="C")
    pdf.set_font("Helvetica", size=12)
    pdf.ln(2)
    _line(pdf, 7, f"Flags loaded: {summary['rows']}")
    _line(pdf, 7, f"Set sizes match column sums: {'yes' if summary['membership_ok'] else 'no'}")
    _line(pdf, 7, f"Wide -> long -> wide round trip exact: {'yes' if summary['roundtrip_ok'] else 'no'}")

    pdf.ln(3)
    pdf.set_font("Helvetica", "B", 12)
    _line(pdf, 8, "Flags per colour")
    pdf.set_font("Helvetica", size=11)
    for colour, size in summary["set_sizes"].items():
        _line(pdf, 6, f"{colour}: {size}")

    pdf.ln(3)
    pdf.set_font("Helvetica", "B", 12)
    _line(pdf, 8, "Exact colour combinations")
    pdf.set_font("Helvetica", size=10)
    ranked = sorted(summary["intersections"].items(), key=lambda kv: (-kv[1], kv[0]))
    for combo, n in ranked:
        _line(pdf, 6, f"{combo}: {n}")

    hidden = summary.get("euler_hidden_regions") or []
    if hidden:
        pdf.ln(2)
        pdf.multi_cell(0, 6, _sanitize_text(f"Empty regions hidden in the Euler diagram: {', '.join(hidden)}"))

    for key, path in summary["figures"].items():
        if not os.path.exists(path):
            continue
        pdf.add_page()
        pdf.set_font("Helvetica", "B", 12)
        _line(pdf, 8, SECTION_TITLES.get(key, key))
        pdf.image(path, w=180, h=240, keep_aspect_ratio=True)

    pdf.output(output_path)
    _get_logger().info("Wrote handout %s with %d figures", output_path, len(summary["figures"]))
    return output_path
