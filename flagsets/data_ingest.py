"""Data ingestion utilities for the flags workshop.

This module centralizes I/O for the European flags table so the rest of
the workshop stays simple. It includes helpers to:

- fetch the CSV over HTTP or read it from a local path
- standardize/clean columns and coerce numeric types
- validate the fixed schema (unique countries, 0/1 colour columns)
"""

from __future__ import annotations

from typing import Iterable
import io
import logging
import os
import pandas as pd
import requests

COLOR_COLUMNS = ("red", "green", "blue", "gold", "white", "black", "orange")
COUNT_COLUMNS = ("bars", "stripes")
FLAG_COLUMNS = ("country",) + COUNT_COLUMNS + COLOR_COLUMNS

# ---------------------------------------------------------------------------
# Logging
# ---------------------------------------------------------------------------

_LOGGER: logging.Logger | None = None


def _get_logger() -> logging.Logger:
    global _LOGGER
    if _LOGGER is not None:
        return _LOGGER
    logger = logging.getLogger("flagsets")
    logger.setLevel(logging.INFO)
    if not logger.handlers:
        try:
            out_dir = os.path.abspath(os.path.join(os.path.dirname(__file__), "..", "outputs", "logs"))
            os.makedirs(out_dir, exist_ok=True)
            fh = logging.FileHandler(os.path.join(out_dir, "flagsets.log"), encoding="utf-8")
            fh.setLevel(logging.INFO)
            fmt = logging.Formatter("%(asctime)s | %(levelname)s | %(name)s | %(message)s")
            fh.setFormatter(fmt)
            logger.addHandler(fh)
        except OSError:
            # Logs dir not writable; records still propagate to the root logger
            pass
    _LOGGER = logger
    return logger


# ---------------------------------------------------------------------------
# Column handling & readers
# ---------------------------------------------------------------------------


def standardize_columns(df: pd.DataFrame) -> pd.DataFrame:
    """Return a copy with lower‑snake‑case column names stripped of spaces."""
    out = df.copy()
    out.columns = [str(c).strip().replace(" ", "_").lower() for c in out.columns]
    return out


def coerce_numeric(df: pd.DataFrame, cols: Iterable[str]) -> pd.DataFrame:
    """Coerce selected columns to numeric (errors='coerce')."""
    out = df.copy()
    for c in cols:
        if c in out.columns:
            out[c] = pd.to_numeric(out[c], errors="coerce")
    return out


def _read_source(source: str, timeout: int) -> pd.DataFrame:
    if source.lower().startswith(("http://", "https://")):
        resp = requests.get(source, timeout=timeout)
        resp.raise_for_status()
        return pd.read_csv(io.StringIO(resp.text))
    return pd.read_csv(source)


def validate_flags(df: pd.DataFrame) -> pd.DataFrame:
    """Check the flags schema and return a clean copy in schema order.

    Raises ValueError on missing columns, duplicate or empty country
    names, colour values other than 0/1, or negative/non-integer counts.
    """
    log = _get_logger()
    missing = [c for c in FLAG_COLUMNS if c not in df.columns]
    if missing:
        raise ValueError(f"Flags table is missing columns: {', '.join(missing)}")
    extra = [c for c in df.columns if c not in FLAG_COLUMNS]
    if extra:
        log.warning("Dropping unexpected columns: %s", ", ".join(extra))
    out = df.loc[:, list(FLAG_COLUMNS)].copy()

    if out["country"].isna().any():
        raise ValueError("Flags table contains rows without a country name")
    out["country"] = out["country"].astype(str).str.strip()
    dupes = out.loc[out["country"].duplicated(), "country"].unique().tolist()
    if dupes:
        raise ValueError(f"Duplicate country names: {', '.join(dupes)}")

    for col in COLOR_COLUMNS:
        bad = out.loc[~out[col].isin([0, 1]), "country"].tolist()
        if bad:
            raise ValueError(f"Column '{col}' must be 0/1; bad rows: {', '.join(bad)}")
    for col in COUNT_COLUMNS:
        vals = out[col]
        bad = out.loc[vals.isna() | (vals < 0) | (vals % 1 != 0), "country"].tolist()
        if bad:
            raise ValueError(f"Column '{col}' must hold non-negative integers; bad rows: {', '.join(bad)}")

    out = out.astype({c: "int64" for c in COUNT_COLUMNS + COLOR_COLUMNS})
    return out.reset_index(drop=True)


def load_flags(source: str, *, timeout: int = 20) -> pd.DataFrame:
    """Load the flags table from an http(s) URL or a local CSV path.

    The table is standardized, coerced and validated before it is returned.
    """
    log = _get_logger()
    df = _read_source(source, timeout)
    df = standardize_columns(df)
    df = coerce_numeric(df, COUNT_COLUMNS + COLOR_COLUMNS)
    df = validate_flags(df)
    log.info("Loaded flags: source=%s, rows=%d, cols=%d", source, df.shape[0], df.shape[1])
    return df
