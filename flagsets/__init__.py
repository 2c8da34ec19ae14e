"""Top‑level package for the flag set-intersection workshop.

This package contains modules for loading the European flags table,
reshaping it between wide and long layouts, exploratory charts, and the
three set-intersection views (Venn, Euler, upset).
"""

__all__ = ["data_ingest", "transforms", "exploration", "venn", "euler", "upset", "pipeline", "reporting"]
