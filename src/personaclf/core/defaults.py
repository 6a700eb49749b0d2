"""Centralised default constants for personaclf.

Every project-wide magic number / string lives here.
Import these instead of hard-coding values in function signatures or CLI options.
"""

from __future__ import annotations

from typing import Final

# ── Input ──
DEFAULT_RAW_VALUE: Final[float] = 0.0
SCORE_MIN: Final[float] = 0.0
SCORE_MAX: Final[float] = 10.0
SCORE_MIDPOINT: Final[float] = 5.0

# ── Output ──
PROBABILITY_TOLERANCE: Final[float] = 1e-9
PERCENT_DECIMALS: Final[int] = 1

# ── Model documents ──
MODEL_SUFFIXES_JSON: Final[tuple[str, ...]] = (".json",)
MODEL_SUFFIXES_YAML: Final[tuple[str, ...]] = (".yaml", ".yml")

# ── Batch ──
PROBA_COLUMN_PREFIX: Final[str] = "p_"
