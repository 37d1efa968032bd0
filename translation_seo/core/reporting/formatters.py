"""
formatters.py

Text rendering of floats for the CSV artifacts.
"""
from __future__ import annotations

import math
from typing import Optional

import numpy as np


# ─────────────────────────────────────────────────────────────────────────────
# Float rendering
# ─────────────────────────────────────────────────────────────────────────────
def format_float(value: float) -> str:
    """
    Render a float positionally with the shortest round-trip digits.

    Whole numbers drop the trailing ``.0`` (``2.0`` -> ``"2"``), small values
    never switch to exponent notation (``1e-05`` -> ``"0.00001"``), and the
    special values render as ``NaN``, ``inf`` and ``-inf``.
    """
    value = float(value)
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "inf" if value > 0 else "-inf"
    return np.format_float_positional(value, unique=True, trim="-")


def format_score(value: Optional[float]) -> str:
    """Scores that are missing or NaN are written as empty fields."""
    if value is None:
        return ""
    value = float(value)
    if math.isnan(value):
        return ""
    return format_float(value)
