import math
from typing import Iterable, List

import numpy as np


class MathTools:
    """Provides essential numeric utilities for dosing calculations."""

    EPSILON: float = 1e-9

    @staticmethod
    def clamp(value: float, min_value: float, max_value: float) -> float:
        """Clamp ``value`` to the inclusive range [min_value, max_value]."""
        if min_value > max_value:
            raise ValueError("min_value must not exceed max_value")
        return max(min_value, min(value, max_value))

    @staticmethod
    def round1(value: float) -> float:
        """Round to one decimal place for display."""
        return math.floor(value * 10 + 0.5) / 10

    @staticmethod
    def to_float(value, default: float = 0.0) -> float:
        """Coerce numbers and numeric strings, returning ``default`` otherwise."""
        if value is None or isinstance(value, bool):
            return default
        try:
            out = float(value)
        except (TypeError, ValueError):
            return default
        return out if math.isfinite(out) else default

    @staticmethod
    def mean(values: Iterable[float]) -> float:
        data = list(values)
        if not data:
            return 0.0
        return float(np.mean(np.array(data, dtype=float)))

    @staticmethod
    def linear_regression_slope(x: List[float], y: List[float]) -> float:
        """Return the least-squares slope of ``y`` on ``x`` (0 when undefined)."""
        if len(x) < 2 or len(x) != len(y):
            return 0.0
        x_arr = np.array(x, dtype=float)
        y_arr = np.array(y, dtype=float)
        x_mean = np.mean(x_arr)
        y_mean = np.mean(y_arr)
        num = np.sum((x_arr - x_mean) * (y_arr - y_mean))
        den = np.sum((x_arr - x_mean) ** 2)
        return float(num / den) if den > MathTools.EPSILON else 0.0

    @staticmethod
    def log_interpolate(x: List[float], y: List[float], x_new: float) -> float:
        """Interpolate ``y`` linearly in ``x`` on a log scale.

        ``x`` must be increasing and ``y`` positive. Outside the sampled
        range the nearest end value is returned.
        """
        if not x or not y:
            return 0.0
        if len(x) == 1:
            return float(y[0])
        log_y = np.log(np.array(y, dtype=float))
        return float(np.exp(np.interp(x_new, x, log_y)))
