from typing import Iterable

from .curve_model import CurveModel
from .math_tools import MathTools
from .params import CurveParams


class ScaleEstimator:
    """Estimate the personal maximum that scales the normalized fatigue curve.

    Each observed load is taken as ``scale * fatigue(duration)``; dividing the
    curve back out gives one estimate per observation and the unweighted mean
    of those ratios is the scale. Points where the curve is practically zero
    are skipped rather than divided by.
    """

    EPSILON: float = 1e-6

    @classmethod
    def estimate(
        cls,
        observations: Iterable,
        params: CurveParams,
        manual_override: float | None = None,
    ) -> float:
        """Return the scale for ``observations`` (0 means no data)."""
        manual = MathTools.to_float(manual_override)
        if manual > 0:
            return manual
        ratios = []
        for obs in observations:
            frac = CurveModel.fatigue(obs.duration, params)
            if frac > cls.EPSILON:
                ratios.append(obs.load / frac)
        return MathTools.mean(ratios)


class ModelLoadEstimator:
    @staticmethod
    def model_load(target: float, scale: float, params: CurveParams) -> float:
        """Return ``scale * fatigue(target)``; 0 when there is no scale."""
        if scale <= 0:
            return 0.0
        return scale * CurveModel.fatigue(target, params)
