import math

import numpy as np

from .math_tools import MathTools
from .params import CurveParams, RecoveryParams


class CurveModel:
    """Three-exponential fatigue decay and the matching recovery fraction.

    ``fatigue(t) = sum(w_i * exp(-t / tau_i))`` with weights normalized to
    sum to one. Recovery reuses the normalized fatigue weights:
    ``recovery(r) = sum(w_i * (1 - exp(-r / rho_i)))``.
    """

    EPSILON: float = MathTools.EPSILON

    @classmethod
    def normalized_weights(cls, params: CurveParams) -> tuple[float, float, float]:
        w1, w2, w3 = params.weights()
        total = max(cls.EPSILON, w1 + w2 + w3)
        return w1 / total, w2 / total, w3 / total

    @classmethod
    def fatigue(cls, t: float, params: CurveParams) -> float:
        """Return the remaining capacity fraction after ``t`` seconds of work."""
        t = max(0.0, float(t))
        total = 0.0
        for w, tau in zip(cls.normalized_weights(params), params.taus()):
            total += w * math.exp(-t / max(cls.EPSILON, tau))
        return total

    @classmethod
    def recovery(cls, r: float, rec: RecoveryParams, params: CurveParams) -> float:
        """Return the fraction of lost capacity restored after ``r`` seconds of rest."""
        r = max(0.0, float(r))
        total = 0.0
        for w, rho in zip(cls.normalized_weights(params), rec.taus()):
            total += w * (1.0 - math.exp(-r / max(cls.EPSILON, rho)))
        return total

    @classmethod
    def fatigue_curve(
        cls, params: CurveParams, t_max: float = 300.0, step: float = 10.0
    ) -> list[dict]:
        """Sample ``fatigue`` on ``[0, t_max]`` for charting."""
        return [
            {"t": t, "f": cls.fatigue(t, params)}
            for t in cls._grid(t_max, step)
        ]

    @classmethod
    def recovery_curve(
        cls,
        rec: RecoveryParams,
        params: CurveParams,
        r_max: float = 1800.0,
        step: float = 60.0,
    ) -> list[dict]:
        """Sample ``recovery`` on ``[0, r_max]`` for charting."""
        return [
            {"r": r, "rec": cls.recovery(r, rec, params)}
            for r in cls._grid(r_max, step)
        ]

    @classmethod
    def set_points(cls, observations, params: CurveParams) -> list[dict]:
        """Place logged sets on the fatigue curve."""
        return [
            {"t": obs.duration, "f": cls.fatigue(obs.duration, params)}
            for obs in observations
        ]

    @staticmethod
    def _grid(upper: float, step: float) -> list[float]:
        if upper < 0 or step <= 0:
            return []
        count = int(math.floor(upper / step + 1e-9)) + 1
        return [float(v) for v in np.arange(count) * step]
