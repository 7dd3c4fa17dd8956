from __future__ import annotations

from typing import Iterable, Optional

from .math_tools import MathTools
from .params import ANCHOR_POLICIES, CurveParams
from .ratio_estimator import RatioEstimator
from .scale_estimator import ModelLoadEstimator, ScaleEstimator


class Recommender:
    """Combine the model-based and ratio-based estimates for one set.

    Policies:

    ``average``
        mean of the available estimates
    ``min``
        the smaller (more conservative) available estimate
    ``model`` / ``ratio``
        a single estimator
    """

    @staticmethod
    def _present(value: float | None) -> Optional[float]:
        return value if value is not None and value > 0 else None

    @classmethod
    def combine(
        cls,
        model_load: float | None,
        ratio_load: float | None,
        policy: str = "average",
    ) -> Optional[float]:
        """Apply ``policy`` to the two estimates; ``None`` when nothing is available."""
        if policy not in ANCHOR_POLICIES:
            raise ValueError(f"unknown anchor policy: {policy!r}")
        model = cls._present(model_load)
        ratio = cls._present(ratio_load)
        if policy == "model":
            return model
        if policy == "ratio":
            return ratio
        available = [v for v in (model, ratio) if v is not None]
        if not available:
            return None
        if policy == "min":
            return min(available)
        return sum(available) / len(available)

    @classmethod
    def recommend(
        cls,
        observations: Iterable,
        target: float,
        params: CurveParams,
        policy: str = "average",
        manual_scale: float | None = None,
    ) -> dict:
        """Return both estimates and the combined load for ``target`` seconds."""
        obs = list(observations)
        scale = ScaleEstimator.estimate(obs, params, manual_scale)
        model = cls._present(ModelLoadEstimator.model_load(target, scale, params))
        ratio = cls._present(RatioEstimator.ratio_load(obs, target))
        load = cls.combine(model, ratio, policy)
        return {
            "target": target,
            "policy": policy,
            "scale": scale,
            "model": model,
            "ratio": ratio,
            "load": load,
            "display": MathTools.round1(load) if load is not None else None,
        }
