from __future__ import annotations

import math
from typing import List, Optional, Sequence

from .history_projector import Observation
from .math_tools import MathTools
from .params import AnchorState


class PowerLaw:
    """Power-law (``L ~ T^-beta``) helpers and EMA anchor learning."""

    BETA_MIN: float = 0.15
    BETA_MAX: float = 0.8
    BETA_FALLBACK: float = 0.35
    BETA_WINDOW: int = 6
    MIN_DURATION: float = 1.0
    MIN_LOAD: float = 0.1
    ANCHORS: tuple[tuple[float, str], ...] = ((20.0, "ema20"), (60.0, "ema60"), (180.0, "ema180"))

    @classmethod
    def estimate_beta(cls, observations: Sequence[Observation], window: int | None = None) -> float:
        """Fit ``beta`` on log-log over the most recent observations."""
        recent = list(observations)[-(window or cls.BETA_WINDOW):]
        if len(recent) < 2:
            return cls.BETA_FALLBACK
        xs = [math.log(max(cls.MIN_DURATION, o.duration)) for o in recent]
        ys = [math.log(max(cls.MIN_LOAD, o.load)) for o in recent]
        slope = MathTools.linear_regression_slope(xs, ys)
        return MathTools.clamp(-slope, cls.BETA_MIN, cls.BETA_MAX)

    @classmethod
    def scale_load_by_beta(cls, target: float, neighbor: Observation, beta: float) -> float:
        """Project ``neighbor``'s load to ``target`` seconds along ``T^-beta``."""
        t1 = max(cls.MIN_DURATION, neighbor.duration)
        load = max(cls.MIN_LOAD, neighbor.load)
        t2 = max(cls.MIN_DURATION, target)
        return load * (t1 / t2) ** beta

    @staticmethod
    def nearest_by_time(observations: Sequence[Observation], target: float) -> Optional[Observation]:
        best = None
        for obs in observations:
            if best is None or abs(obs.duration - target) < abs(best.duration - target):
                best = obs
        return best

    @classmethod
    def learn_anchors(
        cls,
        observations: Sequence[Observation],
        anchors: AnchorState,
        alpha: float = 0.35,
    ) -> AnchorState:
        """Blend the projected load at each anchor into its running EMA.

        Returns a new ``AnchorState``; ``anchors`` is left untouched. With no
        observations the anchors come back unchanged.
        """
        if not observations:
            return anchors.model_copy()
        beta = cls.estimate_beta(observations)
        values = anchors.model_dump()
        for t, key in cls.ANCHORS:
            near = cls.nearest_by_time(observations, t)
            est = cls.scale_load_by_beta(t, near, beta)
            prev = values[key]
            values[key] = est if prev is None else prev * (1 - alpha) + est * alpha
        return AnchorState(**values)

    @classmethod
    def anchor_load(cls, anchors: AnchorState, target: float) -> Optional[float]:
        """Interpolate the learned anchors on log-log at ``target`` seconds."""
        refs = [
            (t, getattr(anchors, key))
            for t, key in cls.ANCHORS
            if getattr(anchors, key) is not None
        ]
        if not refs:
            return None
        if len(refs) == 1:
            t, load = refs[0]
            return cls.scale_load_by_beta(target, Observation(t, load), cls.BETA_FALLBACK)
        pts: List[tuple[float, float]] = sorted(
            (math.log(t), math.log(max(cls.MIN_LOAD, load))) for t, load in refs
        )
        x = math.log(max(cls.MIN_DURATION, target))
        i = 0
        while i < len(pts) - 2 and x > pts[i + 1][0]:
            i += 1
        (x0, y0), (x1, y1) = pts[i], pts[i + 1]
        frac = (x - x0) / max(MathTools.EPSILON, x1 - x0)
        return math.exp(y0 * (1 - frac) + y1 * frac)
