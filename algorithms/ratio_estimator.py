from typing import Iterable, List, Tuple

import pandas as pd

from .math_tools import MathTools


class RatioEstimator:
    """Model-free load-vs-duration cross-check built straight from history.

    Observations are averaged per duration, forced to be non-increasing with
    pool-adjacent-violators and then interpolated linearly in ``t`` on
    ``log(load)``. Outside the observed range the nearest end load is used,
    so the estimate never rises above an observed anchor.
    """

    DURATION_DECIMALS: int = 6

    @classmethod
    def aggregate(cls, observations: Iterable) -> List[Tuple[float, float, int]]:
        """Average loads sharing a duration; returns ``(t, load, weight)`` sorted by ``t``."""
        rows = [(float(o.duration), float(o.load)) for o in observations]
        if not rows:
            return []
        frame = pd.DataFrame(rows, columns=["duration", "load"])
        frame["key"] = frame["duration"].round(cls.DURATION_DECIMALS)
        grouped = frame.groupby("key", sort=True).agg(
            duration=("duration", "mean"),
            load=("load", "mean"),
            weight=("load", "size"),
        )
        return [
            (float(r.duration), float(r.load), int(r.weight))
            for r in grouped.itertuples(index=False)
        ]

    @staticmethod
    def pool(points: List[Tuple[float, float, int]]) -> List[Tuple[float, float]]:
        """Pool adjacent violators so load never increases with duration.

        ``points`` must be sorted by duration. Each pooled block is expanded
        back to its weight-averaged duration and mean load.
        """
        blocks: list[dict] = []
        for t, load, weight in points:
            blocks.append(
                {"duration_sum": t * weight, "weight_sum": float(weight), "mean_load": load}
            )
            while len(blocks) > 1 and blocks[-1]["mean_load"] > blocks[-2]["mean_load"]:
                last = blocks.pop()
                prev = blocks[-1]
                total = prev["weight_sum"] + last["weight_sum"]
                prev["mean_load"] = (
                    prev["mean_load"] * prev["weight_sum"]
                    + last["mean_load"] * last["weight_sum"]
                ) / total
                prev["duration_sum"] += last["duration_sum"]
                prev["weight_sum"] = total
        return [(b["duration_sum"] / b["weight_sum"], b["mean_load"]) for b in blocks]

    @classmethod
    def fit(cls, observations: Iterable) -> List[Tuple[float, float]]:
        """Return the monotone ``(t, load)`` knots for ``observations``."""
        return cls.pool(cls.aggregate(observations))

    @staticmethod
    def evaluate(knots: List[Tuple[float, float]], target: float) -> float:
        """Evaluate fitted knots at ``target`` seconds (0 when empty)."""
        if not knots:
            return 0.0
        ts = [t for t, _ in knots]
        loads = [load for _, load in knots]
        if target <= ts[0]:
            return loads[0]
        if target >= ts[-1]:
            return loads[-1]
        return MathTools.log_interpolate(ts, loads, target)

    @classmethod
    def ratio_load(cls, observations: Iterable, target: float) -> float:
        return cls.evaluate(cls.fit(observations), target)
