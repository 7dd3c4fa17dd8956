from __future__ import annotations

import logging
from typing import Iterable

from algorithms.curve_model import CurveModel
from algorithms.history_projector import HistoryProjector, Observation, normalize_side
from algorithms.math_tools import MathTools
from algorithms.params import PlanRequest
from algorithms.power_law import PowerLaw
from algorithms.recommender import Recommender
from algorithms.scale_estimator import ScaleEstimator
from algorithms.set_planner import SetPlanner
from settings_schema import DosingSettings

logger = logging.getLogger(__name__)


class DosingService:
    """Generate per-hand load recommendations and multi-set plans from history."""

    def __init__(self, settings: DosingSettings | None = None) -> None:
        self.settings = settings or DosingSettings()

    def observations(self, records: Iterable, side: str) -> list[Observation]:
        return HistoryProjector.project(records, side)

    def scale(self, observations: list[Observation], side: str) -> float:
        side_cfg = self.settings.side(normalize_side(side))
        return ScaleEstimator.estimate(observations, side_cfg.curve, side_cfg.manual_scale)

    def default_request(self, **overrides) -> PlanRequest:
        s = self.settings
        data = {
            "target_duration": s.target_duration,
            "sets": s.sets,
            "reps_per_set": s.reps_per_set,
            "rest_between_reps": s.rest_between_reps,
            "rest_between_sets": s.rest_between_sets,
            "cap_drop_fraction": s.cap_drop_fraction,
            "anchor_policy": s.anchor_policy,
            "precise": s.precise,
        }
        data.update({k: v for k, v in overrides.items() if v is not None})
        return PlanRequest(**data)

    def recommend(
        self,
        records: Iterable,
        side: str,
        target: float | None = None,
        policy: str | None = None,
    ) -> dict:
        """Return the single-set recommendation for ``side`` at ``target`` seconds."""
        side = normalize_side(side)
        side_cfg = self.settings.side(side)
        target = self.settings.target_duration if target is None else target
        policy = policy or self.settings.anchor_policy
        obs = self.observations(records, side)
        result = Recommender.recommend(
            obs, target, side_cfg.curve, policy, side_cfg.manual_scale
        )
        result["side"] = side
        result["anchor"] = PowerLaw.anchor_load(side_cfg.anchors, target)
        logger.debug(
            "side %s target %.1fs: model=%s ratio=%s anchor=%s (%d observations)",
            side,
            target,
            result["model"],
            result["ratio"],
            result["anchor"],
            len(obs),
        )
        if result["load"] is None:
            logger.info("No %s estimate for side %s yet", policy, side)
        return result

    def recommend_both(
        self,
        records: Iterable,
        target_left: float | None = None,
        target_right: float | None = None,
        policy: str | None = None,
    ) -> dict:
        records = list(records or [])
        return {
            "L": self.recommend(records, "L", target_left, policy),
            "R": self.recommend(records, "R", target_right, policy),
        }

    def plan(self, records: Iterable, side: str, request: PlanRequest | None = None) -> dict:
        """Return the base recommendation and the tapered per-rep loads."""
        side = normalize_side(side)
        side_cfg = self.settings.side(side)
        request = request or self.default_request()
        rec = self.recommend(
            records, side, request.target_duration, request.anchor_policy
        )
        rows = SetPlanner.simulate(
            rec["load"],
            request,
            side_cfg.curve,
            side_cfg.recovery,
            scale=rec["scale"],
            cap_floor=self.settings.cap_floor,
        )
        loads = [row["load"] for row in rows]
        return {
            "side": side,
            "base": rec["load"],
            "recommendation": rec,
            "reps": rows,
            "loads": loads,
            "display": [MathTools.round1(v) for v in loads],
        }

    def curves(self, side: str) -> dict:
        side_cfg = self.settings.side(normalize_side(side))
        return {
            "fatigue": CurveModel.fatigue_curve(side_cfg.curve, self.settings.t_max, 10.0),
            "recovery": CurveModel.recovery_curve(side_cfg.recovery, side_cfg.curve),
        }

    def set_points(self, records: Iterable, side: str) -> list[dict]:
        side = normalize_side(side)
        return CurveModel.set_points(
            self.observations(records, side), self.settings.side(side).curve
        )

    def learn_anchors(self, records: Iterable, side: str) -> DosingSettings:
        """Return new settings with ``side``'s EMA anchors updated from history."""
        side = normalize_side(side)
        obs = self.observations(records, side)
        side_cfg = self.settings.side(side)
        anchors = PowerLaw.learn_anchors(obs, side_cfg.anchors, self.settings.ema_alpha)
        logger.info(
            "Learned anchors for side %s from %d observations: %s",
            side,
            len(obs),
            anchors.model_dump(),
        )
        new_side = side_cfg.model_copy(update={"anchors": anchors})
        key = "left" if side == "L" else "right"
        return self.settings.model_copy(update={key: new_side})
