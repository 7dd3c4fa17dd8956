from __future__ import annotations

from .curve_model import CurveModel
from .math_tools import MathTools
from .params import CurveParams, PlanRequest, RecoveryParams


class SetPlanner:
    """Taper load across sets by simulating capacity depletion and recovery.

    Capacity starts fresh at 1.0. Each rep ends at the target duration,
    leaving ``C * fatigue(T)``; the rest that follows restores
    ``recovery(rest)`` of what was lost. A rep that closes a set is followed
    by the between-sets rest, any other rep by the between-reps rest.
    """

    CAP_FLOOR: float = 0.1

    @classmethod
    def simulate(
        cls,
        base: float | None,
        request: PlanRequest,
        params: CurveParams,
        rec: RecoveryParams,
        scale: float | None = None,
        cap_floor: float | None = None,
    ) -> list[dict]:
        """Return one row per rep: ``{"set", "rep", "capacity", "load"}``.

        With ``request.precise`` the load is recomputed as
        ``scale * capacity * fatigue(T)`` instead of ``base * capacity``.
        """
        sets = int(request.sets)
        reps = int(request.reps_per_set)
        if sets <= 0 or reps <= 0:
            return []
        if request.precise:
            if not scale or scale <= 0:
                return []
        elif not base or base <= 0:
            return []
        floor = cls.CAP_FLOOR if cap_floor is None else cap_floor
        floor = MathTools.clamp(floor, MathTools.EPSILON, 1.0)
        target = max(0.0, request.target_duration)
        f_t = CurveModel.fatigue(target, params)
        rec_reps = CurveModel.recovery(request.rest_between_reps, rec, params)
        rec_sets = CurveModel.recovery(request.rest_between_sets, rec, params)

        rows: list[dict] = []
        capacity = 1.0
        for set_idx in range(sets):
            for rep_idx in range(reps):
                if request.precise:
                    load = scale * capacity * f_t
                else:
                    load = base * capacity
                rows.append(
                    {
                        "set": set_idx + 1,
                        "rep": rep_idx + 1,
                        "capacity": capacity,
                        "load": max(0.0, load),
                    }
                )
                after = capacity * f_t
                recovered = rec_sets if rep_idx == reps - 1 else rec_reps
                capacity = MathTools.clamp(after + (1 - after) * recovered, floor, 1.0)

        ceiling = rows[0]["load"] * (1 + request.cap_drop_fraction)
        for row in rows[1:]:
            row["load"] = min(row["load"], ceiling)
        return rows

    @classmethod
    def plan_loads(
        cls,
        base: float | None,
        request: PlanRequest,
        params: CurveParams,
        rec: RecoveryParams,
        scale: float | None = None,
        cap_floor: float | None = None,
    ) -> list[float]:
        """Return the ordered per-rep loads of the plan."""
        rows = cls.simulate(base, request, params, rec, scale, cap_floor)
        return [row["load"] for row in rows]
