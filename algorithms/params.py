from __future__ import annotations

from typing import Literal, Optional

from pydantic import BaseModel, Field, model_validator

ANCHOR_POLICIES = ("average", "min", "model", "ratio")
AnchorPolicy = Literal["average", "min", "model", "ratio"]


class CurveParams(BaseModel):
    """Fast/medium/slow three-exponential fatigue process.

    Weights only matter through their ratios; they are normalized before use.
    """

    w1: float = Field(0.5, ge=0)
    w2: float = Field(0.3, ge=0)
    w3: float = Field(0.2, ge=0)
    tau1: float = Field(7.0, gt=0)
    tau2: float = Field(45.0, gt=0)
    tau3: float = Field(180.0, gt=0)

    @model_validator(mode="after")
    def _one_positive_weight(self) -> "CurveParams":
        if self.w1 + self.w2 + self.w3 <= 0:
            raise ValueError("at least one curve weight must be positive")
        return self

    def weights(self) -> tuple[float, float, float]:
        return self.w1, self.w2, self.w3

    def taus(self) -> tuple[float, float, float]:
        return self.tau1, self.tau2, self.tau3


class RecoveryParams(BaseModel):
    """Time constants (seconds) for capacity returning during rest."""

    r1: float = Field(30.0, gt=0)
    r2: float = Field(300.0, gt=0)
    r3: float = Field(1800.0, gt=0)

    def taus(self) -> tuple[float, float, float]:
        return self.r1, self.r2, self.r3


class AnchorState(BaseModel):
    """EMA-smoothed loads at the canonical 20/60/180 s anchors."""

    ema20: Optional[float] = None
    ema60: Optional[float] = None
    ema180: Optional[float] = None


class PlanRequest(BaseModel):
    target_duration: float = Field(60.0, ge=0)
    sets: int = 5
    reps_per_set: int = 1
    rest_between_reps: float = Field(180.0, ge=0)
    rest_between_sets: float = Field(180.0, ge=0)
    cap_drop_fraction: float = Field(0.0, ge=0)
    anchor_policy: AnchorPolicy = "average"
    precise: bool = False
