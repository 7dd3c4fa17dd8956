from pydantic import BaseModel, Field, ValidationError, field_validator

from algorithms.math_tools import MathTools
from algorithms.params import AnchorPolicy, AnchorState, CurveParams, RecoveryParams


class SideSettings(BaseModel):
    curve: CurveParams = Field(default_factory=CurveParams)
    recovery: RecoveryParams = Field(default_factory=RecoveryParams)
    manual_scale: float = Field(0.0, ge=0)
    anchors: AnchorState = Field(default_factory=AnchorState)


class DosingSettings(BaseModel):
    left: SideSettings = Field(default_factory=SideSettings)
    right: SideSettings = Field(default_factory=SideSettings)
    target_duration: float = Field(60.0, gt=0)
    sets: int = Field(5, ge=1, le=30)
    reps_per_set: int = Field(1, ge=1)
    rest_between_reps: float = Field(180.0, ge=0, le=3600)
    rest_between_sets: float = Field(180.0, ge=0, le=3600)
    cap_drop_fraction: float = Field(0.0, ge=0)
    cap_floor: float = Field(0.1, gt=0, le=1)
    anchor_policy: AnchorPolicy = "average"
    precise: bool = False
    ema_alpha: float = Field(0.35, gt=0, le=1)
    t_max: float = 300.0

    @field_validator("t_max")
    @classmethod
    def _clamp_t_max(cls, value: float) -> float:
        return MathTools.clamp(value, 60.0, 600.0)

    def side(self, side: str) -> SideSettings:
        return self.left if side == "L" else self.right


def validate_settings(data: dict) -> DosingSettings:
    try:
        return DosingSettings(**data)
    except ValidationError as e:
        raise ValueError(str(e))
