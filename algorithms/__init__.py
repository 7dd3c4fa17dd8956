from .math_tools import MathTools
from .params import AnchorState, CurveParams, PlanRequest, RecoveryParams
from .curve_model import CurveModel
from .history_projector import HistoryProjector, Observation, grip_from_notes, normalize_side
from .scale_estimator import ModelLoadEstimator, ScaleEstimator
from .ratio_estimator import RatioEstimator
from .power_law import PowerLaw
from .recommender import Recommender
from .set_planner import SetPlanner

__all__ = [
    "MathTools",
    "AnchorState",
    "CurveParams",
    "PlanRequest",
    "RecoveryParams",
    "CurveModel",
    "HistoryProjector",
    "Observation",
    "grip_from_notes",
    "normalize_side",
    "ModelLoadEstimator",
    "ScaleEstimator",
    "RatioEstimator",
    "PowerLaw",
    "Recommender",
    "SetPlanner",
]
