__version__ = "0.4.0"

__all__ = [
    "compute_pi",
    "evaluate_range",
    "partition",
    "plan",
    "reduce",
    "term",
    "PartialSum",
    "PrecisionPlan",
    "Result",
    "Settings",
    "WorkRange",
    "ComputationCancelled",
    "InvalidInputError",
    "PiloomError",
    "ResourceExhaustedError",
]

from .config import Settings
from .engine import Result, compute_pi, reduce
from .errors import ComputationCancelled, InvalidInputError, PiloomError, ResourceExhaustedError
from .partition import WorkRange, partition
from .planner import PrecisionPlan, plan
from .series import PartialSum, evaluate_range, term
