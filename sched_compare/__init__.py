"""
sched-compare package.

Simulates eight classical CPU scheduling policies over one workload and
reports which of them gives the lowest average waiting time.
"""

from .algorithms import ALGORITHMS, POLICY_ORDER, run_algorithm
from .config import PolicyConfig
from .errors import EmptyWorkload, InvalidArrivalTime, InvalidBurstTime, InvalidParameter, SchedulingError
from .models import ComparisonResult, ProcessRecord, ScheduleResult
from .pipeline import compare_all

__all__ = [
    "ALGORITHMS",
    "POLICY_ORDER",
    "ComparisonResult",
    "EmptyWorkload",
    "InvalidArrivalTime",
    "InvalidBurstTime",
    "InvalidParameter",
    "PolicyConfig",
    "ProcessRecord",
    "ScheduleResult",
    "SchedulingError",
    "compare_all",
    "run_algorithm",
]
