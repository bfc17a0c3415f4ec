"""
Run every policy on its own copy of one workload and pick the winner.
"""

from __future__ import annotations

import logging
from typing import Iterable, List, Optional

from .algorithms import ALGORITHMS, POLICY_ORDER
from .config import PolicyConfig
from .metrics import select_best
from .models import ComparisonResult, ProcessRecord, ScheduleResult
from .workload_io import validate_workload

logger = logging.getLogger(__name__)


def _policy_keys(algorithms: Optional[Iterable[str]]) -> List[str]:
    canonical = [name.lower() for name in POLICY_ORDER]
    if algorithms is None:
        return canonical

    requested = {a.lower() for a in algorithms}
    unknown = requested - set(ALGORITHMS)
    if unknown:
        raise ValueError(f"Unknown algorithm(s): {', '.join(sorted(unknown))}")
    # Reports always follow canonical order, whatever order was asked for.
    return [key for key in canonical if key in requested]


def compare_all(
    processes: List[ProcessRecord],
    config: Optional[PolicyConfig] = None,
    algorithms: Optional[Iterable[str]] = None,
) -> ComparisonResult:
    """
    Validate the workload and parameters, then run each policy on a fresh
    clone of ``processes`` and select the lowest average waiting time.

    Nothing runs if validation fails. ``processes`` is never mutated.
    """
    config = config or PolicyConfig()
    keys = _policy_keys(algorithms)
    if not keys:
        raise ValueError("No algorithms selected")

    validate_workload(processes)
    config.validate(keys)

    logger.info("Comparing %d policies on %d processes", len(keys), len(processes))

    results: List[ScheduleResult] = []
    for key in keys:
        snapshot = [p.clone() for p in processes]
        result = ALGORITHMS[key](snapshot, **config.params_for(key))
        logger.info("%s: average waiting time %.2f", result.algorithm, result.average_waiting)
        results.append(result)

    best_algorithm, best_average = select_best([(r.algorithm, r.average_waiting) for r in results])
    logger.info("Best policy: %s (%.2f)", best_algorithm, best_average)

    return ComparisonResult(results=results, best_algorithm=best_algorithm, best_average=best_average)
