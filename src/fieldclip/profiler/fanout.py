"""
Fan-out Coordinator

Runs the Field Summarizer over every field, in a worker pool when a table is
large enough to make it worthwhile. Results are written into a
position-indexed buffer, so output order follows input order whatever the
completion order.
"""

import os
from concurrent.futures import (
    Executor,
    ProcessPoolExecutor,
    ThreadPoolExecutor,
    as_completed,
)
from dataclasses import dataclass
from typing import Dict, List, Optional, Type

from tqdm import tqdm

from ..config import ProfileSettings
from ..utils.logging_utils import get_logger
from .decompose import Decomposition
from .models import Field, Report
from .summarizer import summarize_field

logger = get_logger(__name__)

EXECUTORS: Dict[str, Type[Executor]] = {
    'thread': ThreadPoolExecutor,
    'process': ProcessPoolExecutor,
}


@dataclass(frozen=True)
class ExecutionPlan:
    parallel: bool
    workers: int = 1


def available_parallelism() -> int:
    """CPUs usable by this process."""
    if hasattr(os, 'sched_getaffinity'):
        return len(os.sched_getaffinity(0))
    return os.cpu_count() or 1


def pool_size(settings: ProfileSettings) -> int:
    """
    Worker count for parallel mode.

    An explicit max_workers wins; otherwise all CPUs minus reserved_cores,
    floored at 1.
    """
    if settings.max_workers is not None:
        return settings.max_workers
    return max(available_parallelism() - settings.reserved_cores, 1)


def plan_execution(decomposition: Decomposition, settings: ProfileSettings) -> ExecutionPlan:
    """
    Pick sequential or parallel mode.

    Only tabular inputs with more cells than parallel_cell_threshold go
    parallel.
    """
    if decomposition.tabular and decomposition.cells > settings.parallel_cell_threshold:
        plan = ExecutionPlan(parallel=True, workers=pool_size(settings))
        logger.info(
            f"Large table ({decomposition.cells:,} cells): "
            f"summarizing in parallel with {plan.workers} workers"
        )
        return plan

    logger.debug("Summarizing sequentially")
    return ExecutionPlan(parallel=False)


def _summarize_sequential(fields: List[Field], settings: ProfileSettings) -> List[Report]:
    return [
        summarize_field(field, settings)
        for field in tqdm(fields, desc="Summarizing fields", disable=not settings.show_progress)
    ]


def _summarize_parallel(
    fields: List[Field],
    settings: ProfileSettings,
    workers: int
) -> List[Report]:
    results: List[Optional[Report]] = [None] * len(fields)
    executor_cls = EXECUTORS[settings.executor]

    with executor_cls(max_workers=workers) as executor:
        futures = {
            executor.submit(summarize_field, field, settings): index
            for index, field in enumerate(fields)
        }
        try:
            for future in tqdm(
                as_completed(futures),
                total=len(futures),
                desc="Summarizing fields",
                disable=not settings.show_progress,
            ):
                results[futures[future]] = future.result()
        except BaseException:
            for future in futures:
                future.cancel()
            raise

    return results


def summarize_all(
    decomposition: Decomposition,
    settings: Optional[ProfileSettings] = None,
    plan: Optional[ExecutionPlan] = None
) -> List[Report]:
    """
    Summarize every field of a decomposed input.

    Args:
        decomposition: Fields to summarize
        settings: Profiling settings (defaults when omitted)
        plan: Execution plan; computed from the input when omitted

    Returns:
        Reports in input field order
    """
    settings = settings or ProfileSettings()
    plan = plan or plan_execution(decomposition, settings)
    fields = decomposition.fields

    if plan.parallel and len(fields) > 1:
        return _summarize_parallel(fields, settings, plan.workers)
    return _summarize_sequential(fields, settings)
