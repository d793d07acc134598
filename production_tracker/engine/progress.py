"""
Progress Model - Percent complete for an assembly.

Two mutually exclusive modes:
- Simple ratio: installed quantity over budgeted quantity.
- Weighted (claiming schema): sum of step weight x step percent, taken
  from the most recent event's snapshot only. A later event with no
  snapshot drops the code back to 0 until progress is reported again.
"""
from typing import Iterable, Optional, Sequence

from production_tracker.domain.entities import (
    Assembly,
    ClaimingProgress,
    ClaimingSchema,
    ProductionEvent,
)
from .aggregation import latest_event


def calc_simple_percent_complete(actual_qty: float, budgeted_qty: float) -> float:
    """
    Simple % complete (no claiming schema): actual_qty / budgeted_qty.

    Returns:
        Fraction in [0, 1] for non-negative quantities; 0 when the
        budgeted quantity is 0
    """
    if budgeted_qty == 0:
        return 0.0
    return min(actual_qty / budgeted_qty, 1.0)


def calc_claiming_percent_complete(
    schema: ClaimingSchema,
    progress: Sequence[ClaimingProgress],
) -> float:
    """
    Weighted sum of (step weight x step fraction complete).

    Steps missing from the snapshot count as 0. Step weights are used
    as given, even if they do not sum to 1.0.
    """
    by_step = {}
    for p in progress:
        by_step.setdefault(p.step_name, p)

    total = 0.0
    for step in schema.steps:
        p = by_step.get(step.name)
        pct = p.percent_complete / 100 if p is not None else 0.0
        total += step.weight * pct
    return total


def calc_percent_complete(
    assembly: Assembly,
    events: Iterable[ProductionEvent],
    schema: Optional[ClaimingSchema],
    actual_qty: float,
) -> float:
    """
    Percent complete (as a fraction) using the assembly's tracking mode.

    Args:
        assembly: Assembly being measured
        events: Production events in chronological order
        schema: Claiming schema, or None for the simple ratio
        actual_qty: Quantity for the simple ratio (override-aware)
    """
    if schema is None:
        return calc_simple_percent_complete(actual_qty, assembly.budgeted_qty)

    latest = latest_event(events, assembly.wbs_code)
    if latest is None:
        return 0.0
    return calc_claiming_percent_complete(schema, latest.claiming_progress)
