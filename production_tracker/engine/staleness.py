"""
Claiming staleness - Flags progress that was not re-affirmed.
"""
from typing import Iterable

from production_tracker.domain.entities import ProductionEvent
from .aggregation import events_for_code


def is_claiming_stale(events: Iterable[ProductionEvent], wbs_code: str) -> bool:
    """
    Check if claiming progress is stale for a WBS code.

    Stale when the most recent event (by position) has no claiming
    progress but an earlier event did. Codes with fewer than two events
    are never stale.
    """
    code_events = events_for_code(events, wbs_code)
    if len(code_events) < 2:
        return False

    if code_events[-1].has_claiming_progress:
        return False

    return any(e.has_claiming_progress for e in code_events[:-1])
