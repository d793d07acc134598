"""
Event Aggregation - Sums production events per WBS code.

Sums are order-independent, so events may arrive out of chronological
order. Only latest_event() depends on position.
"""
from dataclasses import dataclass
from typing import Iterable, List, Optional

from production_tracker.domain.entities import ProductionEvent


@dataclass(frozen=True)
class EventTotals:
    """Summed field totals for one WBS code."""

    total_hours: float = 0.0
    total_qty: float = 0.0
    total_equip_hours: float = 0.0

    def to_dict(self) -> dict:
        return {
            'total_hours': self.total_hours,
            'total_qty': self.total_qty,
            'total_equip_hours': self.total_equip_hours,
        }


def events_for_code(events: Iterable[ProductionEvent], wbs_code: str) -> List[ProductionEvent]:
    """Filter events to one WBS code, preserving order."""
    return [e for e in events if e.wbs_code == wbs_code]


def latest_event(events: Iterable[ProductionEvent], wbs_code: str) -> Optional[ProductionEvent]:
    """
    Most recent event for a code, by position.

    Returns:
        Last matching event, or None when the code has no events
    """
    code_events = events_for_code(events, wbs_code)
    return code_events[-1] if code_events else None


def aggregate_events(events: Iterable[ProductionEvent], wbs_code: str) -> EventTotals:
    """
    Aggregate production events for a given WBS code.

    Args:
        events: Production events (any order)
        wbs_code: Code to aggregate

    Returns:
        EventTotals; all zeros when no event matches
    """
    total_hours = 0.0
    total_qty = 0.0
    total_equip = 0.0
    for event in events:
        if event.wbs_code != wbs_code:
            continue
        total_hours += event.actual_hours
        total_qty += event.actual_qty
        total_equip += event.equipment_hours
    return EventTotals(
        total_hours=total_hours,
        total_qty=total_qty,
        total_equip_hours=total_equip,
    )
