"""
Crew and kiosk helpers - Time-clock hours and worker allocations.

Kiosk entries record each worker's hours on the clock for a day.
Those hours are then split across WBS codes through worker
allocations:

    allocations[date][worker_id][wbs_code] = hours
"""
import copy
from typing import Iterable, List, Optional, Sequence, Tuple

from production_tracker.domain.entities import (
    CrewAssignment,
    KioskEntry,
    Worker,
    WorkerAllocations,
)


def kiosk_entries_for_date(entries: Iterable[KioskEntry], date: str) -> List[KioskEntry]:
    """Kiosk entries for a specific date."""
    return [e for e in entries if e.date == date]


def worker_kiosk_entry(
    entries: Iterable[KioskEntry],
    worker_id: str,
    date: str,
) -> Optional[KioskEntry]:
    """First kiosk entry for a worker on a date, if any."""
    for entry in entries:
        if entry.worker_id == worker_id and entry.date == date:
            return entry
    return None


def calc_crew_hours_from_kiosk(
    entries: Iterable[KioskEntry],
    worker_ids: Sequence[str],
    date: str,
) -> float:
    """Total kiosk hours for a set of workers on a date."""
    wanted = set(worker_ids)
    return sum(
        e.total_hours
        for e in entries
        if e.worker_id in wanted and e.date == date and e.total_hours > 0
    )


def available_workers(
    workers: Iterable[Worker],
    entries: Sequence[KioskEntry],
    date: str,
) -> List[Tuple[Worker, float]]:
    """
    Workers clocked in on a date.

    Returns:
        (worker, kiosk_hours) pairs for workers with hours > 0
    """
    day_entries = kiosk_entries_for_date(entries, date)
    result = []
    for worker in workers:
        entry = worker_kiosk_entry(day_entries, worker.id, date)
        hours = entry.total_hours if entry is not None else 0.0
        if hours > 0:
            result.append((worker, hours))
    return result


def remaining_worker_hours(
    allocations: WorkerAllocations,
    entries: Iterable[KioskEntry],
    worker_id: str,
    date: str,
    exclude_wbs_code: Optional[str] = None,
) -> float:
    """
    Kiosk hours a worker still has to allocate on a date.

    Hours already allocated to exclude_wbs_code are treated as free, so
    the figure can be used while editing that code's allocation.
    """
    entry = worker_kiosk_entry(entries, worker_id, date)
    total_kiosk_hours = entry.total_hours if entry is not None else 0.0

    date_allocs = allocations.get(date, {}).get(worker_id, {})
    allocated_elsewhere = sum(
        hrs for wbs, hrs in date_allocs.items() if wbs != exclude_wbs_code
    )
    return max(0.0, total_kiosk_hours - allocated_elsewhere)


def worker_allocated_hours(
    allocations: WorkerAllocations,
    worker_id: str,
    date: str,
    wbs_code: str,
) -> float:
    return allocations.get(date, {}).get(worker_id, {}).get(wbs_code, 0.0)


def total_allocated_hours_for_code(
    allocations: WorkerAllocations,
    date: str,
    wbs_code: str,
) -> float:
    """Hours allocated to a code on a date across all workers."""
    date_allocs = allocations.get(date)
    if not date_allocs:
        return 0.0
    return sum(worker_allocs.get(wbs_code, 0.0) for worker_allocs in date_allocs.values())


def set_worker_allocation(
    allocations: WorkerAllocations,
    date: str,
    worker_id: str,
    wbs_code: str,
    hours: float,
) -> WorkerAllocations:
    """Return a copy of allocations with one cell set."""
    updated = copy.deepcopy(allocations)
    updated.setdefault(date, {}).setdefault(worker_id, {})[wbs_code] = hours
    return updated


def clear_worker_allocations(
    allocations: WorkerAllocations,
    date: str,
    wbs_code: str,
) -> WorkerAllocations:
    """Return a copy of allocations with a code's hours removed for a date."""
    updated = copy.deepcopy(allocations)
    for worker_allocs in updated.get(date, {}).values():
        worker_allocs.pop(wbs_code, None)
    return updated


def crew_assignment_hours(assignment: CrewAssignment) -> float:
    """Hours booked by a crew assignment; the foreman's override wins."""
    if assignment.manual_override is not None:
        return assignment.manual_override
    return assignment.auto_hours
