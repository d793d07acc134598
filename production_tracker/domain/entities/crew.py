"""
Crew Entities - Workers, kiosk time-clock entries and crew assignments.
"""
from dataclasses import dataclass, field
from typing import Optional, Tuple


@dataclass(frozen=True)
class Worker:
    """Field worker."""

    id: str
    name: str
    role: str = ""
    hourly_rate: float = 0.0

    def to_dict(self) -> dict:
        return {
            'id': self.id,
            'name': self.name,
            'role': self.role,
            'hourly_rate': self.hourly_rate,
        }


@dataclass(frozen=True)
class KioskEntry:
    """
    One worker's clock-in/clock-out for a day.

    Attributes:
        id: Entry identifier
        worker_id: Worker who clocked in
        date: Opaque date key
        clock_in: Clock-in time (opaque)
        clock_out: Clock-out time, None while still on the clock
        total_hours: Hours on the clock
    """

    id: str
    worker_id: str
    date: str
    clock_in: str = ""
    clock_out: Optional[str] = None
    total_hours: float = 0.0

    def to_dict(self) -> dict:
        return {
            'id': self.id,
            'worker_id': self.worker_id,
            'date': self.date,
            'clock_in': self.clock_in,
            'clock_out': self.clock_out,
            'total_hours': self.total_hours,
        }


@dataclass(frozen=True)
class CrewAssignment:
    """
    Crew booked to a WBS code on a date.

    auto_hours is the sum of the assigned workers' kiosk hours; a
    foreman's manual_override replaces it when set.
    """

    id: str
    wbs_code: str
    date: str
    worker_ids: Tuple[str, ...] = field(default_factory=tuple)
    auto_hours: float = 0.0
    manual_override: Optional[float] = None

    def to_dict(self) -> dict:
        return {
            'id': self.id,
            'wbs_code': self.wbs_code,
            'date': self.date,
            'worker_ids': list(self.worker_ids),
            'auto_hours': self.auto_hours,
            'manual_override': self.manual_override,
        }
