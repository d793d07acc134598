"""
Production Event Entity - Immutable field report.

Events are append-only inputs. Edits and deletes happen in the store;
every computation recomputes from whatever event set it is handed.
"""
from dataclasses import dataclass, field
from enum import Enum
from typing import Tuple

from .claiming import ClaimingProgress


class EventSource(Enum):
    """How the event's hours were captured."""
    KIOSK = "kiosk"
    MANUAL = "manual"


@dataclass(frozen=True)
class ProductionEvent:
    """
    Daily production report for one WBS code.

    Attributes:
        id: Event identifier
        wbs_code: Assembly the work was booked to
        date: Opaque date key (e.g. '2024-06-15')
        actual_hours: Man-hours worked
        actual_qty: Quantity installed
        equipment_hours: Equipment hours used
        description: Free-text field note
        claiming_progress: Per-step percent complete snapshot (may be empty)
        source: Kiosk time-clock or manual entry
    """

    id: str
    wbs_code: str
    date: str = ""
    actual_hours: float = 0.0
    actual_qty: float = 0.0
    equipment_hours: float = 0.0
    description: str = ""
    claiming_progress: Tuple[ClaimingProgress, ...] = field(default_factory=tuple)
    source: EventSource = EventSource.MANUAL

    @property
    def has_claiming_progress(self) -> bool:
        return bool(self.claiming_progress)

    @property
    def has_note(self) -> bool:
        return self.description.strip() != ""

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {
            'id': self.id,
            'wbs_code': self.wbs_code,
            'date': self.date,
            'actual_hours': self.actual_hours,
            'actual_qty': self.actual_qty,
            'equipment_hours': self.equipment_hours,
            'description': self.description,
            'claiming_progress': [p.to_dict() for p in self.claiming_progress],
            'source': self.source.value,
        }
