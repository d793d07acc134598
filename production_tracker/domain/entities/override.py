"""
PM Override Entity - Reviewer-validated quantity and hours.

An override supersedes the raw event aggregate for a WBS code when
present. It never mutates events.
"""
from dataclasses import dataclass, field
from enum import Enum
from typing import Tuple


class VarianceReason(Enum):
    """Reason codes a reviewer attaches to an override."""
    WEATHER = "Weather"
    RFI = "RFI"
    ROCK_UNSUITABLE_SOIL = "Rock/Unsuitable Soil"
    EQUIPMENT_FAILURE = "Equipment Failure"
    REWORK = "Rework"
    CREW_SHORTAGE = "Crew Shortage"
    MATERIAL_DELAY = "Material Delay"
    OTHER = "Other"


class TrueUpStatus(Enum):
    """Reviewer status of a provisional code."""
    PENDING = "pending"
    ACCEPTED = "accepted"
    ADJUSTED = "adjusted"
    FLAGGED = "flagged"


@dataclass(frozen=True)
class PmOverride:
    """
    Validated quantity/hours pair for one WBS code.

    Attributes:
        wbs_code: Assembly the override applies to
        validated_qty: Quantity the PM validated
        validated_hours: Hours the PM validated
        variance_reasons: Reason codes for the adjustment
        variance_note: Free-text explanation
    """

    wbs_code: str
    validated_qty: float
    validated_hours: float
    variance_reasons: Tuple[VarianceReason, ...] = field(default_factory=tuple)
    variance_note: str = ""

    def to_dict(self) -> dict:
        return {
            'wbs_code': self.wbs_code,
            'validated_qty': self.validated_qty,
            'validated_hours': self.validated_hours,
            'variance_reasons': [r.value for r in self.variance_reasons],
            'variance_note': self.variance_note,
        }
