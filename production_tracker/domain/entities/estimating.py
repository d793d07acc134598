"""
Estimating Record Entity - Final production rate pushed back to estimating.
"""
from dataclasses import dataclass


@dataclass(frozen=True)
class EstimatingRecord:
    """Final man-hours per unit achieved on a closed-out code."""

    wbs_code: str
    description: str
    final_rate: float
    uom: str
    pushed_at: str

    def to_dict(self) -> dict:
        return {
            'wbs_code': self.wbs_code,
            'description': self.description,
            'final_rate': self.final_rate,
            'uom': self.uom,
            'pushed_at': self.pushed_at,
        }
