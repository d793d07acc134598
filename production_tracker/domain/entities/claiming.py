"""
Claiming Schema Entities - Rules of credit.

A claiming schema breaks an assembly into weighted milestone steps so
percent-complete can be claimed for work that unit counts measure badly.
Step weights are expected to sum to 1.0 but this is not enforced.
"""
from dataclasses import dataclass, field
from typing import Tuple


@dataclass(frozen=True)
class ClaimingStep:
    """Weighted milestone step."""

    name: str
    weight: float

    def to_dict(self) -> dict:
        return {'name': self.name, 'weight': self.weight}


@dataclass(frozen=True)
class ClaimingSchema:
    """
    Named, ordered set of claiming steps.

    Attributes:
        id: Schema identifier referenced by Assembly.claiming_schema_id
        name: Display name
        steps: Ordered steps
    """

    id: str
    name: str = ""
    steps: Tuple[ClaimingStep, ...] = field(default_factory=tuple)

    @property
    def total_weight(self) -> float:
        return sum(step.weight for step in self.steps)

    def to_dict(self) -> dict:
        return {
            'id': self.id,
            'name': self.name,
            'steps': [s.to_dict() for s in self.steps],
        }


@dataclass(frozen=True)
class ClaimingProgress:
    """Percent complete (0-100) reported for one claiming step."""

    step_name: str
    percent_complete: float

    def to_dict(self) -> dict:
        return {'step_name': self.step_name, 'percent_complete': self.percent_complete}
