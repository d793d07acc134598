"""
Assembly Entity - Budgeted scope item identified by a WBS code.

An assembly carries the bid: quantity, unit of measure, hours and a
blended unit cost. It may be tracked by a claiming schema (rules of
credit) and may be broken down into weighted work-package components.
"""
from dataclasses import dataclass, field
from typing import Optional, Tuple


@dataclass(frozen=True)
class MaterialRequirement:
    """Consumable required to install the full budgeted quantity."""

    item: str
    qty_required: float
    uom: str = ""

    def to_dict(self) -> dict:
        return {'item': self.item, 'qty_required': self.qty_required, 'uom': self.uom}


@dataclass(frozen=True)
class CrewTemplateMember:
    """Planned crew makeup line (e.g. 2 x Laborer)."""

    role: str
    count: int = 1

    def to_dict(self) -> dict:
        return {'role': self.role, 'count': self.count}


@dataclass(frozen=True)
class WorkPackageComponent:
    """
    Named sub-scope of an assembly.

    The component's weight is not stored. It is derived from its share
    of the siblings' budgeted hours (see engine.rollup.component_weights).

    Attributes:
        id: Component identifier, unique within the assembly
        name: Display name
        uom: Unit of measure for plan_qty / qty_installed
        plan_qty: Planned quantity
        budgeted_hours: Hours budgeted for this component
        qty_installed: Quantity installed to date
    """

    id: str
    name: str
    uom: str = ""
    plan_qty: float = 0.0
    budgeted_hours: float = 0.0
    qty_installed: float = 0.0

    def to_dict(self) -> dict:
        return {
            'id': self.id,
            'name': self.name,
            'uom': self.uom,
            'plan_qty': self.plan_qty,
            'budgeted_hours': self.budgeted_hours,
            'qty_installed': self.qty_installed,
        }


@dataclass(frozen=True)
class Assembly:
    """
    Budgeted scope item (work unit).

    Budget fields are fixed once the assembly is set up; every
    computation reads them and none writes them.

    Attributes:
        wbs_code: Unique WBS code
        description: Scope description
        budgeted_qty: Bid quantity
        uom: Unit of measure
        budgeted_hours: Bid man-hours
        blended_unit_cost: Cost per unit of quantity
        claiming_schema_id: Optional rules-of-credit schema reference
        components: Ordered work-package components
        materials: Consumables drawn down as quantity is installed
        crew_template: Planned crew makeup
    """

    wbs_code: str
    description: str = ""
    budgeted_qty: float = 0.0
    uom: str = ""
    budgeted_hours: float = 0.0
    blended_unit_cost: float = 0.0
    claiming_schema_id: Optional[str] = None
    components: Tuple[WorkPackageComponent, ...] = field(default_factory=tuple)
    materials: Tuple[MaterialRequirement, ...] = field(default_factory=tuple)
    crew_template: Tuple[CrewTemplateMember, ...] = field(default_factory=tuple)

    @property
    def budgeted_cost(self) -> float:
        """Original budget in dollars."""
        return self.budgeted_qty * self.blended_unit_cost

    @property
    def budgeted_rate(self) -> float:
        """Bid production rate in units per hour."""
        if self.budgeted_hours == 0:
            return 0.0
        return self.budgeted_qty / self.budgeted_hours

    @property
    def budgeted_hours_per_unit(self) -> float:
        """Bid man-hours per unit (inverse of the bid rate)."""
        if self.budgeted_qty == 0:
            return 0.0
        return self.budgeted_hours / self.budgeted_qty

    @property
    def has_components(self) -> bool:
        return len(self.components) > 0

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {
            'wbs_code': self.wbs_code,
            'description': self.description,
            'budgeted_qty': self.budgeted_qty,
            'uom': self.uom,
            'budgeted_hours': self.budgeted_hours,
            'blended_unit_cost': self.blended_unit_cost,
            'budgeted_cost': self.budgeted_cost,
            'claiming_schema_id': self.claiming_schema_id,
            'components': [c.to_dict() for c in self.components],
            'materials': [m.to_dict() for m in self.materials],
            'crew_template': [m.to_dict() for m in self.crew_template],
        }
