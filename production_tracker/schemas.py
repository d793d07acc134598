"""
Snapshot Schemas - Pydantic models for loading project data.

The store exports plain JSON records; these models validate their
shape and convert them into the immutable domain entities.
"""
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field

from production_tracker.domain.entities import (
    Assembly,
    ClaimingProgress,
    ClaimingSchema,
    ClaimingStep,
    CrewAssignment,
    CrewTemplateMember,
    EstimatingRecord,
    EventSource,
    InventoryItem,
    KioskEntry,
    MaterialRequirement,
    PmOverride,
    ProductionEvent,
    ProjectSnapshot,
    TrueUpStatus,
    VarianceReason,
    WorkPackageComponent,
    Worker,
)


class _Record(BaseModel):
    model_config = ConfigDict(extra="ignore")


# =============================================================================
# Assemblies
# =============================================================================

class MaterialRequirementIn(_Record):
    item: str = Field(..., min_length=1)
    qty_required: float = Field(..., ge=0)
    uom: str = ""

    def to_entity(self) -> MaterialRequirement:
        return MaterialRequirement(item=self.item, qty_required=self.qty_required, uom=self.uom)


class CrewTemplateMemberIn(_Record):
    role: str
    count: int = Field(1, ge=0)

    def to_entity(self) -> CrewTemplateMember:
        return CrewTemplateMember(role=self.role, count=self.count)


class ComponentIn(_Record):
    id: str
    name: str
    uom: str = ""
    plan_qty: float = Field(0.0, ge=0)
    budgeted_hours: float = Field(0.0, ge=0)
    qty_installed: float = Field(0.0, ge=0)

    def to_entity(self) -> WorkPackageComponent:
        return WorkPackageComponent(
            id=self.id,
            name=self.name,
            uom=self.uom,
            plan_qty=self.plan_qty,
            budgeted_hours=self.budgeted_hours,
            qty_installed=self.qty_installed,
        )


class AssemblyIn(_Record):
    """Request model for an assembly record."""
    wbs_code: str = Field(..., min_length=1, max_length=50, description="WBS code")
    description: str = ""
    budgeted_qty: float = Field(0.0, ge=0)
    uom: str = ""
    budgeted_hours: float = Field(0.0, ge=0)
    blended_unit_cost: float = Field(0.0, ge=0)
    claiming_schema_id: Optional[str] = None
    components: List[ComponentIn] = Field(default_factory=list)
    materials: List[MaterialRequirementIn] = Field(default_factory=list)
    crew_template: List[CrewTemplateMemberIn] = Field(default_factory=list)

    def to_entity(self) -> Assembly:
        return Assembly(
            wbs_code=self.wbs_code,
            description=self.description,
            budgeted_qty=self.budgeted_qty,
            uom=self.uom,
            budgeted_hours=self.budgeted_hours,
            blended_unit_cost=self.blended_unit_cost,
            claiming_schema_id=self.claiming_schema_id or None,
            components=tuple(c.to_entity() for c in self.components),
            materials=tuple(m.to_entity() for m in self.materials),
            crew_template=tuple(m.to_entity() for m in self.crew_template),
        )


# =============================================================================
# Claiming
# =============================================================================

class ClaimingStepIn(_Record):
    name: str
    weight: float

    def to_entity(self) -> ClaimingStep:
        return ClaimingStep(name=self.name, weight=self.weight)


class ClaimingSchemaIn(_Record):
    id: str
    name: str = ""
    steps: List[ClaimingStepIn] = Field(default_factory=list)

    def to_entity(self) -> ClaimingSchema:
        return ClaimingSchema(
            id=self.id,
            name=self.name,
            steps=tuple(s.to_entity() for s in self.steps),
        )


class ClaimingProgressIn(_Record):
    step_name: str
    percent_complete: float = Field(..., ge=0, le=100)

    def to_entity(self) -> ClaimingProgress:
        return ClaimingProgress(step_name=self.step_name, percent_complete=self.percent_complete)


# =============================================================================
# Events and reviewer records
# =============================================================================

class ProductionEventIn(_Record):
    """Request model for a production event."""
    id: str
    wbs_code: str
    date: str = ""
    actual_hours: float = Field(0.0, ge=0)
    actual_qty: float = Field(0.0, ge=0)
    equipment_hours: float = Field(0.0, ge=0)
    description: str = ""
    claiming_progress: List[ClaimingProgressIn] = Field(default_factory=list)
    source: EventSource = EventSource.MANUAL

    def to_entity(self) -> ProductionEvent:
        return ProductionEvent(
            id=self.id,
            wbs_code=self.wbs_code,
            date=self.date,
            actual_hours=self.actual_hours,
            actual_qty=self.actual_qty,
            equipment_hours=self.equipment_hours,
            description=self.description,
            claiming_progress=tuple(p.to_entity() for p in self.claiming_progress),
            source=self.source,
        )


class PmOverrideIn(_Record):
    wbs_code: str
    validated_qty: float = Field(..., ge=0)
    validated_hours: float = Field(..., ge=0)
    variance_reasons: List[VarianceReason] = Field(default_factory=list)
    variance_note: str = ""

    def to_entity(self) -> PmOverride:
        return PmOverride(
            wbs_code=self.wbs_code,
            validated_qty=self.validated_qty,
            validated_hours=self.validated_hours,
            variance_reasons=tuple(self.variance_reasons),
            variance_note=self.variance_note,
        )


class InventoryItemIn(_Record):
    item: str
    on_hand: float = Field(0.0, ge=0)
    uom: str = ""

    def to_entity(self) -> InventoryItem:
        return InventoryItem(item=self.item, on_hand=self.on_hand, uom=self.uom)


class EstimatingRecordIn(_Record):
    wbs_code: str
    description: str = ""
    final_rate: float = Field(..., ge=0)
    uom: str = ""
    pushed_at: str = ""

    def to_entity(self) -> EstimatingRecord:
        return EstimatingRecord(
            wbs_code=self.wbs_code,
            description=self.description,
            final_rate=self.final_rate,
            uom=self.uom,
            pushed_at=self.pushed_at,
        )


# =============================================================================
# Crew
# =============================================================================

class WorkerIn(_Record):
    id: str
    name: str
    role: str = ""
    hourly_rate: float = Field(0.0, ge=0)

    def to_entity(self) -> Worker:
        return Worker(id=self.id, name=self.name, role=self.role, hourly_rate=self.hourly_rate)


class KioskEntryIn(_Record):
    id: str
    worker_id: str
    date: str
    clock_in: str = ""
    clock_out: Optional[str] = None
    total_hours: float = Field(0.0, ge=0)

    def to_entity(self) -> KioskEntry:
        return KioskEntry(
            id=self.id,
            worker_id=self.worker_id,
            date=self.date,
            clock_in=self.clock_in,
            clock_out=self.clock_out,
            total_hours=self.total_hours,
        )


class CrewAssignmentIn(_Record):
    id: str
    wbs_code: str
    date: str
    worker_ids: List[str] = Field(default_factory=list)
    auto_hours: float = Field(0.0, ge=0)
    manual_override: Optional[float] = Field(None, ge=0)

    def to_entity(self) -> CrewAssignment:
        return CrewAssignment(
            id=self.id,
            wbs_code=self.wbs_code,
            date=self.date,
            worker_ids=tuple(self.worker_ids),
            auto_hours=self.auto_hours,
            manual_override=self.manual_override,
        )


# =============================================================================
# Snapshot
# =============================================================================

class SnapshotIn(_Record):
    """Whole-project export from the store."""
    name: str = ""
    assemblies: List[AssemblyIn] = Field(default_factory=list)
    claiming_schemas: List[ClaimingSchemaIn] = Field(default_factory=list)
    production_events: List[ProductionEventIn] = Field(default_factory=list)
    pm_overrides: List[PmOverrideIn] = Field(default_factory=list)
    inventory: List[InventoryItemIn] = Field(default_factory=list)
    provisional_codes: List[str] = Field(default_factory=list)
    true_up_statuses: Dict[str, TrueUpStatus] = Field(default_factory=dict)
    ecac_overrides: Dict[str, str] = Field(default_factory=dict)
    estimating_database: List[EstimatingRecordIn] = Field(default_factory=list)
    workers: List[WorkerIn] = Field(default_factory=list)
    kiosk_entries: List[KioskEntryIn] = Field(default_factory=list)
    crew_assignments: List[CrewAssignmentIn] = Field(default_factory=list)
    worker_allocations: Dict[str, Dict[str, Dict[str, float]]] = Field(default_factory=dict)
    applied_drawdowns: List[str] = Field(default_factory=list)

    def to_snapshot(self) -> ProjectSnapshot:
        """
        Convert to an immutable ProjectSnapshot.

        When no provisional codes are listed, every assembly is treated
        as provisional.
        """
        assemblies = tuple(a.to_entity() for a in self.assemblies)
        provisional = tuple(self.provisional_codes) or tuple(a.wbs_code for a in assemblies)
        return ProjectSnapshot(
            name=self.name,
            assemblies=assemblies,
            claiming_schemas=tuple(s.to_entity() for s in self.claiming_schemas),
            production_events=tuple(e.to_entity() for e in self.production_events),
            pm_overrides=tuple(o.to_entity() for o in self.pm_overrides),
            inventory=tuple(i.to_entity() for i in self.inventory),
            provisional_codes=provisional,
            true_up_statuses=dict(self.true_up_statuses),
            ecac_overrides=dict(self.ecac_overrides),
            estimating_database=tuple(r.to_entity() for r in self.estimating_database),
            workers=tuple(w.to_entity() for w in self.workers),
            kiosk_entries=tuple(k.to_entity() for k in self.kiosk_entries),
            crew_assignments=tuple(c.to_entity() for c in self.crew_assignments),
            worker_allocations={
                date: {worker: dict(codes) for worker, codes in by_worker.items()}
                for date, by_worker in self.worker_allocations.items()
            },
            applied_drawdowns=tuple(self.applied_drawdowns),
        )
